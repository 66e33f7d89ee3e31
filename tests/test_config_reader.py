import pandas as pd
import pytest

from scengen.config import GeneratorConfig
from scengen.core import models
from scengen.models.dto import VehicleDTO
from scengen.models.errors import InvalidArgumentError
from scengen.models.event import AddDepotEvent, AddVehicleEvent, EventType
from scengen.models.geom import Point, TimeWindow
from scengen.models.scenario import Scenario
from scengen.utils.reader import read_depots_csv, read_vehicles_csv, scenario_to_frame


def test_yaml_round_trip(tmp_path):
    cfg = GeneratorConfig(problem_class="yaml", num_vehicles=3, num_parcels=7,
                          area_max=[20, 20], time_window_policy="STRICT")
    path = tmp_path / "gen.yaml"
    cfg.to_yaml(path)
    loaded = GeneratorConfig.from_yaml(path)
    assert loaded == cfg
    assert loaded._yaml_path == path
    assert loaded.area_max == [20.0, 20.0]


def test_build_generator():
    cfg = GeneratorConfig(num_vehicles=3, num_parcels=4, num_depots=2, vehicle_capacity=2)
    gen = cfg.build_generator()
    s = gen.generate(5)
    assert s.problem_class.get_id() == "default"
    assert len(s.events_of_type(EventType.ADD_DEPOT)) == 2
    vs = s.events_of_type(EventType.ADD_VEHICLE)
    assert len(vs) == 3
    assert all(e.vehicle.capacity == 2 for e in vs)
    assert len(s.events_of_type(EventType.ADD_PARCEL)) == 4

    built = gen.build_models()
    assert len(built) == 2
    assert built[1] == models.PDPModelConfig(models.TimeWindowPolicy.TARDY_ALLOWED)

    bare = GeneratorConfig(max_speed=None, time_window_policy=None).build_generator()
    assert bare.build_models() == []


def test_invalid_config():
    with pytest.raises(InvalidArgumentError):
        GeneratorConfig(time_window_policy="SOMETIMES")
    with pytest.raises(InvalidArgumentError):
        GeneratorConfig(area_min=[0, 0, 0])


def test_read_vehicles_csv(tmp_path):
    path = tmp_path / "vehicles.csv"
    pd.DataFrame([
        {"time": -1, "x": 5.0, "y": 5.0, "speed": 50.0, "capacity": 1, "tw_begin": 0, "tw_end": 28800000},
        {"time": 3600000, "x": 2.5, "y": 7.5, "speed": 40.0, "capacity": 2, "tw_begin": 3600000, "tw_end": 28800000},
    ]).to_csv(path, index=False)

    events = read_vehicles_csv(path)
    assert events[0] == AddVehicleEvent(-1, VehicleDTO(Point(5, 5), 50.0, 1, TimeWindow(0, 28800000)))
    assert events[1].time == 3600000
    assert events[1].vehicle.capacity == 2
    assert events[1].vehicle.availability_time_window == TimeWindow(3600000, 28800000)


def test_read_depots_csv(tmp_path):
    path = tmp_path / "depots.csv"
    pd.DataFrame({"time": [-1, 0], "x": [5.0, 1.0], "y": [5.0, 2.0]}).to_csv(path, index=False)
    assert read_depots_csv(path) == [AddDepotEvent(-1, Point(5, 5)), AddDepotEvent(0, Point(1, 2))]

    bad = tmp_path / "bad.csv"
    pd.DataFrame({"time": [0], "x": [1.0]}).to_csv(bad, index=False)
    with pytest.raises(ValueError):
        read_depots_csv(bad)


def test_scenario_to_frame():
    s = GeneratorConfig(num_vehicles=2, num_parcels=3).build_generator().generate(1)
    df = scenario_to_frame(s)
    assert len(df) == len(s)
    assert list(df["type"].value_counts().sort_index().items()) == [
        ("ADD_DEPOT", 1), ("ADD_PARCEL", 3), ("ADD_VEHICLE", 2), ("TIME_OUT", 1)]
    parcels = df[df["type"] == "ADD_PARCEL"]
    assert parcels["dest_x"].notna().all()
    assert df[df["type"] == "TIME_OUT"]["x"].isna().all()

    empty = scenario_to_frame(Scenario.builder().build())
    assert len(empty) == 0
