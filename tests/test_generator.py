from scengen.core import models
from scengen.core.generator import DEFAULT_SCENARIO_LENGTH, ScenarioGenerator
from scengen.generators import vehicles
from scengen.generators.supplier import constant
from scengen.models.dto import VehicleDTO
from scengen.models.errors import InvalidArgumentError
from scengen.models.event import AddDepotEvent, EventType
from scengen.models.geom import Point
from scengen.models.problem_class import DEFAULT_PROBLEM_CLASS, SimpleProblemClass


def test_default_generator():
    gen = ScenarioGenerator.builder().build()
    assert gen.center == Point(5, 5)
    s = gen.generate(1)

    assert s.problem_class == DEFAULT_PROBLEM_CLASS
    assert s.events[0] == AddDepotEvent(-1, Point(5, 5))
    assert len(s.events_of_type(EventType.ADD_VEHICLE)) == 10
    assert len(s.events_of_type(EventType.ADD_PARCEL)) == 20
    assert len(s) == 1 + 10 + 20 + 1
    last = s.events[-1]
    assert last.event_type == EventType.TIME_OUT
    assert last.time == DEFAULT_SCENARIO_LENGTH
    # depots, then vehicles, then parcels
    types = [e.event_type for e in s.events[:-1]]
    assert types == sorted(types, key=[EventType.ADD_DEPOT, EventType.ADD_VEHICLE, EventType.ADD_PARCEL].index)


def test_generate_is_deterministic():
    def make():
        return (ScenarioGenerator.builder(SimpleProblemClass("det"))
                .scenario_length(10000)
                .area(Point(-5, -5), Point(5, 5))
                .build())

    assert make().generate(2024) == make().generate(2024)
    gen = make()
    s = gen.generate(2024)
    gen.generate(7)
    assert gen.generate(2024) == s
    assert gen.generate(2025) != s


def test_environment_is_passed_to_generators():
    dto = VehicleDTO.builder().start_position(Point(1, 1)).build()
    gen = (ScenarioGenerator.builder()
           .area(Point(0, 0), Point(4, 8))
           .scenario_length(500)
           .vehicles(vehicles.builder().number_of_vehicles(constant(2)).build())
           .build())
    s = gen.generate(0)
    for e in s.events_of_type(EventType.ADD_VEHICLE):
        assert e.vehicle.start_position == Point(2, 4)
        assert e.vehicle.availability_time_window.end == 500

    homogenous = ScenarioGenerator.builder().vehicles(vehicles.homogenous(dto, 3)).build().generate(0)
    assert [e.vehicle for e in homogenous.events_of_type(EventType.ADD_VEHICLE)] == [dto] * 3


def test_builder_validation():
    for bad in (lambda b: b.scenario_length(0), lambda b: b.area(Point(1, 1), Point(0, 0)),
                lambda b: b.add_model(models.pdp_model(models.TimeWindowPolicy.LIBERAL))):
        try:
            bad(ScenarioGenerator.builder())
            assert False, "should have raised InvalidArgumentError"
        except InvalidArgumentError:
            pass


def test_road_model_configuration():
    gen = (ScenarioGenerator.builder()
           .area(Point(0, 0), Point(20, 20))
           .distance_unit("m")
           .speed_unit("m/s")
           .add_model(models.road_model(13.9, True))
           .build())
    sup = gen.model_suppliers[0].get(gen)
    a, b = sup.get(), sup.get()
    assert a == b and a is not b
    assert hash(a) == hash(b)
    assert a.allow_diversion is True
    assert a.road_model.min == Point(0, 0)
    assert a.road_model.max == Point(20, 20)
    assert a.road_model.distance_unit == "m"
    assert a.road_model.max_speed == models.Measure(13.9, "m/s")
    assert "allow_diversion=True" in repr(sup)
    assert sup == gen.model_suppliers[0].get(gen)


def test_pdp_model_configuration():
    sup = models.pdp_model(models.TimeWindowPolicy.TARDY_ALLOWED)
    a, b = sup.get(), sup.get()
    assert a == b and a is not b
    assert a.time_window_policy == models.TimeWindowPolicy.TARDY_ALLOWED
    assert sup == models.pdp_model(models.TimeWindowPolicy.TARDY_ALLOWED)
    assert sup != models.pdp_model(models.TimeWindowPolicy.STRICT)
    assert "TARDY_ALLOWED" in repr(sup)


def test_build_models():
    gen = (ScenarioGenerator.builder()
           .add_model(models.road_model(50, False))
           .add_model(models.adapt(models.pdp_model(models.TimeWindowPolicy.STRICT)))
           .add_model(models.adapt(lambda: "custom"))
           .build())
    first, second = gen.build_models(), gen.build_models()
    assert first == second
    assert first[0] is not second[0]
    assert isinstance(first[0], models.PDPRoadModelConfig)
    assert first[1] == models.PDPModelConfig(models.TimeWindowPolicy.STRICT)
    assert first[2] == "custom"
