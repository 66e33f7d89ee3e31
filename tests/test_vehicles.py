import sys

import pytest

from scengen.generators import vehicles
from scengen.generators.supplier import constant, uniform_double, uniform_int, uniform_long, uniform_point
from scengen.models.dto import VehicleDTO
from scengen.models.errors import InvalidArgumentError
from scengen.models.event import AddVehicleEvent
from scengen.models.geom import Point, TimeWindow
from scengen.utils.random import SeededRandom

CENTER = Point(5, 5)
LENGTH = 1000


def test_default_wiring():
    events = vehicles.builder().build().generate(123, CENTER, LENGTH)
    assert len(events) == 10
    for e in events:
        assert isinstance(e, AddVehicleEvent)
        assert e.time == -1
        assert e.vehicle.start_position == CENTER
        assert e.vehicle.speed == 50.0
        assert e.vehicle.capacity == 1
        assert e.vehicle.availability_time_window == TimeWindow(0, LENGTH)


def test_determinism_with_fresh_generators():
    def make():
        return (vehicles.builder()
                .number_of_vehicles(uniform_int(1, 20))
                .start_positions(uniform_point(Point(0, 0), Point(10, 10)))
                .speeds(uniform_double(10, 60))
                .capacities(uniform_int(0, 5))
                .creation_times(uniform_long(-1, LENGTH - 1))
                .build())

    first = make().generate(77, CENTER, LENGTH)
    assert make().generate(77, CENTER, LENGTH) == first

    gen = make()
    gen.generate(1, CENTER, LENGTH)
    assert gen.generate(77, CENTER, LENGTH) == first


def test_draw_order_without_optional_suppliers():
    speeds = uniform_double(10, 60)
    caps = uniform_int(0, 5)
    times = uniform_long(-1, LENGTH - 1)
    gen = (vehicles.builder()
           .number_of_vehicles(constant(3))
           .speeds(speeds)
           .capacities(caps)
           .creation_times(times)
           .build())
    events = gen.generate(99, CENTER, LENGTH)

    rng = SeededRandom()
    rng.set_seed(99)
    rng.next_long()  # count
    for e in events:
        # no draws for the absent start position and time window suppliers
        assert e.vehicle.speed == speeds.get(rng.next_long())
        assert e.vehicle.capacity == caps.get(rng.next_long())
        assert e.time == times.get(rng.next_long())
        assert e.vehicle.start_position == CENTER


def test_draw_order_with_optional_suppliers():
    positions = uniform_point(Point(0, 0), Point(10, 10))
    windows = constant(TimeWindow(10, 20))
    speeds = uniform_double(10, 60)
    gen = (vehicles.builder()
           .number_of_vehicles(constant(2))
           .start_positions(positions)
           .speeds(speeds)
           .time_windows(windows)
           .build())
    events = gen.generate(5, CENTER, LENGTH)

    rng = SeededRandom()
    rng.set_seed(5)
    rng.next_long()  # count
    for e in events:
        assert e.vehicle.start_position == positions.get(rng.next_long())
        assert e.vehicle.speed == speeds.get(rng.next_long())
        rng.next_long()  # capacity
        assert e.vehicle.availability_time_window == TimeWindow(10, 20)
        rng.next_long()  # window
        rng.next_long()  # creation time


def test_count_must_be_positive():
    for n in (0, -3):
        gen = vehicles.builder().number_of_vehicles(constant(n)).build()
        with pytest.raises(InvalidArgumentError):
            gen.generate(0, CENTER, LENGTH)


def test_field_constraints():
    bad = [
        vehicles.builder().speeds(constant(0.0)),
        vehicles.builder().speeds(constant(-1.0)),
        vehicles.builder().capacities(constant(-1)),
        vehicles.builder().creation_times(constant(LENGTH)),
    ]
    for b in bad:
        with pytest.raises(InvalidArgumentError):
            b.build().generate(0, CENTER, LENGTH)


def test_boundary_values_succeed():
    gen = (vehicles.builder()
           .number_of_vehicles(constant(1))
           .speeds(constant(sys.float_info.min))
           .capacities(constant(0))
           .creation_times(constant(LENGTH - 1))
           .build())
    (e,) = gen.generate(0, CENTER, LENGTH)
    assert e.vehicle.speed > 0
    assert e.vehicle.capacity == 0
    assert e.time == LENGTH - 1


def test_centered_and_scenario_defaults_can_be_restored():
    gen = (vehicles.builder()
           .start_positions(constant(Point(1, 1)))
           .time_windows(constant(TimeWindow(1, 2)))
           .centered_start_positions()
           .time_windows_as_scenario()
           .build())
    assert gen.generate(3, CENTER, LENGTH) == vehicles.builder().build().generate(3, CENTER, LENGTH)


def test_homogenous():
    dto = VehicleDTO.builder().start_position(Point(2, 2)).speed(30).capacity(4).build()
    gen = vehicles.homogenous(dto, 4)
    events = gen.generate(1, CENTER, LENGTH)
    assert events == [AddVehicleEvent(-1, dto)] * 4
    assert gen.generate(2, Point(0, 0), 5) == events

    assert vehicles.single(dto).generate(0, CENTER, LENGTH) == [AddVehicleEvent(-1, dto)]


def test_negative_scenario_length():
    with pytest.raises(InvalidArgumentError):
        vehicles.builder().build().generate(0, CENTER, -5)
