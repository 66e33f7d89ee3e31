import pytest

from scengen.models.dto import ParcelDTO, VehicleDTO
from scengen.models.errors import InvalidScenarioError
from scengen.models.event import (
    AddDepotEvent,
    AddParcelEvent,
    AddVehicleEvent,
    EventType,
    TimedEvent,
    sort_key,
)
from scengen.models.geom import Point, TimeWindow


def test_time_window_invariant():
    tw = TimeWindow(5, 10)
    assert tw.length() == 5
    assert tw.is_in(5) and tw.is_in(9)
    assert not tw.is_in(10)
    assert TimeWindow(3, 3).length() == 0

    with pytest.raises(InvalidScenarioError):
        TimeWindow(10, 5)


def test_point_helpers():
    assert Point(0, 0) == Point(0.0, 0.0)
    assert Point.distance(Point(0, 0), Point(3, 4)) == 5.0
    assert Point.centroid(Point(0, 0), Point(10, 4)) == Point(5, 2)


def test_vehicle_dto_builder_and_validation():
    dto = (VehicleDTO.builder()
           .start_position(Point(7, 7))
           .speed(7)
           .capacity(2)
           .availability_time_window(TimeWindow(0, 1000))
           .build())
    assert dto.speed == 7.0 and isinstance(dto.speed, float)
    assert dto == VehicleDTO.builder().use(dto).build()
    assert hash(dto) == hash(VehicleDTO.builder().use(dto).build())

    with pytest.raises(InvalidScenarioError):
        VehicleDTO.builder().speed(0).build()
    with pytest.raises(InvalidScenarioError):
        VehicleDTO.builder().capacity(-1).build()


def test_parcel_dto_announce_before_pickup():
    dto = (ParcelDTO.builder(Point(0, 0), Point(1, 1))
           .pickup_time_window(TimeWindow(2500, 10000))
           .delivery_time_window(TimeWindow(5000, 10000))
           .order_announce_time(2400)
           .pickup_duration(200)
           .delivery_duration(800)
           .build())
    assert dto.order_announce_time == 2400
    assert dto.needed_capacity == 0

    with pytest.raises(InvalidScenarioError):
        (ParcelDTO.builder(Point(0, 0), Point(1, 1))
         .pickup_time_window(TimeWindow(100, 200))
         .order_announce_time(101)
         .build())
    with pytest.raises(InvalidScenarioError):
        ParcelDTO.builder(Point(0, 0), Point(1, 1)).service_duration(-1).build()


def test_events_structural_equality():
    dto = VehicleDTO.builder().start_position(Point(1, 2)).build()
    assert AddVehicleEvent(100, dto) == AddVehicleEvent(100, dto)
    assert AddVehicleEvent(100, dto) != AddVehicleEvent(101, dto)
    assert AddDepotEvent(76, Point(3, 3)).event_type == EventType.ADD_DEPOT
    assert hash(AddDepotEvent(76, Point(3, 3))) == hash(AddDepotEvent(76, Point(3.0, 3.0)))
    # negative time means "present from the start"
    assert TimedEvent(EventType.TIME_OUT, -1).time == -1


def test_parcel_event_time_is_announce_time():
    dto = ParcelDTO.builder(Point(0, 0), Point(1, 1)).order_announce_time(-1).build()
    e = AddParcelEvent(dto)
    assert e.time == -1
    assert e.event_type == EventType.ADD_PARCEL


def test_sort_key():
    events = [
        TimedEvent(EventType.TIME_OUT, 10),
        AddDepotEvent(10, Point(0, 0)),
        AddDepotEvent(-1, Point(0, 0)),
    ]
    ordered = sorted(events, key=sort_key)
    assert [e.time for e in ordered] == [-1, 10, 10]
    assert ordered[1].event_type == EventType.ADD_DEPOT


def test_payload_tags_require_their_event_class():
    for tag in (EventType.ADD_DEPOT, EventType.ADD_VEHICLE, EventType.ADD_PARCEL):
        with pytest.raises(InvalidScenarioError):
            TimedEvent(tag, 5)
    # tags without a payload stay plain events
    assert TimedEvent(EventType.REMOVE_DEPOT, 5).event_type == EventType.REMOVE_DEPOT
