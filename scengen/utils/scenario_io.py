"""Text serialization of scenarios.

One JSON record per line. Event records start with their ``type`` tag and
``time``, followed by the payload of that event kind. The last line is the
problem class record::

    {"type": "ADD_DEPOT", "time": 76, "position": [3.0, 3.0]}
    {"type": "TIME_OUT", "time": 200000}
    {"problem_class": "simple", "id": "hello"}

``read(write(s)) == s`` holds for every scenario whose problem class is a
:class:`SimpleProblemClass` or a member of a registered enum.
"""
import json
import os
from enum import Enum
from typing import Any, Callable, Dict, List

from scengen.models.dto import ParcelDTO, VehicleDTO
from scengen.models.errors import InvalidArgumentError, MalformedScenarioError
from scengen.models.event import (
    AddDepotEvent,
    AddParcelEvent,
    AddVehicleEvent,
    EventType,
    TimedEvent,
)
from scengen.models.geom import Point, TimeWindow
from scengen.models.problem_class import (
    ProblemClass,
    SimpleProblemClass,
    lookup_problem_class,
    qualified_name,
)
from scengen.models.scenario import Scenario
from scengen.utils.logger import logger

log = logger.child("io")

PROBLEM_CLASS_KEY = "problem_class"
ENUM_KIND = "enum"
SIMPLE_KIND = "simple"


# =========================
# Value codecs
# =========================
def _point_to_json(p: Point) -> List[float]:
    return [p.x, p.y]


def _point_from_json(v: Any) -> Point:
    x, y = v
    return Point(x, y)


def _tw_to_json(tw: TimeWindow) -> List[int]:
    return [tw.begin, tw.end]


def _tw_from_json(v: Any) -> TimeWindow:
    begin, end = v
    return TimeWindow(begin, end)


def _vehicle_to_json(dto: VehicleDTO) -> Dict[str, Any]:
    return {
        "start_position": _point_to_json(dto.start_position),
        "speed": dto.speed,
        "capacity": dto.capacity,
        "availability_time_window": _tw_to_json(dto.availability_time_window),
    }


def _vehicle_from_json(v: Dict[str, Any]) -> VehicleDTO:
    _expect_keys(v, ("start_position", "speed", "capacity", "availability_time_window"), "vehicle")
    return VehicleDTO(
        start_position=_point_from_json(v["start_position"]),
        speed=v["speed"],
        capacity=v["capacity"],
        availability_time_window=_tw_from_json(v["availability_time_window"]),
    )


def _parcel_to_json(dto: ParcelDTO) -> Dict[str, Any]:
    return {
        "pickup_position": _point_to_json(dto.pickup_position),
        "delivery_position": _point_to_json(dto.delivery_position),
        "pickup_time_window": _tw_to_json(dto.pickup_time_window),
        "delivery_time_window": _tw_to_json(dto.delivery_time_window),
        "needed_capacity": dto.needed_capacity,
        "order_announce_time": dto.order_announce_time,
        "pickup_duration": dto.pickup_duration,
        "delivery_duration": dto.delivery_duration,
    }


_PARCEL_KEYS = (
    "pickup_position", "delivery_position", "pickup_time_window", "delivery_time_window",
    "needed_capacity", "order_announce_time", "pickup_duration", "delivery_duration",
)


def _parcel_from_json(v: Dict[str, Any]) -> ParcelDTO:
    _expect_keys(v, _PARCEL_KEYS, "parcel")
    return ParcelDTO(
        pickup_position=_point_from_json(v["pickup_position"]),
        delivery_position=_point_from_json(v["delivery_position"]),
        pickup_time_window=_tw_from_json(v["pickup_time_window"]),
        delivery_time_window=_tw_from_json(v["delivery_time_window"]),
        needed_capacity=v["needed_capacity"],
        order_announce_time=v["order_announce_time"],
        pickup_duration=v["pickup_duration"],
        delivery_duration=v["delivery_duration"],
    )


def _expect_keys(record: Any, keys, what: str) -> None:
    if not isinstance(record, dict):
        raise MalformedScenarioError(f"{what} must be a JSON object, found {record!r}")
    if set(record) != set(keys):
        raise MalformedScenarioError(
            f"{what} fields mismatch: expected {sorted(keys)}, found {sorted(record)}")


# =========================
# Event records, dispatched on the type tag
# =========================
_PAYLOAD_WRITERS: Dict[EventType, Callable[[TimedEvent], Dict[str, Any]]] = {
    EventType.ADD_DEPOT: lambda e: {"position": _point_to_json(e.position)},
    EventType.ADD_VEHICLE: lambda e: {"vehicle": _vehicle_to_json(e.vehicle)},
    EventType.ADD_PARCEL: lambda e: {"parcel": _parcel_to_json(e.parcel)},
}


def _read_depot(record: Dict[str, Any]) -> TimedEvent:
    return AddDepotEvent(record["time"], _point_from_json(record["position"]))


def _read_vehicle(record: Dict[str, Any]) -> TimedEvent:
    return AddVehicleEvent(record["time"], _vehicle_from_json(record["vehicle"]))


def _read_parcel(record: Dict[str, Any]) -> TimedEvent:
    event = AddParcelEvent(_parcel_from_json(record["parcel"]))
    if event.time != record["time"]:
        raise MalformedScenarioError(
            f"parcel record time {record['time']} differs from its announce time {event.time}")
    return event


_PAYLOAD_READERS: Dict[EventType, Callable[[Dict[str, Any]], TimedEvent]] = {
    EventType.ADD_DEPOT: _read_depot,
    EventType.ADD_VEHICLE: _read_vehicle,
    EventType.ADD_PARCEL: _read_parcel,
}

_PAYLOAD_KEYS = {
    EventType.ADD_DEPOT: ("position",),
    EventType.ADD_VEHICLE: ("vehicle",),
    EventType.ADD_PARCEL: ("parcel",),
}


def _event_to_record(event: TimedEvent) -> Dict[str, Any]:
    record: Dict[str, Any] = {"type": event.event_type.name, "time": event.time}
    writer = _PAYLOAD_WRITERS.get(event.event_type)
    if writer is not None:
        record.update(writer(event))
    return record


def _event_from_record(record: Dict[str, Any]) -> TimedEvent:
    tag = record.get("type")
    try:
        event_type = EventType[tag]
    except (KeyError, TypeError):
        raise MalformedScenarioError(f"unknown event type tag: {tag!r}") from None

    _expect_keys(record, ("type", "time") + _PAYLOAD_KEYS.get(event_type, ()), event_type.name)
    if not isinstance(record["time"], int) or isinstance(record["time"], bool):
        raise MalformedScenarioError(f"event time must be an integer, found {record['time']!r}")

    reader = _PAYLOAD_READERS.get(event_type)
    if reader is None:
        return TimedEvent(event_type, record["time"])
    return reader(record)


# =========================
# Problem class record
# =========================
def _problem_class_to_record(pc: ProblemClass) -> Dict[str, Any]:
    if isinstance(pc, SimpleProblemClass):
        return {PROBLEM_CLASS_KEY: SIMPLE_KIND, "id": pc.get_id()}
    if isinstance(pc, Enum) and isinstance(pc, ProblemClass):
        return {PROBLEM_CLASS_KEY: ENUM_KIND, "class": qualified_name(type(pc)), "name": pc.name}
    raise InvalidArgumentError(
        f"cannot serialize problem class {pc!r}: use SimpleProblemClass or a registered enum")


def _problem_class_from_record(record: Dict[str, Any]) -> ProblemClass:
    kind = record.get(PROBLEM_CLASS_KEY)
    if kind == SIMPLE_KIND:
        _expect_keys(record, (PROBLEM_CLASS_KEY, "id"), "problem class")
        if not isinstance(record["id"], str):
            raise MalformedScenarioError(f"problem class id must be a string, found {record['id']!r}")
        return SimpleProblemClass(record["id"])
    if kind == ENUM_KIND:
        _expect_keys(record, (PROBLEM_CLASS_KEY, "class", "name"), "problem class")
        try:
            return lookup_problem_class(record["class"], record["name"])
        except (KeyError, TypeError):
            raise MalformedScenarioError(
                f"no registered problem class {record['class']!r} with member {record['name']!r}") from None
    raise MalformedScenarioError(f"unknown problem class kind: {kind!r}")


# =========================
# Public API
# =========================
def write(scenario: Scenario) -> str:
    lines = [json.dumps(_event_to_record(e)) for e in scenario.events]
    lines.append(json.dumps(_problem_class_to_record(scenario.problem_class)))
    log.debug(f"wrote scenario with {len(scenario.events)} events")
    return "\n".join(lines) + "\n"


def read(text: str) -> Scenario:
    b = Scenario.builder()
    problem_class = None
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        if problem_class is not None:
            raise MalformedScenarioError(f"line {lineno}: record after the problem class record")
        try:
            record = json.loads(line)
        except json.JSONDecodeError as exc:
            raise MalformedScenarioError(f"line {lineno}: invalid record: {exc}") from exc
        if not isinstance(record, dict):
            raise MalformedScenarioError(f"line {lineno}: record must be a JSON object")

        try:
            if PROBLEM_CLASS_KEY in record:
                problem_class = _problem_class_from_record(record)
            else:
                b.add_event(_event_from_record(record))
        except MalformedScenarioError as exc:
            raise MalformedScenarioError(f"line {lineno}: {exc}") from exc
        except (TypeError, ValueError) as exc:
            # wrong shapes or values violating a DTO invariant
            raise MalformedScenarioError(f"line {lineno}: invalid field value: {exc}") from exc

    if problem_class is None:
        raise MalformedScenarioError("truncated scenario: missing problem class record")
    scenario = b.problem_class(problem_class).build()
    log.debug(f"read scenario with {len(scenario.events)} events")
    return scenario


def write_file(scenario: Scenario, path: os.PathLike | str) -> None:
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(write(scenario))


def read_file(path: os.PathLike | str) -> Scenario:
    with open(path, "r", encoding="utf-8") as fh:
        return read(fh.read())
