from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Dict, Type

from scengen.models.dto import ParcelDTO, VehicleDTO
from scengen.models.errors import InvalidScenarioError
from scengen.models.geom import Point


class EventType(Enum):
    ADD_DEPOT = auto()
    ADD_VEHICLE = auto()
    ADD_PARCEL = auto()
    REMOVE_DEPOT = auto()
    REMOVE_VEHICLE = auto()
    REMOVE_PARCEL = auto()
    TIME_OUT = auto()


# =========================
# Event definitions
# =========================
@dataclass(frozen=True)
class TimedEvent:
    """Point-in-time instruction for the simulator.

    A negative time means the event applies from the start of the scenario.
    """
    event_type: EventType
    time: int

    def __post_init__(self):
        object.__setattr__(self, "time", int(self.time))
        expected = EVENT_CLASSES.get(self.event_type, TimedEvent)
        if type(self) is not expected:
            raise InvalidScenarioError(
                f"{self.event_type.name} events must be {expected.__name__}, found {type(self).__name__}")


@dataclass(frozen=True)
class AddDepotEvent(TimedEvent):
    event_type: EventType = field(default=EventType.ADD_DEPOT, init=False)
    time: int
    position: Point


@dataclass(frozen=True)
class AddVehicleEvent(TimedEvent):
    event_type: EventType = field(default=EventType.ADD_VEHICLE, init=False)
    time: int
    vehicle: VehicleDTO


@dataclass(frozen=True)
class AddParcelEvent(TimedEvent):
    # dispatched when the order is announced
    event_type: EventType = field(default=EventType.ADD_PARCEL, init=False)
    time: int = field(default=0, init=False)
    parcel: ParcelDTO

    def __post_init__(self):
        object.__setattr__(self, "time", int(self.parcel.order_announce_time))
        super().__post_init__()


# tags without a payload class are plain TimedEvents
EVENT_CLASSES: Dict[EventType, Type[TimedEvent]] = {
    EventType.ADD_DEPOT: AddDepotEvent,
    EventType.ADD_VEHICLE: AddVehicleEvent,
    EventType.ADD_PARCEL: AddParcelEvent,
}

_TYPE_ORDER = {t: i for i, t in enumerate(EventType)}


def sort_key(event: TimedEvent):
    """Key for dispatching events in time order; scenarios themselves are never sorted."""
    return (event.time, _TYPE_ORDER[event.event_type])
