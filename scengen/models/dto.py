from dataclasses import dataclass

from scengen.models.errors import InvalidScenarioError
from scengen.models.geom import Point, TimeWindow

DEFAULT_SPEED = 50.0


def _check(condition: bool, msg: str) -> None:
    if not condition:
        raise InvalidScenarioError(msg)


# =========================
# Vehicle
# =========================
@dataclass(frozen=True)
class VehicleDTO:
    """Static description of a vehicle."""

    start_position: Point
    speed: float
    capacity: int
    availability_time_window: TimeWindow

    def __post_init__(self):
        _check(isinstance(self.start_position, Point),
               f"start_position must be a Point, found {self.start_position!r}.")
        _check(isinstance(self.availability_time_window, TimeWindow),
               f"availability_time_window must be a TimeWindow, found {self.availability_time_window!r}.")
        object.__setattr__(self, "speed", float(self.speed))
        object.__setattr__(self, "capacity", int(self.capacity))
        _check(self.speed > 0, f"Vehicle speed must be > 0, found {self.speed}.")
        _check(self.capacity >= 0, f"Vehicle capacity must be >= 0, found {self.capacity}.")

    @staticmethod
    def builder() -> "VehicleDTOBuilder":
        return VehicleDTOBuilder()


class VehicleDTOBuilder:
    def __init__(self):
        self._start_position = Point(0, 0)
        self._speed = DEFAULT_SPEED
        self._capacity = 0
        self._availability_time_window = TimeWindow.ALWAYS

    def use(self, dto: VehicleDTO) -> "VehicleDTOBuilder":
        self._start_position = dto.start_position
        self._speed = dto.speed
        self._capacity = dto.capacity
        self._availability_time_window = dto.availability_time_window
        return self

    def start_position(self, pos: Point) -> "VehicleDTOBuilder":
        self._start_position = pos
        return self

    def speed(self, speed: float) -> "VehicleDTOBuilder":
        self._speed = speed
        return self

    def capacity(self, capacity: int) -> "VehicleDTOBuilder":
        self._capacity = capacity
        return self

    def availability_time_window(self, tw: TimeWindow) -> "VehicleDTOBuilder":
        self._availability_time_window = tw
        return self

    def build(self) -> VehicleDTO:
        return VehicleDTO(
            start_position=self._start_position,
            speed=self._speed,
            capacity=self._capacity,
            availability_time_window=self._availability_time_window,
        )


# =========================
# Parcel
# =========================
@dataclass(frozen=True)
class ParcelDTO:
    """Static description of a pickup-and-delivery order.

    The order must be announced no later than the opening of its pickup
    window, ``order_announce_time <= pickup_time_window.begin``.
    """

    pickup_position: Point
    delivery_position: Point
    pickup_time_window: TimeWindow
    delivery_time_window: TimeWindow
    needed_capacity: int
    order_announce_time: int
    pickup_duration: int
    delivery_duration: int

    def __post_init__(self):
        for name in ("pickup_position", "delivery_position"):
            _check(isinstance(getattr(self, name), Point),
                   f"{name} must be a Point, found {getattr(self, name)!r}.")
        for name in ("pickup_time_window", "delivery_time_window"):
            _check(isinstance(getattr(self, name), TimeWindow),
                   f"{name} must be a TimeWindow, found {getattr(self, name)!r}.")
        for name in ("needed_capacity", "order_announce_time", "pickup_duration", "delivery_duration"):
            object.__setattr__(self, name, int(getattr(self, name)))

        _check(self.needed_capacity >= 0,
               f"Parcel needed_capacity must be >= 0, found {self.needed_capacity}.")
        _check(self.pickup_duration >= 0,
               f"Parcel pickup_duration must be >= 0, found {self.pickup_duration}.")
        _check(self.delivery_duration >= 0,
               f"Parcel delivery_duration must be >= 0, found {self.delivery_duration}.")
        _check(self.order_announce_time <= self.pickup_time_window.begin,
               f"Parcel order_announce_time ({self.order_announce_time}) must be <= "
               f"pickup_time_window.begin ({self.pickup_time_window.begin}).")

    @staticmethod
    def builder(pickup: Point, delivery: Point) -> "ParcelDTOBuilder":
        return ParcelDTOBuilder(pickup, delivery)


class ParcelDTOBuilder:
    def __init__(self, pickup: Point, delivery: Point):
        self._pickup_position = pickup
        self._delivery_position = delivery
        self._pickup_time_window = TimeWindow.ALWAYS
        self._delivery_time_window = TimeWindow.ALWAYS
        self._needed_capacity = 0
        self._order_announce_time = 0
        self._pickup_duration = 0
        self._delivery_duration = 0

    def pickup_time_window(self, tw: TimeWindow) -> "ParcelDTOBuilder":
        self._pickup_time_window = tw
        return self

    def delivery_time_window(self, tw: TimeWindow) -> "ParcelDTOBuilder":
        self._delivery_time_window = tw
        return self

    def time_windows(self, tw: TimeWindow) -> "ParcelDTOBuilder":
        self._pickup_time_window = tw
        self._delivery_time_window = tw
        return self

    def needed_capacity(self, capacity: int) -> "ParcelDTOBuilder":
        self._needed_capacity = capacity
        return self

    def order_announce_time(self, t: int) -> "ParcelDTOBuilder":
        self._order_announce_time = t
        return self

    def pickup_duration(self, duration: int) -> "ParcelDTOBuilder":
        self._pickup_duration = duration
        return self

    def delivery_duration(self, duration: int) -> "ParcelDTOBuilder":
        self._delivery_duration = duration
        return self

    def service_duration(self, duration: int) -> "ParcelDTOBuilder":
        self._pickup_duration = duration
        self._delivery_duration = duration
        return self

    def build(self) -> ParcelDTO:
        return ParcelDTO(
            pickup_position=self._pickup_position,
            delivery_position=self._delivery_position,
            pickup_time_window=self._pickup_time_window,
            delivery_time_window=self._delivery_time_window,
            needed_capacity=self._needed_capacity,
            order_announce_time=self._order_announce_time,
            pickup_duration=self._pickup_duration,
            delivery_duration=self._delivery_duration,
        )
