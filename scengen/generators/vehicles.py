"""Generators of AddVehicleEvents.

Use :func:`builder` for stochastic vehicles or :func:`homogenous` for a
fleet of identical vehicles.
"""
from typing import List, Optional

from scengen.generators.interface import VehicleGenerator
from scengen.generators.supplier import StochasticSupplier, constant
from scengen.models.dto import VehicleDTO
from scengen.models.errors import InvalidArgumentError
from scengen.models.event import AddVehicleEvent
from scengen.models.geom import Point, TimeWindow
from scengen.utils.logger import logger
from scengen.utils.random import SeededRandom

log = logger.child("vehicles")

DEFAULT_NUM_OF_VEHICLES = 10
DEFAULT_NUMBER_OF_VEHICLES = constant(DEFAULT_NUM_OF_VEHICLES)
DEFAULT_SPEED = constant(50.0)
DEFAULT_CAPACITY = constant(1)
DEFAULT_TIME = constant(-1)


def single(dto: VehicleDTO) -> VehicleGenerator:
    return homogenous(dto, 1)


def homogenous(dto: VehicleDTO, number_of_vehicles: int) -> VehicleGenerator:
    return HomogenousVehicleGenerator(number_of_vehicles, dto)


def builder() -> "VehiclesBuilder":
    return VehiclesBuilder()


class VehiclesBuilder:
    """Fluent configuration of a :class:`DefaultVehicleGenerator`.

    Start positions and time windows are optional: when absent the vehicles
    start at the center and are available during the whole scenario, and no
    random draw is spent on them.
    """

    def __init__(self):
        self.number_of_vehicles_supplier: StochasticSupplier = DEFAULT_NUMBER_OF_VEHICLES
        self.start_positions_supplier: Optional[StochasticSupplier] = None
        self.speeds_supplier: StochasticSupplier = DEFAULT_SPEED
        self.capacities_supplier: StochasticSupplier = DEFAULT_CAPACITY
        self.time_windows_supplier: Optional[StochasticSupplier] = None
        self.creation_times_supplier: StochasticSupplier = DEFAULT_TIME

    def number_of_vehicles(self, num: StochasticSupplier) -> "VehiclesBuilder":
        """Values must be > 0. Default: 10."""
        self.number_of_vehicles_supplier = num
        return self

    def start_positions(self, pos: StochasticSupplier) -> "VehiclesBuilder":
        self.start_positions_supplier = pos
        return self

    def centered_start_positions(self) -> "VehiclesBuilder":
        self.start_positions_supplier = None
        return self

    def time_windows(self, tw: StochasticSupplier) -> "VehiclesBuilder":
        self.time_windows_supplier = tw
        return self

    def time_windows_as_scenario(self) -> "VehiclesBuilder":
        self.time_windows_supplier = None
        return self

    def speeds(self, sp: StochasticSupplier) -> "VehiclesBuilder":
        """Values must be > 0. Default: 50 in the speed unit of the scenario."""
        self.speeds_supplier = sp
        return self

    def capacities(self, cap: StochasticSupplier) -> "VehiclesBuilder":
        """Values must be >= 0. Default: 1."""
        self.capacities_supplier = cap
        return self

    def creation_times(self, times: StochasticSupplier) -> "VehiclesBuilder":
        """Values must be < scenario length. Default: -1, present from the start."""
        self.creation_times_supplier = times
        return self

    def build(self) -> VehicleGenerator:
        return DefaultVehicleGenerator(self)


class DefaultVehicleGenerator(VehicleGenerator):
    def __init__(self, b: VehiclesBuilder):
        self.number_of_vehicles = b.number_of_vehicles_supplier
        self.start_position_generator = b.start_positions_supplier
        self.speed_generator = b.speeds_supplier
        self.capacity_generator = b.capacities_supplier
        self.time_window_generator = b.time_windows_supplier
        self.creation_time_generator = b.creation_times_supplier
        # single writer: one generate() call at a time per instance
        self.rng = SeededRandom()

    def generate(self, seed: int, center: Point, scenario_length: int) -> List[AddVehicleEvent]:
        if scenario_length < 0:
            raise InvalidArgumentError(f"scenario length must be >= 0, found {scenario_length}.")
        self.rng.set_seed(seed)

        num = self.number_of_vehicles.get(self.rng.next_long())
        if num <= 0:
            raise InvalidArgumentError(
                f"The numberOfVehicles supplier must generate values > 0, found {num}.")

        events: List[AddVehicleEvent] = []
        for _ in range(num):
            if self.start_position_generator is not None:
                pos = self.start_position_generator.get(self.rng.next_long())
            else:
                pos = center

            speed = self.speed_generator.get(self.rng.next_long())
            if not speed > 0:
                raise InvalidArgumentError(
                    f"The speeds supplier must generate values > 0.0, found {speed}.")

            capacity = self.capacity_generator.get(self.rng.next_long())
            if capacity < 0:
                raise InvalidArgumentError(
                    f"The capacities supplier must generate non-negative values, found {capacity}.")

            if self.time_window_generator is not None:
                tw = self.time_window_generator.get(self.rng.next_long())
            else:
                tw = TimeWindow(0, scenario_length)

            time = self.creation_time_generator.get(self.rng.next_long())
            if time >= scenario_length:
                raise InvalidArgumentError(
                    f"The creationTimes supplier must generate values smaller than the "
                    f"scenarioLength ({scenario_length}), found {time}.")

            dto = (VehicleDTO.builder()
                   .start_position(pos)
                   .speed(speed)
                   .capacity(capacity)
                   .availability_time_window(tw)
                   .build())
            events.append(AddVehicleEvent(time, dto))

        log.debug(f"generated {len(events)} vehicles with seed {seed}")
        return events


class HomogenousVehicleGenerator(VehicleGenerator):
    """Always ``n`` copies of the same vehicle, created at time -1."""

    def __init__(self, number_of_vehicles: int, dto: VehicleDTO):
        if number_of_vehicles <= 0:
            raise InvalidArgumentError(f"number_of_vehicles must be > 0, found {number_of_vehicles}.")
        self.vehicle_dto = dto
        self.n = number_of_vehicles

    def generate(self, seed: int, center: Point, scenario_length: int) -> List[AddVehicleEvent]:
        return [AddVehicleEvent(-1, self.vehicle_dto)] * self.n
