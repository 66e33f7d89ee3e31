from typing import List, Optional

from scengen.generators.interface import ParcelGenerator
from scengen.generators.supplier import StochasticSupplier, constant, uniform_point
from scengen.models.dto import ParcelDTO
from scengen.models.errors import InvalidArgumentError
from scengen.models.event import AddParcelEvent
from scengen.models.geom import Point, TimeWindow
from scengen.utils.logger import logger
from scengen.utils.random import SeededRandom

log = logger.child("parcels")

DEFAULT_NUM_OF_PARCELS = 20
DEFAULT_NUMBER_OF_PARCELS = constant(DEFAULT_NUM_OF_PARCELS)
DEFAULT_ANNOUNCE_TIME = constant(-1)
DEFAULT_CAPACITY = constant(0)
DEFAULT_DURATION = constant(0)


def builder() -> "ParcelsBuilder":
    return ParcelsBuilder()


class ParcelsBuilder:
    """Fluent configuration of a :class:`DefaultParcelGenerator`.

    Locations default to a uniform draw over the area of the scenario.
    Time windows are optional: an absent pickup window is
    ``[max(announce, 0), scenario_length]``, an absent delivery window is
    ``[pickup.begin, scenario_length]``; neither spends a random draw.
    """

    def __init__(self):
        self.number_of_parcels_supplier: StochasticSupplier = DEFAULT_NUMBER_OF_PARCELS
        self.announce_times_supplier: StochasticSupplier = DEFAULT_ANNOUNCE_TIME
        self.pickup_locations_supplier: Optional[StochasticSupplier] = None
        self.delivery_locations_supplier: Optional[StochasticSupplier] = None
        self.pickup_time_windows_supplier: Optional[StochasticSupplier] = None
        self.delivery_time_windows_supplier: Optional[StochasticSupplier] = None
        self.needed_capacities_supplier: StochasticSupplier = DEFAULT_CAPACITY
        self.pickup_durations_supplier: StochasticSupplier = DEFAULT_DURATION
        self.delivery_durations_supplier: StochasticSupplier = DEFAULT_DURATION

    def number_of_parcels(self, num: StochasticSupplier) -> "ParcelsBuilder":
        self.number_of_parcels_supplier = num
        return self

    def announce_times(self, times: StochasticSupplier) -> "ParcelsBuilder":
        self.announce_times_supplier = times
        return self

    def locations(self, pos: StochasticSupplier) -> "ParcelsBuilder":
        self.pickup_locations_supplier = pos
        self.delivery_locations_supplier = pos
        return self

    def pickup_locations(self, pos: StochasticSupplier) -> "ParcelsBuilder":
        self.pickup_locations_supplier = pos
        return self

    def delivery_locations(self, pos: StochasticSupplier) -> "ParcelsBuilder":
        self.delivery_locations_supplier = pos
        return self

    def pickup_time_windows(self, tw: StochasticSupplier) -> "ParcelsBuilder":
        self.pickup_time_windows_supplier = tw
        return self

    def delivery_time_windows(self, tw: StochasticSupplier) -> "ParcelsBuilder":
        self.delivery_time_windows_supplier = tw
        return self

    def time_windows_as_scenario(self) -> "ParcelsBuilder":
        self.pickup_time_windows_supplier = None
        self.delivery_time_windows_supplier = None
        return self

    def needed_capacities(self, cap: StochasticSupplier) -> "ParcelsBuilder":
        self.needed_capacities_supplier = cap
        return self

    def pickup_durations(self, d: StochasticSupplier) -> "ParcelsBuilder":
        self.pickup_durations_supplier = d
        return self

    def delivery_durations(self, d: StochasticSupplier) -> "ParcelsBuilder":
        self.delivery_durations_supplier = d
        return self

    def service_durations(self, d: StochasticSupplier) -> "ParcelsBuilder":
        self.pickup_durations_supplier = d
        self.delivery_durations_supplier = d
        return self

    def build(self) -> ParcelGenerator:
        return DefaultParcelGenerator(self)


class DefaultParcelGenerator(ParcelGenerator):
    def __init__(self, b: ParcelsBuilder):
        self.number_of_parcels = b.number_of_parcels_supplier
        self.announce_time_generator = b.announce_times_supplier
        self.pickup_location_generator = b.pickup_locations_supplier
        self.delivery_location_generator = b.delivery_locations_supplier
        self.pickup_tw_generator = b.pickup_time_windows_supplier
        self.delivery_tw_generator = b.delivery_time_windows_supplier
        self.capacity_generator = b.needed_capacities_supplier
        self.pickup_duration_generator = b.pickup_durations_supplier
        self.delivery_duration_generator = b.delivery_durations_supplier
        self.rng = SeededRandom()

    def generate(self, seed: int, area_min: Point, area_max: Point, scenario_length: int) -> List[AddParcelEvent]:
        if scenario_length < 0:
            raise InvalidArgumentError(f"scenario length must be >= 0, found {scenario_length}.")
        self.rng.set_seed(seed)
        area = uniform_point(area_min, area_max)
        pickup_locations = self.pickup_location_generator if self.pickup_location_generator is not None else area
        delivery_locations = self.delivery_location_generator if self.delivery_location_generator is not None else area

        num = self.number_of_parcels.get(self.rng.next_long())
        if num <= 0:
            raise InvalidArgumentError(
                f"The numberOfParcels supplier must generate values > 0, found {num}.")

        events: List[AddParcelEvent] = []
        for _ in range(num):
            announce = self.announce_time_generator.get(self.rng.next_long())
            if announce >= scenario_length:
                raise InvalidArgumentError(
                    f"The announceTimes supplier must generate values smaller than the "
                    f"scenarioLength ({scenario_length}), found {announce}.")

            pickup = pickup_locations.get(self.rng.next_long())
            delivery = delivery_locations.get(self.rng.next_long())

            if self.pickup_tw_generator is not None:
                pickup_tw = self.pickup_tw_generator.get(self.rng.next_long())
            else:
                pickup_tw = TimeWindow(max(announce, 0), scenario_length)
            if announce > pickup_tw.begin:
                raise InvalidArgumentError(
                    f"The pickupTimeWindows supplier must generate windows that open at or after "
                    f"the announce time ({announce}), found {pickup_tw}.")

            if self.delivery_tw_generator is not None:
                delivery_tw = self.delivery_tw_generator.get(self.rng.next_long())
            else:
                delivery_tw = TimeWindow(pickup_tw.begin, scenario_length)

            capacity = self.capacity_generator.get(self.rng.next_long())
            if capacity < 0:
                raise InvalidArgumentError(
                    f"The neededCapacities supplier must generate non-negative values, found {capacity}.")
            pickup_duration = self.pickup_duration_generator.get(self.rng.next_long())
            if pickup_duration < 0:
                raise InvalidArgumentError(
                    f"The pickupDurations supplier must generate non-negative values, found {pickup_duration}.")
            delivery_duration = self.delivery_duration_generator.get(self.rng.next_long())
            if delivery_duration < 0:
                raise InvalidArgumentError(
                    f"The deliveryDurations supplier must generate non-negative values, found {delivery_duration}.")

            dto = (ParcelDTO.builder(pickup, delivery)
                   .order_announce_time(announce)
                   .pickup_time_window(pickup_tw)
                   .delivery_time_window(delivery_tw)
                   .needed_capacity(capacity)
                   .pickup_duration(pickup_duration)
                   .delivery_duration(delivery_duration)
                   .build())
            events.append(AddParcelEvent(dto))

        log.debug(f"generated {len(events)} parcels with seed {seed}")
        return events
