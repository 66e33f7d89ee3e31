from typing import List, Optional

from scengen.generators.interface import DepotGenerator
from scengen.generators.supplier import StochasticSupplier, constant
from scengen.models.errors import InvalidArgumentError
from scengen.models.event import AddDepotEvent
from scengen.models.geom import Point
from scengen.utils.logger import logger
from scengen.utils.random import SeededRandom

log = logger.child("depots")

DEFAULT_NUMBER_OF_DEPOTS = constant(1)
DEFAULT_TIME = constant(-1)


def builder() -> "DepotsBuilder":
    return DepotsBuilder()


def single_centered_depot() -> DepotGenerator:
    return builder().build()


def single(position: Point) -> DepotGenerator:
    return builder().positions(constant(position)).build()


class DepotsBuilder:
    def __init__(self):
        self.number_of_depots_supplier: StochasticSupplier = DEFAULT_NUMBER_OF_DEPOTS
        self.positions_supplier: Optional[StochasticSupplier] = None
        self.times_supplier: StochasticSupplier = DEFAULT_TIME

    def number_of_depots(self, num: StochasticSupplier) -> "DepotsBuilder":
        self.number_of_depots_supplier = num
        return self

    def positions(self, pos: StochasticSupplier) -> "DepotsBuilder":
        self.positions_supplier = pos
        return self

    def centered_positions(self) -> "DepotsBuilder":
        self.positions_supplier = None
        return self

    def times(self, times: StochasticSupplier) -> "DepotsBuilder":
        self.times_supplier = times
        return self

    def build(self) -> DepotGenerator:
        return DefaultDepotGenerator(self)


class DefaultDepotGenerator(DepotGenerator):
    def __init__(self, b: DepotsBuilder):
        self.number_of_depots = b.number_of_depots_supplier
        self.position_generator = b.positions_supplier
        self.time_generator = b.times_supplier
        self.rng = SeededRandom()

    def generate(self, seed: int, center: Point) -> List[AddDepotEvent]:
        self.rng.set_seed(seed)
        num = self.number_of_depots.get(self.rng.next_long())
        if num <= 0:
            raise InvalidArgumentError(
                f"The numberOfDepots supplier must generate values > 0, found {num}.")

        events: List[AddDepotEvent] = []
        for _ in range(num):
            if self.position_generator is not None:
                pos = self.position_generator.get(self.rng.next_long())
            else:
                pos = center
            time = self.time_generator.get(self.rng.next_long())
            events.append(AddDepotEvent(time, pos))

        log.debug(f"generated {len(events)} depots with seed {seed}")
        return events
