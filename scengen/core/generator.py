from typing import Any, List

from scengen.core.models import ScenarioModelSupplier
from scengen.generators import depots, parcels, vehicles
from scengen.generators.interface import DepotGenerator, ParcelGenerator, VehicleGenerator
from scengen.models.errors import InvalidArgumentError
from scengen.models.event import EventType, TimedEvent
from scengen.models.geom import Point
from scengen.models.problem_class import DEFAULT_PROBLEM_CLASS, ProblemClass
from scengen.models.scenario import Scenario
from scengen.utils.logger import logger
from scengen.utils.random import SeededRandom

log = logger.child("generator")

DEFAULT_SCENARIO_LENGTH = 8 * 60 * 60 * 1000
DEFAULT_MIN = Point(0, 0)
DEFAULT_MAX = Point(10, 10)
DEFAULT_DISTANCE_UNIT = "km"
DEFAULT_SPEED_UNIT = "km/h"
DEFAULT_TIME_UNIT = "ms"


class ScenarioGenerator:
    """Binds depot, vehicle and parcel generators to one environment.

    The environment (area bounds, units, scenario length) is shared with
    the model suppliers so the simulator gets a road model that matches the
    generated events. A generator instance is single-writer: do not call
    :meth:`generate` concurrently on the same instance.
    """

    def __init__(self, b: "ScenarioGeneratorBuilder"):
        self.problem_class: ProblemClass = b._problem_class
        self.scenario_length: int = b._scenario_length
        self.min: Point = b._min
        self.max: Point = b._max
        self.center: Point = Point.centroid(b._min, b._max)
        self.distance_unit: str = b._distance_unit
        self.speed_unit: str = b._speed_unit
        self.time_unit: str = b._time_unit
        self.depot_generator: DepotGenerator = b._depots
        self.vehicle_generator: VehicleGenerator = b._vehicles
        self.parcel_generator: ParcelGenerator = b._parcels
        self.model_suppliers: List[ScenarioModelSupplier] = list(b._models)
        self.rng = SeededRandom()

    @staticmethod
    def builder(problem_class: ProblemClass = DEFAULT_PROBLEM_CLASS) -> "ScenarioGeneratorBuilder":
        return ScenarioGeneratorBuilder(problem_class)

    def generate(self, seed: int) -> Scenario:
        """Depots, then vehicles, then parcels, then a TIME_OUT at the scenario length.

        Each sub-generator gets its own seed drawn from ``seed`` in that order.
        """
        self.rng.set_seed(seed)
        depot_seed = self.rng.next_long()
        vehicle_seed = self.rng.next_long()
        parcel_seed = self.rng.next_long()

        b = Scenario.builder(self.problem_class)
        b.add_events(self.depot_generator.generate(depot_seed, self.center))
        b.add_events(self.vehicle_generator.generate(vehicle_seed, self.center, self.scenario_length))
        b.add_events(self.parcel_generator.generate(parcel_seed, self.min, self.max, self.scenario_length))
        b.add_event(TimedEvent(EventType.TIME_OUT, self.scenario_length))
        scenario = b.build()
        log.debug(f"generated scenario with {len(scenario)} events (seed={seed})")
        return scenario

    def build_models(self) -> List[Any]:
        """Fresh model configuration objects, one per registered model supplier."""
        return [s.get(self).get() for s in self.model_suppliers]


class ScenarioGeneratorBuilder:
    def __init__(self, problem_class: ProblemClass = DEFAULT_PROBLEM_CLASS):
        self._problem_class = problem_class
        self._scenario_length = DEFAULT_SCENARIO_LENGTH
        self._min = DEFAULT_MIN
        self._max = DEFAULT_MAX
        self._distance_unit = DEFAULT_DISTANCE_UNIT
        self._speed_unit = DEFAULT_SPEED_UNIT
        self._time_unit = DEFAULT_TIME_UNIT
        self._depots: DepotGenerator = depots.single_centered_depot()
        self._vehicles: VehicleGenerator = vehicles.builder().build()
        self._parcels: ParcelGenerator = parcels.builder().build()
        self._models: List[ScenarioModelSupplier] = []

    def problem_class(self, problem_class: ProblemClass) -> "ScenarioGeneratorBuilder":
        self._problem_class = problem_class
        return self

    def scenario_length(self, length: int) -> "ScenarioGeneratorBuilder":
        if length <= 0:
            raise InvalidArgumentError(f"scenario length must be > 0, found {length}.")
        self._scenario_length = int(length)
        return self

    def area(self, min_point: Point, max_point: Point) -> "ScenarioGeneratorBuilder":
        if min_point.x > max_point.x or min_point.y > max_point.y:
            raise InvalidArgumentError(f"area min {min_point} must be <= max {max_point} on both axes.")
        self._min = min_point
        self._max = max_point
        return self

    def distance_unit(self, unit: str) -> "ScenarioGeneratorBuilder":
        self._distance_unit = unit
        return self

    def speed_unit(self, unit: str) -> "ScenarioGeneratorBuilder":
        self._speed_unit = unit
        return self

    def time_unit(self, unit: str) -> "ScenarioGeneratorBuilder":
        self._time_unit = unit
        return self

    def depots(self, gen: DepotGenerator) -> "ScenarioGeneratorBuilder":
        self._depots = gen
        return self

    def vehicles(self, gen: VehicleGenerator) -> "ScenarioGeneratorBuilder":
        self._vehicles = gen
        return self

    def parcels(self, gen: ParcelGenerator) -> "ScenarioGeneratorBuilder":
        self._parcels = gen
        return self

    def add_model(self, supplier: ScenarioModelSupplier) -> "ScenarioGeneratorBuilder":
        if not isinstance(supplier, ScenarioModelSupplier):
            raise InvalidArgumentError(
                f"add_model expects a ScenarioModelSupplier, wrap plain suppliers with models.adapt(), found {supplier!r}.")
        self._models.append(supplier)
        return self

    def build(self) -> ScenarioGenerator:
        return ScenarioGenerator(self)
