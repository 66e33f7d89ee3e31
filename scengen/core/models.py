"""Model configuration for the simulator that consumes a scenario.

The functions in this module are pure configuration builders. Every
``get()`` returns a newly constructed, immutable configuration object whose
equality, hash and repr are derived from the captured parameters, so the
simulator can deduplicate and log them.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, TYPE_CHECKING

from scengen.models.geom import Point

if TYPE_CHECKING:
    from scengen.core.generator import ScenarioGenerator


class TimeWindowPolicy(Enum):
    # pickup/delivery allowed at any time
    LIBERAL = "LIBERAL"
    # only inside the time window, service must also end inside it
    STRICT = "STRICT"
    # from the window start onward, being late is allowed
    TARDY_ALLOWED = "TARDY_ALLOWED"


@dataclass(frozen=True)
class Measure:
    value: float
    unit: str


# =========================
# Configuration objects
# =========================
@dataclass(frozen=True)
class PlaneRoadModelConfig:
    min: Point
    max: Point
    distance_unit: str
    max_speed: Measure


@dataclass(frozen=True)
class PDPRoadModelConfig:
    road_model: PlaneRoadModelConfig
    allow_diversion: bool


@dataclass(frozen=True)
class PDPModelConfig:
    time_window_policy: TimeWindowPolicy


# =========================
# Suppliers
# =========================
class ModelSupplier:
    """Produces a new configuration object on every call."""

    def get(self) -> Any:
        raise NotImplementedError


class ScenarioModelSupplier:
    """A model supplier that needs the environment of a ScenarioGenerator."""

    def get(self, sg: "ScenarioGenerator") -> ModelSupplier:
        raise NotImplementedError


@dataclass(frozen=True)
class PDPModelSupplier(ModelSupplier):
    time_window_policy: TimeWindowPolicy

    def get(self) -> PDPModelConfig:
        return PDPModelConfig(self.time_window_policy)


@dataclass(frozen=True)
class RoadModelSupplier(ModelSupplier):
    min: Point
    max: Point
    distance_unit: str
    speed_measure: Measure
    allow_diversion: bool

    def get(self) -> PDPRoadModelConfig:
        return PDPRoadModelConfig(
            PlaneRoadModelConfig(self.min, self.max, self.distance_unit, self.speed_measure),
            self.allow_diversion,
        )


@dataclass(frozen=True)
class DefaultRoadModelSupplier(ScenarioModelSupplier):
    max_speed: float
    allow_diversion: bool

    def get(self, sg: "ScenarioGenerator") -> RoadModelSupplier:
        return RoadModelSupplier(
            min=sg.min,
            max=sg.max,
            distance_unit=sg.distance_unit,
            speed_measure=Measure(float(self.max_speed), sg.speed_unit),
            allow_diversion=self.allow_diversion,
        )


@dataclass(frozen=True)
class _CallableSupplier(ModelSupplier):
    factory: Callable[[], Any]

    def get(self) -> Any:
        return self.factory()


@dataclass(frozen=True)
class Adapter(ScenarioModelSupplier):
    supplier: ModelSupplier

    def get(self, sg: "ScenarioGenerator") -> ModelSupplier:
        return self.supplier


# =========================
# Factory functions
# =========================
def road_model(max_speed: float, allow_diversion: bool) -> ScenarioModelSupplier:
    """Planar road model; bounds and units come from the ScenarioGenerator,
    ``max_speed`` is expressed in its speed unit."""
    return DefaultRoadModelSupplier(max_speed, allow_diversion)


def pdp_model(twp: TimeWindowPolicy) -> ModelSupplier:
    return PDPModelSupplier(twp)


def adapt(supplier) -> ScenarioModelSupplier:
    """Wraps a ModelSupplier, or a zero-argument callable, for use in a ScenarioGenerator."""
    if not isinstance(supplier, ModelSupplier):
        supplier = _CallableSupplier(supplier)
    return Adapter(supplier)
