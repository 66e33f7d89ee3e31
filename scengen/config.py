"""Generator configuration.

A :class:`GeneratorConfig` holds the environment and fleet parameters of an
experiment and can be stored as YAML so batches of scenarios are reproducible
from a file plus a seed.
"""
from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml

from scengen.core import models
from scengen.core.generator import (
    DEFAULT_DISTANCE_UNIT,
    DEFAULT_SCENARIO_LENGTH,
    DEFAULT_SPEED_UNIT,
    DEFAULT_TIME_UNIT,
    ScenarioGenerator,
)
from scengen.generators import depots, parcels, vehicles
from scengen.generators.supplier import constant
from scengen.models.errors import InvalidArgumentError
from scengen.models.geom import Point
from scengen.models.problem_class import SimpleProblemClass

__all__ = ["GeneratorConfig"]

DEFAULT_YAML_INDENT = 2


@dataclass
class GeneratorConfig:
    """Parameters of a :class:`ScenarioGenerator`.

    Attributes
    ----------
    problem_class
        Identifier of the experiment family, stored as a SimpleProblemClass.
    scenario_length
        Length of the scenario in ``time_unit``.
    area_min, area_max
        Opposite corners ``[x, y]`` of the rectangular area.
    num_vehicles, vehicle_speed, vehicle_capacity
        Homogeneous fleet description; vehicles start at the area center.
    num_parcels
        Parcels per scenario; locations are uniform over the area.
    num_depots
        Depots, all at the area center.
    max_speed, allow_diversion
        Road model parameters. No road model is added when max_speed is None.
    time_window_policy
        Name of a :class:`TimeWindowPolicy`; None adds no PDP model.
    """

    problem_class: str = "default"
    scenario_length: int = DEFAULT_SCENARIO_LENGTH
    area_min: List[float] = field(default_factory=lambda: [0.0, 0.0])
    area_max: List[float] = field(default_factory=lambda: [10.0, 10.0])
    distance_unit: str = DEFAULT_DISTANCE_UNIT
    speed_unit: str = DEFAULT_SPEED_UNIT
    time_unit: str = DEFAULT_TIME_UNIT

    num_vehicles: int = vehicles.DEFAULT_NUM_OF_VEHICLES
    vehicle_speed: float = 50.0
    vehicle_capacity: int = 1
    num_parcels: int = parcels.DEFAULT_NUM_OF_PARCELS
    num_depots: int = 1

    max_speed: Optional[float] = 50.0
    allow_diversion: bool = False
    time_window_policy: Optional[str] = "TARDY_ALLOWED"

    # Automatically filled, not expected to be loaded from file.
    _yaml_path: Optional[Path] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        self.scenario_length = int(self.scenario_length)
        self.area_min = [float(v) for v in self.area_min]
        self.area_max = [float(v) for v in self.area_max]
        if len(self.area_min) != 2 or len(self.area_max) != 2:
            raise InvalidArgumentError("area_min and area_max must be [x, y] pairs")
        if self.time_window_policy is not None and self.time_window_policy not in models.TimeWindowPolicy.__members__:
            raise InvalidArgumentError(
                f"Unknown time_window_policy: {self.time_window_policy}. "
                f"Choose from {list(models.TimeWindowPolicy.__members__)}")

    # ------------------------------------------------------------------
    # YAML helpers
    # ------------------------------------------------------------------
    @classmethod
    def from_yaml(cls, path: os.PathLike | str) -> "GeneratorConfig":
        """Load a configuration from a YAML file."""
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        cfg = cls(**data)
        cfg._yaml_path = Path(path)
        return cfg

    def to_yaml(self, path: os.PathLike | str) -> None:
        data = asdict(self)
        data.pop("_yaml_path")
        with open(path, "w", encoding="utf-8") as fh:
            yaml.safe_dump(data, fh, indent=DEFAULT_YAML_INDENT)

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------
    def build_generator(self) -> ScenarioGenerator:
        b = (ScenarioGenerator.builder(SimpleProblemClass(self.problem_class))
             .scenario_length(self.scenario_length)
             .area(Point(*self.area_min), Point(*self.area_max))
             .distance_unit(self.distance_unit)
             .speed_unit(self.speed_unit)
             .time_unit(self.time_unit)
             .depots(depots.builder().number_of_depots(constant(self.num_depots)).build())
             .vehicles(vehicles.builder()
                       .number_of_vehicles(constant(self.num_vehicles))
                       .speeds(constant(float(self.vehicle_speed)))
                       .capacities(constant(self.vehicle_capacity))
                       .build())
             .parcels(parcels.builder().number_of_parcels(constant(self.num_parcels)).build()))
        if self.max_speed is not None:
            b.add_model(models.road_model(self.max_speed, self.allow_diversion))
        if self.time_window_policy is not None:
            b.add_model(models.adapt(models.pdp_model(models.TimeWindowPolicy[self.time_window_policy])))
        return b.build()

    def __str__(self) -> str:
        return (f"GeneratorConfig(problem_class={self.problem_class}, vehicles={self.num_vehicles}, "
                f"parcels={self.num_parcels}, length={self.scenario_length})")
