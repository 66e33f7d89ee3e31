from typing import List

from scengen.models.event import AddDepotEvent, AddParcelEvent, AddVehicleEvent
from scengen.models.geom import Point


class VehicleGenerator:
    def generate(self, seed: int, center: Point, scenario_length: int) -> List[AddVehicleEvent]:
        """Generate one AddVehicleEvent per vehicle.

        seed: random seed used for every draw of this call.
        center: center of the environment.
        scenario_length: length of the scenario the vehicles are generated for.
        """
        raise NotImplementedError


class ParcelGenerator:
    def generate(self, seed: int, area_min: Point, area_max: Point, scenario_length: int) -> List[AddParcelEvent]:
        raise NotImplementedError


class DepotGenerator:
    def generate(self, seed: int, center: Point) -> List[AddDepotEvent]:
        raise NotImplementedError
