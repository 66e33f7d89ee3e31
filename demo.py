from scengen.core import models
from scengen.core.generator import ScenarioGenerator
from scengen.generators import depots, parcels, vehicles
from scengen.generators.supplier import constant, normal_int, uniform_int, uniform_long, time_window
from scengen.models.geom import Point
from scengen.models.problem_class import SimpleProblemClass
from scengen.models.event import EventType
from scengen.models.scenario import Scenario
from scengen.utils import scenario_io
from scengen.utils.logger import logger
from scengen.utils.reader import scenario_to_frame

LENGTH = 4 * 60 * 60 * 1000


def build_homogenous_generator() -> ScenarioGenerator:
    return (ScenarioGenerator.builder(SimpleProblemClass("homogenous"))
            .scenario_length(LENGTH)
            .area(Point(0, 0), Point(10, 10))
            .vehicles(vehicles.builder().number_of_vehicles(constant(5)).build())
            .parcels(parcels.builder().number_of_parcels(constant(30)).build())
            .add_model(models.road_model(50.0, allow_diversion=False))
            .add_model(models.adapt(models.pdp_model(models.TimeWindowPolicy.TARDY_ALLOWED)))
            .build())


def build_dynamic_generator() -> ScenarioGenerator:
    return (ScenarioGenerator.builder(SimpleProblemClass("dynamic"))
            .scenario_length(LENGTH)
            .area(Point(0, 0), Point(20, 20))
            .depots(depots.single_centered_depot())
            .vehicles(vehicles.builder()
                      .number_of_vehicles(uniform_int(5, 10))
                      .capacities(uniform_int(1, 3))
                      .build())
            .parcels(parcels.builder()
                     .number_of_parcels(normal_int(40, 10, lower=10))
                     .announce_times(uniform_long(0, LENGTH // 2))
                     .pickup_time_windows(time_window(uniform_long(LENGTH // 2, LENGTH // 2 + 1800000),
                                                      constant(30 * 60 * 1000)))
                     .service_durations(constant(5 * 60 * 1000))
                     .build())
            .add_model(models.road_model(40.0, allow_diversion=True))
            .build())


def summarize(name: str, scenario: Scenario):
    df = scenario_to_frame(scenario)
    logger.info(f"{name}: {len(scenario)} events, problem class {scenario.problem_class.get_id()}")
    logger.info(f"{name}: event counts {df['type'].value_counts().to_dict()}")
    logger.info(f"{name}: time out at {scenario.events_of_type(EventType.TIME_OUT)[0].time}")


if __name__ == "__main__":
    print("=== Homogenous fleet ===")
    gen = build_homogenous_generator()
    s = gen.generate(123)
    summarize("homogenous", s)
    for m in gen.build_models():
        logger.info(f"model: {m}")
    assert scenario_io.read(scenario_io.write(s)) == s

    print("\n=== Dynamic orders ===")
    gen = build_dynamic_generator()
    s = gen.generate(456)
    summarize("dynamic", s)
    assert scenario_io.read(scenario_io.write(s)) == s
