from dataclasses import dataclass
from typing import Iterable, Iterator, List, Set, Tuple

from scengen.models.errors import InvalidScenarioError
from scengen.models.event import EventType, TimedEvent
from scengen.models.problem_class import DEFAULT_PROBLEM_CLASS, ProblemClass


@dataclass(frozen=True)
class Scenario:
    """Immutable, ordered list of events plus the problem class it belongs to.

    Events keep insertion order; they are not sorted by time. Equality is
    order sensitive. Instances are created through :meth:`Scenario.builder`.
    """

    events: Tuple[TimedEvent, ...]
    problem_class: ProblemClass

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[TimedEvent]:
        return iter(self.events)

    def as_list(self) -> List[TimedEvent]:
        return list(self.events)

    def events_of_type(self, event_type: EventType) -> List[TimedEvent]:
        return [e for e in self.events if e.event_type == event_type]

    def possible_event_types(self) -> Set[EventType]:
        return {e.event_type for e in self.events}

    @staticmethod
    def builder(problem_class: ProblemClass = DEFAULT_PROBLEM_CLASS) -> "ScenarioBuilder":
        return ScenarioBuilder(problem_class)


class ScenarioBuilder:
    def __init__(self, problem_class: ProblemClass = DEFAULT_PROBLEM_CLASS):
        self._problem_class = problem_class
        self._events: List[TimedEvent] = []

    # --- accumulation ---
    def add_event(self, event: TimedEvent) -> "ScenarioBuilder":
        self._events.append(event)
        return self

    def add_events(self, events: Iterable[TimedEvent]) -> "ScenarioBuilder":
        self._events.extend(events)
        return self

    def problem_class(self, problem_class: ProblemClass) -> "ScenarioBuilder":
        self._problem_class = problem_class
        return self

    def copy_properties(self, scenario: Scenario) -> "ScenarioBuilder":
        self._events = list(scenario.events)
        self._problem_class = scenario.problem_class
        return self

    # --- finalization ---
    def build(self) -> Scenario:
        for i, event in enumerate(self._events):
            if not isinstance(event, TimedEvent):
                raise InvalidScenarioError(f"event #{i} is not a TimedEvent: {event!r}")
        if not isinstance(self._problem_class, ProblemClass):
            raise InvalidScenarioError(f"problem class must implement ProblemClass, found {self._problem_class!r}")
        # tuple() copies, later add_event calls do not leak into the scenario
        return Scenario(events=tuple(self._events), problem_class=self._problem_class)


Scenario.Builder = ScenarioBuilder
