from dataclasses import dataclass
import math

from scengen.models.errors import InvalidScenarioError

LONG_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __post_init__(self):
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    @staticmethod
    def distance(a: "Point", b: "Point") -> float:
        return math.hypot(a.x - b.x, a.y - b.y)

    @staticmethod
    def centroid(a: "Point", b: "Point") -> "Point":
        return Point((a.x + b.x) / 2.0, (a.y + b.y) / 2.0)


@dataclass(frozen=True)
class TimeWindow:
    """Closed-open interval ``[begin, end)`` of integer simulation time."""

    begin: int
    end: int

    def __post_init__(self):
        object.__setattr__(self, "begin", int(self.begin))
        object.__setattr__(self, "end", int(self.end))
        if self.begin > self.end:
            raise InvalidScenarioError(
                f"TimeWindow begin must be <= end, found [{self.begin}, {self.end}]."
            )

    def length(self) -> int:
        return self.end - self.begin

    def is_in(self, t: int) -> bool:
        return self.is_after_start(t) and self.is_before_end(t)

    def is_after_start(self, t: int) -> bool:
        return t >= self.begin

    def is_before_end(self, t: int) -> bool:
        return t < self.end


TimeWindow.ALWAYS = TimeWindow(0, LONG_MAX)
