"""Seeded value generators.

A :class:`StochasticSupplier` is a pure function of a 64-bit seed: equal
seeds on equal suppliers give equal values. Non-constant suppliers own a
private :class:`SeededRandom` that is re-seeded on every call, so earlier
draws never influence later ones. Suppliers are not safe for concurrent use.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Tuple

from scengen.models.errors import InvalidArgumentError
from scengen.models.geom import Point, TimeWindow
from scengen.utils.random import SeededRandom

MAX_REDRAWS = 10000


class StochasticSupplier:
    def get(self, seed: int) -> Any:
        raise NotImplementedError

    def __call__(self, seed: int) -> Any:
        return self.get(seed)


@dataclass(frozen=True)
class _SeededSupplier(StochasticSupplier):
    _rng: SeededRandom = field(init=False, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "_rng", SeededRandom())

    def _reseed(self, seed: int) -> SeededRandom:
        self._rng.set_seed(seed)
        return self._rng


@dataclass(frozen=True)
class ConstantSupplier(StochasticSupplier):
    value: Any

    def get(self, seed: int) -> Any:
        return self.value


@dataclass(frozen=True)
class UniformDoubleSupplier(_SeededSupplier):
    low: float = 0.0
    high: float = 1.0

    def __post_init__(self):
        super().__post_init__()
        if self.low > self.high:
            raise InvalidArgumentError(f"uniform bounds must satisfy low <= high, found [{self.low}, {self.high}]")

    def get(self, seed: int) -> float:
        return self._reseed(seed).uniform(self.low, self.high)


@dataclass(frozen=True)
class UniformIntSupplier(_SeededSupplier):
    low: int = 0
    high: int = 1

    def __post_init__(self):
        super().__post_init__()
        if self.low > self.high:
            raise InvalidArgumentError(f"uniform bounds must satisfy low <= high, found [{self.low}, {self.high}]")

    def get(self, seed: int) -> int:
        return self._reseed(seed).integers(self.low, self.high)


@dataclass(frozen=True)
class NormalSupplier(_SeededSupplier):
    """Normal distribution, optionally truncated to ``[lower, upper]``.

    Out-of-bound draws are either redrawn (``"redraw"``) or moved to the
    nearest bound (``"round"``). With ``integer=True`` values are rounded to
    the nearest integer before the bounds are checked.
    """

    mean: float = 0.0
    std: float = 1.0
    lower: Optional[float] = None
    upper: Optional[float] = None
    out_of_bounds: str = "redraw"
    integer: bool = False

    def __post_init__(self):
        super().__post_init__()
        if self.std < 0:
            raise InvalidArgumentError(f"std must be >= 0, found {self.std}")
        if self.lower is not None and self.upper is not None and self.lower > self.upper:
            raise InvalidArgumentError(f"bounds must satisfy lower <= upper, found [{self.lower}, {self.upper}]")
        if self.out_of_bounds not in ("redraw", "round"):
            raise InvalidArgumentError(f"out_of_bounds must be 'redraw' or 'round', found {self.out_of_bounds!r}")
        if (self.integer and self.lower is not None and self.upper is not None
                and math.ceil(self.lower) > math.floor(self.upper)):
            raise InvalidArgumentError(f"no integer in bounds [{self.lower}, {self.upper}]")

    def _in_bounds(self, value) -> bool:
        if self.lower is not None and value < self.lower:
            return False
        if self.upper is not None and value > self.upper:
            return False
        return True

    def _draw(self, rng: SeededRandom):
        value = self.mean + self.std * rng.next_gaussian()
        return int(round(value)) if self.integer else value

    def get(self, seed: int):
        rng = self._reseed(seed)
        value = self._draw(rng)
        if self._in_bounds(value):
            return value
        if self.out_of_bounds == "round":
            if self.lower is not None and value < self.lower:
                return math.ceil(self.lower) if self.integer else float(self.lower)
            return math.floor(self.upper) if self.integer else float(self.upper)
        for _ in range(MAX_REDRAWS):
            value = self._draw(rng)
            if self._in_bounds(value):
                return value
        raise InvalidArgumentError(
            f"normal({self.mean}, {self.std}) found no value in [{self.lower}, {self.upper}] "
            f"after {MAX_REDRAWS} redraws"
        )


@dataclass(frozen=True)
class UniformPointSupplier(_SeededSupplier):
    min: Point = Point(0, 0)
    max: Point = Point(1, 1)

    def __post_init__(self):
        super().__post_init__()
        if self.min.x > self.max.x or self.min.y > self.max.y:
            raise InvalidArgumentError(f"min {self.min} must be <= max {self.max} on both axes")

    def get(self, seed: int) -> Point:
        rng = self._reseed(seed)
        x = rng.uniform(self.min.x, self.max.x)
        y = rng.uniform(self.min.y, self.max.y)
        return Point(x, y)


@dataclass(frozen=True)
class ChoiceSupplier(_SeededSupplier):
    values: Tuple[Any, ...] = ()

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "values", tuple(self.values))
        if not self.values:
            raise InvalidArgumentError("choice needs at least one value")

    def get(self, seed: int) -> Any:
        return self.values[self._reseed(seed).next_int(len(self.values))]


@dataclass(frozen=True)
class TimeWindowSupplier(_SeededSupplier):
    """Window ``[begin, begin + length]``; both parts are seeded from one stream."""

    begin: StochasticSupplier = None
    length: StochasticSupplier = None

    def get(self, seed: int) -> TimeWindow:
        rng = self._reseed(seed)
        begin = int(self.begin.get(rng.next_long()))
        length = int(self.length.get(rng.next_long()))
        if length < 0:
            raise InvalidArgumentError(f"The time window length supplier must generate values >= 0, found {length}.")
        return TimeWindow(begin, begin + length)


# =========================
# Factory functions
# =========================
def constant(value: Any) -> StochasticSupplier:
    return ConstantSupplier(value)


def uniform_double(low: float, high: float) -> StochasticSupplier:
    return UniformDoubleSupplier(low=float(low), high=float(high))


def uniform_int(low: int, high: int) -> StochasticSupplier:
    """Both bounds inclusive."""
    return UniformIntSupplier(low=int(low), high=int(high))


def uniform_long(low: int, high: int) -> StochasticSupplier:
    """Both bounds inclusive; meant for time values."""
    return UniformIntSupplier(low=int(low), high=int(high))


def normal(mean: float, std: float, lower: Optional[float] = None, upper: Optional[float] = None,
           out_of_bounds: str = "redraw") -> StochasticSupplier:
    return NormalSupplier(mean=mean, std=std, lower=lower, upper=upper, out_of_bounds=out_of_bounds)


def normal_int(mean: float, std: float, lower: Optional[int] = None, upper: Optional[int] = None,
               out_of_bounds: str = "redraw") -> StochasticSupplier:
    return NormalSupplier(mean=mean, std=std, lower=lower, upper=upper, out_of_bounds=out_of_bounds, integer=True)


normal_long = normal_int


def uniform_point(min_point: Point, max_point: Point) -> StochasticSupplier:
    return UniformPointSupplier(min=min_point, max=max_point)


def choice(values: Sequence[Any]) -> StochasticSupplier:
    return ChoiceSupplier(values=tuple(values))


def time_window(begin: StochasticSupplier, length: StochasticSupplier) -> StochasticSupplier:
    return TimeWindowSupplier(begin=begin, length=length)
