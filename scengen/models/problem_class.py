from dataclasses import dataclass
from enum import Enum
from typing import Dict, Type


class ProblemClass:
    """Tag identifying the experiment family a scenario belongs to."""

    def get_id(self) -> str:
        raise NotImplementedError


# qualified enum name -> enum class, used to rebuild enum problem classes from text
_REGISTRY: Dict[str, Type[Enum]] = {}


def qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def register_problem_class(cls):
    """Class decorator making an enum of problem classes readable by scenario IO."""
    if not (isinstance(cls, type) and issubclass(cls, Enum) and issubclass(cls, ProblemClass)):
        raise TypeError(f"{cls!r} must be an Enum that implements ProblemClass")
    _REGISTRY[qualified_name(cls)] = cls
    return cls


def lookup_problem_class(class_name: str, member: str) -> ProblemClass:
    """Raises KeyError when the enum is not registered or has no such member."""
    return _REGISTRY[class_name][member]


@register_problem_class
class DefaultProblemClass(ProblemClass, Enum):
    DEFAULT = "DEFAULT"

    def get_id(self) -> str:
        return self.name


@dataclass(frozen=True)
class SimpleProblemClass(ProblemClass):
    id: str

    def get_id(self) -> str:
        return self.id


DEFAULT_PROBLEM_CLASS = DefaultProblemClass.DEFAULT
