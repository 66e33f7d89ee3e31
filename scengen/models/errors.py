class ScenarioError(Exception):
    """Root of all errors raised by scengen."""


class InvalidArgumentError(ScenarioError, ValueError):
    """A generator was misconfigured or one of its suppliers produced an
    out-of-range value. Generation is aborted, no partial result is returned."""


class InvalidScenarioError(ScenarioError, ValueError):
    """A DTO, time window or scenario invariant does not hold."""


class MalformedScenarioError(ScenarioError, ValueError):
    """Serialized scenario text could not be parsed."""
