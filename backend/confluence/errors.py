"""Error types raised by the decision engine.

Only ``ConfigurationError`` and ``MissingDataError`` ever reach a caller.
``EvaluatorFault`` is raised inside evaluators and absorbed by the resolver.
"""


class ConfluenceError(Exception):
    """Base class for decision engine errors."""


class ConfigurationError(ConfluenceError, ValueError):
    """The policy is structurally invalid (raised before any evaluation)."""


class MissingDataError(ConfluenceError, ValueError):
    """A mandatory snapshot field (market identity, market price) is absent."""


class EvaluatorFault(ConfluenceError):
    """An evaluator cannot compute a verdict from the data it was given."""

    def __init__(self, evaluator: str, message: str):
        super().__init__(f"{evaluator}: {message}")
        self.evaluator = evaluator
        self.message = message
