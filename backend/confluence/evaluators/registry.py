"""Evaluator registry: the ordered table of indicator evaluators.

Usage:
    @register_evaluator("rsi", priority=20, flag="enable_rsi_signals")
    def evaluate_rsi(snapshot, thresholds):
        ...

    evaluators = build_evaluators(policy)   # enabled ones, priority order
    names = list_evaluators()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from confluence.evaluators.protocol import EvaluatorFn
from confluence.models.policy import ConfluencePolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegisteredEvaluator:
    """A registered evaluator and the policy flag that toggles it.

    Attributes:
        name: Evaluator name used in verdicts and confluence indicators.
        priority: Lower runs first (traditional mode picks the first hit).
        flag: ``ConfluencePolicy`` attribute enabling this evaluator.
        evaluate: The pure evaluation function.
        corroborating: May only decide alone in traditional mode when it
            is the sole enabled evaluator.
    """

    name: str
    priority: int
    flag: str
    evaluate: EvaluatorFn
    corroborating: bool = False


# Global registry: evaluator_name -> registration
_REGISTRY: dict[str, RegisteredEvaluator] = {}


def register_evaluator(
    name: str,
    priority: int,
    flag: str,
    corroborating: bool = False,
):
    """Decorator to register an evaluator function under a given name.

    Raises:
        ValueError: If an evaluator with the same name is already registered,
            or ``flag`` is not a ``ConfluencePolicy`` field.
    """

    def decorator(fn: EvaluatorFn) -> EvaluatorFn:
        if name in _REGISTRY:
            raise ValueError(
                f"Evaluator '{name}' is already registered by "
                f"{_REGISTRY[name].evaluate.__name__}"
            )
        if flag not in ConfluencePolicy.model_fields:
            raise ValueError(f"Unknown policy flag '{flag}' for evaluator '{name}'")
        _REGISTRY[name] = RegisteredEvaluator(
            name=name,
            priority=priority,
            flag=flag,
            evaluate=fn,
            corroborating=corroborating,
        )
        logger.debug("Registered evaluator: %s -> %s", name, fn.__name__)
        return fn

    return decorator


def get_evaluator(name: str) -> RegisteredEvaluator:
    """Get a registered evaluator by name.

    Raises:
        KeyError: If no evaluator is registered under the given name.
    """
    registered = _REGISTRY.get(name)
    if registered is None:
        available = ", ".join(list_evaluators()) or "(none)"
        raise KeyError(f"Unknown evaluator '{name}'. Available: {available}")
    return registered


def list_evaluators() -> list[str]:
    """Return registered evaluator names in priority order."""
    return [r.name for r in sorted(_REGISTRY.values(), key=lambda r: r.priority)]


def build_evaluators(policy: ConfluencePolicy) -> list[RegisteredEvaluator]:
    """Return the evaluators enabled by ``policy``, in priority order."""
    return [
        r
        for r in sorted(_REGISTRY.values(), key=lambda r: r.priority)
        if policy.is_enabled(r.flag)
    ]
