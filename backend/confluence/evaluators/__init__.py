"""Indicator signal evaluators.

Public API:
- register_evaluator: Decorator to register an evaluator function
- build_evaluators: Enabled evaluators for a policy, in priority order
- list_evaluators: Registered evaluator names in priority order
- get_evaluator: Look up a registration by name

Importing this package auto-registers all built-in evaluators.
"""

from confluence.evaluators.protocol import EvaluatorFn
from confluence.evaluators.registry import (
    RegisteredEvaluator,
    build_evaluators,
    get_evaluator,
    list_evaluators,
    register_evaluator,
)

# Import built-in evaluators to trigger auto-registration
from confluence.evaluators.momentum import evaluate_momentum
from confluence.evaluators.rsi import evaluate_rsi
from confluence.evaluators.stochastic import evaluate_stochastic
from confluence.evaluators.macd import evaluate_macd
from confluence.evaluators.adx import evaluate_adx

__all__ = [
    "EvaluatorFn",
    "RegisteredEvaluator",
    "build_evaluators",
    "get_evaluator",
    "list_evaluators",
    "register_evaluator",
    "evaluate_momentum",
    "evaluate_rsi",
    "evaluate_stochastic",
    "evaluate_macd",
    "evaluate_adx",
]
