"""Evaluator contract and shared helpers.

An evaluator is any callable ``(snapshot, thresholds) -> IndicatorVerdict``.
It reads only its own sub-record of the snapshot and raises
``EvaluatorFault`` when that data is missing or unusable.
"""

from __future__ import annotations

import math
from typing import Callable

from confluence.errors import EvaluatorFault
from confluence.models.decision import Direction, IndicatorVerdict
from confluence.models.policy import SignalThresholds
from confluence.models.snapshot import IndicatorSnapshot

EvaluatorFn = Callable[[IndicatorSnapshot, SignalThresholds], IndicatorVerdict]


def require(evaluator: str, record, *fields: str) -> tuple[float, ...]:
    """Return the named numeric fields of ``record`` as floats.

    Raises:
        EvaluatorFault: If the record or any field is missing, not numeric
            or not finite.
    """
    if record is None:
        raise EvaluatorFault(evaluator, "indicator data not available")

    values = []
    for field in fields:
        value = getattr(record, field, None)
        if value is None:
            raise EvaluatorFault(evaluator, f"missing '{field}'")
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise EvaluatorFault(evaluator, f"'{field}' is not numeric ({value!r})") from None
        if not math.isfinite(value):
            raise EvaluatorFault(evaluator, f"'{field}' is not finite ({value})")
        values.append(value)
    return tuple(values)


def verdict(name: str, direction: Direction, reason: str) -> IndicatorVerdict:
    return IndicatorVerdict(evaluator_name=name, direction=direction, reason=reason)
