"""WaveTrend momentum evaluator.

Signal Logic:
- LONG: pre-computed cross is BULLISH, or the oscillator is bullish and
  turning UP while wt2 is still in the depressed (negative) half
- SHORT: mirror (BEARISH cross, or bearish and turning DOWN above zero)

The cross flag from the indicator collaborator is the trigger; raw
wt1/wt2 levels are only required by the secondary confirmation path.
"""

from confluence.errors import EvaluatorFault
from confluence.evaluators.protocol import require, verdict
from confluence.evaluators.registry import register_evaluator
from confluence.models import Direction, IndicatorSnapshot, MomentumPoint, SignalThresholds

NAME = "momentum"


def _levels(current: MomentumPoint) -> str:
    try:
        wt1, wt2 = require(NAME, current, "wt1", "wt2")
    except EvaluatorFault:
        return "levels n/a"
    return f"WT1={wt1:.3f}, WT2={wt2:.3f}"


@register_evaluator(NAME, priority=10, flag="enable_momentum_signals")
def evaluate_momentum(snapshot: IndicatorSnapshot, thresholds: SignalThresholds):
    momentum = snapshot.momentum
    if momentum is None or momentum.current is None:
        raise EvaluatorFault(NAME, "indicator data not available")

    current = momentum.current
    if current.cross == "BULLISH":
        return verdict(NAME, Direction.LONG, f"Bullish cross ({_levels(current)})")
    if current.cross == "BEARISH":
        return verdict(NAME, Direction.SHORT, f"Bearish cross ({_levels(current)})")

    turning_up = current.direction == "UP" and current.is_bullish is True
    turning_down = current.direction == "DOWN" and current.is_bearish is True
    if not (turning_up or turning_down):
        trend = current.direction or "FLAT"
        return verdict(NAME, Direction.NONE, f"No cross, direction {trend} ({_levels(current)})")

    wt1, wt2 = require(NAME, current, "wt1", "wt2")
    levels = f"WT1={wt1:.3f}, WT2={wt2:.3f}"

    if turning_up and wt2 < 0:
        return verdict(
            NAME, Direction.LONG, f"Turning UP from depressed region ({levels})"
        )
    if turning_down and wt2 > 0:
        return verdict(
            NAME, Direction.SHORT, f"Turning DOWN from elevated region ({levels})"
        )
    return verdict(NAME, Direction.NONE, f"Turning {current.direction} mid-range ({levels})")
