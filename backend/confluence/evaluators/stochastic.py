"""Slow stochastic %K/%D crossover evaluator.

- LONG: %K crosses above %D (k_prev <= d_prev, k > d) with both lines
  in the oversold band
- SHORT: %K crosses below %D with both lines in the overbought band
"""

from confluence.evaluators.protocol import require, verdict
from confluence.evaluators.registry import register_evaluator
from confluence.models import Direction, IndicatorSnapshot, SignalThresholds

NAME = "stochastic"


@register_evaluator(NAME, priority=30, flag="enable_stochastic_signals")
def evaluate_stochastic(snapshot: IndicatorSnapshot, thresholds: SignalThresholds):
    k, d, k_prev, d_prev = require(NAME, snapshot.stoch, "k", "d", "k_prev", "d_prev")
    levels = f"K={k:.1f}, D={d:.1f}"

    oversold = k <= thresholds.stoch_oversold and d <= thresholds.stoch_oversold
    overbought = k >= thresholds.stoch_overbought and d >= thresholds.stoch_overbought

    if oversold:
        if k_prev <= d_prev and k > d:
            return verdict(NAME, Direction.LONG, f"K crossed above D in oversold ({levels})")
        return verdict(NAME, Direction.NONE, f"Oversold without K>D cross ({levels})")

    if overbought:
        if k_prev >= d_prev and k < d:
            return verdict(
                NAME, Direction.SHORT, f"K crossed below D in overbought ({levels})"
            )
        return verdict(NAME, Direction.NONE, f"Overbought without K<D cross ({levels})")

    return verdict(NAME, Direction.NONE, f"Neutral ({levels})")
