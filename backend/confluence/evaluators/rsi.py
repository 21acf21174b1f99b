"""RSI average-crossover evaluator.

The trigger is RSI crossing its own moving average:
- LONG: prev <= avg_prev and value > avg
- SHORT: prev >= avg_prev and value < avg

The oversold/overbought band never triggers on its own; when the value
sits inside a band the reason says so.
"""

from confluence.evaluators.protocol import require, verdict
from confluence.evaluators.registry import register_evaluator
from confluence.models import Direction, IndicatorSnapshot, SignalThresholds

NAME = "rsi"


def _band_note(value: float, thresholds: SignalThresholds) -> str:
    if value < thresholds.rsi_oversold:
        return f" in oversold region (<{thresholds.rsi_oversold:g})"
    if value > thresholds.rsi_overbought:
        return f" in overbought region (>{thresholds.rsi_overbought:g})"
    return ""


@register_evaluator(NAME, priority=20, flag="enable_rsi_signals")
def evaluate_rsi(snapshot: IndicatorSnapshot, thresholds: SignalThresholds):
    value, prev, avg, avg_prev = require(
        NAME, snapshot.rsi, "value", "prev", "avg", "avg_prev"
    )
    band = _band_note(value, thresholds)

    if prev <= avg_prev and value > avg:
        return verdict(
            NAME,
            Direction.LONG,
            f"RSI {value:.1f} crossed above average {avg:.1f}{band}",
        )
    if prev >= avg_prev and value < avg:
        return verdict(
            NAME,
            Direction.SHORT,
            f"RSI {value:.1f} crossed below average {avg:.1f}{band}",
        )
    return verdict(
        NAME,
        Direction.NONE,
        f"RSI {value:.1f} vs average {avg:.1f}, no cross{band}",
    )
