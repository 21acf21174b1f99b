"""MACD histogram turn evaluator.

- LONG: histogram turns from non-positive to positive and MACD > signal
- SHORT: histogram turns from non-negative to negative and MACD < signal

Without a signal line the histogram turn alone decides.
"""

from confluence.evaluators.protocol import require, verdict
from confluence.evaluators.registry import register_evaluator
from confluence.models import Direction, IndicatorSnapshot, SignalThresholds

NAME = "macd"


@register_evaluator(NAME, priority=40, flag="enable_macd_signals")
def evaluate_macd(snapshot: IndicatorSnapshot, thresholds: SignalThresholds):
    histogram, histogram_prev = require(
        NAME, snapshot.macd, "histogram", "histogram_prev"
    )
    levels = f"Hist={histogram:.3f}, HistPrev={histogram_prev:.3f}"

    line_confirms_long = line_confirms_short = True
    if snapshot.macd.signal is not None:
        macd_value, signal = require(NAME, snapshot.macd, "macd", "signal")
        line_confirms_long = macd_value > signal
        line_confirms_short = macd_value < signal
        levels += f", MACD={macd_value:.3f}, Signal={signal:.3f}"

    if histogram_prev <= 0 < histogram:
        if line_confirms_long:
            return verdict(NAME, Direction.LONG, f"Histogram turned positive ({levels})")
        return verdict(
            NAME, Direction.NONE, f"Histogram turned positive, MACD below signal ({levels})"
        )

    if histogram_prev >= 0 > histogram:
        if line_confirms_short:
            return verdict(NAME, Direction.SHORT, f"Histogram turned negative ({levels})")
        return verdict(
            NAME, Direction.NONE, f"Histogram turned negative, MACD above signal ({levels})"
        )

    return verdict(NAME, Direction.NONE, f"No histogram turn ({levels})")
