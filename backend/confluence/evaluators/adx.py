"""ADX / directional index evaluator (trend-strength corroboration).

- LONG: DI+ > DI- and ADX above the strength floor
- SHORT: DI- > DI+ and ADX above the strength floor

The floor is the ADX EMA when the collaborator supplies one, otherwise
``thresholds.adx_strength_floor``. Registered as corroborating: in
traditional mode it only decides when it is the sole enabled evaluator.
"""

from confluence.evaluators.protocol import require, verdict
from confluence.evaluators.registry import register_evaluator
from confluence.models import Direction, IndicatorSnapshot, SignalThresholds

NAME = "adx"


@register_evaluator(NAME, priority=50, flag="enable_adx_signals", corroborating=True)
def evaluate_adx(snapshot: IndicatorSnapshot, thresholds: SignalThresholds):
    adx_value, di_plus, di_minus = require(
        NAME, snapshot.adx, "adx", "di_plus", "di_minus"
    )
    if snapshot.adx.adx_ema is not None:
        (floor,) = require(NAME, snapshot.adx, "adx_ema")
        floor_label = f"EMA({floor:.1f})"
    else:
        floor = thresholds.adx_strength_floor
        floor_label = f"{floor:g}"

    levels = f"DI+={di_plus:.1f}, DI-={di_minus:.1f}"

    if adx_value <= floor:
        return verdict(
            NAME, Direction.NONE, f"ADX {adx_value:.1f} <= {floor_label}, weak trend ({levels})"
        )
    if di_plus > di_minus:
        return verdict(NAME, Direction.LONG, f"ADX {adx_value:.1f} > {floor_label}, {levels}")
    if di_minus > di_plus:
        return verdict(NAME, Direction.SHORT, f"ADX {adx_value:.1f} > {floor_label}, {levels}")
    return verdict(NAME, Direction.NONE, f"ADX {adx_value:.1f} > {floor_label}, DI flat ({levels})")
