"""Filter gate: non-directional vetoes applied to a candidate direction.

Filters never pick or flip a direction; each one either keeps the
candidate or vetoes it. Disabled filters impose no constraint and are
not run. The gate stops at the first veto.

Order:
1. vwap        - price must sit on the candidate's side of VWAP
2. money_flow  - money-flow bias must match the candidate
3. heikin_ashi - a confirmed three-candle reversal must match the candidate
4. market_trend - reference market trend must allow the candidate
"""

from __future__ import annotations

import logging
import math
from decimal import Decimal, InvalidOperation
from typing import Callable

from confluence.models import (
    ConfluencePolicy,
    Direction,
    FilterOutcome,
    IndicatorSnapshot,
)

logger = logging.getLogger(__name__)

FilterFn = Callable[[IndicatorSnapshot, Direction, ConfluencePolicy], FilterOutcome]

REVERSAL_DIRECTIONS = {"BULLISH": Direction.LONG, "BEARISH": Direction.SHORT}


def _as_decimal(value) -> Decimal | None:
    """Finite Decimal from a raw reading, or None if it is not a price."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def _as_float(value) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def check_vwap(
    snapshot: IndicatorSnapshot, candidate: Direction, policy: ConfluencePolicy
) -> FilterOutcome:
    """Keep LONG above VWAP and SHORT below it."""
    raw = snapshot.vwap.vwap if snapshot.vwap is not None else None
    vwap = _as_decimal(raw)
    if vwap is None:
        reason = "VWAP not available" if raw is None else f"VWAP not usable ({raw!r})"
        return FilterOutcome(name="vwap", passed=False, reason=reason)

    price = snapshot.market_price
    if candidate is Direction.LONG:
        passed = price > vwap
        relation = ">" if passed else "<="
    else:
        passed = price < vwap
        relation = "<" if passed else ">="

    verb = "confirms" if passed else "rejects"
    return FilterOutcome(
        name="vwap",
        passed=passed,
        reason=f"VWAP {verb} {candidate.name}: price {price:.6f} {relation} VWAP {vwap:.6f}",
    )


def check_money_flow(
    snapshot: IndicatorSnapshot, candidate: Direction, policy: ConfluencePolicy
) -> FilterOutcome:
    """Require the money-flow bias to agree with the candidate."""
    money_flow = snapshot.money_flow
    if money_flow is None or not isinstance(money_flow.is_bullish, bool):
        return FilterOutcome(
            name="money_flow", passed=False, reason="Money flow not available"
        )

    bias = "bullish" if money_flow.is_bullish else "bearish"
    passed = money_flow.is_bullish == (candidate is Direction.LONG)
    verb = "confirms" if passed else "rejects"

    detail = f"bias {bias}"
    mfi, mfi_avg = _as_float(money_flow.mfi), _as_float(money_flow.mfi_avg)
    if mfi is not None:
        detail += f", MFI {mfi:.1f}"
        if mfi_avg is not None:
            detail += f" (avg {mfi_avg:.1f})"
    return FilterOutcome(
        name="money_flow",
        passed=passed,
        reason=f"Money flow {verb} {candidate.name}: {detail}",
    )


def check_heikin_ashi(
    snapshot: IndicatorSnapshot, candidate: Direction, policy: ConfluencePolicy
) -> FilterOutcome:
    """Require a confirmed Heikin Ashi reversal in the candidate's direction."""
    heikin_ashi = snapshot.heikin_ashi
    if heikin_ashi is None or heikin_ashi.trend_change is None:
        return FilterOutcome(
            name="heikin_ashi", passed=False, reason="Heikin Ashi not available"
        )

    pattern = heikin_ashi.candle_pattern
    change = heikin_ashi.trend_change
    if change.has_changed is not True:
        return FilterOutcome(
            name="heikin_ashi",
            passed=False,
            reason=f"No confirmed Heikin Ashi reversal: {pattern}",
        )

    change_type = change.change_type if isinstance(change.change_type, str) else None
    reversal = REVERSAL_DIRECTIONS.get(change_type)
    if reversal is None:
        return FilterOutcome(
            name="heikin_ashi",
            passed=False,
            reason=f"Unknown Heikin Ashi reversal type {change.change_type!r}: {pattern}",
        )
    if reversal is not candidate:
        return FilterOutcome(
            name="heikin_ashi",
            passed=False,
            reason=f"Heikin Ashi reversal {reversal.name} against {candidate.name}: {pattern}",
        )
    return FilterOutcome(
        name="heikin_ashi",
        passed=True,
        reason=f"Heikin Ashi {change.change_type} reversal confirmed: {pattern}",
    )


def check_market_trend(
    snapshot: IndicatorSnapshot, candidate: Direction, policy: ConfluencePolicy
) -> FilterOutcome:
    """Only trade other markets in line with the reference market's trend."""
    if snapshot.symbol == policy.reference_symbol:
        return FilterOutcome(
            name="market_trend", passed=True, reason="Reference market itself"
        )

    trend = snapshot.reference_trend or "NEUTRAL"
    if trend == "BULLISH":
        passed = candidate is Direction.LONG
    elif trend == "BEARISH":
        passed = candidate is Direction.SHORT
    else:
        passed = False

    verb = "allows" if passed else "blocks"
    return FilterOutcome(
        name="market_trend",
        passed=passed,
        reason=f"{policy.reference_symbol} trend {trend} {verb} {candidate.name}",
    )


# (policy flag, filter) in gate order
FILTER_GATE: tuple[tuple[str, FilterFn], ...] = (
    ("enable_vwap_filter", check_vwap),
    ("enable_money_flow_filter", check_money_flow),
    ("enable_heikin_ashi", check_heikin_ashi),
    ("enable_market_trend_filter", check_market_trend),
)


def apply_filters(
    snapshot: IndicatorSnapshot,
    candidate: Direction,
    policy: ConfluencePolicy,
) -> list[FilterOutcome]:
    """Run enabled filters on a directional candidate.

    Returns the outcomes in gate order; the last one is the veto if any
    filter failed.
    """
    if not candidate.is_directional:
        raise ValueError("Filters apply only to a LONG or SHORT candidate")

    outcomes: list[FilterOutcome] = []
    for flag, check in FILTER_GATE:
        if not policy.is_enabled(flag):
            continue
        outcome = check(snapshot, candidate, policy)
        outcomes.append(outcome)
        if not outcome.passed:
            logger.info("%s: %s vetoed by %s - %s",
                        snapshot.symbol, candidate.name, outcome.name, outcome.reason)
            break
        logger.debug("%s: %s passed %s", snapshot.symbol, candidate.name, outcome.name)
    return outcomes

