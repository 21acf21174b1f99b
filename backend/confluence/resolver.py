"""Signal resolver: evaluators -> aggregator -> filter gate -> decision.

Each call is one stateless transformation of (snapshot, policy) into a
``SignalDecision``. Identical inputs produce equal decisions.

Errors:
- ConfigurationError / MissingDataError propagate to the caller, before
  any evaluator runs.
- Evaluator faults are absorbed into a NONE verdict and explained in
  ``analysis_details``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from confluence.aggregator import (
    AggregateResult,
    aggregate_confluence,
    aggregate_traditional,
)
from confluence.errors import ConfigurationError, EvaluatorFault, MissingDataError
from confluence.evaluators import RegisteredEvaluator, build_evaluators
from confluence.filters import apply_filters
from confluence.models import (
    ConfluencePolicy,
    Direction,
    FilterOutcome,
    IndicatorSnapshot,
    IndicatorVerdict,
    SignalDecision,
)

logger = logging.getLogger(__name__)

TREND_BY_DIRECTION = {
    Direction.LONG: "BULLISH",
    Direction.SHORT: "BEARISH",
    Direction.NONE: "NEUTRAL",
}


def check_policy(policy: ConfluencePolicy) -> list[RegisteredEvaluator]:
    """Validate a policy and return its enabled evaluators.

    Raises:
        ConfigurationError: ``min_confluences < 1``, or confluence mode
            with no evaluator enabled.
    """
    if policy.min_confluences < 1:
        raise ConfigurationError(
            f"min_confluences must be >= 1, got {policy.min_confluences}"
        )
    evaluators = build_evaluators(policy)
    if policy.enable_confluence_mode and not evaluators:
        raise ConfigurationError("Confluence mode requires at least one enabled evaluator")
    return evaluators


def check_snapshot(snapshot: IndicatorSnapshot) -> None:
    """Raise ``MissingDataError`` if market identity or price is absent."""
    if snapshot.market is None or not snapshot.market.symbol:
        raise MissingDataError("Snapshot has no market identity")
    if snapshot.market_price is None:
        raise MissingDataError(f"{snapshot.market.symbol}: snapshot has no market price")


def run_evaluator(
    registered: RegisteredEvaluator,
    snapshot: IndicatorSnapshot,
    policy: ConfluencePolicy,
) -> IndicatorVerdict:
    """Run one evaluator, downgrading a fault to a NONE verdict."""
    try:
        verdict = registered.evaluate(snapshot, policy.thresholds)
    except EvaluatorFault as e:
        reason = e.message
    except (TypeError, ValueError, ArithmeticError) as e:
        reason = f"computation error: {e}"
    else:
        logger.debug(
            "%s %s: %s - %s",
            snapshot.symbol, registered.name, verdict.direction.name, verdict.reason,
        )
        return verdict

    logger.warning("%s %s fault: %s", snapshot.symbol, registered.name, reason)
    return IndicatorVerdict(
        evaluator_name=registered.name,
        direction=Direction.NONE,
        reason=reason,
        fault=True,
    )


def describe_verdict(verdict: IndicatorVerdict) -> str:
    """One analysis line for a verdict."""
    if verdict.fault:
        return f"{verdict.evaluator_name}: fault - {verdict.reason}"
    if verdict.is_directional:
        return f"{verdict.evaluator_name}: {verdict.direction.name} - {verdict.reason}"
    return f"{verdict.evaluator_name}: no signal - {verdict.reason}"


def describe_filter(outcome: FilterOutcome) -> str:
    status = "pass" if outcome.passed else "veto"
    return f"filter {outcome.name}: {status} - {outcome.reason}"


@dataclass
class Resolution:
    """Intermediate products of one resolution, kept for auditing."""

    verdicts: list[IndicatorVerdict]
    aggregate: AggregateResult
    filters: list[FilterOutcome]
    decision: SignalDecision


def _signal_type(aggregate: AggregateResult, verdicts: list[IndicatorVerdict]) -> str:
    if aggregate.confluence is not None:
        c = aggregate.confluence
        return (
            f"Confluence {aggregate.direction.name} ({c.count}/{c.total}): "
            f"{'+'.join(aggregate.sources)}"
        )
    source = aggregate.sources[0]
    reason = next(v.reason for v in verdicts if v.evaluator_name == source)
    return f"{source}: {reason}"


def resolve(snapshot: IndicatorSnapshot, policy: ConfluencePolicy) -> Resolution:
    """Run the full pipeline and keep every intermediate result."""
    evaluators = check_policy(policy)
    check_snapshot(snapshot)

    verdicts = [run_evaluator(r, snapshot, policy) for r in evaluators]
    details = [describe_verdict(v) for v in verdicts]

    if policy.enable_confluence_mode:
        aggregate = aggregate_confluence(verdicts, policy.min_confluences)
    else:
        aggregate = aggregate_traditional(evaluators, verdicts)

    filters: list[FilterOutcome] = []
    direction = Direction.NONE
    vetoed_by = None

    if aggregate.direction.is_directional:
        signal_type = _signal_type(aggregate, verdicts)
        filters = apply_filters(snapshot, aggregate.direction, policy)
        veto = next((f for f in filters if not f.passed), None)
        if veto is None:
            direction = aggregate.direction
        else:
            vetoed_by = veto.name
            details.extend(describe_filter(f) for f in filters)
            signal_type = f"Rejected by {veto.name}: {signal_type}"
    else:
        signal_type = aggregate.note

    decision = SignalDecision(
        symbol=snapshot.symbol,
        direction=direction,
        signal_type=signal_type,
        confluence_data=aggregate.confluence,
        analysis_details=tuple(details),
        verdicts=tuple(verdicts),
        vetoed_by=vetoed_by,
        max_negative_pnl_stop_pct=policy.max_negative_pnl_stop_pct,
        min_profit_percentage=policy.min_profit_percentage,
    )

    if decision.has_signal:
        logger.info(
            "%s: %s signal @ %s - %s",
            decision.symbol, direction.name, snapshot.market_price, signal_type,
        )
    else:
        logger.debug("%s: no signal - %s", decision.symbol, signal_type)

    return Resolution(
        verdicts=verdicts, aggregate=aggregate, filters=filters, decision=decision
    )


def resolve_signal(
    snapshot: IndicatorSnapshot, policy: ConfluencePolicy
) -> SignalDecision:
    """Produce the trading decision for one snapshot under one policy.

    Raises:
        ConfigurationError: If the policy is structurally invalid.
        MissingDataError: If market identity or market price is absent.
    """
    return resolve(snapshot, policy).decision


def trend_from_decision(decision: SignalDecision) -> str:
    """Map a reference-market decision to BULLISH / BEARISH / NEUTRAL."""
    return TREND_BY_DIRECTION[decision.direction]


def trend_from_signals(snapshot: IndicatorSnapshot, policy: ConfluencePolicy) -> str:
    """Trend of a reference market from its evaluators and aggregation.

    Filters are not applied: a reference market whose own VWAP or money
    flow vetoes its entry still reports the direction its indicators agree on.
    """
    return TREND_BY_DIRECTION[resolve(snapshot, policy).aggregate.direction]
