"""Confluence aggregator.

Two mutually exclusive modes:

- Traditional: the first directional verdict in priority order is the
  sole source. Corroborating evaluators (ADX) only count when they are
  the only evaluator enabled.
- Confluence: tally LONG and SHORT verdicts; the strict majority is the
  candidate, and it must reach ``min_confluences``. A tie yields nothing.

This is a pure calculation component, no side effects or state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from confluence.evaluators.registry import RegisteredEvaluator
from confluence.models import ConfluenceResult, Direction, IndicatorVerdict

logger = logging.getLogger(__name__)


@dataclass
class AggregateResult:
    """Candidate direction chosen by the aggregator.

    Attributes:
        direction: Candidate direction (NONE when there is no signal).
        sources: Names of the evaluators backing the candidate.
        confluence: Tally, present only in confluence mode.
        note: Why no candidate was produced, if so.
    """

    direction: Direction = Direction.NONE
    sources: list[str] = field(default_factory=list)
    confluence: ConfluenceResult | None = None
    note: str = ""


def aggregate_traditional(
    evaluators: list[RegisteredEvaluator],
    verdicts: list[IndicatorVerdict],
) -> AggregateResult:
    """Pick the first directional verdict in priority order."""
    sole_evaluator = len(evaluators) == 1

    for registered, verdict in zip(evaluators, verdicts):
        if not verdict.is_directional:
            continue
        if registered.corroborating and not sole_evaluator:
            logger.debug(
                "%s is corroborating only, ignored as sole source", registered.name
            )
            return AggregateResult(
                note=f"{registered.name} {verdict.direction.name} is corroborating only"
            )
        return AggregateResult(direction=verdict.direction, sources=[registered.name])

    return AggregateResult(note="No indicator signal")


def aggregate_confluence(
    verdicts: list[IndicatorVerdict],
    min_confluences: int,
) -> AggregateResult:
    """Tally directional verdicts and check the winning count."""
    long_names = [v.evaluator_name for v in verdicts if v.direction is Direction.LONG]
    short_names = [v.evaluator_name for v in verdicts if v.direction is Direction.SHORT]
    long_count, short_count = len(long_names), len(short_names)

    if long_count > short_count:
        leader, names = Direction.LONG, long_names
    elif short_count > long_count:
        leader, names = Direction.SHORT, short_names
    else:
        leader, names = Direction.NONE, []

    passed = leader.is_directional and len(names) >= min_confluences
    confluence = ConfluenceResult(
        direction=leader if passed else Direction.NONE,
        count=len(names),
        total=len(verdicts),
        directional_total=long_count + short_count,
        indicators=tuple(names),
        long_count=long_count,
        short_count=short_count,
        min_required=min_confluences,
    )

    logger.debug(
        "Confluence LONG=%d SHORT=%d min=%d -> %s",
        long_count, short_count, min_confluences,
        leader.name if passed else "NONE",
    )

    if passed:
        return AggregateResult(direction=leader, sources=names, confluence=confluence)

    if long_count and long_count == short_count:
        note = f"Confluence tie (LONG: {long_count}, SHORT: {short_count})"
    else:
        note = (
            f"Insufficient confluence (LONG: {long_count}, SHORT: {short_count}, "
            f"Min: {min_confluences})"
        )
    return AggregateResult(confluence=confluence, note=note)
