"""Audit mode: the same pipeline, reported layer by layer.

Where ``resolve_signal`` only answers LONG / SHORT / none, ``audit_signal``
records every validation layer with PASS / FAIL / SKIP and names the layer
that rejected the snapshot. Layers after a rejection are reported as SKIP.
"""

from __future__ import annotations

import logging

from confluence.errors import MissingDataError
from confluence.filters import FILTER_GATE
from confluence.models import (
    AuditEntry,
    AuditReport,
    AuditStatus,
    ConfluencePolicy,
    IndicatorSnapshot,
)
from confluence.resolver import check_policy, check_snapshot, resolve

logger = logging.getLogger(__name__)

DATA_LAYER = "Snapshot validation"
SIGNAL_LAYER = "Signal analysis"

FILTER_LAYERS = {
    "check_vwap": "VWAP filter",
    "check_money_flow": "Money flow filter",
    "check_heikin_ashi": "Heikin Ashi filter",
    "check_market_trend": "Market trend filter",
}


def _filter_layers(policy: ConfluencePolicy) -> list[tuple[str, str, bool]]:
    """(filter name, layer label, enabled) in gate order."""
    return [
        (check.__name__.removeprefix("check_"), FILTER_LAYERS[check.__name__],
         policy.is_enabled(flag))
        for flag, check in FILTER_GATE
    ]


def audit_signal(snapshot: IndicatorSnapshot, policy: ConfluencePolicy) -> AuditReport:
    """Run the pipeline and return the full validation trace.

    Raises:
        ConfigurationError: If the policy is structurally invalid.
    """
    check_policy(policy)
    trace: list[AuditEntry] = []
    layers = _filter_layers(policy)

    try:
        check_snapshot(snapshot)
    except MissingDataError as e:
        trace.append(AuditEntry(layer=DATA_LAYER, status=AuditStatus.FAIL, evaluation=str(e)))
        trace.append(AuditEntry(layer=SIGNAL_LAYER, status=AuditStatus.SKIP, evaluation="Not reached"))
        trace.extend(
            AuditEntry(layer=label, status=AuditStatus.SKIP, evaluation="Not reached")
            for _, label, _ in layers
        )
        logger.info("Audit %s: rejected at %s - %s", snapshot.symbol, DATA_LAYER, e)
        return AuditReport(
            symbol=snapshot.symbol,
            approved=False,
            rejection_layer=DATA_LAYER,
            trace=tuple(trace),
        )

    trace.append(AuditEntry(
        layer=DATA_LAYER,
        status=AuditStatus.PASS,
        evaluation=f"Market {snapshot.symbol} @ {snapshot.market_price}",
    ))

    resolution = resolve(snapshot, policy)
    aggregate = resolution.aggregate
    rejection_layer = None

    if aggregate.direction.is_directional:
        trace.append(AuditEntry(
            layer=SIGNAL_LAYER,
            status=AuditStatus.PASS,
            evaluation=f"{aggregate.direction.name} from {'+'.join(aggregate.sources)}",
        ))
    else:
        rejection_layer = SIGNAL_LAYER
        trace.append(AuditEntry(
            layer=SIGNAL_LAYER, status=AuditStatus.FAIL, evaluation=aggregate.note
        ))

    outcomes = {f.name: f for f in resolution.filters}
    for name, label, enabled in layers:
        outcome = outcomes.get(name)
        if outcome is not None:
            status = AuditStatus.PASS if outcome.passed else AuditStatus.FAIL
            trace.append(AuditEntry(layer=label, status=status, evaluation=outcome.reason))
            if not outcome.passed:
                rejection_layer = label
        elif not enabled:
            trace.append(AuditEntry(
                layer=label, status=AuditStatus.SKIP, evaluation="Disabled by policy"
            ))
        else:
            trace.append(AuditEntry(
                layer=label, status=AuditStatus.SKIP, evaluation="Not reached"
            ))

    decision = resolution.decision
    logger.info(
        "Audit %s: %s%s",
        decision.symbol,
        "approved" if decision.has_signal else "rejected",
        f" at {rejection_layer}" if rejection_layer else "",
    )
    return AuditReport(
        symbol=decision.symbol,
        approved=decision.has_signal,
        rejection_layer=rejection_layer,
        trace=tuple(trace),
        decision=decision,
    )
