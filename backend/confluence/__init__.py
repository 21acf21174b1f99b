"""Multi-indicator confluence decision engine.

This package contains pure decision logic with no I/O dependencies
(no database, network or file access). It turns an indicator snapshot
and a policy into a LONG / SHORT / no-signal decision with an
explanation trail.

Public API:
- resolve_signal: Decision for one snapshot under one policy
- audit_signal: Same pipeline, reported layer by layer
- trend_from_decision: Reference-market decision -> BULLISH/BEARISH/NEUTRAL
- trend_from_signals: Reference-market trend before the filter gate
"""

from confluence.audit import audit_signal
from confluence.errors import (
    ConfigurationError,
    ConfluenceError,
    EvaluatorFault,
    MissingDataError,
)
from confluence.models import (
    ConfluencePolicy,
    ConfluenceResult,
    Direction,
    IndicatorSnapshot,
    IndicatorVerdict,
    SignalDecision,
    SignalThresholds,
)
from confluence.resolver import (
    resolve_signal,
    trend_from_decision,
    trend_from_signals,
)

__all__ = [
    "audit_signal",
    "resolve_signal",
    "trend_from_decision",
    "trend_from_signals",
    "ConfigurationError",
    "ConfluenceError",
    "EvaluatorFault",
    "MissingDataError",
    "ConfluencePolicy",
    "ConfluenceResult",
    "Direction",
    "IndicatorSnapshot",
    "IndicatorVerdict",
    "SignalDecision",
    "SignalThresholds",
]
