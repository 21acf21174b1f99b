"""Data models for the decision engine."""

from confluence.models.decision import (
    AuditEntry,
    AuditReport,
    AuditStatus,
    ConfluenceResult,
    Direction,
    FilterOutcome,
    IndicatorVerdict,
    SignalDecision,
)
from confluence.models.policy import (
    DEFAULT_REFERENCE_SYMBOL,
    ConfluencePolicy,
    SignalThresholds,
)
from confluence.models.snapshot import (
    AdxData,
    CandleDirection,
    HeikinAshiData,
    IndicatorSnapshot,
    MacdData,
    MarketInfo,
    MomentumData,
    MomentumPoint,
    MoneyFlowData,
    RsiData,
    StochData,
    TrendChange,
    VwapData,
)

__all__ = [
    "AuditEntry",
    "AuditReport",
    "AuditStatus",
    "ConfluenceResult",
    "Direction",
    "FilterOutcome",
    "IndicatorVerdict",
    "SignalDecision",
    "DEFAULT_REFERENCE_SYMBOL",
    "ConfluencePolicy",
    "SignalThresholds",
    "AdxData",
    "CandleDirection",
    "HeikinAshiData",
    "IndicatorSnapshot",
    "MacdData",
    "MarketInfo",
    "MomentumData",
    "MomentumPoint",
    "MoneyFlowData",
    "RsiData",
    "StochData",
    "TrendChange",
    "VwapData",
]
