"""Verdict, aggregation and decision models."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, computed_field
from pydantic.alias_generators import to_camel


class Direction(int, Enum):
    """Trade direction."""

    NONE = 0
    LONG = 1
    SHORT = -1

    @property
    def is_directional(self) -> bool:
        return self is not Direction.NONE

    @property
    def opposite(self) -> "Direction":
        return Direction(-self.value)


class DecisionModel(BaseModel):
    """Base for engine outputs: immutable, camelCase on the wire."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )


class IndicatorVerdict(DecisionModel):
    """Outcome of one evaluator."""

    evaluator_name: str
    direction: Direction = Direction.NONE
    reason: str = ""
    fault: bool = False  # True when the evaluator could not compute

    @property
    def is_directional(self) -> bool:
        return self.direction.is_directional


class ConfluenceResult(DecisionModel):
    """Agreement tally in confluence mode.

    ``count`` and ``indicators`` describe the leading direction (empty on
    a tie). ``total`` counts every enabled evaluator that was evaluated,
    ``directional_total`` only those that returned LONG or SHORT.
    """

    direction: Direction = Direction.NONE
    count: int = 0
    total: int = 0
    directional_total: int = 0
    indicators: tuple[str, ...] = ()
    long_count: int = 0
    short_count: int = 0
    min_required: int = 1


class FilterOutcome(DecisionModel):
    """Result of one filter gate check."""

    name: str
    passed: bool
    reason: str = ""


class SignalDecision(DecisionModel):
    """Final decision for one snapshot under one policy."""

    symbol: str
    direction: Direction = Direction.NONE
    signal_type: str = ""
    confluence_data: ConfluenceResult | None = None
    analysis_details: tuple[str, ...] = ()
    verdicts: tuple[IndicatorVerdict, ...] = ()
    vetoed_by: str | None = None

    max_negative_pnl_stop_pct: Decimal | None = None
    min_profit_percentage: Decimal | None = None

    @computed_field(alias="hasSignal")
    @property
    def has_signal(self) -> bool:
        return self.direction.is_directional

    @computed_field(alias="isLong")
    @property
    def is_long(self) -> bool:
        return self.direction is Direction.LONG

    @computed_field(alias="isShort")
    @property
    def is_short(self) -> bool:
        return self.direction is Direction.SHORT

    def to_payload(self) -> dict:
        """Serialize with camelCase keys for downstream collaborators."""
        return self.model_dump(mode="json", by_alias=True)


class AuditStatus(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    SKIP = "SKIP"


class AuditEntry(DecisionModel):
    """One layer of the audit trace."""

    layer: str
    status: AuditStatus
    evaluation: str


class AuditReport(DecisionModel):
    """Full validation trace for one snapshot, including the rejecting layer."""

    symbol: str
    approved: bool
    rejection_layer: str | None = None
    trace: tuple[AuditEntry, ...] = ()
    decision: SignalDecision | None = None
