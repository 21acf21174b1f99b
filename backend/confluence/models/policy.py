"""Confluence policy: which evaluators and filters run, and how they agree."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DEFAULT_REFERENCE_SYMBOL = "BTC_USDC_PERP"


class SignalThresholds(BaseModel):
    """Band and strength levels used by the evaluators."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    rsi_oversold: float = 30.0
    rsi_overbought: float = 70.0
    stoch_oversold: float = 20.0
    stoch_overbought: float = 80.0
    adx_strength_floor: float = 25.0


class ConfluencePolicy(BaseModel):
    """Per-bot decision policy.

    Structural checks (``min_confluences >= 1``, at least one evaluator in
    confluence mode) are done by ``check_policy`` in the resolver so they
    surface as ``ConfigurationError`` right before evaluation.

    ``max_negative_pnl_stop_pct`` and ``min_profit_percentage`` are not
    read by the engine; they ride along into the decision for the
    risk-management collaborator.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    enable_confluence_mode: bool = False
    min_confluences: int = 2

    # Evaluators
    enable_momentum_signals: bool = True
    enable_rsi_signals: bool = True
    enable_stochastic_signals: bool = True
    enable_macd_signals: bool = True
    enable_adx_signals: bool = True

    # Filters
    enable_vwap_filter: bool = True
    enable_money_flow_filter: bool = False
    enable_heikin_ashi: bool = False
    enable_market_trend_filter: bool = False
    reference_symbol: str = DEFAULT_REFERENCE_SYMBOL

    thresholds: SignalThresholds = SignalThresholds()

    # Pass-through risk fields
    max_negative_pnl_stop_pct: Decimal | None = None
    min_profit_percentage: Decimal | None = None

    def is_enabled(self, flag: str) -> bool:
        """Read an ``enable_*`` flag by name."""
        return bool(getattr(self, flag))
