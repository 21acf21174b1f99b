"""Indicator snapshot models.

A snapshot is the finished output of the indicator collaborator for one
market at one instant. Field names are snake_case; the camelCase names
used on the wire (``isBullish``, ``avgPrev``, ``histogramPrev``...) are
accepted as aliases and emitted by ``model_dump(by_alias=True)``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Indicator readings are kept as received. The evaluator that reads one
# converts it and raises EvaluatorFault if it is not usable, so bad data in
# a disabled indicator never fails the snapshot.
Reading = Any


class SnapshotModel(BaseModel):
    """Base for snapshot records: immutable, camelCase aliases."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class MarketInfo(SnapshotModel):
    """Market identity and decimal precision."""

    symbol: str | None = None
    decimal_price: int = 2
    decimal_quantity: int = 3


class MomentumPoint(SnapshotModel):
    """One WaveTrend reading."""

    wt1: Reading = None
    wt2: Reading = None
    direction: Reading = None  # "UP" / "DOWN"
    cross: Reading = None  # "BULLISH" / "BEARISH"
    is_bullish: Reading = None
    is_bearish: Reading = None


class MomentumData(SnapshotModel):
    current: MomentumPoint | None = None
    previous: MomentumPoint | None = None


class RsiData(SnapshotModel):
    value: Reading = None
    prev: Reading = None
    avg: Reading = None
    avg_prev: Reading = None
    history: Reading = ()


class StochData(SnapshotModel):
    k: Reading = None
    d: Reading = None
    k_prev: Reading = None
    d_prev: Reading = None


class MacdData(SnapshotModel):
    macd: Reading = Field(
        default=None, validation_alias=AliasChoices("MACD", "macd"), alias="MACD"
    )
    signal: Reading = Field(
        default=None,
        validation_alias=AliasChoices("signal", "MACD_signal"),
    )
    histogram: Reading = Field(
        default=None,
        validation_alias=AliasChoices("histogram", "MACD_histogram"),
    )
    histogram_prev: Reading = None


class AdxData(SnapshotModel):
    adx: Reading = None
    di_plus: Reading = None
    di_minus: Reading = None
    adx_ema: Reading = None


class VwapData(SnapshotModel):
    vwap: Reading = None
    std_dev: Reading = None
    upper_bands: Reading = ()
    lower_bands: Reading = ()


class MoneyFlowData(SnapshotModel):
    mfi: Reading = None
    mfi_avg: Reading = None
    value: Reading = None
    is_bullish: Reading = None


class TrendChange(SnapshotModel):
    has_changed: Reading = False
    change_type: Reading = None  # "BULLISH" / "BEARISH"
    confirmed_trend: Reading = None  # "UP" / "DOWN" / "NEUTRAL"


class CandleDirection(SnapshotModel):
    direction: Reading = "NEUTRAL"


class HeikinAshiData(SnapshotModel):
    """Last three Heikin Ashi candles and the detected trend change."""

    trend_change: TrendChange | None = None
    current: CandleDirection | None = None
    previous: CandleDirection | None = None
    before_previous: CandleDirection | None = None

    @property
    def candle_pattern(self) -> str:
        """Render the three candles oldest-first, e.g. ``[DOWN] -> [UP] -> [UP]``."""
        candles = (self.before_previous, self.previous, self.current)
        return " -> ".join(
            f"[{c.direction if c else 'NEUTRAL'}]" for c in candles
        )


class IndicatorSnapshot(SnapshotModel):
    """Everything the engine knows about one market at one tick.

    ``market`` and ``market_price`` are mandatory for a decision but
    optional here, so that their absence surfaces as ``MissingDataError``
    from the resolver instead of a validation error at construction.
    """

    market: MarketInfo | None = None
    market_price: Decimal | None = None

    momentum: MomentumData | None = None
    rsi: RsiData | None = None
    stoch: StochData | None = None
    macd: MacdData | None = None
    adx: AdxData | None = None
    vwap: VwapData | None = None
    money_flow: MoneyFlowData | None = None
    heikin_ashi: HeikinAshiData | None = None

    # Trend of the reference market, supplied by the caller
    reference_trend: str | None = None

    @property
    def symbol(self) -> str:
        if self.market is None or not self.market.symbol:
            return "UNKNOWN"
        return self.market.symbol
