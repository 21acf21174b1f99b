"""Shared snapshot and policy fixtures.

The three scenario payloads mirror the confluence demo cases of the
trading bot: camelCase dicts exactly as the indicator service emits them.
"""

import pytest

from confluence.models import ConfluencePolicy, IndicatorSnapshot


def confluence_policy(**overrides) -> ConfluencePolicy:
    """Confluence mode, all evaluators on, filters off unless overridden."""
    values = dict(
        enable_confluence_mode=True,
        min_confluences=2,
        enable_vwap_filter=False,
        enable_money_flow_filter=False,
    )
    values.update(overrides)
    return ConfluencePolicy(**values)


def long_payload() -> dict:
    """Momentum bullish cross + RSI average upcross; others neutral."""
    return {
        "market": {"symbol": "ETH_USDC_PERP", "decimal_price": 6, "decimal_quantity": 4},
        "marketPrice": "2000.00",
        "momentum": {
            "current": {
                "wt1": -45, "wt2": -50, "direction": "UP", "cross": "BULLISH",
                "isBullish": True, "isBearish": False,
            },
            "previous": {"wt1": -55, "wt2": -60},
        },
        "rsi": {"value": 28, "prev": 25, "avg": 27, "avgPrev": 30,
                "history": [35, 30, 27, 25, 28]},
        "stoch": {"k": 45, "d": 50, "kPrev": 40, "dPrev": 45},
        "macd": {"MACD": 0.1, "MACD_signal": 0.05, "MACD_histogram": 0.05,
                 "histogramPrev": 0.04},
        "adx": {"adx": 20, "diPlus": 15, "diMinus": 18},
        "vwap": {"vwap": 1995.0},
        "moneyFlow": {"mfi": 55, "mfiAvg": 52, "value": 3, "isBullish": True},
    }


def lonely_long_payload() -> dict:
    """Only momentum gives a LONG verdict."""
    return {
        "market": {"symbol": "BTC_USDC_PERP", "decimal_price": 2, "decimal_quantity": 6},
        "marketPrice": "45000.00",
        "momentum": {
            "current": {
                "wt1": -30, "wt2": -35, "direction": "UP", "cross": "BULLISH",
                "isBullish": True, "isBearish": False,
            },
            "previous": {"wt1": -40, "wt2": -45},
        },
        "rsi": {"value": 50, "prev": 48, "avg": 50, "avgPrev": 49,
                "history": [48, 49, 50, 51, 50]},
        "stoch": {"k": 55, "d": 50, "kPrev": 50, "dPrev": 52},
        "macd": {"MACD": 0.02, "MACD_signal": 0.01, "MACD_histogram": 0.01,
                 "histogramPrev": 0.01},
        "adx": {"adx": 18, "diPlus": 12, "diMinus": 15},
        "vwap": {"vwap": 44900.0},
        "moneyFlow": {"mfi": 50, "mfiAvg": 50, "value": 0, "isBullish": False},
    }


def short_payload() -> dict:
    """Momentum bearish cross + RSI average downcross + stochastic K<D overbought."""
    return {
        "market": {"symbol": "SOL_USDC_PERP", "decimal_price": 4, "decimal_quantity": 2},
        "marketPrice": "95.50",
        "momentum": {
            "current": {
                "wt1": 60, "wt2": 55, "direction": "DOWN", "cross": "BEARISH",
                "isBullish": False, "isBearish": True,
            },
            "previous": {"wt1": 50, "wt2": 45},
        },
        "rsi": {"value": 72, "prev": 75, "avg": 74, "avgPrev": 70,
                "history": [65, 70, 74, 75, 72]},
        "stoch": {"k": 82, "d": 85, "kPrev": 88, "dPrev": 85},
        "macd": {"MACD": -0.05, "MACD_signal": -0.03, "MACD_histogram": -0.02,
                 "histogramPrev": -0.01},
        "adx": {"adx": 22, "diPlus": 18, "diMinus": 15},
        "vwap": {"vwap": 96.0},
        "moneyFlow": {"mfi": 45, "mfiAvg": 48, "value": -3, "isBullish": False},
    }


@pytest.fixture
def long_snapshot() -> IndicatorSnapshot:
    return IndicatorSnapshot.model_validate(long_payload())


@pytest.fixture
def lonely_long_snapshot() -> IndicatorSnapshot:
    return IndicatorSnapshot.model_validate(lonely_long_payload())


@pytest.fixture
def short_snapshot() -> IndicatorSnapshot:
    return IndicatorSnapshot.model_validate(short_payload())
