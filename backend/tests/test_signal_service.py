"""Tests for SignalService: bot lookup and per-tick batch evaluation."""

import logging

import pytest

from confluence import ConfigurationError, Direction, IndicatorSnapshot
from service import SignalService, configure_logging
from service.policy_config import BotPolicyEntry, PolicyConfig
from conftest import confluence_policy, long_payload, short_payload


def _service(**overrides) -> SignalService:
    return SignalService(PolicyConfig(bots=[
        BotPolicyEntry(name="TEST", policy=confluence_policy(**overrides)),
    ]))


def _reference_long() -> IndicatorSnapshot:
    payload = long_payload()
    payload["market"] = {"symbol": "BTC_USDC_PERP"}
    return IndicatorSnapshot.model_validate(payload)


class TestSignalService:
    def test_evaluate_raw_dict(self):
        decision = _service().evaluate("TEST", long_payload())
        assert decision.is_long
        assert decision.symbol == "ETH_USDC_PERP"

    def test_bad_data_in_disabled_indicator(self):
        payload = long_payload()
        payload["adx"] = {"adx": "n/a", "diPlus": 15, "diMinus": 18}
        decision = _service(enable_adx_signals=False).evaluate("TEST", payload)
        assert decision.is_long

    def test_bad_flag_in_enabled_indicator(self):
        payload = long_payload()
        payload["momentum"]["current"]["isBearish"] = None
        report = _service().audit("TEST", payload)
        assert report.approved

    def test_unknown_bot(self):
        with pytest.raises(ConfigurationError):
            _service().evaluate("OTHER", long_payload())

    def test_default_service(self, long_snapshot):
        decision = SignalService().evaluate("DEFAULT", long_snapshot)
        assert decision.confluence_data is None
        assert decision.is_long

    def test_audit(self):
        report = _service().audit("TEST", short_payload())
        assert report.approved
        assert report.decision.is_short

    def test_from_file(self, tmp_path):
        yaml_path = tmp_path / "policies.yaml"
        yaml_path.write_text("bots:\n  - name: X\n    policy:\n      enableConfluenceMode: true\n")
        service = SignalService.from_file(yaml_path)
        assert service.policy_for("X").enable_confluence_mode


class TestEvaluateMany:
    def test_one_decision_per_snapshot(self, long_snapshot, lonely_long_snapshot, short_snapshot):
        decisions = _service().evaluate_many(
            "TEST", [long_snapshot, lonely_long_snapshot, short_snapshot]
        )
        assert [d.direction for d in decisions] == [
            Direction.LONG, Direction.NONE, Direction.SHORT
        ]

    def test_reference_trend_gates_other_markets(self, long_snapshot, short_snapshot):
        service = _service(enable_market_trend_filter=True)
        decisions = service.evaluate_many(
            "TEST", [long_snapshot, short_snapshot, _reference_long()]
        )
        eth, sol, btc = decisions

        assert btc.is_long
        assert eth.is_long
        # BTC bullish blocks the SOL short
        assert not sol.has_signal
        assert sol.vetoed_by == "market_trend"

    def test_reference_filters_do_not_neutralize_trend(self, long_snapshot):
        payload = long_payload()
        payload["market"] = {"symbol": "BTC_USDC_PERP"}
        payload["vwap"] = {"vwap": 99999}
        btc = IndicatorSnapshot.model_validate(payload)
        service = _service(enable_vwap_filter=True, enable_market_trend_filter=True)

        eth, btc_decision = service.evaluate_many("TEST", [long_snapshot, btc])

        assert btc_decision.vetoed_by == "vwap"
        assert eth.is_long

    def test_without_reference_market_everything_blocked(self, long_snapshot):
        decisions = _service(enable_market_trend_filter=True).evaluate_many(
            "TEST", [long_snapshot]
        )
        assert decisions[0].vetoed_by == "market_trend"

    def test_caller_supplied_trend_kept(self, short_snapshot):
        bearish = short_snapshot.model_copy(update={"reference_trend": "BEARISH"})
        decisions = _service(enable_market_trend_filter=True).evaluate_many(
            "TEST", [bearish, _reference_long()]
        )
        assert decisions[0].is_short


class TestConfigureLogging:
    def test_sets_root_level(self):
        root = logging.getLogger()
        saved_level, saved_handlers = root.level, root.handlers[:]
        root.handlers = []
        try:
            configure_logging("debug")
            assert root.level == logging.DEBUG
            assert root.handlers
        finally:
            root.handlers = saved_handlers
            root.setLevel(saved_level)
