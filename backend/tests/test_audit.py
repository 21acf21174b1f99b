"""Tests for audit mode."""

import pytest

from confluence import ConfigurationError, IndicatorSnapshot, audit_signal
from confluence.audit import DATA_LAYER, SIGNAL_LAYER
from confluence.models import AuditStatus
from conftest import confluence_policy, long_payload


def _statuses(report):
    return [(e.layer, e.status) for e in report.trace]


class TestAuditSignal:
    def test_approved_trace(self, long_snapshot):
        policy = confluence_policy(enable_vwap_filter=True, enable_money_flow_filter=True)
        report = audit_signal(long_snapshot, policy)

        assert report.approved
        assert report.rejection_layer is None
        assert report.symbol == "ETH_USDC_PERP"
        assert _statuses(report) == [
            (DATA_LAYER, AuditStatus.PASS),
            (SIGNAL_LAYER, AuditStatus.PASS),
            ("VWAP filter", AuditStatus.PASS),
            ("Money flow filter", AuditStatus.PASS),
            ("Heikin Ashi filter", AuditStatus.SKIP),
            ("Market trend filter", AuditStatus.SKIP),
        ]
        assert report.trace[1].evaluation == "LONG from momentum+rsi"
        assert report.trace[4].evaluation == "Disabled by policy"
        assert report.decision.is_long

    def test_rejected_at_signal_layer(self, lonely_long_snapshot):
        report = audit_signal(lonely_long_snapshot, confluence_policy(enable_vwap_filter=True))

        assert not report.approved
        assert report.rejection_layer == SIGNAL_LAYER
        assert report.trace[1].status is AuditStatus.FAIL
        assert report.trace[1].evaluation.startswith("Insufficient confluence")
        # Enabled filter never reached
        assert report.trace[2].status is AuditStatus.SKIP
        assert report.trace[2].evaluation == "Not reached"

    def test_rejected_by_filter(self):
        payload = long_payload()
        payload["vwap"] = {"vwap": 2005}
        policy = confluence_policy(enable_vwap_filter=True, enable_money_flow_filter=True)
        report = audit_signal(IndicatorSnapshot.model_validate(payload), policy)

        assert not report.approved
        assert report.rejection_layer == "VWAP filter"
        assert report.trace[2].status is AuditStatus.FAIL
        assert report.trace[3].evaluation == "Not reached"
        assert report.decision.vetoed_by == "vwap"

    def test_missing_price_fails_first_layer(self):
        payload = long_payload()
        del payload["marketPrice"]
        report = audit_signal(IndicatorSnapshot.model_validate(payload), confluence_policy())

        assert not report.approved
        assert report.rejection_layer == DATA_LAYER
        assert report.decision is None
        assert report.trace[0].status is AuditStatus.FAIL
        assert all(e.status is AuditStatus.SKIP for e in report.trace[1:])
        assert len(report.trace) == 6

    def test_configuration_error_still_raises(self, long_snapshot):
        with pytest.raises(ConfigurationError):
            audit_signal(long_snapshot, confluence_policy(min_confluences=0))

    def test_agrees_with_resolver(self, short_snapshot):
        from confluence import resolve_signal

        policy = confluence_policy(enable_vwap_filter=True)
        report = audit_signal(short_snapshot, policy)
        assert report.decision == resolve_signal(short_snapshot, policy)
        assert report.approved == report.decision.has_signal
