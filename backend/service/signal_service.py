"""Signal service: binds loaded bot policies to the decision engine.

Holds no per-market state. Each snapshot is resolved independently, so
callers may fan snapshots out across threads or processes freely.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from confluence import (
    ConfluencePolicy,
    IndicatorSnapshot,
    SignalDecision,
    audit_signal,
    resolve_signal,
    trend_from_signals,
)
from confluence.models import AuditReport
from service.policy_config import PolicyConfig, load_policy_config

logger = logging.getLogger(__name__)


class SignalService:
    """Evaluate indicator snapshots under named bot policies."""

    def __init__(self, config: PolicyConfig | None = None):
        self.config = config or PolicyConfig()

    @classmethod
    def from_file(cls, path: Path) -> "SignalService":
        return cls(load_policy_config(path))

    def policy_for(self, bot: str) -> ConfluencePolicy:
        return self.config.get_policy(bot)

    def evaluate(self, bot: str, snapshot: IndicatorSnapshot | dict) -> SignalDecision:
        """Resolve one snapshot (model or raw camelCase dict) for a bot."""
        if isinstance(snapshot, dict):
            snapshot = IndicatorSnapshot.model_validate(snapshot)
        return resolve_signal(snapshot, self.policy_for(bot))

    def audit(self, bot: str, snapshot: IndicatorSnapshot | dict) -> AuditReport:
        if isinstance(snapshot, dict):
            snapshot = IndicatorSnapshot.model_validate(snapshot)
        return audit_signal(snapshot, self.policy_for(bot))

    def evaluate_many(
        self,
        bot: str,
        snapshots: Iterable[IndicatorSnapshot],
    ) -> list[SignalDecision]:
        """Resolve a batch of markets for one tick.

        When the bot uses the market trend filter and the batch contains
        the reference market, its trend is taken from its indicators (before
        its own filters) and fed to every other snapshot that lacks one.
        """
        policy = self.policy_for(bot)
        snapshots = list(snapshots)

        if policy.enable_market_trend_filter:
            reference = next(
                (s for s in snapshots if s.symbol == policy.reference_symbol), None
            )
            if reference is not None:
                trend = trend_from_signals(reference, policy)
                logger.info("%s trend for this tick: %s", policy.reference_symbol, trend)
                snapshots = [
                    s if s.reference_trend is not None or s is reference
                    else s.model_copy(update={"reference_trend": trend})
                    for s in snapshots
                ]

        decisions = [resolve_signal(s, policy) for s in snapshots]
        signals = sum(1 for d in decisions if d.has_signal)
        logger.info("Bot %s: %d/%d markets with signal", bot, signals, len(decisions))
        return decisions
