"""Application layer around the decision engine (configuration, logging)."""

from service.config import Settings, get_settings
from service.logging_setup import configure_logging
from service.policy_config import (
    BotPolicyEntry,
    PolicyConfig,
    load_policy_config,
)
from service.signal_service import SignalService

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "BotPolicyEntry",
    "PolicyConfig",
    "load_policy_config",
    "SignalService",
]
