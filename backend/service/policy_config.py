"""Bot policies loaded from policies.yaml.

Supports:
- Several named bots, each with its own ConfluencePolicy
- camelCase or snake_case keys (the dashboard stores camelCase)
- Backward compatible: no YAML file = one DEFAULT bot with default policy
"""

import logging
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, model_validator

from confluence.errors import ConfigurationError
from confluence.models import ConfluencePolicy

logger = logging.getLogger(__name__)

DEFAULT_BOT = "DEFAULT"


class BotPolicyEntry(BaseModel):
    """A single bot entry in the YAML config."""

    name: str
    enabled: bool = True
    policy: ConfluencePolicy = ConfluencePolicy()


class PolicyConfig(BaseModel):
    """Top-level policies.yaml configuration."""

    bots: list[BotPolicyEntry] = [BotPolicyEntry(name=DEFAULT_BOT)]

    @model_validator(mode="after")
    def _validate(self):
        names = [b.name for b in self.bots]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"duplicate bot names: {', '.join(duplicates)}")
        return self

    def get_policy(self, name: str) -> ConfluencePolicy:
        """Return the policy of an enabled bot.

        Raises:
            ConfigurationError: If no enabled bot has that name.
        """
        for bot in self.bots:
            if bot.name == name and bot.enabled:
                return bot.policy
        available = ", ".join(self.enabled_bots()) or "(none)"
        raise ConfigurationError(f"Unknown or disabled bot '{name}'. Available: {available}")

    def enabled_bots(self) -> list[str]:
        return [b.name for b in self.bots if b.enabled]


def load_policy_config(path: Path) -> PolicyConfig:
    """Load bot policies from a YAML file.

    Falls back to defaults (one DEFAULT bot) if the file doesn't exist.

    Raises:
        ConfigurationError: If the file is not valid YAML or fails validation.
    """
    # Load .env next to the policy file so Settings-style overrides are visible
    load_dotenv(path.parent / ".env", override=False)

    if not path.exists():
        logger.info("No policy file found at %s, using defaults", path)
        return PolicyConfig()

    try:
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        config = PolicyConfig(**raw)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"{path}: invalid YAML: {e}") from e
    except (ValidationError, TypeError) as e:
        raise ConfigurationError(f"{path}: invalid policy config: {e}") from e

    logger.info(
        "Loaded policy config: %d bots (%d enabled)",
        len(config.bots),
        len(config.enabled_bots()),
    )
    return config
