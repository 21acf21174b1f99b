"""Logging configuration for entry points."""

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once, before the engine is used."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)

    # Reduce noise from third-party libraries
    logging.getLogger("asyncio").setLevel(logging.WARNING)
