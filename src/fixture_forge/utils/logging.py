"""Logging setup for test runs that want to see what the builder does."""

import logging
from typing import Optional

from fixture_forge.config import get_config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """Configure the root logger and the fixture_forge logger.

    Falls back to ``ForgeConfig.log_level`` when no level is given.
    """
    level_name = (level or get_config().log_level).upper()
    numeric = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logging.getLogger("fixture_forge").setLevel(numeric)
