"""Configuration for fixture_forge."""

from fixture_forge.config.settings import (
    SESSION_PERSISTENCE_MODES,
    ForgeConfig,
    get_config,
    set_config,
)
