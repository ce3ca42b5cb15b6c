"""Central configuration for the fixture builder."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from fixture_forge.utils.errors import ConfigError

SESSION_PERSISTENCE_MODES = ("flush", "commit")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ForgeConfig:
    """Configuration for fixture construction.

    Reads from environment variables with FORGE_ prefix, or accepts explicit
    values. Test suites usually call ``set_config()`` once from a conftest.
    """

    # What SQLAlchemyAdapter.save() does after session.add()
    session_persistence: str = "flush"

    # Reject attribute names the target model does not define
    strict_attributes: bool = True

    # Name under which unnamed blueprints are registered
    default_blueprint: str = "master"

    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.session_persistence not in SESSION_PERSISTENCE_MODES:
            raise ConfigError(
                f"session_persistence must be one of {SESSION_PERSISTENCE_MODES}, "
                f"got {self.session_persistence!r}"
            )

    @classmethod
    def from_env(cls) -> ForgeConfig:
        """Load configuration from environment variables."""
        return cls(
            session_persistence=os.getenv("FORGE_SESSION_PERSISTENCE", "flush").strip().lower(),
            strict_attributes=_env_flag("FORGE_STRICT_ATTRIBUTES", True),
            default_blueprint=os.getenv("FORGE_DEFAULT_BLUEPRINT", "master"),
            log_level=os.getenv("FORGE_LOG_LEVEL", "WARNING"),
        )


_config: Optional[ForgeConfig] = None


def get_config() -> ForgeConfig:
    """Get or create the singleton configuration."""
    global _config
    if _config is None:
        _config = ForgeConfig.from_env()
    return _config


def set_config(config: Optional[ForgeConfig]) -> None:
    """Override the global configuration. ``None`` reloads from the environment on next use."""
    global _config
    _config = config
