"""Shared utilities: errors and logging setup."""

from fixture_forge.utils.errors import (
    AdapterError,
    AssociationError,
    BlueprintNotFoundError,
    ConfigError,
    ForgeError,
    NotACollectionError,
    UnknownAttributeError,
)
