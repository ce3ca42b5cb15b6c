"""Custom exception classes for fixture construction.

Database errors raised while saving are not wrapped; they reach the caller
as the persistence layer raised them.
"""


class ForgeError(Exception):
    """Base exception for all fixture_forge errors."""


class ConfigError(ForgeError):
    """Raised when configuration values are invalid."""


class BlueprintNotFoundError(ForgeError):
    """Raised when no blueprint (or no blueprint with the requested name) exists for a class."""


class AssociationError(ForgeError):
    """Raised when an association generator cannot determine what to build."""


class UnknownAttributeError(ForgeError):
    """Raised when a blueprint or override names an attribute the model does not define."""


class NotACollectionError(ForgeError):
    """Raised when collection-scoped construction targets a non-collection attribute."""


class AdapterError(ForgeError):
    """Raised when a persistence adapter cannot perform an operation."""
