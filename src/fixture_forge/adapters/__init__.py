"""Persistence adapters and the class -> adapter registry."""

from __future__ import annotations

import logging
from typing import Optional

from fixture_forge.adapters.alchemy import SQLAlchemyAdapter
from fixture_forge.adapters.base import PersistenceAdapter, Relationship, RelationshipKind
from fixture_forge.adapters.objects import ObjectAdapter

logger = logging.getLogger(__name__)

_adapters: dict[type, PersistenceAdapter] = {}
_default_adapter = ObjectAdapter()


def register_adapter(cls: type, adapter: PersistenceAdapter) -> None:
    """Use ``adapter`` for ``cls`` and its subclasses."""
    _adapters[cls] = adapter
    logger.debug(f"Registered {type(adapter).__name__} for {cls.__name__}")


def unregister_adapter(cls: type) -> None:
    _adapters.pop(cls, None)


def adapter_for(cls: type) -> PersistenceAdapter:
    """Return the adapter registered nearest in the MRO, or the plain-object adapter."""
    for klass in cls.__mro__:
        adapter: Optional[PersistenceAdapter] = _adapters.get(klass)
        if adapter is not None:
            return adapter
    return _default_adapter
