"""Adapter for plain Python classes and dataclasses.

Plain objects have no storage and no relationship metadata: ``save`` and
``refresh`` do nothing, and associations need an explicit
``Association(target=...)``.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Optional

from fixture_forge.adapters.base import PersistenceAdapter, Relationship

logger = logging.getLogger(__name__)


class ObjectAdapter(PersistenceAdapter):
    """Builds in-memory objects; nothing is ever persisted."""

    def describe(self, instance: Any, attribute: str) -> Optional[Relationship]:
        return None

    def has_attribute(self, instance: Any, attribute: str) -> bool:
        cls = type(instance)
        if dataclasses.is_dataclass(cls):
            names = {f.name for f in dataclasses.fields(cls)}
            return attribute in names or hasattr(cls, attribute)
        slots = getattr(cls, "__slots__", None)
        if slots is not None and "__dict__" not in slots:
            return attribute in slots or hasattr(cls, attribute)
        return True

    def new_instance(self, cls: type) -> Any:
        if not dataclasses.is_dataclass(cls):
            return cls()

        # Required fields have no value yet, so skip __init__ and apply defaults
        instance = cls.__new__(cls)
        for f in dataclasses.fields(cls):
            if f.default is not dataclasses.MISSING:
                object.__setattr__(instance, f.name, f.default)
            elif f.default_factory is not dataclasses.MISSING:
                object.__setattr__(instance, f.name, f.default_factory())
        return instance

    def assign(self, instance: Any, attribute: str, value: Any, track: bool = True) -> None:
        # object.__setattr__ also gets past frozen dataclasses
        object.__setattr__(instance, attribute, value)

    def save(self, instance: Any) -> None:
        logger.debug(f"{type(instance).__name__} has no storage, skipping save")

    def refresh(self, instance: Any) -> None:
        pass

    def is_persisted(self, instance: Any) -> bool:
        return False

    def create_in_collection(self, parent: Any, attribute: str, child: Any) -> Any:
        getattr(parent, attribute).append(child)
        return child

    def scope_to_parent(self, parent: Any, attribute: str, child: Any) -> None:
        pass

    def link_unsaved(self, parent: Any, attribute: str, child: Any) -> None:
        # Nothing is ever saved here, so unsaved mode links like a normal build
        self.create_in_collection(parent, attribute, child)
