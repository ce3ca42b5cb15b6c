"""Base types and abstract adapter for object-model persistence.

An adapter is the only place that knows how a given object-model
technology stores objects and describes relationships. The resolver and
the construction entry points talk to models exclusively through it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class RelationshipKind(str, Enum):
    """How a relationship attribute relates its owner to the target."""

    BELONGS_TO = "belongs_to"
    HAS_ONE = "has_one"
    HAS_MANY = "has_many"
    MANY_TO_MANY = "many_to_many"

    @property
    def is_collection(self) -> bool:
        return self in (RelationshipKind.HAS_MANY, RelationshipKind.MANY_TO_MANY)


@dataclass
class Relationship:
    """A relationship attribute as described by the object model."""

    name: str
    kind: RelationshipKind
    target: type
    # foreign-key attribute on the owner -> referenced attribute on the target
    foreign_keys: dict[str, str] = field(default_factory=dict)
    reverse: Optional[str] = None

    @property
    def is_collection(self) -> bool:
        return self.kind.is_collection


class PersistenceAdapter(ABC):
    """Abstract strategy for one object-model technology."""

    # -- relationship metadata -------------------------------------------

    @abstractmethod
    def describe(self, instance: Any, attribute: str) -> Optional[Relationship]:
        """Return relationship metadata for ``attribute``, or None if it is a plain attribute."""
        ...

    def is_relationship(self, instance: Any, attribute: str) -> bool:
        return self.describe(instance, attribute) is not None

    def relationship_kind(self, instance: Any, attribute: str) -> Optional[RelationshipKind]:
        relationship = self.describe(instance, attribute)
        return relationship.kind if relationship else None

    def target_type_of(self, instance: Any, attribute: str) -> Optional[type]:
        relationship = self.describe(instance, attribute)
        return relationship.target if relationship else None

    def foreign_key_name(self, instance: Any, attribute: str) -> Optional[str]:
        """Foreign-key attribute of a belongs-to relationship (the first, for composite keys)."""
        relationship = self.describe(instance, attribute)
        if relationship is None or not relationship.foreign_keys:
            return None
        return next(iter(relationship.foreign_keys))

    def reverse_attribute(self, parent: Any, attribute: str) -> Optional[str]:
        """Name of the attribute on the related type that points back at ``parent``."""
        relationship = self.describe(parent, attribute)
        return relationship.reverse if relationship else None

    @abstractmethod
    def has_attribute(self, instance: Any, attribute: str) -> bool:
        ...

    # -- object model ----------------------------------------------------

    @abstractmethod
    def new_instance(self, cls: type) -> Any:
        """Construct a new, empty instance of ``cls``."""
        ...

    def assign(self, instance: Any, attribute: str, value: Any, track: bool = True) -> None:
        """Set an attribute directly, bypassing any constructor-level guard."""
        setattr(instance, attribute, value)

    @abstractmethod
    def save(self, instance: Any) -> None:
        ...

    @abstractmethod
    def refresh(self, instance: Any) -> None:
        ...

    @abstractmethod
    def is_persisted(self, instance: Any) -> bool:
        ...

    def identifier_of(self, instance: Any) -> Any:
        return getattr(instance, "id", None)

    def apply_deferred(self, instance: Any) -> None:
        """Apply relationship assignments that ``assign`` held back until the instance is stored."""
        pass

    # -- collections -----------------------------------------------------

    @abstractmethod
    def create_in_collection(self, parent: Any, attribute: str, child: Any) -> Any:
        """Link a resolved child through ``parent.<attribute>`` and persist it."""
        ...

    @abstractmethod
    def scope_to_parent(self, parent: Any, attribute: str, child: Any) -> None:
        """Point a detached child at ``parent`` without persisting or linking it."""
        ...

    def link_unsaved(self, parent: Any, attribute: str, child: Any) -> None:
        """Link a child made in unsaved mode; object models without storage link it as usual."""
        pass

    # -- plan output -----------------------------------------------------

    def foreign_key_values(self, instance: Any, relationship: Relationship, value: Any) -> dict[str, Any]:
        """Map a belongs-to value to its foreign-key attribute(s)."""
        return {
            fk_name: None if value is None else self.identifier_of(value)
            for fk_name in relationship.foreign_keys
        }

    def attributes_without_associations(self, session) -> dict[str, Any]:
        """Flatten a resolved BuildSession into form/API-shaped input.

        Belongs-to associations become their foreign-key attributes holding
        the related object's identifier. Everything else, including
        collection relationships, passes through unchanged. For example,
        ``{"post": <Post id=1>, "body": "x"}`` becomes
        ``{"post_id": 1, "body": "x"}``.
        """
        attributes: dict[str, Any] = {}
        for name, value in session.assigned_attributes.items():
            relationship = self.describe(session.object, name)
            if relationship and relationship.kind == RelationshipKind.BELONGS_TO and relationship.foreign_keys:
                attributes.update(self.foreign_key_values(session.object, relationship, value))
            else:
                attributes[name] = value
        return attributes
