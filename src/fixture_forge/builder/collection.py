"""Collection-scoped construction — building children through a parent's collection.

``CollectionBuilder(post, "comments").make()`` builds a Comment that is
linked to ``post`` through ``post.comments``. Linking goes through the
collection rather than a plain save, because link-table relationships
(many-to-many, has-many-through-secondary) are only populated that way.
The attribute pointing back at the parent is never generated, so no
extra parent objects get built.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fixture_forge.adapters import adapter_for
from fixture_forge.adapters.base import PersistenceAdapter
from fixture_forge.blueprint.registry import default_registry
from fixture_forge.builder.construction import split_args
from fixture_forge.builder.mode import is_unsaved
from fixture_forge.builder.resolver import resolve
from fixture_forge.utils.errors import NotACollectionError

logger = logging.getLogger(__name__)


class CollectionBuilder:
    """make / plan for the members of one parent's collection.

    Args:
        parent: Owner of the collection.
        attribute: Name of the collection relationship on ``parent``.
        target: Member class; required only when the adapter has no
            relationship metadata for the collection (plain objects).
        adapter: Defaults to the adapter registered for the parent's class.
    """

    def __init__(
        self,
        parent: Any,
        attribute: str,
        target: Optional[type] = None,
        adapter: Optional[PersistenceAdapter] = None,
    ):
        self.parent = parent
        self.attribute = attribute
        self.adapter = adapter or adapter_for(type(parent))

        relationship = self.adapter.describe(parent, attribute)
        if relationship is not None and relationship.is_collection:
            self.target = target or relationship.target
            self.reverse = relationship.reverse
        elif relationship is None and target is not None and isinstance(getattr(parent, attribute, None), list):
            self.target = target
            self.reverse = None
        else:
            raise NotACollectionError(
                f"{type(parent).__name__}.{attribute} is not a collection relationship"
            )

    def _skip(self) -> tuple[str, ...]:
        return (self.reverse,) if self.reverse else ()

    def make(self, *args: Any, **overrides: Any) -> Any:
        """Build a child linked to the parent; saved unless in unsaved mode."""
        name, block = split_args(args)
        child_adapter = adapter_for(self.target)
        chain = default_registry.chain(self.target, name)
        child = child_adapter.new_instance(self.target)

        if is_unsaved():
            self.adapter.scope_to_parent(self.parent, self.attribute, child)
            resolve(child_adapter, child, chain, overrides, skip=self._skip())
            child_adapter.apply_deferred(child)
            self.adapter.link_unsaved(self.parent, self.attribute, child)
        else:
            resolve(child_adapter, child, chain, overrides, skip=self._skip())
            self.adapter.create_in_collection(self.parent, self.attribute, child)

        if block is not None:
            block(child)
        return child

    def plan(self, *args: Any, **overrides: Any) -> dict[str, Any]:
        """Attributes for a child of this collection, without the parent reference."""
        name, _ = split_args(args)
        child_adapter = adapter_for(self.target)
        child = child_adapter.new_instance(self.target)
        self.adapter.scope_to_parent(self.parent, self.attribute, child)
        session = resolve(
            child_adapter,
            child,
            default_registry.chain(self.target, name),
            overrides,
            skip=self._skip(),
            track=False,
        )
        return child_adapter.attributes_without_associations(session)

    def __repr__(self) -> str:
        return f"CollectionBuilder({type(self.parent).__name__}.{self.attribute} -> {self.target.__name__})"
