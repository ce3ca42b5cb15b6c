"""Buildable mixin — attaches blueprint and construction methods to a class.

    class Base(DeclarativeBase, Buildable):
        pass

    Base.use_adapter(SQLAlchemyAdapter(session))
    Comment.blueprint(post=Association(), body="Nice post")
    comment = Comment.make()
    attributes = Comment.plan()
    reply = post.collection("comments").make()
"""

from __future__ import annotations

from typing import Any, Optional

from fixture_forge.adapters import register_adapter
from fixture_forge.adapters.base import PersistenceAdapter
from fixture_forge.blueprint.registry import Blueprint, default_registry
from fixture_forge.builder import construction
from fixture_forge.builder.collection import CollectionBuilder


class Buildable:
    """Mixin exposing make / make_unsaved / plan on a class."""

    @classmethod
    def blueprint(cls, name: Optional[str] = None, /, **attributes: Any) -> Blueprint:
        """Register a blueprint for this class (the default one unless named)."""
        return default_registry.register(cls, Blueprint(**attributes), name)

    @classmethod
    def clear_blueprints(cls) -> None:
        default_registry.clear(cls)

    @classmethod
    def use_adapter(cls, adapter: PersistenceAdapter) -> None:
        register_adapter(cls, adapter)

    @classmethod
    def make(cls, *args: Any, **overrides: Any) -> Any:
        return construction.make(cls, *args, **overrides)

    @classmethod
    def make_unsaved(cls, *args: Any, **overrides: Any) -> Any:
        return construction.make_unsaved(cls, *args, **overrides)

    @classmethod
    def plan(cls, *args: Any, **overrides: Any) -> dict[str, Any]:
        return construction.plan(cls, *args, **overrides)

    def collection(self, attribute: str, target: Optional[type] = None) -> CollectionBuilder:
        return CollectionBuilder(self, attribute, target=target)
