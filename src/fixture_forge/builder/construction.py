"""Construction entry points: make, make_unsaved and plan.

Positional arguments are an optional blueprint name and an optional
trailing callable; keyword arguments are attribute overrides::

    post = make(Post)
    draft = make(Post, "draft", title="Untitled")
    post = make_unsaved(Post, lambda post: make(Comment, post=...))
    attributes = plan(Comment)          # {"post_id": 1, "body": "..."}
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, TypeVar

from fixture_forge.adapters import adapter_for
from fixture_forge.blueprint.registry import default_registry
from fixture_forge.builder.mode import is_unsaved, unsaved
from fixture_forge.builder.resolver import BuildSession, resolve

logger = logging.getLogger(__name__)

T = TypeVar("T")
Block = Callable[[Any], Any]


def split_args(args: tuple) -> tuple[Optional[str], Optional[Block]]:
    """Split entry-point positional arguments into (blueprint name, block)."""
    name: Optional[str] = None
    block: Optional[Block] = None
    for arg in args:
        if arg is None:
            continue
        if isinstance(arg, str) and name is None and block is None:
            name = arg
        elif callable(arg) and block is None:
            block = arg
        else:
            raise TypeError(
                f"expected an optional blueprint name followed by an optional callable, got {arg!r}"
            )
    return name, block


def build_session(cls: type, name: Optional[str], overrides: dict, track: bool = True) -> BuildSession:
    """Resolve a fresh ``cls`` instance against its blueprint chain."""
    adapter = adapter_for(cls)
    chain = default_registry.chain(cls, name)
    return resolve(adapter, adapter.new_instance(cls), chain, overrides, track=track)


def make(cls: type[T], *args: Any, **overrides: Any) -> T:
    """Build, save and refresh an instance of ``cls``.

    Inside an ``unsaved()`` scope the instance (and every association built
    for it) is left unsaved. A trailing callable receives the finished object.
    """
    name, block = split_args(args)
    session = build_session(cls, name, overrides)
    obj = session.object

    if not is_unsaved():
        session.adapter.save(obj)
        session.adapter.refresh(obj)
    else:
        session.adapter.apply_deferred(obj)
        logger.debug(f"Unsaved mode, not saving {cls.__name__}")

    if block is not None:
        block(obj)
    return obj


def make_unsaved(cls: type[T], *args: Any, **overrides: Any) -> T:
    """Build an instance of ``cls`` without saving anything in its graph.

    The trailing callable runs after the unsaved scope has closed, so
    objects it makes are saved as usual.
    """
    name, block = split_args(args)
    with unsaved():
        obj = make(cls, name, **overrides)

    if block is not None:
        block(obj)
    return obj


def plan(cls: type, *args: Any, **overrides: Any) -> dict[str, Any]:
    """Return the attributes a blueprint would assign, shaped like form input.

    Associations are built (and saved) as usual; belongs-to associations
    come back as their foreign-key values. The instance itself is discarded.
    """
    name, _ = split_args(args)
    session = build_session(cls, name, overrides, track=False)
    return session.adapter.attributes_without_associations(session)
