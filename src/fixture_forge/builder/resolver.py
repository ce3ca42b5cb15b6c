"""Attribute resolver — walks blueprints and assigns values onto a target.

One resolution pairs one fresh target instance with one evaluation of its
blueprint chain. Overrides are assigned first; then each blueprint entry is
evaluated in declaration order unless its attribute is already settled.
The resulting BuildSession records exactly the attributes that were
explicitly assigned, in assignment order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from fixture_forge.adapters.base import PersistenceAdapter
from fixture_forge.blueprint.registry import Blueprint
from fixture_forge.config import get_config
from fixture_forge.utils.errors import UnknownAttributeError

logger = logging.getLogger(__name__)


@dataclass
class BuildSession:
    """A target instance plus the attributes assigned to it during one build."""

    object: Any
    adapter: PersistenceAdapter
    assigned_attributes: dict[str, Any] = field(default_factory=dict)
    track: bool = True

    def assign(self, attribute: str, value: Any) -> None:
        self.adapter.assign(self.object, attribute, value, track=self.track)
        self.assigned_attributes[attribute] = value


def _is_populated(value: Any) -> bool:
    if value is None:
        return False
    try:
        return len(value) > 0
    except TypeError:
        return True


def _check_attribute(adapter: PersistenceAdapter, target: Any, attribute: str) -> None:
    if get_config().strict_attributes and not adapter.has_attribute(target, attribute):
        raise UnknownAttributeError(f"{type(target).__name__} has no attribute {attribute!r}")


def resolve(
    adapter: PersistenceAdapter,
    target: Any,
    blueprints: Iterable[Blueprint],
    overrides: Optional[Mapping[str, Any]] = None,
    skip: Iterable[str] = (),
    track: bool = True,
) -> BuildSession:
    """Populate ``target`` from its blueprint chain.

    Args:
        adapter: Adapter for the target's object model.
        target: Freshly constructed instance.
        blueprints: Blueprint chain, highest priority first.
        overrides: Literal values that win over any blueprint entry.
        skip: Attributes supplied by an enclosing scope (e.g. the parent
            of a collection build); never generated.
        track: False assigns relationships without model events, for
            instances that are thrown away after planning.

    Returns:
        The BuildSession for ``target``.
    """
    session = BuildSession(object=target, adapter=adapter, track=track)
    skip = set(skip)
    cls_name = type(target).__name__

    for attribute, value in (overrides or {}).items():
        _check_attribute(adapter, target, attribute)
        session.assign(attribute, value)
        logger.debug(f"{cls_name}.{attribute} overridden with {value!r}")

    for blueprint in blueprints:
        for attribute, generator in blueprint.items():
            if attribute in session.assigned_attributes or attribute in skip:
                continue
            if adapter.is_relationship(target, attribute) and _is_populated(getattr(target, attribute, None)):
                logger.debug(f"{cls_name}.{attribute} already set, not generating")
                continue

            _check_attribute(adapter, target, attribute)
            value = generator.generate(target, attribute, adapter)
            session.assign(attribute, value)
            logger.debug(f"{cls_name}.{attribute} = {value!r} ({generator.kind.value})")

    return session
