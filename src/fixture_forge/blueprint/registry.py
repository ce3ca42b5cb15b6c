"""Blueprint definitions and the per-class blueprint registry."""

from __future__ import annotations

import itertools
import logging
from typing import Any, Iterable, Iterator, Mapping, Optional, Union

from fixture_forge.blueprint.generators import Generator, as_generator
from fixture_forge.config import get_config
from fixture_forge.utils.errors import BlueprintNotFoundError

logger = logging.getLogger(__name__)

Entries = Union[Mapping[str, Any], Iterable[tuple[str, Any]]]


class Blueprint:
    """An ordered set of (attribute name, generator) pairs.

    Keyword order is declaration order, and declaration order is the order
    the resolver evaluates generators in::

        Blueprint(title="Hello", slug=Derived(lambda post: post.title.lower()))
    """

    def __init__(self, entries: Entries = (), /, **attributes: Any):
        self._entries: dict[str, Generator] = {}
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        for name, value in itertools.chain(pairs, attributes.items()):
            self._entries[name] = as_generator(value)

    def items(self) -> Iterator[tuple[str, Generator]]:
        return iter(list(self._entries.items()))

    def names(self) -> list[str]:
        return list(self._entries)

    def extend(self, entries: Entries = (), /, **attributes: Any) -> Blueprint:
        """Return a new blueprint with extra entries; replaced names keep their position."""
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        return Blueprint(
            itertools.chain(self._entries.items(), pairs), **attributes
        )

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Blueprint({', '.join(self._entries)})"


class BlueprintRegistry:
    """Maps (class, blueprint name) to a Blueprint.

    Blueprints of base classes apply to subclasses: ``chain()`` returns the
    requested named blueprint first, then the default blueprint of every
    class in the MRO. The resolver skips names already assigned, so earlier
    entries in the chain win.
    """

    def __init__(self) -> None:
        self._blueprints: dict[type, dict[str, Blueprint]] = {}

    def register(self, cls: type, blueprint: Blueprint, name: Optional[str] = None) -> Blueprint:
        name = name or get_config().default_blueprint
        self._blueprints.setdefault(cls, {})[name] = blueprint
        logger.debug(f"Registered blueprint {cls.__name__}:{name} {blueprint!r}")
        return blueprint

    def lookup(self, cls: type, name: Optional[str] = None) -> Optional[Blueprint]:
        """Return the blueprint registered on ``cls`` itself, ignoring base classes."""
        name = name or get_config().default_blueprint
        return self._blueprints.get(cls, {}).get(name)

    def chain(self, cls: type, name: Optional[str] = None) -> list[Blueprint]:
        default = get_config().default_blueprint
        chain: list[Blueprint] = []

        if name and name != default:
            named = None
            for klass in cls.__mro__:
                named = self.lookup(klass, name)
                if named is not None:
                    break
            if named is None:
                raise BlueprintNotFoundError(f"No blueprint named {name!r} for class {cls.__name__}")
            chain.append(named)

        for klass in cls.__mro__:
            blueprint = self.lookup(klass, default)
            if blueprint is not None:
                chain.append(blueprint)

        if not chain:
            raise BlueprintNotFoundError(f"No blueprint for class {cls.__name__}")
        return chain

    def clear(self, cls: Optional[type] = None) -> None:
        """Drop the blueprints of one class, or of every class."""
        if cls is None:
            self._blueprints.clear()
        else:
            self._blueprints.pop(cls, None)


default_registry = BlueprintRegistry()


def define_blueprint(cls: type, name: Optional[str] = None, /, **attributes: Any) -> Blueprint:
    """Register a blueprint for ``cls`` on the default registry."""
    return default_registry.register(cls, Blueprint(**attributes), name)


def clear_blueprints(cls: Optional[type] = None) -> None:
    default_registry.clear(cls)
