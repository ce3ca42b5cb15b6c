"""Attribute generators — the values a blueprint can declare.

Every blueprint entry is one of a small set of generator kinds. The
resolver evaluates them eagerly, in declaration order, once per build:

- Constant:    a literal value (containers are copied per build)
- Lazy:        a zero-argument producer
- Derived:     a producer that receives the in-progress object
- Sequence:    a producer that receives a per-generator serial number
- Association: another buildable type, constructed through ``make``
"""

from __future__ import annotations

import itertools
import logging
from enum import Enum
from typing import Any, Callable, Optional

from fixture_forge.utils.errors import AssociationError

logger = logging.getLogger(__name__)


class GeneratorKind(str, Enum):
    """Kinds of attribute generator."""

    CONSTANT = "constant"
    LAZY = "lazy"
    DERIVED = "derived"
    SEQUENCE = "sequence"
    ASSOCIATION = "association"


class Generator:
    """Base class for blueprint generators."""

    kind: GeneratorKind

    def generate(self, instance: Any, attribute: str, adapter) -> Any:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


class Constant(Generator):
    kind = GeneratorKind.CONSTANT

    def __init__(self, value: Any):
        self.value = value

    def generate(self, instance: Any, attribute: str, adapter) -> Any:
        # Fresh containers per build so two builds never share mutable state
        if isinstance(self.value, (list, dict, set)):
            return type(self.value)(self.value)
        return self.value

    def __repr__(self) -> str:
        return f"Constant({self.value!r})"


class Lazy(Generator):
    """Calls ``fn()`` at resolution time."""

    kind = GeneratorKind.LAZY

    def __init__(self, fn: Callable[[], Any]):
        self.fn = fn

    def generate(self, instance: Any, attribute: str, adapter) -> Any:
        return self.fn()


class Derived(Generator):
    """Calls ``fn(obj)`` with the object being built.

    Attributes declared earlier in the blueprint (and all overrides) are
    already assigned on ``obj`` when this runs.
    """

    kind = GeneratorKind.DERIVED

    def __init__(self, fn: Callable[[Any], Any]):
        self.fn = fn

    def generate(self, instance: Any, attribute: str, adapter) -> Any:
        return self.fn(instance)


class Sequence(Generator):
    """Calls ``fn(n)`` where n counts up from ``start`` on every use."""

    kind = GeneratorKind.SEQUENCE

    def __init__(self, fn: Callable[[int], Any], start: int = 1):
        self.fn = fn
        self.start = start
        self._counter = itertools.count(start)

    def reset(self) -> None:
        self._counter = itertools.count(self.start)

    def generate(self, instance: Any, attribute: str, adapter) -> Any:
        return self.fn(next(self._counter))


class Association(Generator):
    """Builds a related object (or a list of them) for a relationship attribute.

    Args:
        target: Class to build. If omitted, the adapter's relationship
            metadata for the attribute decides.
        blueprint: Named blueprint to build the related object with.
        count: Build a list of this many objects. Collection relationships
            default to a list of one.
        overrides: Attribute overrides passed to each related build.
    """

    kind = GeneratorKind.ASSOCIATION

    def __init__(
        self,
        target: Optional[type] = None,
        blueprint: Optional[str] = None,
        count: Optional[int] = None,
        **overrides: Any,
    ):
        self.target = target
        self.blueprint = blueprint
        self.count = count
        self.overrides = overrides

    def generate(self, instance: Any, attribute: str, adapter) -> Any:
        # Imported here: construction depends on the resolver, which depends on us
        from fixture_forge.builder.construction import make

        target = self.target or adapter.target_type_of(instance, attribute)
        if target is None:
            raise AssociationError(
                f"Cannot infer what to build for {type(instance).__name__}.{attribute}; "
                f"pass Association(target=...)"
            )

        args = (self.blueprint,) if self.blueprint else ()
        kind = adapter.relationship_kind(instance, attribute)
        if self.count is not None or (kind is not None and kind.is_collection):
            count = 1 if self.count is None else self.count
            logger.debug(f"Building {count} x {target.__name__} for {attribute}")
            return [make(target, *args, **self.overrides) for _ in range(count)]

        logger.debug(f"Building {target.__name__} for {attribute}")
        return make(target, *args, **self.overrides)

    def __repr__(self) -> str:
        name = self.target.__name__ if self.target else "?"
        return f"Association({name}, blueprint={self.blueprint!r})"


def as_generator(value: Any) -> Generator:
    """Wrap plain values as constants; pass generators through."""
    if isinstance(value, Generator):
        return value
    return Constant(value)
