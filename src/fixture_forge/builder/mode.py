"""Build mode — scoped suppression of persistence.

Inside ``unsaved()`` every construction call skips saving, including the
association builds it triggers. The depth lives in a ContextVar, so scopes
nest, always unwind on exit (even when construction fails), and stay local
to the current thread or asyncio task.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

_unsaved_depth: ContextVar[int] = ContextVar("fixture_forge_unsaved_depth", default=0)


def is_unsaved() -> bool:
    """True while at least one ``unsaved()`` scope is active."""
    return _unsaved_depth.get() > 0


def unsaved_depth() -> int:
    return _unsaved_depth.get()


@contextmanager
def unsaved() -> Iterator[None]:
    token = _unsaved_depth.set(_unsaved_depth.get() + 1)
    try:
        yield
    finally:
        _unsaved_depth.reset(token)
