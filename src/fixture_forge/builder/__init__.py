"""Builder — resolution, build mode and construction entry points."""

from fixture_forge.builder.collection import CollectionBuilder
from fixture_forge.builder.construction import make, make_unsaved, plan, split_args
from fixture_forge.builder.mode import is_unsaved, unsaved, unsaved_depth
from fixture_forge.builder.resolver import BuildSession, resolve
