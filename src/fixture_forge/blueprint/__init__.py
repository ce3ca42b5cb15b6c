"""Blueprints — declarative attribute generators registered per class."""

from fixture_forge.blueprint.generators import (
    Association,
    Constant,
    Derived,
    Generator,
    GeneratorKind,
    Lazy,
    Sequence,
    as_generator,
)
from fixture_forge.blueprint.registry import (
    Blueprint,
    BlueprintRegistry,
    define_blueprint,
    clear_blueprints,
    default_registry,
)
