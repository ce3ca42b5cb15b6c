"""fixture_forge — blueprint-driven test fixture builder."""

from fixture_forge.adapters import (
    ObjectAdapter,
    PersistenceAdapter,
    Relationship,
    RelationshipKind,
    SQLAlchemyAdapter,
    adapter_for,
    register_adapter,
    unregister_adapter,
)
from fixture_forge.blueprint import (
    Association,
    Blueprint,
    Constant,
    Derived,
    Lazy,
    Sequence,
    define_blueprint,
    clear_blueprints,
    default_registry,
)
from fixture_forge.buildable import Buildable
from fixture_forge.builder import (
    BuildSession,
    CollectionBuilder,
    is_unsaved,
    make,
    make_unsaved,
    plan,
    resolve,
    unsaved,
)
from fixture_forge.config import ForgeConfig, get_config, set_config
from fixture_forge.utils.errors import (
    AdapterError,
    AssociationError,
    BlueprintNotFoundError,
    ConfigError,
    ForgeError,
    NotACollectionError,
    UnknownAttributeError,
)

__version__ = "0.1.0"
