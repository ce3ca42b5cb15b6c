"""SQLAlchemy adapter — relationship metadata and persistence for declarative models.

Relationship metadata comes from the mapper (``sqlalchemy.inspect``):

    MANYTOONE              -> belongs_to
    ONETOMANY, uselist=False -> has_one
    ONETOMANY              -> has_many
    MANYTOMANY             -> many_to_many

Foreign-key attribute names are read from the relationship's local/remote
column pairs, so composite keys and non-``id`` targets work.
"""

from __future__ import annotations

import logging
import weakref
from typing import Any, Optional, Union

from sqlalchemy import inspect
from sqlalchemy.orm import Mapper, RelationshipDirection, Session, scoped_session
from sqlalchemy.orm.attributes import set_committed_value
from sqlalchemy.orm.exc import UnmappedColumnError

from fixture_forge.adapters.base import PersistenceAdapter, Relationship, RelationshipKind
from fixture_forge.config import ForgeConfig, get_config
from fixture_forge.utils.errors import AdapterError

logger = logging.getLogger(__name__)

SessionLike = Union[Session, scoped_session]


class SQLAlchemyAdapter(PersistenceAdapter):
    """Persists built objects through a SQLAlchemy session.

    The session can be given up front or bound later, typically once per
    test::

        adapter = SQLAlchemyAdapter()
        Base.use_adapter(adapter)
        ...
        adapter.bind(session)
    """

    def __init__(
        self,
        session: Optional[SessionLike] = None,
        config: Optional[ForgeConfig] = None,
    ):
        self.session = session
        self._config = config
        # owner -> [(attribute, value)] held back until the owner is in the session
        self._deferred: weakref.WeakKeyDictionary = weakref.WeakKeyDictionary()

    @property
    def config(self) -> ForgeConfig:
        return self._config or get_config()

    def bind(self, session: Optional[SessionLike]) -> None:
        self.session = session

    # -- relationship metadata -------------------------------------------

    @staticmethod
    def _mapper(instance_or_cls: Any) -> Optional[Mapper]:
        cls = instance_or_cls if isinstance(instance_or_cls, type) else type(instance_or_cls)
        return inspect(cls, raiseerr=False)

    @staticmethod
    def _column_key(mapper: Mapper, column) -> str:
        try:
            return mapper.get_property_by_column(column).key
        except UnmappedColumnError:
            return column.key

    @staticmethod
    def _kind(prop) -> RelationshipKind:
        if prop.direction is RelationshipDirection.MANYTOONE:
            return RelationshipKind.BELONGS_TO
        if prop.direction is RelationshipDirection.MANYTOMANY:
            return RelationshipKind.MANY_TO_MANY
        if not prop.uselist:
            return RelationshipKind.HAS_ONE
        return RelationshipKind.HAS_MANY

    @staticmethod
    def _reverse(prop) -> Optional[str]:
        if prop.back_populates:
            return prop.back_populates
        # backref= generates the other side with back_populates pointing here
        for other in prop.mapper.relationships:
            if other.back_populates == prop.key and prop.parent.isa(other.mapper):
                return other.key
        return None

    def _property(self, instance: Any, attribute: str):
        mapper = self._mapper(instance)
        if mapper is None:
            return None
        return mapper.relationships.get(attribute)

    def describe(self, instance: Any, attribute: str) -> Optional[Relationship]:
        prop = self._property(instance, attribute)
        if prop is None:
            return None

        kind = self._kind(prop)
        foreign_keys: dict[str, str] = {}
        if kind == RelationshipKind.BELONGS_TO:
            for local, remote in prop.local_remote_pairs:
                foreign_keys[self._column_key(prop.parent, local)] = self._column_key(prop.mapper, remote)

        return Relationship(
            name=attribute,
            kind=kind,
            target=prop.mapper.class_,
            foreign_keys=foreign_keys,
            reverse=self._reverse(prop),
        )

    def has_attribute(self, instance: Any, attribute: str) -> bool:
        return hasattr(type(instance), attribute)

    # -- object model ----------------------------------------------------

    def new_instance(self, cls: type) -> Any:
        return cls()

    def assign(self, instance: Any, attribute: str, value: Any, track: bool = True) -> None:
        relationship = self.describe(instance, attribute)
        if relationship is None:
            setattr(instance, attribute, value)
        elif not track:
            set_committed_value(instance, attribute, value)
        elif (
            relationship.kind == RelationshipKind.BELONGS_TO
            and value is not None
            and self.is_persisted(value)
        ):
            # Write the key columns directly. A tracked assignment would queue a
            # backref append on the persistent parent, and any nested flush
            # before this object is added would warn and drop it.
            for fk_name, ref_name in relationship.foreign_keys.items():
                setattr(instance, fk_name, getattr(value, ref_name))
            set_committed_value(instance, attribute, value)
        elif relationship.kind != RelationshipKind.BELONGS_TO and self._holds_persisted(value):
            # The backref would put a pending change on persisted objects that
            # points at an owner outside the session; flushes before the owner
            # is added would warn and drop it.
            self._deferred.setdefault(instance, []).append((attribute, value))
        else:
            setattr(instance, attribute, value)

    def _holds_persisted(self, value: Any) -> bool:
        values = value if isinstance(value, (list, tuple, set)) else [value]
        return any(v is not None and self.is_persisted(v) for v in values)

    def apply_deferred(self, instance: Any) -> None:
        for attribute, value in self._deferred.pop(instance, []):
            setattr(instance, attribute, value)

    def _require_session(self) -> SessionLike:
        if self.session is None:
            raise AdapterError("SQLAlchemyAdapter has no session; call adapter.bind(session) first")
        return self.session

    def save(self, instance: Any) -> None:
        session = self._require_session()
        session.add(instance)
        self.apply_deferred(instance)
        if self.config.session_persistence == "commit":
            session.commit()
        else:
            session.flush()
        logger.debug(f"Saved {type(instance).__name__} id={self.identifier_of(instance)!r}")

    def refresh(self, instance: Any) -> None:
        self._require_session().refresh(instance)

    def is_persisted(self, instance: Any) -> bool:
        state = inspect(instance, raiseerr=False)
        return state is not None and state.has_identity

    def identifier_of(self, instance: Any) -> Any:
        mapper = self._mapper(instance)
        if mapper is None:
            return super().identifier_of(instance)
        key = mapper.primary_key_from_instance(instance)
        return key[0] if len(key) == 1 else tuple(key)

    # -- collections -----------------------------------------------------

    def create_in_collection(self, parent: Any, attribute: str, child: Any) -> Any:
        # Appending populates association/link tables, which a bare save cannot
        getattr(parent, attribute).append(child)
        self.save(child)
        self.refresh(child)
        logger.info(f"Linked {type(child).__name__} into {type(parent).__name__}.{attribute}")
        return child

    def scope_to_parent(self, parent: Any, attribute: str, child: Any) -> None:
        prop = self._property(parent, attribute)
        if prop is None:
            return

        reverse = self._reverse(prop)
        if reverse:
            reverse_prop = self._property(child, reverse)
            value = [parent] if reverse_prop is not None and reverse_prop.uselist else parent
            set_committed_value(child, reverse, value)

        if prop.direction is RelationshipDirection.ONETOMANY:
            child_mapper = self._mapper(child)
            for local, remote in prop.local_remote_pairs:
                setattr(
                    child,
                    self._column_key(child_mapper, remote),
                    getattr(parent, self._column_key(prop.parent, local)),
                )

    # -- plan output -----------------------------------------------------

    def foreign_key_values(self, instance: Any, relationship: Relationship, value: Any) -> dict[str, Any]:
        return {
            fk_name: None if value is None else getattr(value, ref_name)
            for fk_name, ref_name in relationship.foreign_keys.items()
        }
