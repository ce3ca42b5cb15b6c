"""Shared fixtures: global builder state and a throwaway SQLite database."""

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import Session

from blog_models import Base, adapter
from fixture_forge import ForgeConfig, clear_blueprints, set_config


@pytest.fixture(autouse=True)
def forge_state():
    """Every test starts with default configuration and no blueprints."""
    set_config(ForgeConfig())
    clear_blueprints()
    yield
    clear_blueprints()
    set_config(None)


@pytest.fixture
def db_session():
    """A fresh in-memory database per test, bound to the models' adapter."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        adapter.bind(session)
        yield session
    adapter.bind(None)
    engine.dispose()


@pytest.fixture
def count(db_session):
    """Row count of a model's table."""

    def _count(model) -> int:
        return db_session.scalar(select(func.count()).select_from(model))

    return _count
