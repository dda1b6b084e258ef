from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from kontentsync.adapters.memory import InMemoryNodeStore
from kontentsync.adapters.sqlalchemy import create_all_tables
from kontentsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyNodeUnitOfWork,
    shutdown,
    startup,
)
from kontentsync.config import KontentConfig
from tests.support.kontent import PROJECT_ID

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

LANGUAGES = ("default", "cz")


@pytest.fixture
def kontent_config() -> KontentConfig:
    return KontentConfig(project_id=PROJECT_ID, language_codenames=LANGUAGES)


@pytest.fixture
def memory_store() -> InMemoryNodeStore:
    return InMemoryNodeStore()


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyNodeUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyNodeUnitOfWork:
        return SqlAlchemyNodeUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()
