from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session

from catalogsync.adapters.sqlalchemy import create_catalog_engine, start_mappers, upgrade_head
from catalogsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    shutdown,
    startup,
)
from tests.helpers.catalog import (
    OTHER_SOURCE,
    SOURCE,
    InMemoryCatalogRepository,
    seeded_repository,
)

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def repository() -> InMemoryCatalogRepository:
    """In-memory catalog with both test sources registered."""

    return seeded_repository(SOURCE, OTHER_SOURCE)


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_catalog_engine("sqlite+pysqlite:///:memory:")
    start_mappers()
    upgrade_head(engine=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    with Session(sqlite_engine) as session:
        yield session


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyCatalogUnitOfWork]]:
    """Factory for units of work bound to the in-memory engine.

    In-memory SQLite keeps one connection per thread, so do not hold a
    ``sqlite_session`` open while using these.
    """

    startup(engine=sqlite_engine, force=True)
    yield SqlAlchemyCatalogUnitOfWork
    shutdown()
