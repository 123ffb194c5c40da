"""Session lifecycle for the catalog store.

``startup()`` binds the adapter to one engine and migrates its schema to the
latest revision; every ``SqlAlchemyCatalogUnitOfWork`` then opens its own
session on that engine.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqlalchemy.orm import Session, sessionmaker

from catalogsync.adapters.sqlalchemy.engine import create_catalog_engine
from catalogsync.adapters.sqlalchemy.mappings import start_mappers
from catalogsync.adapters.sqlalchemy.migrations import upgrade_head
from catalogsync.adapters.sqlalchemy.repositories import SqlAlchemyCatalogRepository
from catalogsync.config.storage import get_database_uri
from catalogsync.domain.ports.unit_of_work import CatalogRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """The adapter was used before ``startup()``, or started twice."""


@dataclass(slots=True)
class _EngineBinding:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None

    def bind(self, engine: Engine | None) -> None:
        self.engine = engine
        self.sessions = (
            None if engine is None else sessionmaker(bind=engine, expire_on_commit=False)
        )

    def open_session(self) -> Session:
        if self.sessions is None:
            raise StartupError(
                "Catalog store is not started. Call "
                "catalogsync.adapters.sqlalchemy.startup() before opening a unit of work."
            )
        return self.sessions()


_BINDING = _EngineBinding()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the adapter to ``engine`` (or a new one for ``database_uri``)."""

    if _BINDING.engine is not None and not force:
        raise StartupError("Catalog store already started. Pass force=True to rebind it.")

    if engine is None:
        engine = create_catalog_engine(database_uri or get_database_uri())
    start_mappers()
    upgrade_head(engine=engine)
    _BINDING.bind(engine)
    log.info("Catalog store bound to %s", engine.url.render_as_string(hide_password=True))


def configured_engine() -> Engine | None:
    return _BINDING.engine


def is_started() -> bool:
    return _BINDING.engine is not None


def shutdown() -> None:
    """Dispose the bound engine, if any, and forget it."""

    if _BINDING.engine is not None:
        _BINDING.engine.dispose()
    _BINDING.bind(None)


class SqlAlchemyCatalogUnitOfWork:
    """Catalog unit of work over one SQLAlchemy session."""

    def __init__(self) -> None:
        if not is_started():
            raise StartupError("Catalog store is not started")
        self._session: Session | None = None
        self._repositories: CatalogRepositories | None = None

    def __enter__(self) -> SqlAlchemyCatalogUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work is already active")
        self._session = _BINDING.open_session()
        self._repositories = CatalogRepositories(
            catalog=SqlAlchemyCatalogRepository(self._session)
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
            self._session = None
            self._repositories = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work is not active; use it as a context manager")
        return self._session

    @property
    def repositories(self) -> CatalogRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work is not active; use it as a context manager")
        return self._repositories

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


if TYPE_CHECKING:
    from catalogsync.domain.ports.unit_of_work import CatalogUnitOfWork

    _uow_check: CatalogUnitOfWork = SqlAlchemyCatalogUnitOfWork()
