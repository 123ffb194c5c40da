from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from catalogsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from catalogsync.domain.model import ObjectKind
from catalogsync.domain.reconciliation import ReconciliationEngine
from tests.helpers.catalog import SOURCE, USER, make_container

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.engine import Engine


def test_unit_of_work_requires_startup() -> None:
    shutdown()

    with pytest.raises(StartupError):
        SqlAlchemyCatalogUnitOfWork()


def test_startup_refuses_to_reconfigure_without_force(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    try:
        assert is_started()
        assert configured_engine() is sqlite_engine
        with pytest.raises(StartupError):
            startup(engine=sqlite_engine)
    finally:
        shutdown()

    assert not is_started()


def test_commit_persists_across_units_of_work(
    sqlite_unit_of_work: Callable[[], SqlAlchemyCatalogUnitOfWork],
) -> None:
    with sqlite_unit_of_work() as uow:
        uow.repositories.catalog.register_source(SOURCE, None, user=USER)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.catalog.resolve_source(SOURCE) is not None


def test_error_inside_unit_of_work_rolls_back(
    sqlite_unit_of_work: Callable[[], SqlAlchemyCatalogUnitOfWork],
) -> None:
    with sqlite_unit_of_work() as uow:
        uow.repositories.catalog.register_source(SOURCE, None, user=USER)
        uow.commit()

    with pytest.raises(RuntimeError), sqlite_unit_of_work() as uow:
        engine = ReconciliationEngine.for_repository(uow.repositories.catalog)
        engine.reconciler_for(ObjectKind.CONTAINER).reconcile(
            USER, make_container(), SOURCE, operation="op"
        )
        raise RuntimeError("boom")

    with sqlite_unit_of_work() as uow:
        found = uow.repositories.catalog.find_by_qualified_name(
            "warehouse.sales", ObjectKind.CONTAINER
        )
        assert found is None


def test_repositories_unavailable_outside_context(
    sqlite_unit_of_work: Callable[[], SqlAlchemyCatalogUnitOfWork],
) -> None:
    uow = sqlite_unit_of_work()

    with pytest.raises(StartupError):
        _ = uow.repositories
