"""Transaction boundary around the catalog repository."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from catalogsync.domain.ports.persistence import CatalogRepository


@dataclass(slots=True)
class CatalogRepositories:
    catalog: CatalogRepository


@runtime_checkable
class CatalogUnitOfWork(Protocol):
    """One session against the catalog store.

    Nothing is visible to other units of work until ``commit``. ``commit`` may
    be called any number of times; leaving the ``with`` block on an exception
    rolls back whatever has not been committed yet.
    """

    @property
    def repositories(self) -> CatalogRepositories: ...

    def __enter__(self) -> CatalogUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
