"""SQLAlchemy adapter package for catalogsync."""

from __future__ import annotations

from .engine import create_catalog_engine
from .mappings import mapper_registry, start_mappers
from .migrations import upgrade_head
from .repositories import SqlAlchemyCatalogRepository
from .unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyCatalogRepository",
    "SqlAlchemyCatalogUnitOfWork",
    "StartupError",
    "configured_engine",
    "create_catalog_engine",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
    "upgrade_head",
]
