"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import CatalogRepository, SourceRegistry
from .unit_of_work import CatalogRepositories, CatalogUnitOfWork

__all__ = [
    "CatalogRepositories",
    "CatalogRepository",
    "CatalogUnitOfWork",
    "SourceRegistry",
]
