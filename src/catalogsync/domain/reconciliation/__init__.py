"""Reconciliation core for merging data-engine reports into the catalog.

Flow for one ingestion batch:
1) resolve the reporting external source
2) for each payload, in the caller's order, look up its qualified name
3) create or update it, then cascade into its children
4) stop at the first failure without undoing earlier items

Removal is a separate, validated path (``RemovalValidator``).
"""

from __future__ import annotations

from .engine import ReconciliationEngine
from .lookup import EntityLookup
from .orchestrator import BatchOrchestrator, BatchResult
from .reconciler import KindReconciler, build_reconcilers
from .removal import RemovalValidator
from .sources import ExternalSourceResolver, register_source
from .strategy import (
    CONTAINER_STRATEGY,
    FIELD_STRATEGY,
    SCHEMA_TYPE_STRATEGY,
    STRATEGIES,
    KindStrategy,
)

__all__ = [
    "CONTAINER_STRATEGY",
    "FIELD_STRATEGY",
    "SCHEMA_TYPE_STRATEGY",
    "STRATEGIES",
    "BatchOrchestrator",
    "BatchResult",
    "EntityLookup",
    "ExternalSourceResolver",
    "KindReconciler",
    "KindStrategy",
    "ReconciliationEngine",
    "RemovalValidator",
    "build_reconcilers",
    "register_source",
]
