"""Composition root for the reconciliation subsystem.

The engine wires every component around one injected repository. It keeps no
state of its own beyond those references, so one engine per unit of work is
cheap and independent batches never share anything.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .lookup import EntityLookup
from .orchestrator import BatchOrchestrator
from .reconciler import build_reconcilers
from .removal import RemovalValidator
from .sources import ExternalSourceResolver

if TYPE_CHECKING:
    from collections.abc import Mapping

    from catalogsync.config.engine import EngineConfig
    from catalogsync.domain.model import ObjectKind
    from catalogsync.domain.ports.persistence import CatalogRepository

    from .reconciler import KindReconciler


@dataclass(slots=True)
class ReconciliationEngine:
    resolver: ExternalSourceResolver
    lookup: EntityLookup
    reconcilers: Mapping[ObjectKind, KindReconciler]
    orchestrator: BatchOrchestrator
    removal: RemovalValidator

    @classmethod
    def for_repository(
        cls,
        repository: CatalogRepository,
        *,
        config: EngineConfig | None = None,
    ) -> ReconciliationEngine:
        resolver = ExternalSourceResolver(repository)
        lookup = EntityLookup(repository)
        reconcilers = build_reconcilers(repository, resolver=resolver, lookup=lookup)
        return cls(
            resolver=resolver,
            lookup=lookup,
            reconcilers=reconcilers,
            orchestrator=BatchOrchestrator(reconcilers),
            removal=RemovalValidator(repository, resolver=resolver, config=config),
        )

    def reconciler_for(self, kind: ObjectKind) -> KindReconciler:
        return self.reconcilers[kind]
