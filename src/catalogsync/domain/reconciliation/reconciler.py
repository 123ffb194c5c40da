"""Create-or-update reconciliation for one kind of catalogued object.

Every kind runs the same algorithm:

1) resolve the external source the payload comes from
2) resolve the parent (schema types need a container, fields a schema type)
3) look the qualified name up
4) create it (tagging the owning source and linking the parent) or update
   display name and properties in place
5) cascade into child payloads with the parent bound to the id from step 4

Cascades are additive: children missing from a payload are left alone.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from catalogsync.domain.errors import CatalogError, ConflictError, ValidationError

from .lookup import EntityLookup
from .sources import ExternalSourceResolver
from .strategy import STRATEGIES

if TYPE_CHECKING:
    from collections.abc import Mapping
    from uuid import UUID

    from catalogsync.domain.model import ObjectKind
    from catalogsync.domain.payloads import ObjectPayload
    from catalogsync.domain.ports.persistence import CatalogRepository

    from .strategy import KindStrategy

log = logging.getLogger(__name__)


class KindReconciler:
    """Upsert payloads of a single kind into the catalog."""

    def __init__(
        self,
        strategy: KindStrategy,
        repository: CatalogRepository,
        *,
        resolver: ExternalSourceResolver | None = None,
        lookup: EntityLookup | None = None,
        child: KindReconciler | None = None,
    ) -> None:
        if strategy.child_kind is not None and (child is None or child.kind != strategy.child_kind):
            raise ValueError(f"{strategy.kind} reconciler needs a {strategy.child_kind} child")
        self.strategy = strategy
        self.repository = repository
        self.resolver = resolver or ExternalSourceResolver(repository)
        self.lookup = lookup or EntityLookup(repository)
        self.child = child

    @property
    def kind(self) -> ObjectKind:
        return self.strategy.kind

    def reconcile(
        self,
        user: str,
        payload: ObjectPayload,
        source_qualified_name: str,
        *,
        operation: str,
        parent_id: UUID | None = None,
    ) -> UUID:
        """Upsert ``payload`` on behalf of the named source and return its id."""

        try:
            source_id = self.resolver.resolve(user, source_qualified_name)
        except CatalogError as exc:
            exc.attach(qualified_name=payload.qualified_name, operation=operation)
            raise
        return self.reconcile_for_source(
            user,
            payload,
            source_id,
            operation=operation,
            parent_id=parent_id,
        )

    def reconcile_for_source(
        self,
        user: str,
        payload: ObjectPayload,
        source_id: UUID,
        *,
        operation: str,
        parent_id: UUID | None = None,
    ) -> UUID:
        """Upsert ``payload`` for an already resolved source.

        ``parent_id`` binds the parent directly (used by cascades); otherwise
        the payload's parent qualified name is looked up.
        """

        try:
            self._validate(payload)
            if self.strategy.requires_parent and parent_id is None:
                parent_id = self._resolve_parent(user, payload)

            existing_id = self.lookup.find_by_qualified_name(
                user, payload.qualified_name, self.kind
            )
            if existing_id is None:
                object_id = self._create(user, payload, source_id, parent_id)
            else:
                self._update(user, existing_id, payload)
                object_id = existing_id
        except CatalogError as exc:
            exc.attach(qualified_name=payload.qualified_name, operation=operation)
            raise

        self._cascade(user, payload, source_id, object_id, operation=operation)
        return object_id

    def _validate(self, payload: ObjectPayload) -> None:
        if payload.kind != self.kind:
            raise ValidationError(f"{self.kind} reconciler cannot accept a {payload.kind} payload")
        if not payload.qualified_name or not payload.qualified_name.strip():
            raise ValidationError("Qualified name must not be blank")
        if not payload.display_name or not payload.display_name.strip():
            raise ValidationError("Display name must not be blank")
        missing = self.strategy.missing_properties(payload)
        if missing:
            raise ValidationError(f"Missing required {self.kind} properties: {', '.join(missing)}")

    def _resolve_parent(self, user: str, payload: ObjectPayload) -> UUID:
        parent_kind = self.strategy.parent_kind
        if parent_kind is None:
            raise ValueError(f"A {self.kind} has no parent kind")
        parent_name = payload.parent_qualified_name
        if not parent_name or not parent_name.strip():
            raise ValidationError(f"A {self.kind} must name its owning {parent_kind}")
        return self.lookup.require(user, parent_name, parent_kind)

    def _create(
        self,
        user: str,
        payload: ObjectPayload,
        source_id: UUID,
        parent_id: UUID | None,
    ) -> UUID:
        try:
            object_id = self.repository.create(
                self.kind,
                payload.qualified_name,
                payload.display_name,
                payload.properties,
                source_id,
                parent_id=parent_id,
                user=user,
            )
        except ConflictError:
            # another writer created it between our lookup and create
            winner_id = self.lookup.find_by_qualified_name(user, payload.qualified_name, self.kind)
            if winner_id is None:
                raise
            log.warning(
                "Create of %s %r conflicted; updating existing %s instead",
                self.kind,
                payload.qualified_name,
                winner_id,
            )
            self._update(user, winner_id, payload)
            return winner_id

        if parent_id is not None and self.strategy.relationship_kind is not None:
            self.repository.create_relationship(
                self.strategy.relationship_kind, parent_id, object_id
            )
        log.debug("Created %s %r as %s", self.kind, payload.qualified_name, object_id)
        return object_id

    def _update(self, user: str, object_id: UUID, payload: ObjectPayload) -> None:
        self.repository.update(object_id, payload.display_name, payload.properties, user=user)
        log.debug("Updated %s %r (%s)", self.kind, payload.qualified_name, object_id)

    def _cascade(
        self,
        user: str,
        payload: ObjectPayload,
        source_id: UUID,
        object_id: UUID,
        *,
        operation: str,
    ) -> None:
        children = self.strategy.children(payload)
        if not children or self.child is None:
            return
        for child_payload in children:
            self.child.reconcile_for_source(
                user,
                child_payload,
                source_id,
                operation=operation,
                parent_id=object_id,
            )


def build_reconcilers(
    repository: CatalogRepository,
    *,
    resolver: ExternalSourceResolver | None = None,
    lookup: EntityLookup | None = None,
) -> Mapping[ObjectKind, KindReconciler]:
    """Wire one reconciler per kind, children before the parents that cascade into them."""

    shared_resolver = resolver or ExternalSourceResolver(repository)
    shared_lookup = lookup or EntityLookup(repository)
    reconcilers: dict[ObjectKind, KindReconciler] = {}
    pending = list(STRATEGIES.values())
    while pending:
        ready = [
            strategy
            for strategy in pending
            if strategy.child_kind is None or strategy.child_kind in reconcilers
        ]
        if not ready:
            raise ValueError("Kind strategies form a cascade cycle")
        for strategy in ready:
            reconcilers[strategy.kind] = KindReconciler(
                strategy,
                repository,
                resolver=shared_resolver,
                lookup=shared_lookup,
                child=reconcilers.get(strategy.child_kind) if strategy.child_kind else None,
            )
            pending.remove(strategy)
    return reconcilers
