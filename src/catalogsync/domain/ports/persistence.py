"""Ports for the catalog repository the reconciliation engine sits on."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from uuid import UUID

    from catalogsync.domain.model import (
        CataloguedObject,
        DeleteSemantic,
        ObjectKind,
        Relationship,
        RelationshipKind,
    )


@runtime_checkable
class SourceRegistry(Protocol):
    """Lookup and registration of external sources."""

    def resolve_source(self, qualified_name: str) -> UUID:
        """Return the id registered for ``qualified_name`` or raise ``NotFoundError``."""
        ...

    def register_source(
        self,
        qualified_name: str,
        display_name: str | None,
        *,
        user: str,
    ) -> UUID: ...


@runtime_checkable
class CatalogRepository(SourceRegistry, Protocol):
    """Persistence contract for catalogued objects.

    Implementations must enforce uniqueness of ``(qualified_name, kind)`` among
    live objects and report a duplicate create as ``ConflictError``.
    """

    def find_by_qualified_name(self, qualified_name: str, kind: ObjectKind) -> UUID | None: ...

    def find_including_deleted(
        self, qualified_name: str, kind: ObjectKind
    ) -> Sequence[CataloguedObject]: ...

    def get(self, object_id: UUID, *, include_deleted: bool = False) -> CataloguedObject | None: ...

    def create(
        self,
        kind: ObjectKind,
        qualified_name: str,
        display_name: str,
        properties: Mapping[str, Any],
        owning_source_id: UUID,
        *,
        parent_id: UUID | None,
        user: str,
    ) -> UUID: ...

    def update(
        self,
        object_id: UUID,
        display_name: str,
        properties: Mapping[str, Any],
        *,
        user: str,
    ) -> None: ...

    def create_relationship(self, kind: RelationshipKind, from_id: UUID, to_id: UUID) -> None: ...

    def relationships_from(self, object_id: UUID) -> Sequence[Relationship]: ...

    def has_live_dependents(self, object_id: UUID) -> bool: ...

    def remove(self, object_id: UUID, semantic: DeleteSemantic, *, user: str) -> None: ...
