"""Catalogued objects and the relationships that link them.

One dataclass covers every kind; ``kind`` is the tag. Per-kind behaviour
(parent kind, required properties, cascades) lives in
``catalogsync.domain.reconciliation.strategy``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from catalogsync.domain.model.entity import AuditedEntity, Entity

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from catalogsync.domain.model.enums import ObjectKind, RelationshipKind


@dataclass(eq=False, kw_only=True)
class CataloguedObject(AuditedEntity):
    """Canonical record for a container, schema type or field."""

    kind: ObjectKind
    qualified_name: str
    display_name: str
    properties: dict[str, Any] = field(default_factory=dict[str, Any])
    owning_source_id: UUID
    parent_id: UUID | None = None
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


@dataclass(eq=False, kw_only=True)
class Relationship(Entity):
    """Parent to child link, created together with the child."""

    kind: RelationshipKind
    from_id: UUID
    to_id: UUID
