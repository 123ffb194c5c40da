"""Public domain model surface."""

from __future__ import annotations

from catalogsync.domain.model.catalog import CataloguedObject, Relationship
from catalogsync.domain.model.entity import AuditedEntity, Entity
from catalogsync.domain.model.enums import DeleteSemantic, ObjectKind, RelationshipKind
from catalogsync.domain.model.source import ExternalSource

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    "AuditedEntity",
    # catalog
    "CataloguedObject",
    "Relationship",
    "ExternalSource",
    # enums
    "DeleteSemantic",
    "ObjectKind",
    "RelationshipKind",
]
