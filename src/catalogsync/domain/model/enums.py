"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ObjectKind(StrEnum):
    """Discriminator for catalogued objects."""

    CONTAINER = "container"
    SCHEMA_TYPE = "schema_type"
    FIELD = "field"


class RelationshipKind(StrEnum):
    CONTAINS = "contains"
    HAS_FIELD = "has_field"


class DeleteSemantic(StrEnum):
    SOFT = "soft"
    HARD = "hard"
