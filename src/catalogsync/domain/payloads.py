"""Ingestion payloads: what a data engine says about one of its assets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from catalogsync.domain.model import ObjectKind


@dataclass(frozen=True, slots=True, kw_only=True)
class ObjectPayload:
    """Fields shared by every kind of payload."""

    KIND: ClassVar[ObjectKind]

    qualified_name: str
    display_name: str
    properties: dict[str, Any] = field(default_factory=dict[str, Any])

    @property
    def kind(self) -> ObjectKind:
        return self.KIND

    @property
    def parent_qualified_name(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True, kw_only=True)
class ContainerPayload(ObjectPayload):
    KIND: ClassVar[ObjectKind] = ObjectKind.CONTAINER


@dataclass(frozen=True, slots=True, kw_only=True)
class FieldPayload(ObjectPayload):
    """A field. The owning schema type is named only for standalone upserts."""

    KIND: ClassVar[ObjectKind] = ObjectKind.FIELD

    schema_type_qualified_name: str | None = None

    @property
    def parent_qualified_name(self) -> str | None:
        return self.schema_type_qualified_name


@dataclass(frozen=True, slots=True, kw_only=True)
class SchemaTypePayload(ObjectPayload):
    KIND: ClassVar[ObjectKind] = ObjectKind.SCHEMA_TYPE

    container_qualified_name: str | None = None
    fields: tuple[FieldPayload, ...] = ()

    @property
    def parent_qualified_name(self) -> str | None:
        return self.container_qualified_name
