"""Translate batch documents into reconciliation payloads."""

from __future__ import annotations

from typing import TYPE_CHECKING

from catalogsync.domain.payloads import ContainerPayload, FieldPayload, SchemaTypePayload

if TYPE_CHECKING:
    from .schema import ContainerDocument, FieldDocument, SchemaTypeDocument


def translate_container(document: ContainerDocument) -> ContainerPayload:
    return ContainerPayload(
        qualified_name=document.qualified_name,
        display_name=document.display_name,
        properties=dict(document.properties),
    )


def translate_field(document: FieldDocument) -> FieldPayload:
    return FieldPayload(
        qualified_name=document.qualified_name,
        display_name=document.display_name,
        properties=dict(document.properties),
        schema_type_qualified_name=document.schema_type,
    )


def translate_schema_type(document: SchemaTypeDocument) -> SchemaTypePayload:
    return SchemaTypePayload(
        qualified_name=document.qualified_name,
        display_name=document.display_name,
        properties=dict(document.properties),
        container_qualified_name=document.container,
        fields=tuple(translate_field(field) for field in document.fields),
    )
