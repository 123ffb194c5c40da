from __future__ import annotations

import dataclasses
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from catalogsync.domain.model import CataloguedObject, ObjectKind
from catalogsync.domain.payloads import ContainerPayload, FieldPayload, SchemaTypePayload
from tests.helpers.catalog import make_field, make_schema_type


def test_payload_kinds() -> None:
    assert ContainerPayload(qualified_name="a", display_name="A").kind is ObjectKind.CONTAINER
    assert make_schema_type().kind is ObjectKind.SCHEMA_TYPE
    assert make_field("a.b.c").kind is ObjectKind.FIELD


def test_parent_qualified_name_per_kind() -> None:
    assert ContainerPayload(qualified_name="a", display_name="A").parent_qualified_name is None
    assert make_schema_type(container="a").parent_qualified_name == "a"
    assert make_field("a.b.c").parent_qualified_name is None
    assert make_field("a.b.c", schema_type="a.b").parent_qualified_name == "a.b"


def test_payloads_are_frozen() -> None:
    payload = FieldPayload(qualified_name="a.b.c", display_name="c")

    with pytest.raises(dataclasses.FrozenInstanceError):
        payload.display_name = "d"  # type: ignore[misc]


def test_schema_type_fields_default_to_empty() -> None:
    payload = SchemaTypePayload(qualified_name="a.b", display_name="B")

    assert payload.fields == ()
    assert payload.properties == {}


def test_catalogued_objects_get_distinct_ids_and_start_live() -> None:
    first = CataloguedObject(
        kind=ObjectKind.CONTAINER, qualified_name="a", display_name="A", owning_source_id=uuid4()
    )
    second = CataloguedObject(
        kind=ObjectKind.CONTAINER, qualified_name="a", display_name="A", owning_source_id=uuid4()
    )

    assert first.id != second.id
    assert not first.is_deleted
    first.deleted_at = datetime.now(UTC)
    assert first.is_deleted
