from __future__ import annotations

from uuid import uuid4

import pytest

from catalogsync.config.engine import EngineConfig
from catalogsync.domain.errors import NotFoundError, UnsupportedOperationError, ValidationError
from catalogsync.domain.model import DeleteSemantic, ObjectKind
from catalogsync.domain.reconciliation import ReconciliationEngine, RemovalValidator
from tests.helpers.catalog import (
    OTHER_SOURCE,
    SOURCE,
    USER,
    InMemoryCatalogRepository,
    make_container,
    make_schema_type,
)


@pytest.fixture
def populated(repository: InMemoryCatalogRepository) -> InMemoryCatalogRepository:
    engine = ReconciliationEngine.for_repository(repository)
    engine.orchestrator.upsert_many(
        USER,
        [make_container(), make_schema_type(fields=("id", "amount"))],
        SOURCE,
    )
    return repository


def test_soft_delete_hides_object_from_lookup(populated: InMemoryCatalogRepository) -> None:
    field = populated.by_name("warehouse.sales.orders.id", ObjectKind.FIELD)

    RemovalValidator(populated).remove(
        USER, field.id, field.qualified_name, SOURCE, DeleteSemantic.SOFT
    )

    assert populated.find_by_qualified_name(field.qualified_name, ObjectKind.FIELD) is None
    audit = populated.find_including_deleted(field.qualified_name, ObjectKind.FIELD)
    assert [entry.id for entry in audit] == [field.id]
    assert audit[0].is_deleted


def test_hard_delete_purges_object_and_links(populated: InMemoryCatalogRepository) -> None:
    field = populated.by_name("warehouse.sales.orders.amount", ObjectKind.FIELD)

    RemovalValidator(populated).remove(USER, field.id, field.qualified_name, SOURCE, "hard")

    assert populated.find_including_deleted(field.qualified_name, ObjectKind.FIELD) == []
    assert all(field.id not in (link.from_id, link.to_id) for link in populated.relationships)


def test_hard_delete_with_live_dependents_is_refused(
    populated: InMemoryCatalogRepository,
) -> None:
    container = populated.by_name("warehouse.sales", ObjectKind.CONTAINER)

    with pytest.raises(UnsupportedOperationError) as exc:
        RemovalValidator(populated).remove(
            USER, container.id, container.qualified_name, SOURCE, DeleteSemantic.HARD
        )

    assert exc.value.qualified_name == "warehouse.sales"
    assert exc.value.operation == "remove"
    assert populated.get(container.id) is container


def test_hard_delete_allowed_once_dependents_are_soft_deleted(
    populated: InMemoryCatalogRepository,
) -> None:
    validator = RemovalValidator(populated)
    schema_type = populated.by_name("warehouse.sales.orders", ObjectKind.SCHEMA_TYPE)
    for name in ("id", "amount"):
        field = populated.by_name(f"warehouse.sales.orders.{name}", ObjectKind.FIELD)
        validator.remove(USER, field.id, field.qualified_name, SOURCE, DeleteSemantic.SOFT)

    validator.remove(
        USER, schema_type.id, schema_type.qualified_name, SOURCE, DeleteSemantic.HARD
    )

    assert populated.get(schema_type.id, include_deleted=True) is None
    # fields are left orphaned, not cascaded
    orphans = populated.find_including_deleted("warehouse.sales.orders.id", ObjectKind.FIELD)
    assert len(orphans) == 1


def test_soft_delete_does_not_cascade(populated: InMemoryCatalogRepository) -> None:
    schema_type = populated.by_name("warehouse.sales.orders", ObjectKind.SCHEMA_TYPE)

    RemovalValidator(populated).remove(
        USER, schema_type.id, schema_type.qualified_name, SOURCE, DeleteSemantic.SOFT
    )

    assert len(populated.live(ObjectKind.FIELD)) == 2


def test_disabled_semantic_is_unsupported(populated: InMemoryCatalogRepository) -> None:
    field = populated.by_name("warehouse.sales.orders.id", ObjectKind.FIELD)
    validator = RemovalValidator(
        populated, config=EngineConfig(delete_semantics=frozenset({DeleteSemantic.SOFT}))
    )

    with pytest.raises(UnsupportedOperationError, match="hard delete is not enabled"):
        validator.remove(USER, field.id, field.qualified_name, SOURCE, DeleteSemantic.HARD)

    assert populated.get(field.id) is field


def test_unknown_semantic_is_unsupported(populated: InMemoryCatalogRepository) -> None:
    field = populated.by_name("warehouse.sales.orders.id", ObjectKind.FIELD)

    with pytest.raises(UnsupportedOperationError):
        RemovalValidator(populated).remove(USER, field.id, field.qualified_name, SOURCE, "purge")


def test_missing_target_is_not_found(repository: InMemoryCatalogRepository) -> None:
    with pytest.raises(NotFoundError) as exc:
        RemovalValidator(repository).remove(
            USER, uuid4(), "warehouse.ghost", SOURCE, DeleteSemantic.SOFT
        )

    assert exc.value.qualified_name == "warehouse.ghost"


def test_qualified_name_must_match_target(populated: InMemoryCatalogRepository) -> None:
    container = populated.by_name("warehouse.sales", ObjectKind.CONTAINER)

    with pytest.raises(ValidationError, match="warehouse.sales"):
        RemovalValidator(populated).remove(
            USER, container.id, "warehouse.finance", SOURCE, DeleteSemantic.SOFT
        )

    assert not container.is_deleted


def test_soft_deleting_a_tombstone_is_not_found(populated: InMemoryCatalogRepository) -> None:
    field = populated.by_name("warehouse.sales.orders.id", ObjectKind.FIELD)
    validator = RemovalValidator(populated)
    validator.remove(USER, field.id, field.qualified_name, SOURCE, DeleteSemantic.SOFT)

    with pytest.raises(NotFoundError):
        validator.remove(USER, field.id, field.qualified_name, SOURCE, DeleteSemantic.SOFT)


def test_tombstone_can_be_hard_deleted(populated: InMemoryCatalogRepository) -> None:
    field = populated.by_name("warehouse.sales.orders.id", ObjectKind.FIELD)
    validator = RemovalValidator(populated)
    validator.remove(USER, field.id, field.qualified_name, SOURCE, DeleteSemantic.SOFT)

    validator.remove(USER, field.id, field.qualified_name, SOURCE, DeleteSemantic.HARD)

    assert populated.find_including_deleted(field.qualified_name, ObjectKind.FIELD) == []


def test_removal_requires_registered_source(populated: InMemoryCatalogRepository) -> None:
    container = populated.by_name("warehouse.sales", ObjectKind.CONTAINER)

    with pytest.raises(NotFoundError, match="engine://unknown"):
        RemovalValidator(populated).remove(
            USER, container.id, container.qualified_name, "engine://unknown", "soft"
        )

    assert not container.is_deleted


def test_any_registered_source_may_remove(populated: InMemoryCatalogRepository) -> None:
    container = populated.by_name("warehouse.sales", ObjectKind.CONTAINER)

    RemovalValidator(populated).remove(
        "crawler", container.id, container.qualified_name, OTHER_SOURCE, DeleteSemantic.SOFT
    )

    assert container.is_deleted
    assert container.updated_by == "crawler"


def test_name_is_reusable_after_soft_delete(populated: InMemoryCatalogRepository) -> None:
    engine = ReconciliationEngine.for_repository(populated)
    container = populated.by_name("warehouse.sales", ObjectKind.CONTAINER)
    engine.removal.remove(USER, container.id, container.qualified_name, SOURCE, "soft")

    new_id = engine.reconciler_for(ObjectKind.CONTAINER).reconcile(
        USER, make_container(), SOURCE, operation="op"
    )

    assert new_id != container.id
    audit = populated.find_including_deleted("warehouse.sales", ObjectKind.CONTAINER)
    assert {entry.id for entry in audit} == {container.id, new_id}
