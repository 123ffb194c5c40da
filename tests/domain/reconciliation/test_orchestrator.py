from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from catalogsync.domain.errors import AuthorizationError, NotFoundError, ValidationError
from catalogsync.domain.model import ObjectKind
from catalogsync.domain.reconciliation import BatchOrchestrator, ReconciliationEngine
from tests.helpers.catalog import (
    SOURCE,
    USER,
    InMemoryCatalogRepository,
    make_container,
    make_field,
    make_schema_type,
)

if TYPE_CHECKING:
    from uuid import UUID


def _orchestrator(repository: InMemoryCatalogRepository) -> BatchOrchestrator:
    return ReconciliationEngine.for_repository(repository).orchestrator


def test_batch_returns_ids_in_submission_order(repository: InMemoryCatalogRepository) -> None:
    orchestrator = _orchestrator(repository)
    payloads = [make_container(f"warehouse.zone{n}", display_name=f"Zone {n}") for n in (3, 1, 2)]

    result = orchestrator.upsert_many(USER, payloads, SOURCE, operation="upsert_containers")

    assert result.applied == 3
    names = [repository.objects[object_id].qualified_name for object_id in result.ids]
    assert names == ["warehouse.zone3", "warehouse.zone1", "warehouse.zone2"]


def test_batch_stops_at_first_failure(repository: InMemoryCatalogRepository) -> None:
    orchestrator = _orchestrator(repository)
    payloads = [
        make_container("warehouse.a", display_name="A"),
        make_container("warehouse.b", display_name=""),
        make_container("warehouse.c", display_name="C"),
    ]

    with pytest.raises(ValidationError) as exc:
        orchestrator.upsert_many(USER, payloads, SOURCE, operation="upsert_containers")

    assert exc.value.qualified_name == "warehouse.b"
    assert exc.value.operation == "upsert_containers"
    assert repository.by_name("warehouse.a", ObjectKind.CONTAINER).display_name == "A"
    assert repository.find_by_qualified_name("warehouse.b", ObjectKind.CONTAINER) is None
    attempted = {name for _, name in repository.calls}
    assert "warehouse.c" not in attempted


def test_checkpoint_runs_after_each_applied_item(repository: InMemoryCatalogRepository) -> None:
    orchestrator = _orchestrator(repository)
    applied_at_checkpoint: list[int] = []

    def checkpoint() -> None:
        applied_at_checkpoint.append(len(repository.live(ObjectKind.CONTAINER)))

    payloads = [
        make_container("warehouse.a", display_name="A"),
        make_container("warehouse.b", display_name="B"),
        make_container("", display_name="broken"),
    ]

    with pytest.raises(ValidationError):
        orchestrator.upsert_many(USER, payloads, SOURCE, checkpoint=checkpoint)

    assert applied_at_checkpoint == [1, 2]


def test_parents_must_come_first(repository: InMemoryCatalogRepository) -> None:
    orchestrator = _orchestrator(repository)
    payloads = [make_schema_type(fields=("id",)), make_container()]

    with pytest.raises(NotFoundError) as exc:
        orchestrator.upsert_many(USER, payloads, SOURCE, operation="upsert_schema_types")

    assert exc.value.qualified_name == "warehouse.sales.orders"
    assert repository.objects == {}


def test_mixed_kinds_are_routed_to_their_reconcilers(
    repository: InMemoryCatalogRepository,
) -> None:
    orchestrator = _orchestrator(repository)
    payloads = [
        make_container(),
        make_schema_type(fields=("id",)),
        make_field("warehouse.sales.orders.total", schema_type="warehouse.sales.orders"),
    ]

    result = orchestrator.upsert_many(USER, payloads, SOURCE)

    kinds = [repository.objects[object_id].kind for object_id in result.ids]
    assert kinds == [ObjectKind.CONTAINER, ObjectKind.SCHEMA_TYPE, ObjectKind.FIELD]
    assert len(repository.live(ObjectKind.FIELD)) == 2


def test_unknown_kind_is_rejected(repository: InMemoryCatalogRepository) -> None:
    engine = ReconciliationEngine.for_repository(repository)
    containers = engine.reconciler_for(ObjectKind.CONTAINER)
    orchestrator = BatchOrchestrator({ObjectKind.CONTAINER: containers})

    with pytest.raises(ValidationError) as exc:
        orchestrator.upsert_many(USER, [make_schema_type()], SOURCE, operation="op")

    assert exc.value.operation == "op"
    assert exc.value.qualified_name == "warehouse.sales.orders"


def test_empty_batch_applies_nothing(repository: InMemoryCatalogRepository) -> None:
    result = _orchestrator(repository).upsert_many(USER, [], SOURCE)

    assert result.ids == []
    assert result.applied == 0


def test_authorization_error_surfaces_and_stops_the_batch(
    repository: InMemoryCatalogRepository, monkeypatch: pytest.MonkeyPatch
) -> None:
    def deny(*_args: Any, **_kwargs: Any) -> UUID:
        raise AuthorizationError("denied")

    monkeypatch.setattr(repository, "create", deny)
    payloads = [make_container("a", display_name="A"), make_container("b", display_name="B")]

    with pytest.raises(AuthorizationError, match="denied") as exc:
        _orchestrator(repository).upsert_many(USER, payloads, SOURCE, operation="op")

    assert type(exc.value) is AuthorizationError
    assert exc.value.qualified_name == "a"
    assert exc.value.operation == "op"
    assert ("find", "b") not in repository.calls
    assert repository.objects == {}
