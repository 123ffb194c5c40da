"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from catalogsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    is_started,
    startup,
)
from catalogsync.config.engine import get_engine_config
from catalogsync.domain.model import DeleteSemantic
from catalogsync.domain.ports.unit_of_work import CatalogUnitOfWork
from catalogsync.domain.reconciliation import ReconciliationEngine, register_source

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from uuid import UUID

    from catalogsync.adapters.batch_file import IngestionBatch
    from catalogsync.config.engine import EngineConfig
    from catalogsync.domain.model import CataloguedObject, ObjectKind
    from catalogsync.domain.payloads import (
        ContainerPayload,
        FieldPayload,
        ObjectPayload,
        SchemaTypePayload,
    )
    from catalogsync.domain.reconciliation import BatchResult

UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]


log = getLogger(__name__)


def _default_unit_of_work() -> CatalogUnitOfWork:
    if not is_started():
        startup()
    return SqlAlchemyCatalogUnitOfWork()


def register_external_source(
    qualified_name: str,
    *,
    user: str,
    display_name: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> UUID:
    """Register a data engine so that its reports can be reconciled."""

    effective_uow = unit_of_work_factory or _default_unit_of_work
    with effective_uow() as uow:
        source_id = register_source(uow.repositories.catalog, user, qualified_name, display_name)
        uow.commit()
    return source_id


def _upsert(
    payloads: Iterable[ObjectPayload],
    source_qualified_name: str,
    *,
    user: str,
    operation: str,
    unit_of_work_factory: UnitOfWorkFactory | None,
) -> BatchResult:
    effective_uow = unit_of_work_factory or _default_unit_of_work
    with effective_uow() as uow:
        engine = ReconciliationEngine.for_repository(uow.repositories.catalog)
        # commit item by item: a failure later in the batch keeps earlier items
        return engine.orchestrator.upsert_many(
            user,
            payloads,
            source_qualified_name,
            operation=operation,
            checkpoint=uow.commit,
        )


def upsert_containers(
    payloads: Iterable[ContainerPayload],
    source_qualified_name: str,
    *,
    user: str,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> BatchResult:
    return _upsert(
        payloads,
        source_qualified_name,
        user=user,
        operation="upsert_containers",
        unit_of_work_factory=unit_of_work_factory,
    )


def upsert_schema_types(
    payloads: Iterable[SchemaTypePayload],
    source_qualified_name: str,
    *,
    user: str,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> BatchResult:
    """Upsert schema types and, through the cascade, their fields."""

    return _upsert(
        payloads,
        source_qualified_name,
        user=user,
        operation="upsert_schema_types",
        unit_of_work_factory=unit_of_work_factory,
    )


def upsert_fields(
    payloads: Iterable[FieldPayload],
    source_qualified_name: str,
    *,
    user: str,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> BatchResult:
    """Upsert fields that name their schema type directly."""

    return _upsert(
        payloads,
        source_qualified_name,
        user=user,
        operation="upsert_fields",
        unit_of_work_factory=unit_of_work_factory,
    )


def ingest_batch(
    batch: IngestionBatch,
    *,
    user: str,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[BatchResult]:
    """Submit containers, then schema types, then standalone fields."""

    effective_user = batch.user or user
    log.info(
        "Ingesting batch from %r: containers=%s, schema_types=%s, fields=%s",
        batch.source,
        len(batch.containers),
        len(batch.schema_types),
        len(batch.fields),
    )
    results = [
        upsert_containers(
            batch.containers,
            batch.source,
            user=effective_user,
            unit_of_work_factory=unit_of_work_factory,
        ),
        upsert_schema_types(
            batch.schema_types,
            batch.source,
            user=effective_user,
            unit_of_work_factory=unit_of_work_factory,
        ),
        upsert_fields(
            batch.fields,
            batch.source,
            user=effective_user,
            unit_of_work_factory=unit_of_work_factory,
        ),
    ]
    log.info("Finished batch from %r: applied=%s", batch.source, sum(r.applied for r in results))
    return results


def remove_object(
    object_id: UUID,
    qualified_name: str,
    source_qualified_name: str,
    *,
    user: str,
    semantic: DeleteSemantic | str = DeleteSemantic.SOFT,
    config: EngineConfig | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> None:
    effective_uow = unit_of_work_factory or _default_unit_of_work
    with effective_uow() as uow:
        engine = ReconciliationEngine.for_repository(
            uow.repositories.catalog,
            config=config or get_engine_config(),
        )
        engine.removal.remove(user, object_id, qualified_name, source_qualified_name, semantic)
        uow.commit()


def find_objects(
    qualified_name: str,
    kind: ObjectKind,
    *,
    user: str,
    include_deleted: bool = False,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Sequence[CataloguedObject]:
    """Return the live object for ``qualified_name`` or, for audits, every tombstone too."""

    effective_uow = unit_of_work_factory or _default_unit_of_work
    with effective_uow() as uow:
        repository = uow.repositories.catalog
        engine = ReconciliationEngine.for_repository(repository)
        if include_deleted:
            return list(engine.lookup.find_including_deleted(user, qualified_name, kind))
        object_id = engine.lookup.find_by_qualified_name(user, qualified_name, kind)
        if object_id is None:
            return []
        found = repository.get(object_id)
        return [found] if found is not None else []
