"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError

from catalogsync.adapters.sqlalchemy.mappings import (
    catalog_object_table,
    catalog_relationship_table,
    external_source_table,
)
from catalogsync.domain.errors import ConflictError, NotFoundError, UnsupportedOperationError
from catalogsync.domain.model import (
    CataloguedObject,
    DeleteSemantic,
    ExternalSource,
    ObjectKind,
    Relationship,
    RelationshipKind,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from sqlalchemy.orm import Session


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SqlAlchemyCatalogRepository:
    """Catalog store on a single session.

    Writes are flushed but never committed here; the unit of work owns the
    transaction. Creates run inside a SAVEPOINT so a uniqueness violation only
    discards the failed insert.
    """

    def __init__(self, session: Session, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self.session = session
        self._clock = clock

    # External sources ----------------------------------------------------------

    def resolve_source(self, qualified_name: str) -> uuid.UUID:
        stmt = select(external_source_table.c.id).where(
            external_source_table.c.qualified_name == qualified_name
        )
        source_id = self.session.execute(stmt).scalar_one_or_none()
        if source_id is None:
            raise NotFoundError(f"External source {qualified_name!r} is not registered")
        return source_id

    def register_source(
        self,
        qualified_name: str,
        display_name: str | None,
        *,
        user: str,
    ) -> uuid.UUID:
        now = self._clock()
        stmt = select(ExternalSource).where(
            external_source_table.c.qualified_name == qualified_name
        )
        source = self.session.execute(stmt).scalar_one_or_none()
        if source is not None:
            if display_name is not None and display_name != source.display_name:
                source.display_name = display_name
                source.stamp_updated(user, now)
                self.session.flush()
            return source.id

        source = ExternalSource(qualified_name=qualified_name, display_name=display_name)
        source.stamp_created(user, now)
        self.session.add(source)
        self.session.flush()
        return source.id

    # Lookups -------------------------------------------------------------------

    def find_by_qualified_name(self, qualified_name: str, kind: ObjectKind) -> uuid.UUID | None:
        stmt = (
            select(catalog_object_table.c.id)
            .where(catalog_object_table.c.qualified_name == qualified_name)
            .where(catalog_object_table.c.kind == kind)
            .where(catalog_object_table.c.deleted_at.is_(None))
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def find_including_deleted(
        self, qualified_name: str, kind: ObjectKind
    ) -> Sequence[CataloguedObject]:
        stmt = (
            select(CataloguedObject)
            .where(catalog_object_table.c.qualified_name == qualified_name)
            .where(catalog_object_table.c.kind == kind)
            .order_by(catalog_object_table.c.created_at)
        )
        return list(self.session.execute(stmt).scalars().all())

    def get(
        self, object_id: uuid.UUID, *, include_deleted: bool = False
    ) -> CataloguedObject | None:
        catalogued = self.session.get(CataloguedObject, object_id)
        if catalogued is None or (catalogued.is_deleted and not include_deleted):
            return None
        return catalogued

    def relationships_from(self, object_id: uuid.UUID) -> Sequence[Relationship]:
        stmt = select(Relationship).where(catalog_relationship_table.c.from_id == object_id)
        return list(self.session.execute(stmt).scalars().all())

    def has_live_dependents(self, object_id: uuid.UUID) -> bool:
        stmt = (
            select(catalog_relationship_table.c.to_id)
            .join(
                catalog_object_table,
                catalog_object_table.c.id == catalog_relationship_table.c.to_id,
            )
            .where(catalog_relationship_table.c.from_id == object_id)
            .where(catalog_object_table.c.deleted_at.is_(None))
            .limit(1)
        )
        return self.session.execute(stmt).first() is not None

    # Writes --------------------------------------------------------------------

    def create(
        self,
        kind: ObjectKind,
        qualified_name: str,
        display_name: str,
        properties: Mapping[str, Any],
        owning_source_id: uuid.UUID,
        *,
        parent_id: uuid.UUID | None,
        user: str,
    ) -> uuid.UUID:
        catalogued = CataloguedObject(
            kind=kind,
            qualified_name=qualified_name,
            display_name=display_name,
            properties=dict(properties),
            owning_source_id=owning_source_id,
            parent_id=parent_id,
        )
        catalogued.stamp_created(user, self._clock())
        try:
            with self.session.begin_nested():
                self.session.add(catalogued)
        except IntegrityError as exc:
            raise ConflictError(
                f"A live {kind} already uses this qualified name",
                qualified_name=qualified_name,
            ) from exc
        return catalogued.id

    def update(
        self,
        object_id: uuid.UUID,
        display_name: str,
        properties: Mapping[str, Any],
        *,
        user: str,
    ) -> None:
        catalogued = self.get(object_id)
        if catalogued is None:
            raise NotFoundError(f"No live catalogued object with id {object_id}")
        catalogued.display_name = display_name
        catalogued.properties = dict(properties)
        catalogued.stamp_updated(user, self._clock())
        self.session.flush()

    def create_relationship(
        self, kind: RelationshipKind, from_id: uuid.UUID, to_id: uuid.UUID
    ) -> None:
        stmt = (
            select(catalog_relationship_table.c.id)
            .where(catalog_relationship_table.c.kind == kind)
            .where(catalog_relationship_table.c.from_id == from_id)
            .where(catalog_relationship_table.c.to_id == to_id)
        )
        if self.session.execute(stmt).first() is not None:
            return
        self.session.add(Relationship(kind=kind, from_id=from_id, to_id=to_id))
        self.session.flush()

    def remove(self, object_id: uuid.UUID, semantic: DeleteSemantic, *, user: str) -> None:
        catalogued = self.get(object_id, include_deleted=True)
        if catalogued is None:
            raise NotFoundError(f"No catalogued object with id {object_id}")

        if semantic is DeleteSemantic.SOFT:
            if catalogued.is_deleted:
                raise NotFoundError(f"Catalogued object {object_id} is already deleted")
            now = self._clock()
            catalogued.deleted_at = now
            catalogued.stamp_updated(user, now)
        elif semantic is DeleteSemantic.HARD:
            if self.has_live_dependents(object_id):
                raise UnsupportedOperationError(
                    f"Catalogued object {object_id} still has live dependents",
                    qualified_name=catalogued.qualified_name,
                )
            self.session.execute(
                delete(catalog_relationship_table).where(
                    or_(
                        catalog_relationship_table.c.from_id == object_id,
                        catalog_relationship_table.c.to_id == object_id,
                    )
                )
            )
            self.session.delete(catalogued)
        else:
            raise UnsupportedOperationError(f"Unsupported delete semantic: {semantic!r}")
        self.session.flush()


if TYPE_CHECKING:
    from catalogsync.domain.ports.persistence import CatalogRepository

    _session_stub = cast("Session", object())
    _repo_check: CatalogRepository = SqlAlchemyCatalogRepository(_session_stub)
