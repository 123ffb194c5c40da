"""SQLAlchemy mapping metadata for the catalog domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import Any

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    orm,
    text,
)
from sqlalchemy.orm import configure_mappers

from catalogsync.domain.model import (
    CataloguedObject,
    ExternalSource,
    ObjectKind,
    Relationship,
    RelationshipKind,
)

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    """Timestamps stored and returned as aware UTC; naive input is taken to be UTC.

    SQLite drops the offset, so values read back are re-tagged.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        return None if value is None else _as_utc(value).astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        return None if value is None else _as_utc(value)


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


mapper_registry = orm.registry(
    metadata=MetaData(
        naming_convention={
            "ix": "ix_%(column_0_label)s",
            "uq": "uq_%(table_name)s_%(column_0_N_name)s",
            "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
            "pk": "pk_%(table_name)s",
        }
    )
)

_LIVE_ROWS = text("deleted_at IS NULL")


def _audit_columns() -> list[Column[Any]]:
    return [
        Column("created_by", String),
        Column("updated_by", String),
        Column("created_at", UTCDateTime()),
        Column("updated_at", UTCDateTime()),
    ]


external_source_table = Table(
    "external_source",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("qualified_name", String, nullable=False, unique=True),
    Column("display_name", String, nullable=True),
    *_audit_columns(),
)

catalog_object_table = Table(
    "catalog_object",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("kind", Enum(ObjectKind, native_enum=False), nullable=False),
    Column("qualified_name", String, nullable=False),
    Column("display_name", String, nullable=False),
    Column("properties", JSON, nullable=False, default=dict),
    Column(
        "owning_source_id",
        UUIDColumnType,
        ForeignKey("external_source.id"),
        nullable=False,
    ),
    # no foreign key: hard-deleting a parent may leave tombstoned children behind
    Column("parent_id", UUIDColumnType, nullable=True),
    *_audit_columns(),
    Column("deleted_at", UTCDateTime(), nullable=True),
    # one live object per (qualified_name, kind); tombstones do not count
    Index(
        "uq_catalog_object_live_qualified_name",
        "qualified_name",
        "kind",
        unique=True,
        sqlite_where=_LIVE_ROWS,
        postgresql_where=_LIVE_ROWS,
    ),
    Index("ix_catalog_object_parent", "parent_id"),
)

catalog_relationship_table = Table(
    "catalog_relationship",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("kind", Enum(RelationshipKind, native_enum=False), nullable=False),
    Column("from_id", UUIDColumnType, nullable=False),
    Column("to_id", UUIDColumnType, nullable=False),
    UniqueConstraint("kind", "from_id", "to_id", name="uq_catalog_relationship_link"),
    Index("ix_catalog_relationship_to", "to_id"),
)


@cache
def start_mappers() -> orm.registry:
    """Map the catalog dataclasses onto their tables. Runs once per process."""

    log.debug("Mapping catalog tables")

    mapper_registry.map_imperatively(ExternalSource, external_source_table)
    mapper_registry.map_imperatively(CataloguedObject, catalog_object_table)
    mapper_registry.map_imperatively(Relationship, catalog_relationship_table)

    configure_mappers()
    return mapper_registry
