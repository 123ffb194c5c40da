"""catalog schema

Revision ID: 0001_catalog_schema
Revises:
Create Date: 2026-10-19 00:00:00
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import sqlalchemy as sa
from alembic import op

if TYPE_CHECKING:
    from collections.abc import Sequence

revision: str = "0001_catalog_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

LIVE_ROWS = sa.text("deleted_at IS NULL")


def _audit_columns() -> list[sa.Column[Any]]:
    return [
        sa.Column("created_by", sa.String()),
        sa.Column("updated_by", sa.String()),
        sa.Column("created_at", sa.DateTime(timezone=True)),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    ]


def upgrade() -> None:
    op.create_table(
        "external_source",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("qualified_name", sa.String(), nullable=False),
        sa.Column("display_name", sa.String(), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id", name="pk_external_source"),
        sa.UniqueConstraint("qualified_name", name="uq_external_source_qualified_name"),
    )
    op.create_table(
        "catalog_object",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "kind",
            sa.Enum("CONTAINER", "SCHEMA_TYPE", "FIELD", name="objectkind", native_enum=False),
            nullable=False,
        ),
        sa.Column("qualified_name", sa.String(), nullable=False),
        sa.Column("display_name", sa.String(), nullable=False),
        sa.Column("properties", sa.JSON(), nullable=False),
        sa.Column("owning_source_id", sa.Uuid(), nullable=False),
        sa.Column("parent_id", sa.Uuid(), nullable=True),
        *_audit_columns(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["owning_source_id"],
            ["external_source.id"],
            name="fk_catalog_object_owning_source_id_external_source",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_catalog_object"),
    )
    op.create_index(
        "uq_catalog_object_live_qualified_name",
        "catalog_object",
        ["qualified_name", "kind"],
        unique=True,
        sqlite_where=LIVE_ROWS,
        postgresql_where=LIVE_ROWS,
    )
    op.create_index("ix_catalog_object_parent", "catalog_object", ["parent_id"])
    op.create_table(
        "catalog_relationship",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "kind",
            sa.Enum("CONTAINS", "HAS_FIELD", name="relationshipkind", native_enum=False),
            nullable=False,
        ),
        sa.Column("from_id", sa.Uuid(), nullable=False),
        sa.Column("to_id", sa.Uuid(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_catalog_relationship"),
        sa.UniqueConstraint("kind", "from_id", "to_id", name="uq_catalog_relationship_link"),
    )
    op.create_index("ix_catalog_relationship_to", "catalog_relationship", ["to_id"])


def downgrade() -> None:
    op.drop_index("ix_catalog_relationship_to", table_name="catalog_relationship")
    op.drop_table("catalog_relationship")
    op.drop_index("ix_catalog_object_parent", table_name="catalog_object")
    op.drop_index("uq_catalog_object_live_qualified_name", table_name="catalog_object")
    op.drop_table("catalog_object")
    op.drop_table("external_source")
