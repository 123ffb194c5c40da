"""Identity and audit columns shared by everything the catalog stores."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(eq=False, kw_only=True)
class Entity:
    """Anything with a repository id. Equality is identity, as for mapped rows."""

    id: UUID = field(default_factory=uuid4)


@dataclass(eq=False, kw_only=True)
class AuditedEntity(Entity):
    """Rows that remember who created them and who changed them last.

    The repository adapter stamps these; the domain only reads them.
    """

    created_by: str | None = None
    updated_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def stamp_created(self, user: str, at: datetime) -> None:
        self.created_by = self.updated_by = user
        self.created_at = self.updated_at = at

    def stamp_updated(self, user: str, at: datetime) -> None:
        self.updated_by = user
        self.updated_at = at
