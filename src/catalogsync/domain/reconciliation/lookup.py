"""Read-only queries against the catalog repository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from catalogsync.domain.errors import NotFoundError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from catalogsync.domain.model import CataloguedObject, ObjectKind
    from catalogsync.domain.ports.persistence import CatalogRepository

log = logging.getLogger(__name__)


class EntityLookup:
    def __init__(self, repository: CatalogRepository) -> None:
        self.repository = repository

    def find_by_qualified_name(
        self, user: str, qualified_name: str, kind: ObjectKind
    ) -> UUID | None:
        """Exact, case-sensitive match against live objects of ``kind``."""

        object_id = self.repository.find_by_qualified_name(qualified_name, kind)
        log.debug("Lookup %s %r for %s -> %s", kind, qualified_name, user, object_id)
        return object_id

    def require(self, user: str, qualified_name: str, kind: ObjectKind) -> UUID:
        object_id = self.find_by_qualified_name(user, qualified_name, kind)
        if object_id is None:
            raise NotFoundError(f"No live {kind} registered as {qualified_name!r}")
        return object_id

    def find_including_deleted(
        self, user: str, qualified_name: str, kind: ObjectKind
    ) -> Sequence[CataloguedObject]:
        """Audit query: live objects and soft-deleted tombstones alike."""

        _ = user
        return self.repository.find_including_deleted(qualified_name, kind)
