"""Validated removal of catalogued objects."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from catalogsync.config.engine import EngineConfig
from catalogsync.domain.errors import (
    CatalogError,
    NotFoundError,
    UnsupportedOperationError,
    ValidationError,
)
from catalogsync.domain.model import DeleteSemantic

from .sources import ExternalSourceResolver

if TYPE_CHECKING:
    from uuid import UUID

    from catalogsync.domain.model import CataloguedObject
    from catalogsync.domain.ports.persistence import CatalogRepository

log = logging.getLogger(__name__)


class RemovalValidator:
    """Check a delete request can be honoured, then hand it to the repository.

    Children are never removed here. Removing a schema type leaves its fields
    in place unless the repository itself cascades.
    """

    def __init__(
        self,
        repository: CatalogRepository,
        *,
        resolver: ExternalSourceResolver | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self.repository = repository
        self.resolver = resolver or ExternalSourceResolver(repository)
        self.config = config or EngineConfig()

    def remove(
        self,
        user: str,
        object_id: UUID,
        qualified_name: str,
        source_qualified_name: str,
        semantic: DeleteSemantic | str,
        *,
        operation: str = "remove",
    ) -> None:
        try:
            source_id = self.resolver.resolve(user, source_qualified_name)
            requested = self._parse_semantic(semantic)
            target = self.repository.get(object_id, include_deleted=True)
            if target is None:
                raise NotFoundError(f"No catalogued object with id {object_id}")
            if target.qualified_name != qualified_name:
                raise ValidationError(
                    f"Object {object_id} is registered as {target.qualified_name!r}"
                )
            self.validate(target, requested)
            self.repository.remove(object_id, requested, user=user)
        except CatalogError as exc:
            exc.attach(qualified_name=qualified_name, operation=operation)
            raise

        log.info(
            "%s delete of %s %r (%s) by %s on behalf of source %s",
            requested,
            target.kind,
            qualified_name,
            object_id,
            user,
            source_id,
        )

    def validate(self, target: CataloguedObject, semantic: DeleteSemantic) -> None:
        """Raise unless ``semantic`` can be applied to ``target`` in its current state."""

        if not self.config.supports(semantic):
            raise UnsupportedOperationError(f"{semantic} delete is not enabled")
        if semantic is DeleteSemantic.SOFT and target.is_deleted:
            raise NotFoundError(f"{target.kind} {target.id} is already deleted")
        if semantic is DeleteSemantic.HARD and self.repository.has_live_dependents(target.id):
            raise UnsupportedOperationError(
                f"Cannot hard delete {target.kind} {target.id}: it still has live dependents"
            )

    @staticmethod
    def _parse_semantic(semantic: DeleteSemantic | str) -> DeleteSemantic:
        try:
            return DeleteSemantic(semantic)
        except ValueError as exc:
            raise UnsupportedOperationError(f"Unknown delete semantic: {semantic!r}") from exc
