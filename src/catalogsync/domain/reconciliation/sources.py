"""External source resolution and registration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from catalogsync.domain.errors import ValidationError

if TYPE_CHECKING:
    from uuid import UUID

    from catalogsync.domain.ports.persistence import SourceRegistry

log = logging.getLogger(__name__)


class ExternalSourceResolver:
    """Map a producer's declared qualified name to its repository id."""

    def __init__(self, registry: SourceRegistry) -> None:
        self.registry = registry

    def resolve(self, user: str, declared_qualified_name: str) -> UUID:
        """Return the source id, raising ``NotFoundError`` if it is unregistered."""

        if not declared_qualified_name or not declared_qualified_name.strip():
            raise ValidationError("External source qualified name must not be blank")
        source_id = self.registry.resolve_source(declared_qualified_name)
        log.debug("Resolved source %r to %s for %s", declared_qualified_name, source_id, user)
        return source_id


def register_source(
    registry: SourceRegistry,
    user: str,
    qualified_name: str,
    display_name: str | None = None,
) -> UUID:
    """Register ``qualified_name`` as an external source; repeat calls return the same id."""

    if not qualified_name or not qualified_name.strip():
        raise ValidationError(
            "External source qualified name must not be blank",
            operation="register_source",
        )
    source_id = registry.register_source(qualified_name, display_name, user=user)
    log.info("Registered external source %r as %s", qualified_name, source_id)
    return source_id
