"""External sources: the producers that report assets into the catalog."""

from __future__ import annotations

from dataclasses import dataclass

from catalogsync.domain.model.entity import AuditedEntity


@dataclass(eq=False, kw_only=True)
class ExternalSource(AuditedEntity):
    """A registered data engine, keyed by its own qualified name."""

    qualified_name: str
    display_name: str | None = None
