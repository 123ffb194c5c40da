"""Read ingestion batch documents from disk."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .schema import BatchDocument
from .translator import translate_container, translate_field, translate_schema_type

if TYPE_CHECKING:
    from pathlib import Path

    from catalogsync.domain.payloads import ContainerPayload, FieldPayload, SchemaTypePayload

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class IngestionBatch:
    """Payloads grouped by kind, in the order they must be submitted."""

    source: str
    user: str | None
    containers: tuple[ContainerPayload, ...]
    schema_types: tuple[SchemaTypePayload, ...]
    fields: tuple[FieldPayload, ...]


def parse_batch(raw: str | bytes) -> IngestionBatch:
    """Validate a JSON batch document and translate it into payloads."""

    document = BatchDocument.model_validate_json(raw)
    return IngestionBatch(
        source=document.source,
        user=document.user,
        containers=tuple(translate_container(item) for item in document.containers),
        schema_types=tuple(translate_schema_type(item) for item in document.schema_types),
        fields=tuple(translate_field(item) for item in document.fields),
    )


def load_batch(path: Path) -> IngestionBatch:
    log.info("Loading ingestion batch from %s", path)
    return parse_batch(path.read_bytes())
