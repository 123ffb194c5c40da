"""Ingestion batch files (JSON) for the command line."""

from __future__ import annotations

from .loader import IngestionBatch, load_batch, parse_batch
from .schema import BatchDocument, ContainerDocument, FieldDocument, SchemaTypeDocument

__all__ = [
    "BatchDocument",
    "ContainerDocument",
    "FieldDocument",
    "IngestionBatch",
    "SchemaTypeDocument",
    "load_batch",
    "parse_batch",
]
