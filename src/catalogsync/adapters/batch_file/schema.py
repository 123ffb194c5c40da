"""Pydantic models for ingestion batch documents.

A batch document looks like::

    {
      "source": "engine://warehouse-scanner",
      "user": "scanner",
      "containers": [{"qualified_name": "...", "display_name": "..."}],
      "schema_types": [
        {
          "qualified_name": "...",
          "display_name": "...",
          "container": "...",
          "fields": [{"qualified_name": "...", "display_name": "...",
                      "properties": {"data_type": "string"}}]
        }
      ]
    }
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BatchBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class FieldDocument(BatchBaseModel):
    qualified_name: str
    display_name: str
    properties: dict[str, Any] = Field(default_factory=dict)
    schema_type: str | None = None


class ContainerDocument(BatchBaseModel):
    qualified_name: str
    display_name: str
    properties: dict[str, Any] = Field(default_factory=dict)


class SchemaTypeDocument(BatchBaseModel):
    qualified_name: str
    display_name: str
    properties: dict[str, Any] = Field(default_factory=dict)
    container: str | None = None
    fields: list[FieldDocument] = Field(default_factory=list["FieldDocument"])


class BatchDocument(BatchBaseModel):
    source: str
    user: str | None = None
    containers: list[ContainerDocument] = Field(default_factory=list["ContainerDocument"])
    schema_types: list[SchemaTypeDocument] = Field(default_factory=list["SchemaTypeDocument"])
    fields: list[FieldDocument] = Field(default_factory=list["FieldDocument"])
