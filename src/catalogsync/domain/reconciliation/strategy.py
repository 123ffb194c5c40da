"""Per-kind parameters for the shared reconcile algorithm."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from catalogsync.domain.model import ObjectKind, RelationshipKind
from catalogsync.domain.payloads import SchemaTypePayload

if TYPE_CHECKING:
    from catalogsync.domain.payloads import ObjectPayload

type ChildPayloads = Callable[[ObjectPayload], tuple[ObjectPayload, ...]]


def _no_children(payload: ObjectPayload) -> tuple[ObjectPayload, ...]:
    _ = payload
    return ()


def _schema_type_fields(payload: ObjectPayload) -> tuple[ObjectPayload, ...]:
    if isinstance(payload, SchemaTypePayload):
        return payload.fields
    return ()


@dataclass(frozen=True, slots=True)
class KindStrategy:
    """What distinguishes one kind of catalogued object from another."""

    kind: ObjectKind
    parent_kind: ObjectKind | None = None
    relationship_kind: RelationshipKind | None = None
    required_properties: tuple[str, ...] = ()
    child_kind: ObjectKind | None = None
    children: ChildPayloads = field(default=_no_children)

    @property
    def requires_parent(self) -> bool:
        return self.parent_kind is not None

    def missing_properties(self, payload: ObjectPayload) -> tuple[str, ...]:
        return tuple(
            name for name in self.required_properties if _is_blank(payload.properties.get(name))
        )


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


CONTAINER_STRATEGY: Final = KindStrategy(kind=ObjectKind.CONTAINER)

SCHEMA_TYPE_STRATEGY: Final = KindStrategy(
    kind=ObjectKind.SCHEMA_TYPE,
    parent_kind=ObjectKind.CONTAINER,
    relationship_kind=RelationshipKind.CONTAINS,
    child_kind=ObjectKind.FIELD,
    children=_schema_type_fields,
)

FIELD_STRATEGY: Final = KindStrategy(
    kind=ObjectKind.FIELD,
    parent_kind=ObjectKind.SCHEMA_TYPE,
    relationship_kind=RelationshipKind.HAS_FIELD,
    required_properties=("data_type",),
)

STRATEGIES: Final[dict[ObjectKind, KindStrategy]] = {
    strategy.kind: strategy
    for strategy in (CONTAINER_STRATEGY, SCHEMA_TYPE_STRATEGY, FIELD_STRATEGY)
}
