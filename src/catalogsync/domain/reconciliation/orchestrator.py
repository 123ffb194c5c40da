"""Fail-fast batch ingestion over the kind reconcilers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from uuid import UUID

from catalogsync.domain.errors import CatalogError, ValidationError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from catalogsync.domain.model import ObjectKind
    from catalogsync.domain.payloads import ObjectPayload

    from .reconciler import KindReconciler

log = logging.getLogger(__name__)


@dataclass(slots=True)
class BatchResult:
    """Ids of the applied payloads, in submission order."""

    ids: list[UUID] = field(default_factory=list[UUID])

    @property
    def applied(self) -> int:
        return len(self.ids)


class BatchOrchestrator:
    """Run payloads through their reconcilers in the order the caller supplied.

    There is no dependency sorting: parents must be submitted before their
    children. The first failure stops the batch; items applied before it stay
    applied. ``checkpoint`` is called after every applied item so that a
    transactional store can commit them one by one.
    """

    def __init__(self, reconcilers: Mapping[ObjectKind, KindReconciler]) -> None:
        self.reconcilers = reconcilers

    def upsert_many(
        self,
        user: str,
        payloads: Iterable[ObjectPayload],
        source_qualified_name: str,
        *,
        operation: str = "upsert_many",
        checkpoint: Callable[[], None] | None = None,
    ) -> BatchResult:
        result = BatchResult()
        for position, payload in enumerate(payloads):
            reconciler = self.reconcilers.get(payload.kind)
            try:
                if reconciler is None:
                    raise ValidationError(  # noqa: TRY301
                        f"No reconciler registered for {payload.kind}",
                        qualified_name=payload.qualified_name,
                        operation=operation,
                    )
                object_id = reconciler.reconcile(
                    user,
                    payload,
                    source_qualified_name,
                    operation=operation,
                )
            except CatalogError:
                log.warning(
                    "%s stopped at item %d (%r) after %d applied",
                    operation,
                    position,
                    payload.qualified_name,
                    result.applied,
                )
                raise
            result.ids.append(object_id)
            if checkpoint is not None:
                checkpoint()

        log.info(
            "%s applied %d item(s) from source %r",
            operation,
            result.applied,
            source_qualified_name,
        )
        return result
