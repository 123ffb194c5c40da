"""Reconciliation engine settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from catalogsync.domain.model.enums import DeleteSemantic

from .env import read_env_list
from .errors import ConfigurationError

DELETE_SEMANTICS_ENV_VAR: Final[str] = "CATALOGSYNC_DELETE_SEMANTICS"


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Holds the delete semantics the removal validator accepts."""

    delete_semantics: frozenset[DeleteSemantic] = field(
        default_factory=lambda: frozenset(DeleteSemantic)
    )

    def supports(self, semantic: DeleteSemantic) -> bool:
        return semantic in self.delete_semantics


def parse_delete_semantics(names: tuple[str, ...]) -> frozenset[DeleteSemantic]:
    """Map names such as ``("soft", "HARD")`` onto delete semantics."""

    semantics: set[DeleteSemantic] = set()
    for name in names:
        try:
            semantics.add(DeleteSemantic(name.lower()))
        except ValueError as exc:
            raise ConfigurationError(f"Unknown delete semantic: {name!r}") from exc
    if not semantics:
        raise ConfigurationError(f"{DELETE_SEMANTICS_ENV_VAR} must name at least one semantic")
    return frozenset(semantics)


def get_engine_config() -> EngineConfig:
    names = read_env_list(DELETE_SEMANTICS_ENV_VAR)
    if names is None:
        return EngineConfig()
    return EngineConfig(delete_semantics=parse_delete_semantics(names))
