"""Logging setup for the command line."""

from __future__ import annotations

import logging
from typing import Final

from .env import read_env
from .errors import ConfigurationError

LOG_LEVEL_ENV_VAR: Final[str] = "CATALOGSYNC_LOG_LEVEL"
LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# SQLAlchemy echoes every statement at INFO once a root handler exists
_NOISY_LOGGERS: Final[tuple[str, ...]] = ("sqlalchemy.engine",)


def resolve_log_level(value: str | None) -> int:
    """Turn ``"debug"``, ``"INFO"`` or ``"10"`` into a logging level."""

    if value is None:
        return logging.INFO
    if value.isdigit():
        return int(value)
    level = logging.getLevelNamesMapping().get(value.upper())
    if level is None:
        raise ConfigurationError(f"{LOG_LEVEL_ENV_VAR}: unknown log level {value!r}")
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Configure the root logger.

    ``level`` wins over ``CATALOGSYNC_LOG_LEVEL``, which wins over INFO. Calling
    this twice is a no-op unless ``force`` is set.
    """

    effective = level if level is not None else resolve_log_level(read_env(LOG_LEVEL_ENV_VAR))
    logging.basicConfig(level=effective, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(effective, logging.WARNING))
