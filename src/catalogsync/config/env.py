"""Reading settings from the process environment.

Blank values are treated exactly like unset ones, so an empty line in a
``.env`` file never overrides a default.
"""

from __future__ import annotations

import os


def read_env(name: str, *, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def read_env_list(name: str) -> tuple[str, ...] | None:
    """Split a comma separated setting, dropping empty items. ``None`` when unset."""

    value = read_env(name)
    if value is None:
        return None
    return tuple(item.strip() for item in value.split(",") if item.strip())
