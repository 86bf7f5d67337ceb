"""Typed readers for optional environment settings."""

from __future__ import annotations

import os

from .errors import ConfigurationError


def env_str(name: str, default: str) -> str:
    """Return ``name`` stripped, or ``default`` when unset or blank."""

    value = os.getenv(name, "").strip()
    return value or default


def env_int(
    name: str,
    default: int,
    *,
    minimum: int | None = None,
    maximum: int | None = None,
) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
    if (minimum is not None and value < minimum) or (maximum is not None and value > maximum):
        raise ConfigurationError(f"{name} must be between {minimum} and {maximum}, got {value}")
    return value
