"""Errors raised while reading settings and input documents."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class ConfigurationError(RuntimeError):
    """A setting or input file cannot be used."""


class InvalidDocumentError(ConfigurationError):
    """A JSON document on disk does not have the expected shape."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid document {path}: {reason}")
        self.path = path
        self.reason = reason
