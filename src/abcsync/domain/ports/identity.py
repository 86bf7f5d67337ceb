"""Port for generating record identifiers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from abcsync.domain.model import RecordId


class IdGenerator(Protocol):
    """Callable returning a fresh fixed-length identifier."""

    def __call__(self) -> RecordId: ...


__all__ = ["IdGenerator"]
