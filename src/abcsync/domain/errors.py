"""Error kinds raised by the feature resolution engine.

Every error raised during resolution aborts the whole top-level call and is
propagated unchanged; callers translate the kinds into user-facing messages.
"""

from __future__ import annotations


class AbcSyncError(RuntimeError):
    """Base class for engine errors."""


class UnsupportedBuildKind(AbcSyncError):
    """Raised when a build record is not an ancestry, background or class."""


class RepositoryNotFound(AbcSyncError):
    """Raised when a named repository is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Repository '{name}' does not exist")
        self.name = name


class LookupFailed(AbcSyncError):
    """Raised when a batched repository query fails."""

    def __init__(self, repository: str, reason: str) -> None:
        super().__init__(f"Lookup in repository '{repository}' failed: {reason}")
        self.repository = repository
        self.reason = reason


class InvalidReference(AbcSyncError):
    """Raised when a feature entry resolves to something that is not a feature."""

    def __init__(self, record_id: str, reason: str) -> None:
        super().__init__(f"Invalid feature reference '{record_id}': {reason}")
        self.record_id = record_id
        self.reason = reason


class NameNotFound(AbcSyncError):
    """Raised when a name lookup yields zero or several records."""

    def __init__(self, repository: str, name: str, matches: int) -> None:
        super().__init__(f"Cannot find '{name}' in repository '{repository}' ({matches} matches)")
        self.repository = repository
        self.name = name
        self.matches = matches


__all__ = [
    "AbcSyncError",
    "InvalidReference",
    "LookupFailed",
    "NameNotFound",
    "RepositoryNotFound",
    "UnsupportedBuildKind",
]
