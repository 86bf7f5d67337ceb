"""Ports for reading records from repositories and the local registry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from abcsync.domain.model import RawRecord, RecordId, RepositoryName


@runtime_checkable
class FeatureRepository(Protocol):
    """Named remote collection queryable in batches."""

    def query_by_ids(self, ids: Collection[RecordId]) -> Sequence[RawRecord]: ...

    def query_by_slug(self, slug: str) -> Sequence[RawRecord]: ...


@runtime_checkable
class RepositoryCatalog(Protocol):
    """Lookup of repositories by name.

    ``get`` raises :class:`~abcsync.domain.errors.RepositoryNotFound` for
    unregistered names.
    """

    def get(self, name: RepositoryName) -> FeatureRepository: ...


@runtime_checkable
class LocalRegistry(Protocol):
    """Already loaded records addressable by id only."""

    def get(self, record_id: RecordId) -> RawRecord | None: ...


__all__ = ["FeatureRepository", "LocalRegistry", "RepositoryCatalog"]
