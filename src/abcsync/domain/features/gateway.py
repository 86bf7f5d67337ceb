"""Uniform access to remote repositories and the local registry."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from abcsync.domain.errors import AbcSyncError, LookupFailed, NameNotFound
from abcsync.domain.model import sluggify

if TYPE_CHECKING:
    from collections.abc import Collection, Mapping

    from abcsync.domain.model import RawRecord, RecordId, RepositoryName
    from abcsync.domain.ports import LocalRegistry, RepositoryCatalog

log = getLogger(__name__)


@dataclass(slots=True)
class RepositoryGateway:
    """Fetch raw records by id, by name, or from the local registry."""

    catalog: RepositoryCatalog
    local_registry: LocalRegistry

    def fetch_by_ids(
        self,
        repository: RepositoryName,
        ids: Collection[RecordId],
    ) -> list[RawRecord]:
        """Run one batched query for ``ids`` against ``repository``."""

        handle = self.catalog.get(repository)
        try:
            records = list(handle.query_by_ids(ids))
        except AbcSyncError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise LookupFailed(repository, str(exc)) from exc
        log.debug("Fetched %d of %d records from %s", len(records), len(ids), repository)
        return records

    def fetch_groups(
        self,
        groups: Mapping[RepositoryName, Collection[RecordId]],
    ) -> dict[RepositoryName, list[RawRecord]]:
        """Fetch every group with one query per repository.

        Groups are fetched in mapping order and the result is only returned
        once all of them completed.
        """

        return {
            repository: self.fetch_by_ids(repository, ids) for repository, ids in groups.items()
        }

    def fetch_local(self, record_id: RecordId) -> RawRecord | None:
        return self.local_registry.get(record_id)

    def fetch_by_name(self, repository: RepositoryName, name: str) -> RawRecord:
        """Return the single record of ``repository`` whose slug matches ``name``."""

        slug = sluggify(name)
        handle = self.catalog.get(repository)
        try:
            matches = list(handle.query_by_slug(slug))
        except AbcSyncError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise LookupFailed(repository, str(exc)) from exc
        if len(matches) != 1:
            raise NameNotFound(repository, name, len(matches))
        return matches[0]


__all__ = ["RepositoryGateway"]
