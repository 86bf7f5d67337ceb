"""Turn feature entries into freshly identified feature records.

Repository entries are grouped by repository and fetched in one batch per
group. Class features fetched this way take the level of the entry that
granted them; the override is applied to the raw source before the domain
feature is prepared, so every level-derived field sees it. Local entries are
read one by one from the local registry and keep no location.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from abcsync.domain.errors import InvalidReference
from abcsync.domain.model import (
    LocalRef,
    RepositoryRef,
    local_source_id,
    parse_feat,
    repository_source_id,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from abcsync.domain.model import Feature, FeatureEntry, RecordId, RepositoryName
    from abcsync.domain.ports import IdGenerator

    from .gateway import RepositoryGateway

log = getLogger(__name__)


@dataclass(slots=True)
class FeatureResolver:
    """Resolve feature entries against the repository gateway."""

    gateway: RepositoryGateway
    new_id: IdGenerator

    def resolve(
        self,
        entries: Iterable[FeatureEntry],
        location_id: RecordId | None,
    ) -> list[Feature]:
        """Return resolved features: repository results first, then local ones."""

        repository_entries: list[tuple[RepositoryRef, FeatureEntry]] = []
        local_entries: list[tuple[LocalRef, FeatureEntry]] = []
        for entry in entries:
            match entry.reference:
                case RepositoryRef() as reference:
                    repository_entries.append((reference, entry))
                case LocalRef() as reference:
                    local_entries.append((reference, entry))

        features = self._resolve_repository_entries(repository_entries, location_id)
        features.extend(self._resolve_local_entries(local_entries))
        log.debug(
            "Resolved %d features (%d repository, %d local) for location %s",
            len(features),
            len(repository_entries),
            len(local_entries),
            location_id,
        )
        return features

    def _resolve_repository_entries(
        self,
        entries: Sequence[tuple[RepositoryRef, FeatureEntry]],
        location_id: RecordId | None,
    ) -> list[Feature]:
        if not entries:
            return []

        groups: dict[RepositoryName, list[RecordId]] = {}
        levels: dict[tuple[RepositoryName, RecordId], int] = {}
        for reference, entry in entries:
            ids = groups.setdefault(reference.repository, [])
            if reference.record_id not in ids:
                ids.append(reference.record_id)
            levels.setdefault((reference.repository, reference.record_id), entry.level)

        fetched = self.gateway.fetch_groups(groups)

        features: list[Feature] = []
        for repository, records in fetched.items():
            for raw in records:
                source = parse_feat(raw)
                entry_level = levels.get((repository, source.id))
                if entry_level is not None and source.is_class_feature:
                    source.level = entry_level
                feature = source.to_feature(
                    source_id=repository_source_id(repository, source.id),
                )
                features.append(feature.clone(id=self.new_id(), location_id=location_id))
        return features

    def _resolve_local_entries(
        self,
        entries: Sequence[tuple[LocalRef, FeatureEntry]],
    ) -> list[Feature]:
        features: list[Feature] = []
        for reference, _entry in entries:
            raw = self.gateway.fetch_local(reference.record_id)
            if raw is None:
                raise InvalidReference(reference.record_id, "not present in the local registry")
            source = parse_feat(raw)
            feature = source.to_feature(source_id=local_source_id(source.id))
            features.append(feature.clone(id=self.new_id()))
        return features


__all__ = ["FeatureResolver"]
