"""Keep a character's class features in line with its level."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from abcsync.domain.model import BuildKind, FeatType

from .selector import select_entries

if TYPE_CHECKING:
    from abcsync.domain.model import Feature, RecordId
    from abcsync.domain.ports import CharacterRecord

    from .resolver import FeatureResolver

log = getLogger(__name__)


@dataclass(slots=True)
class SyncResult:
    """Class features added and removed by one synchronisation."""

    added: list[Feature] = field(default_factory=list["Feature"])
    removed: list[RecordId] = field(default_factory=list[str])

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


@dataclass(slots=True)
class LevelSynchronizer:
    """Add or remove class features for a level change.

    Calling :meth:`sync` twice with the same level is a no-op the second
    time: features already attached (by origin identity) are not added
    again and nothing above the level is left to remove.
    """

    resolver: FeatureResolver

    def sync(self, character: CharacterRecord, new_level: int) -> SyncResult:
        """Add or remove class features for a move from ``character.level`` to ``new_level``.

        The character's level is left untouched: the caller records
        ``new_level`` (see ``app.change_level``) before the next call, otherwise
        the next window is still measured from the old level.
        """

        character_class = character.attached_record_of(BuildKind.CLASS)
        if character_class is None:
            return SyncResult()

        current = character.attached_features(FeatType.CLASS_FEATURE)
        result = SyncResult()
        if new_level > character.level:
            known_sources = {feature.source_id for feature in current if feature.source_id}
            candidates = self.resolver.resolve(
                select_entries(character_class, character.level, new_level),
                character_class.id,
            )
            result.added = [
                feature for feature in candidates if feature.source_id not in known_sources
            ]
            if result.added:
                character.attach(result.added, preserve_ids=True, quiet=True)
        elif new_level < character.level:
            result.removed = [feature.id for feature in current if feature.level > new_level]
            if result.removed:
                character.detach(result.removed, quiet=True)

        if result.changed:
            log.info(
                "Synchronised class features from level %s to %s: added=%d, removed=%d",
                character.level,
                new_level,
                len(result.added),
                len(result.removed),
            )
        return result


__all__ = ["LevelSynchronizer", "SyncResult"]
