"""Select the feature entries a build unlocks inside a level window."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from abcsync.domain.model import BuildRecord, FeatureEntry


def select_entries(build: BuildRecord, min_level: int, actor_level: int) -> list[FeatureEntry]:
    """Return the entries of ``build`` with ``min_level < level <= actor_level``."""

    if min_level >= actor_level:
        return []
    return [entry for entry in build.entries if min_level < entry.level <= actor_level]


__all__ = ["select_entries"]
