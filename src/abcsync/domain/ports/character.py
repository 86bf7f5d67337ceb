"""Ports for reading and mutating the records attached to a character."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from abcsync.domain.model import BuildKind, BuildRecord, Feature, FeatType, Record, RecordId


@runtime_checkable
class CharacterRecord(Protocol):
    """Character collaborator the engine attaches records to.

    ``attach`` and ``detach`` are each atomic from the caller's view. ``quiet``
    suppresses user-facing refresh notifications.
    """

    @property
    def level(self) -> int: ...

    def attached_record_of(self, kind: BuildKind) -> BuildRecord | None: ...

    def attached_features(self, feat_type: FeatType | None = None) -> Sequence[Feature]: ...

    def attach(
        self,
        records: Sequence[Record],
        *,
        preserve_ids: bool = False,
        quiet: bool = False,
    ) -> Sequence[Record]: ...

    def detach(self, ids: Sequence[RecordId], *, quiet: bool = False) -> None: ...


@runtime_checkable
class LevelledCharacter(CharacterRecord, Protocol):
    """Character whose level can be recorded after a level change."""

    def set_level(self, level: int) -> None: ...


__all__ = ["CharacterRecord", "LevelledCharacter"]
