"""Build records, feature entries and resolved features.

Build records and their feature entries are read-only inputs. Features are
created fresh by every resolution call and are owned by the character they
are attached to.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING

from abcsync.domain.model.enums import BuildKind

if TYPE_CHECKING:
    from collections.abc import Mapping

    from abcsync.domain.model.enums import FeatType
    from abcsync.domain.model.primitives import RecordId, RepositoryName, SlotId, SourceId


@dataclass(frozen=True, slots=True)
class RepositoryRef:
    """Reference to a record held by a named remote repository."""

    repository: RepositoryName
    record_id: RecordId


@dataclass(frozen=True, slots=True)
class LocalRef:
    """Reference to a record held by the local registry."""

    record_id: RecordId


type FeatureRef = RepositoryRef | LocalRef


@dataclass(frozen=True, slots=True)
class FeatureEntry:
    """Declarative slot of a build record pointing at a grantable feature.

    ``level`` is the character level that unlocks the feature. For entries of
    a class it overrides the level the referenced record carries itself.
    """

    slot_id: SlotId
    level: int
    reference: FeatureRef

    def __post_init__(self) -> None:
        if not isinstance(self.reference, (RepositoryRef, LocalRef)):
            raise TypeError("FeatureEntry reference must be a RepositoryRef or a LocalRef")
        if self.level < 0:
            raise ValueError("FeatureEntry level must be non-negative")

    @property
    def record_id(self) -> RecordId:
        return self.reference.record_id

    @property
    def repository(self) -> RepositoryName | None:
        if isinstance(self.reference, RepositoryRef):
            return self.reference.repository
        return None


@dataclass(eq=False, kw_only=True)
class BuildRecord:
    """Ancestry, background or class definition.

    ``kind`` holds a :class:`BuildKind` for every supported record; other
    values are carried through so the orchestrator can reject them.
    """

    id: RecordId
    kind: BuildKind | str
    name: str
    slug: str
    features: Mapping[SlotId, FeatureEntry] = field(default_factory=dict[str, FeatureEntry])
    source_id: SourceId | None = None
    inserted_class_features_level: int | None = None

    def __post_init__(self) -> None:
        self.features = MappingProxyType(dict(self.features))

    @property
    def entries(self) -> tuple[FeatureEntry, ...]:
        return tuple(self.features.values())

    def copy_with(
        self,
        *,
        id: RecordId,  # noqa: A002
        inserted_class_features_level: int | None = None,
    ) -> BuildRecord:
        """Return a copy carrying a new identity (and class level marker)."""

        return replace(
            self,
            id=id,
            inserted_class_features_level=(
                inserted_class_features_level
                if inserted_class_features_level is not None
                else self.inserted_class_features_level
            ),
        )


@dataclass(eq=False, kw_only=True)
class Feature:
    """Materialised feature record ready to be attached to a character.

    ``sort_key`` and ``level_label`` are derived from ``level`` by
    :meth:`prepare`; reading them before preparation is an error.
    """

    id: RecordId
    name: str
    slug: str
    feat_type: FeatType | str
    level: int
    location_id: RecordId | None = None
    source_id: SourceId | None = None
    traits: tuple[str, ...] = ()
    description: str = ""

    _sort_key: tuple[int, str] | None = field(default=None, init=False, repr=False)
    _level_label: str | None = field(default=None, init=False, repr=False)

    def prepare(self) -> Feature:
        """Compute the level-derived fields."""

        self._sort_key = (self.level, self.name)
        self._level_label = f"Level {self.level}"
        return self

    @property
    def is_prepared(self) -> bool:
        return self._sort_key is not None

    @property
    def sort_key(self) -> tuple[int, str]:
        if self._sort_key is None:
            raise RuntimeError(f"Feature {self.id} has not been prepared")
        return self._sort_key

    @property
    def level_label(self) -> str:
        if self._level_label is None:
            raise RuntimeError(f"Feature {self.id} has not been prepared")
        return self._level_label

    def clone(self, *, id: RecordId, location_id: RecordId | None = None) -> Feature:  # noqa: A002
        """Return a prepared copy with a new identity and (optional) location."""

        return replace(self, id=id, location_id=location_id).prepare()


type Record = Feature | BuildRecord
