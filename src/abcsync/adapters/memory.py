"""In-memory implementations of the repository, registry and character ports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from abcsync.domain.errors import RepositoryNotFound
from abcsync.domain.model import BuildKind, BuildRecord, Feature, random_id, sluggify

if TYPE_CHECKING:
    from collections.abc import Callable, Collection, Iterable, Mapping, Sequence

    from abcsync.domain.model import FeatType, RawRecord, Record, RecordId, RepositoryName


def _record_id(raw: Mapping[str, Any]) -> RecordId:
    return str(raw["_id"])


def _record_slug(raw: Mapping[str, Any]) -> str:
    slug = raw.get("slug")
    if isinstance(slug, str) and slug.strip():
        return slug
    return sluggify(str(raw.get("name", "")))


class InMemoryRepository:
    """Repository keeping raw records in insertion order."""

    def __init__(self, records: Iterable[RawRecord] = ()) -> None:
        self._records: dict[RecordId, RawRecord] = {}
        self.queries: list[tuple[str, object]] = []
        for record in records:
            self.add(record)

    def add(self, record: RawRecord) -> None:
        self._records[_record_id(record)] = dict(record)

    def query_by_ids(self, ids: Collection[RecordId]) -> list[RawRecord]:
        wanted = set(ids)
        self.queries.append(("ids", frozenset(wanted)))
        return [dict(record) for key, record in self._records.items() if key in wanted]

    def query_by_slug(self, slug: str) -> list[RawRecord]:
        self.queries.append(("slug", slug))
        return [dict(record) for record in self._records.values() if _record_slug(record) == slug]


class InMemoryCatalog:
    """Catalog of named in-memory repositories."""

    def __init__(
        self,
        repositories: Mapping[RepositoryName, InMemoryRepository] | None = None,
    ) -> None:
        self._repositories: dict[RepositoryName, InMemoryRepository] = dict(repositories or {})

    def register(self, name: RepositoryName, repository: InMemoryRepository) -> None:
        self._repositories[name] = repository

    def get(self, name: RepositoryName) -> InMemoryRepository:
        try:
            return self._repositories[name]
        except KeyError as exc:
            raise RepositoryNotFound(name) from exc


class InMemoryLocalRegistry:
    """Local registry addressable by record id."""

    def __init__(self, records: Iterable[RawRecord] = ()) -> None:
        self._records: dict[RecordId, RawRecord] = {}
        for record in records:
            self.add(record)

    def add(self, record: RawRecord) -> None:
        self._records[_record_id(record)] = record

    def get(self, record_id: RecordId) -> RawRecord | None:
        record = self._records.get(record_id)
        return dict(record) if record is not None else None


@dataclass(slots=True)
class AttachCall:
    records: tuple[Record, ...]
    preserve_ids: bool
    quiet: bool


@dataclass(slots=True)
class DetachCall:
    ids: tuple[RecordId, ...]
    quiet: bool


@dataclass(eq=False, kw_only=True)
class InMemoryCharacter:
    """Character holding its attached records in memory.

    Every attach and detach call is recorded in ``attach_calls`` and
    ``detach_calls``.
    """

    name: str = "Character"
    level: int = 1
    new_id: Callable[[], RecordId] = field(default=random_id, repr=False)
    _builds: dict[BuildKind, BuildRecord] = field(default_factory=dict, repr=False)
    _features: list[Feature] = field(default_factory=list["Feature"], repr=False)
    attach_calls: list[AttachCall] = field(default_factory=list["AttachCall"], repr=False)
    detach_calls: list[DetachCall] = field(default_factory=list["DetachCall"], repr=False)

    @property
    def builds(self) -> tuple[BuildRecord, ...]:
        return tuple(self._builds.values())

    @property
    def features(self) -> tuple[Feature, ...]:
        return tuple(self._features)

    def set_level(self, level: int) -> None:
        if level < 0:
            raise ValueError("Character level must be non-negative")
        self.level = level

    def attached_record_of(self, kind: BuildKind) -> BuildRecord | None:
        return self._builds.get(kind)

    def attached_features(self, feat_type: FeatType | None = None) -> list[Feature]:
        if feat_type is None:
            return list(self._features)
        return [feature for feature in self._features if feature.feat_type == feat_type]

    def attach(
        self,
        records: Sequence[Record],
        *,
        preserve_ids: bool = False,
        quiet: bool = False,
    ) -> list[Record]:
        builds = [record for record in records if isinstance(record, BuildRecord)]
        kinds = [BuildKind(build.kind) for build in builds]
        for kind in kinds:
            if kind in self._builds or kinds.count(kind) > 1:
                raise ValueError(f"Character already has a {kind} attached")

        self.attach_calls.append(AttachCall(tuple(records), preserve_ids, quiet))
        for record in records:
            if not preserve_ids:
                record.id = self.new_id()
            if isinstance(record, BuildRecord):
                self._builds[BuildKind(record.kind)] = record
            else:
                self._features.append(record)
        return list(records)

    def detach(self, ids: Sequence[RecordId], *, quiet: bool = False) -> None:
        self.detach_calls.append(DetachCall(tuple(ids), quiet))
        doomed = set(ids)
        self._builds = {kind: b for kind, b in self._builds.items() if b.id not in doomed}
        self._features = [feature for feature in self._features if feature.id not in doomed]


__all__ = [
    "AttachCall",
    "DetachCall",
    "InMemoryCatalog",
    "InMemoryCharacter",
    "InMemoryLocalRegistry",
    "InMemoryRepository",
]
