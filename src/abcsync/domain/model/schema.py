"""Pydantic models describing raw repository records.

Repositories and the local registry hand out plain JSON documents. The
models below validate their shape before the engine turns them into
:class:`~abcsync.domain.model.records.Feature` and
:class:`~abcsync.domain.model.records.BuildRecord` instances.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from abcsync.domain.errors import InvalidReference, UnsupportedBuildKind
from abcsync.domain.model.enums import BuildKind, FeatType, RecordType
from abcsync.domain.model.primitives import sluggify
from abcsync.domain.model.records import (
    BuildRecord,
    Feature,
    FeatureEntry,
    FeatureRef,
    LocalRef,
    RepositoryRef,
)

type RawRecord = Mapping[str, Any]


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class SourceModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class FeatureEntrySource(SourceModel):
    id: str
    pack: str | None = None
    level: int = Field(default=1, ge=0)

    _normalize_pack = field_validator("pack", mode="before")(_blank_to_none)

    def to_entry(self, slot_id: str) -> FeatureEntry:
        reference: FeatureRef = (
            RepositoryRef(repository=self.pack, record_id=self.id)
            if self.pack is not None
            else LocalRef(record_id=self.id)
        )
        return FeatureEntry(slot_id=slot_id, level=self.level, reference=reference)


class RecordSource(SourceModel):
    id: str = Field(alias="_id")
    type: str
    name: str
    slug: str | None = None

    _normalize_slug = field_validator("slug", mode="before")(_blank_to_none)

    @model_validator(mode="after")
    def _default_slug(self) -> RecordSource:
        if self.slug is None:
            self.slug = sluggify(self.name)
        return self


class FeatSource(RecordSource):
    """Feat record as stored in a repository."""

    level: int = Field(default=0, ge=0)
    feat_type: FeatType | str = Field(default=FeatType.BONUS, alias="featType")
    location: str | None = None
    traits: list[str] = Field(default_factory=list)
    description: str = ""

    _normalize_location = field_validator("location", mode="before")(_blank_to_none)

    @field_validator("feat_type", mode="after")
    @classmethod
    def _known_feat_type(cls, value: FeatType | str) -> FeatType | str:
        try:
            return FeatType(value)
        except ValueError:
            return value

    @property
    def is_class_feature(self) -> bool:
        return self.feat_type == FeatType.CLASS_FEATURE

    def to_feature(self, *, source_id: str | None = None) -> Feature:
        """Translate into a prepared domain feature keeping the record's own id."""

        return Feature(
            id=self.id,
            name=self.name,
            slug=self.slug or sluggify(self.name),
            feat_type=self.feat_type,
            level=self.level,
            location_id=self.location,
            source_id=source_id,
            traits=tuple(self.traits),
            description=self.description,
        ).prepare()


class BuildSource(RecordSource):
    """Ancestry, background or class record as stored in a repository."""

    items: dict[str, FeatureEntrySource] = Field(default_factory=dict)
    inserted_class_features_level: int | None = Field(
        default=None, alias="insertedClassFeaturesLevel"
    )

    def to_build(self, *, source_id: str | None = None) -> BuildRecord:
        try:
            kind = BuildKind(self.type)
        except ValueError as exc:
            raise UnsupportedBuildKind(
                f"Invalid record type for build creation: {self.type}"
            ) from exc
        return BuildRecord(
            id=self.id,
            kind=kind,
            name=self.name,
            slug=self.slug or sluggify(self.name),
            features={slot: entry.to_entry(slot) for slot, entry in self.items.items()},
            source_id=source_id,
            inserted_class_features_level=self.inserted_class_features_level,
        )


def parse_feat(raw: RawRecord) -> FeatSource:
    """Validate ``raw`` as a feat record or raise :class:`InvalidReference`."""

    record_id = str(raw.get("_id", raw.get("id", "?")))
    record_type = raw.get("type")
    if record_type != RecordType.FEAT:
        raise InvalidReference(record_id, f"expected a feat record, got {record_type!r}")
    try:
        return FeatSource.model_validate(raw)
    except ValidationError as exc:
        raise InvalidReference(
            record_id, f"malformed feat record ({exc.error_count()} errors)"
        ) from exc


def parse_build(raw: RawRecord, *, source_id: str | None = None) -> BuildRecord:
    """Validate ``raw`` as a build record and translate it."""

    try:
        source = BuildSource.model_validate(raw)
    except ValidationError as exc:
        record_id = str(raw.get("_id", raw.get("id", "?")))
        raise InvalidReference(
            record_id, f"malformed build record ({exc.error_count()} errors)"
        ) from exc
    return source.to_build(source_id=source_id)


def dump_feat(feature: Feature) -> dict[str, Any]:
    """Return the raw document form of ``feature``."""

    return {
        "_id": feature.id,
        "type": RecordType.FEAT.value,
        "name": feature.name,
        "slug": feature.slug,
        "level": feature.level,
        "featType": str(feature.feat_type),
        "location": feature.location_id,
        "traits": list(feature.traits),
        "description": feature.description,
    }


def dump_build(build: BuildRecord) -> dict[str, Any]:
    """Return the raw document form of ``build``."""

    items: dict[str, dict[str, object]] = {}
    for slot_id, entry in build.features.items():
        payload: dict[str, object] = {"id": entry.record_id, "level": entry.level}
        if entry.repository is not None:
            payload["pack"] = entry.repository
        items[slot_id] = payload
    document: dict[str, Any] = {
        "_id": build.id,
        "type": str(build.kind),
        "name": build.name,
        "slug": build.slug,
        "items": items,
    }
    if build.inserted_class_features_level is not None:
        document["insertedClassFeaturesLevel"] = build.inserted_class_features_level
    return document
