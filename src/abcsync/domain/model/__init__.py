"""Domain model for build records and the features they grant."""

from __future__ import annotations

from .entity import DEFAULT_ID_LENGTH, random_id
from .enums import BuildKind, FeatType, RecordType
from .primitives import (
    RecordId,
    RepositoryName,
    SlotId,
    SourceId,
    local_source_id,
    repository_source_id,
    sluggify,
)
from .records import (
    BuildRecord,
    Feature,
    FeatureEntry,
    FeatureRef,
    LocalRef,
    Record,
    RepositoryRef,
)
from .schema import (
    BuildSource,
    FeatSource,
    FeatureEntrySource,
    RawRecord,
    RecordSource,
    dump_build,
    dump_feat,
    parse_build,
    parse_feat,
)

__all__ = [
    "DEFAULT_ID_LENGTH",
    "BuildKind",
    "BuildRecord",
    "BuildSource",
    "FeatSource",
    "FeatType",
    "Feature",
    "FeatureEntry",
    "FeatureEntrySource",
    "FeatureRef",
    "LocalRef",
    "RawRecord",
    "Record",
    "RecordId",
    "RecordSource",
    "RecordType",
    "RepositoryName",
    "RepositoryRef",
    "SlotId",
    "SourceId",
    "dump_build",
    "dump_feat",
    "local_source_id",
    "parse_build",
    "parse_feat",
    "random_id",
    "repository_source_id",
    "sluggify",
]
