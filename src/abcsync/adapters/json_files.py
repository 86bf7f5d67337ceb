"""JSON document adapters for characters and record dumps."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING, Any, cast

from pydantic import Field, ValidationError

from abcsync.adapters.memory import InMemoryCharacter
from abcsync.config import InvalidDocumentError
from abcsync.domain.model import (
    BuildKind,
    BuildSource,
    FeatSource,
    dump_build,
    dump_feat,
    random_id,
)
from abcsync.domain.model.schema import SourceModel

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from abcsync.domain.model import BuildRecord, RawRecord, RecordId

log = getLogger(__name__)


class CharacterFeatureDocument(FeatSource):
    source_id: str | None = Field(default=None, alias="sourceId")


class CharacterBuildDocument(BuildSource):
    source_id: str | None = Field(default=None, alias="sourceId")


class CharacterDocument(SourceModel):
    name: str = "Character"
    level: int = Field(default=1, ge=0)
    builds: list[CharacterBuildDocument] = Field(default_factory=list)
    features: list[CharacterFeatureDocument] = Field(default_factory=list)


def load_character(
    path: Path,
    *,
    new_id: Callable[[], RecordId] = random_id,
) -> InMemoryCharacter:
    """Read a character document into an in-memory character."""

    try:
        document = CharacterDocument.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as exc:
        raise InvalidDocumentError(path, f"{exc.error_count()} validation errors") from exc

    builds: dict[BuildKind, BuildRecord] = {}
    for build_document in document.builds:
        build = build_document.to_build(source_id=build_document.source_id)
        builds[BuildKind(build.kind)] = build
    features = [
        feature_document.to_feature(source_id=feature_document.source_id)
        for feature_document in document.features
    ]
    log.debug("Loaded character %s from %s", document.name, path)
    return InMemoryCharacter(
        name=document.name,
        level=document.level,
        new_id=new_id,
        _builds=builds,
        _features=features,
    )


def save_character(path: Path, character: InMemoryCharacter) -> None:
    """Write ``character`` back as a JSON document."""

    builds: list[dict[str, Any]] = []
    for build in character.builds:
        document = dump_build(build)
        document["sourceId"] = build.source_id
        builds.append(document)
    features: list[dict[str, Any]] = []
    for feature in character.features:
        document = dump_feat(feature)
        document["sourceId"] = feature.source_id
        features.append(document)
    payload = {
        "name": character.name,
        "level": character.level,
        "builds": builds,
        "features": features,
    }
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")


def read_records(path: Path) -> list[RawRecord]:
    """Read raw records from a JSON array file or a JSON-lines file."""

    text = path.read_text(encoding="utf-8")
    try:
        if text.lstrip().startswith("["):
            loaded = json.loads(text)
        else:
            loaded = [json.loads(line) for line in text.splitlines() if line.strip()]
    except json.JSONDecodeError as exc:
        raise InvalidDocumentError(path, str(exc)) from exc
    if not isinstance(loaded, list) or not all(isinstance(item, dict) for item in loaded):
        raise InvalidDocumentError(path, "expected JSON objects")
    return cast("list[RawRecord]", loaded)


__all__ = [
    "CharacterDocument",
    "load_character",
    "read_records",
    "save_character",
]
