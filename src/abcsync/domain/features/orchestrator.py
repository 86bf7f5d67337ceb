"""Attach an ancestry, background or class to a character.

The record of the same kind that is currently attached is detached first,
together with the features located on it. The detach is not undone when a
later step fails: the error propagates and the character is left without a
record of that kind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from abcsync.domain.errors import UnsupportedBuildKind
from abcsync.domain.model import BuildKind, parse_feat, repository_source_id

from .selector import select_entries

if TYPE_CHECKING:
    from collections.abc import Sequence

    from abcsync.domain.model import BuildRecord, Feature, Record, RepositoryName
    from abcsync.domain.ports import CharacterRecord, IdGenerator

    from .gateway import RepositoryGateway
    from .resolver import FeatureResolver

log = getLogger(__name__)

ASSURANCE_SLUG = "assurance"
DEFAULT_FEATS_REPOSITORY = "feats-srd"


@dataclass(frozen=True, slots=True)
class AttachOptions:
    """Per-call options for :meth:`AbcAttachOrchestrator.attach`.

    Each skill in ``assurance_skills`` replaces the next granted ``assurance``
    feature with its skill-specific variant.
    """

    assurance_skills: Sequence[str] = field(default_factory=tuple)


@dataclass(slots=True)
class AbcAttachOrchestrator:
    """Entry point for attaching build records."""

    resolver: FeatureResolver
    new_id: IdGenerator
    feats_repository: RepositoryName = DEFAULT_FEATS_REPOSITORY

    @property
    def gateway(self) -> RepositoryGateway:
        return self.resolver.gateway

    def attach(
        self,
        build: BuildRecord,
        character: CharacterRecord,
        options: AttachOptions | None = None,
    ) -> list[Record]:
        """Replace the character's record of ``build.kind`` with ``build``."""

        active_options = options or AttachOptions()
        match build.kind:
            case BuildKind.ANCESTRY | BuildKind.BACKGROUND:
                created = self._attach_origin(build, character, active_options)
            case BuildKind.CLASS:
                created = self._attach_class(build, character)
            case _:
                raise UnsupportedBuildKind(f"Invalid record type for build creation: {build.kind}")
        log.info("Attached %s '%s' with %d records", build.kind, build.name, len(created))
        return created

    def _attach_origin(
        self,
        build: BuildRecord,
        character: CharacterRecord,
        options: AttachOptions,
    ) -> list[Record]:
        self._detach_existing(character, BuildKind(build.kind))
        record = build.copy_with(id=self.new_id())
        features = self.resolver.resolve(record.entries, record.id)
        for skill in options.assurance_skills:
            self._substitute_assurance(features, skill)
        return list(character.attach([record, *features], preserve_ids=True))

    def _attach_class(self, build: BuildRecord, character: CharacterRecord) -> list[Record]:
        self._detach_existing(character, BuildKind.CLASS)
        level = character.level
        record = build.copy_with(id=self.new_id(), inserted_class_features_level=level)
        features = self.resolver.resolve(select_entries(record, 0, level), record.id)
        features.sort(key=lambda feature: feature.sort_key)
        return list(character.attach([*features, record], preserve_ids=True))

    def _detach_existing(self, character: CharacterRecord, kind: BuildKind) -> None:
        existing = character.attached_record_of(kind)
        if existing is None:
            return
        ids = [existing.id]
        ids.extend(
            feature.id
            for feature in character.attached_features()
            if feature.location_id == existing.id
        )
        log.info("Detaching %s '%s' and %d located features", kind, existing.name, len(ids) - 1)
        character.detach(ids)

    def _substitute_assurance(self, features: list[Feature], skill: str) -> None:
        index = next(
            (i for i, feature in enumerate(features) if feature.slug == ASSURANCE_SLUG),
            None,
        )
        if index is None:
            log.warning("No assurance feature to specialise for skill %s", skill)
            return
        original = features[index]
        raw = self.gateway.fetch_by_name(self.feats_repository, f"Assurance ({skill})")
        source = parse_feat(raw)
        variant = source.to_feature(
            source_id=repository_source_id(self.feats_repository, source.id),
        )
        features[index] = variant.clone(id=self.new_id(), location_id=original.location_id)


__all__ = ["ASSURANCE_SLUG", "DEFAULT_FEATS_REPOSITORY", "AbcAttachOrchestrator", "AttachOptions"]
