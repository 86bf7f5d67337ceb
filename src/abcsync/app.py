"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from abcsync.adapters.json_files import load_character, read_records, save_character
from abcsync.adapters.memory import InMemoryLocalRegistry
from abcsync.adapters.sqlalchemy import SqlAlchemyCompendiumUnitOfWork, is_started, startup
from abcsync.config import get_engine_config
from abcsync.domain.features import (
    AbcAttachOrchestrator,
    AttachOptions,
    FeatureResolver,
    LevelSynchronizer,
    RepositoryGateway,
)
from abcsync.domain.model import parse_build, repository_source_id

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from abcsync.config import EngineConfig
    from abcsync.domain.features import SyncResult
    from abcsync.domain.model import Record, RepositoryName
    from abcsync.domain.ports import (
        CharacterRecord,
        IdGenerator,
        LevelledCharacter,
        LocalRegistry,
        RepositoryCatalog,
    )

log = getLogger(__name__)


@dataclass(slots=True)
class FeatureEngine:
    """Wired orchestrator and synchronizer sharing one gateway."""

    gateway: RepositoryGateway
    orchestrator: AbcAttachOrchestrator
    synchronizer: LevelSynchronizer


def build_engine(
    *,
    catalog: RepositoryCatalog,
    local_registry: LocalRegistry,
    config: EngineConfig | None = None,
    new_id: IdGenerator | None = None,
) -> FeatureEngine:
    """Wire the feature engine around the given collaborators."""

    active_config = config or get_engine_config()
    id_generator = new_id or active_config.id_generator()
    gateway = RepositoryGateway(catalog=catalog, local_registry=local_registry)
    resolver = FeatureResolver(gateway=gateway, new_id=id_generator)
    return FeatureEngine(
        gateway=gateway,
        orchestrator=AbcAttachOrchestrator(
            resolver=resolver,
            new_id=id_generator,
            feats_repository=active_config.feats_repository,
        ),
        synchronizer=LevelSynchronizer(resolver=resolver),
    )


def attach_build(
    *,
    engine: FeatureEngine,
    character: CharacterRecord,
    repository: RepositoryName,
    name: str,
    assurance_skills: Sequence[str] = (),
) -> list[Record]:
    """Look up a build record by name and attach it to ``character``."""

    raw = engine.gateway.fetch_by_name(repository, name)
    build = parse_build(raw)
    build.source_id = repository_source_id(repository, build.id)
    return engine.orchestrator.attach(
        build,
        character,
        AttachOptions(assurance_skills=tuple(assurance_skills)),
    )


def change_level(
    *,
    engine: FeatureEngine,
    character: LevelledCharacter,
    new_level: int,
) -> SyncResult:
    """Synchronise class features for ``new_level`` and record the new level."""

    result = engine.synchronizer.sync(character, new_level)
    character.set_level(new_level)
    return result


def _local_registry(local_items: Path | None) -> InMemoryLocalRegistry:
    if local_items is None:
        return InMemoryLocalRegistry()
    return InMemoryLocalRegistry(read_records(local_items))


def _ensure_started() -> None:
    if not is_started():
        startup()


def import_compendium_records(*, repository: RepositoryName, records_path: Path) -> int:
    """Load a record file into the compendium store."""

    _ensure_started()
    records = read_records(records_path)
    with SqlAlchemyCompendiumUnitOfWork() as uow:
        written = uow.catalog.import_records(repository, records)
        uow.commit()
    return written


def attach_build_to_character_file(
    *,
    character_path: Path,
    repository: RepositoryName,
    name: str,
    assurance_skills: Sequence[str] = (),
    local_items: Path | None = None,
) -> list[Record]:
    """Attach a compendium build record to the character stored at ``character_path``."""

    _ensure_started()
    character = load_character(character_path)
    log.info("Attaching '%s' from %s to %s", name, repository, character.name)
    with SqlAlchemyCompendiumUnitOfWork() as uow:
        engine = build_engine(catalog=uow.catalog, local_registry=_local_registry(local_items))
        created = attach_build(
            engine=engine,
            character=character,
            repository=repository,
            name=name,
            assurance_skills=assurance_skills,
        )
    save_character(character_path, character)
    return created


def set_character_file_level(
    *,
    character_path: Path,
    level: int,
    local_items: Path | None = None,
) -> SyncResult:
    """Change the level of the character stored at ``character_path``."""

    _ensure_started()
    character = load_character(character_path)
    with SqlAlchemyCompendiumUnitOfWork() as uow:
        engine = build_engine(catalog=uow.catalog, local_registry=_local_registry(local_items))
        result = change_level(engine=engine, character=character, new_level=level)
    save_character(character_path, character)
    log.info(
        "Level of %s set to %s: added=%d, removed=%d",
        character.name,
        level,
        len(result.added),
        len(result.removed),
    )
    return result
