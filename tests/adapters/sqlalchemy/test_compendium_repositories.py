from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError
from sqlalchemy import func, select

from abcsync.adapters.memory import InMemoryLocalRegistry
from abcsync.adapters.sqlalchemy import (
    SqlAlchemyCompendium,
    SqlAlchemyCompendiumUnitOfWork,
    StartupError,
    compendium_record_table,
    shutdown,
)
from abcsync.domain.errors import RepositoryNotFound
from abcsync.domain.features import RepositoryGateway
from tests.helpers.records import feat_record

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine
    from sqlalchemy.orm import Session


def _seed(session: Session) -> SqlAlchemyCompendium:
    compendium = SqlAlchemyCompendium(session)
    compendium.import_records(
        "feats-srd",
        [
            feat_record("a", "Assurance", feat_type="skill"),
            feat_record("b", "Assurance (Stealth)", feat_type="skill"),
            feat_record("c", "Toughness", feat_type="general"),
        ],
    )
    compendium.import_records("classfeatures", [feat_record("a", "Shield Block")])
    session.commit()
    return compendium


def test_query_by_ids_is_scoped_to_the_repository(sqlite_session: Session) -> None:
    compendium = _seed(sqlite_session)

    records = compendium.get("feats-srd").query_by_ids(["a", "c", "missing"])

    assert [record["name"] for record in records] == ["Assurance", "Toughness"]


def test_query_by_ids_with_no_ids(sqlite_session: Session) -> None:
    compendium = _seed(sqlite_session)

    assert compendium.get("feats-srd").query_by_ids([]) == []


def test_query_by_slug_uses_the_derived_slug(sqlite_session: Session) -> None:
    compendium = _seed(sqlite_session)

    records = compendium.get("feats-srd").query_by_slug("assurance-stealth")

    assert [record["_id"] for record in records] == ["b"]


def test_unknown_repository(sqlite_session: Session) -> None:
    compendium = _seed(sqlite_session)

    with pytest.raises(RepositoryNotFound):
        compendium.get("bestiary")
    assert compendium.get("classfeatures").query_by_ids(["a"])[0]["name"] == "Shield Block"


def test_import_replaces_existing_records(sqlite_session: Session) -> None:
    compendium = _seed(sqlite_session)

    written = compendium.import_records("feats-srd", [feat_record("c", "Diehard")])
    sqlite_session.commit()

    assert written == 1
    count = sqlite_session.execute(
        select(func.count()).select_from(compendium_record_table)
    ).scalar_one()
    assert count == 4
    (record,) = compendium.get("feats-srd").query_by_ids(["c"])
    assert record["name"] == "Diehard"


def test_import_rejects_records_without_identity(sqlite_session: Session) -> None:
    compendium = SqlAlchemyCompendium(sqlite_session)

    with pytest.raises(ValidationError):
        compendium.import_records("feats-srd", [{"name": "Nameless"}])


def test_gateway_over_the_compendium(sqlite_session: Session) -> None:
    gateway = RepositoryGateway(
        catalog=_seed(sqlite_session), local_registry=InMemoryLocalRegistry()
    )

    fetched = gateway.fetch_groups({"feats-srd": ["a"], "classfeatures": ["a"]})

    assert fetched["feats-srd"][0]["name"] == "Assurance"
    assert fetched["classfeatures"][0]["name"] == "Shield Block"
    assert gateway.fetch_by_name("feats-srd", "Toughness")["_id"] == "c"


def test_unit_of_work_commits(started_compendium: Engine) -> None:
    with SqlAlchemyCompendiumUnitOfWork() as uow:
        uow.catalog.import_records("feats-srd", [feat_record("a", "Assurance")])
        uow.commit()

    with SqlAlchemyCompendiumUnitOfWork() as uow:
        records = uow.catalog.get("feats-srd").query_by_ids(["a"])

    assert [record["name"] for record in records] == ["Assurance"]


def test_unit_of_work_rolls_back_on_error(started_compendium: Engine) -> None:
    with pytest.raises(RuntimeError), SqlAlchemyCompendiumUnitOfWork() as uow:
        uow.catalog.import_records("feats-srd", [feat_record("a", "Assurance")])
        raise RuntimeError("boom")

    with SqlAlchemyCompendiumUnitOfWork() as uow, pytest.raises(RepositoryNotFound):
        uow.catalog.get("feats-srd")


def test_unit_of_work_requires_startup() -> None:
    shutdown()

    with pytest.raises(StartupError):
        SqlAlchemyCompendiumUnitOfWork()
