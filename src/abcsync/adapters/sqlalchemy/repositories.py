"""Compendium repositories backed by SQLAlchemy sessions."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from abcsync.adapters.sqlalchemy.mappings import (
    compendium_record_table,
    compendium_repository_table,
)
from abcsync.domain.errors import LookupFailed, RepositoryNotFound
from abcsync.domain.model import RecordSource

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

    from sqlalchemy.orm import Session
    from sqlalchemy.sql import Select

    from abcsync.domain.model import RawRecord, RecordId, RepositoryName

log = getLogger(__name__)


class SqlAlchemyCompendiumRepository:
    """One named repository of the compendium store."""

    def __init__(self, session: Session, name: RepositoryName) -> None:
        self.session = session
        self.name = name

    def query_by_ids(self, ids: Collection[RecordId]) -> list[RawRecord]:
        if not ids:
            return []
        stmt = (
            select(compendium_record_table.c.payload)
            .where(compendium_record_table.c.repository == self.name)
            .where(compendium_record_table.c.id.in_(list(ids)))
            .order_by(compendium_record_table.c.pk)
        )
        return self._fetch(stmt)

    def query_by_slug(self, slug: str) -> list[RawRecord]:
        stmt = (
            select(compendium_record_table.c.payload)
            .where(compendium_record_table.c.repository == self.name)
            .where(compendium_record_table.c.slug == slug)
            .order_by(compendium_record_table.c.pk)
        )
        return self._fetch(stmt)

    def _fetch(self, stmt: Select[tuple[Any]]) -> list[RawRecord]:
        try:
            payloads = self.session.execute(stmt).scalars().all()
        except SQLAlchemyError as exc:
            raise LookupFailed(self.name, str(exc)) from exc
        return [cast("RawRecord", payload) for payload in payloads]


class SqlAlchemyCompendium:
    """Catalog of the repositories registered in the compendium store."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, name: RepositoryName) -> SqlAlchemyCompendiumRepository:
        stmt = select(compendium_repository_table.c.name).where(
            compendium_repository_table.c.name == name
        )
        try:
            found = self.session.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise LookupFailed(name, str(exc)) from exc
        if found is None:
            raise RepositoryNotFound(name)
        return SqlAlchemyCompendiumRepository(self.session, name)

    def register(self, name: RepositoryName) -> None:
        """Register ``name`` if it is not known yet."""

        stmt = select(compendium_repository_table.c.name).where(
            compendium_repository_table.c.name == name
        )
        if self.session.execute(stmt).scalar_one_or_none() is None:
            self.session.execute(compendium_repository_table.insert().values(name=name))

    def import_records(self, name: RepositoryName, records: Iterable[RawRecord]) -> int:
        """Register ``name`` and insert or replace ``records``; return the count written."""

        self.register(name)
        written = 0
        for raw in records:
            source = RecordSource.model_validate(raw)
            self.session.execute(
                compendium_record_table.delete()
                .where(compendium_record_table.c.repository == name)
                .where(compendium_record_table.c.id == source.id)
            )
            self.session.execute(
                compendium_record_table.insert().values(
                    repository=name,
                    id=source.id,
                    type=source.type,
                    slug=source.slug,
                    name=source.name,
                    payload=dict(raw),
                )
            )
            written += 1
        log.info("Imported %d records into repository %s", written, name)
        return written
