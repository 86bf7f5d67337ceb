"""Engine lifecycle and session scope for the compendium store."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from abcsync.adapters.sqlalchemy.mappings import create_all_tables
from abcsync.adapters.sqlalchemy.repositories import SqlAlchemyCompendium
from abcsync.config import get_database_config

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """The compendium store is used before ``startup()`` or started twice."""


@dataclass(slots=True)
class _CompendiumStore:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None

    def bind(self, engine: Engine | None) -> None:
        self.engine = engine
        self.sessions = (
            sessionmaker(bind=engine, expire_on_commit=False) if engine is not None else None
        )

    def open_session(self) -> Session:
        if self.sessions is None:
            raise StartupError("Compendium store is not started; call startup() first")
        return self.sessions()


_STORE = _CompendiumStore()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the compendium store to ``engine`` (or a new one) and create its tables."""

    if _STORE.engine is not None and not force:
        raise StartupError("Compendium store already started; pass force=True to rebind")
    bound = engine or create_engine(database_uri or get_database_config().uri, future=True)
    create_all_tables(bound)
    _STORE.bind(bound)
    log.debug("Compendium store bound to %s", bound.url)


def is_started() -> bool:
    return _STORE.engine is not None


def shutdown() -> None:
    """Dispose the bound engine; ``startup()`` may be called again afterwards."""

    if _STORE.engine is not None:
        _STORE.engine.dispose()
    _STORE.bind(None)


class SqlAlchemyCompendiumUnitOfWork:
    """One session over the compendium, rolled back when the block raises."""

    def __init__(self) -> None:
        self._session: Session | None = _STORE.open_session()
        self._catalog: SqlAlchemyCompendium | None = None

    def __enter__(self) -> SqlAlchemyCompendiumUnitOfWork:
        self._catalog = SqlAlchemyCompendium(self.session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        if exc_type is not None:
            session.rollback()
        session.close()
        self._session = None
        self._catalog = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work is closed")
        return self._session

    @property
    def catalog(self) -> SqlAlchemyCompendium:
        if self._catalog is None:
            raise StartupError("Unit of work is not entered")
        return self._catalog

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
