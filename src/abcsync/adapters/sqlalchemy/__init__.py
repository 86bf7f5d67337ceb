"""SQLAlchemy adapter package for the compendium store."""

from __future__ import annotations

from .mappings import (
    compendium_record_table,
    compendium_repository_table,
    create_all_tables,
    metadata,
)
from .repositories import SqlAlchemyCompendium, SqlAlchemyCompendiumRepository
from .unit_of_work import (
    SqlAlchemyCompendiumUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyCompendium",
    "SqlAlchemyCompendiumRepository",
    "SqlAlchemyCompendiumUnitOfWork",
    "StartupError",
    "compendium_record_table",
    "compendium_repository_table",
    "create_all_tables",
    "is_started",
    "metadata",
    "shutdown",
    "startup",
]
