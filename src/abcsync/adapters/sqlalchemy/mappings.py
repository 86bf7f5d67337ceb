"""SQLAlchemy table metadata for the compendium store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

compendium_repository_table = Table(
    "compendium_repository",
    metadata,
    Column("name", String(128), primary_key=True),
)

compendium_record_table = Table(
    "compendium_record",
    metadata,
    # surrogate key keeps insertion order for batched reads
    Column("pk", Integer, primary_key=True, autoincrement=True),
    Column(
        "repository",
        String(128),
        ForeignKey("compendium_repository.name", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("id", String(64), nullable=False),
    Column("type", String(32), nullable=False),
    Column("slug", String(256), nullable=False),
    Column("name", String(256), nullable=False),
    Column("payload", JSON, nullable=False),
    UniqueConstraint("repository", "id"),
    Index("ix_compendium_record_repository_slug", "repository", "slug"),
)


def create_all_tables(engine: Engine) -> None:
    """Create compendium tables that do not exist yet."""

    metadata.create_all(engine, checkfirst=True)
    log.debug("Compendium tables ready on %s", engine.url)
