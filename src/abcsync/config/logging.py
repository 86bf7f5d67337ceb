"""Logging setup for the abcsync command line."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
NOISY_LOGGERS: Final[tuple[str, ...]] = ("sqlalchemy.engine", "sqlalchemy.pool")


def configure_logging(
    *,
    level: int = logging.INFO,
    force: bool = False,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """Configure the root logger for CLI output.

    Loggers named in ``quiet`` are held at WARNING unless ``level`` is DEBUG.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    if level > logging.DEBUG:
        for name in quiet:
            logging.getLogger(name).setLevel(logging.WARNING)
