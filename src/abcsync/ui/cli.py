from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from abcsync.app import (
    attach_build_to_character_file,
    import_compendium_records,
    set_character_file_level,
)
from abcsync.config import configure_logging
from abcsync.domain.errors import AbcSyncError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Attach ancestries, backgrounds and classes to characters"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    importer = subparsers.add_parser("import", help="Import records into a compendium repository")
    importer.add_argument("repository", type=str, help="Repository name, e.g. feats-srd")
    importer.add_argument("records", type=Path, help="JSON array or JSON-lines record file")

    attach = subparsers.add_parser("attach", help="Attach a build record to a character")
    attach.add_argument("character", type=Path, help="Character JSON document")
    attach.add_argument(
        "--repository",
        type=str,
        required=True,
        help="Repository holding the build record, e.g. ancestries",
    )
    attach.add_argument("--name", type=str, required=True, help="Name of the build record")
    attach.add_argument(
        "--assurance",
        action="append",
        default=[],
        metavar="SKILL",
        help="Specialise a granted Assurance feat for SKILL (repeatable)",
    )
    attach.add_argument(
        "--local-items",
        type=Path,
        help="JSON file with locally registered records",
    )

    set_level = subparsers.add_parser("set-level", help="Change a character's level")
    set_level.add_argument("character", type=Path, help="Character JSON document")
    set_level.add_argument("level", type=int, help="New character level")
    set_level.add_argument(
        "--local-items",
        type=Path,
        help="JSON file with locally registered records",
    )

    return parser.parse_args(list(argv))


def _validate(args: argparse.Namespace) -> None:
    if args.command == "set-level" and args.level < 0:
        raise ValueError("Level must be non-negative")
    if args.command in {"attach", "set-level"} and not args.character.is_file():
        raise ValueError(f"Character document not found: {args.character}")
    if args.command == "import" and not args.records.is_file():
        raise ValueError(f"Record file not found: {args.records}")


def _run_import(args: argparse.Namespace) -> None:
    written = import_compendium_records(repository=args.repository, records_path=args.records)
    log.info("Imported %d records into %s", written, args.repository)


def _run_attach(args: argparse.Namespace) -> None:
    created = attach_build_to_character_file(
        character_path=args.character,
        repository=args.repository,
        name=args.name,
        assurance_skills=args.assurance,
        local_items=args.local_items,
    )
    log.info("Attached %d records to %s", len(created), args.character)


def _run_set_level(args: argparse.Namespace) -> None:
    set_character_file_level(
        character_path=args.character,
        level=args.level,
        local_items=args.local_items,
    )


_COMMANDS: dict[str, Callable[[argparse.Namespace], None]] = {
    "import": _run_import,
    "attach": _run_attach,
    "set-level": _run_set_level,
}


def main(argv: Sequence[str] | None = None) -> None:
    """Parse ``argv``, run one command and exit non-zero on failure."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(level=logging.DEBUG if args.verbose else logging.INFO)
    try:
        _validate(args)
    except ValueError as exc:
        log.error("Invalid arguments: %s", exc)  # noqa: TRY400
        sys.exit(2)

    try:
        _COMMANDS[args.command](args)
    except AbcSyncError:
        log.exception("Feature resolution failed")
        sys.exit(1)
    except Exception:
        log.exception("%s failed", args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    log.info("Interrupted")
    sys.exit(0)


def run() -> None:
    """Console script entry point: load ``.env`` and install the SIGINT handler."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
