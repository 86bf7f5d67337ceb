"""Domain primitives: scalar aliases and slug handling."""

from __future__ import annotations

import re
import unicodedata

type RecordId = str
type SlotId = str
type RepositoryName = str
type SourceId = str

_NON_WORD = re.compile(r"[^a-z0-9]+")


def sluggify(text: str) -> str:
    """Return the canonical slug of ``text`` ("Assurance (Stealth)" -> "assurance-stealth")."""

    folded = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return _NON_WORD.sub("-", folded.lower()).strip("-")


def repository_source_id(repository: RepositoryName, record_id: RecordId) -> SourceId:
    return f"Compendium.{repository}.{record_id}"


def local_source_id(record_id: RecordId) -> SourceId:
    return f"Item.{record_id}"
