"""Domain port definitions for adapters."""

from __future__ import annotations

from .character import CharacterRecord, LevelledCharacter
from .identity import IdGenerator
from .repositories import FeatureRepository, LocalRegistry, RepositoryCatalog

__all__ = [
    "CharacterRecord",
    "FeatureRepository",
    "IdGenerator",
    "LevelledCharacter",
    "LocalRegistry",
    "RepositoryCatalog",
]
