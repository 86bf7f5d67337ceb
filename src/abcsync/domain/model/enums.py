"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class BuildKind(StrEnum):
    """Build records that grant features to a character."""

    ANCESTRY = "ancestry"
    BACKGROUND = "background"
    CLASS = "class"


class RecordType(StrEnum):
    """Record types a repository may hold."""

    ANCESTRY = "ancestry"
    BACKGROUND = "background"
    CLASS = "class"
    FEAT = "feat"
    ACTION = "action"
    SPELL = "spell"
    EQUIPMENT = "equipment"


class FeatType(StrEnum):
    """Category tags the engine knows by name; records may carry others."""

    ANCESTRY = "ancestry"
    ANCESTRY_FEATURE = "ancestryfeature"
    ARCHETYPE = "archetype"
    BONUS = "bonus"
    CLASS = "class"
    CLASS_FEATURE = "classfeature"
    GENERAL = "general"
    SKILL = "skill"
