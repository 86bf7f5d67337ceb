"""Feature resolution and synchronisation engine.

Flow for attaching a build record:
1) select the entries unlocked by the level window (classes only)
2) resolve entries through the repository gateway (batched per repository)
3) re-identify, stamp locations and order the resolved features
4) detach the previous record of the same kind and attach the new one

The level synchronizer reuses steps 1-2 to add or remove class features
when a character's level changes.
"""

from __future__ import annotations

from .gateway import RepositoryGateway
from .orchestrator import (
    ASSURANCE_SLUG,
    DEFAULT_FEATS_REPOSITORY,
    AbcAttachOrchestrator,
    AttachOptions,
)
from .resolver import FeatureResolver
from .selector import select_entries
from .synchronizer import LevelSynchronizer, SyncResult

__all__ = [
    "ASSURANCE_SLUG",
    "DEFAULT_FEATS_REPOSITORY",
    "AbcAttachOrchestrator",
    "AttachOptions",
    "FeatureResolver",
    "LevelSynchronizer",
    "RepositoryGateway",
    "SyncResult",
    "select_entries",
]
