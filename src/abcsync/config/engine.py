"""Feature engine settings."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Final

from abcsync.domain.features import DEFAULT_FEATS_REPOSITORY
from abcsync.domain.model import DEFAULT_ID_LENGTH, random_id

from .env import env_int, env_str

if TYPE_CHECKING:
    from abcsync.domain.ports import IdGenerator

MAX_ID_LENGTH: Final[int] = 64


@dataclass(frozen=True, slots=True)
class EngineConfig:
    feats_repository: str = DEFAULT_FEATS_REPOSITORY
    id_length: int = DEFAULT_ID_LENGTH

    def id_generator(self) -> IdGenerator:
        return partial(random_id, self.id_length)


def get_engine_config() -> EngineConfig:
    return EngineConfig(
        feats_repository=env_str("ABCSYNC_FEATS_REPOSITORY", DEFAULT_FEATS_REPOSITORY),
        id_length=env_int(
            "ABCSYNC_ID_LENGTH", DEFAULT_ID_LENGTH, minimum=1, maximum=MAX_ID_LENGTH
        ),
    )
