"""
Identity building blocks:
fresh record identifiers for resolved and attached records.
"""

from __future__ import annotations

import secrets
import string
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from abcsync.domain.model.primitives import RecordId

ID_ALPHABET = string.ascii_letters + string.digits
DEFAULT_ID_LENGTH = 16


def random_id(length: int = DEFAULT_ID_LENGTH) -> RecordId:
    """Return a random alphanumeric token of fixed ``length``."""

    if length <= 0:
        raise ValueError("Identifier length must be positive")
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))
