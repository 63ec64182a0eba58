"""BrainWave Shared Utilities"""

from .errors import (
    FocusErrorCode,
    FocusError,
    NotFoundError,
    InvalidStateError,
    InvalidInputError,
    RecordStoreError,
)
from .rounding import round_half_up, round_half_up_to

__all__ = [
    "FocusErrorCode",
    "FocusError",
    "NotFoundError",
    "InvalidStateError",
    "InvalidInputError",
    "RecordStoreError",
    "round_half_up",
    "round_half_up_to",
]
