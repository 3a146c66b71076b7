"""
Poem lifecycle: hints, titles, optimistic-lock appends and reveal.
"""

from .concurrency import BumpOutcome, ConcurrencyGuard
from .enums import ALLOWED_TOTAL_LINES, PoemStatus
from .errors import (
    Conflict,
    InvalidArgument,
    InvalidInput,
    InvalidState,
    NotFound,
    PoemError,
    StorageFailure,
)
from .hints import compute_hint
from .lifecycle import PoemLifecycle, generate_poem_id
from .titles import FALLBACK_TITLE, generate_title

__all__ = [
    "ALLOWED_TOTAL_LINES",
    "BumpOutcome",
    "ConcurrencyGuard",
    "Conflict",
    "FALLBACK_TITLE",
    "InvalidArgument",
    "InvalidInput",
    "InvalidState",
    "NotFound",
    "PoemError",
    "PoemLifecycle",
    "PoemStatus",
    "StorageFailure",
    "compute_hint",
    "generate_poem_id",
    "generate_title",
]
