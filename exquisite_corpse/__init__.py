"""
Exquisite Corpse

A collaborative poem-writing game: each writer sees only the tail of the
previous line until the finished poem is revealed.
"""

import importlib.metadata

__version__ = importlib.metadata.version("exquisite-corpse")

from .poems import (
    PoemError,
    PoemLifecycle,
    PoemStatus,
    compute_hint,
    generate_title,
)

__all__ = [
    "PoemError",
    "PoemLifecycle",
    "PoemStatus",
    "compute_hint",
    "generate_title",
]
