"""
Canonical enums and constants for poems.
"""

from enum import Enum


class PoemStatus(str, Enum):
    """Lifecycle status of a poem. Transitions only move forward."""

    ACTIVE = "active"
    COMPLETE = "complete"
    REVEALED = "revealed"


# Line counts a new poem may be created with
ALLOWED_TOTAL_LINES = (5, 7, 11, 13)

DEFAULT_HINT_WORDS = 3
