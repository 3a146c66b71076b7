"""Optimistic-lock guard for appending lines to a poem."""

from enum import Enum

import structlog

from ..db.store import PoemStore

logger = structlog.get_logger()


class BumpOutcome(str, Enum):
    OK = "ok"
    # Poem missing or version already advanced; the store cannot tell which
    NO_MATCH = "no_match"


class ConcurrencyGuard:
    """Gate line appends on the version the writer last observed.

    First writer since read wins. There is no retry or merge: a losing writer
    gets NO_MATCH and must re-fetch the poem before resubmitting.
    """

    def __init__(self, store: PoemStore):
        self.store = store

    def try_bump_version(self, poem_id: str, expected_version: int) -> BumpOutcome:
        """Advance the version by one if it still equals ``expected_version``.

        Runs in the store's open transaction; the caller commits or rolls back.
        """
        if self.store.conditional_bump_version(poem_id, expected_version):
            return BumpOutcome.OK

        logger.info(
            "Version bump rejected",
            poem_id=poem_id,
            expected_version=expected_version,
        )
        return BumpOutcome.NO_MATCH
