"""
Poem lifecycle engine.

Poems move strictly forward through ``active -> complete -> revealed``:

- create_poem starts an active poem with its seed line as line 1.
- add_line appends under optimistic locking; the append that writes the
  final line also marks the poem complete, in the same transaction.
- reveal assigns a generated title exactly once and exposes every line.

Each public method either returns a response schema or raises a PoemError.
Validation happens before anything is written, and nothing is retried.
"""

import random
import secrets
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..db.models import PoemModel
from ..db.store import PoemStore
from .concurrency import BumpOutcome, ConcurrencyGuard
from .enums import ALLOWED_TOTAL_LINES, DEFAULT_HINT_WORDS, PoemStatus
from .errors import (
    Conflict,
    InvalidArgument,
    InvalidInput,
    InvalidState,
    NotFound,
    StorageFailure,
)
from .hints import compute_hint
from .schemas import (
    LineAppended,
    PoemCreated,
    PoemDetail,
    PoemSummary,
    RevealResult,
    project_line,
    project_poem_detail,
    project_summary,
)
from .seeds import choose_seed_line
from .titles import generate_title

logger = structlog.get_logger()

POEM_ID_BYTES = 9  # 12 URL-safe base64 characters


def generate_poem_id() -> str:
    """Generate an unguessable 12-character URL-safe poem ID."""
    return secrets.token_urlsafe(POEM_ID_BYTES)


class PoemLifecycle:
    """Service implementing the poem state machine on top of PoemStore."""

    def __init__(
        self,
        db: Session,
        hint_word_count: int = DEFAULT_HINT_WORDS,
        rng: Optional[random.Random] = None,
        id_factory: Callable[[], str] = generate_poem_id,
    ):
        self.store = PoemStore(db)
        self.guard = ConcurrencyGuard(self.store)
        self.hint_word_count = hint_word_count
        self.rng = rng
        self.id_factory = id_factory

    @contextmanager
    def _storage(self) -> Iterator[None]:
        """Roll back and re-raise storage errors as StorageFailure."""
        try:
            yield
        except SQLAlchemyError as e:
            self.store.rollback()
            logger.error("Storage operation failed", error=str(e))
            raise StorageFailure(str(e)) from e

    def _require_poem(self, poem_id: str) -> PoemModel:
        with self._storage():
            poem = self.store.get_poem(poem_id)
        if poem is None:
            raise NotFound(poem_id)
        return poem

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def create_poem(self, total_lines: int) -> PoemCreated:
        """Start a new active poem seeded with a random opening line."""
        if total_lines not in ALLOWED_TOTAL_LINES:
            raise InvalidArgument(
                f"total_lines must be one of {', '.join(map(str, ALLOWED_TOTAL_LINES))}",
                {"total_lines": total_lines, "allowed": list(ALLOWED_TOTAL_LINES)},
            )

        seed_line = choose_seed_line(self.rng)
        seed_hint = compute_hint(seed_line, self.hint_word_count)

        with self._storage():
            poem = self.store.create_poem(
                self.id_factory(), total_lines, seed_line, seed_hint
            )
            self.store.commit()
            self.store.refresh(poem)

        logger.info("Poem created", poem_id=poem.id, total_lines=total_lines)

        return PoemCreated(
            id=poem.id,
            total_lines=poem.total_lines,
            status=PoemStatus(poem.status),
            seed_line=poem.seed_line,
            seed_hint=seed_hint,
            version=poem.version,
            created_at=poem.created_at,
        )

    def add_line(self, poem_id: str, text: str, expected_version: int) -> LineAppended:
        """Append a line if ``expected_version`` is still current.

        The version bump, line insert and completion update commit together or
        not at all.
        """
        text = (text or "").strip()
        if not text:
            raise InvalidInput("Line text cannot be empty")

        poem = self._require_poem(poem_id)
        self._require_active(poem)
        total_lines = poem.total_lines

        try:
            if self.guard.try_bump_version(poem_id, expected_version) != BumpOutcome.OK:
                self.store.rollback()
                raise Conflict(
                    poem_id, expected_version, self._current_version(poem_id)
                )

            line_number = self.store.count_lines(poem_id) + 1
            if line_number > total_lines:
                self.store.rollback()
                raise InvalidState("Poem is already complete", PoemStatus.COMPLETE.value)

            line = self.store.insert_line(
                poem_id,
                line_number,
                text,
                compute_hint(text, self.hint_word_count),
            )
            is_complete = line_number == total_lines
            if is_complete:
                self.store.set_status(poem_id, PoemStatus.COMPLETE.value)

            self.store.commit()
        except IntegrityError as e:
            # Line number already taken: another append got in first
            self.store.rollback()
            logger.warning(
                "Line number collision", poem_id=poem_id, error=str(e.orig)
            )
            raise Conflict(poem_id, expected_version) from e
        except SQLAlchemyError as e:
            self.store.rollback()
            logger.error("Failed to append line", poem_id=poem_id, error=str(e))
            raise StorageFailure(str(e)) from e

        logger.info(
            "Line appended",
            poem_id=poem_id,
            line_number=line_number,
            version=expected_version + 1,
            is_complete=is_complete,
        )
        if is_complete:
            logger.info("Poem complete", poem_id=poem_id, total_lines=total_lines)

        return LineAppended(
            poem_id=poem_id,
            line=project_line(line, reveal_text=True),
            version=expected_version + 1,
            is_complete=is_complete,
        )

    def reveal(self, poem_id: str) -> RevealResult:
        """Reveal a complete poem, or return an already-revealed one as is."""
        poem = self._require_poem(poem_id)

        if poem.status == PoemStatus.ACTIVE.value:
            raise InvalidState("Poem is not yet complete", poem.status)

        with self._storage():
            lines = self.store.list_lines(poem_id)

            if poem.status == PoemStatus.COMPLETE.value:
                title = generate_title(lines, self.rng)
                won = self.store.reveal(poem_id, title)
                self.store.commit()
                if won:
                    logger.info("Poem revealed", poem_id=poem_id, title=title)
                else:
                    logger.info("Poem already revealed concurrently", poem_id=poem_id)

            # Re-read: a concurrent reveal may have written the title
            self.store.refresh(poem)

            return RevealResult(
                id=poem.id,
                title=poem.title,
                status=PoemStatus(poem.status),
                total_lines=poem.total_lines,
                lines=[project_line(line, reveal_text=True) for line in lines],
            )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_poems(self, status: Optional[str] = None) -> List[PoemSummary]:
        """List poem summaries, newest first, optionally filtered by status."""
        if status and status not in {s.value for s in PoemStatus}:
            # Native enum columns reject unknown labels outright
            return []
        with self._storage():
            rows = self.store.list_poems(status=status)
        return [project_summary(poem, count) for poem, count in rows]

    def get_poem(self, poem_id: str) -> PoemDetail:
        """Get a poem; line texts stay hidden until it is revealed."""
        poem = self._require_poem(poem_id)
        with self._storage():
            lines = self.store.list_lines(poem_id)
        return project_poem_detail(poem, lines)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _require_active(poem: PoemModel) -> None:
        if poem.status == PoemStatus.COMPLETE.value:
            raise InvalidState("Poem is already complete", poem.status)
        if poem.status == PoemStatus.REVEALED.value:
            raise InvalidState("Poem is already revealed", poem.status)

    def _current_version(self, poem_id: str) -> Optional[int]:
        poem = self.store.get_poem(poem_id)
        return poem.version if poem is not None else None
