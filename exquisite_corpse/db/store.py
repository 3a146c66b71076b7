"""
Poem storage for Exquisite Corpse.

PoemStore is the only code that talks SQL. Mutating methods emit their
statements inside the session's current transaction and leave commit/rollback
to the caller, so a multi-step operation can be made atomic.
"""

from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import desc, func, select, update
from sqlalchemy.orm import Session

from .models import PoemLineModel, PoemModel


class PoemStore:
    """Service for persisting poems and their lines."""

    def __init__(self, db: Session):
        self.db = db

    # -- poems ---------------------------------------------------------------

    def create_poem(
        self, poem_id: str, total_lines: int, seed_text: str, seed_hint: str
    ) -> PoemModel:
        """Add a poem row together with its seed line (line 1)."""
        now = datetime.now(timezone.utc)
        poem = PoemModel(
            id=poem_id,
            total_lines=total_lines,
            seed_line=seed_text,
            title="",
            status="active",
            version=0,
            created_at=now,
            updated_at=now,
        )
        poem.lines.append(
            PoemLineModel(
                line_number=1,
                full_text=seed_text,
                visible_hint=seed_hint,
                created_at=now,
            )
        )
        self.db.add(poem)
        self.db.flush()
        return poem

    def get_poem(self, poem_id: str) -> Optional[PoemModel]:
        """Get a poem by ID, always reloading its row from the database."""
        return (
            self.db.query(PoemModel)
            .filter(PoemModel.id == poem_id)
            .populate_existing()
            .first()
        )

    def list_poems(self, status: Optional[str] = None) -> List[Tuple[PoemModel, int]]:
        """List poems newest first, each paired with its stored line count."""
        line_counts = (
            select(
                PoemLineModel.poem_id.label("poem_id"),
                func.count(PoemLineModel.id).label("line_count"),
            )
            .group_by(PoemLineModel.poem_id)
            .subquery()
        )
        query = self.db.query(
            PoemModel, func.coalesce(line_counts.c.line_count, 0)
        ).outerjoin(line_counts, line_counts.c.poem_id == PoemModel.id)

        if status:
            query = query.filter(PoemModel.status == status)

        return [
            (poem, int(count))
            for poem, count in query.order_by(
                desc(PoemModel.created_at), desc(PoemModel.id)
            ).all()
        ]

    def conditional_bump_version(self, poem_id: str, expected_version: int) -> bool:
        """Increment the version only if it still equals ``expected_version``.

        Returns True when exactly one row was updated. A False result means the
        poem does not exist or another writer has already advanced it.
        """
        result = self.db.execute(
            update(PoemModel)
            .where(PoemModel.id == poem_id, PoemModel.version == expected_version)
            .values(
                version=PoemModel.version + 1,
                updated_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def set_status(self, poem_id: str, status: str) -> bool:
        """Set a poem's status. Returns False if the poem does not exist."""
        result = self.db.execute(
            update(PoemModel)
            .where(PoemModel.id == poem_id)
            .values(status=status, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def set_title(self, poem_id: str, title: str) -> bool:
        """Set a poem's title. Returns False if the poem does not exist."""
        result = self.db.execute(
            update(PoemModel)
            .where(PoemModel.id == poem_id)
            .values(title=title, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def reveal(self, poem_id: str, title: str) -> bool:
        """Atomically move a complete poem to revealed and store its title.

        Only matches while the poem is still ``complete``, so when two reveals
        race exactly one of them writes a title.
        """
        result = self.db.execute(
            update(PoemModel)
            .where(PoemModel.id == poem_id, PoemModel.status == "complete")
            .values(
                status="revealed",
                title=title,
                updated_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    # -- lines ---------------------------------------------------------------

    def insert_line(
        self, poem_id: str, line_number: int, full_text: str, hint: str
    ) -> PoemLineModel:
        """Insert a line. (poem_id, line_number) uniqueness is enforced by the DB."""
        line = PoemLineModel(
            poem_id=poem_id,
            line_number=line_number,
            full_text=full_text,
            visible_hint=hint,
            created_at=datetime.now(timezone.utc),
        )
        self.db.add(line)
        self.db.flush()
        return line

    def count_lines(self, poem_id: str) -> int:
        """Count the stored lines of a poem."""
        return (
            self.db.query(func.count(PoemLineModel.id))
            .filter(PoemLineModel.poem_id == poem_id)
            .scalar()
            or 0
        )

    def list_lines(self, poem_id: str) -> List[PoemLineModel]:
        """Get a poem's lines ordered by line number."""
        return (
            self.db.query(PoemLineModel)
            .filter(PoemLineModel.poem_id == poem_id)
            .order_by(PoemLineModel.line_number)
            .all()
        )

    # -- transaction control -------------------------------------------------

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    def refresh(self, obj) -> None:
        self.db.refresh(obj)
