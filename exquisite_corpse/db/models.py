"""
SQLAlchemy models for Exquisite Corpse.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .base import Base


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PoemModel(Base):
    """SQLAlchemy model for poems."""

    __tablename__ = "poems"

    # Primary fields
    id = Column(String(12), primary_key=True)
    total_lines = Column(Integer, nullable=False)
    seed_line = Column(Text, nullable=False)
    title = Column(Text, nullable=False, default="")

    # Lifecycle
    status = Column(
        Enum("active", "complete", "revealed", name="poem_status"),
        nullable=False,
        default="active",
        index=True,
    )
    # Optimistic-lock counter, bumped once per appended line
    version = Column(Integer, nullable=False, default=0)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utc_now)

    lines = relationship(
        "PoemLineModel",
        back_populates="poem",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="PoemLineModel.line_number",
    )

    __table_args__ = (Index("ix_poems_created_at", "created_at"),)

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary."""
        return {
            "id": self.id,
            "total_lines": self.total_lines,
            "status": self.status,
            "title": self.title,
            "seed_line": self.seed_line,
            "version": self.version,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


class PoemLineModel(Base):
    """SQLAlchemy model for the ordered lines of a poem."""

    __tablename__ = "poem_lines"

    id = Column(Integer, primary_key=True, autoincrement=True)
    poem_id = Column(
        String(12),
        ForeignKey("poems.id", ondelete="CASCADE"),
        nullable=False,
    )
    line_number = Column(Integer, nullable=False)
    full_text = Column(Text, nullable=False)
    # Stored at insert time so hints stay stable across algorithm changes
    visible_hint = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utc_now)

    poem = relationship("PoemModel", back_populates="lines")

    __table_args__ = (
        UniqueConstraint("poem_id", "line_number", name="uq_poem_lines_poem_line"),
        Index("ix_poem_lines_poem_id", "poem_id"),
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary."""
        return {
            "line_number": self.line_number,
            "full_text": self.full_text,
            "visible_hint": self.visible_hint,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
