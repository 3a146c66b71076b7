"""
Request and response schemas for poems.

The ``project_*`` helpers build response models from stored rows. Visibility
lives here: until a poem is revealed its line views carry only the hint.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..db.models import PoemLineModel, PoemModel
from .enums import PoemStatus


# =============================================================================
# Requests
# =============================================================================


class PoemCreate(BaseModel):
    """Schema for creating a new poem."""

    model_config = ConfigDict(extra="forbid")

    total_lines: int = Field(
        ..., description="Target number of lines (one of 5, 7, 11, 13)"
    )


class LineCreate(BaseModel):
    """Schema for appending a line to a poem."""

    model_config = ConfigDict(extra="forbid")

    text: str = Field(..., description="Full text of the new line")
    expected_version: int = Field(
        ..., ge=0, description="Poem version the writer last observed"
    )


# =============================================================================
# Responses
# =============================================================================


class PoemLineView(BaseModel):
    line_number: int
    visible_hint: str
    full_text: Optional[str] = Field(
        None, description="Withheld (null) until the poem is revealed"
    )


class PoemCreated(BaseModel):
    id: str
    total_lines: int
    status: PoemStatus
    seed_line: str
    seed_hint: str
    version: int
    created_at: datetime


class PoemSummary(BaseModel):
    id: str
    total_lines: int
    current_line_count: int
    status: PoemStatus
    seed_line: str
    created_at: datetime


class PoemDetail(BaseModel):
    id: str
    total_lines: int
    current_line_count: int
    status: PoemStatus
    title: str
    seed_line: Optional[str] = Field(
        None, description="Withheld (null) until the poem is revealed"
    )
    version: int
    created_at: datetime
    updated_at: datetime
    lines: List[PoemLineView]


class LineAppended(BaseModel):
    poem_id: str
    line: PoemLineView
    version: int = Field(..., description="Poem version after the append")
    is_complete: bool


class RevealResult(BaseModel):
    id: str
    title: str
    status: PoemStatus
    total_lines: int
    lines: List[PoemLineView]


# =============================================================================
# Projections
# =============================================================================


def project_line(line: PoemLineModel, reveal_text: bool) -> PoemLineView:
    return PoemLineView(
        line_number=line.line_number,
        visible_hint=line.visible_hint,
        full_text=line.full_text if reveal_text else None,
    )


def project_poem_detail(
    poem: PoemModel, lines: Sequence[PoemLineModel]
) -> PoemDetail:
    """Build the public view of a poem.

    Full line texts are only exposed once the poem is revealed; before that,
    writers see nothing but hints.
    """
    revealed = poem.status == PoemStatus.REVEALED.value
    return PoemDetail(
        id=poem.id,
        total_lines=poem.total_lines,
        current_line_count=len(lines),
        status=PoemStatus(poem.status),
        title=poem.title or "",
        seed_line=poem.seed_line if revealed else None,
        version=poem.version,
        created_at=poem.created_at,
        updated_at=poem.updated_at,
        lines=[project_line(line, revealed) for line in lines],
    )


def project_summary(poem: PoemModel, line_count: int) -> PoemSummary:
    return PoemSummary(
        id=poem.id,
        total_lines=poem.total_lines,
        current_line_count=line_count,
        status=PoemStatus(poem.status),
        seed_line=poem.seed_line,
        created_at=poem.created_at,
    )
