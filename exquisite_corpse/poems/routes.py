"""
Poem API Routes.

REST endpoints for the poem lifecycle.
All endpoints are prefixed with /api/poems.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..config import get_settings
from ..db.base import get_db
from .errors import PoemError
from .lifecycle import PoemLifecycle
from .schemas import (
    LineAppended,
    LineCreate,
    PoemCreate,
    PoemCreated,
    PoemDetail,
    PoemSummary,
    RevealResult,
)

router = APIRouter(prefix="/api/poems", tags=["poems"])


def get_lifecycle(db: Session = Depends(get_db)) -> PoemLifecycle:
    """Dependency providing a lifecycle bound to the request's session."""
    return PoemLifecycle(db, hint_word_count=get_settings().hint_word_count)


def _http_error(error: PoemError) -> HTTPException:
    return HTTPException(status_code=error.http_status, detail=error.to_dict())


@router.post(
    "",
    response_model=PoemCreated,
    status_code=201,
    responses={
        201: {"description": "Poem created with its seed line"},
        400: {"description": "total_lines not allowed"},
    },
)
async def create_poem(
    poem: PoemCreate,
    lifecycle: PoemLifecycle = Depends(get_lifecycle),
) -> PoemCreated:
    """Create a new poem seeded with a random opening line."""
    try:
        return lifecycle.create_poem(poem.total_lines)
    except PoemError as e:
        raise _http_error(e)


@router.get("", response_model=List[PoemSummary])
async def list_poems(
    status: Optional[str] = None,
    lifecycle: PoemLifecycle = Depends(get_lifecycle),
) -> List[PoemSummary]:
    """List poems, newest first, with optional status filtering."""
    try:
        return lifecycle.list_poems(status=status)
    except PoemError as e:
        raise _http_error(e)


@router.get("/{poem_id}", response_model=PoemDetail)
async def get_poem(
    poem_id: str,
    lifecycle: PoemLifecycle = Depends(get_lifecycle),
) -> PoemDetail:
    """Get a poem. Line texts are hidden until the poem is revealed."""
    try:
        return lifecycle.get_poem(poem_id)
    except PoemError as e:
        raise _http_error(e)


@router.post(
    "/{poem_id}/lines",
    response_model=LineAppended,
    status_code=201,
    responses={
        201: {"description": "Line appended"},
        400: {"description": "Empty line text"},
        404: {"description": "Poem not found"},
        409: {"description": "Stale expected_version or poem no longer active"},
    },
)
async def add_line(
    poem_id: str,
    line: LineCreate,
    lifecycle: PoemLifecycle = Depends(get_lifecycle),
) -> LineAppended:
    """
    Append a line to an active poem.

    The request must carry the poem version the writer last saw. If another
    line was added since, the append is rejected with 409 and the writer
    should re-fetch the poem and resubmit.
    """
    try:
        return lifecycle.add_line(poem_id, line.text, line.expected_version)
    except PoemError as e:
        raise _http_error(e)


@router.post(
    "/{poem_id}/reveal",
    response_model=RevealResult,
    responses={
        404: {"description": "Poem not found"},
        409: {"description": "Poem not yet complete"},
    },
)
async def reveal_poem(
    poem_id: str,
    lifecycle: PoemLifecycle = Depends(get_lifecycle),
) -> RevealResult:
    """Reveal a complete poem. Repeating the call returns the same title."""
    try:
        return lifecycle.reveal(poem_id)
    except PoemError as e:
        raise _http_error(e)
