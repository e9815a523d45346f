"""
Paste routes.
Handles create and fetch operations.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException

from app.config import Settings
from app.dependencies import get_app_settings, get_store
from app.exceptions import InvalidPasteError, PasteIdCollisionError
from app.models import ErrorResponse, PasteBody, PasteCreate, PasteCreated, format_timestamp
from app.store import PasteStore

router = APIRouter()
logger = logging.getLogger(__name__)

PASTE_UNAVAILABLE = "Paste unavailable"


def _parse_now_ms(x_test_now_ms: Optional[str]) -> Optional[int]:
    """
    Parse the time override header.

    Args:
        x_test_now_ms: Header value (milliseconds since epoch) or None

    Returns:
        Override time in milliseconds, or None to use the store clock

    Raises:
        HTTPException: If the header is present but not an integer (400)
    """
    if x_test_now_ms is None:
        return None
    try:
        return int(x_test_now_ms.strip())
    except ValueError:
        logger.warning(f"Invalid x-test-now-ms header: {x_test_now_ms!r}")
        raise HTTPException(
            status_code=400,
            detail="x-test-now-ms must be milliseconds since epoch",
        )


@router.post(
    "/api/pastes",
    response_model=PasteCreated,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_paste(
    paste: PasteCreate,
    store: PasteStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> PasteCreated:
    """
    Create a new paste.

    Args:
        paste: Paste data (content, optional ttl_seconds, optional max_views)

    Returns:
        Paste ID and shareable URL

    Raises:
        HTTPException: If input is invalid (400) or the id could not be allocated (500)
    """
    try:
        paste_id = store.create(
            content=paste.content,
            ttl_seconds=paste.ttl_seconds,
            max_views=paste.max_views,
        )
    except InvalidPasteError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PasteIdCollisionError:
        raise HTTPException(status_code=500, detail="Failed to save paste")

    return PasteCreated(id=paste_id, url=settings.share_url(paste_id))


@router.get(
    "/api/pastes/{paste_id}",
    response_model=PasteBody,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def fetch_paste(
    paste_id: str,
    x_test_now_ms: Optional[str] = Header(None),
    store: PasteStore = Depends(get_store),
) -> PasteBody:
    """
    Fetch a paste.
    Each successful fetch counts as one view.

    Raises:
        HTTPException: If the time header is malformed (400), or the paste is
            missing, expired or out of views (404, indistinguishable)
    """
    now_ms = _parse_now_ms(x_test_now_ms)
    view = store.fetch(paste_id, now_ms=now_ms)

    if view is None:
        raise HTTPException(status_code=404, detail=PASTE_UNAVAILABLE)

    return PasteBody(
        content=view.content,
        remaining_views=view.remaining_views,
        expires_at=format_timestamp(view.expires_at),
    )
