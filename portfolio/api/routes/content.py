import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from portfolio.api.deps import get_content_store, get_current_admin
from portfolio.api.responses import failure
from portfolio.schemas.auth import AdminOut
from portfolio.schemas.common import FailureResponse, MessageResponse
from portfolio.services.content_store import (
    ContentDecodeError,
    ContentSerializationError,
    ContentStore,
    ContentStoreError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/content", tags=["Content"])


@router.get("", response_model=dict[str, Any])
async def get_content(store: ContentStore = Depends(get_content_store)) -> Any:
    """Every content section as one object keyed by section name."""
    try:
        return await store.get_all()
    except ContentDecodeError as exc:
        # One broken section must not take the whole site down.
        logger.error(f"Serving content without undecodable sections: {exc.failed_keys}")
        return exc.content
    except ContentStoreError as exc:
        logger.error(f"Error fetching content from database: {exc}")
        return failure(500, "Failed to fetch content.", exc)


@router.post(
    "",
    response_model=MessageResponse,
    responses={400: {"model": FailureResponse}, 422: {"model": FailureResponse}, 500: {"model": FailureResponse}},
)
async def save_content(
    updated_content: Any = Body(None),
    store: ContentStore = Depends(get_content_store),
    admin: AdminOut = Depends(get_current_admin),
) -> Any:
    """Replace each top-level section present in the body; sections not in the body are untouched."""
    if not isinstance(updated_content, dict):
        return failure(400, "Content body must be a JSON object.")
    try:
        await store.upsert_many(updated_content)
    except ContentSerializationError as exc:
        logger.error(f"Error saving content: {exc} (applied: {exc.applied_keys})")
        return failure(422, "Failed to save content.", exc)
    except ContentStoreError as exc:
        logger.error(f"Error saving content to database: {exc}")
        return failure(500, "Failed to save content.", exc)
    logger.info(f"Content saved by {admin.email}: {list(updated_content)}")
    return MessageResponse(message="Content saved successfully!")
