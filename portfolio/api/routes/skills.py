import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from portfolio.api.deps import get_content_store, get_current_admin
from portfolio.api.responses import failure
from portfolio.schemas.auth import AdminOut
from portfolio.schemas.common import MessageResponse
from portfolio.schemas.content import SkillsDocument
from portfolio.services.content_store import ContentMergeError, ContentStore, ContentStoreError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/skills", tags=["Skills"])

SKILLS_KEY = "skills"


@router.get("", response_model=None)
async def get_skills(store: ContentStore = Depends(get_content_store)) -> Any:
    try:
        skills = await store.get_one(SKILLS_KEY)
    except ContentStoreError as exc:
        logger.error(f"Error reading skills: {exc}")
        return failure(500, "Failed to read skills.", exc)
    if skills is None:
        return SkillsDocument().model_dump()
    return skills


@router.post("", response_model=MessageResponse)
async def update_skills(
    skill_list: list[Any] = Body(...),
    store: ContentStore = Depends(get_content_store),
    admin: AdminOut = Depends(get_current_admin),
) -> Any:
    """Replace ``skills.skillList``; other fields of the skills section are kept."""
    try:
        await store.upsert_merged(SKILLS_KEY, {"skillList": skill_list})
    except ContentMergeError as exc:
        return failure(409, "Failed to update skills.", exc)
    except ContentStoreError as exc:
        logger.error(f"Error updating skills: {exc}")
        return failure(500, "Failed to update skills.", exc)
    return MessageResponse(message="Skills updated successfully")
