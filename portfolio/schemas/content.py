from typing import Any

from pydantic import BaseModel, Field

from portfolio.schemas.common import MessageResponse


class ResumeUploadResponse(MessageResponse):
    url: str


class ImageUploadResponse(MessageResponse):
    imageUrl: str
    publicId: str


class SkillsDocument(BaseModel):
    """Stored ``skills`` section. Only ``skillList`` is known; other fields pass through."""

    model_config = {"extra": "allow"}

    skillList: list[Any] = Field(default_factory=list, examples=[[{"id": "1", "name": "Go", "level": "Expert"}]])
