"""Video schemas."""

from uuid import UUID

from pydantic import Field, computed_field, field_validator

from studyhub.schemas.base import BaseSchema, CreatedMixin, IDMixin
from studyhub.services.youtube import extract_video_id, thumbnail_url


class VideoCreate(BaseSchema):
    """Schema for adding a video link to a chapter."""

    chapter_id: UUID
    title: str = Field(..., min_length=1, max_length=255)
    youtube_url: str = Field(..., min_length=1, max_length=2048)

    @field_validator("youtube_url")
    @classmethod
    def must_be_youtube(cls, v: str) -> str:
        if extract_video_id(v) is None:
            raise ValueError("youtube_url must be a YouTube video link")
        return v


class VideoRead(BaseSchema, IDMixin, CreatedMixin):
    """Schema for reading video data."""

    chapter_id: UUID
    title: str
    youtube_url: str

    @computed_field
    @property
    def youtube_video_id(self) -> str | None:
        return extract_video_id(self.youtube_url)

    @computed_field
    @property
    def thumbnail_url(self) -> str | None:
        video_id = self.youtube_video_id
        return thumbnail_url(video_id) if video_id else None
