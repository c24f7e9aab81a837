"""Chapter schemas."""

from uuid import UUID

from pydantic import Field

from studyhub.schemas.base import BaseSchema, CreatedMixin, IDMixin
from studyhub.schemas.notes import NoteRead
from studyhub.schemas.videos import VideoRead


class ChapterCreate(BaseSchema):
    """Schema for creating a chapter under a subject."""

    subject_id: UUID
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None


class ChapterRead(BaseSchema, IDMixin, CreatedMixin):
    """Schema for reading chapter data."""

    subject_id: UUID
    title: str
    description: str | None = None


class ChapterTree(ChapterRead):
    """Chapter with its notes and videos."""

    notes: list[NoteRead] = Field(default_factory=list)
    videos: list[VideoRead] = Field(default_factory=list)
