"""Subject schemas."""

from pydantic import Field

from studyhub.schemas.base import BaseSchema, CreatedMixin, IDMixin
from studyhub.schemas.chapters import ChapterTree


class SubjectCreate(BaseSchema):
    """Schema for creating a subject."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    image_url: str | None = Field(None, max_length=2048)


class SubjectRead(BaseSchema, IDMixin, CreatedMixin):
    """Schema for reading subject data."""

    name: str
    description: str | None = None
    image_url: str | None = None


class SubjectTree(SubjectRead):
    """Subject with chapters, notes and videos nested."""

    chapters: list[ChapterTree] = Field(default_factory=list)


class ContentOverview(BaseSchema):
    """Row counts shown on the admin dashboard."""

    users: int
    users_with_access: int
    admins: int
    subjects: int
    chapters: int
    notes: int
    videos: int
