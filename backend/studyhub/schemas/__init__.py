"""Pydantic schemas for API request/response validation."""

from studyhub.schemas.user import AccessUpdate, AdminUpdate, CurrentUserRead, UserRead
from studyhub.schemas.auth import GoogleAuthRequest, TokenResponse
from studyhub.schemas.subjects import ContentOverview, SubjectCreate, SubjectRead, SubjectTree
from studyhub.schemas.chapters import ChapterCreate, ChapterRead, ChapterTree
from studyhub.schemas.notes import NoteRead
from studyhub.schemas.videos import VideoCreate, VideoRead

__all__ = [
    # User
    "AccessUpdate",
    "AdminUpdate",
    "CurrentUserRead",
    "UserRead",
    # Auth
    "GoogleAuthRequest",
    "TokenResponse",
    # Subjects
    "ContentOverview",
    "SubjectCreate",
    "SubjectRead",
    "SubjectTree",
    # Chapters
    "ChapterCreate",
    "ChapterRead",
    "ChapterTree",
    # Notes
    "NoteRead",
    # Videos
    "VideoCreate",
    "VideoRead",
]
