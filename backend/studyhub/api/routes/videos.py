"""Video link routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status
from sqlalchemy import select

from studyhub.api.deps import ContentReader, ContentWriter, DbSession, get_or_404
from studyhub.db.models import Video
from studyhub.schemas.videos import VideoCreate, VideoRead
from studyhub.services import content

router = APIRouter(prefix="/videos", tags=["videos"])

VIDEO_NOT_FOUND = "Video not found"


@router.get("/", response_model=list[VideoRead])
async def list_videos(
    current_user: ContentReader,
    db: DbSession,
    chapter_ids: Annotated[list[UUID], Query(alias="chapter_id")] = [],
) -> list[VideoRead]:
    """List videos belonging to any of the given chapters, ordered by title."""
    videos = await content.list_videos_for_chapters(db, set(chapter_ids))
    return [VideoRead.model_validate(v) for v in videos]


@router.post("/", response_model=VideoRead, status_code=status.HTTP_201_CREATED)
async def create_video(
    data: VideoCreate,
    current_user: ContentWriter,
    db: DbSession,
) -> VideoRead:
    """Add a YouTube video to a chapter. The chapter must exist."""
    get_or_404(await content.get_chapter(db, data.chapter_id), "Chapter not found")
    video = await content.create_video(db, **data.model_dump())
    return VideoRead.model_validate(video)


@router.get("/{video_id}", response_model=VideoRead)
async def get_video(
    video_id: UUID,
    current_user: ContentReader,
    db: DbSession,
) -> VideoRead:
    """Get a specific video by ID."""
    result = await db.execute(select(Video).where(Video.id == video_id))
    video = get_or_404(result.scalar_one_or_none(), VIDEO_NOT_FOUND)
    return VideoRead.model_validate(video)


@router.delete("/{video_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_video(
    video_id: UUID,
    current_user: ContentWriter,
    db: DbSession,
) -> None:
    """Delete a video."""
    result = await db.execute(select(Video).where(Video.id == video_id))
    video = get_or_404(result.scalar_one_or_none(), VIDEO_NOT_FOUND)
    await content.delete_video(db, video)
