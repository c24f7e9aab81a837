"""Admin dashboard routes."""

from fastapi import APIRouter

from studyhub.api.deps import ContentWriter, DbSession, UserManager
from studyhub.schemas.notes import NoteRead
from studyhub.schemas.subjects import ContentOverview
from studyhub.schemas.videos import VideoRead
from studyhub.services import content

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/overview", response_model=ContentOverview)
async def get_overview(
    admin: UserManager,
    db: DbSession,
) -> ContentOverview:
    """Counts of users (total, with access, admins) and of each content type."""
    return ContentOverview(**await content.overview(db))


@router.get("/notes", response_model=list[NoteRead])
async def list_all_notes(
    current_user: ContentWriter,
    db: DbSession,
) -> list[NoteRead]:
    """Every note across all subjects, newest first."""
    notes = await content.list_all_notes(db)
    return [NoteRead.model_validate(n) for n in notes]


@router.get("/videos", response_model=list[VideoRead])
async def list_all_videos(
    current_user: ContentWriter,
    db: DbSession,
) -> list[VideoRead]:
    """Every video across all subjects, newest first."""
    videos = await content.list_all_videos(db)
    return [VideoRead.model_validate(v) for v in videos]
