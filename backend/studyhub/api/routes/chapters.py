"""Chapter CRUD routes (no update)."""

from uuid import UUID

from fastapi import APIRouter, status

from studyhub.api.deps import ContentReader, ContentWriter, DbSession, get_or_404
from studyhub.schemas.chapters import ChapterCreate, ChapterRead
from studyhub.services import content

router = APIRouter(prefix="/chapters", tags=["chapters"])

CHAPTER_NOT_FOUND = "Chapter not found"


@router.get("/", response_model=list[ChapterRead])
async def list_chapters(
    subject_id: UUID,
    current_user: ContentReader,
    db: DbSession,
) -> list[ChapterRead]:
    """List chapters of a subject, ordered by title."""
    chapters = await content.list_chapters_for_subject(db, subject_id)
    return [ChapterRead.model_validate(c) for c in chapters]


@router.post("/", response_model=ChapterRead, status_code=status.HTTP_201_CREATED)
async def create_chapter(
    data: ChapterCreate,
    current_user: ContentWriter,
    db: DbSession,
) -> ChapterRead:
    """Create a chapter. The subject must exist."""
    get_or_404(await content.get_subject(db, data.subject_id), "Subject not found")
    chapter = await content.create_chapter(db, **data.model_dump())
    return ChapterRead.model_validate(chapter)


@router.get("/{chapter_id}", response_model=ChapterRead)
async def get_chapter(
    chapter_id: UUID,
    current_user: ContentReader,
    db: DbSession,
) -> ChapterRead:
    """Get a specific chapter by ID."""
    chapter = get_or_404(await content.get_chapter(db, chapter_id), CHAPTER_NOT_FOUND)
    return ChapterRead.model_validate(chapter)


@router.delete("/{chapter_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_chapter(
    chapter_id: UUID,
    current_user: ContentWriter,
    db: DbSession,
) -> None:
    """Delete a chapter and its notes and videos (note PDFs stay in storage)."""
    chapter = get_or_404(await content.get_chapter(db, chapter_id), CHAPTER_NOT_FOUND)
    await content.delete_chapter(db, chapter)
