"""Subject routes.

Reads need content access; create/delete are admin only. There is no
update: a wrong subject is deleted and recreated.
"""

from uuid import UUID

from fastapi import APIRouter, status

from studyhub.api.deps import ContentReader, ContentWriter, DbSession, get_or_404
from studyhub.schemas.chapters import ChapterRead
from studyhub.schemas.subjects import SubjectCreate, SubjectRead, SubjectTree
from studyhub.services import content

router = APIRouter(prefix="/subjects", tags=["subjects"])

SUBJECT_NOT_FOUND = "Subject not found"


@router.get("/", response_model=list[SubjectRead])
async def list_subjects(
    current_user: ContentReader,
    db: DbSession,
) -> list[SubjectRead]:
    """List all subjects ordered by name."""
    subjects = await content.list_subjects(db)
    return [SubjectRead.model_validate(s) for s in subjects]


@router.post("/", response_model=SubjectRead, status_code=status.HTTP_201_CREATED)
async def create_subject(
    data: SubjectCreate,
    current_user: ContentWriter,
    db: DbSession,
) -> SubjectRead:
    """Create a new subject."""
    subject = await content.create_subject(db, **data.model_dump())
    return SubjectRead.model_validate(subject)


@router.get("/{subject_id}", response_model=SubjectRead)
async def get_subject(
    subject_id: UUID,
    current_user: ContentReader,
    db: DbSession,
) -> SubjectRead:
    """Get a specific subject by ID."""
    subject = get_or_404(await content.get_subject(db, subject_id), SUBJECT_NOT_FOUND)
    return SubjectRead.model_validate(subject)


@router.get("/{subject_id}/chapters", response_model=list[ChapterRead])
async def list_subject_chapters(
    subject_id: UUID,
    current_user: ContentReader,
    db: DbSession,
) -> list[ChapterRead]:
    """List the chapters of a subject ordered by title (empty if the subject is gone)."""
    chapters = await content.list_chapters_for_subject(db, subject_id)
    return [ChapterRead.model_validate(c) for c in chapters]


@router.get("/{subject_id}/tree", response_model=SubjectTree)
async def get_subject_tree(
    subject_id: UUID,
    current_user: ContentReader,
    db: DbSession,
) -> SubjectTree:
    """Get a subject with its chapters and each chapter's notes and videos."""
    return get_or_404(await content.get_subject_tree(db, subject_id), SUBJECT_NOT_FOUND)


@router.delete("/{subject_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_subject(
    subject_id: UUID,
    current_user: ContentWriter,
    db: DbSession,
) -> None:
    """
    Delete a subject together with its chapters, notes and videos.

    Note PDFs stay in storage.
    """
    subject = get_or_404(await content.get_subject(db, subject_id), SUBJECT_NOT_FOUND)
    await content.delete_subject(db, subject)
