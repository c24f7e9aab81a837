"""API routes for PDF notes."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy import select

from studyhub.api.deps import ContentReader, ContentWriter, DbSession, get_or_404
from studyhub.config import sanitize_error
from studyhub.db.models import Note
from studyhub.schemas.notes import NoteRead
from studyhub.services import content
from studyhub.services.s3 import StorageError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["notes"])

NOTE_NOT_FOUND = "Note not found"


@router.get("/", response_model=list[NoteRead])
async def list_notes(
    current_user: ContentReader,
    db: DbSession,
    chapter_ids: Annotated[list[UUID], Query(alias="chapter_id")] = [],
) -> list[NoteRead]:
    """
    List notes belonging to any of the given chapters, ordered by title.

    Repeat the parameter for several chapters: ?chapter_id=a&chapter_id=b
    """
    notes = await content.list_notes_for_chapters(db, set(chapter_ids))
    return [NoteRead.model_validate(n) for n in notes]


@router.post("/", response_model=NoteRead, status_code=status.HTTP_201_CREATED)
async def upload_note(
    current_user: ContentWriter,
    db: DbSession,
    title: Annotated[str, Form(min_length=1, max_length=255)],
    chapter_id: Annotated[UUID, Form()],
    file: Annotated[UploadFile, File(description="PDF file")],
):
    """
    Upload a PDF note to a chapter.

    Flow:
    1. Validate title, chapter and file before anything is stored
    2. Upload the PDF to object storage
    3. Insert the note row (the uploaded file is removed again if this fails)
    """
    title = title.strip()
    if not title:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            detail="Title is required",
        )
    get_or_404(await content.get_chapter(db, chapter_id), "Chapter not found")

    file_data = await file.read()

    try:
        note = await content.upload_note(db, chapter_id, title, file_data)
    except content.InvalidUpload as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StorageError as e:
        logger.error("Failed to store note file %s: %s", file.filename, str(e), exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=sanitize_error(e, generic_message="Failed to upload note."),
        )

    logger.info("Note %s uploaded (%s, %d pages)", note.id, file.filename, note.page_count or 0)
    return NoteRead.model_validate(note)


@router.get("/{note_id}", response_model=NoteRead)
async def get_note(
    note_id: UUID,
    current_user: ContentReader,
    db: DbSession,
) -> NoteRead:
    """Get a specific note by ID."""
    result = await db.execute(select(Note).where(Note.id == note_id))
    note = get_or_404(result.scalar_one_or_none(), NOTE_NOT_FOUND)
    return NoteRead.model_validate(note)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: UUID,
    current_user: ContentWriter,
    db: DbSession,
) -> None:
    """
    Delete a note from both storage and database.

    Deletes from storage first, then from the database. If storage deletion
    fails, the database record is preserved to avoid orphaning the file.
    """
    result = await db.execute(select(Note).where(Note.id == note_id))
    note = get_or_404(result.scalar_one_or_none(), NOTE_NOT_FOUND)

    try:
        await content.delete_note(db, note)
    except StorageError as e:
        logger.error("Failed to delete from storage (key=%s): %s", note.file_key, str(e), exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=sanitize_error(e, generic_message="Failed to delete note file from storage."),
        )
