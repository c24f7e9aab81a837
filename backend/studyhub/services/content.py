"""
Content hierarchy store and admin mutations.

Subject -> Chapter -> {Note, Video}. Reads are plain foreign-key filters
ordered by name/title; nothing is cached. Mutations are independent of each
other: each one commits on its own and there is no cross-entity transaction,
apart from the note upload, which deletes the stored PDF again when the row
insert fails.

Callers enforce capabilities before reaching this module.
"""

import logging
from collections.abc import Collection
from uuid import UUID, uuid4

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.config import get_settings
from studyhub.db.models import Chapter, Note, Subject, User, UserRole, Video
from studyhub.schemas.chapters import ChapterRead, ChapterTree
from studyhub.schemas.notes import NoteRead
from studyhub.schemas.subjects import SubjectRead, SubjectTree
from studyhub.schemas.videos import VideoRead
from studyhub.services.pdf_processor import pdf_processor
from studyhub.services.s3 import StorageError, s3_service

logger = logging.getLogger(__name__)
settings = get_settings()


class InvalidUpload(ValueError):
    """Uploaded file rejected before anything was stored."""


# =============================================================================
# READS
# =============================================================================


async def list_subjects(db: AsyncSession) -> list[Subject]:
    result = await db.execute(select(Subject).order_by(Subject.name, Subject.created_at))
    return list(result.scalars())


async def get_subject(db: AsyncSession, subject_id: UUID) -> Subject | None:
    result = await db.execute(select(Subject).where(Subject.id == subject_id))
    return result.scalar_one_or_none()


async def get_chapter(db: AsyncSession, chapter_id: UUID) -> Chapter | None:
    result = await db.execute(select(Chapter).where(Chapter.id == chapter_id))
    return result.scalar_one_or_none()


async def list_chapters_for_subject(db: AsyncSession, subject_id: UUID) -> list[Chapter]:
    result = await db.execute(
        select(Chapter)
        .where(Chapter.subject_id == subject_id)
        .order_by(Chapter.title, Chapter.created_at)
    )
    return list(result.scalars())


async def list_notes_for_chapters(db: AsyncSession, chapter_ids: Collection[UUID]) -> list[Note]:
    if not chapter_ids:
        return []
    result = await db.execute(
        select(Note)
        .where(Note.chapter_id.in_(list(chapter_ids)))
        .order_by(Note.title, Note.created_at)
    )
    return list(result.scalars())


async def list_videos_for_chapters(db: AsyncSession, chapter_ids: Collection[UUID]) -> list[Video]:
    if not chapter_ids:
        return []
    result = await db.execute(
        select(Video)
        .where(Video.chapter_id.in_(list(chapter_ids)))
        .order_by(Video.title, Video.created_at)
    )
    return list(result.scalars())


async def list_all_notes(db: AsyncSession) -> list[Note]:
    """Every note across all chapters, newest first (admin management view)."""
    result = await db.execute(select(Note).order_by(Note.created_at.desc(), Note.title))
    return list(result.scalars())


async def list_all_videos(db: AsyncSession) -> list[Video]:
    """Every video across all chapters, newest first (admin management view)."""
    result = await db.execute(select(Video).order_by(Video.created_at.desc(), Video.title))
    return list(result.scalars())


async def get_subject_tree(db: AsyncSession, subject_id: UUID) -> SubjectTree | None:
    """
    Subject with its chapters, each holding its notes and videos.

    Returns None when the subject does not exist (e.g. deleted while a
    client still holds a link to it).
    """
    subject = await get_subject(db, subject_id)
    if subject is None:
        return None

    chapters = await list_chapters_for_subject(db, subject_id)
    chapter_ids = [c.id for c in chapters]
    notes = await list_notes_for_chapters(db, chapter_ids)
    videos = await list_videos_for_chapters(db, chapter_ids)

    # Built from the read schemas so the ORM relationships are never lazy-loaded
    nodes = {
        c.id: ChapterTree(**ChapterRead.model_validate(c).model_dump()) for c in chapters
    }
    for note in notes:
        nodes[note.chapter_id].notes.append(NoteRead.model_validate(note))
    for video in videos:
        nodes[video.chapter_id].videos.append(VideoRead.model_validate(video))

    return SubjectTree(
        **SubjectRead.model_validate(subject).model_dump(),
        chapters=[nodes[cid] for cid in chapter_ids],
    )


async def overview(db: AsyncSession) -> dict[str, int]:
    """Row counts for the admin dashboard."""

    async def count(stmt) -> int:
        return (await db.execute(stmt)).scalar() or 0

    return {
        "users": await count(select(func.count()).select_from(User)),
        "users_with_access": await count(
            select(func.count()).select_from(User).where(User.access.is_(True))
        ),
        "admins": await count(
            select(func.count()).select_from(User).where(User.role == UserRole.ADMIN.value)
        ),
        "subjects": await count(select(func.count()).select_from(Subject)),
        "chapters": await count(select(func.count()).select_from(Chapter)),
        "notes": await count(select(func.count()).select_from(Note)),
        "videos": await count(select(func.count()).select_from(Video)),
    }


# =============================================================================
# MUTATIONS
# =============================================================================


async def create_subject(
    db: AsyncSession,
    name: str,
    description: str | None = None,
    image_url: str | None = None,
) -> Subject:
    subject = Subject(name=name, description=description, image_url=image_url)
    db.add(subject)
    await db.commit()
    await db.refresh(subject)
    logger.info("Created subject %s (%s)", subject.name, subject.id)
    return subject


async def delete_subject(db: AsyncSession, subject: Subject) -> None:
    """Delete a subject; the database cascades to chapters, notes and videos."""
    orphaned = await db.execute(
        select(Note.file_key).join(Chapter, Note.chapter_id == Chapter.id).where(
            Chapter.subject_id == subject.id
        )
    )
    file_keys = list(orphaned.scalars())

    await db.delete(subject)
    await db.commit()

    logger.info("Deleted subject %s (%s)", subject.name, subject.id)
    if file_keys:
        logger.warning(
            "Subject %s deleted with %d note file(s) left in storage: %s",
            subject.id, len(file_keys), ", ".join(file_keys),
        )


async def create_chapter(
    db: AsyncSession,
    subject_id: UUID,
    title: str,
    description: str | None = None,
) -> Chapter:
    chapter = Chapter(subject_id=subject_id, title=title, description=description)
    db.add(chapter)
    await db.commit()
    await db.refresh(chapter)
    logger.info("Created chapter %s (%s) in subject %s", chapter.title, chapter.id, subject_id)
    return chapter


async def delete_chapter(db: AsyncSession, chapter: Chapter) -> None:
    """Delete a chapter; the database cascades to its notes and videos."""
    orphaned = await db.execute(select(Note.file_key).where(Note.chapter_id == chapter.id))
    file_keys = list(orphaned.scalars())

    await db.delete(chapter)
    await db.commit()

    logger.info("Deleted chapter %s (%s)", chapter.title, chapter.id)
    if file_keys:
        logger.warning(
            "Chapter %s deleted with %d note file(s) left in storage: %s",
            chapter.id, len(file_keys), ", ".join(file_keys),
        )


async def upload_note(
    db: AsyncSession,
    chapter_id: UUID,
    title: str,
    file_data: bytes,
) -> Note:
    """
    Store a PDF and insert its note row.

    Steps:
    1. Check size and that the bytes open as a PDF (nothing stored on failure)
    2. Upload the file to object storage (no row written on failure)
    3. Insert the note row; on failure delete the uploaded object again

    Raises:
        InvalidUpload: file is empty, too large, or not a PDF
        StorageError: upload to object storage failed
    """
    if not file_data:
        raise InvalidUpload("The uploaded file is empty.")
    if len(file_data) > settings.max_pdf_size_bytes:
        raise InvalidUpload(
            f"The uploaded file exceeds the {settings.max_pdf_size_bytes} byte limit."
        )

    inspection = await pdf_processor.inspect(file_data)
    if not inspection["valid"]:
        logger.warning("Rejected note upload %r: not a valid PDF", title)
        raise InvalidUpload("The uploaded file is not a valid PDF.")

    file_key = f"notes/{chapter_id}/{uuid4()}.pdf"
    await s3_service.upload_pdf(file_key, file_data)
    logger.info("Uploaded %d bytes to %s", len(file_data), file_key)

    note = Note(
        chapter_id=chapter_id,
        title=title,
        file_key=file_key,
        pdf_url=s3_service.public_url(file_key),
        file_size_bytes=len(file_data),
        page_count=inspection["page_count"],
    )
    try:
        db.add(note)
        await db.commit()
    except Exception:
        logger.error("Failed to save note row for %s, removing uploaded file", file_key, exc_info=True)
        await db.rollback()
        try:
            await s3_service.delete_pdf(file_key)
        except StorageError:
            logger.error("Compensating delete failed, %s is orphaned", file_key, exc_info=True)
        raise

    await db.refresh(note)
    return note


async def delete_note(db: AsyncSession, note: Note) -> None:
    """
    Delete a note's file from storage, then its row.

    If storage deletion fails the row is kept so the file is not orphaned.

    Raises:
        StorageError: storage deletion failed
    """
    await s3_service.delete_pdf(note.file_key)
    await db.delete(note)
    await db.commit()
    logger.info("Deleted note %s (%s)", note.title, note.id)


async def create_video(
    db: AsyncSession,
    chapter_id: UUID,
    title: str,
    youtube_url: str,
) -> Video:
    video = Video(chapter_id=chapter_id, title=title, youtube_url=youtube_url)
    db.add(video)
    await db.commit()
    await db.refresh(video)
    logger.info("Created video %s (%s) in chapter %s", video.title, video.id, chapter_id)
    return video


async def delete_video(db: AsyncSession, video: Video) -> None:
    await db.delete(video)
    await db.commit()
    logger.info("Deleted video %s (%s)", video.title, video.id)
