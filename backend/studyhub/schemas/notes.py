"""Note schemas.

Notes are created through a multipart upload (title, chapter_id, file), so
there is no JSON create schema.
"""

from uuid import UUID

from studyhub.schemas.base import BaseSchema, CreatedMixin, IDMixin


class NoteRead(BaseSchema, IDMixin, CreatedMixin):
    """Schema for reading note data."""

    chapter_id: UUID
    title: str
    pdf_url: str
    file_key: str
    file_size_bytes: int | None = None
    page_count: int | None = None
