"""
SQLAlchemy 2.0 Models for StudyHub.

Uses modern declarative syntax with Mapped[] type annotations.
All models use UUID primary keys and proper relationship definitions.

Content hierarchy: Subject -> Chapter -> {Note, Video}. Every parent link is
ON DELETE CASCADE at the database level; relationships use passive_deletes so
the ORM leaves the cascade to the database instead of loading children.
"""

from datetime import datetime
from enum import Enum as PyEnum
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
    false,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studyhub.db.base import Base


# =============================================================================
# ENUMS
# =============================================================================


class UserRole(str, PyEnum):
    """Role of a portal user."""

    USER = "user"
    ADMIN = "admin"


# =============================================================================
# MODELS
# =============================================================================


class User(Base):
    """
    Portal account, one per email.

    Created on first sign-in with no content access. Only admins flip
    ``access`` and ``role``; the application never deletes users.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('user', 'admin')", name="valid_role"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    access: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=UserRole.USER.value, server_default=UserRole.USER.value
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
    last_login_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


class Subject(Base):
    """Top-level topic. Parent of chapters."""

    __tablename__ = "subjects"
    __table_args__ = (Index("idx_subjects_name", "name"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    chapters: Mapped[list["Chapter"]] = relationship(
        "Chapter", back_populates="subject", passive_deletes=True
    )


class Chapter(Base):
    """A chapter of a subject. Parent of notes and videos."""

    __tablename__ = "chapters"
    __table_args__ = (Index("idx_chapters_subject_title", "subject_id", "title"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    subject_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    subject: Mapped["Subject"] = relationship("Subject", back_populates="chapters")
    notes: Mapped[list["Note"]] = relationship(
        "Note", back_populates="chapter", passive_deletes=True
    )
    videos: Mapped[list["Video"]] = relationship(
        "Video", back_populates="chapter", passive_deletes=True
    )


class Note(Base):
    """
    PDF note attached to a chapter.

    ``file_key`` is the object-storage key; ``pdf_url`` the public URL handed
    to readers. Cascade deletes remove the row only, never the stored object.
    """

    __tablename__ = "notes"
    __table_args__ = (
        Index("idx_notes_chapter_title", "chapter_id", "title"),
        CheckConstraint(
            "file_size_bytes IS NULL OR file_size_bytes > 0",
            name="valid_file_size",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    chapter_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("chapters.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    file_key: Mapped[str] = mapped_column(String(1024), nullable=False)
    pdf_url: Mapped[str] = mapped_column(String(2048), nullable=False)
    file_size_bytes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    page_count: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    chapter: Mapped["Chapter"] = relationship("Chapter", back_populates="notes")


class Video(Base):
    """YouTube video link attached to a chapter."""

    __tablename__ = "videos"
    __table_args__ = (Index("idx_videos_chapter_title", "chapter_id", "title"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    chapter_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("chapters.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    youtube_url: Mapped[str] = mapped_column(String(2048), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    chapter: Mapped["Chapter"] = relationship("Chapter", back_populates="videos")
