"""API routes package."""

from studyhub.api.routes import (
    admin,
    auth,
    chapters,
    notes,
    subjects,
    users,
    videos,
)

__all__ = [
    "admin",
    "auth",
    "chapters",
    "notes",
    "subjects",
    "users",
    "videos",
]
