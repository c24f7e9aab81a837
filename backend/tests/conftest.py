"""Pytest configuration and fixtures."""

import os

# Settings are read at import time; these must exist before studyhub is imported.
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("GOOGLE_CLIENT_ID", "test-client-id.apps.googleusercontent.com")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")
os.environ.setdefault("AWS_S3_BUCKET", "studyhub-test")
os.environ.setdefault("AWS_S3_REGION", "us-east-2")

from collections.abc import AsyncGenerator

import pymupdf
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from studyhub.api.deps import create_access_token
from studyhub.db.base import Base
from studyhub.db.models import User, UserRole
from studyhub.db.session import enable_sqlite_foreign_keys, get_db
from studyhub.main import app
from studyhub.services.s3 import StorageError, s3_service


@pytest.fixture
async def engine(tmp_path):
    """Fresh SQLite database per test, foreign keys enforced."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'studyhub.db'}")
    enable_sqlite_foreign_keys(engine.sync_engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for calling services directly and inspecting rows."""
    async with session_factory() as session:
        yield session


class FakeStorage:
    """In-memory stand-in for the S3 bucket."""

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_upload = False
        self.fail_delete = False

    async def upload_pdf(self, file_key: str, file_data: bytes) -> None:
        if self.fail_upload:
            raise StorageError("Failed to upload PDF to S3: simulated outage")
        self.objects[file_key] = file_data

    async def delete_pdf(self, file_key: str) -> None:
        if self.fail_delete:
            raise StorageError("Failed to delete PDF from S3: simulated outage")
        self.objects.pop(file_key, None)
        self.deleted.append(file_key)


@pytest.fixture(autouse=True)
def storage(monkeypatch) -> FakeStorage:
    """Replace S3 calls for every test."""
    fake = FakeStorage()
    monkeypatch.setattr(s3_service, "upload_pdf", fake.upload_pdf)
    monkeypatch.setattr(s3_service, "delete_pdf", fake.delete_pdf)
    return fake


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI endpoints."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session_factory):
    """Create a user row directly; returns the user and its auth headers."""

    async def _make_user(email: str, *, access: bool = False, admin: bool = False):
        async with session_factory() as session:
            user = User(
                email=email,
                access=access,
                role=UserRole.ADMIN.value if admin else UserRole.USER.value,
            )
            session.add(user)
            await session.commit()
            await session.refresh(user)
        headers = {"Authorization": f"Bearer {create_access_token(user.id)}"}
        return user, headers

    return _make_user


@pytest.fixture
async def admin_headers(make_user) -> dict[str, str]:
    _, headers = await make_user("admin@example.com", access=True, admin=True)
    return headers


def build_pdf(pages: int = 1) -> bytes:
    doc = pymupdf.open()
    for i in range(pages):
        page = doc.new_page()
        page.insert_text((72, 72), f"Page {i + 1}")
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def pdf_bytes() -> bytes:
    return build_pdf()


@pytest.fixture
def make_pdf():
    return build_pdf
