"""Tests for YouTube video links."""

from uuid import uuid4

import pytest

from studyhub.services.youtube import extract_video_id, thumbnail_url


@pytest.mark.parametrize(
    ("url", "video_id"),
    [
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://youtube.com/watch?feature=share&v=dQw4w9WgXcQ&t=42", "dQw4w9WgXcQ"),
        ("https://youtu.be/dQw4w9WgXcQ?si=abc", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/embed/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/shorts/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://vimeo.com/123456", None),
        ("not a url", None),
    ],
)
def test_extract_video_id(url, video_id):
    assert extract_video_id(url) == video_id


@pytest.fixture
async def chapter_id(client, admin_headers) -> str:
    subject = await client.post("/subjects/", json={"name": "Music"}, headers=admin_headers)
    chapter = await client.post(
        "/chapters/",
        json={"subject_id": subject.json()["id"], "title": "Scales"},
        headers=admin_headers,
    )
    return chapter.json()["id"]


async def test_create_video(client, admin_headers, chapter_id):
    response = await client.post(
        "/videos/",
        json={
            "chapter_id": chapter_id,
            "title": "Major scales",
            "youtube_url": "https://youtu.be/dQw4w9WgXcQ",
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    video = response.json()
    assert video["youtube_video_id"] == "dQw4w9WgXcQ"
    assert video["thumbnail_url"] == thumbnail_url("dQw4w9WgXcQ")

    fetched = await client.get(f"/videos/{video['id']}", headers=admin_headers)
    assert fetched.json()["title"] == "Major scales"


async def test_create_video_rejects_non_youtube_url(client, admin_headers, chapter_id):
    response = await client.post(
        "/videos/",
        json={"chapter_id": chapter_id, "title": "Elsewhere", "youtube_url": "https://vimeo.com/1"},
        headers=admin_headers,
    )
    assert response.status_code == 422


async def test_create_video_needs_existing_chapter(client, admin_headers):
    response = await client.post(
        "/videos/",
        json={
            "chapter_id": str(uuid4()),
            "title": "Lost",
            "youtube_url": "https://youtu.be/dQw4w9WgXcQ",
        },
        headers=admin_headers,
    )
    assert response.status_code == 404


async def test_delete_video(client, admin_headers, chapter_id):
    video = (
        await client.post(
            "/videos/",
            json={
                "chapter_id": chapter_id,
                "title": "Minor scales",
                "youtube_url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            },
            headers=admin_headers,
        )
    ).json()

    response = await client.delete(f"/videos/{video['id']}", headers=admin_headers)
    assert response.status_code == 204

    remaining = await client.get(f"/videos/?chapter_id={chapter_id}", headers=admin_headers)
    assert remaining.json() == []
    assert (await client.delete(f"/videos/{video['id']}", headers=admin_headers)).status_code == 404
