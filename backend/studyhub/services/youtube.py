"""YouTube link parsing for video entries."""

import re

# watch?v=<id>, youtu.be/<id>, /embed/<id>, /shorts/<id>
_VIDEO_ID = re.compile(
    r"(?:youtube\.com/(?:watch\?(?:.*&)?v=|embed/|shorts/|live/)|youtu\.be/)([A-Za-z0-9_-]{11})"
)


def extract_video_id(url: str) -> str | None:
    """Return the 11-character video id of a YouTube URL, or None."""
    match = _VIDEO_ID.search(url)
    if match is None:
        return None
    return match.group(1)


def thumbnail_url(video_id: str) -> str:
    return f"https://img.youtube.com/vi/{video_id}/mqdefault.jpg"
