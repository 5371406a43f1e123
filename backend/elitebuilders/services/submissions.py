import re
from urllib.parse import urlparse

GITHUB_REPO_RE = re.compile(r"^https?://(www\.)?github\.com/[\w-]+/[\w.-]+/?$")
DIRECT_VIDEO_RE = re.compile(r"\.(mp4|webm|ogg|mov)$", re.IGNORECASE)
VIDEO_HOSTS = ("youtube.com", "youtu.be", "vimeo.com", "loom.com")
MAX_VIDEO_FILE_BYTES = 100 * 1024 * 1024


def validate_github_url(url: str) -> bool:
    return bool(GITHUB_REPO_RE.fullmatch(url))


def validate_video_url(url: str) -> bool:
    """Accept YouTube, Vimeo, Loom, or a direct link to a video file."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        return False
    if any(host in parsed.hostname for host in VIDEO_HOSTS):
        return True
    return bool(DIRECT_VIDEO_RE.search(parsed.path))
