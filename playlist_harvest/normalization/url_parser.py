"""
YouTube address validation and canonicalization.

Supported shapes:

- https://www.youtube.com/watch?v=VIDEO_ID (also ``vi=``)
- https://m.youtube.com/watch?v=VIDEO_ID
- https://youtu.be/VIDEO_ID
- https://www.youtube.com/v/VIDEO_ID and /embed/VIDEO_ID
- https://www.youtube.com/VIDEO_ID
- https://www.youtube.com/playlist?list=PLAYLIST_ID (playlist-only)

Every video address is reduced to ``https://www.youtube.com/watch?v=VIDEO_ID``.
"""

from __future__ import annotations

import re
from urllib.parse import urljoin

from playlist_harvest.types import WATCH_URL_PREFIX, ParsedUrl, UrlErrorKind

VIDEO_ID_LENGTH = 11

DOMAIN_PATTERN = re.compile(
    r"^(https?://)?(www\.)?(m\.)?(youtube\.com|youtu\.be)",
    flags=re.IGNORECASE,
)
PLAYLIST_PATTERN = re.compile(r"[?&]list=([a-zA-Z0-9_-]+)")

# Tried in order; the first pattern that matches decides the identifier.
VIDEO_ID_PATTERNS = (
    re.compile(r"[?&]vi?=([a-zA-Z0-9_-]+)"),
    re.compile(r"youtu\.be/([a-zA-Z0-9_-]+)"),
    re.compile(r"/(?:v|embed)/([a-zA-Z0-9_-]+)"),
    re.compile(r"youtube\.com/([a-zA-Z0-9_-]{11})(?:\?|$|&)"),
)

ERROR_MESSAGES = {
    UrlErrorKind.NOT_A_STRING: "URL must be a non-empty string",
    UrlErrorKind.WRONG_DOMAIN: "Not a YouTube URL",
    UrlErrorKind.NO_ID_EXTRACTED: "Could not extract video ID from YouTube URL",
    UrlErrorKind.BAD_ID_LENGTH: "Video ID must be 11 characters",
}


def _failure(kind: UrlErrorKind) -> ParsedUrl:
    return ParsedUrl(
        is_valid=False,
        video_id=None,
        normalized_url=None,
        error=ERROR_MESSAGES[kind],
        error_kind=kind,
    )


def extract_video_id(url: str) -> str | None:
    """
    Return the raw identifier token from the first matching pattern.

    The token is not length-checked here.
    """

    for pattern in VIDEO_ID_PATTERNS:
        match = pattern.search(url)
        if match is not None:
            return match.group(1)
    return None


def parse_youtube_url(raw: object) -> ParsedUrl:
    """
    Validate ``raw`` and normalize it to the canonical watch address.

    Never raises; failures are reported on the returned ``ParsedUrl``.
    """

    if not raw or not isinstance(raw, str):
        return _failure(UrlErrorKind.NOT_A_STRING)

    trimmed = raw.strip()
    if not DOMAIN_PATTERN.match(trimmed):
        return _failure(UrlErrorKind.WRONG_DOMAIN)

    # A video id wins over a list= parameter in the same address.
    video_id = extract_video_id(trimmed)
    if video_id is not None:
        if len(video_id) != VIDEO_ID_LENGTH:
            return _failure(UrlErrorKind.BAD_ID_LENGTH)
        return ParsedUrl(
            is_valid=True,
            video_id=video_id,
            normalized_url=f"{WATCH_URL_PREFIX}{video_id}",
        )

    if PLAYLIST_PATTERN.search(trimmed):
        return ParsedUrl(is_valid=True, video_id=None, normalized_url=trimmed)

    return _failure(UrlErrorKind.NO_ID_EXTRACTED)


def is_valid_youtube_url(raw: object) -> bool:
    """
    True for playlist addresses and for valid video addresses.
    """

    return parse_youtube_url(raw).is_valid


def is_playlist_listing(raw: object) -> bool:
    """
    True when ``raw`` is a playlist-only address (``list=`` without a video id).
    """

    return parse_youtube_url(raw).is_playlist_only


def resolve_link(href: str, site_root: str) -> str:
    """
    Resolve a possibly relative link against the site root.
    """

    stripped = href.strip()
    if stripped.lower().startswith(("http://", "https://")):
        return stripped
    return urljoin(f"{site_root.rstrip('/')}/", stripped)
