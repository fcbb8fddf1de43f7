"""
Shared harvesting runtime data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

WATCH_URL_PREFIX = "https://www.youtube.com/watch?v="
UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_CHANNEL = "Unknown Channel"


class UrlErrorKind(str, Enum):
    NOT_A_STRING = "not-a-string"
    WRONG_DOMAIN = "wrong-domain"
    NO_ID_EXTRACTED = "no-id-extracted"
    BAD_ID_LENGTH = "bad-id-length"


@dataclass(frozen=True)
class ParsedUrl:
    """
    Outcome of validating and normalizing one YouTube address.

    A valid result with ``video_id=None`` is a playlist-only address and keeps
    the trimmed input as ``normalized_url``.
    """

    is_valid: bool
    video_id: str | None
    normalized_url: str | None
    error: str | None = None
    error_kind: UrlErrorKind | None = None

    @property
    def is_video(self) -> bool:
        return self.is_valid and self.video_id is not None

    @property
    def is_playlist_only(self) -> bool:
        return self.is_valid and self.video_id is None


@dataclass(frozen=True)
class VideoRecord:
    """
    One harvested playlist entry. ``url`` is always a canonical watch URL.
    """

    channel: str
    url: str
    title: str

    @property
    def video_id(self) -> str:
        return self.url[len(WATCH_URL_PREFIX):]

    def to_payload(self) -> dict[str, str]:
        return {"channel": self.channel, "url": self.url, "title": self.title}


@dataclass(frozen=True)
class ItemSkip:
    """
    Diagnostics for one rendered item that produced no record.
    """

    index: int
    reason: str
    url: str | None = None


@dataclass(frozen=True)
class ConvergenceReport:
    """
    Outcome for one lazy-load run.
    """

    converged: bool
    cap_reached: bool
    passes: int
    item_count: int
    load_more_clicks: int = 0


@dataclass(frozen=True)
class AggregationResult:
    """
    Unique records from one aggregation pass plus its diagnostics.
    """

    videos: list[VideoRecord]
    skips: list[ItemSkip] = field(default_factory=list)
    item_count: int = 0
    used_fallback: bool = False


@dataclass(frozen=True)
class ScanResult:
    """
    Outcome for one playlist scan.
    """

    videos: list[VideoRecord]
    error: str | None = None
    warnings: list[str] = field(default_factory=list)
    convergence: ConvergenceReport | None = None


@dataclass(frozen=True)
class CurrentVideoInfo:
    """
    Title and channel of the item currently being viewed.
    """

    title: str
    channel: str
    error: str | None = None
