"""
Playlist harvesting engine.
"""

from playlist_harvest.engine import PlaylistHarvestEngine
from playlist_harvest.handler import MessageHandler
from playlist_harvest.normalization import parse_youtube_url
from playlist_harvest.types import ParsedUrl, ScanResult, VideoRecord

__all__ = [
    "MessageHandler",
    "ParsedUrl",
    "PlaylistHarvestEngine",
    "ScanResult",
    "VideoRecord",
    "parse_youtube_url",
]
