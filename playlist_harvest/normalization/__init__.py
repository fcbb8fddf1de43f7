"""
URL normalization exports.
"""

from playlist_harvest.normalization.url_parser import (
    is_playlist_listing,
    is_valid_youtube_url,
    parse_youtube_url,
    resolve_link,
)

__all__ = [
    "is_playlist_listing",
    "is_valid_youtube_url",
    "parse_youtube_url",
    "resolve_link",
]
