"""
Field extraction exports.
"""

from playlist_harvest.parsing.field_extractor import (
    CHANNEL_STRATEGIES,
    TITLE_STRATEGIES,
    FieldExtractor,
    resolve_channel,
    resolve_title,
)

__all__ = [
    "CHANNEL_STRATEGIES",
    "TITLE_STRATEGIES",
    "FieldExtractor",
    "resolve_channel",
    "resolve_title",
]
