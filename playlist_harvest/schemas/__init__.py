"""
Message schema exports.
"""

from playlist_harvest.schemas.messages import (
    REQUEST_ADAPTER,
    CurrentVideoInfoResponse,
    GetCurrentVideoInfoMessage,
    ScanPlaylistMessage,
    ScanResultResponse,
    VideoPayload,
)

__all__ = [
    "REQUEST_ADAPTER",
    "CurrentVideoInfoResponse",
    "GetCurrentVideoInfoMessage",
    "ScanPlaylistMessage",
    "ScanResultResponse",
    "VideoPayload",
]
