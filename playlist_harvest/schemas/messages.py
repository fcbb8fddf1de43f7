"""
playlist_harvest/schemas/messages.py

Request/response schemas for the harvester's message contracts.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from playlist_harvest.types import CurrentVideoInfo, ScanResult


class ScanPlaylistMessage(BaseModel):
    """
    Request to materialize and harvest the current playlist page.
    """

    type: Literal["SCAN_PLAYLIST"]


class GetCurrentVideoInfoMessage(BaseModel):
    """
    Request for the title and channel of the video being viewed.
    """

    type: Literal["GET_CURRENT_VIDEO_INFO"]


HarvestRequest = Annotated[
    Union[ScanPlaylistMessage, GetCurrentVideoInfoMessage],
    Field(discriminator="type"),
]
REQUEST_ADAPTER = TypeAdapter(HarvestRequest)


class VideoPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    channel: str
    url: str
    title: str


class ScanResultResponse(BaseModel):
    """
    Response to SCAN_PLAYLIST. ``error`` is omitted on success.
    """

    type: Literal["SCAN_RESULT"] = "SCAN_RESULT"
    videos: list[VideoPayload] = Field(default_factory=list)
    error: str | None = None

    @classmethod
    def from_result(cls, result: ScanResult) -> ScanResultResponse:
        return cls(
            videos=[VideoPayload(**video.to_payload()) for video in result.videos],
            error=result.error,
        )


class CurrentVideoInfoResponse(BaseModel):
    """
    Response to GET_CURRENT_VIDEO_INFO. ``error`` is omitted on success.
    """

    type: Literal["CURRENT_VIDEO_INFO"] = "CURRENT_VIDEO_INFO"
    title: str
    channel: str
    error: str | None = None

    @classmethod
    def from_info(cls, info: CurrentVideoInfo) -> CurrentVideoInfoResponse:
        return cls(title=info.title, channel=info.channel, error=info.error)
