"""
Message handler exposing the engine through request/response messages.

Handling is two-phase: ``handle`` returns True right away to signal that a
response will follow, and the response dict is delivered later through the
``send_response`` callback. All page work runs on one worker thread, so
overlapping requests are served one after another.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from pydantic import ValidationError

from playlist_harvest.engine import PlaylistHarvestEngine
from playlist_harvest.logging_utils import log_event, log_failure
from playlist_harvest.schemas import (
    REQUEST_ADAPTER,
    CurrentVideoInfoResponse,
    GetCurrentVideoInfoMessage,
    ScanPlaylistMessage,
    ScanResultResponse,
)
from playlist_harvest.types import UNKNOWN_CHANNEL, UNKNOWN_TITLE

logger = logging.getLogger(__name__)

SendResponse = Callable[[dict[str, Any]], None]
ResponseBuilder = Callable[[], dict[str, Any]]
FailureBuilder = Callable[[str], dict[str, Any]]


class MessageHandler:
    """
    Routes SCAN_PLAYLIST and GET_CURRENT_VIDEO_INFO messages to the engine.
    """

    def __init__(self, engine: PlaylistHarvestEngine) -> None:
        self._engine = engine
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="playlist-harvest")

    def __enter__(self) -> MessageHandler:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def handle(self, message: Mapping[str, Any], send_response: SendResponse) -> bool:
        """
        Accept one message. Returns False for unknown messages (no response
        will follow), True when a response will be sent asynchronously.
        """

        future = self.submit(message)
        if future is None:
            return False
        future.add_done_callback(lambda done: self._deliver(done, send_response))
        return True

    def submit(self, message: Mapping[str, Any]) -> Future[dict[str, Any]] | None:
        """
        Schedule one message and return the future of its response dict.
        """

        try:
            request = REQUEST_ADAPTER.validate_python(message)
        except ValidationError as exc:
            log_event(
                logger,
                logging.WARNING,
                "unknown_message",
                message_type=_message_type(message),
                error=str(exc),
            )
            return None

        log_event(logger, logging.INFO, "message_received", message_type=request.type)
        if isinstance(request, ScanPlaylistMessage):
            return self._executor.submit(self._respond, self._scan, _scan_failure)
        if isinstance(request, GetCurrentVideoInfoMessage):
            return self._executor.submit(
                self._respond,
                self._current_video_info,
                _current_video_info_failure,
            )
        return None

    @staticmethod
    def _respond(build: ResponseBuilder, on_failure: FailureBuilder) -> dict[str, Any]:
        # Every accepted message resolves to a well-formed response.
        try:
            return build()
        except Exception as exc:
            return on_failure(log_failure(logger, "message_handling_failed", exc))

    def _scan(self) -> dict[str, Any]:
        result = self._engine.scan()
        return ScanResultResponse.from_result(result).model_dump(exclude_none=True)

    def _current_video_info(self) -> dict[str, Any]:
        info = self._engine.current_video_info()
        return CurrentVideoInfoResponse.from_info(info).model_dump(exclude_none=True)

    @staticmethod
    def _deliver(done: Future[dict[str, Any]], send_response: SendResponse) -> None:
        try:
            send_response(done.result())
        except Exception as exc:
            log_failure(logger, "response_delivery_failed", exc)


def _scan_failure(message: str) -> dict[str, Any]:
    return ScanResultResponse(videos=[], error=message).model_dump(exclude_none=True)


def _current_video_info_failure(message: str) -> dict[str, Any]:
    return CurrentVideoInfoResponse(
        title=UNKNOWN_TITLE,
        channel=UNKNOWN_CHANNEL,
        error=message,
    ).model_dump(exclude_none=True)


def _message_type(message: object) -> str | None:
    if isinstance(message, Mapping):
        value = message.get("type")
        return str(value) if value is not None else None
    return None
