"""
Structured logging helpers for harvesting workflows.
"""

from __future__ import annotations

import json
import logging
from typing import Any

DEFAULT_FAILURE_MESSAGE = "Failed to extract video information"


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one structured log line as compact JSON.
    """

    if not logger.isEnabledFor(level):
        return
    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, default=str, sort_keys=True))


def failure_message(exc: BaseException) -> str:
    return str(exc) or DEFAULT_FAILURE_MESSAGE


def log_failure(
    logger: logging.Logger,
    event: str,
    exc: BaseException,
    **fields: Any,
) -> str:
    """
    Log a caught failure at ERROR and return the message reported to callers.
    """

    message = failure_message(exc)
    log_event(
        logger,
        logging.ERROR,
        event,
        error=message,
        error_type=type(exc).__name__,
        **fields,
    )
    return message
