"""
Environment + JSON config loader for playlist harvesting.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path

from playlist_harvest.config.env import load_env_files, project_root
from playlist_harvest.config.models import HarvestSettings, SelectorConfig

DEFAULT_SELECTOR_CONFIG_PATH = "playlist_harvest/config/youtube_selectors.json"

REQUIRED_CASCADES = (
    "container",
    "item",
    "load_more",
    "link",
    "nested_link",
    "title",
    "channel",
    "fallback_link",
    "fallback_container",
    "fallback_title",
    "fallback_channel",
    "current_title",
    "current_channel",
)


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    stripped = raw.strip()
    return stripped if stripped else default


def _resolve_config_path(raw_path: str) -> Path:
    candidate = Path(raw_path)
    if candidate.is_absolute():
        return candidate
    return (project_root() / candidate).resolve()


@lru_cache(maxsize=1)
def get_harvest_settings() -> HarvestSettings:
    """
    Return cached harvest settings from environment variables.
    """

    load_env_files()
    config_path = _get_str_env("HARVEST_SELECTOR_CONFIG_PATH", DEFAULT_SELECTOR_CONFIG_PATH)
    return HarvestSettings(
        selector_config_path=str(_resolve_config_path(config_path)),
        site_root=_get_str_env("HARVEST_SITE_ROOT", "https://www.youtube.com").rstrip("/"),
        max_passes=max(1, _get_int_env("HARVEST_MAX_PASSES", 100)),
        load_more_delay_seconds=max(
            0.0,
            _get_float_env("HARVEST_LOAD_MORE_DELAY_SECONDS", 2.0),
        ),
        scroll_delay_seconds=max(
            0.0,
            _get_float_env("HARVEST_SCROLL_DELAY_SECONDS", 1.5),
        ),
        stability_samples=max(1, _get_int_env("HARVEST_STABILITY_SAMPLES", 3)),
        stability_interval_seconds=max(
            0.0,
            _get_float_env("HARVEST_STABILITY_INTERVAL_SECONDS", 1.0),
        ),
        settle_delay_seconds=max(
            0.0,
            _get_float_env("HARVEST_SETTLE_DELAY_SECONDS", 2.0),
        ),
        final_scroll_delay_seconds=max(
            0.0,
            _get_float_env("HARVEST_FINAL_SCROLL_DELAY_SECONDS", 1.5),
        ),
        diagnostic_log_limit=max(0, _get_int_env("HARVEST_DIAGNOSTIC_LOG_LIMIT", 10)),
    )


def load_selector_config(*, config_path: str) -> SelectorConfig:
    """
    Load selector cascades from a JSON file.
    """

    path = _resolve_config_path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Selector config file not found: {path}")

    raw_data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw_data, dict):
        raise ValueError("Invalid selector config: top level must be an object.")

    selectors = _normalize_selectors(raw_data.get("selectors", {}))
    missing = [name for name in REQUIRED_CASCADES if not selectors.get(name)]
    if missing:
        raise ValueError(
            f"Invalid selector config: missing or empty cascades: {', '.join(missing)}."
        )

    item_count = _optional_str(raw_data.get("item_count")) or selectors["item"][0]
    return SelectorConfig(
        **{name: tuple(selectors[name]) for name in REQUIRED_CASCADES},
        item_count=item_count,
        watch_marker=_optional_str(raw_data.get("watch_marker")) or "/watch?v=",
        document_title_suffix=_optional_raw_str(raw_data.get("document_title_suffix"), " - YouTube"),
    )


@lru_cache(maxsize=1)
def get_selector_config() -> SelectorConfig:
    """
    Return cached selector cascades for the configured site.
    """

    return load_selector_config(config_path=get_harvest_settings().selector_config_path)


def _normalize_selectors(selectors: object) -> dict[str, list[str]]:
    if not isinstance(selectors, dict):
        return {}

    normalized: dict[str, list[str]] = {}
    for key, value in selectors.items():
        if not isinstance(key, str):
            continue
        if isinstance(value, str):
            selector_list = [value.strip()] if value.strip() else []
        elif isinstance(value, list):
            selector_list = [
                item.strip()
                for item in value
                if isinstance(item, str) and item.strip()
            ]
        else:
            selector_list = []
        normalized[key.strip().lower()] = selector_list
    return normalized


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def _optional_raw_str(value: object, default: str) -> str:
    # Suffixes keep their leading whitespace.
    if isinstance(value, str) and value.strip():
        return value
    return default
