"""
Harvesting configuration models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HarvestSettings:
    """
    Runtime settings for playlist harvesting.
    """

    selector_config_path: str
    site_root: str = "https://www.youtube.com"
    max_passes: int = 100
    load_more_delay_seconds: float = 2.0
    scroll_delay_seconds: float = 1.5
    stability_samples: int = 3
    stability_interval_seconds: float = 1.0
    settle_delay_seconds: float = 2.0
    final_scroll_delay_seconds: float = 1.5
    diagnostic_log_limit: int = 10


@dataclass(frozen=True)
class SelectorConfig:
    """
    Ordered selector cascades for one site's rendered markup.

    Every tuple is tried front to back; the first selector that matches wins.
    """

    container: tuple[str, ...]
    item: tuple[str, ...]
    item_count: str
    load_more: tuple[str, ...]
    link: tuple[str, ...]
    nested_link: tuple[str, ...]
    title: tuple[str, ...]
    channel: tuple[str, ...]
    fallback_link: tuple[str, ...]
    fallback_container: tuple[str, ...]
    fallback_title: tuple[str, ...]
    fallback_channel: tuple[str, ...]
    current_title: tuple[str, ...]
    current_channel: tuple[str, ...]
    watch_marker: str = "/watch?v="
    document_title_suffix: str = " - YouTube"
