"""
Playlist harvesting engine.
"""

from __future__ import annotations

import logging
import time

from playlist_harvest.aggregation import aggregate
from playlist_harvest.config import get_harvest_settings, get_selector_config
from playlist_harvest.config.models import HarvestSettings, SelectorConfig
from playlist_harvest.driver import LazyLoadDriver, SleepFn, find_scroll_container, scroll_everything
from playlist_harvest.logging_utils import log_event, log_failure
from playlist_harvest.parsing import FieldExtractor, resolve_channel
from playlist_harvest.tree.base import RenderedTree, first_match
from playlist_harvest.types import (
    UNKNOWN_CHANNEL,
    UNKNOWN_TITLE,
    AggregationResult,
    ConvergenceReport,
    CurrentVideoInfo,
    ScanResult,
)

logger = logging.getLogger(__name__)


class PlaylistHarvestEngine:
    """
    Orchestrates lazy loading, extraction and dedup over one rendered page.

    Neither public method raises: failures come back on the result.
    """

    def __init__(
        self,
        *,
        tree: RenderedTree,
        selectors: SelectorConfig | None = None,
        settings: HarvestSettings | None = None,
        sleep: SleepFn = time.sleep,
    ) -> None:
        self.tree = tree
        self.settings = settings or get_harvest_settings()
        self.selectors = selectors or get_selector_config()
        self._sleep = sleep

    def scan(self) -> ScanResult:
        try:
            # Detached pages fail on the first read, location included.
            log_event(logger, logging.INFO, "playlist_scan_started", location=self.tree.location)
            convergence = self._materialize()
            aggregated = aggregate(
                tree=self.tree,
                selectors=self.selectors,
                extractor=FieldExtractor(
                    selectors=self.selectors,
                    site_root=self.settings.site_root,
                    diagnostic_log_limit=self.settings.diagnostic_log_limit,
                ),
                fallback_extractor=FieldExtractor.for_fallback(
                    selectors=self.selectors,
                    site_root=self.settings.site_root,
                    diagnostic_log_limit=self.settings.diagnostic_log_limit,
                ),
            )
            warnings = self._collect_warnings(convergence, aggregated)
        except Exception as exc:
            message = log_failure(logger, "playlist_scan_failed", exc)
            return ScanResult(videos=[], error=message)

        log_event(
            logger,
            logging.INFO,
            "playlist_scan_completed",
            videos=len(aggregated.videos),
            skipped=len(aggregated.skips),
            used_fallback=aggregated.used_fallback,
            converged=convergence.converged,
        )
        return ScanResult(
            videos=aggregated.videos,
            warnings=warnings,
            convergence=convergence,
        )

    def current_video_info(self) -> CurrentVideoInfo:
        try:
            title = self._current_title()
            matched = first_match(self.tree, self.selectors.current_channel)
            channel = resolve_channel(matched[1] if matched is not None else None)
        except Exception as exc:
            message = log_failure(logger, "current_video_info_failed", exc)
            return CurrentVideoInfo(title=UNKNOWN_TITLE, channel=UNKNOWN_CHANNEL, error=message)
        return CurrentVideoInfo(title=title, channel=channel)

    def _materialize(self) -> ConvergenceReport:
        driver = LazyLoadDriver(
            tree=self.tree,
            selectors=self.selectors,
            settings=self.settings,
            sleep=self._sleep,
        )
        convergence = driver.run()

        # Trailing transition animations, then one last scroll.
        self._sleep(self.settings.settle_delay_seconds)
        scroll_everything(self.tree, find_scroll_container(self.tree, self.selectors))
        self._sleep(self.settings.final_scroll_delay_seconds)
        return convergence

    def _current_title(self) -> str:
        matched = first_match(self.tree, self.selectors.current_title)
        if matched is not None:
            text = matched[1].text_content.strip()
            if text:
                return text

        suffix = self.selectors.document_title_suffix
        page_title = self.tree.title.replace(suffix, "").strip() if suffix else self.tree.title.strip()
        return page_title or UNKNOWN_TITLE

    def _collect_warnings(
        self,
        convergence: ConvergenceReport,
        aggregated: AggregationResult,
    ) -> list[str]:
        warnings: list[str] = []
        if convergence.cap_reached:
            warnings.append(
                f"Lazy loading stopped after {convergence.passes} passes without "
                f"stabilizing; results may be incomplete."
            )

        rendered = len(self.tree.select(self.selectors.item_count))
        if rendered > len(aggregated.videos):
            message = (
                f"Found {rendered} playlist items but only extracted "
                f"{len(aggregated.videos)} videos. Some items may have been skipped."
            )
            warnings.append(message)
            log_event(
                logger,
                logging.WARNING,
                "items_skipped",
                rendered=rendered,
                extracted=len(aggregated.videos),
            )
        return warnings
