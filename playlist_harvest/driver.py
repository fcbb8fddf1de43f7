"""
Convergence-based lazy-load driver.

Virtualized playlists only render items after scrolling or after a
"load more" control fires. The driver keeps triggering both until the item
count stops growing for several consecutive samples, or until a hard pass
ceiling is hit.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from playlist_harvest.config.models import HarvestSettings, SelectorConfig
from playlist_harvest.logging_utils import log_event
from playlist_harvest.tree.base import RenderedElement, RenderedTree, first_match
from playlist_harvest.types import ConvergenceReport

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], None]


def find_scroll_container(
    tree: RenderedTree,
    selectors: SelectorConfig,
) -> RenderedElement | None:
    """
    Scrollable playlist container, or None to fall back to viewport scrolling.
    """

    matched = first_match(tree, selectors.container)
    if matched is None:
        return None
    selector, container = matched
    log_event(logger, logging.DEBUG, "scroll_container_found", selector=selector)
    return container


def scroll_everything(tree: RenderedTree, container: RenderedElement | None) -> None:
    # Covers in-page virtualization and page-level infinite scroll.
    if container is not None:
        container.scroll_to_bottom()
    tree.scroll_to_bottom()


class LazyLoadDriver:
    """
    Drives a rendered list until its item count converges.
    """

    def __init__(
        self,
        *,
        tree: RenderedTree,
        selectors: SelectorConfig,
        settings: HarvestSettings,
        sleep: SleepFn = time.sleep,
    ) -> None:
        self.tree = tree
        self.selectors = selectors
        self.settings = settings
        self._sleep = sleep

    def count_items(self) -> int:
        return len(self.tree.select(self.selectors.item_count))

    def try_load_more(self) -> bool:
        """
        Click the first visible "load more" control. Returns whether one fired.
        """

        for selector in self.selectors.load_more:
            for button in self.tree.select(selector):
                if not button.is_visible():
                    continue
                log_event(logger, logging.DEBUG, "load_more_clicked", selector=selector)
                button.click()
                return True
        return False

    def run(self) -> ConvergenceReport:
        container = find_scroll_container(self.tree, self.selectors)
        last_count = self.count_items()
        clicks = 0
        log_event(
            logger,
            logging.INFO,
            "lazy_load_started",
            initial_count=last_count,
            has_container=container is not None,
            max_passes=self.settings.max_passes,
        )

        for attempt in range(1, self.settings.max_passes + 1):
            clicked = self.try_load_more()
            clicks += int(clicked)
            scroll_everything(self.tree, container)
            self._sleep(
                self.settings.load_more_delay_seconds
                if clicked
                else self.settings.scroll_delay_seconds
            )

            current_count = self.count_items()
            log_event(
                logger,
                logging.DEBUG,
                "lazy_load_pass",
                attempt=attempt,
                count=current_count,
                previous=last_count,
            )
            if current_count > last_count:
                last_count = current_count
                continue

            grown_count = self._confirm_stable(current_count)
            if grown_count is None:
                log_event(
                    logger,
                    logging.INFO,
                    "lazy_load_converged",
                    passes=attempt,
                    count=current_count,
                )
                return ConvergenceReport(
                    converged=True,
                    cap_reached=False,
                    passes=attempt,
                    item_count=current_count,
                    load_more_clicks=clicks,
                )
            last_count = grown_count

        final_count = self.count_items()
        log_event(
            logger,
            logging.WARNING,
            "lazy_load_cap_reached",
            max_passes=self.settings.max_passes,
            count=final_count,
        )
        return ConvergenceReport(
            converged=False,
            cap_reached=True,
            passes=self.settings.max_passes,
            item_count=final_count,
            load_more_clicks=clicks,
        )

    def _confirm_stable(self, count: int) -> int | None:
        """
        Re-sample the count. None means every sample matched; otherwise the
        changed count that sends the driver back to scanning.
        """

        for _ in range(self.settings.stability_samples):
            self._sleep(self.settings.stability_interval_seconds)
            sample = self.count_items()
            if sample != count:
                return sample
        return None
