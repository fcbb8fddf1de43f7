"""
Deduplicating aggregation of extracted playlist items.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from playlist_harvest.config.models import SelectorConfig
from playlist_harvest.logging_utils import log_event
from playlist_harvest.normalization import is_playlist_listing
from playlist_harvest.parsing import FieldExtractor
from playlist_harvest.tree.base import RenderedElement, RenderedTree, first_non_empty
from playlist_harvest.types import AggregationResult, ItemSkip, VideoRecord

logger = logging.getLogger(__name__)


class _ScanState:
    """
    Per-scan dedup set and ordered output. Lives for one aggregation call.
    """

    def __init__(self) -> None:
        self.seen_ids: set[str] = set()
        self.videos: list[VideoRecord] = []
        self.skips: list[ItemSkip] = []

    def add(self, record: VideoRecord) -> None:
        if record.video_id in self.seen_ids:
            log_event(logger, logging.DEBUG, "duplicate_video_skipped", video_id=record.video_id)
            return
        self.seen_ids.add(record.video_id)
        self.videos.append(record)

    def fail(self, index: int, exc: Exception) -> None:
        # One broken item must not abort the batch.
        self.skips.append(ItemSkip(index=index, reason=f"extraction_error: {exc}"))
        log_event(logger, logging.WARNING, "item_extraction_failed", index=index, error=str(exc))


def aggregate_items(
    items: Iterable[RenderedElement],
    extractor: FieldExtractor,
) -> AggregationResult:
    """
    Extract every item and keep the first record per video id.
    """

    state = _ScanState()
    count = 0
    for index, item in enumerate(items):
        count += 1
        try:
            record = extractor.extract(item, index=index, skips=state.skips)
        except Exception as exc:
            state.fail(index, exc)
            continue
        if record is not None:
            state.add(record)
    return AggregationResult(videos=state.videos, skips=state.skips, item_count=count)


def aggregate_links(
    tree: RenderedTree,
    selectors: SelectorConfig,
    extractor: FieldExtractor,
) -> AggregationResult:
    """
    Page-wide scan of watch links, each read relative to its nearest
    item-like ancestor.
    """

    state = _ScanState()
    matched = first_non_empty(tree, selectors.fallback_link)
    links = list(matched[1]) if matched is not None else []
    container_selector = ", ".join(selectors.fallback_container)
    for index, link in enumerate(links):
        href = link.attribute("href") or ""
        if selectors.watch_marker not in extractor.resolve(href):
            continue
        try:
            record = extractor.extract_from_link(
                link,
                scope=link.closest(container_selector),
                index=index,
                skips=state.skips,
            )
        except Exception as exc:
            state.fail(index, exc)
            continue
        if record is not None:
            state.add(record)
    return AggregationResult(videos=state.videos, skips=state.skips, item_count=len(links))


def aggregate(
    *,
    tree: RenderedTree,
    selectors: SelectorConfig,
    extractor: FieldExtractor,
    fallback_extractor: FieldExtractor,
) -> AggregationResult:
    """
    Aggregate the page's playlist items, falling back to a page-wide link
    scan only when the item strategy yields nothing on a playlist listing.
    """

    matched = first_non_empty(tree, selectors.item)
    items: list[RenderedElement] = []
    if matched is not None:
        selector, found = matched
        items = list(found)
        log_event(logger, logging.INFO, "playlist_items_found", selector=selector, count=len(items))

    result = aggregate_items(items, extractor)
    if result.videos or not is_playlist_listing(tree.location):
        return result

    log_event(logger, logging.INFO, "fallback_link_scan_started", location=tree.location)
    fallback = aggregate_links(tree, selectors, fallback_extractor)
    return AggregationResult(
        videos=fallback.videos,
        skips=[*result.skips, *fallback.skips],
        item_count=result.item_count,
        used_fallback=True,
    )
