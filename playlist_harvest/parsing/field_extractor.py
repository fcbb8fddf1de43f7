"""
Multi-strategy field extraction for rendered playlist items.

Each field is resolved by an ordered tuple of independent strategy functions;
the first one returning a non-empty value wins and a literal placeholder is
used when none does.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence

from playlist_harvest.config.models import SelectorConfig
from playlist_harvest.logging_utils import log_event
from playlist_harvest.normalization import parse_youtube_url, resolve_link
from playlist_harvest.tree.base import RenderedElement, first_match
from playlist_harvest.types import (
    UNKNOWN_CHANNEL,
    UNKNOWN_TITLE,
    ItemSkip,
    ParsedUrl,
    VideoRecord,
)

logger = logging.getLogger(__name__)

LINE_BREAK_REGEX = re.compile(r"\s*\n\s*")

TitleStrategy = Callable[[RenderedElement | None, RenderedElement | None], str | None]
ChannelStrategy = Callable[[RenderedElement], str | None]


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


# ---------------------------------------------------------------------------
# Title strategies: (marker element, link element) -> text
# ---------------------------------------------------------------------------


def title_from_marker_text(
    marker: RenderedElement | None,
    link: RenderedElement | None,
) -> str | None:
    return _clean(marker.text_content) if marker is not None else None


def title_from_marker_title(
    marker: RenderedElement | None,
    link: RenderedElement | None,
) -> str | None:
    return _clean(marker.attribute("title")) if marker is not None else None


def title_from_marker_label(
    marker: RenderedElement | None,
    link: RenderedElement | None,
) -> str | None:
    return _clean(marker.attribute("aria-label")) if marker is not None else None


def title_from_link_text(
    marker: RenderedElement | None,
    link: RenderedElement | None,
) -> str | None:
    return _clean(link.text_content) if link is not None else None


TITLE_STRATEGIES: tuple[TitleStrategy, ...] = (
    title_from_marker_text,
    title_from_marker_title,
    title_from_marker_label,
    title_from_link_text,
)


# ---------------------------------------------------------------------------
# Channel strategies: element -> text
# ---------------------------------------------------------------------------


def channel_from_rendered_text(element: RenderedElement) -> str | None:
    """
    Rendered text skips visually hidden duplicates, but is unusable when the
    backend cannot render or when copies still come through on separate lines.
    """

    text = _clean(element.inner_text)
    if text is None or "\n" in text:
        return None
    return text


def channel_from_raw_text(element: RenderedElement) -> str | None:
    raw = element.text_content.strip()
    parts = [part.strip() for part in LINE_BREAK_REGEX.split(raw) if part.strip()]
    return parts[0] if parts else None


def channel_from_title(element: RenderedElement) -> str | None:
    return _clean(element.attribute("title"))


def channel_from_label(element: RenderedElement) -> str | None:
    return _clean(element.attribute("aria-label"))


CHANNEL_STRATEGIES: tuple[ChannelStrategy, ...] = (
    channel_from_rendered_text,
    channel_from_raw_text,
    channel_from_title,
    channel_from_label,
)


def resolve_title(
    marker: RenderedElement | None,
    link: RenderedElement | None = None,
    *,
    strategies: Sequence[TitleStrategy] = TITLE_STRATEGIES,
) -> str:
    for strategy in strategies:
        value = strategy(marker, link)
        if value:
            return value
    return UNKNOWN_TITLE


def resolve_channel(
    element: RenderedElement | None,
    *,
    strategies: Sequence[ChannelStrategy] = CHANNEL_STRATEGIES,
) -> str:
    if element is None:
        return UNKNOWN_CHANNEL
    for strategy in strategies:
        value = strategy(element)
        if value:
            return value
    return UNKNOWN_CHANNEL


class FieldExtractor:
    """
    Turns one rendered item into a VideoRecord, or None to skip it.
    """

    def __init__(
        self,
        *,
        selectors: SelectorConfig,
        site_root: str,
        title_selectors: Sequence[str] | None = None,
        channel_selectors: Sequence[str] | None = None,
        diagnostic_log_limit: int = 10,
    ) -> None:
        self.selectors = selectors
        self.site_root = site_root
        self.title_selectors = tuple(title_selectors or selectors.title)
        self.channel_selectors = tuple(channel_selectors or selectors.channel)
        self.diagnostic_log_limit = diagnostic_log_limit

    @classmethod
    def for_fallback(
        cls,
        *,
        selectors: SelectorConfig,
        site_root: str,
        diagnostic_log_limit: int = 10,
    ) -> FieldExtractor:
        return cls(
            selectors=selectors,
            site_root=site_root,
            title_selectors=selectors.fallback_title,
            channel_selectors=selectors.fallback_channel,
            diagnostic_log_limit=diagnostic_log_limit,
        )

    def find_link(self, item: RenderedElement) -> RenderedElement | None:
        """
        First link whose resolved address carries the watch marker: the
        primary link selectors first, then any nested watch-like link.
        """

        for selector in (*self.selectors.link, *self.selectors.nested_link):
            for link in item.select(selector):
                href = _clean(link.attribute("href"))
                if href and self.selectors.watch_marker in self.resolve(href):
                    return link
        return None

    def resolve(self, href: str) -> str:
        return resolve_link(href, self.site_root)

    def extract(
        self,
        item: RenderedElement,
        *,
        index: int = 0,
        skips: list[ItemSkip] | None = None,
    ) -> VideoRecord | None:
        link = self.find_link(item)
        if link is None:
            self._record_skip(skips, ItemSkip(index=index, reason="no_link"))
            return None
        return self.extract_from_link(link, scope=item, index=index, skips=skips)

    def extract_from_link(
        self,
        link: RenderedElement,
        *,
        scope: RenderedElement | None,
        index: int = 0,
        skips: list[ItemSkip] | None = None,
    ) -> VideoRecord | None:
        """
        Build a record for an already located link, reading title and channel
        from ``scope`` (the item, or the nearest item-like ancestor).
        """

        href = _clean(link.attribute("href"))
        if href is None:
            self._record_skip(skips, ItemSkip(index=index, reason="no_link"))
            return None

        full_url = self.resolve(href)
        parsed = parse_youtube_url(full_url)
        if not parsed.is_video:
            self._record_skip(
                skips,
                ItemSkip(index=index, reason=self._skip_reason(parsed), url=full_url),
            )
            return None

        title_marker = self._find(scope, self.title_selectors)
        channel_marker = self._find(scope, self.channel_selectors)
        return VideoRecord(
            channel=resolve_channel(channel_marker),
            url=parsed.normalized_url or "",
            title=resolve_title(title_marker, link),
        )

    @staticmethod
    def _find(
        scope: RenderedElement | None,
        selectors: Sequence[str],
    ) -> RenderedElement | None:
        if scope is None:
            return None
        matched = first_match(scope, selectors)
        return matched[1] if matched is not None else None

    @staticmethod
    def _skip_reason(parsed: ParsedUrl) -> str:
        if parsed.error_kind is not None:
            return parsed.error_kind.value
        return "not_a_video"

    def _record_skip(self, skips: list[ItemSkip] | None, skip: ItemSkip) -> None:
        if skips is None:
            return
        skips.append(skip)
        if len(skips) <= self.diagnostic_log_limit:
            log_event(
                logger,
                logging.WARNING,
                "item_skipped",
                index=skip.index,
                reason=skip.reason,
                url=skip.url,
            )
