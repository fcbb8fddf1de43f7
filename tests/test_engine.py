"""
tests/test_engine.py

End-to-end scans and current-video lookups through PlaylistHarvestEngine.
"""

from __future__ import annotations

import dataclasses

import pytest

from playlist_harvest.engine import PlaylistHarvestEngine
from playlist_harvest.tree import SoupRenderedTree
from playlist_harvest.types import UNKNOWN_CHANNEL, UNKNOWN_TITLE
from tests.support import (
    PLAYLIST_URL,
    WATCH_URL,
    GrowingPlaylistTree,
    playlist_item,
    playlist_page,
    video_id,
)


def _engine(tree, selectors, settings, sleeps) -> PlaylistHarvestEngine:
    return PlaylistHarvestEngine(
        tree=tree,
        selectors=selectors,
        settings=settings,
        sleep=sleeps.append,
    )


class TestScan:
    def test_scan_returns_unique_records(self, selectors, settings, sleeps) -> None:
        html = playlist_page(
            [
                playlist_item(video_id(1), title="One", channel="Acme"),
                playlist_item(video_id(2), title="Two", channel="Beta"),
                playlist_item(video_id(1), title="One again", channel="Acme"),
            ]
        )
        tree = SoupRenderedTree(html, location=PLAYLIST_URL)

        result = _engine(tree, selectors, settings, sleeps).scan()

        assert result.error is None
        assert [(v.title, v.channel) for v in result.videos] == [("One", "Acme"), ("Two", "Beta")]
        assert result.convergence is not None and result.convergence.converged
        # Driver sleeps, then the settle and final-scroll waits.
        assert sleeps[-2:] == [2.0, 1.5]
        assert tree.viewport_scrolls == 2

    def test_cap_reached_still_extracts_everything_rendered(self, selectors, settings, sleeps) -> None:
        capped = dataclasses.replace(settings, max_passes=5)
        tree = GrowingPlaylistTree(playlist_page([playlist_item(video_id(1)), playlist_item(video_id(2))]))

        result = _engine(tree, selectors, capped, sleeps).scan()

        rendered = len(tree.select("ytd-playlist-video-renderer"))
        assert result.error is None
        assert rendered == 8
        assert len(result.videos) == rendered
        assert result.convergence is not None and result.convergence.cap_reached
        assert any("without stabilizing" in warning for warning in result.warnings)

    def test_skipped_items_reported_as_warning(self, selectors, settings, sleeps) -> None:
        broken = "<ytd-playlist-video-renderer><span>[Deleted video]</span></ytd-playlist-video-renderer>"
        tree = SoupRenderedTree(playlist_page([broken, playlist_item(video_id(1))]), location=PLAYLIST_URL)

        result = _engine(tree, selectors, settings, sleeps).scan()

        assert len(result.videos) == 1
        assert result.warnings == [
            "Found 2 playlist items but only extracted 1 videos. Some items may have been skipped."
        ]

    def test_failures_become_error_results(self, selectors, settings, sleeps) -> None:
        class BrokenTree(SoupRenderedTree):
            def select(self, selector: str):
                raise RuntimeError("page detached")

        tree = BrokenTree(playlist_page([]), location=PLAYLIST_URL)

        result = _engine(tree, selectors, settings, sleeps).scan()

        assert result.videos == []
        assert result.error == "page detached"

    def test_empty_exception_message_gets_default(self, selectors, settings, sleeps) -> None:
        class BrokenTree(SoupRenderedTree):
            def scroll_to_bottom(self) -> None:
                raise ValueError()

        tree = BrokenTree(playlist_page([playlist_item(video_id(1))]), location=PLAYLIST_URL)

        result = _engine(tree, selectors, settings, sleeps).scan()

        assert result.videos == []
        assert result.error == "Failed to extract video information"

    def test_detached_page_location_becomes_error_result(self, selectors, settings, sleeps) -> None:
        class DetachedTree(SoupRenderedTree):
            @property
            def location(self) -> str:
                raise RuntimeError("no such window")

        tree = DetachedTree(playlist_page([playlist_item(video_id(1))]), location=PLAYLIST_URL)

        result = _engine(tree, selectors, settings, sleeps).scan()

        assert result.videos == []
        assert result.error == "no such window"
        assert result.convergence is None


WATCH_PAGE = (
    "<html><head><title>Great Song - YouTube</title></head><body>"
    "<ytd-watch-metadata><h1 class='ytd-watch-metadata'>"
    "<yt-formatted-string>  Great Song (Official) </yt-formatted-string></h1>"
    "<ytd-video-owner-renderer><ytd-channel-name>"
    "<a href='/@acme'>Acme Channel\nAcme Channel</a>"
    "</ytd-channel-name></ytd-video-owner-renderer>"
    "</ytd-watch-metadata></body></html>"
)


class TestCurrentVideoInfo:
    def test_reads_title_and_channel(self, selectors, settings, sleeps) -> None:
        tree = SoupRenderedTree(WATCH_PAGE, location=WATCH_URL)

        info = _engine(tree, selectors, settings, sleeps).current_video_info()

        assert info.title == "Great Song (Official)"
        assert info.channel == "Acme Channel"
        assert info.error is None
        assert sleeps == []

    def test_document_title_fallback(self, selectors, settings, sleeps) -> None:
        html = "<html><head><title>Fallback Title - YouTube</title></head><body></body></html>"
        tree = SoupRenderedTree(html, location=WATCH_URL)

        info = _engine(tree, selectors, settings, sleeps).current_video_info()

        assert info.title == "Fallback Title"
        assert info.channel == UNKNOWN_CHANNEL

    def test_placeholders_when_nothing_found(self, selectors, settings, sleeps) -> None:
        tree = SoupRenderedTree("<html><body></body></html>", location=WATCH_URL)

        info = _engine(tree, selectors, settings, sleeps).current_video_info()

        assert info.title == UNKNOWN_TITLE
        assert info.channel == UNKNOWN_CHANNEL
        assert info.error is None

    def test_failure_returns_placeholders_with_error(self, selectors, settings, sleeps) -> None:
        class BrokenTree(SoupRenderedTree):
            def select(self, selector: str):
                raise RuntimeError("no document")

        tree = BrokenTree("<html></html>", location=WATCH_URL)

        info = _engine(tree, selectors, settings, sleeps).current_video_info()

        assert info.title == UNKNOWN_TITLE
        assert info.channel == UNKNOWN_CHANNEL
        assert info.error == "no document"


def test_engine_loads_default_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    from playlist_harvest.config import loader

    monkeypatch.setenv("HARVEST_MAX_PASSES", "7")
    loader.get_harvest_settings.cache_clear()
    loader.get_selector_config.cache_clear()
    try:
        engine = PlaylistHarvestEngine(
            tree=SoupRenderedTree("<html></html>", location=PLAYLIST_URL),
        )
        assert engine.settings.max_passes == 7
        assert engine.selectors.item_count == "ytd-playlist-video-renderer"
    finally:
        loader.get_harvest_settings.cache_clear()
        loader.get_selector_config.cache_clear()


def test_snapshot_location_comes_from_canonical_link() -> None:
    html = (
        "<html><head><link rel='canonical' href='https://www.youtube.com/playlist?list=PLcanon1'>"
        "</head><body></body></html>"
    )

    assert SoupRenderedTree(html).location == "https://www.youtube.com/playlist?list=PLcanon1"
    assert SoupRenderedTree("<html></html>").location == "about:blank"
