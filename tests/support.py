"""
Synthetic playlist markup and trees for harvester tests.
"""

from __future__ import annotations

from playlist_harvest.tree import SoupRenderedTree

PLAYLIST_URL = "https://www.youtube.com/playlist?list=PLtest123"
WATCH_URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
LIST_CONTENTS = "ytd-playlist-video-list-renderer #contents"


def video_id(n: int) -> str:
    return f"vid{n:08d}"


def playlist_item(vid: str, title: str = "Some Title", channel: str = "Some Channel") -> str:
    return (
        "<ytd-playlist-video-renderer>"
        f'<a id="video-title" class="yt-simple-endpoint" href="/watch?v={vid}&amp;list=PLtest123"'
        f' title="{title}">{title}</a>'
        '<ytd-channel-name><div id="text-container"><yt-formatted-string id="text">'
        f'<a class="yt-simple-endpoint style-scope yt-formatted-string" href="/@chan">{channel}</a>'
        "</yt-formatted-string></div></ytd-channel-name>"
        "</ytd-playlist-video-renderer>"
    )


def playlist_page(items: list[str], *, extra: str = "", title: str = "Mix - YouTube") -> str:
    return (
        f"<html><head><title>{title}</title></head><body>"
        '<ytd-playlist-video-list-renderer><div id="contents">'
        f"{''.join(items)}"
        "</div></ytd-playlist-video-list-renderer>"
        f"{extra}</body></html>"
    )


class GrowingPlaylistTree(SoupRenderedTree):
    """
    Appends ``per_scroll`` new items on every viewport scroll, optionally
    stopping after ``stop_after`` scrolls.
    """

    def __init__(
        self,
        html: str,
        *,
        location: str = PLAYLIST_URL,
        per_scroll: int = 1,
        stop_after: int | None = None,
        next_id: int = 1000,
    ) -> None:
        super().__init__(html, location=location)
        self.per_scroll = per_scroll
        self.stop_after = stop_after
        self.next_id = next_id

    def on_viewport_scroll(self) -> None:
        super().on_viewport_scroll()
        if self.stop_after is not None and self.viewport_scrolls > self.stop_after:
            return
        for _ in range(self.per_scroll):
            self.append_html(LIST_CONTENTS, playlist_item(video_id(self.next_id)))
            self.next_id += 1
