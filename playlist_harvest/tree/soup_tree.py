"""
BeautifulSoup-backed rendered tree.

Used for saved page snapshots and for synthetic trees. Visibility is inferred
from markup alone (``hidden``, ``display: none``, ``visibility: hidden``);
clicks and scrolls are routed to overridable hooks on the tree.
"""

from __future__ import annotations

import re
from pathlib import Path

from bs4 import BeautifulSoup, Tag
from bs4.element import CData, Comment, Declaration, Doctype, NavigableString, ProcessingInstruction

from playlist_harvest.tree.base import RenderedElement, RenderedTree

NON_RENDERED_TAGS = {"script", "style", "template", "noscript", "head"}
NON_TEXT_STRINGS = (Comment, CData, Declaration, Doctype, ProcessingInstruction)
HIDDEN_STYLE_REGEX = re.compile(
    r"(?:display\s*:\s*none|visibility\s*:\s*hidden)",
    flags=re.IGNORECASE,
)
# Address assumed for snapshots that carry no canonical link.
BLANK_LOCATION = "about:blank"
CANONICAL_SELECTORS = (
    ('link[rel="canonical"]', "href"),
    ('meta[property="og:url"]', "content"),
)


def _is_hidden(tag: Tag) -> bool:
    if tag.name in NON_RENDERED_TAGS:
        return True
    if tag.has_attr("hidden"):
        return True
    style = tag.get("style")
    return isinstance(style, str) and HIDDEN_STYLE_REGEX.search(style) is not None


def _canonical_location(soup: BeautifulSoup) -> str:
    for selector, attribute in CANONICAL_SELECTORS:
        tag = soup.select_one(selector)
        value = tag.get(attribute) if tag is not None else None
        if isinstance(value, str) and value.strip():
            return value.strip()
    return BLANK_LOCATION


def _rendered_strings(tag: Tag) -> list[str]:
    parts: list[str] = []
    for child in tag.children:
        if isinstance(child, Tag):
            if not _is_hidden(child):
                parts.extend(_rendered_strings(child))
        elif isinstance(child, NavigableString) and not isinstance(child, NON_TEXT_STRINGS):
            parts.append(str(child))
    return parts


class SoupElement(RenderedElement):
    def __init__(self, tag: Tag, tree: SoupRenderedTree) -> None:
        self.tag = tag
        self._tree = tree

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SoupElement) and other.tag is self.tag

    def __hash__(self) -> int:
        return id(self.tag)

    def __repr__(self) -> str:
        return f"SoupElement(<{self.tag.name}>)"

    def select(self, selector: str) -> list[RenderedElement]:
        return [SoupElement(tag, self._tree) for tag in self.tag.select(selector)]

    def closest(self, selector: str) -> RenderedElement | None:
        found = self.tag.css.closest(selector)
        return SoupElement(found, self._tree) if found is not None else None

    def attribute(self, name: str) -> str | None:
        value = self.tag.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    @property
    def text_content(self) -> str:
        return self.tag.get_text()

    @property
    def inner_text(self) -> str | None:
        if _is_hidden(self.tag):
            return ""
        lines = "".join(_rendered_strings(self.tag)).splitlines()
        cleaned = (re.sub(r"[ \t\f\v]+", " ", line).strip() for line in lines)
        return "\n".join(line for line in cleaned if line)

    def is_visible(self) -> bool:
        node: Tag | None = self.tag
        while node is not None and node.name != "[document]":
            if _is_hidden(node):
                return False
            node = node.parent
        return True

    def click(self) -> None:
        self._tree.on_click(self)

    def scroll_to_bottom(self) -> None:
        self._tree.on_element_scroll(self)


class SoupRenderedTree(RenderedTree):
    """
    Rendered tree over a parsed HTML document.

    Without an explicit ``location`` the page address is read from the
    snapshot's canonical link (or ``og:url``), as saved pages keep it.
    """

    def __init__(
        self,
        html: str,
        *,
        location: str | None = None,
        parser: str = "html.parser",
    ) -> None:
        self.soup = BeautifulSoup(html, parser)
        self._location = location or _canonical_location(self.soup)
        self.clicks = 0
        self.viewport_scrolls = 0
        self.element_scrolls = 0

    @classmethod
    def from_file(cls, path: str | Path, *, location: str | None = None) -> SoupRenderedTree:
        markup = Path(path).read_text(encoding="utf-8")
        return cls(markup, location=location)

    def select(self, selector: str) -> list[RenderedElement]:
        return [SoupElement(tag, self) for tag in self.soup.select(selector)]

    @property
    def location(self) -> str:
        return self._location

    @property
    def title(self) -> str:
        if self.soup.title is None:
            return ""
        return self.soup.title.get_text()

    def scroll_to_bottom(self) -> None:
        self.on_viewport_scroll()

    def append_html(self, selector: str, markup: str) -> int:
        """
        Parse ``markup`` and append its top-level elements to the first match
        of ``selector``. Returns the number of elements appended.
        """

        parent = self.soup.select_one(selector)
        if parent is None:
            raise ValueError(f"No element matches selector '{selector}'.")
        fragment = BeautifulSoup(markup, "html.parser")
        appended = 0
        for child in list(fragment.contents):
            if isinstance(child, Tag):
                parent.append(child.extract())
                appended += 1
        return appended

    # Hooks: a static snapshot cannot load anything, subclasses may.

    def on_click(self, element: SoupElement) -> None:
        self.clicks += 1

    def on_element_scroll(self, element: SoupElement) -> None:
        self.element_scrolls += 1

    def on_viewport_scroll(self) -> None:
        self.viewport_scrolls += 1
