"""
Rendered-tree query abstraction.

Harvesting code never talks to a page directly; it reads through these two
interfaces so that a live browser, a saved snapshot, or a synthetic tree can
stand behind them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence


class RenderedElement(ABC):
    """
    One element of the rendered tree.
    """

    @abstractmethod
    def select(self, selector: str) -> list[RenderedElement]:
        """
        Descendants matching a CSS selector, in document order.
        """

    def select_one(self, selector: str) -> RenderedElement | None:
        found = self.select(selector)
        return found[0] if found else None

    @abstractmethod
    def closest(self, selector: str) -> RenderedElement | None:
        """
        Nearest inclusive ancestor matching a CSS selector.
        """

    @abstractmethod
    def attribute(self, name: str) -> str | None:
        ...

    @property
    @abstractmethod
    def text_content(self) -> str:
        """
        Raw text of the subtree, hidden copies included.
        """

    @property
    @abstractmethod
    def inner_text(self) -> str | None:
        """
        Text as rendered on screen, or None when the backend cannot tell.
        """

    @abstractmethod
    def is_visible(self) -> bool:
        ...

    @abstractmethod
    def click(self) -> None:
        ...

    @abstractmethod
    def scroll_to_bottom(self) -> None:
        ...


class RenderedTree(ABC):
    """
    Read access to one rendered page plus the scroll/click side effects
    used to force lazy content to appear.
    """

    @abstractmethod
    def select(self, selector: str) -> list[RenderedElement]:
        ...

    def select_one(self, selector: str) -> RenderedElement | None:
        found = self.select(selector)
        return found[0] if found else None

    @property
    @abstractmethod
    def location(self) -> str:
        ...

    @property
    @abstractmethod
    def title(self) -> str:
        ...

    @abstractmethod
    def scroll_to_bottom(self) -> None:
        """
        Scroll the top-level viewport to the end of the document.
        """


Scope = RenderedTree | RenderedElement


def first_match(
    scope: Scope,
    selectors: Iterable[str],
) -> tuple[str, RenderedElement] | None:
    """
    Element for the first selector in order that matches anything.
    """

    for selector in selectors:
        element = scope.select_one(selector)
        if element is not None:
            return selector, element
    return None


def first_non_empty(
    scope: Scope,
    selectors: Iterable[str],
) -> tuple[str, Sequence[RenderedElement]] | None:
    """
    All matches for the first selector in order that matches anything.
    """

    for selector in selectors:
        found = scope.select(selector)
        if found:
            return selector, found
    return None
