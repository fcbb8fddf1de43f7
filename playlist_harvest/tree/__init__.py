"""
Rendered-tree exports.

The Selenium backend lives in ``playlist_harvest.tree.selenium_tree`` and is
imported explicitly by callers that drive a live browser.
"""

from playlist_harvest.tree.base import RenderedElement, RenderedTree, first_match, first_non_empty
from playlist_harvest.tree.soup_tree import SoupElement, SoupRenderedTree

__all__ = [
    "RenderedElement",
    "RenderedTree",
    "SoupElement",
    "SoupRenderedTree",
    "first_match",
    "first_non_empty",
]
