"""
Run a playlist scan from CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from playlist_harvest.engine import PlaylistHarvestEngine
from playlist_harvest.handler import MessageHandler
from playlist_harvest.tree import RenderedTree, SoupRenderedTree


def _build_tree(args: argparse.Namespace) -> tuple[RenderedTree, object | None]:
    if args.html:
        return SoupRenderedTree.from_file(args.html, location=args.location), None

    from selenium import webdriver

    options = webdriver.ChromeOptions()
    if args.headless:
        options.add_argument("--headless=new")
    driver = webdriver.Chrome(options=options)
    try:
        driver.get(args.live)
    except Exception:
        driver.quit()
        raise

    from playlist_harvest.tree.selenium_tree import SeleniumRenderedTree

    return SeleniumRenderedTree(driver), driver


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Harvest videos from a rendered playlist page.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--html", type=Path, help="Saved HTML snapshot of the page.")
    source.add_argument("--live", help="Open this address in Chrome and scan the live page.")
    parser.add_argument(
        "--location",
        help=(
            "Page address of the --html snapshot. Defaults to the snapshot's canonical "
            "link. The page-wide link fallback only runs for a playlist address (list=...)."
        ),
    )
    parser.add_argument(
        "--current-video",
        action="store_true",
        help="Read the current video's title/channel instead of scanning.",
    )
    parser.add_argument("--headless", action="store_true", help="Run Chrome headless with --live.")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), stream=sys.stderr)

    tree, driver = _build_tree(args)
    message_type = "GET_CURRENT_VIDEO_INFO" if args.current_video else "SCAN_PLAYLIST"
    try:
        with MessageHandler(PlaylistHarvestEngine(tree=tree)) as handler:
            future = handler.submit({"type": message_type})
            if future is None:
                return 1
            payload = future.result()
    finally:
        if driver is not None:
            driver.quit()

    print(json.dumps(payload, indent=2))
    return 1 if payload.get("error") else 0


if __name__ == "__main__":
    raise SystemExit(main())
