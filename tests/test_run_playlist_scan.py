"""
tests/test_run_playlist_scan.py

CLI behaviour of scripts/run_playlist_scan.py on saved snapshots and on a
mocked browser.
"""

from __future__ import annotations

import importlib.util
import json
from pathlib import Path
from types import ModuleType
from unittest import mock

import pytest

from playlist_harvest.config import loader

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "run_playlist_scan.py"

GRID_SNAPSHOT = (
    "<html><head><title>Saved - YouTube</title>"
    "<link rel='canonical' href='https://www.youtube.com/playlist?list=PLsaved01'>"
    "</head><body><div id='grid'>"
    "<ytd-grid-video-renderer>"
    "<a id='video-title' href='/watch?v=grid0000001'>Grid One</a>"
    "<ytd-channel-name><a href='/@g'>Grid Channel</a></ytd-channel-name>"
    "</ytd-grid-video-renderer>"
    "</div></body></html>"
)


def _load_script() -> ModuleType:
    spec = importlib.util.spec_from_file_location("run_playlist_scan", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture()
def fast_settings(monkeypatch: pytest.MonkeyPatch):
    for name in (
        "HARVEST_LOAD_MORE_DELAY_SECONDS",
        "HARVEST_SCROLL_DELAY_SECONDS",
        "HARVEST_STABILITY_INTERVAL_SECONDS",
        "HARVEST_SETTLE_DELAY_SECONDS",
        "HARVEST_FINAL_SCROLL_DELAY_SECONDS",
    ):
        monkeypatch.setenv(name, "0")
    monkeypatch.setenv("HARVEST_MAX_PASSES", "3")
    loader.get_harvest_settings.cache_clear()
    loader.get_selector_config.cache_clear()
    yield
    loader.get_harvest_settings.cache_clear()
    loader.get_selector_config.cache_clear()


# ---------------------------------------------------------------------------
# Saved snapshots
# ---------------------------------------------------------------------------


def test_snapshot_scan_uses_canonical_playlist_address(tmp_path, capsys, fast_settings) -> None:
    snapshot = tmp_path / "playlist.html"
    snapshot.write_text(GRID_SNAPSHOT, encoding="utf-8")

    exit_code = _load_script().main(["--html", str(snapshot)])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload == {
        "type": "SCAN_RESULT",
        "videos": [
            {
                "channel": "Grid Channel",
                "url": "https://www.youtube.com/watch?v=grid0000001",
                "title": "Grid One",
            }
        ],
    }


def test_explicit_location_overrides_canonical_link(tmp_path, capsys, fast_settings) -> None:
    snapshot = tmp_path / "playlist.html"
    snapshot.write_text(GRID_SNAPSHOT, encoding="utf-8")

    exit_code = _load_script().main(
        ["--html", str(snapshot), "--location", "https://www.youtube.com/watch?v=dQw4w9WgXcQ"]
    )

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["videos"] == []


# ---------------------------------------------------------------------------
# Live browser
# ---------------------------------------------------------------------------


def test_browser_is_closed_when_page_fails_to_open() -> None:
    pytest.importorskip("selenium")

    browser = mock.MagicMock()
    browser.get.side_effect = RuntimeError("net::ERR_NAME_NOT_RESOLVED")
    with mock.patch("selenium.webdriver.Chrome", return_value=browser):
        with pytest.raises(RuntimeError, match="ERR_NAME_NOT_RESOLVED"):
            _load_script().main(["--live", "https://www.youtube.com/playlist?list=PLx"])

    browser.quit.assert_called_once_with()
