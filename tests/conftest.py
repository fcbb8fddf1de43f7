"""
Shared fixtures for harvester tests.
"""

from __future__ import annotations

import pytest

from playlist_harvest.config.loader import DEFAULT_SELECTOR_CONFIG_PATH, load_selector_config
from playlist_harvest.config.models import HarvestSettings, SelectorConfig


@pytest.fixture()
def selectors() -> SelectorConfig:
    return load_selector_config(config_path=DEFAULT_SELECTOR_CONFIG_PATH)


@pytest.fixture()
def settings() -> HarvestSettings:
    return HarvestSettings(selector_config_path=DEFAULT_SELECTOR_CONFIG_PATH, max_passes=10)


@pytest.fixture()
def sleeps() -> list[float]:
    return []
