"""
Config helpers for playlist harvesting.
"""

from playlist_harvest.config.loader import (
    get_harvest_settings,
    get_selector_config,
    load_selector_config,
)
from playlist_harvest.config.models import HarvestSettings, SelectorConfig

__all__ = [
    "HarvestSettings",
    "SelectorConfig",
    "get_harvest_settings",
    "get_selector_config",
    "load_selector_config",
]
