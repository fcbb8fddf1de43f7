"""
Shared environment file helpers.
"""

from __future__ import annotations

import os
from pathlib import Path


def project_root() -> Path:
    """
    Directory holding the ``playlist_harvest`` package.

    In a source checkout (or editable install) this is the repository root. In a
    regular install it is ``site-packages``: packaged selector files still
    resolve there, but `.env` files are only picked up from a checkout.
    """

    return Path(__file__).resolve().parents[2]


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` next to the
    package (see ``project_root``). Existing process environment variables
    are not overwritten.
    """

    root = project_root()
    for filename in (".env", ".env.local"):
        env_path = root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value
