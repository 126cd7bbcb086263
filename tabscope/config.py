"""Configuration paths for tabscope."""

from __future__ import annotations

import os
from pathlib import Path


def get_config_dir() -> Path:
    """Directory holding persistent state (history, debug log).

    ``TABSCOPE_CONFIG_DIR`` overrides the default so tests and CI can keep
    state out of the home directory.
    """
    raw = os.environ.get("TABSCOPE_CONFIG_DIR", "").strip()
    if raw:
        return Path(raw).expanduser()
    return Path.home() / ".config" / "tabscope"
