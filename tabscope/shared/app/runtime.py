"""Runtime configuration for tabscope."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from tabscope.config import get_config_dir

DEFAULT_HISTORY_SIZE = 1000
SUGGESTION_LIMIT = 100


@dataclass
class RuntimeConfig:
    """Runtime configuration provided by the environment, CLI or tests."""

    config_dir: Path
    history_path: Path | None = None
    history_size: int = DEFAULT_HISTORY_SIZE
    suggestion_limit: int = SUGGESTION_LIMIT
    debug_mode: bool = False
    debug_log_path: Path | None = None
    persist_history: bool = True

    @classmethod
    def from_env(cls) -> RuntimeConfig:
        def _parse_int(value: str | None, default: int) -> int:
            if not value:
                return default
            try:
                parsed = int(value)
            except (TypeError, ValueError):
                return default
            return parsed if parsed > 0 else default

        def _parse_path(value: str | None) -> Path | None:
            if value is None or not value.strip():
                return None
            return Path(value.strip()).expanduser()

        config_dir = get_config_dir()
        history_path = _parse_path(os.environ.get("TABSCOPE_HISTORY_PATH")) or config_dir / "history.json"
        debug_log_path = _parse_path(os.environ.get("TABSCOPE_DEBUG_LOG")) or config_dir / "debug.jsonl"

        return cls(
            config_dir=config_dir,
            history_path=history_path,
            history_size=_parse_int(os.environ.get("TABSCOPE_HISTORY_SIZE"), DEFAULT_HISTORY_SIZE),
            debug_mode=os.environ.get("TABSCOPE_DEBUG") == "1",
            debug_log_path=debug_log_path,
        )

    @classmethod
    def for_tests(cls, config_dir: Path) -> RuntimeConfig:
        """A config that never touches the user's home directory."""
        return cls(
            config_dir=config_dir,
            history_path=config_dir / "history.json",
            debug_log_path=config_dir / "debug.jsonl",
            persist_history=False,
        )
