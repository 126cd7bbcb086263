"""Pytest fixtures for tabscope tests."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import polars as pl
import pytest

_TEST_CONFIG_DIR = Path(tempfile.mkdtemp(prefix="tabscope-test-config-"))
os.environ.setdefault("TABSCOPE_CONFIG_DIR", str(_TEST_CONFIG_DIR))


@pytest.fixture(autouse=True)
def _reset_debug_events():
    """Keep the debug event log from leaking between tests."""
    from tabscope.shared.core.debug_events import clear_debug_events, configure_debug_events

    configure_debug_events(enabled=False)
    clear_debug_events()
    yield
    configure_debug_events(enabled=False)
    clear_debug_events()


@pytest.fixture
def runtime(tmp_path):
    from tabscope.shared.app.runtime import RuntimeConfig

    return RuntimeConfig.for_tests(tmp_path)


@pytest.fixture
def numbers() -> pl.DataFrame:
    """Ten rows: n = 0..9 with a label column."""
    return pl.DataFrame({"n": list(range(10)), "label": [f"row {i}" for i in range(10)]})


@pytest.fixture
def session(runtime, numbers):
    from tabscope.domains.shell.app.session import Session

    session = Session(runtime)
    session.add_table("numbers", numbers)
    session.require_tab().viewport.set_page_size(5)
    yield session
    session.close()
