"""Tests for the structured debug event log."""

from __future__ import annotations

import json

from tabscope.shared.core.debug_events import (
    MAX_DEBUG_EVENTS,
    clear_debug_events,
    configure_debug_events,
    emit_debug_event,
    format_debug_data,
    get_debug_events,
)


def test_events_are_kept_in_memory():
    emit_debug_event("first", category="test", value=1)
    emit_debug_event("second", category="test")
    names = [event.name for event in get_debug_events()]
    assert names[-2:] == ["first", "second"]
    assert get_debug_events(limit=1)[0].name == "second"


def test_history_is_bounded():
    for i in range(MAX_DEBUG_EVENTS + 10):
        emit_debug_event("tick", i=i)
    events = get_debug_events()
    assert len(events) == MAX_DEBUG_EVENTS
    assert events[-1].data["i"] == MAX_DEBUG_EVENTS + 9


def test_log_file_written_only_when_enabled(tmp_path):
    log = tmp_path / "debug.jsonl"
    configure_debug_events(enabled=False, log_path=log)
    emit_debug_event("quiet")
    assert not log.exists()

    configure_debug_events(enabled=True, log_path=log)
    emit_debug_event("loud", category="test", n=3)
    lines = log.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    record = json.loads(lines[0])
    assert record["name"] == "loud"
    assert record["category"] == "test"
    assert record["data"] == {"n": 3}

    clear_debug_events()
    assert log.read_text(encoding="utf-8") == ""
    assert get_debug_events() == []


def test_format_debug_data():
    assert format_debug_data({"a": "x", "b": 2, "c": [1]}) == "a=x b=2 c=[1]"
    long = format_debug_data({"s": "y" * 100})
    assert long.endswith("...")
    assert len(long) == len("s=") + 80


def test_event_data_may_carry_a_name_field():
    event = emit_debug_event("tab.add", category="table", name="orders")
    assert event.name == "tab.add"
    assert event.data == {"name": "orders"}
