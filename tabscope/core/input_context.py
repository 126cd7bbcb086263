"""UI-agnostic input context used for key context classification."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class InputContext:
    """Snapshot of session state for key routing."""

    error_pending: bool = False
    palette_open: bool = False
    schema_active: bool = False
    side_panel_open: bool = False
    has_tab: bool = False
    modal: str = "none"  # "none" | "search" | "sheet" | "info" | "scatter" | "histogram"
