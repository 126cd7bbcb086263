"""Session-level command handlers."""

from __future__ import annotations

from .debug import DebugCommandMixin

__all__ = ["DebugCommandMixin"]
