"""Error types raised by the interaction engine and its collaborators."""

from __future__ import annotations


class TabscopeError(Exception):
    """Base class for recoverable errors surfaced to the user."""


class CommandParseError(TabscopeError):
    """A command or its arguments could not be parsed."""


class CommandNotFoundError(TabscopeError):
    """An unknown command keyword, or a missing dataset."""


class ModeError(TabscopeError):
    """An action was invoked outside the mode it belongs to."""


class EngineError(TabscopeError):
    """The query engine rejected a query."""


class ReaderError(TabscopeError):
    """A file could not be turned into a table."""


class PlotError(TabscopeError):
    """A plot could not be built from the table."""
