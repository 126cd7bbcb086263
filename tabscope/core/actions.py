"""UI-agnostic action values produced by key resolution and command parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Action:
    """A UI operation by name plus its parameters.

    ``name`` matches an ``action_<name>`` handler on the session.
    """

    name: str
    args: tuple[Any, ...] = ()

    @classmethod
    def of(cls, name: str, *args: Any) -> Action:
        return cls(name, tuple(args))

    @property
    def is_noop(self) -> bool:
        return self.name == NO_ACTION.name

    def __str__(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}({', '.join(repr(a) for a in self.args)})"


NO_ACTION = Action("no_action")

# Actions that swap the active table and therefore reset the viewport.
DATASET_ACTIONS = frozenset(
    {
        "sql_query",
        "tab_new_query",
        "table_select",
        "table_filter",
        "table_order",
        "table_reset",
    }
)
