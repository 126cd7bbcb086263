"""Schema view: the engine's registered tables and their columns."""

from __future__ import annotations

from dataclasses import dataclass

from tabscope.core.errors import CommandNotFoundError, ModeError
from tabscope.domains.schema.app.table_schema import TableSchema
from tabscope.shared.app.protocols import SessionProtocol


@dataclass
class SchemaView:
    names: list[str]
    selected: int = 0

    def up(self) -> None:
        self.selected = max(self.selected - 1, 0)

    def down(self) -> None:
        self.selected = min(self.selected + 1, max(len(self.names) - 1, 0))

    @property
    def current(self) -> str | None:
        if not self.names:
            return None
        return self.names[self.selected]


def _require_schema(session: SessionProtocol) -> SchemaView:
    if session.schema is None:
        raise ModeError("Schema view is not open")
    return session.schema


def selected_table_schema(session: SessionProtocol) -> TableSchema | None:
    """Column summary of the table highlighted in the schema view."""
    if session.schema is None or session.schema.current is None:
        return None
    frame = session.engine.get(session.schema.current)
    return TableSchema.from_frame(frame) if frame is not None else None


class SchemaMixin:
    def action_schema_show(self: SessionProtocol) -> None:
        self.schema = SchemaView(names=sorted(self.engine.tables()))

    def action_schema_select_up(self: SessionProtocol) -> None:
        _require_schema(self).up()

    def action_schema_select_down(self: SessionProtocol) -> None:
        _require_schema(self).down()

    def action_schema_open_table(self: SessionProtocol) -> None:
        name = _require_schema(self).current
        frame = self.engine.get(name) if name is not None else None
        if name is None or frame is None:
            raise CommandNotFoundError("No table selected")
        self.schema = None
        self.add_table(name, frame, register=False)

    def action_schema_dismiss(self: SessionProtocol) -> None:
        self.schema = None
