"""Resolve key events to actions by walking the context tree."""

from __future__ import annotations

from types import MappingProxyType

from tabscope.core.actions import NO_ACTION, Action
from tabscope.core.binding_contexts import Context, get_binding_context
from tabscope.core.input_context import InputContext
from tabscope.core.keymap import DefaultKeymapProvider, FallbackRule, KeyEvent, KeymapProvider
from tabscope.shared.core.debug_events import emit_debug_event

_Table = tuple[tuple[str, frozenset[str], Action], ...]


class KeyResolver:
    """Immutable per-context lookup tables built from a keymap provider.

    Within a context the first matching binding wins. With no match the
    context's fallback rule is consulted, then the parent context, and
    ``NO_ACTION`` is returned at the root.
    """

    def __init__(self, keymap: KeymapProvider | None = None) -> None:
        self.keymap = keymap or DefaultKeymapProvider()
        tables: dict[Context, list[tuple[str, frozenset[str], Action]]] = {ctx: [] for ctx in Context}
        for binding in self.keymap.get_bindings():
            event = binding.event
            tables[binding.context].append((event.code, event.modifiers, binding.action))
        self._tables: MappingProxyType[Context, _Table] = MappingProxyType(
            {ctx: tuple(rows) for ctx, rows in tables.items()}
        )
        self._fallbacks: MappingProxyType[Context, FallbackRule] = MappingProxyType(
            dict(self.keymap.get_fallbacks())
        )

    def resolve(self, context: Context, event: KeyEvent) -> Action:
        for ctx in context.chain():
            for code, modifiers, action in self._tables[ctx]:
                if code == event.code and modifiers == event.modifiers:
                    return action
            rule = self._fallbacks.get(ctx)
            if rule is not None:
                action = rule.apply(event)
                if action is not None:
                    return action
        return NO_ACTION

    def resolve_input(self, input_context: InputContext, event: KeyEvent) -> Action:
        """Classify the input snapshot, then resolve the key in that context."""
        context = get_binding_context(input_context)
        action = self.resolve(context, event)
        emit_debug_event(
            "key.resolve",
            category="keybinding",
            key=event.key,
            context=context.value,
            action=str(action),
        )
        return action
