"""Fixed key-binding table and raw-event translation."""

from __future__ import annotations

from dataclasses import dataclass

from .. import actions
from ..actions import Action, Mode
from .events import Event, EventKind

MODE_TOGGLE = {
    Mode.FILE_CHOOSER: Mode.SCRIPT_RUNNER,
    Mode.SCRIPT_RUNNER: Mode.FILE_CHOOSER,
}


@dataclass(frozen=True)
class KeyBinding:
    """Mapping from one or more key tokens to a single action."""

    combos: tuple[str, ...]
    action: Action


class KeyBindings:
    """Small key-dispatch table; later registrations win."""

    def __init__(self) -> None:
        self._actions: dict[str, Action] = {}

    def register_binding(self, binding: KeyBinding) -> KeyBindings:
        for combo in binding.combos:
            self._actions[combo] = binding.action
        return self

    def register_bindings(self, *bindings: KeyBinding) -> KeyBindings:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def lookup(self, key: str) -> Action | None:
        return self._actions.get(key)


DEFAULT_BINDINGS = KeyBindings().register_bindings(
    KeyBinding(("CTRL_Z",), actions.SUSPEND),
    KeyBinding(("CTRL_C", "q"), actions.QUIT),
    KeyBinding(("r",), actions.SCRIPT_RUN),
    KeyBinding((" ",), actions.SELECT_CURRENT),
    KeyBinding(("s",), actions.SELECT_ALL_AFTER),
    KeyBinding(("S",), actions.SELECT_ALL_IN_DIRECTORY),
    KeyBinding(("X",), actions.REMOVE_ALL_SELECTED_SCRIPTS),
    KeyBinding(("x",), actions.REMOVE_SELECTED_SCRIPT),
    KeyBinding(("UP",), actions.CURSOR_UP),
    KeyBinding(("DOWN",), actions.CURSOR_DOWN),
    KeyBinding(("HOME",), actions.CURSOR_TO_TOP),
    KeyBinding(("END",), actions.CURSOR_TO_BOTTOM),
    KeyBinding(("ENTER",), actions.DIRECTORY_OPEN_SELECTED),
    KeyBinding(("BACKSPACE",), actions.DIRECTORY_LEAVE),
)


def key_action(mode: Mode, key: str, bindings: KeyBindings = DEFAULT_BINDINGS) -> Action | None:
    """Translate one key token under ``mode``; Tab toggles between the two modes."""
    if key == "TAB":
        target = MODE_TOGGLE.get(mode)
        return Action.switch_mode(target) if target is not None else None
    return bindings.lookup(key)


def event_action(mode: Mode, event: Event, bindings: KeyBindings = DEFAULT_BINDINGS) -> Action | None:
    """Translate a raw terminal event into at most one action."""
    kind = event.kind
    if kind is EventKind.QUIT:
        return actions.QUIT
    if kind is EventKind.TICK:
        return actions.TICK
    if kind is EventKind.RENDER:
        return actions.RENDER
    if kind is EventKind.RESIZE:
        return Action.resize(event.width, event.height)
    if kind is EventKind.SWITCH_MODE and event.mode is not None:
        return Action.switch_mode(event.mode)
    if kind is EventKind.KEY:
        return key_action(mode, event.key, bindings)
    return None


__all__ = [
    "DEFAULT_BINDINGS",
    "KeyBinding",
    "KeyBindings",
    "MODE_TOGGLE",
    "event_action",
    "key_action",
]
