"""Dispatch loop coupling the terminal event source to component updates.

Each cycle blocks for one terminal event, translates it into actions, then
drains the action queue to a fixed point before waiting again. Only this loop
mutates component state, the exit/suspend flags, and the active mode.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Protocol

from .. import actions
from ..actions import Action, ActionChannel, ActionKind, ActionSender, Mode
from ..log import get_logger
from .config import freeze_config
from .events import Event
from .frame import Frame, Rect
from .keymap import DEFAULT_BINDINGS, KeyBindings, event_action
from .screen import Screen, find_screen, iter_components
from .session import DEFAULT_FRAME_RATE, DEFAULT_TICK_RATE, TerminalSession, suspend_process

logger = get_logger("app")


class ActionBudgetExceeded(RuntimeError):
    """Raised when one drain processes more actions than the configured budget."""


class Session(Protocol):
    """What the loop needs from a terminal driver session."""

    def __enter__(self) -> Session: ...

    def __exit__(self, *exc_info: object) -> None: ...

    def next(self, timeout: float | None = None) -> Event | None: ...

    def size(self) -> Rect: ...

    def resize(self, area: Rect) -> None: ...

    def draw(self, render: Callable[[Frame], None]) -> None: ...


class App:
    """Top-level driver owning the action queue and loop-global state."""

    def __init__(
        self,
        screens: Sequence[Screen],
        config: Mapping[str, str],
        *,
        tick_rate: float = DEFAULT_TICK_RATE,
        frame_rate: float = DEFAULT_FRAME_RATE,
        session_factory: Callable[[], Session] | None = None,
        suspend_process: Callable[[], None] = suspend_process,
        bindings: KeyBindings = DEFAULT_BINDINGS,
        max_actions_per_cycle: int | None = None,
    ) -> None:
        self.current_mode = Mode.FILE_CHOOSER
        self.exit = False
        self.suspend = False
        self.tick_rate = tick_rate
        self.frame_rate = frame_rate
        self.screens = list(screens)
        self.config = freeze_config(config)
        self.channel = ActionChannel()
        self.bindings = bindings
        self.max_actions_per_cycle = max_actions_per_cycle
        self._session_factory = session_factory
        self._suspend_process = suspend_process

    def _new_session(self) -> Session:
        if self._session_factory is not None:
            return self._session_factory()
        return TerminalSession(tick_rate=self.tick_rate, frame_rate=self.frame_rate)

    def run(self) -> None:
        """Run until a Quit action is drained.

        The terminal session is released on every exit path. A suspend releases
        it, stops the process, and re-enters a fresh session once continued.
        """
        tx = self.channel.sender()
        started = False
        try:
            while True:
                with self._new_session() as session:
                    if not started:
                        self._start_components(tx, session.size())
                        started = True
                    self._run_session(session, tx)
                if self.suspend:
                    logger.info("suspending")
                    self._suspend_process()
                    tx.send(actions.RESUME)
                    continue
                break
        finally:
            self.channel.close()

    def _start_components(self, tx: ActionSender, area: Rect) -> None:
        for component in iter_components(self.screens):
            component.register_action_handler(tx)
        for component in iter_components(self.screens):
            component.register_config_handler(self.config)
        for component in iter_components(self.screens):
            component.init(area)

    def _run_session(self, session: Session, tx: ActionSender) -> None:
        while True:
            event = session.next()
            if event is not None:
                self._dispatch_event(event, tx)
            self.drain(session, tx)
            if self.suspend or self.exit:
                return

    def _dispatch_event(self, event: Event, tx: ActionSender) -> None:
        action = event_action(self.current_mode, event, self.bindings)
        if action is not None:
            tx.send(action)
        for component in iter_components(self.screens):
            derived = component.handle_events(event)
            if derived is not None:
                tx.send(derived)

    def active_screen(self) -> Screen | None:
        return find_screen(self.screens, self.current_mode)

    def drain(self, session: Session, tx: ActionSender) -> int:
        """Process queued actions until the queue is empty; returns the count."""
        processed = 0
        while True:
            action = self.channel.try_recv()
            if action is None:
                return processed
            processed += 1
            if self.max_actions_per_cycle is not None and processed > self.max_actions_per_cycle:
                raise ActionBudgetExceeded(
                    f"more than {self.max_actions_per_cycle} actions in one cycle (last: {action.kind.value})"
                )
            if not action.is_periodic():
                logger.debug("%r", action)
            self._apply_loop_effects(action, session, tx)

            screen = self.active_screen()
            if screen is not None:
                for component in screen.components:
                    derived = component.update(action)
                    if derived is not None:
                        tx.send(derived)

            for component in iter_components(self.screens):
                derived = component.update_background(action)
                if derived is not None:
                    tx.send(derived)

    def _apply_loop_effects(self, action: Action, session: Session, tx: ActionSender) -> None:
        kind = action.kind
        if kind is ActionKind.QUIT:
            self.exit = True
        elif kind is ActionKind.SUSPEND:
            self.suspend = True
        elif kind is ActionKind.RESUME:
            self.suspend = False
        elif kind is ActionKind.SWITCH_MODE and action.mode is not None:
            self.current_mode = action.mode
        elif kind is ActionKind.RESIZE:
            session.resize(Rect(0, 0, action.width, action.height))
            self._draw(session, tx)
        elif kind is ActionKind.RENDER:
            self._draw(session, tx)
        elif kind is ActionKind.ERROR:
            logger.error("%s", action.message)

    def _draw(self, session: Session, tx: ActionSender) -> None:
        screen = self.active_screen()
        if screen is None:
            return

        def render(frame: Frame) -> None:
            for component, area in screen.layout(frame.size()):
                try:
                    component.draw(frame, area)
                except Exception as exc:
                    tx.send(Action.error(f"Failed to draw: {exc!r}"))

        session.draw(render)


__all__ = ["ActionBudgetExceeded", "App", "Session"]
