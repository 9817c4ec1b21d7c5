"""Terminal driver session: raw mode plus the background event producers.

A session owns three producers feeding one event queue: a key-reader thread,
a render ticker, and a logic ticker. Terminal resizes arrive through SIGWINCH.
The dispatch loop is the only consumer, via :meth:`TerminalSession.next`.
"""

from __future__ import annotations

import os
import queue
import shutil
import signal
import sys
import threading
from collections.abc import Callable

from ..input import EOF_KEY, read_key
from ..log import get_logger
from .events import QUIT_EVENT, RENDER_EVENT, TICK_EVENT, Event
from .frame import Frame, Rect
from .terminal import TerminalController

KEY_POLL_TIMEOUT_MS = 50
DEFAULT_TICK_RATE = 1.0
DEFAULT_FRAME_RATE = 30.0

logger = get_logger("session")


def terminal_area() -> Rect:
    """Return the full terminal viewport as a rectangle."""
    term = shutil.get_terminal_size((80, 24))
    return Rect(0, 0, max(1, term.columns), max(1, term.lines))


def suspend_process() -> None:
    """Stop this process as if the user pressed Ctrl+Z in cooked mode.

    Returns once the shell continues the process with SIGCONT.
    """
    os.kill(os.getpid(), signal.SIGTSTP)


class TerminalSession:
    """One acquisition of the terminal, usable as a context manager.

    Entering switches the tty to raw alternate-screen mode and starts the
    producers; leaving stops them and restores the terminal on every exit path.
    """

    def __init__(
        self,
        *,
        tick_rate: float = DEFAULT_TICK_RATE,
        frame_rate: float = DEFAULT_FRAME_RATE,
        stdin_fd: int | None = None,
        stdout_fd: int | None = None,
        controller: TerminalController | None = None,
    ) -> None:
        self.tick_rate = tick_rate
        self.frame_rate = frame_rate
        self.stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
        self.stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
        self._controller = controller
        # SimpleQueue.put is reentrant, so the SIGWINCH handler may post while
        # the main thread is inside get().
        self._events: queue.SimpleQueue[Event] = queue.SimpleQueue()
        self._stop = threading.Event()
        self._threads: list[threading.Thread] = []
        self._previous_winch_handler: object = None
        self._area: Rect | None = None
        self._active = False

    def __enter__(self) -> TerminalSession:
        self.enter()
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.exit()

    def post(self, event: Event) -> None:
        """Queue an event for the dispatch loop; safe from any thread."""
        self._events.put(event)

    def enter(self) -> None:
        if self._active:
            return
        if self._controller is None:
            self._controller = TerminalController(self.stdin_fd, self.stdout_fd)
        self._controller.enable_tui_mode()
        self._active = True
        self._stop.clear()
        self._area = terminal_area()
        self._install_resize_handler()
        self._start_thread("scriptdeck-keys", self._read_keys)
        if self.tick_rate > 0:
            self._start_thread("scriptdeck-tick", self._run_ticker, 1.0 / self.tick_rate, TICK_EVENT)
        if self.frame_rate > 0:
            self._start_thread("scriptdeck-render", self._run_ticker, 1.0 / self.frame_rate, RENDER_EVENT)
        logger.debug("terminal session entered (tick=%s Hz, frame=%s Hz)", self.tick_rate, self.frame_rate)

    def exit(self) -> None:
        """Stop producers and restore the terminal; idempotent."""
        if not self._active:
            return
        self._active = False
        self._stop.set()
        for thread in self._threads:
            if thread is not threading.current_thread():
                thread.join(timeout=1.0)
        self._threads.clear()
        self._restore_resize_handler()
        if self._controller is not None:
            self._controller.disable_tui_mode()
        logger.debug("terminal session released")

    def next(self, timeout: float | None = None) -> Event | None:
        """Block until the next event arrives; ``None`` after ``timeout`` seconds."""
        try:
            return self._events.get(timeout=timeout)
        except queue.Empty:
            return None

    def size(self) -> Rect:
        if self._area is None:
            self._area = terminal_area()
        return self._area

    def resize(self, area: Rect) -> None:
        self._area = area
        if self._controller is not None and self._active:
            self._controller.clear_screen()

    def draw(self, render: Callable[[Frame], None]) -> None:
        """Run ``render`` against a fresh frame and flush it in one write."""
        frame = Frame(self.size())
        render(frame)
        if self._controller is not None and self._active:
            self._controller.write(frame.to_ansi())

    def _start_thread(self, name: str, target: Callable[..., None], *args: object) -> None:
        worker = threading.Thread(target=target, args=args, name=name, daemon=True)
        self._threads.append(worker)
        worker.start()

    def _read_keys(self) -> None:
        while not self._stop.is_set():
            try:
                key = read_key(self.stdin_fd, timeout_ms=KEY_POLL_TIMEOUT_MS)
            except OSError as exc:
                logger.error("stdin read failed: %s", exc)
                self.post(QUIT_EVENT)
                return
            if not key:
                continue
            if key == EOF_KEY:
                self.post(QUIT_EVENT)
                return
            self.post(Event.key_press(key))

    def _run_ticker(self, interval: float, event: Event) -> None:
        while not self._stop.wait(interval):
            self.post(event)

    def _on_resize_signal(self, _signum: int, _frame: object) -> None:
        area = terminal_area()
        self.post(Event.resize(area.width, area.height))

    def _install_resize_handler(self) -> None:
        if threading.current_thread() is not threading.main_thread():
            return
        self._previous_winch_handler = signal.signal(signal.SIGWINCH, self._on_resize_signal)

    def _restore_resize_handler(self) -> None:
        if self._previous_winch_handler is None:
            return
        if threading.current_thread() is threading.main_thread():
            signal.signal(signal.SIGWINCH, self._previous_winch_handler)
        self._previous_winch_handler = None


__all__ = [
    "DEFAULT_FRAME_RATE",
    "DEFAULT_TICK_RATE",
    "TerminalSession",
    "suspend_process",
    "terminal_area",
]
