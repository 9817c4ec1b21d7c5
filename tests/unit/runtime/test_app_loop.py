"""Dispatch-loop tests driven by a scripted in-memory session."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from scriptdeck import actions
from scriptdeck.actions import Action, ActionKind, ChannelClosed, Mode
from scriptdeck.components import Component, ScriptList, StatusBar
from scriptdeck.repository import Entry, Repository
from scriptdeck.runtime.app import ActionBudgetExceeded, App
from scriptdeck.runtime.bootstrap import build_screens
from scriptdeck.runtime.events import QUIT_EVENT, RENDER_EVENT, TICK_EVENT, Event
from scriptdeck.runtime.frame import Frame, Rect
from scriptdeck.runtime.screen import Screen


class ScriptedSession:
    """Replays a fixed list of events, then reports Quit forever."""

    def __init__(self, events: list[Event], area: Rect = Rect(0, 0, 80, 24)) -> None:
        self.events = list(events)
        self.area = area
        self.entered = 0
        self.exited = 0
        self.resized: list[Rect] = []
        self.frames: list[Frame] = []

    def __enter__(self) -> ScriptedSession:
        self.entered += 1
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.exited += 1

    def next(self, timeout: float | None = None) -> Event | None:
        if self.events:
            return self.events.pop(0)
        return QUIT_EVENT

    def size(self) -> Rect:
        return self.area

    def resize(self, area: Rect) -> None:
        self.area = area
        self.resized.append(area)

    def draw(self, render) -> None:
        frame = Frame(self.area)
        render(frame)
        self.frames.append(frame)


class Recorder(Component):
    def __init__(self) -> None:
        super().__init__()
        self.calls: list[str] = []
        self.updates: list[Action] = []
        self.background: list[Action] = []

    def register_action_handler(self, tx) -> None:
        self.calls.append("action_handler")
        super().register_action_handler(tx)

    def register_config_handler(self, config) -> None:
        self.calls.append("config_handler")
        super().register_config_handler(config)

    def init(self, area: Rect) -> None:
        self.calls.append("init")

    def update(self, action: Action) -> Action | None:
        self.updates.append(action)
        return None

    def update_background(self, action: Action) -> Action | None:
        self.background.append(action)
        return None

    def draw(self, frame: Frame, area: Rect) -> None:
        frame.write_line(area, 0, "recorder")


class Exploding(Component):
    def draw(self, frame: Frame, area: Rect) -> None:
        raise ValueError("boom")


class TickEcho(Component):
    def update_background(self, action: Action) -> Action | None:
        if action.kind is ActionKind.TICK:
            return actions.TICK
        return None

    def draw(self, frame: Frame, area: Rect) -> None:
        pass


def _app(screens: list[Screen], sessions: list[ScriptedSession], **kwargs) -> App:
    kwargs.setdefault("suspend_process", lambda: None)
    return App(screens, {"style": "native"}, session_factory=lambda: sessions.pop(0), **kwargs)


class AppLoopTests(unittest.TestCase):
    def test_quit_key_stops_before_later_events(self) -> None:
        later = Event.key_press("DOWN")
        session = ScriptedSession([Event.key_press("q"), later])
        recorder = Recorder()

        app = _app([Screen(Mode.FILE_CHOOSER, [recorder])], [session])
        app.run()

        self.assertTrue(app.exit)
        self.assertEqual(session.events, [later])
        self.assertEqual((session.entered, session.exited), (1, 1))
        self.assertNotIn(actions.CURSOR_DOWN, recorder.updates)

    def test_components_start_in_registration_order_with_frozen_config(self) -> None:
        first, second = Recorder(), Recorder()
        app = _app([Screen(Mode.FILE_CHOOSER, [first]), Screen(Mode.SCRIPT_RUNNER, [second])], [ScriptedSession([])])

        app.run()

        for component in (first, second):
            self.assertEqual(component.calls, ["action_handler", "config_handler", "init"])
            self.assertEqual(component.config["style"], "native")
            with self.assertRaises(TypeError):
                component.config["style"] = "monokai"  # type: ignore[index]

    def test_tab_toggles_mode_and_routes_updates_to_active_screen_only(self) -> None:
        chooser_side, runner_side = Recorder(), Recorder()
        session = ScriptedSession([Event.key_press("TAB"), Event.key_press("DOWN")])
        app = _app(
            [Screen(Mode.FILE_CHOOSER, [chooser_side]), Screen(Mode.SCRIPT_RUNNER, [runner_side])],
            [session],
        )

        app.run()

        self.assertIs(app.current_mode, Mode.SCRIPT_RUNNER)
        self.assertIn(actions.CURSOR_DOWN, runner_side.updates)
        self.assertNotIn(actions.CURSOR_DOWN, chooser_side.updates)
        self.assertIn(actions.CURSOR_DOWN, chooser_side.background)

    def test_second_tab_returns_updates_to_file_chooser(self) -> None:
        chooser_side, runner_side = Recorder(), Recorder()
        session = ScriptedSession([Event.key_press("TAB"), Event.key_press("TAB"), Event.key_press("DOWN")])
        app = _app(
            [Screen(Mode.FILE_CHOOSER, [chooser_side]), Screen(Mode.SCRIPT_RUNNER, [runner_side])],
            [session],
        )

        app.run()

        self.assertIs(app.current_mode, Mode.FILE_CHOOSER)
        self.assertIn(actions.CURSOR_DOWN, chooser_side.updates)
        self.assertNotIn(actions.CURSOR_DOWN, runner_side.updates)
        self.assertIn(Action.switch_mode(Mode.SCRIPT_RUNNER), runner_side.updates)
        self.assertIn(Action.switch_mode(Mode.FILE_CHOOSER), chooser_side.updates)

    def test_resize_updates_session_area_and_redraws(self) -> None:
        session = ScriptedSession([Event.resize(100, 40)])
        app = _app([Screen(Mode.FILE_CHOOSER, [Recorder()])], [session])

        app.run()

        self.assertEqual(session.resized, [Rect(0, 0, 100, 40)])
        self.assertEqual(len(session.frames), 1)
        self.assertEqual(session.frames[0].size(), Rect(0, 0, 100, 40))

    def test_draw_failure_becomes_error_action(self) -> None:
        status = StatusBar(Mode.FILE_CHOOSER)
        session = ScriptedSession([RENDER_EVENT])
        app = _app([Screen(Mode.FILE_CHOOSER, [Exploding(), status])], [session])

        with self.assertLogs("scriptdeck.app", level="ERROR") as captured:
            app.run()

        self.assertIn("Failed to draw: ValueError('boom')", captured.output[0])
        self.assertEqual(status.error_message, "Failed to draw: ValueError('boom')")
        self.assertEqual(len(session.frames), 1)

    def test_self_feeding_component_trips_action_budget(self) -> None:
        session = ScriptedSession([TICK_EVENT])
        app = _app([Screen(Mode.FILE_CHOOSER, [TickEcho()])], [session], max_actions_per_cycle=50)

        with self.assertRaises(ActionBudgetExceeded):
            app.run()

        self.assertEqual(session.exited, 1)
        self.assertTrue(app.channel.closed)

    def test_sending_after_run_raises_channel_closed(self) -> None:
        recorder = Recorder()
        app = _app([Screen(Mode.FILE_CHOOSER, [recorder])], [ScriptedSession([])])
        app.run()

        with self.assertRaises(ChannelClosed):
            recorder.command_tx.send(actions.TICK)


class AppSessionFlowTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        for name in ("a.sql", "b.sql"):
            (self.root / name).write_text("select 1;\n", encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_suspend_and_resume_preserve_selection_then_run(self) -> None:
        runs: list[tuple[Entry, ...]] = []
        suspended: list[bool] = []
        screens = build_screens(Repository(self.root), runner=runs.append)
        first = ScriptedSession([Event.key_press(" "), Event.key_press("TAB"), Event.key_press("CTRL_Z")])
        second = ScriptedSession([Event.key_press("r"), Event.key_press("q")])

        app = _app(screens, [first, second], suspend_process=lambda: suspended.append(True))
        app.run()

        expected = (Entry(is_directory=False, relative_path="a.sql", name="a.sql"),)
        self.assertEqual(suspended, [True])
        self.assertEqual((first.entered, first.exited), (1, 1))
        self.assertEqual((second.entered, second.exited), (1, 1))
        self.assertFalse(app.suspend)
        self.assertIs(app.current_mode, Mode.SCRIPT_RUNNER)
        self.assertEqual(runs, [expected])

        script_list = next(c for c in screens[1].components if isinstance(c, ScriptList))
        self.assertEqual(tuple(script_list.entries), expected)

    def test_suspend_keeps_queue_order_and_cursor_across_sessions(self) -> None:
        (self.root / "c.sql").write_text("select 3;\n", encoding="utf-8")
        screens = build_screens(Repository(self.root))
        script_list = next(c for c in screens[1].components if isinstance(c, ScriptList))
        first = ScriptedSession(
            [Event.key_press("S"), Event.key_press("TAB"), Event.key_press("DOWN"), Event.key_press("CTRL_Z")]
        )
        second = ScriptedSession([Event.key_press("DOWN")])
        app = _app(screens, [first, second])

        app.run()

        self.assertEqual([entry.name for entry in script_list.entries], ["a.sql", "b.sql", "c.sql"])
        self.assertEqual(script_list.cursor, 2)
        self.assertEqual((first.exited, second.entered), (1, 1))
        self.assertIs(app.current_mode, Mode.SCRIPT_RUNNER)

    def test_select_all_in_directory_then_clear_from_runner(self) -> None:
        screens = build_screens(Repository(self.root))
        session = ScriptedSession([Event.key_press("S"), Event.key_press("TAB"), Event.key_press("X")])
        app = _app(screens, [session])

        app.run()

        script_list = next(c for c in screens[1].components if isinstance(c, ScriptList))
        self.assertEqual(script_list.entries, [])
        chooser = screens[0].components[0]
        self.assertFalse(any(entry.selected for entry in chooser.entries))


if __name__ == "__main__":
    unittest.main()
