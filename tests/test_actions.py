from __future__ import annotations

import threading
import unittest

from scriptdeck import actions
from scriptdeck.actions import Action, ActionChannel, ActionKind, ChannelClosed, Mode
from scriptdeck.repository import Entry


class ActionValueTests(unittest.TestCase):
    def test_actions_compare_structurally(self) -> None:
        entry = Entry(is_directory=False, relative_path="a.sql", name="a.sql")
        self.assertEqual(Action.remove_script(entry), Action.remove_script(entry))
        self.assertEqual(Action.append_scripts([entry]), Action.append_scripts((entry,)))
        self.assertNotEqual(Action.resize(80, 24), Action.resize(80, 25))
        self.assertEqual(Action(ActionKind.QUIT), actions.QUIT)

    def test_only_tick_and_render_are_periodic(self) -> None:
        self.assertTrue(actions.TICK.is_periodic())
        self.assertTrue(actions.RENDER.is_periodic())
        self.assertFalse(actions.QUIT.is_periodic())
        self.assertFalse(Action.switch_mode(Mode.SCRIPT_RUNNER).is_periodic())


class ActionChannelTests(unittest.TestCase):
    def test_receives_in_send_order(self) -> None:
        channel = ActionChannel()
        tx = channel.sender()
        tx.send(actions.CURSOR_DOWN)
        tx.send(actions.QUIT)

        self.assertEqual(channel.try_recv(), actions.CURSOR_DOWN)
        self.assertEqual(channel.try_recv(), actions.QUIT)
        self.assertIsNone(channel.try_recv())

    def test_send_after_close_raises(self) -> None:
        channel = ActionChannel()
        tx = channel.sender()
        channel.close()

        self.assertTrue(channel.closed)
        with self.assertRaises(ChannelClosed):
            tx.send(actions.TICK)

    def test_many_producers_lose_nothing(self) -> None:
        channel = ActionChannel()

        def produce() -> None:
            tx = channel.sender()
            for _ in range(200):
                tx.send(actions.TICK)

        workers = [threading.Thread(target=produce) for _ in range(4)]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join()

        received = 0
        while channel.try_recv() is not None:
            received += 1
        self.assertEqual(received, 800)


if __name__ == "__main__":
    unittest.main()
