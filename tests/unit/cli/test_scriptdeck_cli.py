"""CLI argument, config-merge, and root validation tests.

Verifies how ``scriptdeck.cli.main`` picks the repository root and what it
hands to the runtime, without ever entering the terminal UI.
"""

from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from scriptdeck import cli


def _tty(is_tty: bool = True) -> mock.Mock:
    return mock.Mock(isatty=mock.Mock(return_value=is_tty))


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        self.config_path = self.root / "config.json"
        logging_patch = mock.patch("scriptdeck.cli.configure_logging")
        self.configure_logging = logging_patch.start()
        self.addCleanup(logging_patch.stop)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _main(self, argv: list[str], **kwargs) -> mock.Mock:
        with mock.patch("scriptdeck.cli.sys.stdin", new=_tty()), mock.patch("scriptdeck.cli.run_app") as run_app:
            cli.main(["--config", str(self.config_path), *argv], **kwargs)
        return run_app

    def test_defaults_to_current_working_directory(self) -> None:
        previous_cwd = Path.cwd()
        try:
            os.chdir(self.root)
            run_app = self._main([])
        finally:
            os.chdir(previous_cwd)

        run_app.assert_called_once()
        repository, config = run_app.call_args.args
        self.assertEqual(repository.base_as_path().resolve(), self.root)
        self.assertEqual(config, {})

    def test_explicit_root_wins_over_default(self) -> None:
        target = self.root / "scripts"
        target.mkdir()

        run_app = self._main([str(target)], default_root=self.root / "unused")

        repository, _config = run_app.call_args.args
        self.assertEqual(repository.base_as_path(), target)

    def test_cli_options_override_config_file(self) -> None:
        self.config_path.write_text(json.dumps({"tick_rate": 2, "style": "native", "theme": "ocean"}), encoding="utf-8")

        run_app = self._main(["--tick-rate", "4", "--theme", "plain"], default_root=self.root)

        _repository, config = run_app.call_args.args
        self.assertEqual(config, {"tick_rate": "4.0", "style": "native", "theme": "plain"})

    def test_verbose_and_log_file_reach_logging_setup(self) -> None:
        log_file = self.root / "run.log"
        self._main(["--verbose", "--log-file", str(log_file)], default_root=self.root)
        self.configure_logging.assert_called_once_with(verbose=True, log_file=log_file)

    def test_missing_root_exits_with_message(self) -> None:
        missing = self.root / "missing"
        with self.assertRaises(SystemExit) as caught:
            self._main([str(missing)])
        self.assertEqual(str(caught.exception), f"Path not found: {missing}")

    def test_file_root_is_rejected(self) -> None:
        target = self.root / "one.sql"
        target.write_text("select 1;\n", encoding="utf-8")
        with self.assertRaises(SystemExit) as caught:
            self._main([str(target)])
        self.assertEqual(str(caught.exception), f"Not a directory: {target}")

    def test_non_interactive_stdin_is_rejected(self) -> None:
        with mock.patch("scriptdeck.cli.sys.stdin", new=_tty(False)), mock.patch("scriptdeck.cli.run_app") as run_app:
            with self.assertRaises(SystemExit):
                cli.main(["--config", str(self.config_path), str(self.root)])
        run_app.assert_not_called()

    def test_non_positive_rate_is_a_usage_error(self) -> None:
        with mock.patch("sys.stderr"), self.assertRaises(SystemExit) as caught:
            cli.build_parser().parse_args(["--frame-rate", "0"])
        self.assertEqual(caught.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
