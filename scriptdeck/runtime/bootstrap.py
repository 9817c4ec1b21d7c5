"""Runtime composition: build the screens for a repository and start the loop."""

from __future__ import annotations

from collections.abc import Mapping

from ..actions import Mode
from ..components import FileChooser, ScriptList, ScriptPreview, ScriptRunner, StatusBar
from ..log import get_logger
from ..repository import Repository
from .app import App
from .config import config_rate
from .screen import Screen
from .session import DEFAULT_FRAME_RATE, DEFAULT_TICK_RATE

logger = get_logger("bootstrap")


def build_screens(repository: Repository, runner: ScriptRunner | None = None) -> list[Screen]:
    """Return the file-chooser and script-runner screens for ``repository``.

    The script list lives only on the runner screen; it follows selection
    changes made from the chooser through background updates.
    """
    chooser_screen = Screen(
        Mode.FILE_CHOOSER,
        [
            FileChooser(repository),
            ScriptPreview(repository.base_as_path()),
            StatusBar(Mode.FILE_CHOOSER),
        ],
    )
    runner_screen = Screen(
        Mode.SCRIPT_RUNNER,
        [
            ScriptList(runner),
            StatusBar(Mode.SCRIPT_RUNNER),
        ],
    )
    return [chooser_screen, runner_screen]


def build_app(
    repository: Repository,
    config: Mapping[str, str],
    runner: ScriptRunner | None = None,
) -> App:
    return App(
        build_screens(repository, runner),
        config,
        tick_rate=config_rate(config, "tick_rate", DEFAULT_TICK_RATE),
        frame_rate=config_rate(config, "frame_rate", DEFAULT_FRAME_RATE),
    )


def run_app(repository: Repository, config: Mapping[str, str], runner: ScriptRunner | None = None) -> None:
    """Build the app for ``repository`` and run it until quit."""
    app = build_app(repository, config, runner)
    logger.info("starting at %s (tick=%s Hz, frame=%s Hz)", repository.base_as_str(), app.tick_rate, app.frame_rate)
    app.run()
    logger.info("exited")


__all__ = ["build_app", "build_screens", "run_app"]
