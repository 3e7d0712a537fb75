"""CLI entry point for termtimer.

Uses Click to expose the ``termtimer`` command, which runs a single countdown
in the terminal until the user quits.
"""

from __future__ import annotations

import curses
import logging
import sys
from typing import Callable, TypeVar

import click

import termtimer
from termtimer.backends.notify import NotificationError, PlyerNotifier
from termtimer.backends.terminal import CursesTerminal, TerminalError
from termtimer.config import Settings
from termtimer.core.loop import EventLoop
from termtimer.core.timer import Timer

T = TypeVar("T")

logger = logging.getLogger(__name__)

_FATAL_ERRORS = (TerminalError, NotificationError, curses.error, OSError)
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _run(action: Callable[[], T]) -> T:
    """Execute *action*, converting fatal runtime errors to a CLI error.

    The message is printed to stderr and the process exits with code 1.
    """
    try:
        return action()
    except _FATAL_ERRORS as exc:
        logger.error("Exiting on error: %s", exc)
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


def _configure_logging(log_file: str | None) -> None:
    if log_file is None:
        return
    logging.basicConfig(filename=log_file, level=logging.DEBUG, format=_LOG_FORMAT)


def _run_timer(settings: Settings) -> int:
    notifier = PlyerNotifier()
    timer = Timer.started(settings.duration, settings.label, notifier, appname=settings.app_name)
    with CursesTerminal() as terminal:
        return EventLoop(timer, terminal, notifier, settings).run()


@click.command()
@click.version_option(version=termtimer.__version__, prog_name="termtimer")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write debug logs to this file.",
)
def cli(log_file: str | None) -> None:
    """termtimer: a countdown timer in the terminal.

    Space pauses and resumes, r restarts, n shows a test notification and
    q quits.
    """
    _configure_logging(log_file)
    settings = Settings()
    try:
        _run(lambda: _run_timer(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted")
