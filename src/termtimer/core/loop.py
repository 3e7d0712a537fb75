"""Event loop: render, poll one key, check for completion, repeat."""

from __future__ import annotations

import logging
import time
from typing import Protocol

from termtimer.backends.notify import NotificationRequest, Notifier
from termtimer.backends.terminal import KeyEvent, KeyKind, Panel
from termtimer.config import Settings
from termtimer.core.timer import Off, Timer

logger = logging.getLogger(__name__)

INSTRUCTIONS = " New Timer <N>  Restart <R>  Pause <Space>  Quit <Q> "


class Terminal(Protocol):
    def draw(self, render) -> None: ...

    def poll(self, timeout: float) -> KeyEvent | None: ...


class EventLoop:
    """Drives one :class:`Timer` until the user quits.

    Each tick draws the panel, waits up to ``settings.poll_interval`` for a
    key, then lets the timer detect completion.  Errors from the terminal or
    the notifier end the loop and propagate to the caller.
    """

    def __init__(self, timer: Timer, terminal: Terminal, notifier: Notifier, settings: Settings | None = None) -> None:
        self._timer = timer
        self._terminal = terminal
        self._notifier = notifier
        self._settings = settings if settings is not None else Settings()
        self._frames = 0
        self._exit = False

    @property
    def frames(self) -> int:
        return self._frames

    @property
    def exiting(self) -> bool:
        return self._exit

    def run(self) -> int:
        """Run until ``q`` is pressed and return the number of frames drawn."""
        logger.info("Event loop started for %r", self._timer.label)
        while not self._exit:
            self.tick()
        logger.info("Event loop stopped after %d frames", self._frames)
        return self._frames

    def tick(self) -> None:
        self._render(time.monotonic())

        event = self._terminal.poll(self._settings.poll_interval)
        if event is not None:
            self.handle_key(event)

        self._timer.check_completion(time.monotonic())

    def handle_key(self, event: KeyEvent) -> None:
        if event.kind is not KeyKind.PRESS:
            return
        key = event.key
        if key == "q":
            logger.debug("Quit requested")
            self._exit = True
        elif key == " ":
            self._timer.toggle_pause()
        elif key == "n":
            self._notifier.show(
                NotificationRequest(
                    appname=self._settings.app_name,
                    summary="Test Notification",
                    body=f"Notifications from {self._settings.app_name} are working.",
                )
            )
        elif key == "r":
            if isinstance(self._timer.state, Off):
                self._timer.start()
            else:
                self._timer.restart()

    # -- private helpers -----------------------------------------------------

    def _render(self, now: float) -> None:
        self._frames += 1
        panel = Panel(
            title=self._settings.title,
            body=self._timer.render_text(now),
            instructions=INSTRUCTIONS,
            counter=f" {self._frames} ",
        )
        self._terminal.draw(panel.paint)
