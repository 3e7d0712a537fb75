"""Full-screen terminal drawing and key input on top of curses."""

from __future__ import annotations

import curses
import enum
import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)


class TerminalError(Exception):
    """Raised when the terminal cannot be set up, drawn to, or read from."""


class KeyKind(enum.Enum):
    PRESS = "press"
    REPEAT = "repeat"
    RELEASE = "release"


@dataclass(frozen=True)
class KeyEvent:
    key: str
    kind: KeyKind = KeyKind.PRESS


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class Panel:
    """One bordered box with a title, a body line and a footer."""

    title: str
    body: str
    instructions: str
    counter: str

    def paint(self, window, area: Rect) -> None:
        if area.width < 2 or area.height < 2:
            return
        left, top = area.x, area.y
        right = area.x + area.width - 1
        bottom = area.y + area.height - 1

        horizontal = "-" * (area.width - 2)
        _put(window, top, left, "+" + horizontal + "+")
        for row in range(top + 1, bottom):
            _put(window, row, left, "|")
            _put(window, row, right, "|")
        _put(window, bottom, left, "+" + horizontal + "+")

        inner = area.width - 2
        _put(window, top, left + 1 + _centre(self.title, inner), self.title[:inner])
        _put(window, bottom, left + 1 + _centre(self.instructions, inner), self.instructions[:inner])
        counter = self.counter[:inner]
        _put(window, bottom, right - len(counter), counter)
        _put(window, top + area.height // 2, left + 1 + _centre(self.body, inner), self.body[:inner])


def _centre(text: str, width: int) -> int:
    return max(0, (width - len(text)) // 2)


def _put(window, y: int, x: int, text: str) -> None:
    # Writing the bottom-right cell moves the cursor off screen and raises.
    try:
        window.addstr(y, x, text)
    except curses.error:
        pass


class CursesTerminal:
    """Owns the terminal while the timer runs.

    Use as a context manager so the terminal is restored on every exit path::

        with CursesTerminal() as terminal:
            terminal.draw(panel.paint)
    """

    def __init__(self) -> None:
        self._screen = None

    def init(self) -> CursesTerminal:
        try:
            self._screen = curses.initscr()
            curses.noecho()
            curses.cbreak()
            self._screen.keypad(True)
        except curses.error as exc:
            self.restore()
            raise TerminalError(f"could not initialise terminal: {exc}") from exc
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        logger.debug("Terminal initialised")
        return self

    def restore(self) -> None:
        if self._screen is None:
            return
        screen, self._screen = self._screen, None
        try:
            screen.keypad(False)
            curses.nocbreak()
            curses.echo()
        finally:
            curses.endwin()
        logger.debug("Terminal restored")

    def __enter__(self) -> CursesTerminal:
        return self.init()

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.restore()

    def draw(self, render: Callable[[object, Rect], None]) -> None:
        """Clear the screen, let *render* paint the full area, then refresh."""
        screen = self._require_screen()
        try:
            screen.erase()
            rows, cols = screen.getmaxyx()
            render(screen, Rect(0, 0, cols, rows))
            screen.refresh()
        except curses.error as exc:
            raise TerminalError(f"could not draw: {exc}") from exc

    def poll(self, timeout: float) -> KeyEvent | None:
        """Wait up to *timeout* seconds for one key press."""
        screen = self._require_screen()
        screen.timeout(max(0, int(timeout * 1000)))
        try:
            key = screen.get_wch()
        except curses.error:
            # No input before the timeout.
            return None
        if isinstance(key, int):
            if key == curses.KEY_RESIZE:
                return None
            name = curses.keyname(key).decode("ascii", "replace")
            return KeyEvent(name)
        return KeyEvent(key)

    def _require_screen(self):
        if self._screen is None:
            raise TerminalError("terminal is not initialised")
        return self._screen
