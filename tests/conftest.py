"""Shared fixtures: fake notifier and fake terminal."""

from __future__ import annotations

from collections import deque

import pytest

from termtimer.backends.notify import NotificationError, NotificationHandle, NotificationRequest
from termtimer.backends.terminal import KeyEvent, Rect


class FakeNotifier:
    """Records every request; raises ``NotificationError`` while ``failures`` > 0."""

    def __init__(self) -> None:
        self.requests: list[NotificationRequest] = []
        self.failures = 0

    def show(self, request: NotificationRequest) -> NotificationHandle:
        if self.failures > 0:
            self.failures -= 1
            raise NotificationError("notification service unavailable")
        self.requests.append(request)
        return NotificationHandle(id=len(self.requests), request=request, shown_at=0.0)


class FakeWindow:
    """Collects the strings a panel writes."""

    def __init__(self) -> None:
        self.writes: list[tuple[int, int, str]] = []

    def addstr(self, y: int, x: int, text: str) -> None:
        self.writes.append((y, x, text))

    def text(self) -> str:
        return "\n".join(text for _, _, text in self.writes)


class FakeTerminal:
    """Replays scripted key events and records drawn frames.

    Each entry in ``keys`` is returned by one ``poll`` call; ``None`` means
    the poll timed out.  Once the script runs out, ``q`` is returned.
    """

    def __init__(self, keys=()) -> None:
        self.keys = deque(keys)
        self.frames: list = []
        self.polls: list[float] = []
        self.calls: list[str] = []

    def draw(self, render) -> None:
        self.calls.append("draw")
        window = FakeWindow()
        render(window, Rect(0, 0, 80, 10))
        self.frames.append(window)

    def poll(self, timeout: float):
        self.calls.append("poll")
        self.polls.append(timeout)
        if self.keys:
            return self.keys.popleft()
        return KeyEvent("q")


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def make_terminal():
    """Return a factory building a :class:`FakeTerminal` from scripted keys."""
    return FakeTerminal
