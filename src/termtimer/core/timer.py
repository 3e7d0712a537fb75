"""Timer core: a countdown state machine that notifies on completion."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from termtimer.backends.notify import (
    NotificationHandle,
    NotificationRequest,
    Notifier,
    Timeout,
)

logger = logging.getLogger(__name__)

COMPLETION_SUMMARY = "Timer Finished"
_DISMISS_ACTION = ("dismiss", "Dismiss")


class InvalidStateError(Exception):
    """Raised when an invalid state transition is attempted."""


# -- states ------------------------------------------------------------------


@dataclass(frozen=True)
class TimerState:
    """Base class of the four timer states."""

    name = "unknown"


@dataclass(frozen=True)
class Off(TimerState):
    name = "off"


@dataclass(frozen=True)
class Running(TimerState):
    completion: float
    name = "running"


@dataclass(frozen=True)
class Paused(TimerState):
    remaining: float
    name = "paused"


@dataclass(frozen=True)
class Finished(TimerState):
    completed: float
    notification: NotificationHandle
    name = "finished"


def _format_seconds(seconds: float) -> str:
    return f"{seconds:.2f}s"


def _unhandled(state: TimerState) -> AssertionError:
    return AssertionError(f"unhandled timer state: {state!r}")


class Timer:
    """A countdown timer driven by an external clock tick.

    All instants are ``time.monotonic()`` values.  ``pause``, ``resume``,
    ``start`` and ``restart`` read the clock themselves; ``check_completion``
    and ``render_text`` take ``now`` from the caller so that one loop
    iteration sees a single instant.
    """

    def __init__(self, duration: float, label: str, notifier: Notifier, appname: str = "termtimer") -> None:
        if duration <= 0:
            raise ValueError(f"duration must be positive, got {duration}")
        self._duration = float(duration)
        self._label = label
        self._notifier = notifier
        self._appname = appname
        self._state: TimerState = Off()

    @classmethod
    def started(
        cls,
        duration: float,
        label: str,
        notifier: Notifier,
        now: float | None = None,
        appname: str = "termtimer",
    ) -> Timer:
        """Return a timer already counting down from *now*."""
        timer = cls(duration, label, notifier, appname=appname)
        timer._begin_running(time.monotonic() if now is None else now, timer._duration)
        return timer

    # -- properties ----------------------------------------------------------

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def label(self) -> str:
        return self._label

    @property
    def state(self) -> TimerState:
        return self._state

    # -- transitions ---------------------------------------------------------

    def start(self) -> None:
        """Start counting down the full duration.  Valid only from Off."""
        self._require_state("start", (Off,))
        self._begin_running(time.monotonic(), self._duration)

    def pause(self) -> None:
        """Freeze the remaining time.  Valid only while Running."""
        state = self._require_state("pause", (Running,))
        remaining = max(state.completion - time.monotonic(), 0.0)
        self._state = Paused(remaining=remaining)
        logger.debug("Paused %r with %.2fs remaining", self._label, remaining)

    def resume(self) -> None:
        """Continue a paused countdown.  Valid only while Paused."""
        state = self._require_state("resume", (Paused,))
        self._begin_running(time.monotonic(), state.remaining)

    def toggle_pause(self) -> None:
        """Pause a running timer or resume a paused one; otherwise do nothing."""
        if isinstance(self._state, Running):
            self.pause()
        elif isinstance(self._state, Paused):
            self.resume()

    def restart(self) -> None:
        """Count down the full duration again.

        Valid from Running, Paused or Finished.  A notification shown by a
        previous completion is left on screen.
        """
        self._require_state("restart", (Running, Paused, Finished))
        self._begin_running(time.monotonic(), self._duration)

    def check_completion(self, now: float) -> None:
        """Move a running timer to Finished once *now* reaches its completion.

        Shows the completion notification first; if that raises, the timer
        stays Running and the next call tries again.
        """
        state = self._state
        if not isinstance(state, Running) or now < state.completion:
            return

        handle = self._notifier.show(
            NotificationRequest(
                appname=self._appname,
                summary=COMPLETION_SUMMARY,
                body=f"{self._label} is done.",
                timeout=Timeout.NEVER,
                actions=(_DISMISS_ACTION,),
            )
        )
        self._state = Finished(completed=state.completion, notification=handle)
        logger.info("Timer %r finished", self._label)

    # -- queries -------------------------------------------------------------

    def remaining(self, now: float) -> float:
        """Return the seconds left at *now*, never negative."""
        state = self._state
        if isinstance(state, Off):
            return self._duration
        if isinstance(state, Running):
            return max(state.completion - now, 0.0)
        if isinstance(state, Paused):
            return state.remaining
        if isinstance(state, Finished):
            return 0.0
        raise _unhandled(state)

    def render_text(self, now: float) -> str:
        """Return the text describing the timer at *now*."""
        state = self._state
        if isinstance(state, Off):
            return f"Stopped ({_format_seconds(self._duration)})"
        if isinstance(state, Running):
            return f"{_format_seconds(self.remaining(now))} remaining"
        if isinstance(state, Paused):
            return f"{_format_seconds(state.remaining)} remaining [Paused]"
        if isinstance(state, Finished):
            return f"Finished! ({_format_seconds(now - state.completed)} ago)"
        raise _unhandled(state)

    # -- private helpers -----------------------------------------------------

    def _require_state(self, method: str, valid: tuple[type[TimerState], ...]):
        """Return the current state, or raise ``InvalidStateError`` if it is not one of *valid*."""
        if not isinstance(self._state, valid):
            raise InvalidStateError(f"{method}() is not valid from {self._state.name} state")
        return self._state

    def _begin_running(self, now: float, seconds: float) -> None:
        self._state = Running(completion=now + seconds)
        logger.debug("Timer %r running, %.2fs to go", self._label, seconds)
