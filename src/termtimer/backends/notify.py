"""Desktop notifications via plyer."""

from __future__ import annotations

import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Protocol

from plyer import notification

logger = logging.getLogger(__name__)

_ids = itertools.count(1)


class NotificationError(Exception):
    """Raised when the desktop notification service fails to show a notification."""


@dataclass(frozen=True)
class Timeout:
    """How long a notification stays on screen.

    ``seconds`` of ``None`` leaves the choice to the notification server, and
    ``0`` asks it to keep the notification until the user dismisses it.
    """

    seconds: float | None = None

    @classmethod
    def after(cls, seconds: float) -> Timeout:
        if seconds <= 0:
            raise ValueError(f"timeout must be positive, got {seconds}")
        return cls(seconds)


Timeout.DEFAULT = Timeout()
Timeout.NEVER = Timeout(0)

# plyer's own default when no timeout is passed.
_PLYER_DEFAULT_TIMEOUT = 10


@dataclass(frozen=True)
class NotificationRequest:
    appname: str
    summary: str
    body: str
    timeout: Timeout = Timeout.DEFAULT
    actions: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class NotificationHandle:
    """Opaque reference to a notification that has been shown."""

    id: int
    request: NotificationRequest
    shown_at: float = field(default_factory=time.monotonic)


class Notifier(Protocol):
    def show(self, request: NotificationRequest) -> NotificationHandle: ...


class PlyerNotifier:
    """Shows notifications through ``plyer.notification``.

    plyer has no action API, so ``request.actions`` is only recorded on the
    returned handle.
    """

    def show(self, request: NotificationRequest) -> NotificationHandle:
        timeout = request.timeout.seconds
        if timeout is None:
            timeout = _PLYER_DEFAULT_TIMEOUT
        try:
            notification.notify(
                title=request.summary,
                message=request.body,
                app_name=request.appname,
                timeout=timeout,
            )
        except Exception as exc:
            logger.error("Failed to show notification %r: %s", request.summary, exc)
            raise NotificationError(f"could not show notification: {exc}") from exc

        handle = NotificationHandle(id=next(_ids), request=request)
        logger.debug("Shown notification %d: %s", handle.id, request.summary)
        return handle
