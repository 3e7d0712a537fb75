"""Application settings."""

from __future__ import annotations

from dataclasses import dataclass

_DEFAULT_DURATION = 5.0
_DEFAULT_POLL_INTERVAL = 0.1


@dataclass(frozen=True)
class Settings:
    """Immutable configuration for one run of the application.

    There is no config file and no environment lookup: the defaults below are
    what the ``termtimer`` command runs with.
    """

    duration: float = _DEFAULT_DURATION
    label: str = "Timer"
    poll_interval: float = _DEFAULT_POLL_INTERVAL
    app_name: str = "termtimer"
    title: str = " Countdown Timer "

    def __post_init__(self) -> None:
        if self.duration <= 0:
            raise ValueError(f"duration must be positive, got {self.duration}")
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {self.poll_interval}")
