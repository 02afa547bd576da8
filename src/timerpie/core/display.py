"""Text labels for the digital readout and the window title."""

from __future__ import annotations

import math
from datetime import timedelta

from timerpie.core.timer import TimerPhase
from timerpie.settings import APP_TITLE

_COUNTING_PHASES = frozenset({TimerPhase.RUNNING, TimerPhase.PAUSED})


def format_remaining(minutes: float) -> str:
    """Format *minutes* as ``M:SS``, rounding to the nearest second.

    Returns an empty string once nothing remains.
    """
    if minutes <= 0:
        return ""
    whole = math.floor(minutes)
    seconds = math.floor((minutes - whole) * 60 + 0.5)
    if seconds >= 60:
        whole, seconds = whole + 1, 0
    return f"{whole}:{seconds:02d}"


def format_overtime(overtime: timedelta) -> str:
    """Format time past the deadline as ``-M:SS``."""
    total = int(overtime.total_seconds())
    return f"-{total // 60}:{total % 60:02d}"


def window_title(phase: TimerPhase, remaining: float) -> str:
    """Title showing the countdown while a run is active."""
    if phase in _COUNTING_PHASES:
        return f"{format_remaining(remaining) or '0:00'} - {APP_TITLE}"
    return APP_TITLE
