"""Input parser: raw user text -> TimeSpec.

CCW and CW modes take a plain number of minutes. END mode takes a wall-clock
target in one of three shapes: ``h:m``, ``hhmm`` (3-4 digits) or a bare
minute-of-hour (1-2 digits). Every END result is rounded *up* to whole minutes
so the dial never stops short of the requested clock time.

Failures are reported as ``None``; callers re-prompt.

``now`` is either naive local time or carries a ``zoneinfo`` zone. Targets are
built on the wall clock and measured between UTC instants, so a DST change
between now and the target is counted in real minutes.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import datetime, timedelta

from timerpie.core.clock import to_instant
from timerpie.core.modes import Mode
from timerpie.settings import MAX_INPUT_LENGTH, MAX_MINUTES

_CLOCK_RE = re.compile(r"(\d{1,2}):(\d{1,2})", re.ASCII)
_DIGITS_RE = re.compile(r"\d+", re.ASCII)
_DECIMAL_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+", re.ASCII)


@dataclass(frozen=True)
class TimeSpec:
    """A parsed timer request.

    Attributes:
        total_minutes:       Duration in minutes, in (0, max_minutes].
        target_clock_minute: Minute of the hour the timer ends on. Only set
                             for END mode input.
    """

    total_minutes: float
    target_clock_minute: float | None = None


def parse(
    text: str,
    mode: Mode,
    now: datetime,
    max_minutes: float = MAX_MINUTES,
) -> TimeSpec | None:
    """Parse *text* for *mode* relative to *now*.

    Returns ``None`` for empty, oversized, or malformed input.
    """
    if not text or len(text) > MAX_INPUT_LENGTH:
        return None
    text = text.strip()
    if not text:
        return None

    if mode is Mode.END:
        return _parse_end(text, now, max_minutes)
    return _parse_duration(text, max_minutes)


def end_clock_label(total_minutes: float, now: datetime) -> str:
    """Return the ``h:mm`` wall-clock time a timer started at *now* ends at."""
    end = to_instant(now) + timedelta(minutes=total_minutes)
    end = end.astimezone(now.tzinfo)
    return f"{end.hour}:{end.minute:02d}"


# -- CCW / CW ----------------------------------------------------------------


def _parse_duration(text: str, max_minutes: float) -> TimeSpec | None:
    # Plain decimals only: float() also takes "1_5", "1e2", "inf" and "nan".
    if not _DECIMAL_RE.fullmatch(text):
        return None
    minutes = float(text)
    if minutes <= 0:
        return None
    return TimeSpec(min(minutes, max_minutes))


# -- END ---------------------------------------------------------------------


def _parse_end(text: str, now: datetime, max_minutes: float) -> TimeSpec | None:
    if ":" in text:
        match = _CLOCK_RE.fullmatch(text)
        if match is None:
            return None
        hour, minute = int(match.group(1)), int(match.group(2))
        if hour > 23 or minute > 59:
            return None
        return _spec_for(_next_at(now, hour, minute), now, minute, max_minutes)

    if not _DIGITS_RE.fullmatch(text):
        return None

    if len(text) in (3, 4):
        number = int(text)
        hour, minute = divmod(number, 100)
        if hour > 23 or minute > 59:
            return None
        if hour < 12:
            return _resolve_am_pm(now, hour, minute, max_minutes)
        return _spec_for(_next_at(now, hour, minute), now, minute, max_minutes)

    if len(text) <= 2:
        minute = int(text)
        if minute > 59:
            return None
        target = now.replace(minute=minute, second=0, microsecond=0)
        if target <= now:
            target += timedelta(hours=1)
        return _spec_for(target, now, minute, max_minutes)

    return None


def _resolve_am_pm(
    now: datetime, hour: int, minute: int, max_minutes: float
) -> TimeSpec:
    """Pick between ``hh:mm`` and ``hh+12:mm`` for an ambiguous morning hour.

    A candidate inside *max_minutes* wins; with both or neither inside, the
    nearer one wins and is capped.
    """
    am = _minutes_until(_next_at(now, hour, minute), now)
    pm = _minutes_until(_next_at(now, hour + 12, minute), now)

    am_ok = am <= max_minutes
    pm_ok = pm <= max_minutes
    if am_ok and not pm_ok:
        total = am
    elif pm_ok and not am_ok:
        total = pm
    else:
        total = min(am, pm)
    return TimeSpec(min(total, max_minutes), minute)


def _next_at(now: datetime, hour: int, minute: int) -> datetime:
    """Next instant strictly after *now* that reads ``hour:minute``."""
    target = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if target <= now:
        target += timedelta(days=1)
    return target


def _minutes_until(target: datetime, now: datetime) -> int:
    return math.ceil((to_instant(target) - to_instant(now)).total_seconds() / 60)


def _spec_for(
    target: datetime, now: datetime, minute: int, max_minutes: float
) -> TimeSpec:
    return TimeSpec(min(_minutes_until(target, now), max_minutes), minute)
