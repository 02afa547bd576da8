"""Angle resolver for dial wedges.

Angles are in degrees, -90 is 12 o'clock and positive angles turn clockwise,
matching screen coordinates where y grows downward.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime

from timerpie.core.modes import Mode
from timerpie.core.rings import RingSegment

_TOP = -90.0
_DEGREES_PER_MINUTE = 6.0


@dataclass(frozen=True)
class Angles:
    """Start and end of a wedge, drawn clockwise from *start* to *end*."""

    start: float
    end: float


def clock_minute(now: datetime) -> float:
    """Current minute of the hour with seconds as a fraction.

    Aware datetimes are read on the local wall clock; naive ones are taken
    as local already.
    """
    if now.tzinfo is not None:
        now = now.astimezone()
    return now.minute + now.second / 60


def _minute_angle(minute: float) -> float:
    return minute * _DEGREES_PER_MINUTE + _TOP


def timer_end_angle(segment: RingSegment, mode: Mode, now: datetime) -> float:
    """Angle of the live boundary for *segment*.

    Full rings are drawn as a complete turn starting here, so every ring's
    seam lines up with the moving edge of the outer wedge.
    """
    if mode is Mode.END:
        return _minute_angle(clock_minute(now))
    if mode is Mode.CW:
        return _minute_angle(60 - segment.value)
    return _minute_angle(segment.value)


def wedge_angles(
    segment: RingSegment,
    mode: Mode,
    target_clock_minute: float | None,
    now: datetime,
    timer_end: float | None = None,
) -> Angles:
    """Resolve the start/end angles of *segment*.

    Args:
        segment:             Ring to resolve.
        mode:                Directional mode of the dial.
        target_clock_minute: Minute of the hour the timer ends on. Required
                             for partial rings in END mode.
        now:                 Current wall-clock time. END mode reads it on
                             every call; nothing is cached between frames.
        timer_end:           Seam angle for full rings. Defaults to the
                             segment's own :func:`timer_end_angle`.
    """
    if segment.is_full:
        if timer_end is None:
            timer_end = timer_end_angle(segment, mode, now)
        return Angles(timer_end, timer_end + 360)

    if mode is Mode.END:
        start = _minute_angle(clock_minute(now))
        end = _minute_angle(target_clock_minute or 0.0)
        if end < start:
            end += 360
        return Angles(start, end)
    if mode is Mode.CW:
        return Angles(_minute_angle(60 - segment.value), _TOP)
    return Angles(_TOP, _minute_angle(segment.value))


def moving_edge(segment: RingSegment, angles: Angles, mode: Mode) -> float:
    """Angle of the accent line drawn at the live boundary of a wedge."""
    if not segment.is_full and mode is Mode.CCW:
        return angles.end
    return angles.start


def label_position(
    minute: float, mode: Mode, center: float, radius: float
) -> tuple[float, float]:
    """Return the ``(x, y)`` position of the dial numeral for *minute*.

    In CW mode the face is mirrored so numerals count up anticlockwise.
    """
    position = minute % 60
    if mode is Mode.CW:
        position = (60 - position) % 60
    rad = math.radians(_minute_angle(position))
    return (center + radius * math.cos(rad), center + radius * math.sin(rad))
