"""Dial composition: everything a renderer needs to paint one frame.

Combines the ring segmenter, the angle resolver, and the color helpers into
a flat list of :class:`Wedge` descriptions, plus the static clock face. No
drawing happens here; the output is plain geometry.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from timerpie.core.angles import Angles, label_position, moving_edge, timer_end_angle, wedge_angles
from timerpie.core.color import darken
from timerpie.core.modes import Mode
from timerpie.core.rings import RadiusTier, RingSegment, segments
from timerpie.settings import (
    CENTER,
    DARKEN_DIGITAL_OUTER,
    DARKEN_INNER,
    DARKEN_MIDDLE,
    DEFAULT_COLOR,
    LABEL_OFFSET,
    PREVIEW_DIM,
    RADIUS,
    RING_GAP,
    RING_ZONE_OUTER,
    RING_ZONE_WIDTH,
    TICK_MAJOR_LENGTH,
    TICK_MINOR_LENGTH,
    TICK_OUTER_OFFSET,
)

ANALOG = "analog"
DIGITAL = "digital"

# numeral spacing -> font size
_LABEL_FONT_SIZES = {15: 20, 5: 16}


@dataclass(frozen=True)
class DialConfig:
    """User preferences that shape the dial.

    Attributes:
        color:   Base ``#rrggbb`` color of the wedges.
        mode:    Directional mode.
        marks:   Numeral spacing on the face: 5, 15, or 0 for none.
        display: ``"analog"`` pie wedges or ``"digital"`` thin rings.
    """

    color: str = DEFAULT_COLOR
    mode: Mode = Mode.CCW
    marks: int = 5
    display: str = ANALOG


@dataclass(frozen=True)
class Wedge:
    """One painted ring.

    Attributes:
        segment:      Ring segment being drawn.
        radius:       Outer radius.
        inner_radius: Inner radius; 0 for a pie wedge.
        angles:       Start and end of the filled arc.
        edge:         Angle of the accent line at the live boundary.
        color:        Fill color.
        opacity:      1.0 while running, dimmed while previewing.
    """

    segment: RingSegment
    radius: float
    inner_radius: float
    angles: Angles
    edge: float
    color: str
    opacity: float


@dataclass(frozen=True)
class Tick:
    """A clock-face tick mark from (x1, y1) on the rim to (x2, y2) inward."""

    minute: int
    x1: float
    y1: float
    x2: float
    y2: float
    width: int


@dataclass(frozen=True)
class Label:
    """A clock-face numeral."""

    minute: int
    x: float
    y: float
    font_size: int


def compose(
    remaining: float,
    config: DialConfig,
    target_clock_minute: Optional[float],
    now: datetime,
    running: bool,
) -> list[Wedge]:
    """Describe every ring for *remaining* minutes.

    Full rings share the seam of the outermost ring so the whole stack turns
    together.
    """
    rings = segments(remaining)
    if not rings:
        return []

    mode = config.mode
    seam = timer_end_angle(rings[0], mode, now)
    opacity = 1.0 if running else PREVIEW_DIM
    digital = config.display == DIGITAL
    ring_width = (RING_ZONE_WIDTH - (len(rings) - 1) * RING_GAP) / len(rings)

    wedges = []
    for index, ring in enumerate(rings):
        if digital:
            radius = RING_ZONE_OUTER - index * (ring_width + RING_GAP)
            inner_radius = radius - ring_width
        else:
            radius = RADIUS[ring.tier.value]
            inner_radius = 0.0

        angles = wedge_angles(ring, mode, target_clock_minute, now, timer_end=seam)
        color = darken(config.color, _shade(ring, index, digital)) if ring.is_full else config.color
        wedges.append(
            Wedge(
                segment=ring,
                radius=radius,
                inner_radius=inner_radius,
                angles=angles,
                edge=moving_edge(ring, angles, mode),
                color=color,
                opacity=opacity,
            )
        )
    return wedges


def _shade(ring: RingSegment, index: int, digital: bool) -> float:
    if digital:
        return (DARKEN_DIGITAL_OUTER, DARKEN_MIDDLE, DARKEN_INNER)[index]
    return DARKEN_INNER if ring.tier is RadiusTier.INNER else DARKEN_MIDDLE


def clock_face(marks: int, mode: Mode) -> tuple[list[Tick], list[Label]]:
    """Return the 60 tick marks and the numerals for the chosen *marks*.

    Quarter-hour ticks are widest, five-minute ticks are long, the rest are
    short and thin. Numerals are placed every 15 or 5 minutes, or omitted.
    """
    outer = RADIUS["outer"] + TICK_OUTER_OFFSET
    ticks = []
    for minute in range(60):
        rad = math.radians(minute * 6 - 90)
        major = minute % 5 == 0
        inner = outer - (TICK_MAJOR_LENGTH if major else TICK_MINOR_LENGTH)
        if minute % 15 == 0:
            width = 5
        else:
            width = 3 if major else 1
        ticks.append(
            Tick(
                minute=minute,
                x1=CENTER + outer * math.cos(rad),
                y1=CENTER + outer * math.sin(rad),
                x2=CENTER + inner * math.cos(rad),
                y2=CENTER + inner * math.sin(rad),
                width=width,
            )
        )

    labels = []
    font_size = _LABEL_FONT_SIZES.get(marks)
    if font_size is not None:
        for minute in range(marks, 61, marks):
            x, y = label_position(minute, mode, CENTER, RADIUS["outer"] + LABEL_OFFSET)
            labels.append(Label(minute, x, y, font_size))
    return ticks, labels
