"""Ring segmenter: remaining minutes -> concentric base-60 rings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

_RING_MINUTES = 60


class RadiusTier(Enum):
    """Concentric ring position, outermost first."""

    OUTER = "outer"
    MIDDLE = "middle"
    INNER = "inner"


@dataclass(frozen=True)
class RingSegment:
    """One ring of the dial.

    Attributes:
        tier:    Which ring this is.
        value:   Minutes shown by this ring, in (0, 60].
        is_full: True iff ``value == 60``.
    """

    tier: RadiusTier
    value: float
    is_full: bool


def segments(remaining: float) -> list[RingSegment]:
    """Decompose *remaining* minutes into at most three rings.

    The outer ring carries the sub-hour remainder; every ring behind it is a
    full hour. An exact multiple of 60 shows a full outer ring, never an empty
    one.
    """
    if remaining <= 0:
        return []
    if remaining <= _RING_MINUTES:
        return [RingSegment(RadiusTier.OUTER, remaining, remaining == _RING_MINUTES)]

    outer = remaining % _RING_MINUTES or _RING_MINUTES
    rings = [
        RingSegment(RadiusTier.OUTER, outer, outer == _RING_MINUTES),
        RingSegment(RadiusTier.MIDDLE, _RING_MINUTES, True),
    ]
    if remaining > 2 * _RING_MINUTES:
        rings.append(RingSegment(RadiusTier.INNER, _RING_MINUTES, True))
    return rings
