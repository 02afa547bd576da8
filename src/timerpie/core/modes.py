"""Directional modes of the dial."""

from enum import Enum


class Mode(Enum):
    """How the dial relates remaining time to the clock face.

    CCW and CW sweep an elapsed duration from 12 o'clock; END pins the wedge
    to an absolute minute on the wall clock.
    """

    CCW = "ccw"
    CW = "cw"
    END = "end"
