"""Color helpers used to shade the inner rings of the dial."""

from functools import lru_cache


@lru_cache(maxsize=None)
def darken(color: str, factor: float) -> str:
    """Return *color* with every channel scaled by *factor*.

    Args:
        color:  ``#rrggbb`` hex string.
        factor: Multiplier in [0.0, 1.0]. 1.0 leaves the color unchanged.

    Returns:
        A new ``#rrggbb`` string, channels floored and zero padded.
    """
    channels = (int(color[i:i + 2], 16) for i in (1, 3, 5))
    return "#" + "".join(f"{int(c * factor):02x}" for c in channels)
