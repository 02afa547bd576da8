"""Clock sources.

Run timing is anchored on aware UTC instants so elapsed time is immune to
daylight-saving shifts. Wall-clock positions on the dial are derived from
those instants by converting to local time where they are needed.
"""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_instant(moment: datetime) -> datetime:
    """Return *moment* as an aware UTC datetime.

    Naive values are read as system local time, so the local zone's DST
    rules apply. Aware values keep their own zone's offset.
    """
    return moment.astimezone(timezone.utc)
