"""Background watchdog: deadline detection that does not depend on frames.

The render loop can stall (a suspended terminal, a throttled host), so the
timer also arms this watchdog with its absolute end time. A daemon thread
polls the wall clock and posts ``callback(deadline)`` once the deadline has
passed. The callback is a message, not a state write: the receiver decides
whether the deadline it carries is still the one it cares about.

Usage:
    watchdog = Watchdog(timer.on_watchdog_complete)
    watchdog.start()
    watchdog.arm(utc_now() + timedelta(minutes=5))
    ...
    watchdog.stop()
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from timerpie.core.clock import utc_now
from timerpie.settings import WATCHDOG_INTERVAL_S

logger = logging.getLogger(__name__)


class Watchdog:
    """Polls an armed deadline on its own thread.

    Attributes:
        interval: Seconds between polls.
    """

    def __init__(
        self,
        callback: Callable[[datetime], None],
        interval: float = WATCHDOG_INTERVAL_S,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.interval = interval
        self._callback = callback
        self._clock = clock
        self._deadline: Optional[datetime] = None
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    # -- arming --------------------------------------------------------------

    def arm(self, deadline: datetime) -> None:
        """Watch for *deadline*, replacing any earlier one."""
        with self._lock:
            self._deadline = deadline
        logger.debug(f"Watchdog armed for {deadline.isoformat()}")

    def disarm(self) -> None:
        """Forget the armed deadline. Takes effect before the next poll."""
        with self._lock:
            self._deadline = None

    @property
    def deadline(self) -> Optional[datetime]:
        """The armed deadline, or ``None`` when disarmed."""
        with self._lock:
            return self._deadline

    def check(self, now: Optional[datetime] = None) -> bool:
        """Poll once. Returns True if a completion message was posted."""
        if now is None:
            now = self._clock()
        with self._lock:
            deadline = self._deadline
            if deadline is None or now < deadline:
                return False
            self._deadline = None

        logger.debug(f"Watchdog deadline {deadline.isoformat()} reached")
        self._callback(deadline)
        return True

    # -- thread lifecycle ----------------------------------------------------

    def start(self) -> None:
        """Start the polling thread if it is not already running."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="timerpie-watchdog", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the polling thread and wait for it to exit."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            try:
                self.check()
            except Exception:
                logger.exception("Watchdog completion handler failed")
