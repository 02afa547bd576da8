"""Timer core: a wall-clock anchored countdown state machine."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Optional

from timerpie.core.angles import clock_minute
from timerpie.core.clock import utc_now
from timerpie.core.modes import Mode
from timerpie.core.parser import TimeSpec
from timerpie.core.watchdog import Watchdog
from timerpie.settings import WATCHDOG_INTERVAL_S

logger = logging.getLogger(__name__)


class TimerPhase(Enum):
    """Possible phases of the timer."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


@dataclass(frozen=True)
class TimerState:
    """Read-only view of the timer handed to render collaborators."""

    phase: TimerPhase
    mode: Mode
    total_minutes: float
    remaining: float
    start_timestamp: Optional[datetime]
    target_clock_minute: Optional[float]
    completion_timestamp: Optional[datetime]
    overtime: timedelta


CompletionListener = Callable[[TimerState], None]

_VALID_START_PHASES = frozenset({TimerPhase.IDLE, TimerPhase.COMPLETED})
_ZERO = timedelta(0)


class Timer:
    """Countdown timer anchored to wall-clock time.

    Remaining time is always derived from ``now - start_timestamp``, never
    accumulated per frame, so a stalled render loop loses no time. Completion
    is observed by whichever comes first: :meth:`tick` from the render loop
    or :meth:`on_watchdog_complete` from the background :class:`Watchdog`.
    Both paths are idempotent and the completed event fires once per run.

    Invalid transitions are silent no-ops: they come from overlapping UI
    triggers, not from bugs.
    """

    def __init__(
        self,
        mode: Mode = Mode.CCW,
        watchdog_interval: float = WATCHDOG_INTERVAL_S,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.mode: Mode = mode
        self._clock = clock
        self._lock = threading.RLock()
        self._phase: TimerPhase = TimerPhase.IDLE
        self._total_minutes: float = 0.0
        self._start: Optional[datetime] = None
        self._deadline: Optional[datetime] = None
        self._target_clock_minute: Optional[float] = None
        self._remaining_at_pause: float = 0.0
        self._completed_at: Optional[datetime] = None
        self._listeners: list[CompletionListener] = []
        self.watchdog = Watchdog(self.on_watchdog_complete, watchdog_interval, clock)

    # -- public interface ----------------------------------------------------

    @property
    def phase(self) -> TimerPhase:
        return self._phase

    @property
    def total_minutes(self) -> float:
        return self._total_minutes

    @property
    def start_timestamp(self) -> Optional[datetime]:
        return self._start

    @property
    def target_clock_minute(self) -> Optional[float]:
        return self._target_clock_minute

    @property
    def completion_timestamp(self) -> Optional[datetime]:
        return self._completed_at

    @property
    def end_timestamp(self) -> Optional[datetime]:
        """Absolute deadline of the current run, ``None`` unless RUNNING."""
        if self._phase != TimerPhase.RUNNING:
            return None
        return self._deadline

    def add_listener(self, listener: CompletionListener) -> None:
        """Call *listener* with a snapshot each time a run completes."""
        self._listeners.append(listener)

    def start(
        self,
        spec: TimeSpec,
        mode: Optional[Mode] = None,
        now: Optional[datetime] = None,
    ) -> None:
        """Start a run of ``spec.total_minutes``.

        Valid from IDLE or COMPLETED; ignored otherwise so a double trigger
        cannot spawn a second run.
        """
        if spec.total_minutes <= 0:
            raise ValueError(f"total_minutes must be positive, got {spec.total_minutes}")
        now = now or self._clock()
        with self._lock:
            if self._phase not in _VALID_START_PHASES:
                logger.debug(f"start() ignored in {self._phase.value} phase")
                return
            if mode is not None:
                self.mode = mode

            self._total_minutes = spec.total_minutes
            self._completed_at = None
            self._start = now
            if spec.target_clock_minute is not None:
                self._target_clock_minute = spec.target_clock_minute
            else:
                end = now + timedelta(minutes=spec.total_minutes)
                self._target_clock_minute = clock_minute(end)
            self._begin_running()
        logger.info(f"Timer started: {spec.total_minutes:g} min in {self.mode.value} mode")

    def pause(self, now: Optional[datetime] = None) -> None:
        """Freeze the remaining time. Valid only while RUNNING outside END mode."""
        now = now or self._clock()
        with self._lock:
            if self.mode is Mode.END:
                logger.debug("pause() ignored in end mode")
                return
            # A run that has already reached zero completes instead of pausing.
            remaining = self.tick(now)
            if self._phase != TimerPhase.RUNNING:
                logger.debug(f"pause() ignored in {self._phase.value} phase")
                return
            self._remaining_at_pause = remaining
            self._phase = TimerPhase.PAUSED
            self.watchdog.disarm()
        logger.info(f"Timer paused with {remaining:.2f} min remaining")

    def resume(self, now: Optional[datetime] = None) -> None:
        """Continue a paused run from the frozen remaining time."""
        now = now or self._clock()
        with self._lock:
            if self._phase != TimerPhase.PAUSED:
                logger.debug(f"resume() ignored in {self._phase.value} phase")
                return
            elapsed = self._total_minutes - self._remaining_at_pause
            self._start = now - timedelta(minutes=elapsed)
            self._begin_running()
        logger.info(f"Timer resumed with {self._remaining_at_pause:.2f} min remaining")

    def tick(self, now: Optional[datetime] = None) -> float:
        """Recompute the remaining minutes, completing the run at zero."""
        now = now or self._clock()
        with self._lock:
            remaining = self.remaining(now)
            fired = self._phase == TimerPhase.RUNNING and remaining <= 0 and self._complete()
        if fired:
            self._notify(now)
        return remaining

    def on_watchdog_complete(
        self,
        deadline: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> None:
        """Handle a completion message from the watchdog.

        Ignored unless RUNNING, and ignored when *deadline* belongs to a run
        that has since been paused, reset or restarted.
        """
        now = now or self._clock()
        with self._lock:
            if self._phase != TimerPhase.RUNNING:
                logger.debug(f"Watchdog completion ignored in {self._phase.value} phase")
                return
            if deadline is not None and deadline != self.end_timestamp:
                logger.debug("Watchdog completion ignored for a superseded deadline")
                return
            fired = self._complete()
        if fired:
            self._notify(now)

    def reset(self) -> None:
        """Cancel the current run from any phase and return to IDLE."""
        with self._lock:
            self.watchdog.disarm()
            previous = self._phase
            self._phase = TimerPhase.IDLE
            self._start = None
            self._deadline = None
            self._completed_at = None
            self._remaining_at_pause = 0.0
        if previous != TimerPhase.IDLE:
            logger.info(f"Timer reset from {previous.value} phase")

    def remaining(self, now: Optional[datetime] = None) -> float:
        """Return the remaining minutes without changing phase.

        Frozen while PAUSED; 0.0 while IDLE or COMPLETED, and 0.0 once the
        deadline has passed. In END mode the deadline is the requested clock
        time, which can fall up to a minute before ``start + total``.
        """
        now = now or self._clock()
        with self._lock:
            if self._phase == TimerPhase.RUNNING and self._start is not None:
                if now >= self._deadline:
                    return 0.0
                elapsed = (now - self._start).total_seconds() / 60
                return max(0.0, self._total_minutes - elapsed)
            if self._phase == TimerPhase.PAUSED:
                return self._remaining_at_pause
            return 0.0

    def overtime(self, now: Optional[datetime] = None) -> timedelta:
        """Time elapsed since the deadline of a completed run."""
        now = now or self._clock()
        with self._lock:
            if self._phase != TimerPhase.COMPLETED or self._completed_at is None:
                return _ZERO
            return max(_ZERO, now - self._completed_at)

    def snapshot(self, now: Optional[datetime] = None) -> TimerState:
        """Return a consistent read-only view of the timer."""
        now = now or self._clock()
        with self._lock:
            return TimerState(
                phase=self._phase,
                mode=self.mode,
                total_minutes=self._total_minutes,
                remaining=self.remaining(now),
                start_timestamp=self._start,
                target_clock_minute=self._target_clock_minute,
                completion_timestamp=self._completed_at,
                overtime=self.overtime(now),
            )

    # -- private helpers -----------------------------------------------------

    def _begin_running(self) -> None:
        """Enter RUNNING and arm the watchdog with the run's absolute end."""
        self._deadline = self._compute_deadline()
        self._phase = TimerPhase.RUNNING
        self.watchdog.arm(self._deadline)

    def _compute_deadline(self) -> datetime:
        """Absolute end of the run.

        END-mode totals are whole minutes rounded up, so ``start + total``
        lands up to a minute past the requested clock time. The deadline is
        pulled back to the instant the clock shows the target minute.
        """
        end = self._start + timedelta(minutes=self._total_minutes)
        if self.mode is Mode.END and self._target_clock_minute is not None:
            shown = clock_minute(end) + end.microsecond / 60_000_000
            overshoot = (shown - self._target_clock_minute) % 60
            # A capped run ends long before its target minute; keep its end.
            if overshoot < 1:
                end -= timedelta(minutes=overshoot)
        return end

    def _complete(self) -> bool:
        """Enter COMPLETED. Returns False if the run already completed."""
        if self._phase == TimerPhase.COMPLETED:
            return False
        deadline = self._deadline
        self._phase = TimerPhase.COMPLETED
        self._completed_at = deadline
        self._remaining_at_pause = 0.0
        self.watchdog.disarm()
        logger.info(f"Timer completed at {deadline.isoformat()}")
        return True

    def _notify(self, now: datetime) -> None:
        state = self.snapshot(now)
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Completion listener failed")
