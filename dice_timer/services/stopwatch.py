"""Stopwatch service for the Dice Round Timer application."""

import logging
import threading
from typing import Callable, List, Optional

from ..utils import monotonic_ts, TICK_INTERVAL_SECONDS
from .scheduler import RepeatingTask, Scheduler, ThreadScheduler

logger = logging.getLogger(__name__)

StopwatchListener = Callable[["Stopwatch"], None]


class Stopwatch:
    """
    Round stopwatch sampled by a periodic tick.

    ``elapsed_seconds`` only changes when the sampler runs (or on ``pause``),
    so readers see the value of the last tick, as a display would.
    """

    def __init__(
        self,
        scheduler: Optional[Scheduler] = None,
        interval_seconds: float = TICK_INTERVAL_SECONDS,
    ):
        self.scheduler = scheduler or ThreadScheduler()
        self.interval_seconds = interval_seconds
        self._running = False
        self._elapsed = 0.0
        self._start_ts: Optional[float] = None
        self._task: Optional[RepeatingTask] = None
        self._listeners: List[StopwatchListener] = []
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        # A task that cancelled itself after a failed tick no longer samples.
        task = self._task
        return self._running and task is not None and task.active

    @property
    def elapsed_seconds(self) -> float:
        return self._elapsed

    def add_listener(self, listener: StopwatchListener) -> None:
        """Register a callback invoked after every sample."""
        self._listeners.append(listener)

    def remove_listener(self, listener: StopwatchListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Start timing from zero. Restarts if already running."""

        with self._lock:
            self._cancel_task()
            self._start_ts = monotonic_ts()
            self._elapsed = 0.0
            self._running = True
            self._schedule()
        logger.debug("Stopwatch started")

    def stop(self) -> None:
        """Stop sampling and keep the last sampled elapsed value."""

        with self._lock:
            self._cancel_task()
            self._running = False
        logger.debug("Stopwatch stopped at %.2fs", self._elapsed)

    def reset(self) -> None:
        """Stop and return to the idle state."""

        with self._lock:
            self.stop()
            self._elapsed = 0.0
            self._start_ts = None

    def pause(self) -> None:
        """Stop sampling, capturing the elapsed time at the moment of the call."""

        with self._lock:
            self._cancel_task()
            if self._running and self._start_ts is not None:
                self._elapsed = monotonic_ts() - self._start_ts
            self._running = False
        logger.debug("Stopwatch paused at %.2fs", self._elapsed)

    def resume(self) -> None:
        """Continue timing from the frozen elapsed value."""

        with self._lock:
            self._cancel_task()
            self._start_ts = monotonic_ts() - self._elapsed
            self._running = True
            self._schedule()
        logger.debug("Stopwatch resumed from %.2fs", self._elapsed)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _schedule(self) -> None:
        task_ref: List[RepeatingTask] = []

        def tick() -> None:
            self._tick(task_ref[0] if task_ref else None)

        self._task = self.scheduler.schedule_repeating(self.interval_seconds, tick)
        task_ref.append(self._task)

    def _cancel_task(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def _tick(self, task: Optional[RepeatingTask]) -> None:
        with self._lock:
            # A tick from a task that was already cancelled must not write.
            if task is None or task is not self._task or not self._running:
                return
            if self._start_ts is None:
                return
            self._elapsed = monotonic_ts() - self._start_ts
        for listener in list(self._listeners):
            listener(self)
