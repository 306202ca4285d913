"""
Repeating task schedulers for the Dice Round Timer application.

The stopwatch samples the clock through a cancellable repeating task. Two
implementations are provided: a background thread for headless use and the
web server, and a Tk ``after`` loop for the desktop interface.
"""
import logging
import threading
from typing import Any, Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class RepeatingTask(Protocol):
    """Handle for a callback scheduled at a fixed interval."""

    @property
    def active(self) -> bool:
        """True until the task has been cancelled."""
        ...

    def cancel(self) -> None:
        """Stop further callbacks. Safe to call more than once."""
        ...


class Scheduler(Protocol):
    """Interface for scheduling repeating callbacks - supports DIP."""

    def schedule_repeating(
        self, interval_seconds: float, callback: Callable[[], None]
    ) -> RepeatingTask:
        """Call ``callback`` every ``interval_seconds`` until cancelled."""
        ...


class ThreadTask:
    """Repeating task driven by a daemon thread."""

    def __init__(self, interval_seconds: float, callback: Callable[[], None]):
        self.interval_seconds = interval_seconds
        self.callback = callback
        self._cancelled = threading.Event()
        self._thread = threading.Thread(
            target=self._run, name="dice-timer-tick", daemon=True
        )

    @property
    def active(self) -> bool:
        return not self._cancelled.is_set()

    def start(self) -> None:
        self._thread.start()

    def cancel(self) -> None:
        self._cancelled.set()

    def _run(self) -> None:
        while not self._cancelled.wait(self.interval_seconds):
            try:
                self.callback()
            except Exception:
                logger.exception("Repeating task callback failed; cancelling")
                self._cancelled.set()


class ThreadScheduler:
    """Scheduler that runs each repeating task on its own daemon thread."""

    def schedule_repeating(
        self, interval_seconds: float, callback: Callable[[], None]
    ) -> ThreadTask:
        task = ThreadTask(interval_seconds, callback)
        task.start()
        return task


class TkTask:
    """Repeating task driven by a Tk widget's ``after`` queue."""

    def __init__(self, widget: Any, interval_ms: int, callback: Callable[[], None]):
        self.widget = widget
        self.interval_ms = interval_ms
        self.callback = callback
        self._after_id: Optional[str] = None
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> None:
        self._after_id = self.widget.after(self.interval_ms, self._fire)

    def cancel(self) -> None:
        self._active = False
        if self._after_id is not None:
            self.widget.after_cancel(self._after_id)
            self._after_id = None

    def _fire(self) -> None:
        self._after_id = None
        if not self._active:
            return
        try:
            self.callback()
        except Exception:
            logger.exception("Repeating task callback failed; cancelling")
            self._active = False
            return
        if self._active:
            self._after_id = self.widget.after(self.interval_ms, self._fire)


class TkScheduler:
    """Scheduler that runs callbacks on the Tk event loop of ``widget``."""

    def __init__(self, widget: Any):
        self.widget = widget

    def schedule_repeating(
        self, interval_seconds: float, callback: Callable[[], None]
    ) -> TkTask:
        interval_ms = max(1, int(round(interval_seconds * 1000)))
        task = TkTask(self.widget, interval_ms, callback)
        task.start()
        return task
