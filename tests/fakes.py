"""Test doubles shared by the test suites."""

from typing import Callable, List


class FakeTask:
    def __init__(self, interval_seconds: float, callback: Callable[[], None]):
        self.interval_seconds = interval_seconds
        self.callback = callback
        self.active = True

    def cancel(self) -> None:
        self.active = False


class FakeScheduler:
    """Scheduler whose repeating tasks only run when ``tick`` is called."""

    def __init__(self) -> None:
        self.tasks: List[FakeTask] = []

    def schedule_repeating(self, interval_seconds: float, callback: Callable[[], None]) -> FakeTask:
        task = FakeTask(interval_seconds, callback)
        self.tasks.append(task)
        return task

    @property
    def active_tasks(self) -> List[FakeTask]:
        return [task for task in self.tasks if task.active]

    def tick(self) -> None:
        for task in self.active_tasks:
            task.callback()
