"""First-come, first-served queue for CRITICAL tasks."""

import logging
import threading
from collections import deque

from .consts import TaskStatus
from .logger import LOGGER_NAME

log = logging.getLogger(LOGGER_NAME)

STARVATION_WARNING_SIZE = 4


class RealTimeScheduler:
    """Holds real-time tasks and hands the front one to ``executor``.

    ``executor`` is called with a task and is expected to run it and take it
    out of ``queue`` once it finishes. ``lock`` is held while a task runs, so
    other schedulers can wait on it until real-time work is done.
    """

    def __init__(self, executor=None, lock=None):
        self.queue = deque()
        self.executor = executor
        self.lock = lock if lock is not None else threading.RLock()
        self.idle_wait = 0.001

    def __len__(self):
        return len(self.queue)

    def add_task(self, task):
        """Append a task; warn when the queue grows long enough to starve others."""
        self.queue.append(task)
        if len(self.queue) >= STARVATION_WARNING_SIZE:
            log.warning(
                "There are too many Real Time Tasks, it might cause starvation of the other tasks"
            )

    def step(self):
        """Run the front task if it is neither running nor completed.

        Returns the task handed to the executor, or None if nothing ran.
        """
        if not self.queue:
            return None
        with self.lock:
            task = self.queue[0] if self.queue else None
            if task is None or task.status in (TaskStatus.RUNNING, TaskStatus.COMPLETED):
                return None
            if self.executor is None:
                raise RuntimeError("no executor set for the real-time scheduler")
            self.executor(task)
            return task

    def run(self, stop_event):
        """Keep running real-time tasks until ``stop_event`` is set."""
        while not stop_event.is_set():
            if self.step() is None:
                stop_event.wait(self.idle_wait)

    def clear(self):
        self.queue.clear()