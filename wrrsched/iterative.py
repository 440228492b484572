"""Min-heap of iterative tasks ordered by when they are next due."""

import heapq
import itertools
import logging
import threading
import time

from .consts import TaskStatus
from .logger import LOGGER_NAME, LogInfo

log = logging.getLogger(LOGGER_NAME)


def _now_ms():
    return int(time.time() * 1000)


class IterativeTaskHandler:
    """Re-submits iterative tasks every ``execution_interval`` milliseconds."""

    def __init__(self):
        self._heap = []
        self._seq = itertools.count()
        self._lock = threading.RLock()
        self.poll_interval = 0.001

    def __len__(self):
        return len(self._heap)

    def push(self, task, now=None):
        """Schedule the next iteration, unless at most one remains.

        ``now`` is in milliseconds since the epoch.
        """
        if task.iterations_remaining <= 1:
            return
        task.decrease_iterations()
        if now is None:
            now = _now_ms()
        task.wait_time = now + task.execution_interval
        with self._lock:
            heapq.heappush(self._heap, (task.wait_time, next(self._seq), task))
        log.info(
            LogInfo.PUSH_ITERATIVE_TASK_TO_HEAP.format(task.id, task.iterations_remaining, task.priority)
        )

    def pop(self):
        """Take the earliest-due task, restoring its running time; None if empty."""
        with self._lock:
            if not self._heap:
                return None
            task = heapq.heappop(self._heap)[2]
        log.info(LogInfo.POP_ITERATIVE_TASK_FROM_HEAP.format(task.id))
        task.running_time = task.run_time
        return task

    def check_once(self, scheduler, now=None):
        """If the earliest task is due, insert a fresh copy and reschedule it.

        Returns the inserted copy, or None if nothing was due.
        """
        if now is None:
            now = _now_ms()
        with self._lock:
            if not self._heap or now < self._heap[0][0]:
                return None
            popped = self.pop()
        copy = popped.copy()
        copy.status = TaskStatus.CREATION
        scheduler.insert_task(copy)
        self.push(popped, now)
        return copy

    def run(self, scheduler, stop_event):
        """Check for due tasks every millisecond until ``stop_event`` is set."""
        while not stop_event.is_set():
            self.check_once(scheduler)
            stop_event.wait(self.poll_interval)

    def clear(self):
        with self._lock:
            self._heap.clear()