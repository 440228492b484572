"""Min-heap of deadline tasks, promoted to CRITICAL as their deadline nears."""

import heapq
import itertools
import threading
import time

from .consts import Priority, TaskStatus


def _now_scaled():
    return int(time.time()) * 100


class DeadlineTaskManager:
    """Watches deadline tasks, earliest deadline first."""

    def __init__(self):
        self._heap = []
        self._seq = itertools.count()
        self._lock = threading.RLock()

    def __len__(self):
        return len(self._heap)

    def add_task(self, task):
        """Watch a task unless it is already CRITICAL."""
        if task.priority is not Priority.CRITICAL:
            with self._lock:
                heapq.heappush(self._heap, (task.deadline, next(self._seq), task))

    def upcoming(self):
        """The task with the earliest deadline, or None."""
        with self._lock:
            return self._heap[0][2] if self._heap else None

    def deadline_mechanism(self, scheduler, now=None):
        """Promote the earliest task if its deadline is close; drop finished entries.

        ``now`` is in the same scale as the stored deadlines (seconds times 100).
        The promoted task is inserted through ``scheduler.insert_task`` and returned.
        """
        if now is None:
            now = _now_scaled()
        with self._lock:
            if not self._heap:
                return None
            earliest = self._heap[0][2]
            if (
                now >= earliest.deadline - earliest.running_time
                and earliest.priority is not Priority.CRITICAL
                and earliest.status not in (TaskStatus.COMPLETED, TaskStatus.TERMINATED)
            ):
                earliest.priority = Priority.CRITICAL
                scheduler.insert_task(earliest)
                if self._heap and self._heap[0][2] is earliest:
                    heapq.heappop(self._heap)
                return earliest
            if earliest.priority is Priority.CRITICAL or earliest.status is TaskStatus.COMPLETED:
                heapq.heappop(self._heap)
            return None

    def clear(self):
        with self._lock:
            self._heap.clear()