"""Weighted round-robin over the HIGHER, MIDDLE and LOWER queues."""

import logging
import threading
from collections import deque
from dataclasses import dataclass, field

from .consts import Priority, TaskStatus, Weight
from .logger import LOGGER_NAME, LogInfo
from .task import IterativeTask

log = logging.getLogger(LOGGER_NAME)

QUEUE_ORDER = (Priority.HIGHER, Priority.MIDDLE, Priority.LOWER)


@dataclass
class WrrQueue:
    """One priority queue with its weight in percent."""

    weight: int
    tasks: deque = field(default_factory=deque)

    def __len__(self):
        return len(self.tasks)


def tasks_to_run(total_running, weight, queue_empty):
    """How many tasks a queue may run this round: its share, but at least one if it has any."""
    count = int(total_running * (weight / 100.0))
    if count == 0 and not queue_empty:
        return 1
    return count


def _is_stale(task):
    return task.priority is Priority.CRITICAL or task.status is TaskStatus.COMPLETED


class WeightRoundRobinScheduler:
    """Runs non-critical tasks, giving each queue a share of turns by weight.

    ``executor`` runs a task and removes it from its queue when it finishes.
    ``total_running`` returns the number of tasks in the system; by default it
    counts the tasks held in these queues. ``lock`` is waited on before each
    task so real-time work goes first.
    """

    def __init__(self, executor=None, total_running=None, lock=None):
        self.queues = {p: WrrQueue(Weight[p.name]) for p in QUEUE_ORDER}
        self.executor = executor
        self.total_running = total_running or self._queued_count
        self.lock = lock if lock is not None else threading.RLock()
        self.idle_wait = 0.001

    def _queued_count(self):
        return sum(len(q) for q in self.queues.values())

    def queue(self, priority):
        """The queue for a non-critical priority."""
        try:
            return self.queues[Priority(priority)]
        except (KeyError, ValueError):
            raise KeyError(f"no round-robin queue for priority {priority!r}") from None

    def add_task(self, task):
        self.queue(task.priority).tasks.append(task)
        log.info(LogInfo.ADD_NON_CRITICAL_TASK.format(task.id, task.priority))

    def _next_runnable(self, wrr_queue):
        task = wrr_queue.tasks[0]
        if isinstance(task, IterativeTask):
            task.status = TaskStatus.CREATION
            return task
        while wrr_queue.tasks and _is_stale(wrr_queue.tasks[0]):
            wrr_queue.tasks.popleft()
        return wrr_queue.tasks[0] if wrr_queue.tasks else None

    def run_round(self):
        """Give every queue its turns once; return how many tasks were executed."""
        executed = 0
        for wrr_queue in self.queues.values():
            count = tasks_to_run(self.total_running(), wrr_queue.weight, not wrr_queue.tasks)
            while wrr_queue.tasks and count > 0:
                task = self._next_runnable(wrr_queue)
                with self.lock:
                    pass
                if task is not None and not _is_stale(task):
                    if self.executor is None:
                        raise RuntimeError("no executor set for the round-robin scheduler")
                    self.executor(task)
                    executed += 1
                count -= 1
        return executed

    def run(self, stop_event):
        """Keep running rounds until ``stop_event`` is set."""
        while not stop_event.is_set():
            if self.run_round() == 0:
                stop_event.wait(self.idle_wait)

    def clear(self):
        for wrr_queue in self.queues.values():
            wrr_queue.tasks.clear()