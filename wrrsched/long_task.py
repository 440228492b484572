"""Detects tasks that run longer than the average and suspends them."""

import threading

from .consts import Priority, TaskStatus
from .logger import LOGGER_NAME, LogInfo

import logging

log = logging.getLogger(LOGGER_NAME)


class LongTaskHandler:
    """Tracks seconds run against the average remaining length of all tasks.

    ``scheduler`` provides ``total_running_task``, ``realtime`` (a sized
    real-time queue), ``pop_task_from_its_queue``, ``add_task_to_its_queue``
    and ``print_atomically``.
    """

    def __init__(self, scheduler=None):
        self.scheduler = scheduler
        self.sum_of_all_seconds = 0
        self.num_of_seconds = 0
        self.average_length = 0.0
        self._lock = threading.Lock()

    def _total_running(self):
        return self.scheduler.total_running_task if self.scheduler is not None else 0

    def should_suspend(self, task):
        """True when the current task has run longer than the average."""
        with self._lock:
            if self._total_running() <= 1:
                return False
            if (
                task.priority is Priority.CRITICAL
                and self.scheduler is not None
                and len(self.scheduler.realtime) == 1
            ):
                return False
            return self.num_of_seconds > self.average_length

    def stop(self, task):
        """Suspend a task and move it to the back of its queue."""
        task.status = TaskStatus.SUSPENDED
        log.info(LogInfo.LONG_TASK_SUSPENDED.format(task.id, task.priority))
        if self.scheduler is None:
            raise RuntimeError("no scheduler attached to the long-task handler")
        self.scheduler.pop_task_from_its_queue(task)
        self.scheduler.add_task_to_its_queue(task)

    def calculate_average_length(self):
        """Recompute the average remaining length per running task and return it."""
        with self._lock:
            total = self._total_running()
            if total != 0:
                self.average_length = self.sum_of_all_seconds / total
            message = f"The average is: {self.average_length:.6f}\n"
        if self.scheduler is not None:
            self.scheduler.print_atomically(message)
        else:
            print(message, end="")
        return self.average_length

    def add_seconds(self, value):
        self.sum_of_all_seconds += value

    def tick(self):
        self.num_of_seconds += 1

    def reset(self):
        self.sum_of_all_seconds = 0
        self.num_of_seconds = 0
        self.average_length = 0.0