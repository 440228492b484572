"""Ordered tasks: only the front of the line is handed to the scheduler."""

import logging
from collections import deque

from .logger import LOGGER_NAME

log = logging.getLogger(LOGGER_NAME)


class OrderedTaskHandler:
    """Keeps ordered tasks in line and releases them one at a time through ``insert``."""

    def __init__(self, insert=None):
        self.tasks = deque()
        self.insert = insert

    def __len__(self):
        return len(self.tasks)

    def _release(self, task):
        if self.insert is None:
            raise RuntimeError("no insert callback set for ordered tasks")
        self.insert(task)

    def add(self, task):
        """Queue a task; if it is the only one, release it at once."""
        self.tasks.append(task)
        if len(self.tasks) == 1:
            self._release(task)

    def pop(self):
        """Drop the front task and release the next one, if any."""
        if not self.tasks:
            log.warning("Can't pop from an empty queue")
            return
        self.tasks.popleft()
        if self.tasks:
            self._release(self.tasks[0])

    def front(self):
        """The task at the front, or None when the line is empty."""
        if self.tasks:
            return self.tasks[0]
        log.warning("Can't get front from an empty queue")
        return None