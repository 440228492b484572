"""Loads a scenario file of tasks and feeds them to the scheduler."""

import json
import logging
import sys
import time

from .factory import TaskFactory
from .logger import LOGGER_NAME

log = logging.getLogger(LOGGER_NAME)


class JsonTaskReader:
    """Reads ``{"tasks": [...]}`` files; each entry may carry a ``delay`` in milliseconds."""

    def __init__(self, scheduler, factory=None, sleep=time.sleep, stderr=None):
        self.scheduler = scheduler
        self.factory = factory or TaskFactory(scheduler)
        self.sleep = sleep
        self.stderr = stderr or sys.stderr

    def _report(self, message):
        print(message, file=self.stderr)
        log.error(message)

    def create_tasks_from_json(self, path):
        """Insert every task in the file; return how many were inserted.

        Problems with the file or its contents are reported, not raised.
        """
        inserted = 0
        try:
            with open(path, encoding="utf-8") as handle:
                data = json.load(handle)
        except OSError:
            self._report(f"Failed to open file: {path}")
            return 0
        except ValueError as exc:
            self._report(f"An exception occurred: {exc}")
            return 0
        try:
            for entry in data["tasks"]:
                task_type = entry["type"]
                task = self.factory.create_from_dict(entry)
                if task is not None:
                    self.scheduler.insert_task(task)
                    inserted += 1
                else:
                    self._report(f"Task creation failed for task type: {task_type}")
                if "delay" in entry:
                    self.sleep(int(entry["delay"]) / 1000)
        except (KeyError, TypeError, ValueError) as exc:
            self._report(f"An exception occurred: {exc}")
        return inserted