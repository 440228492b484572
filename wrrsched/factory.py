"""Builds tasks from JSON-like mappings or from console input."""

import logging
import sys
import time

from .consts import Priority, TaskType
from .logger import LOGGER_NAME, LogInfo
from .task import DeadlineTask, IterativeTask, Task
from .utility import read_token, validate_integer_input

log = logging.getLogger(LOGGER_NAME)

_REQUIRED = {
    TaskType.BASIC: ("priority", "runningTime"),
    TaskType.ORDERED: ("priority", "runningTime"),
    TaskType.DEAD_LINE: ("priority", "runningTime", "deadline"),
    TaskType.ITERATIVE: ("priority", "runningTime", "iterationsRemaining", "executionInterval"),
}

_PRIORITY_PROMPT = "Enter the priority for the task. Options: Critical, Higher, Middle, Lower: "


def _int(value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer, got {value!r}")
    return value


class TaskFactory:
    """Creates tasks with ids drawn from ``scheduler``."""

    def __init__(self, scheduler):
        self.scheduler = scheduler

    def create_from_dict(self, data):
        """Build a task from a mapping; None if the type is unknown or data is missing or invalid."""
        try:
            task_type = TaskType(data["type"])
        except (KeyError, TypeError, ValueError) as exc:
            log.error("An exception occurred: %s", exc)
            return None
        missing = [key for key in _REQUIRED[task_type] if key not in data]
        if missing:
            log.error("Missing required fields for %s task: %s", task_type.value, ", ".join(missing))
            return None
        try:
            priority = Priority(data["priority"])
            running_time = _int(data["runningTime"])
            if task_type is TaskType.DEAD_LINE:
                deadline = _int(data["deadline"])
            elif task_type is TaskType.ITERATIVE:
                iterations = _int(data["iterationsRemaining"])
                interval = _int(data["executionInterval"])
        except (TypeError, ValueError) as exc:
            log.error("An exception occurred: %s", exc)
            return None

        basic = Task(
            self.scheduler.next_task_id(),
            priority,
            running_time,
            is_ordered=task_type is TaskType.ORDERED,
            counter=self.scheduler.tasks_counter,
        )
        if task_type is TaskType.DEAD_LINE:
            return DeadlineTask.from_task(basic, deadline)
        if task_type is TaskType.ITERATIVE:
            return IterativeTask.from_task(basic, iterations, interval)
        return basic

    def _read_priority(self, stdin, stdout):
        print(_PRIORITY_PROMPT, file=stdout)
        while True:
            word = read_token(stdin)
            if word is None:
                raise EOFError("input ended before a priority was entered")
            try:
                return Priority(word)
            except ValueError:
                log.error("Invalid priority. Please enter one of the specified options.")
                print("Invalid priority. Please enter one of the specified options.", file=stdout)
                print(_PRIORITY_PROMPT, file=stdout)

    def _basic_input(self, stdin, stdout, is_ordered=False):
        priority = self._read_priority(stdin, stdout)
        running_time = validate_integer_input(
            "Enter the task Running time:", "running Time", False, stdin, stdout
        )
        log.info(LogInfo.CREATE_NEW_TASK.format(priority, running_time))
        return Task(
            self.scheduler.next_task_id(),
            priority,
            running_time,
            is_ordered=is_ordered,
            counter=self.scheduler.tasks_counter,
        )

    def create_interactive(self, task_type, stdin=None, stdout=None):
        """Prompt for the fields of a task of ``task_type``; None for unknown types."""
        stdin = stdin or sys.stdin
        stdout = stdout or sys.stdout
        try:
            kind = TaskType(task_type)
        except ValueError:
            return None
        if kind in (TaskType.BASIC, TaskType.ORDERED):
            return self._basic_input(stdin, stdout, kind is TaskType.ORDERED)
        basic = self._basic_input(stdin, stdout)
        if kind is TaskType.DEAD_LINE:
            offset = validate_integer_input("Enter the Dead line:", "Dead line", False, stdin, stdout)
            return DeadlineTask.from_task(basic, int(time.time()) + offset)
        iterations = validate_integer_input(
            "Enter the number of repetitions:", "repetition", False, stdin, stdout
        )
        interval = validate_integer_input(
            "Enter the Execution interval between tasks:", "Execution interval", False, stdin, stdout
        )
        return IterativeTask.from_task(basic, iterations, interval)

    def insert_from_input(self, stdin=None, stdout=None):
        """Read tasks from the console and insert them until input ends."""
        stdin = stdin or sys.stdin
        stdout = stdout or sys.stdout
        while True:
            print("Enter task type: basic/deadline/iterative/ordered:", file=stdout)
            word = read_token(stdin)
            if word is None:
                return
            if word in TaskType._value2member_map_:
                self.scheduler.insert_task(self.create_interactive(word, stdin, stdout))
            else:
                print("Invalid task type.", file=stdout)