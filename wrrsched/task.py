"""Task records: the basic task, deadline tasks and iterative tasks."""

from collections.abc import Callable

from .consts import TaskStatus, parse_priority

StatusListener = Callable[["Task"], None]

DEADLINE_SCALE = 100


class Task:
    """A unit of work with a priority and a remaining running time.

    Tasks compare by identity. Whenever the status is set to anything other
    than CREATION, ``on_status_change`` (if given) is called with the task.
    """

    def __init__(
        self,
        task_id,
        priority,
        running_time,
        status=TaskStatus.CREATION,
        is_ordered=False,
        counter=0,
        on_status_change=None,
    ):
        self.id = task_id
        self.priority = priority
        self.running_time = running_time
        self._status = TaskStatus(status)
        self.is_ordered = is_ordered
        self.counter = counter
        self.on_status_change: StatusListener | None = on_status_change

    @property
    def priority(self):
        return self._priority

    @priority.setter
    def priority(self, value):
        self._priority = parse_priority(value)

    @property
    def status(self):
        return self._status

    @status.setter
    def status(self, value):
        self._status = TaskStatus(value)
        if self._status is not TaskStatus.CREATION and self.on_status_change is not None:
            self.on_status_change(self)

    def copy(self):
        """Return a plain Task carrying this task's fields."""
        return Task(
            self.id,
            self.priority,
            self.running_time,
            self.status,
            self.is_ordered,
            self.counter,
            self.on_status_change,
        )

    def __repr__(self):
        return (
            f"{type(self).__name__}(id={self.id!r}, priority={self.priority.value!r}, "
            f"running_time={self.running_time!r}, status={self.status.value!r})"
        )


class DeadlineTask(Task):
    """A task that is promoted to CRITICAL when its deadline draws near."""

    def __init__(
        self,
        task_id,
        priority,
        running_time,
        deadline,
        status=TaskStatus.CREATION,
        is_ordered=False,
        counter=0,
        on_status_change=None,
    ):
        super().__init__(task_id, priority, running_time, status, is_ordered, counter, on_status_change)
        self.deadline = deadline

    @classmethod
    def from_task(cls, task, deadline):
        """Build from a basic task; ``deadline`` in seconds is stored scaled by 100."""
        return cls(
            task.id,
            task.priority,
            task.running_time,
            deadline * DEADLINE_SCALE,
            task.status,
            counter=task.counter,
            on_status_change=task.on_status_change,
        )


class IterativeTask(Task):
    """A task that is re-submitted a number of times at a fixed interval."""

    def __init__(
        self,
        task_id,
        priority,
        running_time,
        iterations_remaining,
        execution_interval,
        status=TaskStatus.CREATION,
        is_ordered=False,
        counter=0,
        on_status_change=None,
    ):
        super().__init__(task_id, priority, running_time, status, is_ordered, counter, on_status_change)
        self.iterations_remaining = iterations_remaining
        self.execution_interval = execution_interval
        self.wait_time = 0
        self.run_time = running_time

    @classmethod
    def from_task(cls, task, iterations_remaining, execution_interval):
        """Build from a basic task; the original running time is kept as ``run_time``."""
        return cls(
            task.id,
            task.priority,
            task.running_time,
            iterations_remaining,
            execution_interval,
            task.status,
            counter=task.counter,
            on_status_change=task.on_status_change,
        )

    def decrease_iterations(self):
        self.iterations_remaining -= 1