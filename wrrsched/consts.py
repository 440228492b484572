"""Fixed vocabularies shared by the scheduler: statuses, priorities, task types and weights."""

from enum import IntEnum, StrEnum


class TaskStatus(StrEnum):
    """Lifecycle state of a task."""

    COMPLETED = "Completed"
    SUSPENDED = "Suspended"
    TERMINATED = "Terminated"
    RUNNING = "Running"
    CREATION = "Creation"


class Priority(StrEnum):
    """Priority level; CRITICAL tasks go to the real-time queue, the rest to WRR queues."""

    CRITICAL = "Critical"
    HIGHER = "Higher"
    MIDDLE = "Middle"
    LOWER = "Lower"


class TaskType(StrEnum):
    """Kinds of task the factory knows how to build."""

    BASIC = "basic"
    ORDERED = "ordered"
    DEAD_LINE = "deadline"
    ITERATIVE = "iterative"


class Weight(IntEnum):
    """Share, in percent, of running tasks each WRR queue may run per round."""

    HIGHER = 50
    MIDDLE = 30
    LOWER = 10


SCENARIO_FILE_PATHS = tuple(f"scenarios/scenario_{n}.json" for n in range(1, 12))


def parse_priority(value):
    """Return the Priority named by ``value``; raise ValueError for unknown names."""
    if isinstance(value, Priority):
        return value
    try:
        return Priority(value)
    except ValueError:
        raise ValueError(f"invalid priority: {value!r}") from None


def parse_task_type(value):
    """Return the TaskType named by ``value``; raise ValueError for unknown names."""
    if isinstance(value, TaskType):
        return value
    try:
        return TaskType(value)
    except ValueError:
        raise ValueError(f"invalid task type: {value!r}") from None