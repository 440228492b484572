from wrrsched.consts import Priority, TaskStatus
from wrrsched.deadline import DeadlineTaskManager
from wrrsched.task import DeadlineTask, Task


class _Recorder:
    def __init__(self):
        self.inserted = []

    def insert_task(self, task):
        self.inserted.append(task)


def test_earliest_deadline_is_upcoming():
    manager = DeadlineTaskManager()
    later = DeadlineTask.from_task(Task(1, Priority.LOWER, 1), 1010)
    sooner = DeadlineTask.from_task(Task(2, Priority.LOWER, 1), 1001)
    manager.add_task(later)
    manager.add_task(sooner)
    assert manager.upcoming().id == 2


def test_deadline_task_is_watched():
    manager = DeadlineTaskManager()
    task2 = DeadlineTask.from_task(Task(2, Priority.LOWER, 10), 1002)
    manager.add_task(task2)
    assert manager.upcoming() is task2


def test_critical_task_is_not_watched():
    manager = DeadlineTaskManager()
    manager.add_task(DeadlineTask.from_task(Task(1, Priority.CRITICAL, 10), 5))
    assert len(manager) == 0


def test_empty_heap_has_no_upcoming():
    assert DeadlineTaskManager().upcoming() is None


def test_deadline_becomes_critical():
    manager = DeadlineTaskManager()
    scheduler = _Recorder()
    task = DeadlineTask.from_task(Task(2, Priority.LOWER, 10), 1000)
    assert task.deadline == 100000
    manager.add_task(task)

    assert manager.deadline_mechanism(scheduler, now=99989) is None
    assert task.priority is Priority.LOWER
    assert len(manager) == 1

    assert manager.deadline_mechanism(scheduler, now=99990) is task
    assert task.priority is Priority.CRITICAL
    assert scheduler.inserted == [task]
    assert len(manager) == 0


def test_completed_task_is_dropped():
    manager = DeadlineTaskManager()
    scheduler = _Recorder()
    task = DeadlineTask.from_task(Task(1, Priority.LOWER, 1), 1000)
    manager.add_task(task)
    task.status = TaskStatus.COMPLETED
    assert manager.deadline_mechanism(scheduler, now=100000) is None
    assert len(manager) == 0
    assert scheduler.inserted == []


def test_terminated_task_is_neither_promoted_nor_dropped():
    manager = DeadlineTaskManager()
    scheduler = _Recorder()
    task = DeadlineTask.from_task(Task(1, Priority.LOWER, 1), 1000)
    manager.add_task(task)
    task.status = TaskStatus.TERMINATED
    assert manager.deadline_mechanism(scheduler, now=100000) is None
    assert len(manager) == 1
    assert task.priority is Priority.LOWER


def test_clear_empties_heap():
    manager = DeadlineTaskManager()
    manager.add_task(DeadlineTask.from_task(Task(1, Priority.LOWER, 1), 10))
    manager.clear()
    assert manager.upcoming() is None