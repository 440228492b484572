import threading

from wrrsched.consts import Priority, TaskStatus
from wrrsched.iterative import IterativeTaskHandler
from wrrsched.task import IterativeTask, Task


class _Recorder:
    def __init__(self):
        self.inserted = []

    def insert_task(self, task):
        self.inserted.append(task)


def _iterative(task_id, running_time, iterations, interval):
    return IterativeTask.from_task(Task(task_id, Priority.HIGHER, running_time), iterations, interval)


def test_push_iterative_task():
    handler = IterativeTaskHandler()
    task = _iterative(0, 2, 2, 2)
    handler.push(task, now=1000)
    assert len(handler) == 1
    assert task.iterations_remaining == 1
    assert task.wait_time == 1002

    handler.pop()
    handler.push(task, now=1000)
    assert len(handler) == 0


def test_pop_iterative_task_and_empty_pop():
    handler = IterativeTaskHandler()
    task = _iterative(0, 2, 4, 2)
    handler.push(task, now=0)
    assert handler.pop() is task
    assert handler.pop() is None


def test_pop_restores_running_time():
    handler = IterativeTaskHandler()
    task = _iterative(0, 5, 3, 1)
    task.running_time = 0
    handler.push(task, now=0)
    assert handler.pop().running_time == 5


def test_zero_iterations_not_scheduled():
    handler = IterativeTaskHandler()
    handler.push(_iterative(0, 2, 0, 0), now=0)
    assert len(handler) == 0


def test_close_wait_times_pop_in_order():
    handler = IterativeTaskHandler()
    task1 = _iterative(0, 2, 5, 1)
    task2 = _iterative(1, 2, 3, 1)
    handler.push(task1, now=1000)
    handler.push(task2, now=1010)
    first = handler.pop()
    second = handler.pop()
    assert first.wait_time <= second.wait_time
    assert (first, second) == (task1, task2)
    assert len(handler) == 0


def test_different_running_times():
    handler = IterativeTaskHandler()
    short = _iterative(0, 1, 2, 1)
    long = _iterative(1, 5, 2, 1)
    handler.push(short, now=0)
    handler.push(long, now=0)
    assert len(handler) == 2
    assert handler.pop().run_time == 1
    assert handler.pop().run_time == 5


def test_different_intervals():
    handler = IterativeTaskHandler()
    handler.push(_iterative(1, 2, 3, 5), now=0)
    handler.push(_iterative(0, 2, 3, 1), now=0)
    assert handler.pop().execution_interval == 1
    assert handler.pop().execution_interval == 5


def test_check_once_resubmits_due_task():
    handler = IterativeTaskHandler()
    scheduler = _Recorder()
    task = _iterative(0, 2, 4, 3)
    task.status = TaskStatus.RUNNING
    handler.push(task, now=100)

    assert handler.check_once(scheduler, now=102) is None
    assert scheduler.inserted == []

    copy = handler.check_once(scheduler, now=103)
    assert scheduler.inserted == [copy]
    assert copy is not task
    assert copy.id == 0
    assert copy.status is TaskStatus.CREATION
    assert len(handler) == 1
    assert task.iterations_remaining == 2
    assert task.wait_time == 106


def test_iterative_task_handling_runs_all_iterations():
    handler = IterativeTaskHandler()
    scheduler = _Recorder()
    task = _iterative(0, 2, 2, 0)
    scheduler.insert_task(task)
    handler.push(task, now=0)
    handler.check_once(scheduler, now=0)
    assert len(scheduler.inserted) == 2
    assert len(handler) == 0


def test_run_resubmits_until_stopped():
    handler = IterativeTaskHandler()
    scheduler = _Recorder()
    handler.push(_iterative(0, 2, 3, 0))
    stop = threading.Event()
    thread = threading.Thread(target=handler.run, args=(scheduler, stop))
    thread.start()
    try:
        for _ in range(200):
            if len(scheduler.inserted) == 2:
                break
            stop.wait(0.01)
    finally:
        stop.set()
        thread.join(2)
    assert len(scheduler.inserted) == 2
    assert len(handler) == 0


def test_clear_empties_heap():
    handler = IterativeTaskHandler()
    handler.push(_iterative(0, 2, 3, 1), now=0)
    handler.clear()
    assert handler.pop() is None