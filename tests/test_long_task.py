import pytest

from wrrsched.consts import Priority, TaskStatus
from wrrsched.long_task import LongTaskHandler
from wrrsched.realtime import RealTimeScheduler
from wrrsched.task import Task
from wrrsched.wrr import WeightRoundRobinScheduler


class _Host:
    def __init__(self):
        self.total_running_task = 0
        self.realtime = RealTimeScheduler()
        self.wrr = WeightRoundRobinScheduler()
        self.printed = []

    def add_task_to_its_queue(self, task):
        if task.priority is Priority.CRITICAL:
            self.realtime.add_task(task)
        else:
            self.wrr.add_task(task)

    def pop_task_from_its_queue(self, task):
        if task.priority is Priority.CRITICAL:
            queue = self.realtime.queue
        else:
            queue = self.wrr.queue(task.priority).tasks
        if queue:
            queue.popleft()

    def print_atomically(self, message):
        self.printed.append(message)


@pytest.fixture
def host():
    return _Host()


def test_average_length_calculation(host):
    handler = LongTaskHandler(host)
    handler.add_seconds(30)
    host.total_running_task = 10
    assert handler.calculate_average_length() == pytest.approx(3.0)
    assert handler.average_length == pytest.approx(3.0)
    assert host.printed == ["The average is: 3.000000\n"]


def test_average_unchanged_without_running_tasks(host):
    handler = LongTaskHandler(host)
    handler.average_length = 4.5
    handler.add_seconds(30)
    assert handler.calculate_average_length() == pytest.approx(4.5)


def test_should_suspend(host):
    handler = LongTaskHandler(host)
    task1 = Task(1, Priority.HIGHER, 10)
    task2 = Task(1, Priority.CRITICAL, 10)

    host.total_running_task = 1
    assert handler.should_suspend(task1) is False

    host.total_running_task = 2
    host.add_task_to_its_queue(task2)
    assert handler.should_suspend(task2) is False

    handler.add_seconds(30)
    host.total_running_task = 5
    handler.average_length = 5.0
    assert handler.should_suspend(task1) is False

    handler.num_of_seconds = 6
    assert handler.should_suspend(task1) is True


def test_stop_long_task_requeues(host):
    handler = LongTaskHandler(host)
    other = Task(2, Priority.MIDDLE, 3)
    task = Task(1, Priority.MIDDLE, 10)
    host.total_running_task = 1
    host.add_task_to_its_queue(task)
    host.add_task_to_its_queue(other)

    handler.stop(task)

    assert task.status is TaskStatus.SUSPENDED
    assert list(host.wrr.queue(Priority.MIDDLE).tasks) == [other, task]


def test_add_seconds_and_tick():
    handler = LongTaskHandler()
    handler.add_seconds(10)
    assert handler.sum_of_all_seconds == 10
    handler.tick()
    assert handler.num_of_seconds == 1
    handler.tick()
    assert handler.num_of_seconds == 2


def test_reset_clears_counters():
    handler = LongTaskHandler()
    handler.sum_of_all_seconds = 100
    handler.num_of_seconds = 5
    handler.average_length = 20.5
    handler.reset()
    assert (handler.sum_of_all_seconds, handler.num_of_seconds, handler.average_length) == (0, 0, 0.0)