"""The scheduler: routes tasks to their queues, executes them and watches for starvation."""

import logging
import sys
import threading
import time
from collections import deque

from .consts import Priority, TaskStatus
from .deadline import DeadlineTaskManager
from .iterative import IterativeTaskHandler
from .logger import LOGGER_NAME, LogError, LogInfo, initialize_logger
from .long_task import LongTaskHandler
from .ordered import OrderedTaskHandler
from .realtime import RealTimeScheduler
from .task import DeadlineTask, IterativeTask
from .utility import MAX_TASKS, check_task_ids
from .wrr import WeightRoundRobinScheduler

log = logging.getLogger(LOGGER_NAME)

STARVATION = 10


class StarvationError(RuntimeError):
    """A task waited in CREATION state for too many starvation checks."""


class Scheduler:
    """Owns every queue and handler and runs tasks one time unit at a time.

    ``input_source``, if given, is a callable started on its own thread by
    ``run`` to feed tasks in (for instance from the console).
    """

    def __init__(self, input_source=None, log_dir="logs", stdout=None, stderr=None):
        self.input_source = input_source
        self.log_dir = log_dir
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.rt_lock = threading.RLock()
        self._print_lock = threading.Lock()
        self._realtime_queue_lock = threading.Lock()
        self._wrr_queue_lock = threading.Lock()

        self.total_running_task = 0
        self.task_ids = 0
        self.tasks_counter = 0
        self.starvation = STARVATION
        self.starvation_queue = deque()
        self.tick_duration = 0.001
        self.starvation_interval = 0.01

        self.realtime = RealTimeScheduler(executor=self.execute, lock=self.rt_lock)
        self.wrr = WeightRoundRobinScheduler(
            executor=self.execute,
            total_running=lambda: self.total_running_task,
            lock=self.rt_lock,
        )
        self.iterative = IterativeTaskHandler()
        self.deadline = DeadlineTaskManager()
        self.ordered = OrderedTaskHandler(insert=self.insert_task)
        self.long_tasks = LongTaskHandler(self)

    def next_task_id(self):
        """Hand out the next task id, wrapping at the id capacity."""
        check_task_ids(self.task_ids, MAX_TASKS)
        task_id = self.task_ids % MAX_TASKS
        self.task_ids += 1
        return task_id

    def insert_task(self, task):
        """Admit a task: ordered tasks wait their turn, others go to their queue."""
        if task is None:
            log.error("Error: Invalid task input. Skipping task insertion.")
            raise ValueError("invalid task input: None")
        if task.on_status_change is None:
            task.on_status_change = self.display_message
        front = self.ordered.tasks[0] if self.ordered.tasks else None
        if task.is_ordered and front is not task:
            self.ordered.add(task)
            return
        self.add_task_to_its_queue(task)
        self.total_running_task += 1
        self.long_tasks.add_seconds(task.running_time)
        if isinstance(task, IterativeTask):
            self.iterative.push(task)
        elif isinstance(task, DeadlineTask):
            self.deadline.add_task(task)

    def add_task_to_its_queue(self, task):
        if task.priority is Priority.CRITICAL:
            with self._realtime_queue_lock:
                self.realtime.add_task(task)
            log.info(LogInfo.ADD_CRITICAL_TASK.format(task.id))
        else:
            with self._wrr_queue_lock:
                self.wrr.add_task(task)
                self.starvation_queue.append(task)

    def pop_task_from_its_queue(self, task):
        if task.priority is Priority.CRITICAL:
            with self._realtime_queue_lock:
                if self.realtime.queue:
                    self.realtime.queue.popleft()
        else:
            with self._wrr_queue_lock:
                tasks = self.wrr.queue(task.priority).tasks
                if tasks:
                    tasks.popleft()

    def execute(self, task):
        """Run a task until it completes, is suspended as too long, or is preempted."""
        self.deadline.deadline_mechanism(self)
        self.long_tasks.calculate_average_length()
        self.long_tasks.num_of_seconds = 0
        log.info(LogInfo.START_EXECUTE.format(task.id, task.priority))
        task.status = TaskStatus.RUNNING

        while True:
            if task.running_time == 0:
                task.status = TaskStatus.COMPLETED
                self.pop_task_from_its_queue(task)
                self.total_running_task -= 1
                log.info(LogInfo.TASK_COMPLETED.format(task.id, task.priority))
                if task.is_ordered:
                    self.ordered.pop()
                return
            if self.long_tasks.should_suspend(task):
                self.long_tasks.stop(task)
                return
            if task.priority is not Priority.CRITICAL and self.realtime.queue:
                log.info(LogInfo.TASK_PREEMPTIVE.format(task.id, task.priority))
                self.preemptive(task)
                return
            try:
                task.running_time = task.running_time - 1
                self.long_tasks.tick()
                self.long_tasks.add_seconds(-1)
                if self.tick_duration:
                    time.sleep(self.tick_duration)
            except Exception as exc:
                log.error(LogError.TASK_TERMINATED.format(task.id, exc))
                task.status = TaskStatus.TERMINATED
                self.pop_task_from_its_queue(task)
                self.total_running_task -= 1
                self.long_tasks.add_seconds(-task.running_time)
                return

    def preemptive(self, task):
        task.status = TaskStatus.SUSPENDED
        log.info(LogInfo.TASK_SUSPENDED.format(task.id, task.priority))

    def check_starvation_once(self):
        """One starvation check; raises StarvationError when the oldest task waited too long."""
        with self.rt_lock:
            pass
        if not self.starvation_queue:
            self.tasks_counter = 0
            return
        front = self.starvation_queue[0]
        if front.status is not TaskStatus.CREATION:
            self.starvation_queue.popleft()
        elif self.tasks_counter - front.counter >= self.starvation:
            log.error("there is starvation!!")
            raise StarvationError(f"Starvation detected! Task ID: {front.id}")
        self.tasks_counter += 1

    def check_starvation(self, stop_event):
        while not stop_event.is_set():
            self.check_starvation_once()
            stop_event.wait(self.starvation_interval)

    def display_message(self, task):
        self.print_atomically(
            f"task {task.id} with priority: {task.priority} and running time "
            f"{task.running_time} is {task.status}\n"
        )

    def print_atomically(self, message):
        with self._print_lock:
            self.stdout.write(message)
            self.stdout.flush()

    def run(self, stop_event=None):
        """Start every scheduling thread and wait until ``stop_event`` is set.

        An error raised on any worker thread stops the others and is re-raised.
        """
        stop_event = stop_event or threading.Event()
        initialize_logger(self.log_dir)
        log.info(LogInfo.START_SCHEDULER)
        errors = []

        def guarded(name, work):
            def target():
                log.info(LogInfo.START_THREAD.format(name))
                try:
                    work()
                except BaseException as exc:
                    errors.append(exc)
                    stop_event.set()

            return threading.Thread(target=target, name=name, daemon=True)

        workers = [
            guarded("RealTimeScheduler", lambda: self.realtime.run(stop_event)),
            guarded("WeightRoundRobinScheduler", lambda: self.wrr.run(stop_event)),
            guarded("IterativeTaskHandler", lambda: self.iterative.run(self, stop_event)),
            guarded("CheckStarvation", lambda: self.check_starvation(stop_event)),
        ]
        try:
            if self.input_source is not None:
                guarded("InsertTask", self.input_source).start()
            for worker in workers:
                worker.start()
        except RuntimeError as exc:
            log.error(LogError.ERROR_CREATE_THREAD.format(exc))
            stop_event.set()
            raise
        for worker in workers:
            worker.join()
        if errors:
            raise errors[0]

    def clear(self):
        """Empty every queue and heap and reset the running counters."""
        self.deadline.clear()
        self.iterative.clear()
        self.realtime.clear()
        self.wrr.clear()
        self.ordered.tasks.clear()
        self.starvation_queue.clear()
        self.long_tasks.reset()
        self.total_running_task = 0