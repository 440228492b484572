import io
import json

import pytest

from wrrsched.consts import Priority, TaskStatus
from wrrsched.read_json import JsonTaskReader
from wrrsched.scheduler import Scheduler


@pytest.fixture
def sched():
    return Scheduler(stdout=io.StringIO())


def write(tmp_path, data):
    path = tmp_path / "test_tasks.json"
    path.write_text(json.dumps(data))
    return path


def test_empty_tasks(sched, tmp_path):
    reader = JsonTaskReader(sched, stderr=io.StringIO())
    assert reader.create_tasks_from_json(write(tmp_path, {"tasks": []})) == 0
    assert sched.total_running_task == 0


def test_missing_file(sched, tmp_path):
    err = io.StringIO()
    reader = JsonTaskReader(sched, stderr=err)
    assert reader.create_tasks_from_json(tmp_path / "non_existing_file.json") == 0
    assert sched.total_running_task == 0
    assert "Failed to open file" in err.getvalue()


def test_reads_tasks(sched, tmp_path):
    data = {
        "tasks": [
            {"type": "basic", "priority": "Critical", "runningTime": 2},
            {"type": "basic", "priority": "Lower", "runningTime": 3},
        ]
    }
    reader = JsonTaskReader(sched, stderr=io.StringIO())
    assert reader.create_tasks_from_json(write(tmp_path, data)) == 2
    assert sched.total_running_task == 2
    first = sched.realtime.queue[0]
    assert first.priority is Priority.CRITICAL
    assert first.running_time == 2
    assert first.status is TaskStatus.CREATION
    second = sched.wrr.queue(Priority.LOWER).tasks[0]
    assert second.running_time == 3
    assert second.status is TaskStatus.CREATION


def test_unknown_type_not_inserted(sched, tmp_path):
    err = io.StringIO()
    data = {"tasks": [{"type": "other", "priority": "Critical", "runningTime": 2}]}
    reader = JsonTaskReader(sched, stderr=err)
    assert reader.create_tasks_from_json(write(tmp_path, data)) == 0
    assert sched.total_running_task == 0
    assert "Task creation failed for task type: other" in err.getvalue()


def test_delay(sched, tmp_path):
    sleeps = []
    data = {
        "tasks": [
            {"type": "basic", "priority": "Critical", "runningTime": 2, "delay": 5},
            {"type": "basic", "priority": "Lower", "runningTime": 3},
        ]
    }
    reader = JsonTaskReader(sched, sleep=sleeps.append, stderr=io.StringIO())
    assert reader.create_tasks_from_json(write(tmp_path, data)) == 2
    assert sleeps == [0.005]


def test_malformed_json(sched, tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    err = io.StringIO()
    assert JsonTaskReader(sched, stderr=err).create_tasks_from_json(path) == 0
    assert "An exception occurred" in err.getvalue()