# wrrsched

A task scheduler that runs tasks by priority, one time unit at a time:

- **Critical** tasks go to a real-time queue and run first, in order of
  arrival. A running non-critical task is suspended as soon as a critical
  task is waiting.
- **Higher**, **Middle** and **Lower** tasks go to weighted round-robin
  queues. In each round a queue may run its weight (50, 30 and 10 percent)
  of the number of tasks in the system, and at least one task if it holds
  any.
- When more than one task is in the system, a task that has run longer than
  the average remaining running time of all tasks is suspended and put back
  at the end of its queue.
- A non-critical task that stays unstarted for 10 starvation checks stops
  the scheduler with a `StarvationError`.

Besides the basic task there are three more kinds:

| type        | meaning                                                                    |
|-------------|----------------------------------------------------------------------------|
| `basic`     | runs once                                                                  |
| `ordered`   | is released to the queues only after the ordered task before it completes |
| `deadline`  | is promoted to Critical once its deadline is close to its running time     |
| `iterative` | is submitted again, a set number of times, at a fixed interval             |

The scheduler logs to a daily HTML file, `daily_log_<YYYY-MM-DD>.html` in
the log directory, one coloured `<p>` element per message. Every status
change of a task is also printed to standard output, for example
`task 3 with priority: Higher and running time 5 is Running`.

## Installation

```
pip install .
```

## Running

```
wrrsched
```

This starts the scheduler together with a WebSocket server on port 8080. The
options are:

| option        | default   | meaning                                |
|---------------|-----------|----------------------------------------|
| `--host`      | `0.0.0.0` | address to listen on                   |
| `--port`      | `8080`    | port to listen on                      |
| `--log-dir`   | `logs`    | directory for the HTML log files       |
| `--no-input`  |           | do not read tasks from the console     |

Stop it with Ctrl-C. The command exits with status 1 if the server or the
scheduler failed (for instance on starvation).

### Console input

Unless `--no-input` is given, tasks can be typed in. The scheduler asks for
the task type (`basic`, `deadline`, `iterative` or `ordered`), then the
priority and the running time. A deadline task also asks for its deadline in
seconds from now; an iterative task asks for the number of repetitions and
the interval between them in milliseconds.

### WebSocket messages

Each message is a JSON object describing one task:

```json
{"type": "basic", "priority": "Higher", "runningTime": 5}
```

A message that carries `priority` and `runningTime` is turned into a task and
scheduled, and the server answers with a line such as

```
Task with ID: 3  priority Higher and running time 5 received and scheduled.
```

Messages without those two fields, and tasks that cannot be built, get no
answer. While a connection is open, the server follows the newest file in the
log directory once a second and sends the log lines that tell when a task
starts executing, completes or is suspended, and the warning given when four
or more real-time tasks are waiting.

## Task fields

| field                 | used by                                              |
|-----------------------|------------------------------------------------------|
| `type`                | all                                                  |
| `priority`            | all: `Critical`, `Higher`, `Middle`, `Lower`         |
| `runningTime`         | all, an integer number of time units                 |
| `deadline`            | `deadline`: a Unix time in whole seconds             |
| `iterationsRemaining` | `iterative`                                          |
| `executionInterval`   | `iterative`, in milliseconds                         |

A task whose type is unknown, whose required fields are missing, or whose
values are of the wrong kind, is not created. A deadline task whose priority
is already Critical is simply run as a critical task.

## Loading tasks from a file

`JsonTaskReader(scheduler).create_tasks_from_json(path)` reads a file holding
a `tasks` array, schedules each entry in turn and returns how many tasks were
inserted. An entry may carry a `delay` in milliseconds to wait before the
next one is read. Problems with the file are reported on standard error and
in the log, not raised.

```json
{
  "tasks": [
    {"type": "basic", "priority": "Critical", "runningTime": 2, "delay": 5},
    {"type": "basic", "priority": "Lower", "runningTime": 3},
    {"type": "iterative", "priority": "Middle", "runningTime": 4,
     "iterationsRemaining": 3, "executionInterval": 100},
    {"type": "deadline", "priority": "Lower", "runningTime": 5,
     "deadline": 1900000000}
  ]
}
```

The `wrrsched` command does not load such files; call the reader from your
own code. No scenario files come with the package.

## Library use

- `wrrsched.scheduler.Scheduler`: owns all queues and handlers;
  `insert_task`, `execute`, `run(stop_event)` and `clear`.
- `wrrsched.factory.TaskFactory`: builds tasks from dictionaries
  (`create_from_dict`) or from console input (`create_interactive`,
  `insert_from_input`).
- `wrrsched.read_json.JsonTaskReader`: loads tasks from a JSON file.
- `wrrsched.server.serve`: the WebSocket server, as a coroutine.
- `wrrsched.task`: `Task`, `DeadlineTask` and `IterativeTask`.
- `wrrsched.consts`: `Priority`, `TaskStatus`, `TaskType` and `Weight`.
- `wrrsched.logger`: `HtmlFormatter` and `initialize_logger`.

```python
import threading
from wrrsched.scheduler import Scheduler
from wrrsched.factory import TaskFactory

scheduler = Scheduler(log_dir="logs")
factory = TaskFactory(scheduler)
scheduler.insert_task(
    factory.create_from_dict({"type": "basic", "priority": "Higher", "runningTime": 3})
)

stop = threading.Event()
threading.Thread(target=scheduler.run, args=(stop,), daemon=True).start()
```

## Tests

```
pip install ".[test]"
pytest
```