"""Priority task scheduler with real-time and weighted round-robin queues and a WebSocket front end."""

__version__ = "0.1.0"

__all__ = [
    "cli",
    "consts",
    "deadline",
    "factory",
    "iterative",
    "logger",
    "long_task",
    "ordered",
    "read_json",
    "realtime",
    "scheduler",
    "server",
    "task",
    "utility",
    "wrr",
]