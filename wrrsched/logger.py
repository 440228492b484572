"""HTML log formatting, the daily log file, and the scheduler's log message templates."""

import logging
import os
import time
from datetime import date
from pathlib import Path

LOGGER_NAME = "wrrsched"

_LEVEL_COLORS = {
    logging.INFO: "green",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.DEBUG: "blue",
}


def color_for_level(levelno):
    """Colour used for a log level; anything unlisted is black."""
    return _LEVEL_COLORS.get(levelno, "black")


class HtmlFormatter(logging.Formatter):
    """Formats each record as one coloured HTML paragraph."""

    def format(self, record):
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(record.created))
        level = record.levelname.lower()
        return f'<p style="color:{color_for_level(record.levelno)}">[{stamp}] [{level}] {message}</p>'


class _DailyFileHandler(logging.FileHandler):
    """Appends to ``<stem>_<YYYY-MM-DD><suffix>`` and switches file at midnight."""

    def __init__(self, directory, stem="daily_log", suffix=".html"):
        self._directory = Path(directory)
        self._stem = stem
        self._suffix = suffix
        self._date = date.today()
        super().__init__(self._path_for(self._date), encoding="utf-8")

    def _path_for(self, day):
        return self._directory / f"{self._stem}_{day.isoformat()}{self._suffix}"

    def emit(self, record):
        day = date.fromtimestamp(record.created)
        if day != self._date:
            self.acquire()
            try:
                if self.stream is not None:
                    self.stream.close()
                    self.stream = None
                self._date = day
                self.baseFilename = os.path.abspath(self._path_for(day))
            finally:
                self.release()
        super().emit(record)
        self.flush()


def initialize_logger(log_dir="logs"):
    """Send the package logger to a daily HTML file in ``log_dir`` and return it."""
    Path(log_dir).mkdir(parents=True, exist_ok=True)
    logger = logging.getLogger(LOGGER_NAME)
    for handler in [h for h in logger.handlers if isinstance(h, _DailyFileHandler)]:
        logger.removeHandler(handler)
        handler.close()
    handler = _DailyFileHandler(log_dir)
    handler.setFormatter(HtmlFormatter())
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.debug("Logger initialized and logging to daily and hourly files")
    return logger


class LogInfo:
    """Informational message templates, filled with ``str.format``."""

    START_SCHEDULER = "Starting scheduling process."
    START_THREAD = "{} thread started."
    START_READ_FROM_JSON_THREAD = "read tasks From JSON thread started."
    START_EXECUTE = "Executing Task with ID: {}, with priority: {} "

    CREATE_NEW_TASK = "New task created with priority: {} and running time: {}"

    TASK_COMPLETED = "Task with ID: {} and priority: {}  is completed."
    TASK_PREEMPTIVE = "Preempting Task with ID: {} and priority {} for real-time task."
    TASK_SUSPENDED = "Task with ID: {} and priority: {} suspended and added back to WRR queue."
    LONG_TASK_SUSPENDED = "The long Task with ID: {} and priority: {} is suspended and will continue later."

    ADD_CRITICAL_TASK = "Critical task with ID: {} added to RealTimeScheduler."
    ADD_NON_CRITICAL_TASK = "Task with ID: {} added to {} queue."

    PUSH_ITERATIVE_TASK_TO_HEAP = "Task with ID: {} added to iterative min heap. return number: {}"
    POP_ITERATIVE_TASK_FROM_HEAP = "Task with ID: {} popped from iterative min heap."


class LogError:
    """Error message templates, filled with ``str.format``."""

    ERROR_CREATE_THREAD = "Error creating threads: {}"
    TASK_TERMINATED = "Exception occurred while executing Task with ID: {}: {}"