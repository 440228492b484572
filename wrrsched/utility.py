"""Console input validation and task-id capacity checks."""

import logging
import re
import sys

from .logger import LOGGER_NAME

MAX_TASKS = 2**32 - 1

_ALLOWED = re.compile(r"[0-9-]*")
_LEADING_INT = re.compile(r"-?\d+")

log = logging.getLogger(LOGGER_NAME)


def read_token(stream):
    """Read one whitespace-delimited word from ``stream``; None at end of input."""
    chars = []
    while True:
        ch = stream.read(1)
        if not ch:
            break
        if ch.isspace():
            if chars:
                break
            continue
        chars.append(ch)
    return "".join(chars) if chars else None


def validate_integer_input(
    message, variable_name, allow_negative=False, stdin=None, stdout=None, stderr=None
):
    """Prompt until an integer is entered and return it.

    Words with characters other than digits and '-' are rejected, as are
    negatives unless ``allow_negative``. Raises EOFError if input runs out and
    ValueError if the word holds no leading integer (such as a lone '-').
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    while True:
        print(message, file=stdout)
        word = read_token(stdin)
        if word is None:
            raise EOFError(f"input ended before a valid {variable_name} was entered")
        if not _ALLOWED.fullmatch(word):
            print(f"Invalid input. {variable_name} should contain only numeric digits.", file=stderr)
            continue
        match = _LEADING_INT.match(word)
        if match is None:
            raise ValueError(f"{variable_name}: {word!r} is not a number")
        number = int(match.group())
        if not allow_negative and number < 0:
            print(f"Invalid input: {variable_name} cannot be negative.", file=stderr)
            continue
        return number


def check_task_ids(task_ids, max_tasks=MAX_TASKS):
    """Log a warning at 80% of id capacity and an error when it is reached."""
    if task_ids == max_tasks * 0.8:
        log.warning("System overload, the number of tasks has exceeded 80% of the capacity")
    if task_ids == max_tasks:
        log.error(
            "The number of tasks in the system has exceeded its capacity. "
            "Please contact the manufacturer for a fix."
        )