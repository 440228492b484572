"""WebSocket front end: accepts tasks as JSON and streams scheduler events back from the log."""

import asyncio
import json
import os
import sys

import websockets
from websockets.exceptions import ConnectionClosed

from .factory import TaskFactory

REPORTED_PHRASES = (
    "Executing",
    "completed",
    "suspended",
    "There are too many Real Time Tasks",
)


def latest_log_file(directory):
    """Path of the most recently modified regular file in ``directory``, or None if it has none."""
    latest_path = None
    latest_time = None
    with os.scandir(directory) as entries:
        for entry in entries:
            if not entry.is_file():
                continue
            modified = entry.stat().st_mtime
            if latest_time is None or modified > latest_time:
                latest_time = modified
                latest_path = entry.path
    return latest_path


def extract_log_message(line):
    """Text of an HTML log paragraph worth forwarding to clients, or None.

    Only paragraphs that mention a task being executed, completed or suspended,
    or the real-time overload warning, are forwarded.
    """
    start = line.find("<p")
    end = line.find("</p>")
    if start == -1 or end == -1:
        return None
    content_start = line.find(">", start) + 1
    text = line[content_start:end]
    if any(phrase in text for phrase in REPORTED_PHRASES):
        return text
    return None


class WebSocketSession:
    """One client connection: submits its tasks and relays scheduler events from the log."""

    def __init__(self, websocket, scheduler, log_dir="logs", factory=None, stdout=None, stderr=None):
        self.websocket = websocket
        self.scheduler = scheduler
        self.log_dir = log_dir
        self.factory = factory or TaskFactory(scheduler)
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.poll_interval = 1.0

    def handle_message(self, message):
        """Submit the task described by a JSON message and return the reply, or None.

        Messages without ``priority`` and ``runningTime`` are ignored. Raises
        ValueError if the message is not valid JSON.
        """
        if isinstance(message, (bytes, bytearray)):
            message = message.decode("utf-8")
        data = json.loads(message)
        if not isinstance(data, dict) or "priority" not in data or "runningTime" not in data:
            return None
        task = self.factory.create_from_dict(data)
        if task is None:
            print(f"Task creation failed for task type: {data.get('type')}", file=self.stderr)
            return None
        self.scheduler.insert_task(task)
        print("Sending a response", file=self.stdout)
        return (
            f"Task with ID: {task.id}  priority {data['priority']} and running time "
            f"{data['runningTime']} received and scheduled."
        )

    async def _send(self, text):
        if not text:
            print("Error: Empty response string", file=self.stderr)
            return
        try:
            await self.websocket.send(text)
        except (ConnectionClosed, OSError) as exc:
            print(f"Write Error: {exc}", file=self.stderr)

    async def serve(self):
        """Read messages until the client goes away, relaying log events meanwhile."""
        monitor = asyncio.create_task(self.monitor_logs())
        try:
            async for message in self.websocket:
                print(f"Received: {message}", file=self.stdout)
                try:
                    response = self.handle_message(message)
                except ValueError as exc:
                    print(f"WebSocket read error: {exc}", file=self.stderr)
                    continue
                if response is not None:
                    await self._send(response)
        except ConnectionClosed as exc:
            print(f"WebSocket read error: {exc}", file=self.stderr)
        finally:
            monitor.cancel()
            try:
                await monitor
            except asyncio.CancelledError:
                pass

    def _latest(self):
        try:
            return latest_log_file(self.log_dir)
        except OSError:
            return None

    def _read_new_lines(self, path, position):
        try:
            with open(path, "rb") as handle:
                handle.seek(position)
                data = handle.read()
        except OSError:
            print(f"Error opening log file: {path}", file=self.stderr)
            return [], position
        cut = data.rfind(b"\n")
        if cut == -1:
            return [], position
        complete = data[: cut + 1]
        lines = complete.decode("utf-8", errors="replace").splitlines()
        return lines, position + len(complete)

    async def monitor_logs(self):
        """Follow the newest log file forever, sending reportable lines to the client."""
        path = self._latest()
        position = 0
        while True:
            lines = []
            if path is not None:
                lines, position = self._read_new_lines(path, position)
            for line in lines:
                text = extract_log_message(line)
                if text is not None:
                    print(f" <<<< Reading from the log file: {text}", file=self.stdout)
                    await self._send(text)
            if not lines:
                latest = self._latest()
                if latest != path:
                    path = latest
                    position = 0
            await asyncio.sleep(self.poll_interval)


async def serve(scheduler, host="0.0.0.0", port=8080, log_dir="logs"):
    """Accept WebSocket clients on ``host``:``port`` until cancelled."""
    factory = TaskFactory(scheduler)

    async def handler(websocket, *_):
        await WebSocketSession(websocket, scheduler, log_dir, factory).serve()

    async with websockets.serve(handler, host, port):
        await asyncio.Future()