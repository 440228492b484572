"""Command line entry: runs the scheduler and the WebSocket server side by side."""

import argparse
import asyncio
import sys
import threading

from .factory import TaskFactory
from .scheduler import Scheduler
from .server import serve


def build_parser():
    parser = argparse.ArgumentParser(
        prog="wrrsched",
        description="Weighted round-robin task scheduler with a WebSocket front end.",
    )
    parser.add_argument("--host", default="0.0.0.0", help="address to listen on")
    parser.add_argument("--port", type=int, default=8080, help="port to listen on")
    parser.add_argument("--log-dir", default="logs", help="directory for the HTML log files")
    parser.add_argument(
        "--no-input",
        action="store_true",
        help="do not read tasks from the console",
    )
    return parser


def main(argv=None):
    """Run until interrupted; return 1 if the server or the scheduler failed."""
    args = build_parser().parse_args(argv)
    scheduler = Scheduler(log_dir=args.log_dir)
    if not args.no_input:
        scheduler.input_source = TaskFactory(scheduler).insert_from_input

    stop = threading.Event()
    failures = []

    def run_scheduler():
        try:
            scheduler.run(stop)
        except Exception as exc:
            failures.append(exc)
            print(f"Scheduler stopped: {exc}", file=sys.stderr)

    print("Initializing Scheduler...", file=sys.stderr)
    worker = threading.Thread(target=run_scheduler, name="Scheduler", daemon=True)
    worker.start()

    status = 0
    try:
        asyncio.run(serve(scheduler, args.host, args.port, args.log_dir))
    except KeyboardInterrupt:
        pass
    except Exception as exc:
        print(f"Exception: {exc}", file=sys.stderr)
        status = 1
    finally:
        stop.set()
        worker.join()
    return 1 if failures else status


if __name__ == "__main__":
    sys.exit(main())