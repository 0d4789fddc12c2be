"""A small demonstration program: dump a file, then run rounds of workers.

Each round starts a fixed number of worker threads that share a task
counter. Every worker claims tasks until none are left and reports its own
number for each task it claims. The last worker to finish posts a signal
that the main thread waits on before it starts the next round.
"""

from __future__ import annotations

import argparse
import sys
import threading
from collections.abc import Callable, Sequence
from pathlib import Path

from tinyrt.formatting import printf

__all__ = ["Signal", "read_file", "run_workers", "main"]

DEFAULT_PATH = "Makefile"
DEFAULT_THREADS = 3
DEFAULT_TASKS = 30
DEFAULT_ROUNDS = 5


class Signal:
    """A binary signal: :meth:`post` makes it available, :meth:`wait` takes it.

    Posting an already available signal has no further effect, so several
    posts before a wait release only one waiter.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._available = False

    def wait(self) -> None:
        """Block until the signal is available, then take it."""
        with self._condition:
            self._condition.wait_for(lambda: self._available)
            self._available = False

    def post(self) -> None:
        """Make the signal available and wake one waiter."""
        with self._condition:
            if not self._available:
                self._available = True
                self._condition.notify()


def read_file(path: str | Path) -> bytes:
    """Return the whole contents of the file at ``path``."""
    return Path(path).read_bytes()


class _Round:
    """Shared state of one round of workers."""

    def __init__(self, thread_count: int, task_count: int, emit: Callable[[int], object]) -> None:
        self.thread_count = thread_count
        self.task_count = task_count
        self.emit = emit
        self.done = Signal()
        self.counts = [0] * thread_count
        self._lock = threading.Lock()
        self._emit_lock = threading.Lock()
        self._next_task = 0
        self._finished = 0

    def _claim(self) -> bool:
        with self._lock:
            task = self._next_task
            self._next_task += 1
        return task < self.task_count

    def work(self, number: int) -> None:
        try:
            while self._claim():
                self.counts[number] += 1
                with self._emit_lock:
                    self.emit(number)
        finally:
            with self._lock:
                self._finished += 1
                last = self._finished == self.thread_count
            if last:
                self.done.post()


def run_workers(
    thread_count: int, task_count: int, emit: Callable[[int], object]
) -> list[int]:
    """Share ``task_count`` tasks among ``thread_count`` worker threads.

    For every task it claims, a worker calls ``emit`` with its own number,
    counted from 0; calls to ``emit`` never overlap. Returns once every
    worker has finished, with the number of tasks each worker handled.
    """
    if thread_count < 1:
        raise ValueError("thread_count must be at least 1")
    if task_count < 0:
        raise ValueError("task_count must not be negative")

    state = _Round(thread_count, task_count, emit)
    threads = [
        threading.Thread(target=state.work, args=(number,), daemon=True)
        for number in range(thread_count)
    ]
    for thread in threads:
        thread.start()
    state.done.wait()
    for thread in threads:
        thread.join()
    return state.counts


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Print a file, then run rounds of worker threads."
    )
    parser.add_argument("path", nargs="?", default=DEFAULT_PATH, help="file to print")
    parser.add_argument("--threads", type=int, default=DEFAULT_THREADS, help="workers per round")
    parser.add_argument("--tasks", type=int, default=DEFAULT_TASKS, help="tasks per round")
    parser.add_argument("--rounds", type=int, default=DEFAULT_ROUNDS, help="number of rounds")
    args = parser.parse_args(argv)
    if args.threads < 1:
        parser.error("--threads must be at least 1")
    if args.tasks < 0:
        parser.error("--tasks must not be negative")
    if args.rounds < 0:
        parser.error("--rounds must not be negative")
    return args


def main(argv: Sequence[str] | None = None) -> int:
    """Run the demonstration; returns the process exit status."""
    args = _parse_args(argv)
    try:
        contents = read_file(args.path)
    except OSError as error:
        print(f"cannot read {args.path}: {error}", file=sys.stderr)
        return 1

    sys.stdout.write(contents.decode("utf-8", errors="replace"))

    for round_number in range(args.rounds):
        run_workers(args.threads, args.tasks, lambda number: printf("%d", number))
        printf("\nparent continues after iteration %d\n", round_number)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())