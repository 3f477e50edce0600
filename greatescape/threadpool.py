"""A fixed pool of worker threads with a wait-for-all barrier."""

from __future__ import annotations

import os
import threading
from collections import deque
from collections.abc import Callable
from typing import Optional


class ThreadPool:
    """Runs submitted callables on a fixed set of worker threads."""

    def __init__(self, workers: Optional[int] = None) -> None:
        count = workers if workers is not None else (os.cpu_count() or 1)
        if count < 1:
            raise ValueError("a thread pool needs at least one worker")
        self.workers = count
        self._tasks: deque[Callable[[], None]] = deque()
        self._lock = threading.Lock()
        self._task_ready = threading.Condition(self._lock)
        self._all_done = threading.Condition(self._lock)
        self._pending = 0
        self._stop = False
        self._errors: list[BaseException] = []
        self._threads = [
            threading.Thread(target=self._work, daemon=True) for _ in range(count)
        ]
        for thread in self._threads:
            thread.start()

    def _work(self) -> None:
        while True:
            with self._lock:
                while not self._stop and not self._tasks:
                    self._task_ready.wait()
                if self._stop:
                    return
                task = self._tasks.popleft()
            try:
                task()
            except Exception as exc:  # reported by wait()
                with self._lock:
                    self._errors.append(exc)
            with self._lock:
                self._pending -= 1
                if self._pending == 0:
                    self._all_done.notify_all()

    def submit(self, task: Callable[[], None]) -> None:
        """Queue a callable to run on a worker."""
        with self._lock:
            if self._stop:
                raise RuntimeError("thread pool is closed")
            self._pending += 1
            self._tasks.append(task)
            self._task_ready.notify()

    def wait(self) -> None:
        """Block until every submitted task has finished.

        Re-raises the first exception a task raised since the last wait.
        """
        with self._lock:
            while self._pending and not self._stop:
                self._all_done.wait()
            errors, self._errors = self._errors, []
        if errors:
            raise errors[0]

    def close(self) -> None:
        """Stop the workers, dropping tasks not yet started, and join them."""
        with self._lock:
            if self._stop:
                return
            self._stop = True
            self._pending -= len(self._tasks)
            self._tasks.clear()
            self._task_ready.notify_all()
            self._all_done.notify_all()
        for thread in self._threads:
            thread.join()

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, *args) -> None:
        self.close()