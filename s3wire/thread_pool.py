# -*- coding: utf-8 -*-
# MinIO Python Library for Amazon S3 Compatible Cloud Storage, (C)
# [2014] - [2025] MinIO, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Bounded worker pool used for parallel part upload."""

from __future__ import annotations

from queue import Empty, Queue
from threading import BoundedSemaphore, Thread


class Worker(Thread):
    """Thread executing tasks from the tasks queue."""

    def __init__(
            self,
            tasks_queue: Queue,
            results_queue: Queue,
            exceptions_queue: Queue,
    ):
        Thread.__init__(self, daemon=True)
        self._tasks_queue = tasks_queue
        self._results_queue = results_queue
        self._exceptions_queue = exceptions_queue
        self.start()

    def run(self):
        while True:
            task = self._tasks_queue.get()
            if task is None:
                self._tasks_queue.task_done()
                break
            func, args, kwargs, release = task
            try:
                # Tasks queued after a failure are skipped.
                if self._exceptions_queue.empty():
                    self._results_queue.put(func(*args, **kwargs))
            except Exception as exc:  # pylint: disable=broad-except
                self._exceptions_queue.put(exc)
            finally:
                release()
                self._tasks_queue.task_done()


class ThreadPool:
    """
    Pool of threads consuming tasks from a queue. add_task() blocks while
    all workers are busy so that callers cannot buffer more part data than
    there are workers.
    """

    def __init__(self, num_threads: int):
        if num_threads < 1:
            raise ValueError("number of threads must be at least 1")
        self._results_queue: Queue = Queue()
        self._exceptions_queue: Queue = Queue()
        self._tasks_queue: Queue = Queue()
        self._sem = BoundedSemaphore(num_threads)
        self._num_threads = num_threads
        self._started = False
        self._stopped = False

    def add_task(self, func, *args, **kwargs):
        """Queue func(*args, **kwargs); blocks until a worker is free."""
        self._sem.acquire()  # pylint: disable=consider-using-with
        self._tasks_queue.put((func, args, kwargs, self._sem.release))

    def start_parallel(self):
        """Start worker threads."""
        if self._started:
            return
        self._started = True
        for _ in range(self._num_threads):
            Worker(
                self._tasks_queue, self._results_queue, self._exceptions_queue,
            )

    def failed(self) -> bool:
        """Check whether any task raised."""
        return not self._exceptions_queue.empty()

    def join(self):
        """Stop workers and wait for queued tasks to finish."""
        if not self._started or self._stopped:
            return
        self._stopped = True
        for _ in range(self._num_threads):
            self._tasks_queue.put(None)
        self._tasks_queue.join()

    def result(self) -> list:
        """
        Stop workers, wait for all tasks and return their results. The first
        exception raised by a task is re-raised here.
        """
        self.join()
        if not self._exceptions_queue.empty():
            raise self._exceptions_queue.get()
        results = []
        while True:
            try:
                results.append(self._results_queue.get_nowait())
            except Empty:
                return results
