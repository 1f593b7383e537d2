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

import threading
import time
from unittest import TestCase

from s3wire import InternalError, LazyIterator, Result


class PagedFetch:
    """Fetch function serving canned pages and counting calls."""

    def __init__(self, *pages, error=None):
        self.pages = list(pages)
        self.error = error
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if not self.pages:
            raise self.error
        items = self.pages.pop(0)
        return items, bool(self.pages) or self.error is not None


class ResultTest(TestCase):
    def test_value(self):
        result = Result(value=1)
        self.assertTrue(result.ok)
        self.assertEqual(result.get(), 1)
        self.assertIsNone(result.error)

    def test_error(self):
        error = InternalError("failed")
        result = Result(error=error)
        self.assertFalse(result.ok)
        self.assertIsNone(result.value)
        with self.assertRaises(InternalError):
            result.get()

    def test_value_and_error(self):
        with self.assertRaises(ValueError):
            Result(value=1, error=InternalError("failed"))


class LazyIteratorTest(TestCase):
    def test_no_fetch_until_used(self):
        fetch = PagedFetch([1])
        LazyIterator(fetch)
        self.assertEqual(fetch.calls, 0)

    def test_pages(self):
        fetch = PagedFetch([1, 2], [3], [4, 5])
        iterator = LazyIterator(fetch)
        self.assertEqual([result.get() for result in iterator],
                         [1, 2, 3, 4, 5])
        self.assertEqual(fetch.calls, 3)
        self.assertEqual(iterator.pages, 3)

    def test_fetch_on_demand(self):
        fetch = PagedFetch([1, 2], [3])
        iterator = LazyIterator(fetch)
        self.assertEqual(iterator.next().get(), 1)
        self.assertEqual(iterator.next().get(), 2)
        self.assertEqual(fetch.calls, 1)
        self.assertEqual(iterator.next().get(), 3)
        self.assertEqual(fetch.calls, 2)

    def test_empty_truncated_page_skipped(self):
        fetch = PagedFetch([], [], [1])
        self.assertEqual([result.get() for result in LazyIterator(fetch)],
                         [1])
        self.assertEqual(fetch.calls, 3)

    def test_empty(self):
        iterator = LazyIterator(PagedFetch([]))
        self.assertFalse(iterator.has_next())
        with self.assertRaises(StopIteration):
            iterator.next()

    def test_error_delivered_last(self):
        fetch = PagedFetch([1, 2], error=InternalError("page failed"))
        results = list(LazyIterator(fetch))
        self.assertEqual([result.value for result in results[:2]], [1, 2])
        self.assertIsInstance(results[2].error, InternalError)
        self.assertEqual(len(results), 3)

    def test_error_delivered_once(self):
        fetch = PagedFetch(error=OSError("connection reset"))
        iterator = LazyIterator(fetch)
        self.assertTrue(iterator.has_next())
        self.assertIsInstance(iterator.next().error, OSError)
        self.assertFalse(iterator.has_next())
        with self.assertRaises(StopIteration):
            iterator.next()
        self.assertEqual(fetch.calls, 1)

    def test_unrecognised_error_propagates(self):
        fetch = PagedFetch(error=KeyError("bug"))
        with self.assertRaises(KeyError):
            list(LazyIterator(fetch))

    def test_exhausted_does_not_refetch(self):
        fetch = PagedFetch([1])
        iterator = LazyIterator(fetch)
        list(iterator)
        self.assertFalse(iterator.has_next())
        self.assertEqual(list(iterator), [])
        self.assertEqual(fetch.calls, 1)


class SlowPagedFetch(PagedFetch):
    """PagedFetch which sleeps and records overlapping calls."""

    def __init__(self, *pages):
        super().__init__(*pages)
        self.lock = threading.Lock()
        self.active = 0
        self.max_active = 0

    def __call__(self):
        with self.lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        time.sleep(0.01)
        try:
            return super().__call__()
        finally:
            with self.lock:
                self.active -= 1


class ConcurrentConsumptionTest(TestCase):
    def test_pages_fetched_once_across_threads(self):
        pages = [list(range(i * 3, i * 3 + 3)) for i in range(10)]
        fetch = SlowPagedFetch(*pages)
        iterator = LazyIterator(fetch)
        consumed = [[], []]

        def consume(values):
            for result in iterator:
                values.append(result.get())

        threads = [
            threading.Thread(target=consume, args=(values,))
            for values in consumed
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(fetch.calls, 10)
        self.assertEqual(fetch.max_active, 1)
        self.assertEqual(iterator.pages, 10)
        self.assertEqual(sorted(consumed[0] + consumed[1]), list(range(30)))
