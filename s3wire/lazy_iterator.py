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

"""
s3wire.lazy_iterator
~~~~~~~~~~~~~~~~~~~~

Generic paginator for list style APIs.

A :class:`LazyIterator` is driven by a page fetch function. Each call of
the fetch function returns the items of one page and whether more pages
follow. Items are delivered one at a time wrapped in :class:`Result`. If
a fetch fails, the failure is delivered once as the final element and the
iterator completes.
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import Callable, Generic, Iterable, Optional, Tuple, TypeVar

from urllib3.exceptions import HTTPError

from .error import S3WireException

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

# Page fetch returns (items, truncated).
PageFetcher = Callable[[], Tuple[Iterable[T], bool]]

RECOGNISED_ERRORS = (S3WireException, ValueError, OSError, HTTPError)


class Result(Generic[T]):
    """Either an item or the error which ended the sequence."""

    __slots__ = ("_value", "_error")

    def __init__(
            self,
            value: Optional[T] = None,
            error: Optional[BaseException] = None,
    ):
        if error is not None and value is not None:
            raise ValueError("result must not carry both value and error")
        self._value = value
        self._error = error

    @property
    def ok(self) -> bool:
        """Check whether this result carries an item."""
        return self._error is None

    @property
    def value(self) -> Optional[T]:
        """Item or None on error."""
        return self._value

    @property
    def error(self) -> Optional[BaseException]:
        """Error or None on success."""
        return self._error

    def get(self) -> T:
        """Return item or raise the captured error."""
        if self._error is not None:
            raise self._error
        return self._value  # type: ignore[return-value]

    def __repr__(self):
        if self._error is not None:
            return f"Result(error={self._error!r})"
        return f"Result(value={self._value!r})"


class LazyIterator(Generic[T]):
    """Single pass iterator of Result over paginated responses."""

    def __init__(self, fetch: PageFetcher):
        self._fetch = fetch
        self._lock = RLock()
        self._items: list[T] = []
        self._index = 0
        self._truncated = True
        self._error: Optional[BaseException] = None
        self._completed = False
        self._pages = 0

    @property
    def pages(self) -> int:
        """Number of pages fetched so far."""
        return self._pages

    def _populate(self):
        """Fetch next page if current page is consumed and more exist."""
        with self._lock:
            if self._completed or self._error is not None:
                return
            if self._index < len(self._items) or not self._truncated:
                return
            try:
                items, truncated = self._fetch()
                self._items = list(items)
                self._truncated = bool(truncated)
            except RECOGNISED_ERRORS as exc:
                _LOGGER.debug("page fetch failed: %s", exc)
                self._items = []
                self._truncated = False
                self._error = exc
            else:
                _LOGGER.debug(
                    "fetched page %d with %d items, truncated=%s",
                    self._pages + 1, len(self._items), self._truncated,
                )
            self._index = 0
            self._pages += 1

    def has_next(self) -> bool:
        """Check whether next() would return an element."""
        with self._lock:
            # Empty truncated pages are skipped.
            while True:
                self._populate()
                if self._error is not None:
                    return True
                if self._index < len(self._items):
                    return True
                if self._completed or not self._truncated:
                    self._completed = True
                    return False

    def next(self) -> Result[T]:
        """Return next element; raise StopIteration once completed."""
        with self._lock:
            if not self.has_next():
                raise StopIteration()
            if self._error is not None:
                error, self._error = self._error, None
                self._completed = True
                return Result(error=error)
            item = self._items[self._index]
            self._index += 1
            return Result(value=item)

    def __iter__(self):
        return self

    def __next__(self) -> Result[T]:
        return self.next()
