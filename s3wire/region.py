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

"""Per-client memo of bucket regions."""

from __future__ import annotations

import logging
from threading import Lock
from typing import Optional

_LOGGER = logging.getLogger(__name__)


class RegionCache:
    """
    Thread safe bucket name to region mapping. Entries never expire; they
    are dropped when a response shows the bucket is not where the cache
    says it is. Concurrent lookups of one bucket may both populate the
    entry; the last write wins.
    """

    def __init__(self):
        self._lock = Lock()
        self._regions: dict[str, str] = {}

    def get(self, bucket_name: str) -> Optional[str]:
        """Cached region of bucket or None."""
        with self._lock:
            return self._regions.get(bucket_name)

    def set(self, bucket_name: str, region: str):
        """Remember region of bucket."""
        with self._lock:
            self._regions[bucket_name] = region
        _LOGGER.debug("cached region %s for bucket %s", region, bucket_name)

    def remove(self, bucket_name: str):
        """Forget region of bucket."""
        with self._lock:
            removed = self._regions.pop(bucket_name, None)
        if removed is not None:
            _LOGGER.debug("removed cached region of bucket %s", bucket_name)

    def __contains__(self, bucket_name: str) -> bool:
        with self._lock:
            return bucket_name in self._regions

    def clear(self):
        """Forget all regions."""
        with self._lock:
            self._regions.clear()
