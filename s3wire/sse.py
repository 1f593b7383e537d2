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
s3wire.sse
~~~~~~~~~~

Server-side encryption settings, each rendered as request headers.
"""

from __future__ import annotations

import base64
import json
from abc import ABCMeta, abstractmethod
from typing import Any, Optional, cast

from .checksum import md5sum_hash

_SSE = "X-Amz-Server-Side-Encryption"
_SSEC_PREFIX = "X-Amz-Server-Side-Encryption-Customer-"
_COPY_SSEC_PREFIX = "X-Amz-Copy-Source-Server-Side-Encryption-Customer-"


class Sse(metaclass=ABCMeta):
    """Server-side encryption base class."""

    @abstractmethod
    def headers(self) -> dict[str, str]:
        """Headers for write and read requests."""

    def tls_required(self) -> bool:
        """Check whether this encryption may only be sent over TLS."""
        return True

    def copy_headers(self) -> dict[str, str]:
        """Headers describing a copy source encrypted this way."""
        return {}


class SseCustomerKey(Sse):
    """SSE-C: encryption with a 256 bit key supplied on each request."""

    def __init__(self, key: bytes):
        if len(key) != 32:
            raise ValueError("SSE-C keys need to be 256 bit base64 encoded")
        fields = {
            "Algorithm": "AES256",
            "Key": base64.b64encode(key).decode(),
            "Key-MD5": cast(str, md5sum_hash(key)),
        }
        self._headers = {
            _SSEC_PREFIX + name: value for name, value in fields.items()
        }
        self._copy_headers = {
            _COPY_SSEC_PREFIX + name: value for name, value in fields.items()
        }

    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    def copy_headers(self) -> dict[str, str]:
        return dict(self._copy_headers)


class SseKMS(Sse):
    """SSE-KMS: encryption with a key managed by the server's KMS."""

    def __init__(self, key: str, context: Optional[dict[str, Any]] = None):
        self._headers = {
            _SSE: "aws:kms",
            _SSE + "-Aws-Kms-Key-Id": key,
        }
        if context:
            self._headers[_SSE + "-Context"] = base64.b64encode(
                json.dumps(context).encode(),
            ).decode()

    def headers(self) -> dict[str, str]:
        return dict(self._headers)


class SseS3(Sse):
    """SSE-S3: encryption with a key owned by the server."""

    def headers(self) -> dict[str, str]:
        return {_SSE: "AES256"}

    def tls_required(self) -> bool:
        return False
