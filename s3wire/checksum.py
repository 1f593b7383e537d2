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

"""Payload hashing helpers used while signing requests."""

from __future__ import annotations

import base64
import hashlib
from typing import Optional

# MD5 hash of zero length byte array.
ZERO_MD5_HASH = "1B2M2Y8AsgTpgAmY7PhCfg=="
# SHA-256 hash of zero length byte array.
ZERO_SHA256_HASH = (
    "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
)
UNSIGNED_PAYLOAD = "UNSIGNED-PAYLOAD"


def _md5():
    # md5 is not used in a security context here.
    return hashlib.new(  # type: ignore[call-arg]
        "md5",
        usedforsecurity=False,
    )


def _to_bytes(data: str | bytes) -> bytes:
    return data.encode() if isinstance(data, str) else data


def md5sum_hash(data: Optional[str | bytes]) -> Optional[str]:
    """Compute MD5 of data and return hash as Base64 encoded value."""
    if data is None:
        return None
    hasher = _md5()
    hasher.update(_to_bytes(data))
    return base64.b64encode(hasher.digest()).decode()


def sha256_hash(data: Optional[str | bytes]) -> str:
    """Compute SHA-256 of data and return hash as hex encoded value."""
    return hashlib.sha256(_to_bytes(data or b"")).hexdigest()


def sha256_md5_hashes(data: bytes | memoryview) -> tuple[str, str]:
    """
    Compute SHA-256 (hex) and MD5 (Base64) of data in a single pass over
    the buffer.
    """
    sha256 = hashlib.sha256()
    md5 = _md5()
    view = memoryview(data)
    chunk_size = 64 * 1024
    for offset in range(0, len(view), chunk_size):
        chunk = view[offset:offset + chunk_size]
        sha256.update(chunk)
        md5.update(chunk)
    return sha256.hexdigest(), base64.b64encode(md5.digest()).decode()
