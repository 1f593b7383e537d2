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
s3wire.signer
~~~~~~~~~~~~~

AWS Signature Version 4 for request headers and presigned URLs. Every
function here is pure: the same request, credentials and time always give
the same signature.
"""

from __future__ import annotations

import hashlib
import hmac
import re
from datetime import datetime
from typing import Mapping
from urllib.parse import SplitResult

from . import time
from .checksum import UNSIGNED_PAYLOAD, sha256_hash
from .credentials import Credentials
from .helpers import DictType, queryencode, url_replace

SIGN_V4_ALGORITHM = "AWS4-HMAC-SHA256"
_MULTI_SPACE_REGEX = re.compile(r"( +)")
_SERVICE_NAME = "s3"


def _hmac_hash(key: bytes, data: bytes) -> bytes:
    """Return HMAC-SHA256 digest of given key and data."""
    return hmac.new(key, data, hashlib.sha256).digest()


def _get_scope(date: datetime, region: str) -> str:
    """Get credential scope string."""
    return f"{time.to_signer_date(date)}/{region}/{_SERVICE_NAME}/aws4_request"


def _get_canonical_headers(
        headers: Mapping[str, str | list[str] | tuple[str]],
) -> tuple[str, str]:
    """Get canonical headers and signed headers."""

    ordered_headers = {}
    for key, values in headers.items():
        key = key.lower()
        if key in ("authorization", "user-agent"):
            continue
        values = values if isinstance(values, (list, tuple)) else [values]
        ordered_headers[key] = ",".join([
            _MULTI_SPACE_REGEX.sub(" ", value).strip() for value in values
        ])

    keys = sorted(ordered_headers)
    signed_headers = ";".join(keys)
    canonical_headers = "\n".join(
        [f"{key}:{ordered_headers[key]}" for key in keys],
    )
    return canonical_headers, signed_headers


def _get_canonical_query_string(query: str) -> str:
    """Get canonical query string; query is already percent-encoded."""
    if not query:
        return ""
    pairs = []
    for param in query.split("&"):
        key, _, value = param.partition("=")
        pairs.append((key, value))
    return "&".join(f"{key}={value}" for key, value in sorted(pairs))


def _get_canonical_request_hash(
        method: str,
        url: SplitResult,
        canonical_headers: str,
        signed_headers: str,
        content_sha256: str,
) -> str:
    """Get SHA-256 of canonical request."""
    # CanonicalRequest =
    #   HTTPRequestMethod + '\n' +
    #   CanonicalURI + '\n' +
    #   CanonicalQueryString + '\n' +
    #   CanonicalHeaders + '\n\n' +
    #   SignedHeaders + '\n' +
    #   HexEncode(Hash(RequestPayload))
    canonical_request = (
        f"{method}\n"
        f"{url.path or '/'}\n"
        f"{_get_canonical_query_string(url.query)}\n"
        f"{canonical_headers}\n\n"
        f"{signed_headers}\n"
        f"{content_sha256}"
    )
    return sha256_hash(canonical_request)


def _get_string_to_sign(
        date: datetime,
        scope: str,
        canonical_request_hash: str,
) -> str:
    """Get string-to-sign."""
    return (
        f"{SIGN_V4_ALGORITHM}\n{time.to_amz_date(date)}\n{scope}\n"
        f"{canonical_request_hash}"
    )


def _get_signing_key(secret_key: str, date: datetime, region: str) -> bytes:
    """Derive signing key by HMAC chain over date, region and service."""
    date_key = _hmac_hash(
        ("AWS4" + secret_key).encode(),
        time.to_signer_date(date).encode(),
    )
    date_region_key = _hmac_hash(date_key, region.encode())
    service_key = _hmac_hash(date_region_key, _SERVICE_NAME.encode())
    return _hmac_hash(service_key, b"aws4_request")


def _get_signature(signing_key: bytes, string_to_sign: str) -> str:
    """Get hex encoded signature."""
    return hmac.new(
        signing_key, string_to_sign.encode(), hashlib.sha256,
    ).hexdigest()


def sign_v4_s3(  # pylint: disable=too-many-positional-arguments
        method: str,
        url: SplitResult,
        region: str,
        headers: DictType,
        credentials: Credentials,
        content_sha256: str,
        date: datetime,
) -> DictType:
    """
    Sign request for S3 service and set Authorization header. Headers must
    already carry Host, x-amz-date and x-amz-content-sha256.
    """
    scope = _get_scope(date, region)
    canonical_headers, signed_headers = _get_canonical_headers(headers)
    canonical_request_hash = _get_canonical_request_hash(
        method, url, canonical_headers, signed_headers, content_sha256,
    )
    string_to_sign = _get_string_to_sign(date, scope, canonical_request_hash)
    signing_key = _get_signing_key(credentials.secret_key, date, region)
    signature = _get_signature(signing_key, string_to_sign)
    headers["Authorization"] = (
        f"{SIGN_V4_ALGORITHM} Credential={credentials.access_key}/{scope}, "
        f"SignedHeaders={signed_headers}, Signature={signature}"
    )
    return headers


def presign_v4(  # pylint: disable=too-many-positional-arguments
        method: str,
        url: SplitResult,
        region: str,
        credentials: Credentials,
        date: datetime,
        expires: int,
) -> SplitResult:
    """
    Presign URL; signature and expiry are appended as query parameters and
    only the host header is signed.
    """
    scope = _get_scope(date, region)
    credential = queryencode(credentials.access_key + "/" + scope)

    query = url.query + "&" if url.query else ""
    query += (
        f"X-Amz-Algorithm={SIGN_V4_ALGORITHM}"
        f"&X-Amz-Credential={credential}"
        f"&X-Amz-Date={time.to_amz_date(date)}"
        f"&X-Amz-Expires={expires}"
        f"&X-Amz-SignedHeaders=host"
    )
    if credentials.session_token:
        query += (
            f"&X-Amz-Security-Token={queryencode(credentials.session_token)}"
        )
    url = url_replace(url, query=query)

    canonical_request_hash = _get_canonical_request_hash(
        method, url, "host:" + url.netloc, "host", UNSIGNED_PAYLOAD,
    )
    string_to_sign = _get_string_to_sign(date, scope, canonical_request_hash)
    signing_key = _get_signing_key(credentials.secret_key, date, region)
    signature = _get_signature(signing_key, string_to_sign)
    return url_replace(
        url, query=url.query + "&X-Amz-Signature=" + queryencode(signature),
    )
