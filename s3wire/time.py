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

"""Date/time formats used on the wire."""

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime

AMZ_DATE_FORMAT = "%Y%m%dT%H%M%SZ"
SIGNER_DATE_FORMAT = "%Y%m%d"
_ISO8601_FORMATS = ("%Y-%m-%dT%H:%M:%S.%fZ", "%Y-%m-%dT%H:%M:%SZ")


def _as_utc(value: datetime) -> datetime:
    """Return aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utcnow() -> datetime:
    """Current time as timezone aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_amz_date(value: datetime) -> str:
    """Format datetime as x-amz-date value, e.g. 20150830T123600Z."""
    return _as_utc(value).strftime(AMZ_DATE_FORMAT)


def to_signer_date(value: datetime) -> str:
    """Format datetime as credential scope date, e.g. 20150830."""
    return _as_utc(value).strftime(SIGNER_DATE_FORMAT)


def from_iso8601utc(value: str | None) -> datetime | None:
    """Parse ISO-8601 UTC time as found in XML responses."""
    if not value:
        return None
    for fmt in _ISO8601_FORMATS:
        try:
            return datetime.strptime(value, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    raise ValueError(f"time data {value} is not in ISO-8601 UTC format")


def to_iso8601utc(value: datetime | None) -> str | None:
    """Format datetime as ISO-8601 UTC time with millisecond precision."""
    if value is None:
        return None
    value = _as_utc(value)
    millis = value.microsecond // 1000
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{millis:03d}Z"


def to_http_header(value: datetime) -> str:
    """Format datetime as RFC 7231 HTTP date."""
    return format_datetime(_as_utc(value), usegmt=True)


def from_http_header(value: str | None) -> datetime | None:
    """Parse RFC 7231 HTTP date such as Last-Modified header value."""
    if not value:
        return None
    try:
        return _as_utc(parsedate_to_datetime(value))
    except (TypeError, ValueError) as exc:
        raise ValueError(
            f"time data {value} does not match HTTP header format",
        ) from exc
