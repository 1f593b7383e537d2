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

"""Source objects of server-side copy and compose."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Type, TypeVar

from .error import InternalError
from .helpers import check_bucket_name, check_object_name, quote
from .sse import SseCustomerKey
from .time import to_http_header


@dataclass
class SourceObject:
    """Object to be read by a server-side copy, optionally a byte range."""
    bucket_name: str
    object_name: str
    version_id: Optional[str] = None
    ssec: Optional[SseCustomerKey] = None
    offset: Optional[int] = None
    length: Optional[int] = None
    match_etag: Optional[str] = None
    not_match_etag: Optional[str] = None
    modified_since: Optional[datetime] = None
    unmodified_since: Optional[datetime] = None

    def __post_init__(self):
        check_bucket_name(self.bucket_name)
        check_object_name(self.object_name)
        if (
                self.ssec is not None and
                not isinstance(self.ssec, SseCustomerKey)
        ):
            raise ValueError("ssec must be SseCustomerKey type")
        if self.offset is not None and self.offset < 0:
            raise ValueError("offset should be zero or greater")
        if self.length is not None and self.length <= 0:
            raise ValueError("length should be greater than zero")
        if self.match_etag == "":
            raise ValueError("match_etag must not be empty")
        if self.not_match_etag == "":
            raise ValueError("not_match_etag must not be empty")
        for name in ("modified_since", "unmodified_since"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, datetime):
                raise ValueError(f"{name} must be datetime type")

    @property
    def has_range(self) -> bool:
        """Check whether only part of the object is read."""
        return self.offset is not None or self.length is not None

    def gen_copy_headers(self) -> dict[str, str]:
        """Generate x-amz-copy-source* headers."""
        copy_source = quote("/" + self.bucket_name + "/" + self.object_name)
        if self.version_id:
            copy_source += "?versionId=" + quote(self.version_id, safe="")

        headers = {"x-amz-copy-source": copy_source}
        if self.ssec:
            headers.update(self.ssec.copy_headers())
        conditions = {
            "x-amz-copy-source-if-match": self.match_etag,
            "x-amz-copy-source-if-none-match": self.not_match_etag,
            "x-amz-copy-source-if-modified-since": (
                to_http_header(self.modified_since)
                if self.modified_since else None
            ),
            "x-amz-copy-source-if-unmodified-since": (
                to_http_header(self.unmodified_since)
                if self.unmodified_since else None
            ),
        }
        headers.update(
            {key: value for key, value in conditions.items() if value},
        )
        return headers


E = TypeVar("E", bound="CopySource")


@dataclass
class CopySource(SourceObject):
    """Source of copy_object."""

    @classmethod
    def of(cls: Type[E], src: SourceObject) -> E:
        """Create CopySource from another source."""
        return cls(
            bucket_name=src.bucket_name,
            object_name=src.object_name,
            version_id=src.version_id,
            ssec=src.ssec,
            offset=src.offset,
            length=src.length,
            match_etag=src.match_etag,
            not_match_etag=src.not_match_etag,
            modified_since=src.modified_since,
            unmodified_since=src.unmodified_since,
        )


F = TypeVar("F", bound="ComposeSource")


@dataclass
class ComposeSource(SourceObject):
    """
    Source of compose_object. ``expected_size`` pins the size the caller
    believes the object has; compose fails before starting if the live
    object differs.
    """
    expected_size: Optional[int] = None
    _object_size: Optional[int] = field(default=None, init=False, repr=False)
    _headers: Optional[dict[str, str]] = field(
        default=None, init=False, repr=False,
    )

    def _validate_size(self, object_size: int):
        """Validate object size with offset and length."""
        version = f"?versionId={self.version_id}" if self.version_id else ""
        source = f"source {self.bucket_name}/{self.object_name}{version}"

        if (
                self.expected_size is not None and
                self.expected_size != object_size
        ):
            raise ValueError(
                f"{source}: size {object_size} differs from expected size "
                f"{self.expected_size}"
            )
        if self.offset is not None and self.offset >= object_size:
            raise ValueError(
                f"{source}: offset {self.offset} is beyond object size "
                f"{object_size}"
            )
        if self.length is not None:
            end = (self.offset or 0) + self.length
            if end > object_size:
                raise ValueError(
                    f"{source}: compose size {end} is beyond object size "
                    f"{object_size}"
                )

    def build_headers(self, object_size: int, etag: str):
        """Record live size and pin the copy to the live etag."""
        self._validate_size(object_size)
        self._object_size = object_size
        headers = self.gen_copy_headers()
        headers["x-amz-copy-source-if-match"] = self.match_etag or etag
        self._headers = headers

    @property
    def object_size(self) -> int:
        """Live size of the source object."""
        if self._object_size is None:
            raise InternalError(
                "build_headers() must be called prior to "
                "this method invocation",
            )
        return self._object_size

    @property
    def compose_size(self) -> int:
        """Number of bytes this source contributes."""
        if self.length is not None:
            return self.length
        return self.object_size - (self.offset or 0)

    @property
    def headers(self) -> dict[str, str]:
        """Copy headers built by build_headers()."""
        if self._headers is None:
            raise InternalError(
                "build_headers() must be called prior to "
                "this method invocation",
            )
        return self._headers.copy()

    @classmethod
    def of(cls: Type[F], src: SourceObject) -> F:
        """Create ComposeSource from another source."""
        return cls(
            bucket_name=src.bucket_name,
            object_name=src.object_name,
            version_id=src.version_id,
            ssec=src.ssec,
            offset=src.offset,
            length=src.length,
            match_etag=src.match_etag,
            not_match_etag=src.not_match_etag,
            modified_since=src.modified_since,
            unmodified_since=src.unmodified_since,
        )
