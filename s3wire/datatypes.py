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
Response records of ListBuckets, ListObjects(V2), ListObjectVersions,
ListMultipartUploads, ListParts, CompleteMultipartUpload, CopyObject and
HeadObject APIs, and the bucket notification event stream.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional, Type, TypeVar, cast
from urllib.parse import unquote_plus
from xml.etree import ElementTree as ET

from urllib3._collections import HTTPHeaderDict

try:
    from urllib3.response import BaseHTTPResponse  # type: ignore[attr-defined]
except ImportError:
    from urllib3.response import HTTPResponse as BaseHTTPResponse

from .documents import Tags
from .time import from_http_header, from_iso8601utc
from .xml import find, findall, findtext, fromstring, localname


def _decode(value: Optional[str], encoding_type: Optional[str]):
    """Undo encoding-type=url applied by server."""
    if value is not None and encoding_type == "url":
        return unquote_plus(value)
    return value


def _is_true(value: Optional[str]) -> bool:
    return (value or "").lower() == "true"


def _strip_etag(value: Optional[str]) -> Optional[str]:
    return None if value is None else value.replace('"', "")


def _owner(element: ET.Element, tag: str) -> tuple[Optional[str], ...]:
    """(ID, DisplayName) of Owner/Initiator child element."""
    child = find(element, tag)
    if child is None:
        return None, None
    return findtext(child, "ID"), findtext(child, "DisplayName")


@dataclass(frozen=True)
class Bucket:
    """Bucket information."""
    name: str
    creation_date: Optional[datetime] = None


def parse_list_buckets(data: bytes) -> list[Bucket]:
    """Parse ListAllMyBucketsResult document."""
    element = fromstring(data)
    buckets = cast(ET.Element, find(element, "Buckets", True))
    return [
        Bucket(
            cast(str, findtext(bucket, "Name", True)),
            from_iso8601utc(findtext(bucket, "CreationDate")),
        )
        for bucket in findall(buckets, "Bucket")
    ]


B = TypeVar("B", bound="Object")


@dataclass(frozen=True)
class Object:
    """Object information found in listings."""
    bucket_name: str
    object_name: Optional[str]
    last_modified: Optional[datetime] = None
    etag: Optional[str] = None
    size: Optional[int] = None
    metadata: Optional[dict[str, str]] = None
    version_id: Optional[str] = None
    is_latest: Optional[str] = None
    storage_class: Optional[str] = None
    owner_id: Optional[str] = None
    owner_name: Optional[str] = None
    is_delete_marker: bool = False
    tags: Optional[Tags] = None
    is_dir: bool = field(default=False, init=False)

    def __post_init__(self):
        object.__setattr__(
            self,
            "is_dir",
            bool(self.object_name and self.object_name.endswith("/")),
        )

    @classmethod
    def fromxml(
            cls: Type[B],
            element: ET.Element,
            bucket_name: str,
            is_delete_marker: bool = False,
            encoding_type: Optional[str] = None,
    ) -> B:
        """Create new object with values from <Contents>, <Version> or
        <DeleteMarker> element."""
        size = findtext(element, "Size")
        owner_id, owner_name = _owner(element, "Owner")

        metadata: Optional[dict[str, str]] = None
        user_metadata = find(element, "UserMetadata")
        if user_metadata is not None:
            metadata = {
                localname(child): child.text or "" for child in user_metadata
            }

        tags: Optional[Tags] = None
        user_tags = findtext(element, "UserTags")
        if user_tags:
            tags = Tags.new_object_tags()
            for token in user_tags.split("&"):
                key, _, value = token.partition("=")
                tags[unquote_plus(key)] = unquote_plus(value)

        return cls(
            bucket_name=bucket_name,
            object_name=_decode(
                findtext(element, "Key", True), encoding_type,
            ),
            last_modified=from_iso8601utc(findtext(element, "LastModified")),
            etag=_strip_etag(findtext(element, "ETag")),
            size=None if size is None else int(size),
            metadata=metadata,
            version_id=findtext(element, "VersionId"),
            is_latest=findtext(element, "IsLatest"),
            storage_class=findtext(element, "StorageClass"),
            owner_id=owner_id,
            owner_name=owner_name,
            is_delete_marker=is_delete_marker,
            tags=tags,
        )


@dataclass(frozen=True)
class ListObjectsPage:
    """One page of ListObjects, ListObjectsV2 or ListObjectVersions."""
    objects: list[Object]
    is_truncated: bool
    continuation_token: Optional[str] = None
    version_id_marker: Optional[str] = None


def parse_list_objects(data: bytes) -> ListObjectsPage:
    """
    Parse ListObjects/ListObjectsV2/ListObjectVersions response. The
    continuation token is NextContinuationToken for V2, NextKeyMarker for
    versions and NextMarker for V1, falling back to the last key listed.
    """
    element = fromstring(data)
    bucket_name = cast(str, findtext(element, "Name", True))
    encoding_type = findtext(element, "EncodingType")

    objects = [
        Object.fromxml(tag, bucket_name, encoding_type=encoding_type)
        for tag in findall(element, "Contents")
    ]
    last_key = objects[-1].object_name if objects else None

    objects += [
        Object.fromxml(tag, bucket_name, encoding_type=encoding_type)
        for tag in findall(element, "Version")
    ]
    objects += [
        Object(
            bucket_name,
            _decode(findtext(tag, "Prefix", True), encoding_type),
        )
        for tag in findall(element, "CommonPrefixes")
    ]
    objects += [
        Object.fromxml(
            tag, bucket_name, is_delete_marker=True,
            encoding_type=encoding_type,
        )
        for tag in findall(element, "DeleteMarker")
    ]

    is_truncated = _is_true(findtext(element, "IsTruncated"))
    key_marker = _decode(findtext(element, "NextKeyMarker"), encoding_type)
    continuation_token = findtext(element, "NextContinuationToken")
    if key_marker is not None:
        continuation_token = key_marker
    if continuation_token is None:
        continuation_token = _decode(
            findtext(element, "NextMarker"), encoding_type,
        )
    if continuation_token is None and is_truncated:
        continuation_token = last_key
    return ListObjectsPage(
        objects=objects,
        is_truncated=is_truncated,
        continuation_token=continuation_token,
        version_id_marker=findtext(element, "NextVersionIdMarker"),
    )


C = TypeVar("C", bound="Part")


@dataclass(frozen=True)
class Part:
    """Part of a multipart upload."""
    part_number: int
    etag: str
    last_modified: Optional[datetime] = None
    size: Optional[int] = None

    @classmethod
    def fromxml(cls: Type[C], element: ET.Element) -> C:
        """Create new object with values from XML element."""
        size = findtext(element, "Size")
        return cls(
            part_number=int(cast(str, findtext(element, "PartNumber", True))),
            etag=cast(str, _strip_etag(findtext(element, "ETag", True))),
            last_modified=from_iso8601utc(findtext(element, "LastModified")),
            size=int(size) if size else None,
        )


D = TypeVar("D", bound="ListPartsResult")


@dataclass(frozen=True)
class ListPartsResult:
    """ListParts API result."""
    bucket_name: Optional[str] = None
    object_name: Optional[str] = None
    upload_id: Optional[str] = None
    storage_class: Optional[str] = None
    part_number_marker: Optional[int] = None
    next_part_number_marker: Optional[int] = None
    max_parts: Optional[int] = None
    is_truncated: bool = False
    parts: list[Part] = field(default_factory=list)

    @classmethod
    def fromxml(cls: Type[D], element: ET.Element) -> D:
        """Create new object with values from XML element."""
        def to_int(tag: str) -> Optional[int]:
            value = findtext(element, tag)
            return int(value) if value else None

        return cls(
            bucket_name=findtext(element, "Bucket"),
            object_name=findtext(element, "Key"),
            upload_id=findtext(element, "UploadId"),
            storage_class=findtext(element, "StorageClass"),
            part_number_marker=to_int("PartNumberMarker"),
            next_part_number_marker=to_int("NextPartNumberMarker"),
            max_parts=to_int("MaxParts"),
            is_truncated=_is_true(findtext(element, "IsTruncated")),
            parts=[Part.fromxml(tag) for tag in findall(element, "Part")],
        )


E = TypeVar("E", bound="Upload")


@dataclass(frozen=True)
class Upload:
    """Incomplete multipart upload. ``size`` is the total of its uploaded
    parts when aggregation was requested."""
    object_name: str
    upload_id: Optional[str] = None
    initiator_id: Optional[str] = None
    initiator_name: Optional[str] = None
    owner_id: Optional[str] = None
    owner_name: Optional[str] = None
    storage_class: Optional[str] = None
    initiated_time: Optional[datetime] = None
    size: Optional[int] = None

    @classmethod
    def fromxml(
            cls: Type[E],
            element: ET.Element,
            encoding_type: Optional[str] = None,
    ) -> E:
        """Create new object with values from <Upload> element."""
        initiator_id, initiator_name = _owner(element, "Initiator")
        owner_id, owner_name = _owner(element, "Owner")
        return cls(
            object_name=_decode(
                findtext(element, "Key", True), encoding_type,
            ),
            upload_id=findtext(element, "UploadId"),
            initiator_id=initiator_id,
            initiator_name=initiator_name,
            owner_id=owner_id,
            owner_name=owner_name,
            storage_class=findtext(element, "StorageClass"),
            initiated_time=from_iso8601utc(findtext(element, "Initiated")),
        )


F = TypeVar("F", bound="ListMultipartUploadsResult")


@dataclass(frozen=True)
class ListMultipartUploadsResult:
    """ListMultipartUploads API result."""
    bucket_name: Optional[str] = None
    encoding_type: Optional[str] = None
    next_key_marker: Optional[str] = None
    next_upload_id_marker: Optional[str] = None
    is_truncated: bool = False
    uploads: list[Upload] = field(default_factory=list)
    prefixes: list[str] = field(default_factory=list)

    @classmethod
    def fromxml(cls: Type[F], element: ET.Element) -> F:
        """Create new object with values from XML element."""
        encoding_type = findtext(element, "EncodingType")
        return cls(
            bucket_name=findtext(element, "Bucket"),
            encoding_type=encoding_type,
            next_key_marker=_decode(
                findtext(element, "NextKeyMarker"), encoding_type,
            ),
            next_upload_id_marker=findtext(element, "NextUploadIdMarker"),
            is_truncated=_is_true(findtext(element, "IsTruncated")),
            uploads=[
                Upload.fromxml(tag, encoding_type)
                for tag in findall(element, "Upload")
            ],
            prefixes=[
                cast(str, _decode(
                    findtext(tag, "Prefix", True), encoding_type,
                ))
                for tag in findall(element, "CommonPrefixes")
            ],
        )


@dataclass(frozen=True)
class ObjectWriteResult:
    """Result of any API creating an object."""
    bucket_name: str
    object_name: str
    version_id: Optional[str]
    etag: Optional[str]
    http_headers: HTTPHeaderDict
    last_modified: Optional[datetime] = None
    location: Optional[str] = None

    @classmethod
    def fromresponse(
            cls,
            response: BaseHTTPResponse,
            bucket_name: str,
            object_name: str,
    ) -> ObjectWriteResult:
        """Create result from headers of PutObject response."""
        return cls(
            bucket_name=bucket_name,
            object_name=object_name,
            version_id=response.headers.get("x-amz-version-id"),
            etag=_strip_etag(response.headers.get("etag")),
            http_headers=response.headers,
        )


def parse_complete_multipart_upload(
        response: BaseHTTPResponse,
        bucket_name: str,
        object_name: str,
) -> ObjectWriteResult:
    """Parse CompleteMultipartUploadResult document."""
    element = fromstring(response.data)
    return ObjectWriteResult(
        bucket_name=findtext(element, "Bucket") or bucket_name,
        object_name=findtext(element, "Key") or object_name,
        version_id=response.headers.get("x-amz-version-id"),
        etag=_strip_etag(findtext(element, "ETag")),
        http_headers=response.headers,
        location=findtext(element, "Location"),
    )


def parse_copy_object(data: bytes) -> tuple[str, Optional[datetime]]:
    """Parse CopyObjectResult/CopyPartResult document."""
    element = fromstring(data)
    etag = cast(str, _strip_etag(findtext(element, "ETag", True)))
    return etag, from_iso8601utc(findtext(element, "LastModified"))


@dataclass(frozen=True)
class StatObjectResult:
    """Object information returned by HeadObject."""
    bucket_name: str
    object_name: str
    size: int
    etag: Optional[str] = None
    last_modified: Optional[datetime] = None
    content_type: Optional[str] = None
    version_id: Optional[str] = None
    is_delete_marker: bool = False
    metadata: dict[str, str] = field(default_factory=dict)
    http_headers: Optional[HTTPHeaderDict] = None

    @classmethod
    def fromresponse(
            cls,
            response: BaseHTTPResponse,
            bucket_name: str,
            object_name: str,
    ) -> StatObjectResult:
        """Create result from headers of HeadObject response."""
        headers = response.headers
        metadata = {
            key.lower()[len("x-amz-meta-"):]: value
            for key, value in headers.items()
            if key.lower().startswith("x-amz-meta-")
        }
        return cls(
            bucket_name=bucket_name,
            object_name=object_name,
            size=int(headers.get("content-length", "0")),
            etag=_strip_etag(headers.get("etag")),
            last_modified=from_http_header(headers.get("last-modified")),
            content_type=headers.get("content-type"),
            version_id=headers.get("x-amz-version-id"),
            is_delete_marker=_is_true(headers.get("x-amz-delete-marker")),
            metadata=metadata,
            http_headers=headers,
        )


class EventIterable:
    """
    Iterator of bucket notification records read line by line from a
    streamed response. The stream is reopened when the server ends it;
    close() or leaving the context releases the connection and stops
    iteration.
    """

    def __init__(self, func: Callable[[], BaseHTTPResponse]):
        self._func = func
        self._response: Optional[BaseHTTPResponse] = None
        self._closed = False

    def _close_response(self):
        if self._response is not None:
            self._response.close()
            self._response.release_conn()
            self._response = None

    def close(self):
        """Stop listening and release the connection."""
        self._closed = True
        self._close_response()

    def __iter__(self):
        return self

    def __next__(self) -> dict:
        while not self._closed:
            if self._response is None:
                self._response = self._func()
            line = self._response.readline()
            if not line:
                self._close_response()
                continue
            line = line.strip()
            # Blank lines keep the connection alive.
            if not line:
                continue
            try:
                event = json.loads(line)
            except ValueError:
                self.close()
                raise
            if event.get("Records"):
                return event
        raise StopIteration()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, value, traceback):
        self.close()
