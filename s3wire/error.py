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
s3wire.error
~~~~~~~~~~~~

Exception classes raised by this library.

Naming errors are raised before any request is built. Server declared
errors are :class:`S3Error`. A response the protocol does not allow is an
:class:`InvalidResponseError`. Bare HTTP 5xx responses are
:class:`ServerError`, a malformed XML document is an :class:`XmlParserError`
and everything the library cannot classify is an :class:`InternalError`.
"""

from __future__ import annotations

from typing import Optional, Type, TypeVar

try:
    from urllib3.response import BaseHTTPResponse  # type: ignore[attr-defined]
except ImportError:
    from urllib3.response import HTTPResponse as BaseHTTPResponse

from .xml import fromstring, findtext

_MAX_BODY_IN_MESSAGE = 1024


class S3WireException(Exception):
    """Base class of all exceptions raised by this library."""


class InvalidBucketNameError(S3WireException, ValueError):
    """Raised when a bucket name is not DNS compatible."""


class InvalidObjectNameError(S3WireException, ValueError):
    """Raised when an object name cannot be addressed safely."""


class InternalError(S3WireException):
    """Raised on unexpected protocol state or violated preconditions."""


class XmlParserError(S3WireException, ValueError):
    """Raised when a response document is not well-formed XML."""


class InvalidResponseError(S3WireException):
    """Raised when an error response is not a well-formed XML document."""

    def __init__(
            self,
            code: int,
            content_type: Optional[str],
            body: Optional[str],
    ):
        self._code = code
        self._content_type = content_type
        self._body = body
        if body and len(body) > _MAX_BODY_IN_MESSAGE:
            body = body[:_MAX_BODY_IN_MESSAGE] + "..."
        super().__init__(
            f"non-XML response from server; Response code: {code}, "
            f"Content-Type: {content_type}, Body: {body}"
        )

    @property
    def code(self) -> int:
        """HTTP status code."""
        return self._code

    @property
    def content_type(self) -> Optional[str]:
        """Content-Type of the response."""
        return self._content_type

    @property
    def body(self) -> Optional[str]:
        """Response body."""
        return self._body

    def __reduce__(self):
        return type(self), (self._code, self._content_type, self._body)


class ServerError(S3WireException):
    """Raised when server fails with HTTP 5xx and no error document."""

    def __init__(self, message: str, status_code: int):
        self._status_code = status_code
        super().__init__(message)

    @property
    def status_code(self) -> int:
        """HTTP status code."""
        return self._status_code

    def __reduce__(self):
        return type(self), (str(self), self._status_code)


E = TypeVar("E", bound="S3Error")


class S3Error(S3WireException):
    """Raised when server responds with an error code."""

    _FIELDS = (
        "code",
        "message",
        "resource",
        "request_id",
        "host_id",
        "bucket_name",
        "object_name",
    )

    def __init__(  # pylint: disable=too-many-positional-arguments
            self,
            response: Optional[BaseHTTPResponse],
            code: Optional[str],
            message: Optional[str],
            resource: Optional[str],
            request_id: Optional[str],
            host_id: Optional[str],
            bucket_name: Optional[str] = None,
            object_name: Optional[str] = None,
    ):
        self._response = response
        self._code = code
        self._message = message
        self._resource = resource
        self._request_id = request_id
        self._host_id = host_id
        self._bucket_name = bucket_name
        self._object_name = object_name

        details = [
            f"code: {code}",
            f"message: {message}",
            f"resource: {resource}",
            f"request_id: {request_id}",
            f"host_id: {host_id}",
        ]
        if bucket_name:
            details.append(f"bucket_name: {bucket_name}")
        if object_name:
            details.append(f"object_name: {object_name}")
        super().__init__("S3 operation failed; " + ", ".join(details))

    @property
    def response(self) -> Optional[BaseHTTPResponse]:
        """HTTP response carrying the error."""
        return self._response

    @property
    def status(self) -> Optional[int]:
        """HTTP status code of the response."""
        return self._response.status if self._response else None

    @property
    def code(self) -> Optional[str]:
        """Error code."""
        return self._code

    @property
    def message(self) -> Optional[str]:
        """Error message."""
        return self._message

    @property
    def resource(self) -> Optional[str]:
        """Resource path of the failed request."""
        return self._resource

    @property
    def request_id(self) -> Optional[str]:
        """x-amz-request-id of the failed request."""
        return self._request_id

    @property
    def host_id(self) -> Optional[str]:
        """x-amz-id-2 of the failed request."""
        return self._host_id

    @property
    def bucket_name(self) -> Optional[str]:
        """Bucket name."""
        return self._bucket_name

    @property
    def object_name(self) -> Optional[str]:
        """Object name."""
        return self._object_name

    @classmethod
    def fromxml(
            cls: Type[E],
            response: BaseHTTPResponse,
            bucket_name: Optional[str] = None,
            object_name: Optional[str] = None,
    ) -> E:
        """Create error from the XML body of response."""
        element = fromstring(response.data)
        return cls(
            response=response,
            code=findtext(element, "Code"),
            message=findtext(element, "Message"),
            resource=findtext(element, "Resource"),
            request_id=(
                findtext(element, "RequestId") or
                response.headers.get("x-amz-request-id")
            ),
            host_id=(
                findtext(element, "HostId") or
                response.headers.get("x-amz-id-2")
            ),
            bucket_name=findtext(element, "BucketName") or bucket_name,
            object_name=findtext(element, "Key") or object_name,
        )

    def copy(self, code: str, message: Optional[str]) -> S3Error:
        """Copy of this error with replaced code and message."""
        return S3Error(
            response=self._response,
            code=code,
            message=message,
            resource=self._resource,
            request_id=self._request_id,
            host_id=self._host_id,
            bucket_name=self._bucket_name,
            object_name=self._object_name,
        )

    def _values(self) -> tuple:
        return tuple(getattr(self, name) for name in self._FIELDS)

    def __repr__(self):
        fields = ", ".join(
            f"{name}={value!r}"
            for name, value in zip(self._FIELDS, self._values())
        )
        return f"S3Error({fields})"

    def __eq__(self, other):
        if not isinstance(other, S3Error):
            return NotImplemented
        return self._values() == other._values()

    def __hash__(self):
        return hash(self._values())

    def __reduce__(self):
        return type(self), (None,) + self._values()
