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

# pylint: disable=too-many-arguments
# pylint: disable=too-many-branches
# pylint: disable=too-many-lines
# pylint: disable=too-many-public-methods
# pylint: disable=too-many-statements
# pylint: disable=too-many-locals

"""
Simple Storage Service (aka S3) client to perform bucket and object operations.
"""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from datetime import datetime, timedelta
from typing import BinaryIO, Iterable, Optional, Union, cast
from urllib.parse import urlunsplit

import certifi
import urllib3
from urllib3 import Retry
from urllib3._collections import HTTPHeaderDict

try:
    from urllib3.response import BaseHTTPResponse  # type: ignore[attr-defined]
except ImportError:
    from urllib3.response import HTTPResponse as BaseHTTPResponse

from urllib3.util import Timeout

from . import time
from .checksum import (UNSIGNED_PAYLOAD, ZERO_SHA256_HASH, md5sum_hash,
                       sha256_md5_hashes)
from .credentials import Provider, StaticProvider
from .datatypes import (Bucket, EventIterable, ListMultipartUploadsResult,
                        ListPartsResult, Object, ObjectWriteResult, Part,
                        StatObjectResult, Upload,
                        parse_complete_multipart_upload,
                        parse_copy_object, parse_list_buckets,
                        parse_list_objects)
from .deleteobjects import (MAX_DELETE_OBJECTS, DeleteError, DeleteObject,
                            DeleteRequest, DeleteResult)
from .documents import LegalHold, Retention, Tags, VersioningConfig
from .error import (InternalError, InvalidResponseError, S3Error, ServerError,
                    XmlParserError)
from .helpers import (_DEFAULT_USER_AGENT, MAX_MULTIPART_COUNT,
                      MAX_MULTIPART_OBJECT_SIZE, MAX_PART_SIZE, MIN_PART_SIZE,
                      BaseURL, DictType, check_bucket_name, check_object_name,
                      check_non_empty_string, genheaders, get_part_info,
                      headers_to_strings, queryencode, read_part_data)
from .lazy_iterator import LazyIterator
from .region import RegionCache
from .select import SelectObjectReader, SelectRequest
from .signer import presign_v4, sign_v4_s3
from .sources import ComposeSource, CopySource
from .sse import Sse, SseCustomerKey
from .thread_pool import ThreadPool
from .time import to_http_header
from .xml import (Element, SubElement, findtext, fromstring, getbytes,
                  localname, marshal, unmarshal)

_LOGGER = logging.getLogger(__name__)

COPY = "COPY"
REPLACE = "REPLACE"

_DEFAULT_REGION = "us-east-1"
_SUCCESS_STATUS = (200, 204, 206)
_MAX_PRESIGN_EXPIRY = 604800  # 7 days


def _header_dict(*sources: Optional[DictType]) -> HTTPHeaderDict:
    """Merge header mappings; list values become repeated headers."""
    headers = HTTPHeaderDict()
    for source in sources:
        for key, value in (source or {}).items():
            values = value if isinstance(value, (list, tuple)) else [value]
            for item in values:
                headers.add(key, item)
    return headers


def _query_dict(*sources: Optional[DictType]) -> DictType:
    """Merge query parameter mappings."""
    query: dict[str, list[str]] = {}
    for source in sources:
        for key, value in (source or {}).items():
            values = value if isinstance(value, (list, tuple)) else [value]
            query.setdefault(key, []).extend(str(item) for item in values)
    return cast(DictType, query)


def _to_body(body) -> Optional[bytes]:
    """Serialize request payload to bytes."""
    if body is None or isinstance(body, bytes):
        return body
    if isinstance(body, (bytearray, memoryview)):
        return bytes(body)
    if isinstance(body, str):
        return body.encode()
    if callable(getattr(body, "toxml", None)):
        return marshal(body)
    raise ValueError(f"unsupported request body type {type(body).__name__}")


def _document(config: Union[str, bytes]) -> bytes:
    """Validate caller supplied XML or JSON document."""
    check_non_empty_string(config)
    return config.encode() if isinstance(config, str) else config


class S3Client:
    """
    Simple Storage Service (aka S3) client to perform bucket and object
    operations.
    """
    _region_cache: RegionCache
    _base_url: BaseURL
    _user_agent: str
    _provider: Optional[Provider]
    _http: urllib3.PoolManager

    def __init__(
            self,
            endpoint: str,
            access_key: Optional[str] = None,
            secret_key: Optional[str] = None,
            session_token: Optional[str] = None,
            secure: bool = True,
            region: Optional[str] = None,
            http_client: Optional[urllib3.PoolManager] = None,
            credentials: Optional[Provider] = None,
            cert_check: bool = True,
            timeout: Optional[Union[Timeout, float]] = None,
            max_retries: int = 5,
    ):
        """
        Initializes a new client object.

        Args:
            endpoint (str):
                Hostname of an S3 service, optionally with port.

            access_key (Optional[str], default=None):
                Access key (aka user ID) of your account in the S3 service.

            secret_key (Optional[str], default=None):
                Secret key (aka password) of your account in the S3 service.

            session_token (Optional[str], default=None):
                Session token of your account in the S3 service.

            secure (bool, default=True):
                Flag to indicate whether to use a secure (TLS) connection
                to the S3 service.

            region (Optional[str], default=None):
                Region name of buckets in the S3 service. When set, bucket
                location lookups are skipped.

            http_client (Optional[urllib3.PoolManager], default=None):
                Customized HTTP client.

            credentials (Optional[Provider], default=None):
                Credentials provider of your account in the S3 service.

            cert_check (bool, default=True):
                Flag to enable/disable server certificate validation
                for HTTPS connections.

            timeout (Optional[Union[Timeout, float]], default=None):
                Connect and read timeout of the default HTTP client; five
                minutes each when not given.

            max_retries (int, default=5):
                Transport level retries of the default HTTP client.

        Example:
            >>> from s3wire import S3Client
            >>>
            >>> # Create client with anonymous access
            >>> client = S3Client(endpoint="play.min.io")
            >>>
            >>> # Create client with access and secret key
            >>> client = S3Client(
            ...     endpoint="s3.amazonaws.com",
            ...     access_key="ACCESS-KEY",
            ...     secret_key="SECRET-KEY",
            ... )
        """
        # Validate http client has correct base class.
        if http_client and not isinstance(http_client, urllib3.PoolManager):
            raise TypeError(
                "HTTP client should be urllib3.PoolManager like object, "
                f"got {type(http_client).__name__}",
            )

        self._region_cache = RegionCache()
        self._base_url = BaseURL(
            ("https://" if secure else "http://") + endpoint,
            region,
        )
        self._user_agent = _DEFAULT_USER_AGENT
        if access_key:
            if secret_key is None:
                raise ValueError("secret key must be provided with access key")
            credentials = StaticProvider(access_key, secret_key, session_token)
        self._provider = credentials

        if timeout is None:
            seconds = timedelta(minutes=5).seconds
            timeout = Timeout(connect=seconds, read=seconds)
        # Load CA certificates from SSL_CERT_FILE file if set
        self._http = http_client or urllib3.PoolManager(
            timeout=timeout,
            maxsize=10,
            cert_reqs='CERT_REQUIRED' if cert_check else 'CERT_NONE',
            ca_certs=os.environ.get('SSL_CERT_FILE') or certifi.where(),
            retries=Retry(
                total=max_retries,
                backoff_factor=0.2,
                status_forcelist=[500, 502, 503, 504]
            )
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, exc_traceback):
        self.close()

    def close(self):
        """Close pooled connections."""
        self._http.clear()

    @property
    def region_cache(self) -> RegionCache:
        """Bucket region cache of this client."""
        return self._region_cache

    def _check_sse(self, sse: Optional[Sse], ssec_only: bool = False):
        """Check encryption type and that it is usable on this endpoint."""
        if sse is None:
            return
        if ssec_only and not isinstance(sse, SseCustomerKey):
            raise ValueError("ssec must be SseCustomerKey type")
        if not isinstance(sse, Sse):
            raise ValueError("sse must be Sse type")
        if sse.tls_required() and not self._base_url.is_https:
            raise ValueError(
                "SSE-C and SSE-KMS operations must be performed over a "
                "secure connection",
            )

    @staticmethod
    def _gen_read_headers(
            ssec: Optional[SseCustomerKey] = None,
            offset: int = 0,
            length: Optional[int] = None,
            match_etag: Optional[str] = None,
            not_match_etag: Optional[str] = None,
            modified_since: Optional[datetime] = None,
            unmodified_since: Optional[datetime] = None,
    ) -> DictType:
        """Generates conditional headers for get/head object."""
        headers: DictType = {}
        if ssec:
            headers.update(ssec.headers())
        if offset or length:
            end = (offset + length - 1) if length else ""
            headers["Range"] = f"bytes={offset}-{end}"
        if match_etag:
            headers["if-match"] = match_etag
        if not_match_etag:
            headers["if-none-match"] = not_match_etag
        if modified_since:
            headers["if-modified-since"] = to_http_header(modified_since)
        if unmodified_since:
            headers["if-unmodified-since"] = to_http_header(unmodified_since)
        return headers

    @staticmethod
    def _gen_write_headers(
            metadata: Optional[DictType] = None,
            sse: Optional[Sse] = None,
            tags: Optional[Tags] = None,
            retention: Optional[Retention] = None,
            legal_hold: bool = False,
    ) -> DictType:
        """Generate headers for given parameters."""
        if tags is not None and not isinstance(tags, Tags):
            raise ValueError("tags must be Tags type")
        if retention is not None and not isinstance(retention, Retention):
            raise ValueError("retention must be Retention type")
        return genheaders(metadata, sse, tags, retention, legal_hold)

    def _handle_redirect_response(
            self,
            method: str,
            response: BaseHTTPResponse,
            bucket_name: Optional[str] = None,
            object_name: Optional[str] = None,
            retry: bool = False,
    ) -> tuple[Optional[str], Optional[str]]:
        """
        Handle redirect response indicates whether retry HEAD request
        on failure.
        """
        code, message = {
            301: ("PermanentRedirect", "Moved Permanently"),
            307: ("Redirect", "Temporary redirect"),
            400: ("BadRequest", "Bad request"),
        }.get(response.status, (None, None))
        region = response.headers.get("x-amz-bucket-region")
        if message and region:
            message += "; use region " + region

        # HEAD on a bucket with a stale cached region.
        if (
                retry and method == "HEAD" and bucket_name and
                not object_name and (region or response.status == 400) and
                self._region_cache.get(bucket_name)
        ):
            code, message = ("RetryHead", None)
        return code, message

    def _url_open(
            self,
            method: str,
            region: str,
            bucket_name: Optional[str] = None,
            object_name: Optional[str] = None,
            body=None,
            headers: Optional[DictType] = None,
            query_params: Optional[DictType] = None,
            preload_content: bool = True,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> BaseHTTPResponse:
        """Execute HTTP request."""
        url = self._base_url.build(
            method=method,
            region=region,
            bucket_name=bucket_name,
            object_name=object_name,
            query_params=_query_dict(query_params, extra_query_params),
        )
        body = _to_body(body)
        headers = _header_dict(headers, extra_headers)
        headers["Host"] = url.netloc
        headers["Accept-Encoding"] = "identity"
        headers["User-Agent"] = self._user_agent

        if method in ["PUT", "POST"]:
            headers["Content-Length"] = str(len(body or b""))
            if not headers.get("Content-Type"):
                headers["Content-Type"] = "application/octet-stream"

        content_sha256 = headers.get("x-amz-content-sha256")
        if body is not None and not content_sha256:
            if self._provider is not None and not self._base_url.is_https:
                content_sha256, content_md5 = sha256_md5_hashes(body)
            else:
                content_sha256 = UNSIGNED_PAYLOAD
                content_md5 = cast(str, md5sum_hash(body))
            if not headers.get("Content-MD5"):
                headers["Content-MD5"] = content_md5
        content_sha256 = content_sha256 or ZERO_SHA256_HASH
        headers["x-amz-content-sha256"] = content_sha256

        date = time.utcnow()
        headers["x-amz-date"] = time.to_amz_date(date)
        if self._provider is not None:
            creds = self._provider.retrieve()
            if creds.session_token:
                headers["X-Amz-Security-Token"] = creds.session_token
            signed = sign_v4_s3(
                method=method,
                url=url,
                region=region,
                headers={key: headers.getlist(key) for key in headers},
                credentials=creds,
                content_sha256=content_sha256,
                date=date,
            )
            headers["Authorization"] = cast(str, signed["Authorization"])

        if _LOGGER.isEnabledFor(logging.DEBUG):
            query = ("?" + url.query) if url.query else ""
            _LOGGER.debug(
                "%s %s%s\n%s", method, url.path, query,
                headers_to_strings(headers, titled_key=True),
            )

        # PUT and POST are never replayed by the transport.
        retry_args = {"retries": False} if method in ["PUT", "POST"] else {}
        response = self._http.urlopen(
            method,
            urlunsplit(url),
            body=body,
            headers=headers,
            preload_content=preload_content,
            **retry_args,
        )
        _LOGGER.debug(
            "%s %s returned HTTP status %s", method, url.path, response.status,
        )

        if response.status in _SUCCESS_STATUS:
            return response

        response.read(cache_content=True)
        if not preload_content:
            response.release_conn()

        if (
                method != "HEAD" and
                "application/xml" not in response.headers.get(
                    "content-type", "",
                ).split(";")
        ):
            if (
                    (response.status == 304 or response.status >= 500) and
                    not response.data
            ):
                raise ServerError(
                    f"server failed with HTTP status code {response.status}",
                    response.status,
                )
            raise InvalidResponseError(
                response.status,
                response.headers.get("content-type"),
                response.data.decode(errors="replace")
                if response.data else None,
            )

        if not response.data and method != "HEAD":
            raise InvalidResponseError(
                response.status,
                response.headers.get("content-type"),
                None,
            )

        response_error: Optional[S3Error] = None
        if response.data:
            try:
                response_error = S3Error.fromxml(
                    response, bucket_name, object_name,
                )
            except XmlParserError as exc:
                raise InvalidResponseError(
                    response.status,
                    response.headers.get("content-type"),
                    response.data.decode(errors="replace"),
                ) from exc

        error_map = {
            301: lambda: self._handle_redirect_response(
                method, response, bucket_name, object_name, True,
            ),
            307: lambda: self._handle_redirect_response(
                method, response, bucket_name, object_name, True,
            ),
            400: lambda: self._handle_redirect_response(
                method, response, bucket_name, object_name, True,
            ),
            403: lambda: ("AccessDenied", "Access denied"),
            404: lambda: (
                ("NoSuchKey", "Object does not exist")
                if object_name
                else ("NoSuchBucket", "Bucket does not exist")
                if bucket_name
                else ("ResourceNotFound", "Request resource not found")
            ),
            405: lambda: (
                "MethodNotAllowed",
                "The specified method is not allowed against this resource",
            ),
            409: lambda: (
                ("NoSuchBucket", "Bucket does not exist")
                if bucket_name
                else ("ResourceConflict", "Request resource conflicts")
            ),
            412: lambda: (
                "PreconditionFailed",
                "At least one of the preconditions you specified did not hold",
            ),
            416: lambda: (
                "InvalidRange", "The requested range is not satisfiable",
            ),
            501: lambda: (
                "MethodNotAllowed",
                "The specified method is not allowed against this resource",
            ),
        }

        if not response_error:
            func = error_map.get(response.status)
            code, message = func() if func else (None, None)
            if not code:
                if response.status >= 500 or response.status == 304:
                    raise ServerError(
                        f"server failed with HTTP status code "
                        f"{response.status}",
                        response.status,
                    )
                raise InternalError(
                    f"unexpected HTTP status code {response.status} "
                    f"for {method} {url.path}"
                )
            response_error = S3Error(
                response=response,
                code=code,
                message=message,
                resource=url.path,
                request_id=response.headers.get("x-amz-request-id"),
                host_id=response.headers.get("x-amz-id-2"),
                bucket_name=bucket_name,
                object_name=object_name,
            )

        if response_error.code in ["NoSuchBucket", "RetryHead"]:
            if bucket_name is not None:
                self._region_cache.remove(bucket_name)

        raise response_error

    def _execute(
            self,
            method: str,
            bucket_name: Optional[str] = None,
            object_name: Optional[str] = None,
            body=None,
            headers: Optional[DictType] = None,
            query_params: Optional[DictType] = None,
            preload_content: bool = True,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> BaseHTTPResponse:
        """Execute HTTP request on the region of the bucket."""
        kwargs = {
            "method": method,
            "bucket_name": bucket_name,
            "object_name": object_name,
            "body": body,
            "headers": headers,
            "query_params": query_params,
            "preload_content": preload_content,
            "extra_headers": extra_headers,
            "extra_query_params": extra_query_params,
        }
        try:
            return self._url_open(
                region=self._get_region(bucket_name, region), **kwargs,
            )
        except S3Error as exc:
            if exc.code != "RetryHead":
                raise

        # Retry only once on RetryHead error, with the region looked up
        # again.
        _LOGGER.debug("retrying HEAD on bucket %s", bucket_name)
        try:
            return self._url_open(
                region=self._get_region(bucket_name, region), **kwargs,
            )
        except S3Error as exc:
            if exc.code != "RetryHead":
                raise
            code, message = self._handle_redirect_response(
                method, cast(BaseHTTPResponse, exc.response), bucket_name,
                object_name,
            )
            raise exc.copy(cast(str, code), message) from exc

    def _get_region(
            self,
            bucket_name: Optional[str] = None,
            region: Optional[str] = None,
    ) -> str:
        """
        Return region of given bucket either from region cache or set in
        constructor.
        """
        if (
                region is not None and self._base_url.region is not None and
                region != self._base_url.region
        ):
            raise ValueError(
                f"region must be {self._base_url.region}, but passed {region}",
            )

        if region is not None:
            return region

        if self._base_url.region is not None:
            return self._base_url.region

        if not bucket_name or not self._provider:
            return _DEFAULT_REGION

        region = self._region_cache.get(bucket_name)
        if region:
            return region

        # Execute GetBucketLocation REST API to get region of the bucket.
        _LOGGER.debug("looking up location of bucket %s", bucket_name)
        response = self._url_open(
            method="GET",
            region=_DEFAULT_REGION,
            bucket_name=bucket_name,
            query_params={"location": ""},
        )

        element = fromstring(response.data)
        if not element.text:
            region = _DEFAULT_REGION
        elif element.text == "EU" and self._base_url.is_aws_host:
            region = "eu-west-1"
        else:
            region = element.text

        self._region_cache.set(bucket_name, region)
        return region

    def enable_accelerate_endpoint(self):
        """Enables accelerate endpoint for Amazon S3 endpoint."""
        self._base_url.accelerate_host_flag = True

    def disable_accelerate_endpoint(self):
        """Disables accelerate endpoint for Amazon S3 endpoint."""
        self._base_url.accelerate_host_flag = False

    def enable_dualstack_endpoint(self):
        """Enables dualstack endpoint for Amazon S3 endpoint."""
        self._base_url.dualstack_host_flag = True

    def disable_dualstack_endpoint(self):
        """Disables dualstack endpoint for Amazon S3 endpoint."""
        self._base_url.dualstack_host_flag = False

    def enable_virtual_style_endpoint(self):
        """Enables virtual style endpoint."""
        self._base_url.virtual_style_flag = True

    def disable_virtual_style_endpoint(self):
        """Disables virtual style endpoint."""
        self._base_url.virtual_style_flag = False

    def make_bucket(
            self,
            bucket_name: str,
            location: Optional[str] = None,
            object_lock: bool = False,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """
        Create a bucket with region and object lock.

        Args:
            bucket_name (str):
                Name of the bucket.

            location (Optional[str], default=None):
                Region in which the bucket will be created.

            object_lock (bool, default=False):
                Flag to enable the object lock feature.

            extra_headers (Optional[DictType], default=None):
                Extra headers for advanced usage.

            extra_query_params (Optional[DictType], default=None):
                Extra query parameters for advanced usage.

        Example:
            >>> client.make_bucket(bucket_name="my-bucket")
            >>> client.make_bucket(
            ...     bucket_name="my-bucket",
            ...     location="eu-west-2",
            ...     object_lock=True,
            ... )
        """
        check_bucket_name(bucket_name)
        if self._base_url.region:
            # Error out if region does not match with region passed via
            # constructor.
            if location and self._base_url.region != location:
                raise ValueError(
                    f"region must be {self._base_url.region}, "
                    f"but passed {location}"
                )
        location = self._base_url.region or location or _DEFAULT_REGION
        headers: DictType = {}
        if object_lock:
            headers["x-amz-bucket-object-lock-enabled"] = "true"
        body = None
        if location != _DEFAULT_REGION:
            element = Element("CreateBucketConfiguration")
            SubElement(element, "LocationConstraint", location)
            body = getbytes(element)
        self._url_open(
            method="PUT",
            region=location,
            bucket_name=bucket_name,
            body=body,
            headers=headers,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )
        self._region_cache.set(bucket_name, location)

    def list_buckets(
            self,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> list[Bucket]:
        """
        List information of all accessible buckets.

        Returns:
            list[Bucket]:
                Buckets with their creation date.

        Example:
            >>> for bucket in client.list_buckets():
            ...     print(bucket.name, bucket.creation_date)
        """
        response = self._execute(
            method="GET",
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )
        return parse_list_buckets(response.data)

    def bucket_exists(
            self,
            bucket_name: str,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> bool:
        """
        Check if a bucket exists.

        Args:
            bucket_name (str):
                Name of the bucket.

            region (Optional[str], default=None):
                Region of the bucket to skip auto probing.

        Returns:
            bool:
                True if the bucket exists, False otherwise.

        Example:
            >>> if client.bucket_exists(bucket_name="my-bucket"):
            ...     print("my-bucket exists")
        """
        check_bucket_name(bucket_name)
        try:
            self._execute(
                method="HEAD",
                bucket_name=bucket_name,
                region=region,
                extra_headers=extra_headers,
                extra_query_params=extra_query_params,
            )
            return True
        except S3Error as exc:
            if exc.code != "NoSuchBucket":
                raise
        return False

    def remove_bucket(
            self,
            bucket_name: str,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """
        Remove an empty bucket.

        Example:
            >>> client.remove_bucket(bucket_name="my-bucket")
        """
        check_bucket_name(bucket_name)
        self._execute(
            method="DELETE",
            bucket_name=bucket_name,
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )
        self._region_cache.remove(bucket_name)

    def select_object_content(
            self,
            bucket_name: str,
            object_name: str,
            request: SelectRequest,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> SelectObjectReader:
        """
        Select content of an object by SQL expression.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_name (str):
                Object name in the bucket.

            request (SelectRequest):
                Select request.

        Returns:
            SelectObjectReader:
                Reader of the records; the caller must close it.

        Example:
            >>> with client.select_object_content(
            ...     bucket_name="my-bucket",
            ...     object_name="my-object.csv",
            ...     request=SelectRequest(
            ...         "select * from S3Object",
            ...         CSVInputSerialization(),
            ...         CSVOutputSerialization(),
            ...         request_progress=True,
            ...     ),
            ... ) as result:
            ...     for data in result.stream():
            ...         print(data.decode())
            ...     print(result.stats())
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        if not isinstance(request, SelectRequest):
            raise ValueError("request must be SelectRequest type")
        response = self._execute(
            method="POST",
            bucket_name=bucket_name,
            object_name=object_name,
            body=marshal(request),
            headers={"Content-Type": "application/xml"},
            query_params={"select": "", "select-type": "2"},
            preload_content=False,
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )
        return SelectObjectReader(response)

    def get_object(
            self,
            bucket_name: str,
            object_name: str,
            offset: int = 0,
            length: Optional[int] = None,
            request_headers: Optional[DictType] = None,
            ssec: Optional[SseCustomerKey] = None,
            version_id: Optional[str] = None,
            extra_query_params: Optional[DictType] = None,
            *,
            match_etag: Optional[str] = None,
            not_match_etag: Optional[str] = None,
            modified_since: Optional[datetime] = None,
            unmodified_since: Optional[datetime] = None,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
    ) -> BaseHTTPResponse:
        """
        Get data of an object. Returned response should be closed after use
        to release network resources. To reuse the connection, it's required
        to call `response.release_conn()` explicitly.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_name (str):
                Object name in the bucket.

            offset (int, default=0):
                Start byte position of object data.

            length (Optional[int], default=None):
                Number of bytes of object data from offset.

            request_headers (Optional[DictType], default=None):
                Any additional headers to be added with GET request.

            ssec (Optional[SseCustomerKey], default=None):
                Server-side encryption customer key.

            version_id (Optional[str], default=None):
                Version ID of the object.

        Returns:
            BaseHTTPResponse:
                An :class:`urllib3.response.BaseHTTPResponse` object.

        Example:
            >>> response = None
            >>> try:
            ...     response = client.get_object(
            ...         bucket_name="my-bucket",
            ...         object_name="my-object",
            ...     )
            ...     data = response.read()
            ... finally:
            ...     if response:
            ...         response.close()
            ...         response.release_conn()
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        self._check_sse(ssec, ssec_only=True)
        if offset < 0:
            raise ValueError("offset should be zero or greater")
        if length is not None and length <= 0:
            raise ValueError("length should be greater than zero")

        headers = self._gen_read_headers(
            ssec=ssec,
            offset=offset,
            length=length,
            match_etag=match_etag,
            not_match_etag=not_match_etag,
            modified_since=modified_since,
            unmodified_since=unmodified_since,
        )
        if request_headers:
            if any(key.lower() == "range" for key in request_headers):
                headers.pop("Range", None)
            headers.update(request_headers)

        return self._execute(
            method="GET",
            bucket_name=bucket_name,
            object_name=object_name,
            headers=headers,
            query_params={"versionId": version_id} if version_id else None,
            preload_content=False,
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )

    def stat_object(
            self,
            bucket_name: str,
            object_name: str,
            ssec: Optional[SseCustomerKey] = None,
            version_id: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
            *,
            match_etag: Optional[str] = None,
            not_match_etag: Optional[str] = None,
            modified_since: Optional[datetime] = None,
            unmodified_since: Optional[datetime] = None,
            region: Optional[str] = None,
    ) -> StatObjectResult:
        """
        Get object information and metadata of an object.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_name (str):
                Object name in the bucket.

            ssec (Optional[SseCustomerKey], default=None):
                Server-side encryption customer key.

            version_id (Optional[str], default=None):
                Version ID of the object.

        Returns:
            StatObjectResult:
                Size, etag, modification time, version and user metadata.

        Example:
            >>> result = client.stat_object(
            ...     bucket_name="my-bucket",
            ...     object_name="my-object",
            ... )
            >>> print(result.size, result.etag, result.metadata)
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        self._check_sse(ssec, ssec_only=True)

        headers = self._gen_read_headers(
            ssec=ssec,
            match_etag=match_etag,
            not_match_etag=not_match_etag,
            modified_since=modified_since,
            unmodified_since=unmodified_since,
        )
        response = self._execute(
            method="HEAD",
            bucket_name=bucket_name,
            object_name=object_name,
            headers=headers,
            query_params={"versionId": version_id} if version_id else None,
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )
        return StatObjectResult.fromresponse(
            response, bucket_name, object_name,
        )

    def remove_object(
            self,
            bucket_name: str,
            object_name: str,
            version_id: Optional[str] = None,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """
        Remove an object.

        Example:
            >>> client.remove_object(
            ...     bucket_name="my-bucket",
            ...     object_name="my-object",
            ...     version_id="dfbd25b3-abec-4184-a4e8-5a35a5c1174d",
            ... )
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        self._execute(
            method="DELETE",
            bucket_name=bucket_name,
            object_name=object_name,
            query_params={"versionId": version_id} if version_id else None,
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )

    def copy_object(
            self,
            bucket_name: str,
            object_name: str,
            source: CopySource,
            sse: Optional[Sse] = None,
            metadata: Optional[DictType] = None,
            tags: Optional[Tags] = None,
            retention: Optional[Retention] = None,
            legal_hold: bool = False,
            metadata_directive: Optional[str] = None,
            tagging_directive: Optional[str] = None,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> ObjectWriteResult:
        """
        Create an object by server-side copying data from another object.
        Sources with a byte range or larger than 5 GiB are copied by
        :meth:`compose_object`.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_name (str):
                Object name in the bucket.

            source (CopySource):
                Source object information.

            sse (Optional[Sse], default=None):
                Server-side encryption of destination object.

            metadata (Optional[DictType], default=None):
                User metadata of destination object.

            tags (Optional[Tags], default=None):
                Tags of destination object.

            retention (Optional[Retention], default=None):
                Retention of destination object.

            legal_hold (bool, default=False):
                Flag to set legal hold on destination object.

            metadata_directive (Optional[str], default=None):
                COPY or REPLACE of user metadata.

            tagging_directive (Optional[str], default=None):
                COPY or REPLACE of tags.

        Returns:
            ObjectWriteResult:
                Identity of the created object.

        Example:
            >>> result = client.copy_object(
            ...     bucket_name="my-bucket",
            ...     object_name="my-object",
            ...     source=CopySource(
            ...         bucket_name="my-sourcebucket",
            ...         object_name="my-sourceobject",
            ...     ),
            ... )
            >>> print(result.object_name, result.version_id)
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        if not isinstance(source, CopySource):
            raise ValueError("source must be CopySource type")
        self._check_sse(sse)
        if (
                metadata_directive is not None and
                metadata_directive not in [COPY, REPLACE]
        ):
            raise ValueError(f"metadata directive must be {COPY} or {REPLACE}")
        if (
                tagging_directive is not None and
                tagging_directive not in [COPY, REPLACE]
        ):
            raise ValueError(f"tagging directive must be {COPY} or {REPLACE}")

        size = -1
        if not source.has_range:
            stat = self.stat_object(
                bucket_name=source.bucket_name,
                object_name=source.object_name,
                version_id=source.version_id,
                ssec=source.ssec,
            )
            size = stat.size

        if source.has_range or size > MAX_PART_SIZE:
            if metadata_directive == COPY:
                raise ValueError(
                    "COPY metadata directive is not applicable to source "
                    "object with range or size greater than 5 GiB",
                )
            if tagging_directive == COPY:
                raise ValueError(
                    "COPY tagging directive is not applicable to source "
                    "object with range or size greater than 5 GiB"
                )
            return self.compose_object(
                bucket_name=bucket_name,
                object_name=object_name,
                sources=[ComposeSource.of(source)],
                sse=sse,
                metadata=metadata,
                tags=tags,
                retention=retention,
                legal_hold=legal_hold,
                region=region,
            )

        headers = self._gen_write_headers(
            metadata=metadata,
            sse=sse,
            tags=tags,
            retention=retention,
            legal_hold=legal_hold,
        )
        if metadata_directive:
            headers["x-amz-metadata-directive"] = metadata_directive
        if tagging_directive:
            headers["x-amz-tagging-directive"] = tagging_directive
        headers.update(source.gen_copy_headers())
        response = self._execute(
            method="PUT",
            bucket_name=bucket_name,
            object_name=object_name,
            headers=headers,
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )
        etag, last_modified = parse_copy_object(response.data)
        return ObjectWriteResult(
            bucket_name=bucket_name,
            object_name=object_name,
            version_id=response.headers.get("x-amz-version-id"),
            etag=etag,
            http_headers=response.headers,
            last_modified=last_modified,
        )

    def _calc_part_count(self, sources: list[ComposeSource]) -> int:
        """Resolve live size of each source and calculate part count."""
        object_size = 0
        part_count = 0
        for i, src in enumerate(sources, start=1):
            stat = self.stat_object(
                bucket_name=src.bucket_name,
                object_name=src.object_name,
                version_id=src.version_id,
                ssec=src.ssec,
            )
            src.build_headers(stat.size, cast(str, stat.etag))
            size = src.compose_size
            is_last = i == len(sources)

            if size < MIN_PART_SIZE and not is_last:
                raise ValueError(
                    f"source {src.bucket_name}/{src.object_name}: size {size} "
                    f"must be greater than {MIN_PART_SIZE}"
                )

            object_size += size
            if object_size > MAX_MULTIPART_OBJECT_SIZE:
                raise ValueError(
                    f"destination object size must be less than "
                    f"{MAX_MULTIPART_OBJECT_SIZE}"
                )

            if size > MAX_PART_SIZE:
                count = size // MAX_PART_SIZE
                last_part_size = size - (count * MAX_PART_SIZE)
                if last_part_size > 0:
                    count += 1
                else:
                    last_part_size = MAX_PART_SIZE
                if last_part_size < MIN_PART_SIZE and not is_last:
                    raise ValueError(
                        f"source {src.bucket_name}/{src.object_name}: "
                        f"for multipart split upload of {size}, "
                        f"last part size is less than {MIN_PART_SIZE}"
                    )
                part_count += count
            else:
                part_count += 1

        if part_count > MAX_MULTIPART_COUNT:
            raise ValueError(
                f"Compose sources create more than allowed multipart "
                f"count {MAX_MULTIPART_COUNT}"
            )
        return part_count

    def _upload_part_copy(
            self,
            bucket_name: str,
            object_name: str,
            upload_id: str,
            part_number: int,
            headers: DictType,
            region: Optional[str] = None,
    ) -> tuple[str, Optional[datetime]]:
        """Execute UploadPartCopy S3 API."""
        response = self._execute(
            method="PUT",
            bucket_name=bucket_name,
            object_name=object_name,
            headers=headers,
            query_params={
                "partNumber": str(part_number),
                "uploadId": upload_id,
            },
            region=region,
        )
        return parse_copy_object(response.data)

    def compose_object(
            self,
            bucket_name: str,
            object_name: str,
            sources: list[ComposeSource],
            sse: Optional[Sse] = None,
            metadata: Optional[DictType] = None,
            tags: Optional[Tags] = None,
            retention: Optional[Retention] = None,
            legal_hold: bool = False,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> ObjectWriteResult:
        """
        Create an object by combining data from different source objects using
        server-side copy.

        Every source except the last must contribute at least 5 MiB. Sources
        larger than 5 GiB are copied in 5 GiB ranges. The multipart upload is
        aborted if any part copy or the completion fails.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_name (str):
                Object name in the bucket.

            sources (list[ComposeSource]):
                List of compose sources.

            sse (Optional[Sse], default=None):
                Server-side encryption of destination object.

            metadata (Optional[DictType], default=None):
                User metadata of destination object.

            tags (Optional[Tags], default=None):
                Tags of destination object.

            retention (Optional[Retention], default=None):
                Retention of destination object.

            legal_hold (bool, default=False):
                Flag to set legal hold on destination object.

        Returns:
            ObjectWriteResult:
                Identity of the created object.

        Example:
            >>> sources = [
            ...     ComposeSource(
            ...         bucket_name="my-job-bucket",
            ...         object_name="my-object-part-one",
            ...     ),
            ...     ComposeSource(
            ...         bucket_name="my-job-bucket",
            ...         object_name="my-object-part-two",
            ...     ),
            ... ]
            >>> result = client.compose_object(
            ...     bucket_name="my-bucket",
            ...     object_name="my-object",
            ...     sources=sources,
            ... )
            >>> print(result.object_name, result.version_id)
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        if not isinstance(sources, (list, tuple)) or not sources:
            raise ValueError("sources must be non-empty list or tuple type")
        for i, src in enumerate(sources):
            if not isinstance(src, ComposeSource):
                raise ValueError(f"sources[{i}] must be ComposeSource type")
        self._check_sse(sse)

        part_count = self._calc_part_count(list(sources))
        if (
                part_count == 1 and
                sources[0].offset is None and
                sources[0].length is None
        ):
            return self.copy_object(
                bucket_name=bucket_name,
                object_name=object_name,
                source=CopySource.of(sources[0]),
                sse=sse,
                metadata=metadata,
                tags=tags,
                retention=retention,
                legal_hold=legal_hold,
                metadata_directive=REPLACE if metadata else None,
                tagging_directive=REPLACE if tags else None,
                region=region,
                extra_headers=extra_headers,
                extra_query_params=extra_query_params,
            )

        headers = self._gen_write_headers(
            metadata=metadata,
            sse=sse,
            tags=tags,
            retention=retention,
            legal_hold=legal_hold,
        )
        upload_id = self._create_multipart_upload(
            bucket_name=bucket_name,
            object_name=object_name,
            headers=headers,
            region=region,
        )
        ssec_headers = sse.headers() if isinstance(sse, SseCustomerKey) else {}
        try:
            part_number = 0
            total_parts = []
            for src in sources:
                size = src.compose_size
                offset = src.offset or 0
                headers = src.headers
                headers.update(ssec_headers)
                if size <= MAX_PART_SIZE:
                    part_number += 1
                    if src.has_range:
                        headers["x-amz-copy-source-range"] = (
                            f"bytes={offset}-{offset + size - 1}"
                        )
                    etag, _ = self._upload_part_copy(
                        bucket_name=bucket_name,
                        object_name=object_name,
                        upload_id=upload_id,
                        part_number=part_number,
                        headers=headers,
                        region=region,
                    )
                    total_parts.append(Part(part_number, etag))
                    continue
                while size > 0:
                    part_number += 1
                    length = min(size, MAX_PART_SIZE)
                    headers_copy = headers.copy()
                    headers_copy["x-amz-copy-source-range"] = (
                        f"bytes={offset}-{offset + length - 1}"
                    )
                    etag, _ = self._upload_part_copy(
                        bucket_name=bucket_name,
                        object_name=object_name,
                        upload_id=upload_id,
                        part_number=part_number,
                        headers=headers_copy,
                        region=region,
                    )
                    total_parts.append(Part(part_number, etag))
                    offset += length
                    size -= length
            return self._complete_multipart_upload(
                bucket_name=bucket_name,
                object_name=object_name,
                upload_id=upload_id,
                parts=total_parts,
                region=region,
            )
        except Exception:
            self._abort_after_failure(
                bucket_name, object_name, upload_id, region,
            )
            raise

    def _abort_multipart_upload(
            self,
            bucket_name: str,
            object_name: str,
            upload_id: str,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """Execute AbortMultipartUpload S3 API."""
        self._execute(
            method="DELETE",
            bucket_name=bucket_name,
            object_name=object_name,
            query_params={"uploadId": upload_id},
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )
        _LOGGER.debug(
            "aborted multipart upload %s of %s/%s",
            upload_id, bucket_name, object_name,
        )

    def _abort_after_failure(
            self,
            bucket_name: str,
            object_name: str,
            upload_id: str,
            region: Optional[str] = None,
    ):
        """
        Abort multipart upload of a failed transfer. A failing abort is
        logged; the caller re-raises the original failure.
        """
        _LOGGER.warning(
            "aborting multipart upload %s of %s/%s after failure",
            upload_id, bucket_name, object_name,
        )
        try:
            self._abort_multipart_upload(
                bucket_name=bucket_name,
                object_name=object_name,
                upload_id=upload_id,
                region=region,
            )
        except Exception as exc:  # pylint: disable=broad-except
            _LOGGER.warning(
                "unable to abort multipart upload %s of %s/%s: %s",
                upload_id, bucket_name, object_name, exc,
            )

    def _complete_multipart_upload(
            self,
            bucket_name: str,
            object_name: str,
            upload_id: str,
            parts: list[Part],
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
    ) -> ObjectWriteResult:
        """Execute CompleteMultipartUpload S3 API."""
        element = Element("CompleteMultipartUpload")
        for part in parts:
            tag = SubElement(element, "Part")
            SubElement(tag, "PartNumber", str(part.part_number))
            SubElement(tag, "ETag", '"' + part.etag + '"')
        response = self._execute(
            method="POST",
            bucket_name=bucket_name,
            object_name=object_name,
            body=getbytes(element),
            headers={"Content-Type": "application/xml"},
            query_params={"uploadId": upload_id},
            region=region,
            extra_headers=extra_headers,
        )
        _LOGGER.debug(
            "completed multipart upload %s of %s/%s with %d parts",
            upload_id, bucket_name, object_name, len(parts),
        )
        return parse_complete_multipart_upload(
            response, bucket_name, object_name,
        )

    def _create_multipart_upload(
            self,
            bucket_name: str,
            object_name: str,
            headers: DictType,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> str:
        """Execute CreateMultipartUpload S3 API."""
        if not any(key.lower() == "content-type" for key in headers):
            headers["Content-Type"] = "application/octet-stream"
        response = self._execute(
            method="POST",
            bucket_name=bucket_name,
            object_name=object_name,
            headers=headers,
            query_params={"uploads": ""},
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )
        element = fromstring(response.data)
        upload_id = cast(str, findtext(element, "UploadId", True))
        _LOGGER.debug(
            "created multipart upload %s of %s/%s",
            upload_id, bucket_name, object_name,
        )
        return upload_id

    def _put_object(
            self,
            bucket_name: str,
            object_name: str,
            data: bytes,
            headers: Optional[DictType] = None,
            query_params: Optional[DictType] = None,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> ObjectWriteResult:
        """Execute PutObject S3 API."""
        response = self._execute(
            method="PUT",
            bucket_name=bucket_name,
            object_name=object_name,
            body=data,
            headers=headers,
            query_params=query_params,
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )
        return ObjectWriteResult.fromresponse(
            response, bucket_name, object_name,
        )

    def _upload_part(
            self,
            bucket_name: str,
            object_name: str,
            data: bytes,
            headers: Optional[DictType],
            upload_id: str,
            part_number: int,
            region: Optional[str] = None,
    ) -> ObjectWriteResult:
        """Execute UploadPart S3 API."""
        return self._put_object(
            bucket_name=bucket_name,
            object_name=object_name,
            data=data,
            headers=headers,
            query_params={
                "partNumber": str(part_number),
                "uploadId": upload_id,
            },
            region=region,
        )

    def _upload_part_task(self, kwargs) -> tuple[int, ObjectWriteResult]:
        """Upload_part task for ThreadPool."""
        return kwargs["part_number"], self._upload_part(**kwargs)

    def put_object(
            self,
            bucket_name: str,
            object_name: str,
            data: BinaryIO,
            length: int,
            content_type: str = "application/octet-stream",
            metadata: Optional[DictType] = None,
            sse: Optional[Sse] = None,
            part_size: int = 0,
            num_parallel_uploads: int = 1,
            tags: Optional[Tags] = None,
            retention: Optional[Retention] = None,
            legal_hold: bool = False,
            *,
            part_count: Optional[int] = None,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> ObjectWriteResult:
        """
        Upload data from a stream to an object in a bucket.

        Data fitting in one part is sent by a single PUT. Otherwise a
        multipart upload is created, parts are uploaded in part number order
        and the upload is completed; any failure on the way aborts the
        multipart upload before the failure is raised.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_name (str):
                Object name in the bucket.

            data (BinaryIO):
                An object having callable `read()` returning a `bytes`
                object.

            length (int):
                Data size; -1 for unknown size and set valid `part_size`.

            content_type (str, default="application/octet-stream"):
                Content type of the object.

            metadata (Optional[DictType], default=None):
                Any additional metadata to be uploaded along with your PUT
                request.

            sse (Optional[Sse], default=None):
                Server-side encryption.

            part_size (int, default=0):
                Multipart part size; computed from `length` when zero.

            num_parallel_uploads (int, default=1):
                Number of parts uploaded in parallel.

            tags (Optional[Tags], default=None):
                Tags for the object.

            retention (Optional[Retention], default=None):
                Retention configuration.

            legal_hold (bool, default=False):
                Flag to set legal hold for the object.

            part_count (Optional[int], default=None):
                Precomputed part count; 1 forces a single PUT of a known
                `length` up to 5 GiB.

        Returns:
            ObjectWriteResult:
                Identity of the created object.

        Example:
            >>> # Upload data
            >>> result = client.put_object(
            ...     bucket_name="my-bucket",
            ...     object_name="my-object",
            ...     data=io.BytesIO(b"hello"),
            ...     length=5,
            ... )
            >>>
            >>> # Upload unknown sized data
            >>> data = urlopen(
            ...     "https://cdn.kernel.org/pub/linux/kernel/v5.x/"
            ...     "linux-5.4.81.tar.xz",
            ... )
            >>> result = client.put_object(
            ...     bucket_name="my-bucket",
            ...     object_name="my-object",
            ...     data=data,
            ...     length=-1,
            ...     part_size=10*1024*1024,
            ... )
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        self._check_sse(sse)
        if not callable(getattr(data, "read", None)):
            raise ValueError("input data must have callable read()")
        if num_parallel_uploads < 1:
            raise ValueError("num_parallel_uploads must be at least 1")

        part_size, computed_count = get_part_info(length, part_size)
        if part_count is not None and part_count != computed_count:
            if part_count != 1:
                raise ValueError(
                    f"part count {part_count} does not match computed part "
                    f"count {computed_count}"
                )
            if length < 0 or length > MAX_PART_SIZE:
                raise ValueError(
                    "single part upload requires known length up to 5GiB",
                )
            part_size = length
        part_count = part_count or computed_count

        headers = self._gen_write_headers(
            metadata=metadata,
            sse=sse,
            tags=tags,
            retention=retention,
            legal_hold=legal_hold,
        )
        headers["Content-Type"] = content_type or "application/octet-stream"

        object_size = length
        uploaded_size = 0
        part_number = 0
        one_byte = b""
        stop = False
        upload_id = None
        parts: list[Part] = []
        pool: Optional[ThreadPool] = None
        try:
            while not stop:
                part_number += 1
                if part_count > 0:
                    if part_number == part_count:
                        part_size = object_size - uploaded_size
                        stop = True
                    part_data = read_part_data(data, part_size)
                    if len(part_data) != part_size:
                        raise InternalError(
                            f"stream having not enough data; "
                            f"expected: {part_size}, "
                            f"got: {len(part_data)} bytes"
                        )
                else:
                    part_data = read_part_data(
                        data, part_size + 1, part_data=one_byte,
                    )
                    # If part_data_size is less or equal to part_size,
                    # then we have reached last part.
                    if len(part_data) <= part_size:
                        part_count = part_number
                        stop = True
                    else:
                        one_byte = part_data[-1:]
                        part_data = part_data[:-1]

                uploaded_size += len(part_data)

                if part_count == 1:
                    return self._put_object(
                        bucket_name=bucket_name,
                        object_name=object_name,
                        data=part_data,
                        headers=headers,
                        region=region,
                        extra_headers=extra_headers,
                        extra_query_params=extra_query_params,
                    )

                if not upload_id:
                    upload_id = self._create_multipart_upload(
                        bucket_name=bucket_name,
                        object_name=object_name,
                        headers=headers,
                        region=region,
                        extra_headers=extra_headers,
                        extra_query_params=extra_query_params,
                    )
                    if num_parallel_uploads > 1:
                        pool = ThreadPool(num_parallel_uploads)
                        pool.start_parallel()

                part_headers = (
                    sse.headers() if isinstance(sse, SseCustomerKey) else None
                )
                kwargs = {
                    "bucket_name": bucket_name,
                    "object_name": object_name,
                    "data": part_data,
                    "headers": part_headers,
                    "upload_id": upload_id,
                    "part_number": part_number,
                    "region": region,
                }
                if pool:
                    if pool.failed():
                        break
                    pool.add_task(self._upload_part_task, kwargs)
                else:
                    result = self._upload_part(**kwargs)
                    parts.append(
                        Part(part_number, cast(str, result.etag)),
                    )

            if pool:
                parts = [
                    Part(number, cast(str, result.etag))
                    for number, result in sorted(
                        pool.result(), key=lambda item: item[0],
                    )
                ]

            return self._complete_multipart_upload(
                bucket_name=bucket_name,
                object_name=object_name,
                upload_id=cast(str, upload_id),
                parts=parts,
                region=region,
                extra_headers=(
                    sse.headers() if isinstance(sse, SseCustomerKey) else None
                ),
            )
        except Exception:
            if pool:
                pool.join()
            if upload_id:
                self._abort_after_failure(
                    bucket_name, object_name, upload_id, region,
                )
            raise

    def fput_object(
            self,
            bucket_name: str,
            object_name: str,
            file_path: str,
            content_type: str = "application/octet-stream",
            metadata: Optional[DictType] = None,
            sse: Optional[Sse] = None,
            part_size: int = 0,
            num_parallel_uploads: int = 1,
            tags: Optional[Tags] = None,
            retention: Optional[Retention] = None,
            legal_hold: bool = False,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> ObjectWriteResult:
        """
        Upload data from a file to an object in a bucket.

        Example:
            >>> result = client.fput_object(
            ...     bucket_name="my-bucket",
            ...     object_name="my-object",
            ...     file_path="my-filename",
            ... )
        """
        file_size = os.stat(file_path).st_size
        with open(file_path, "rb") as file_data:
            return self.put_object(
                bucket_name=bucket_name,
                object_name=object_name,
                data=file_data,
                length=file_size,
                content_type=content_type,
                metadata=metadata,
                sse=sse,
                part_size=part_size,
                num_parallel_uploads=num_parallel_uploads,
                tags=tags,
                retention=retention,
                legal_hold=legal_hold,
                region=region,
                extra_headers=extra_headers,
                extra_query_params=extra_query_params,
            )

    def fget_object(
            self,
            bucket_name: str,
            object_name: str,
            file_path: str,
            request_headers: Optional[DictType] = None,
            ssec: Optional[SseCustomerKey] = None,
            version_id: Optional[str] = None,
            extra_query_params: Optional[DictType] = None,
            tmp_file_path: Optional[str] = None,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
    ) -> StatObjectResult:
        """
        Download an object to a file.

        Data is written to a temporary part file which is renamed to
        `file_path` once the download completes; a failed download removes
        the part file and leaves `file_path` untouched.

        Example:
            >>> stat = client.fget_object(
            ...     bucket_name="my-bucket",
            ...     object_name="my-object",
            ...     file_path="my-filename",
            ... )
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        if os.path.isdir(file_path):
            raise ValueError(f"file {file_path} is a directory")

        directory = os.path.dirname(file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        stat = self.stat_object(
            bucket_name,
            object_name,
            ssec=ssec,
            version_id=version_id,
            region=region,
        )
        etag = queryencode(stat.etag or "")
        tmp_file_path = tmp_file_path or f"{file_path}.{etag}.part.s3wire"

        response = None
        try:
            # Download only the object version just stated.
            response = self.get_object(
                bucket_name,
                object_name,
                request_headers=request_headers,
                ssec=ssec,
                version_id=version_id,
                extra_query_params=extra_query_params,
                match_etag=stat.etag,
                region=region,
                extra_headers=extra_headers,
            )
            with open(tmp_file_path, "wb") as tmp_file:
                for data in response.stream(amt=1024 * 1024):
                    tmp_file.write(data)
            os.replace(tmp_file_path, file_path)
        except BaseException:
            if os.path.exists(tmp_file_path):
                os.remove(tmp_file_path)
            raise
        finally:
            if response is not None:
                response.close()
                response.release_conn()
        _LOGGER.debug(
            "downloaded %s/%s to %s", bucket_name, object_name, file_path,
        )
        return stat

    def _delete_objects(
            self,
            bucket_name: str,
            delete_object_list: list[DeleteObject],
            quiet: bool = False,
            bypass_governance_mode: bool = False,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> DeleteResult:
        """Execute DeleteObjects S3 API."""
        headers: DictType = {"Content-Type": "application/xml"}
        if bypass_governance_mode:
            headers["x-amz-bypass-governance-retention"] = "true"
        response = self._execute(
            method="POST",
            bucket_name=bucket_name,
            body=marshal(DeleteRequest(delete_object_list, quiet=quiet)),
            headers=headers,
            query_params={"delete": ""},
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )

        element = fromstring(response.data)
        if localname(element) == "Error":
            return DeleteResult([], [DeleteError.fromxml(element)])
        return DeleteResult.fromxml(element)

    def remove_objects(
            self,
            bucket_name: str,
            delete_object_list: Iterable[DeleteObject],
            bypass_governance_mode: bool = False,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> LazyIterator[DeleteError]:
        """
        Remove multiple objects.

        Objects are removed in batches of 1000 keys per DeleteObjects request
        as the returned iterator is consumed; nothing is removed until then.
        Per key failures of all batches are flattened into one sequence.

        Args:
            bucket_name (str):
                Name of the bucket.

            delete_object_list (Iterable[DeleteObject]):
                An iterable containing :class:`DeleteObject` object.

            bypass_governance_mode (bool, default=False):
                Bypass Governance retention mode.

        Returns:
            LazyIterator[DeleteError]:
                An iterator of :class:`Result` of :class:`DeleteError`.

        Example:
            >>> errors = client.remove_objects(
            ...     bucket_name="my-bucket",
            ...     delete_object_list=[
            ...         DeleteObject(name="my-object1"),
            ...         DeleteObject(name="my-object2"),
            ...         DeleteObject(
            ...             name="my-object3",
            ...             version_id="13f88b18-8dcd-4c83-88f2-8631fdb6250c",
            ...         ),
            ...     ],
            ... )
            >>> for result in errors:
            ...     print("error occurred when deleting object", result.get())
        """
        check_bucket_name(bucket_name)

        # turn list like objects into an iterator.
        objects = iter(delete_object_list)

        def fetch() -> tuple[list[DeleteError], bool]:
            batch = [obj for _, obj in zip(range(MAX_DELETE_OBJECTS), objects)]
            if not batch:
                return [], False

            _LOGGER.debug(
                "removing %d objects from bucket %s", len(batch), bucket_name,
            )
            result = self._delete_objects(
                bucket_name=bucket_name,
                delete_object_list=batch,
                quiet=True,
                bypass_governance_mode=bypass_governance_mode,
                region=region,
                extra_headers=extra_headers,
                extra_query_params=extra_query_params,
            )
            errors = [
                error for error in result.error_list
                # AWS S3 returns "NoSuchVersion" error when
                # version doesn't exist ignore this error
                # yield all errors otherwise
                if error.code != "NoSuchVersion"
            ]
            return errors, len(batch) == MAX_DELETE_OBJECTS

        return LazyIterator(fetch)

    def _list_multipart_uploads(
            self,
            bucket_name: str,
            delimiter: Optional[str] = None,
            encoding_type: Optional[str] = None,
            key_marker: Optional[str] = None,
            max_uploads: Optional[int] = None,
            prefix: Optional[str] = None,
            upload_id_marker: Optional[str] = None,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> ListMultipartUploadsResult:
        """Execute ListMultipartUploads S3 API."""
        query_params = {
            "uploads": "",
            "delimiter": delimiter or "",
            "max-uploads": str(max_uploads or 1000),
            "prefix": prefix or "",
            "encoding-type": "url",
        }
        if encoding_type:
            query_params["encoding-type"] = encoding_type
        if key_marker:
            query_params["key-marker"] = key_marker
        if upload_id_marker:
            query_params["upload-id-marker"] = upload_id_marker

        response = self._execute(
            method="GET",
            bucket_name=bucket_name,
            query_params=cast(DictType, query_params),
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )
        return unmarshal(ListMultipartUploadsResult, response.data)

    def _list_parts(
            self,
            bucket_name: str,
            object_name: str,
            upload_id: str,
            max_parts: Optional[int] = None,
            part_number_marker: Optional[int] = None,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> ListPartsResult:
        """Execute ListParts S3 API."""
        query_params = {
            "uploadId": upload_id,
            "max-parts": str(max_parts or 1000),
        }
        if part_number_marker:
            query_params["part-number-marker"] = str(part_number_marker)

        response = self._execute(
            method="GET",
            bucket_name=bucket_name,
            object_name=object_name,
            query_params=cast(DictType, query_params),
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )
        return unmarshal(ListPartsResult, response.data)

    def list_parts(
            self,
            bucket_name: str,
            object_name: str,
            upload_id: str,
            max_parts: Optional[int] = None,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> LazyIterator[Part]:
        """
        List uploaded parts of a multipart upload.

        Example:
            >>> for result in client.list_parts(
            ...     bucket_name="my-bucket",
            ...     object_name="my-object",
            ...     upload_id="6d0c5b5e-5e3e-44c5-a3a8-8a4b0f9ddf43",
            ... ):
            ...     part = result.get()
            ...     print(part.part_number, part.etag, part.size)
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        check_non_empty_string(upload_id)
        marker: Optional[int] = None

        def fetch() -> tuple[list[Part], bool]:
            nonlocal marker
            result = self._list_parts(
                bucket_name=bucket_name,
                object_name=object_name,
                upload_id=upload_id,
                max_parts=max_parts,
                part_number_marker=marker,
                region=region,
                extra_headers=extra_headers,
                extra_query_params=extra_query_params,
            )
            marker = result.next_part_number_marker
            return result.parts, result.is_truncated

        return LazyIterator(fetch)

    def list_incomplete_uploads(
            self,
            bucket_name: str,
            prefix: Optional[str] = None,
            recursive: bool = False,
            include_size: bool = False,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> LazyIterator[Upload]:
        """
        List incomplete multipart uploads of a bucket.

        When `include_size` is set, parts of every upload are listed to sum
        up its uploaded size. A failure of that listing ends the sequence
        with the failure as its last element.

        Args:
            bucket_name (str):
                Name of the bucket.

            prefix (Optional[str], default=None):
                List uploads of objects with names starting with prefix.

            recursive (bool, default=False):
                List recursively than directory structure emulation.

            include_size (bool, default=False):
                Set :attr:`Upload.size` to the total size of uploaded parts.

        Returns:
            LazyIterator[Upload]:
                An iterator of :class:`Result` of :class:`Upload`.

        Example:
            >>> for result in client.list_incomplete_uploads(
            ...     bucket_name="my-bucket",
            ...     prefix="my/prefix/",
            ...     recursive=True,
            ... ):
            ...     upload = result.get()
            ...     print(upload.object_name, upload.upload_id)
        """
        check_bucket_name(bucket_name)
        key_marker: Optional[str] = None
        upload_id_marker: Optional[str] = None

        def total_size(upload: Upload) -> int:
            size = 0
            for result in self.list_parts(
                    bucket_name=bucket_name,
                    object_name=upload.object_name,
                    upload_id=cast(str, upload.upload_id),
                    region=region,
            ):
                size += result.get().size or 0
            return size

        def fetch() -> tuple[list[Upload], bool]:
            nonlocal key_marker, upload_id_marker
            result = self._list_multipart_uploads(
                bucket_name=bucket_name,
                delimiter=None if recursive else "/",
                key_marker=key_marker,
                prefix=prefix,
                upload_id_marker=upload_id_marker,
                region=region,
                extra_headers=extra_headers,
                extra_query_params=extra_query_params,
            )
            key_marker = result.next_key_marker
            upload_id_marker = result.next_upload_id_marker
            uploads = result.uploads
            if include_size:
                uploads = [
                    replace(upload, size=total_size(upload))
                    for upload in uploads
                ]
            return uploads, result.is_truncated

        return LazyIterator(fetch)

    def remove_incomplete_upload(
            self,
            bucket_name: str,
            object_name: str,
            *,
            region: Optional[str] = None,
    ):
        """
        Remove all incomplete uploads of an object.

        Example:
            >>> client.remove_incomplete_upload(
            ...     bucket_name="my-bucket",
            ...     object_name="my-object",
            ... )
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        for result in self.list_incomplete_uploads(
                bucket_name=bucket_name,
                prefix=object_name,
                recursive=True,
                region=region,
        ):
            upload = result.get()
            if upload.object_name == object_name:
                self._abort_multipart_upload(
                    bucket_name=bucket_name,
                    object_name=object_name,
                    upload_id=cast(str, upload.upload_id),
                    region=region,
                )

    def list_objects(
            self,
            bucket_name: str,
            prefix: Optional[str] = None,
            recursive: bool = False,
            start_after: Optional[str] = None,
            include_user_meta: bool = False,
            include_version: bool = False,
            use_api_v1: bool = False,
            use_url_encoding_type: bool = True,
            fetch_owner: bool = False,
            max_keys: Optional[int] = None,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> LazyIterator[Object]:
        """
        Lists object information of a bucket.

        Pages are fetched as the returned iterator is consumed. A failing
        page fetch ends the sequence with the failure as its last element.

        Args:
            bucket_name (str):
                Name of the bucket.

            prefix (Optional[str], default=None):
                Object name starts with prefix.

            recursive (bool, default=False):
                List recursively than directory structure emulation.

            start_after (Optional[str], default=None):
                List objects after this key name.

            include_user_meta (bool, default=False):
                MinIO specific flag to control to include user metadata.

            include_version (bool, default=False):
                Flag to control whether include object versions.

            use_api_v1 (bool, default=False):
                Flag to control to use ListObjectV1 S3 API or not.

            use_url_encoding_type (bool, default=True):
                Flag to control whether URL encoding type to be used or not.

            fetch_owner (bool, default=False):
                Flag to control whether to fetch owner information.

            max_keys (Optional[int], default=None):
                Maximum number of keys per page; 1000 when not set.

        Returns:
            LazyIterator[Object]:
                An iterator of :class:`Result` of :class:`Object`.

        Example:
            >>> # List objects information recursively whose names starts
            >>> # with "my/prefix/".
            >>> for result in client.list_objects(
            ...     bucket_name="my-bucket",
            ...     prefix="my/prefix/",
            ...     recursive=True,
            ... ):
            ...     print(result.get().object_name)
        """
        check_bucket_name(bucket_name)
        if max_keys is not None and max_keys <= 0:
            raise ValueError("max_keys must be greater than zero")
        continuation_token: Optional[str] = None
        version_id_marker: Optional[str] = None
        first_page = True

        def query() -> DictType:
            query_params = {
                "delimiter": "" if recursive else "/",
                "max-keys": str(max_keys or 1000),
                "prefix": prefix or "",
            }
            if use_url_encoding_type:
                query_params["encoding-type"] = "url"
            if include_version:
                query_params["versions"] = ""
                key_marker = continuation_token
                if first_page:
                    key_marker = start_after
                if key_marker:
                    query_params["key-marker"] = key_marker
                if version_id_marker:
                    query_params["version-id-marker"] = version_id_marker
            elif use_api_v1:
                marker = start_after if first_page else continuation_token
                if marker:
                    query_params["marker"] = marker
            else:
                query_params["list-type"] = "2"
                if first_page and start_after:
                    query_params["start-after"] = start_after
                if continuation_token:
                    query_params["continuation-token"] = continuation_token
                if fetch_owner:
                    query_params["fetch-owner"] = "true"
            if include_user_meta:
                query_params["metadata"] = "true"
            return cast(DictType, query_params)

        def fetch() -> tuple[list[Object], bool]:
            nonlocal continuation_token, version_id_marker, first_page
            response = self._execute(
                method="GET",
                bucket_name=bucket_name,
                query_params=query(),
                region=region,
                extra_headers=extra_headers,
                extra_query_params=extra_query_params,
            )
            page = parse_list_objects(response.data)
            first_page = False
            continuation_token = page.continuation_token
            version_id_marker = page.version_id_marker
            if page.is_truncated and not continuation_token:
                raise InternalError(
                    "truncated listing response without continuation marker",
                )
            return page.objects, page.is_truncated

        return LazyIterator(fetch)

    def get_presigned_url(
            self,
            method: str,
            bucket_name: str,
            object_name: str,
            expires: timedelta = timedelta(days=7),
            response_headers: Optional[DictType] = None,
            request_date: Optional[datetime] = None,
            version_id: Optional[str] = None,
            extra_query_params: Optional[DictType] = None,
            *,
            region: Optional[str] = None,
    ) -> str:
        """
        Get a presigned URL for an object.

        Without credentials the plain object URL is returned.

        Args:
            method (str):
                HTTP method to allow (e.g., "GET", "PUT", "DELETE").

            bucket_name (str):
                Name of the bucket.

            object_name (str):
                Object name in the bucket.

            expires (timedelta, default=timedelta(days=7)):
                Expiry duration for the presigned URL.

            response_headers (Optional[DictType], default=None):
                Response header overrides such as `response-content-type`.

            request_date (Optional[datetime], default=None):
                Request time to base the URL on, instead of the current
                time.

            version_id (Optional[str], default=None):
                Version ID of the object.

        Returns:
            str:
                A presigned URL string.

        Example:
            >>> url = client.get_presigned_url(
            ...     method="GET",
            ...     bucket_name="my-bucket",
            ...     object_name="my-object",
            ...     expires=timedelta(hours=2),
            ... )
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        if (
                expires.total_seconds() < 1 or
                expires.total_seconds() > _MAX_PRESIGN_EXPIRY
        ):
            raise ValueError("expires must be between 1 second to 7 days")

        region = self._get_region(bucket_name, region)
        url = self._base_url.build(
            method=method,
            region=region,
            bucket_name=bucket_name,
            object_name=object_name,
            query_params=_query_dict(
                {"versionId": version_id} if version_id else None,
                extra_query_params,
                response_headers,
            ),
        )

        if self._provider is not None:
            url = presign_v4(
                method=method,
                url=url,
                region=region,
                credentials=self._provider.retrieve(),
                date=request_date or time.utcnow(),
                expires=int(expires.total_seconds()),
            )
        return urlunsplit(url)

    def presigned_get_object(
            self,
            bucket_name: str,
            object_name: str,
            expires: timedelta = timedelta(days=7),
            response_headers: Optional[DictType] = None,
            request_date: Optional[datetime] = None,
            version_id: Optional[str] = None,
            extra_query_params: Optional[DictType] = None,
            *,
            region: Optional[str] = None,
    ) -> str:
        """
        Get a presigned URL to download an object.

        Example:
            >>> url = client.presigned_get_object(
            ...     bucket_name="my-bucket",
            ...     object_name="my-object",
            ...     expires=timedelta(hours=2),
            ... )
        """
        return self.get_presigned_url(
            method="GET",
            bucket_name=bucket_name,
            object_name=object_name,
            expires=expires,
            response_headers=response_headers,
            request_date=request_date,
            version_id=version_id,
            extra_query_params=extra_query_params,
            region=region,
        )

    def presigned_put_object(
            self,
            bucket_name: str,
            object_name: str,
            expires: timedelta = timedelta(days=7),
            *,
            region: Optional[str] = None,
    ) -> str:
        """
        Get a presigned URL to upload an object.

        Example:
            >>> url = client.presigned_put_object(
            ...     bucket_name="my-bucket",
            ...     object_name="my-object",
            ...     expires=timedelta(hours=2),
            ... )
        """
        return self.get_presigned_url(
            method="PUT",
            bucket_name=bucket_name,
            object_name=object_name,
            expires=expires,
            region=region,
        )

    def _get_config(
            self,
            bucket_name: str,
            query_key: str,
            not_found_codes: tuple[str, ...] = (),
            object_name: Optional[str] = None,
            version_id: Optional[str] = None,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> Optional[BaseHTTPResponse]:
        """
        GET a configuration subresource; None when the server reports it
        is not configured.
        """
        query_params: DictType = {query_key: ""}
        if version_id:
            query_params["versionId"] = version_id
        try:
            return self._execute(
                method="GET",
                bucket_name=bucket_name,
                object_name=object_name,
                query_params=query_params,
                region=region,
                extra_headers=extra_headers,
                extra_query_params=extra_query_params,
            )
        except S3Error as exc:
            if exc.code not in not_found_codes:
                raise
        return None

    def _set_config(
            self,
            bucket_name: str,
            query_key: str,
            body: bytes,
            object_name: Optional[str] = None,
            version_id: Optional[str] = None,
            content_type: str = "application/xml",
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """PUT a configuration subresource."""
        query_params: DictType = {query_key: ""}
        if version_id:
            query_params["versionId"] = version_id
        self._execute(
            method="PUT",
            bucket_name=bucket_name,
            object_name=object_name,
            body=body,
            headers={"Content-Type": content_type},
            query_params=query_params,
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )

    def _delete_config(
            self,
            bucket_name: str,
            query_key: str,
            object_name: Optional[str] = None,
            version_id: Optional[str] = None,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """DELETE a configuration subresource."""
        query_params: DictType = {query_key: ""}
        if version_id:
            query_params["versionId"] = version_id
        self._execute(
            method="DELETE",
            bucket_name=bucket_name,
            object_name=object_name,
            query_params=query_params,
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )

    def get_bucket_tags(
            self,
            bucket_name: str,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> Optional[Tags]:
        """
        Get the tags configuration of a bucket.

        Returns:
            Optional[Tags]:
                Tags if configured, otherwise ``None``.

        Example:
            >>> tags = client.get_bucket_tags(bucket_name="my-bucket")
        """
        check_bucket_name(bucket_name)
        response = self._get_config(
            bucket_name, "tagging", ("NoSuchTagSet",),
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )
        return unmarshal(Tags, response.data) if response else None

    def set_bucket_tags(
            self,
            bucket_name: str,
            tags: Tags,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """
        Set the tags configuration of a bucket.

        Example:
            >>> tags = Tags.new_bucket_tags()
            >>> tags["Project"] = "Project One"
            >>> client.set_bucket_tags(bucket_name="my-bucket", tags=tags)
        """
        check_bucket_name(bucket_name)
        if not isinstance(tags, Tags):
            raise ValueError("tags must be Tags type")
        self._set_config(
            bucket_name, "tagging", marshal(tags),
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )

    def delete_bucket_tags(
            self,
            bucket_name: str,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """Delete the tags configuration of a bucket."""
        check_bucket_name(bucket_name)
        self._delete_config(
            bucket_name, "tagging",
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )

    def get_object_tags(
            self,
            bucket_name: str,
            object_name: str,
            version_id: Optional[str] = None,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> Optional[Tags]:
        """
        Get the tags of an object; ``None`` when the object has none.

        Example:
            >>> tags = client.get_object_tags(
            ...     bucket_name="my-bucket",
            ...     object_name="my-object",
            ... )
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        response = self._get_config(
            bucket_name, "tagging", ("NoSuchTagSet",),
            object_name=object_name,
            version_id=version_id,
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )
        return unmarshal(Tags, response.data) if response else None

    def set_object_tags(
            self,
            bucket_name: str,
            object_name: str,
            tags: Tags,
            version_id: Optional[str] = None,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """
        Set the tags of an object.

        Example:
            >>> tags = Tags.new_object_tags()
            >>> tags["Project"] = "Project One"
            >>> client.set_object_tags(
            ...     bucket_name="my-bucket",
            ...     object_name="my-object",
            ...     tags=tags,
            ... )
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        if not isinstance(tags, Tags):
            raise ValueError("tags must be Tags type")
        self._set_config(
            bucket_name, "tagging", marshal(tags),
            object_name=object_name,
            version_id=version_id,
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )

    def delete_object_tags(
            self,
            bucket_name: str,
            object_name: str,
            version_id: Optional[str] = None,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """Delete the tags of an object."""
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        self._delete_config(
            bucket_name, "tagging",
            object_name=object_name,
            version_id=version_id,
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )

    def get_bucket_policy(
            self,
            bucket_name: str,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> Optional[str]:
        """
        Get the bucket policy JSON of a bucket; ``None`` when there is none.

        Example:
            >>> policy = client.get_bucket_policy(bucket_name="my-bucket")
        """
        check_bucket_name(bucket_name)
        response = self._get_config(
            bucket_name, "policy", ("NoSuchBucketPolicy",),
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )
        return response.data.decode() if response else None

    def set_bucket_policy(
            self,
            bucket_name: str,
            policy: Union[str, bytes],
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """
        Set the bucket policy JSON of a bucket.

        Example:
            >>> client.set_bucket_policy(
            ...     bucket_name="my-bucket",
            ...     policy=json.dumps(policy),
            ... )
        """
        check_bucket_name(bucket_name)
        self._set_config(
            bucket_name, "policy", _document(policy),
            content_type="application/json",
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )

    def delete_bucket_policy(
            self,
            bucket_name: str,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """Delete the bucket policy of a bucket."""
        check_bucket_name(bucket_name)
        self._delete_config(
            bucket_name, "policy",
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )

    def get_bucket_lifecycle(
            self,
            bucket_name: str,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> Optional[str]:
        """
        Get the lifecycle configuration XML of a bucket; ``None`` when there
        is none.
        """
        check_bucket_name(bucket_name)
        response = self._get_config(
            bucket_name, "lifecycle", ("NoSuchLifecycleConfiguration",),
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )
        return response.data.decode() if response else None

    def set_bucket_lifecycle(
            self,
            bucket_name: str,
            config: Union[str, bytes],
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """Set the lifecycle configuration XML of a bucket."""
        check_bucket_name(bucket_name)
        self._set_config(
            bucket_name, "lifecycle", _document(config),
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )

    def delete_bucket_lifecycle(
            self,
            bucket_name: str,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """Delete the lifecycle configuration of a bucket."""
        check_bucket_name(bucket_name)
        self._delete_config(
            bucket_name, "lifecycle",
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )

    def get_bucket_encryption(
            self,
            bucket_name: str,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> Optional[str]:
        """
        Get the default encryption configuration XML of a bucket; ``None``
        when there is none.
        """
        check_bucket_name(bucket_name)
        response = self._get_config(
            bucket_name, "encryption",
            ("ServerSideEncryptionConfigurationNotFoundError",),
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )
        return response.data.decode() if response else None

    def set_bucket_encryption(
            self,
            bucket_name: str,
            config: Union[str, bytes],
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """Set the default encryption configuration XML of a bucket."""
        check_bucket_name(bucket_name)
        self._set_config(
            bucket_name, "encryption", _document(config),
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )

    def delete_bucket_encryption(
            self,
            bucket_name: str,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """Delete the default encryption configuration of a bucket."""
        check_bucket_name(bucket_name)
        try:
            self._delete_config(
                bucket_name, "encryption",
                region=region,
                extra_headers=extra_headers,
                extra_query_params=extra_query_params,
            )
        except S3Error as exc:
            if exc.code != "ServerSideEncryptionConfigurationNotFoundError":
                raise

    def get_bucket_versioning(
            self,
            bucket_name: str,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> VersioningConfig:
        """
        Get the versioning configuration of a bucket.

        Example:
            >>> config = client.get_bucket_versioning(bucket_name="my-bucket")
            >>> print(config.status_string)
        """
        check_bucket_name(bucket_name)
        response = cast(BaseHTTPResponse, self._get_config(
            bucket_name, "versioning",
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        ))
        return unmarshal(VersioningConfig, response.data)

    def set_bucket_versioning(
            self,
            bucket_name: str,
            config: VersioningConfig,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """
        Set the versioning configuration of a bucket.

        Example:
            >>> client.set_bucket_versioning(
            ...     bucket_name="my-bucket",
            ...     config=VersioningConfig(ENABLED),
            ... )
        """
        check_bucket_name(bucket_name)
        if not isinstance(config, VersioningConfig):
            raise ValueError("config must be VersioningConfig type")
        self._set_config(
            bucket_name, "versioning", marshal(config),
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )

    def get_object_lock_config(
            self,
            bucket_name: str,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> Optional[str]:
        """
        Get the object lock configuration XML of a bucket; ``None`` when
        object lock is not configured.
        """
        check_bucket_name(bucket_name)
        response = self._get_config(
            bucket_name, "object-lock",
            ("ObjectLockConfigurationNotFoundError",),
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )
        return response.data.decode() if response else None

    def set_object_lock_config(
            self,
            bucket_name: str,
            config: Union[str, bytes],
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """Set the object lock configuration XML of a bucket."""
        check_bucket_name(bucket_name)
        self._set_config(
            bucket_name, "object-lock", _document(config),
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )

    def get_object_retention(
            self,
            bucket_name: str,
            object_name: str,
            version_id: Optional[str] = None,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> Optional[Retention]:
        """
        Get the retention of an object; ``None`` when it has none.

        Example:
            >>> retention = client.get_object_retention(
            ...     bucket_name="my-bucket",
            ...     object_name="my-object",
            ... )
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        response = self._get_config(
            bucket_name, "retention", ("NoSuchObjectLockConfiguration",),
            object_name=object_name,
            version_id=version_id,
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )
        return unmarshal(Retention, response.data) if response else None

    def set_object_retention(
            self,
            bucket_name: str,
            object_name: str,
            config: Retention,
            version_id: Optional[str] = None,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """
        Set the retention of an object.

        Example:
            >>> config = Retention(
            ...     GOVERNANCE, datetime.utcnow() + timedelta(days=10),
            ... )
            >>> client.set_object_retention(
            ...     bucket_name="my-bucket",
            ...     object_name="my-object",
            ...     config=config,
            ... )
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        if not isinstance(config, Retention):
            raise ValueError("config must be Retention type")
        self._set_config(
            bucket_name, "retention", marshal(config),
            object_name=object_name,
            version_id=version_id,
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )

    def _set_legal_hold(
            self,
            bucket_name: str,
            object_name: str,
            status: bool,
            version_id: Optional[str] = None,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        self._set_config(
            bucket_name, "legal-hold", marshal(LegalHold(status)),
            object_name=object_name,
            version_id=version_id,
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )

    def enable_object_legal_hold(
            self,
            bucket_name: str,
            object_name: str,
            version_id: Optional[str] = None,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """Enable legal hold on an object."""
        self._set_legal_hold(
            bucket_name, object_name, True, version_id,
            region, extra_headers, extra_query_params,
        )

    def disable_object_legal_hold(
            self,
            bucket_name: str,
            object_name: str,
            version_id: Optional[str] = None,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """Disable legal hold on an object."""
        self._set_legal_hold(
            bucket_name, object_name, False, version_id,
            region, extra_headers, extra_query_params,
        )

    def is_object_legal_hold_enabled(
            self,
            bucket_name: str,
            object_name: str,
            version_id: Optional[str] = None,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> bool:
        """
        Check whether legal hold is enabled on an object.

        Example:
            >>> if client.is_object_legal_hold_enabled(
            ...     bucket_name="my-bucket",
            ...     object_name="my-object",
            ... ):
            ...     print("legal hold is enabled on my-object")
        """
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        response = self._get_config(
            bucket_name, "legal-hold", ("NoSuchObjectLockConfiguration",),
            object_name=object_name,
            version_id=version_id,
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )
        if response is None:
            return False
        return unmarshal(LegalHold, response.data).status

    def get_bucket_notification(
            self,
            bucket_name: str,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> str:
        """Get the notification configuration XML of a bucket."""
        check_bucket_name(bucket_name)
        response = cast(BaseHTTPResponse, self._get_config(
            bucket_name, "notification",
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        ))
        return response.data.decode()

    def set_bucket_notification(
            self,
            bucket_name: str,
            config: Union[str, bytes],
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """Set the notification configuration XML of a bucket."""
        check_bucket_name(bucket_name)
        self._set_config(
            bucket_name, "notification", _document(config),
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )

    def delete_bucket_notification(
            self,
            bucket_name: str,
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ):
        """Remove all notification targets of a bucket."""
        check_bucket_name(bucket_name)
        self._set_config(
            bucket_name, "notification",
            getbytes(Element("NotificationConfiguration")),
            region=region,
            extra_headers=extra_headers,
            extra_query_params=extra_query_params,
        )

    def listen_bucket_notification(
            self,
            bucket_name: str,
            prefix: str = "",
            suffix: str = "",
            events: tuple[str, ...] = (
                "s3:ObjectCreated:*",
                "s3:ObjectRemoved:*",
                "s3:ObjectAccessed:*",
            ),
            *,
            region: Optional[str] = None,
            extra_headers: Optional[DictType] = None,
            extra_query_params: Optional[DictType] = None,
    ) -> EventIterable:
        """
        Listen for events on objects in a bucket matching prefix and/or
        suffix. This is a MinIO extension; Amazon S3 endpoints are rejected.

        The returned iterator yields decoded event documents as they arrive
        and must be closed, directly or as a context manager, to release the
        connection.

        Example:
            >>> with client.listen_bucket_notification(
            ...     "my-bucket", prefix="logs/",
            ...     events=("s3:ObjectCreated:*",),
            ... ) as events:
            ...     for event in events:
            ...         print(event["Records"][0]["s3"]["object"]["key"])
        """
        check_bucket_name(bucket_name)
        if self._base_url.is_aws_host:
            raise ValueError(
                "ListenBucketNotification API is not supported in Amazon S3",
            )
        if not events:
            raise ValueError("at least one event must be given")

        query_params: DictType = {
            "prefix": prefix or "",
            "suffix": suffix or "",
            "events": list(events),
        }
        _LOGGER.debug("listening for events on bucket %s", bucket_name)
        return EventIterable(
            lambda: self._execute(
                method="GET",
                bucket_name=bucket_name,
                query_params=query_params,
                preload_content=False,
                region=region,
                extra_headers=extra_headers,
                extra_query_params=extra_query_params,
            ),
        )
