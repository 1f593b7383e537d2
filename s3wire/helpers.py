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
Protocol limits, bucket and object naming rules, header handling and the
endpoint URL builder shared by the client and the signer.
"""

from __future__ import annotations

import math
import platform
import re
import urllib.parse
from typing import BinaryIO, Dict, List, Mapping, Tuple, Union

from . import __title__, __version__
from .error import (InternalError, InvalidBucketNameError,
                    InvalidObjectNameError)

_DEFAULT_USER_AGENT = (
    f"s3wire ({platform.system()}; {platform.machine()}) "
    f"{__title__}/{__version__}"
)

MAX_MULTIPART_COUNT = 10000  # 10000 parts
MAX_MULTIPART_OBJECT_SIZE = 5 * 1024 * 1024 * 1024 * 1024  # 5TiB
MAX_PART_SIZE = 5 * 1024 * 1024 * 1024  # 5GiB
MIN_PART_SIZE = 5 * 1024 * 1024  # 5MiB

# Header keys passed through as is.
STANDARD_HEADERS = frozenset([
    "content-type",
    "cache-control",
    "content-encoding",
    "content-disposition",
    "content-language",
    "expires",
    "range",
])

# Header keys sent with "x-amz-" prefix.
AMZ_HEADERS = frozenset([
    "server-side-encryption",
    "server-side-encryption-aws-kms-key-id",
    "server-side-encryption-context",
    "server-side-encryption-customer-algorithm",
    "server-side-encryption-customer-key",
    "server-side-encryption-customer-key-md5",
    "website-redirect-location",
    "storage-class",
])

_AWS_S3_PREFIX = (r'^(((bucket\.|accesspoint\.)'
                  r'vpce(-(?!_)[a-z_\d]+(?<!-)(?<!_))+\.s3\.)|'
                  r'((?!s3)(?!-)(?!_)[a-z_\d-]{1,63}(?<!-)(?<!_)\.)'
                  r's3-control(-(?!_)[a-z_\d]+(?<!-)(?<!_))*\.|'
                  r'(s3(-(?!_)[a-z_\d]+(?<!-)(?<!_))*\.))')

_BUCKET_NAME_REGEX = re.compile(r'^[a-z0-9][a-z0-9\.\-]{1,61}[a-z0-9]$')
_IPV4_REGEX = re.compile(
    r'^((25[0-5]|2[0-4][0-9]|1[0-9][0-9]|[1-9][0-9]|[0-9])\.){3}'
    r'(25[0-5]|2[0-4][0-9]|1[0-9][0-9]|[1-9][0-9]|[0-9])$')
_HOSTNAME_REGEX = re.compile(
    r'^((?!-)(?!_)[a-z_\d-]{1,63}(?<!-)(?<!_)\.)*'
    r'((?!_)(?!-)[a-z_\d-]{1,63}(?<!-)(?<!_))$',
    re.IGNORECASE)
_AWS_ENDPOINT_REGEX = re.compile(r'.*\.amazonaws\.com(|\.cn)$', re.IGNORECASE)
_AWS_S3_ENDPOINT_REGEX = re.compile(
    _AWS_S3_PREFIX +
    r'((?!s3)(?!-)(?!_)[a-z_\d-]{1,63}(?<!-)(?<!_)\.)*'
    r'amazonaws\.com(|\.cn)$',
    re.IGNORECASE)
_AWS_ELB_ENDPOINT_REGEX = re.compile(
    r'^(?!-)(?!_)[a-z_\d-]{1,63}(?<!-)(?<!_)\.'
    r'(?!-)(?!_)[a-z_\d-]{1,63}(?<!-)(?<!_)\.'
    r'elb\.amazonaws\.com$',
    re.IGNORECASE)
_AWS_S3_PREFIX_REGEX = re.compile(_AWS_S3_PREFIX, re.IGNORECASE)
REGION_REGEX = re.compile(r'^((?!_)(?!-)[a-z_\d-]{1,63}(?<!-)(?<!_))$',
                          re.IGNORECASE)
_LEGACY_AWS_HOSTS = (
    "s3-external-1.amazonaws.com",
    "s3-us-gov-west-1.amazonaws.com",
    "s3-fips-us-gov-west-1.amazonaws.com",
)

DictType = Dict[str, Union[str, List[str], Tuple[str]]]


def quote(
        resource: str,
        safe: str = "/",
        encoding: str | None = None,
        errors: str | None = None,
) -> str:
    """urllib.parse.quote() keeping '~' unescaped."""
    return urllib.parse.quote(
        resource,
        safe=safe,
        encoding=encoding,
        errors=errors,
    ).replace("%7E", "~")


def queryencode(
        query: str,
        safe: str = "",
        encoding: str | None = None,
        errors: str | None = None,
) -> str:
    """Encode query parameter key or value."""
    return quote(query, safe, encoding, errors)


def headers_to_strings(
        headers: Mapping[str, str | list[str] | tuple[str]],
        titled_key: bool = False,
) -> str:
    """Convert HTTP headers to multi-line string with secrets redacted."""
    values = []
    for key, value in headers.items():
        key = key.title() if titled_key else key
        for item in value if isinstance(value, (list, tuple)) else [value]:
            item = re.sub(
                r"Credential=([^/]+)",
                "Credential=*REDACTED*",
                re.sub(r"Signature=([0-9a-f]+)", "Signature=*REDACTED*", item),
            )
            values.append(f"{key}: {item}")
    return "\n".join(values)


def _validate_sizes(object_size: int, part_size: int):
    """Reject part and object sizes outside the protocol limits."""
    if part_size > 0:
        if part_size < MIN_PART_SIZE:
            raise ValueError(
                f"part size {part_size} is below the 5MiB minimum"
            )
        if part_size > MAX_PART_SIZE:
            raise ValueError(
                f"part size {part_size} is above the 5GiB maximum"
            )

    if object_size >= 0:
        if object_size > MAX_MULTIPART_OBJECT_SIZE:
            raise ValueError(
                f"object size {object_size} is above the 5TiB maximum"
            )
    elif part_size <= 0:
        raise ValueError(
            "part size is required for data of unknown length",
        )


def get_part_info(object_size: int, part_size: int) -> tuple[int, int]:
    """
    Compute (part size, part count) for object size and part size. Object
    size -1 means unknown length, giving part count -1. Part size 0 picks
    the smallest multiple of 5MiB keeping the part count within 10000.
    """
    _validate_sizes(object_size, part_size)

    if object_size < 0:
        return part_size, -1

    if part_size <= 0:
        part_size = math.ceil(
            math.ceil(object_size / MAX_MULTIPART_COUNT) / MIN_PART_SIZE,
        ) * MIN_PART_SIZE

    part_size = min(part_size, object_size)
    part_count = math.ceil(object_size / part_size) if part_size else 1
    if part_count > MAX_MULTIPART_COUNT:
        raise ValueError(
            f"{object_size} bytes in parts of {part_size} bytes need more "
            f"than {MAX_MULTIPART_COUNT} parts"
        )
    return part_size, part_count


def read_part_data(
        stream: BinaryIO,
        size: int,
        part_data: bytes = b"",
) -> bytes:
    """
    Read from stream until part_data holds size bytes or EOF is reached.
    """
    size -= len(part_data)
    while size > 0:
        data = stream.read(size)
        if not data:
            break  # EOF reached
        if not isinstance(data, bytes):
            raise InternalError("read() must return 'bytes' object")
        part_data += data
        size -= len(data)
    return part_data


def check_bucket_name(bucket_name: str):
    """Check bucket name follows DNS compatible naming."""
    if not isinstance(bucket_name, str):
        raise TypeError("bucket name must be str type")

    if not _BUCKET_NAME_REGEX.match(bucket_name):
        raise InvalidBucketNameError(
            f"invalid bucket name {bucket_name}; bucket name must be 3 to "
            f"63 characters of lowercase letters, digits, '.' and '-'"
        )

    if _IPV4_REGEX.match(bucket_name):
        raise InvalidBucketNameError(
            f"bucket name {bucket_name} must not be formatted as an IP "
            f"address"
        )

    if any(chars in bucket_name for chars in ("..", ".-", "-.")):
        raise InvalidBucketNameError(
            f"bucket name {bucket_name} contains invalid successive "
            f"characters '..', '.-' or '-.'"
        )


def check_object_name(object_name: str):
    """Check object name is non-empty and has no '.' or '..' segment."""
    if not isinstance(object_name, str):
        raise TypeError("object name must be str type")
    if not object_name:
        raise InvalidObjectNameError("object name must not be empty")
    if any(token in (".", "..") for token in object_name.split("/")):
        raise InvalidObjectNameError(
            f"object name {object_name} with '.' or '..' path segment is "
            f"not supported"
        )


def check_non_empty_string(string: str | bytes):
    """Reject blank strings and values which are not strings."""
    try:
        if not string.strip():
            raise ValueError("value must not be blank")
    except AttributeError as exc:
        raise TypeError(
            f"expected str or bytes, got {type(string).__name__}",
        ) from exc


def url_replace(
        url: urllib.parse.SplitResult,
        scheme: str | None = None,
        netloc: str | None = None,
        path: str | None = None,
        query: str | None = None,
        fragment: str | None = None,
) -> urllib.parse.SplitResult:
    """Copy of url with the given components replaced."""
    return urllib.parse.SplitResult(
        scheme if scheme is not None else url.scheme,
        netloc if netloc is not None else url.netloc,
        path if path is not None else url.path,
        query if query is not None else url.query,
        fragment if fragment is not None else url.fragment,
    )


def _to_ascii_value(value) -> str:
    value = str(value)
    try:
        value.encode("us-ascii")
    except UnicodeEncodeError as exc:
        raise ValueError(
            f"header value {value!r} contains non US-ASCII characters"
        ) from exc
    return value


def normalize_key(key: str) -> str:
    """
    Map a caller supplied header key to its wire name. Standard headers and
    keys already starting with 'x-amz-' pass through, known storage and
    encryption keys gain an 'x-amz-' prefix and the rest is user metadata
    under 'x-amz-meta-'.
    """
    lower_key = key.lower()
    if lower_key in AMZ_HEADERS:
        return "x-amz-" + key
    if lower_key in STANDARD_HEADERS or lower_key.startswith("x-amz-"):
        return key
    return "x-amz-meta-" + key


def normalize_headers(headers: DictType | None) -> DictType:
    """Normalize header keys and check values are US-ASCII."""
    normalized: DictType = {}
    for key, values in (headers or {}).items():
        if isinstance(values, (list, tuple)):
            normalized[normalize_key(str(key))] = [
                _to_ascii_value(value) for value in values
            ]
        else:
            normalized[normalize_key(str(key))] = _to_ascii_value(values)
    return normalized


def genheaders(
        headers: DictType | None,
        sse=None,
        tags: Mapping[str, str] | None = None,
        retention=None,
        legal_hold: bool = False,
) -> DictType:
    """Generate object write headers for given parameters."""
    headers = normalize_headers(headers)
    headers.update(sse.headers() if sse else {})
    tagging = "&".join(
        [
            queryencode(key) + "=" + queryencode(value)
            for key, value in (tags or {}).items()
        ],
    )
    if tagging:
        headers["x-amz-tagging"] = tagging
    if retention is not None:
        headers.update(retention.headers())
    if legal_hold:
        headers["x-amz-object-lock-legal-hold"] = "ON"
    return headers


def _get_aws_info(
        host: str,
        https: bool,
        region: str | None,
) -> tuple[dict | None, str | None]:
    """Extract AWS domain information."""

    if not _HOSTNAME_REGEX.match(host):
        return (None, None)

    if _AWS_ELB_ENDPOINT_REGEX.match(host):
        region_in_host = host.split(".elb.amazonaws.com", 1)[0].split(".")[-1]
        return (None, region or region_in_host)

    if not _AWS_ENDPOINT_REGEX.match(host):
        return (None, None)

    if host.startswith("ec2-"):
        return (None, None)

    if not _AWS_S3_ENDPOINT_REGEX.match(host):
        raise ValueError(f"invalid Amazon AWS host {host}")

    matcher = _AWS_S3_PREFIX_REGEX.match(host)
    end = matcher.end() if matcher else 0
    aws_s3_prefix = host[:end]

    if "s3-accesspoint" in aws_s3_prefix and not https:
        raise ValueError(f"use HTTPS scheme for host {host}")

    tokens = host[end:].split(".")
    dualstack = tokens[0] == "dualstack"
    if dualstack:
        tokens = tokens[1:]
    region_in_host = ""
    if tokens[0] not in ["vpce", "amazonaws"]:
        region_in_host = tokens[0]
        tokens = tokens[1:]
    aws_domain_suffix = ".".join(tokens)

    if host == "s3-external-1.amazonaws.com":
        region_in_host = "us-east-1"

    if host in ["s3-us-gov-west-1.amazonaws.com",
                "s3-fips-us-gov-west-1.amazonaws.com"]:
        region_in_host = "us-gov-west-1"

    if (aws_domain_suffix.endswith(".cn") and
        not aws_s3_prefix.endswith("s3-accelerate.") and
        not region_in_host and
            not region):
        raise ValueError(
            f"region missing in Amazon S3 China endpoint {host}",
        )

    return ({"s3_prefix": aws_s3_prefix,
             "domain_suffix": aws_domain_suffix,
             "region": region or region_in_host,
             "dualstack": dualstack}, None)


def _parse_url(endpoint: str) -> urllib.parse.SplitResult:
    """Parse and validate endpoint URL."""

    url = urllib.parse.urlsplit(endpoint)
    host = url.hostname

    if url.scheme.lower() not in ["http", "https"]:
        raise ValueError("scheme in endpoint must be http or https")

    url = url_replace(url, scheme=url.scheme.lower())

    if url.path and url.path != "/":
        raise ValueError("path in endpoint is not allowed")

    url = url_replace(url, path="")

    if url.query:
        raise ValueError("query in endpoint is not allowed")

    if url.fragment:
        raise ValueError("fragment in endpoint is not allowed")

    try:
        url.port
    except ValueError as exc:
        raise ValueError("invalid port") from exc

    if url.username or url.password:
        raise ValueError("user info in endpoint is not allowed")

    if (
            (url.scheme == "http" and url.port == 80) or
            (url.scheme == "https" and url.port == 443)
    ):
        url = url_replace(url, netloc=host)

    return url


class BaseURL:
    """
    Base URL of S3 endpoint. Builds request URLs choosing path or virtual
    host style and rewriting Amazon S3 hosts for region, accelerate and
    dualstack settings.
    """
    _aws_info: dict | None
    _virtual_style_flag: bool
    _url: urllib.parse.SplitResult
    _region: str | None
    _accelerate_host_flag: bool

    def __init__(self, endpoint: str, region: str | None):
        url = _parse_url(endpoint)

        if region and not REGION_REGEX.match(region):
            raise ValueError(f"invalid region {region}")

        hostname = url.hostname or ""
        self._aws_info, region_in_host = _get_aws_info(
            hostname, url.scheme == "https", region)
        self._virtual_style_flag = (
            self._aws_info is not None or hostname.endswith("aliyuncs.com")
        )
        self._url = url
        self._region = region or region_in_host
        self._accelerate_host_flag = False
        if self._aws_info:
            self._region = self._aws_info["region"] or None
            self._accelerate_host_flag = (
                self._aws_info["s3_prefix"].endswith("s3-accelerate.")
            )

    @property
    def region(self) -> str | None:
        """Region found in endpoint or given at construction."""
        return self._region

    @property
    def is_https(self) -> bool:
        """Check if scheme is HTTPS."""
        return self._url.scheme == "https"

    @property
    def host(self) -> str:
        """Host with port; default port is omitted."""
        return self._url.netloc

    @property
    def is_aws_host(self) -> bool:
        """Check if URL points to AWS host."""
        return self._aws_info is not None

    @property
    def accelerate_host_flag(self) -> bool:
        """Get AWS accelerate host flag."""
        return self._accelerate_host_flag

    @accelerate_host_flag.setter
    def accelerate_host_flag(self, flag: bool):
        self._accelerate_host_flag = flag
        if not self._aws_info:
            return
        prefix = self._aws_info["s3_prefix"]
        if flag and not prefix.endswith("s3-accelerate."):
            self._aws_info["s3_prefix"] = (
                prefix[:-len("s3.")] + "s3-accelerate."
                if prefix.endswith("s3.") else prefix
            )
        elif not flag and prefix.endswith("s3-accelerate."):
            self._aws_info["s3_prefix"] = (
                prefix[:-len("s3-accelerate.")] + "s3."
            )

    @property
    def dualstack_host_flag(self) -> bool:
        """Check if URL points to AWS dualstack host."""
        return self._aws_info["dualstack"] if self._aws_info else False

    @dualstack_host_flag.setter
    def dualstack_host_flag(self, flag: bool):
        if self._aws_info:
            self._aws_info["dualstack"] = flag

    @property
    def virtual_style_flag(self) -> bool:
        """Check to use virtual style or not."""
        return self._virtual_style_flag

    @virtual_style_flag.setter
    def virtual_style_flag(self, flag: bool):
        self._virtual_style_flag = flag

    @classmethod
    def _build_aws_url(
            cls,
            aws_info: dict,
            url: urllib.parse.SplitResult,
            bucket_name: str | None,
            enforce_path_style: bool,
            region: str,
    ) -> urllib.parse.SplitResult:
        """Rebuild Amazon S3 host for region and flags."""
        s3_prefix = aws_info["s3_prefix"]
        domain_suffix = aws_info["domain_suffix"]

        host = f"{s3_prefix}{domain_suffix}"
        if host in _LEGACY_AWS_HOSTS:
            return url_replace(url, netloc=host)

        netloc = s3_prefix
        if "s3-accelerate" in s3_prefix:
            if "." in (bucket_name or ""):
                raise ValueError(
                    f"bucket name '{bucket_name}' with '.' is not allowed "
                    f"for accelerate endpoint"
                )
            if enforce_path_style:
                netloc = netloc.replace("-accelerate", "", 1)

        if aws_info["dualstack"]:
            netloc += "dualstack."
        if "s3-accelerate" not in netloc:
            netloc += region + "."
        netloc += domain_suffix

        return url_replace(url, netloc=netloc)

    def _build_list_buckets_url(
            self,
            url: urllib.parse.SplitResult,
            region: str | None,
    ) -> urllib.parse.SplitResult:
        """Build URL for ListBuckets API."""
        if not self._aws_info:
            return url

        s3_prefix = self._aws_info["s3_prefix"]
        domain_suffix = self._aws_info["domain_suffix"]

        host = f"{s3_prefix}{domain_suffix}"
        if host in _LEGACY_AWS_HOSTS:
            return url_replace(url, netloc=host)

        if s3_prefix.startswith("s3.") or s3_prefix.startswith("s3-"):
            s3_prefix = "s3."
            cn_suffix = ".cn" if domain_suffix.endswith(".cn") else ""
            domain_suffix = f"amazonaws.com{cn_suffix}"
        return url_replace(url, netloc=f"{s3_prefix}{region}.{domain_suffix}")

    def build(
            self,
            method: str,
            region: str,
            bucket_name: str | None = None,
            object_name: str | None = None,
            query_params: DictType | None = None,
    ) -> urllib.parse.SplitResult:
        """Build URL for given information."""
        if not bucket_name and object_name:
            raise ValueError(
                f"empty bucket name for object name {object_name}",
            )
        if bucket_name:
            check_bucket_name(bucket_name)
        if object_name is not None:
            check_object_name(object_name)

        url = url_replace(self._url, path="/")

        query = []
        for key, values in sorted((query_params or {}).items()):
            values = values if isinstance(values, (list, tuple)) else [values]
            query += [
                f"{queryencode(key)}={queryencode(value)}"
                for value in sorted(values)
            ]
        url = url_replace(url, query="&".join(query))

        if not bucket_name:
            return self._build_list_buckets_url(url, region)

        enforce_path_style = bool(
            # CreateBucket API requires path style in Amazon AWS S3.
            (method == "PUT" and not object_name and not query_params) or

            # GetBucketLocation API requires path style in Amazon AWS S3.
            (query_params and "location" in query_params) or

            # Bucket name with '.' fails SSL certificate validation.
            ("." in bucket_name and self._url.scheme == "https")
        )

        if self._aws_info:
            url = BaseURL._build_aws_url(
                self._aws_info, url, bucket_name, enforce_path_style, region)

        netloc = url.netloc
        path = "/"

        if enforce_path_style or not self._virtual_style_flag:
            path = f"/{bucket_name}"
        else:
            netloc = f"{bucket_name}.{netloc}"
        if object_name:
            path += ("" if path.endswith("/") else "/") + quote(object_name)

        return url_replace(url, netloc=netloc, path=path)
