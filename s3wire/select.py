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
s3wire.select
~~~~~~~~~~~~~

Request document and response decoder of SelectObjectContent API.

The response body is an event stream of binary messages::

    | total length (4) | headers length (4) | prelude CRC (4) |
    | headers | payload | message CRC (4) |

Both CRCs are CRC32 and lengths are big-endian.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from binascii import crc32
from dataclasses import dataclass
from io import BytesIO
from typing import Iterator, Optional, Type, TypeVar
from xml.etree import ElementTree as ET

from .error import InternalError, S3Error
from .xml import Element, SubElement, findtext, fromstring

COMPRESSION_TYPE_NONE = "NONE"
COMPRESSION_TYPE_GZIP = "GZIP"
COMPRESSION_TYPE_BZIP2 = "BZIP2"

FILE_HEADER_INFO_USE = "USE"
FILE_HEADER_INFO_IGNORE = "IGNORE"
FILE_HEADER_INFO_NONE = "NONE"

JSON_TYPE_DOCUMENT = "DOCUMENT"
JSON_TYPE_LINES = "LINES"

_PRELUDE_LENGTH = 8
_CRC_LENGTH = 4
_HEADER_VALUE_TYPE_STRING = 7


def _check_choice(name: str, value: Optional[str], choices: tuple):
    if value is not None and value not in choices:
        raise ValueError(f"{name} must be one of {', '.join(choices)}")


def _add_optional(element: ET.Element, fields: dict[str, Optional[str]]):
    for tag, value in fields.items():
        if value is not None:
            SubElement(element, tag, value)


@dataclass(frozen=True)
class InputSerialization(ABC):
    """Input serialization."""

    compression_type: Optional[str] = None

    def __post_init__(self):
        _check_choice(
            "compression type",
            self.compression_type,
            (COMPRESSION_TYPE_NONE, COMPRESSION_TYPE_GZIP,
             COMPRESSION_TYPE_BZIP2),
        )

    @abstractmethod
    def toxml(self, element: ET.Element) -> ET.Element:
        """Append format element to <InputSerialization>."""


@dataclass(frozen=True)
class CSVInputSerialization(InputSerialization):
    """CSV input serialization."""

    field_delimiter: Optional[str] = None
    file_header_info: Optional[str] = None
    quote_character: Optional[str] = None
    record_delimiter: Optional[str] = None

    def __post_init__(self):
        super().__post_init__()
        _check_choice(
            "file header info",
            self.file_header_info,
            (FILE_HEADER_INFO_USE, FILE_HEADER_INFO_IGNORE,
             FILE_HEADER_INFO_NONE),
        )

    def toxml(self, element: ET.Element) -> ET.Element:
        _add_optional(element, {"CompressionType": self.compression_type})
        csv = SubElement(element, "CSV")
        _add_optional(csv, {
            "FieldDelimiter": self.field_delimiter,
            "FileHeaderInfo": self.file_header_info,
            "QuoteCharacter": self.quote_character,
            "RecordDelimiter": self.record_delimiter,
        })
        return csv


@dataclass(frozen=True)
class JSONInputSerialization(InputSerialization):
    """JSON input serialization."""

    json_type: Optional[str] = None

    def __post_init__(self):
        super().__post_init__()
        _check_choice(
            "json type", self.json_type, (JSON_TYPE_DOCUMENT, JSON_TYPE_LINES),
        )

    def toxml(self, element: ET.Element) -> ET.Element:
        _add_optional(element, {"CompressionType": self.compression_type})
        json = SubElement(element, "JSON")
        _add_optional(json, {"Type": self.json_type})
        return json


@dataclass(frozen=True)
class CSVOutputSerialization:
    """CSV output serialization."""

    field_delimiter: Optional[str] = None
    quote_character: Optional[str] = None
    record_delimiter: Optional[str] = None

    def toxml(self, element: ET.Element) -> ET.Element:
        """Append <CSV> to <OutputSerialization>."""
        csv = SubElement(element, "CSV")
        _add_optional(csv, {
            "FieldDelimiter": self.field_delimiter,
            "QuoteCharacter": self.quote_character,
            "RecordDelimiter": self.record_delimiter,
        })
        return csv


@dataclass(frozen=True)
class JSONOutputSerialization:
    """JSON output serialization."""

    record_delimiter: Optional[str] = None

    def toxml(self, element: ET.Element) -> ET.Element:
        """Append <JSON> to <OutputSerialization>."""
        json = SubElement(element, "JSON")
        _add_optional(json, {"RecordDelimiter": self.record_delimiter})
        return json


@dataclass(frozen=True)
class SelectRequest:
    """SelectObjectContentRequest document."""

    expression: str
    input_serialization: InputSerialization
    output_serialization: CSVOutputSerialization | JSONOutputSerialization
    request_progress: bool = False

    def toxml(self, element: Optional[ET.Element]) -> ET.Element:
        element = Element("SelectObjectContentRequest")
        SubElement(element, "Expression", self.expression)
        SubElement(element, "ExpressionType", "SQL")
        self.input_serialization.toxml(
            SubElement(element, "InputSerialization"),
        )
        self.output_serialization.toxml(
            SubElement(element, "OutputSerialization"),
        )
        if self.request_progress:
            SubElement(
                SubElement(element, "RequestProgress"), "Enabled", "true",
            )
        return element


S = TypeVar("S", bound="Stats")


@dataclass(frozen=True)
class Stats:
    """Progress/Stats event payload."""

    bytes_scanned: Optional[int] = None
    bytes_processed: Optional[int] = None
    bytes_returned: Optional[int] = None

    @classmethod
    def fromxml(cls: Type[S], element: ET.Element) -> S:
        """Create new object with values from XML element."""
        def to_int(tag: str) -> Optional[int]:
            value = findtext(element, tag)
            return int(value) if value else None

        return cls(
            bytes_scanned=to_int("BytesScanned"),
            bytes_processed=to_int("BytesProcessed"),
            bytes_returned=to_int("BytesReturned"),
        )


def _read(reader, size: int) -> bytes:
    """read() failing on short reads."""
    data = reader.read(size)
    if len(data) != size:
        raise OSError(
            f"insufficient data; expected {size} bytes, got {len(data)}",
        )
    return data


def _int(data: bytes) -> int:
    return int.from_bytes(data, byteorder="big")


def _crc32(data: bytes) -> int:
    return crc32(data) & 0xffffffff


def decode_headers(data: bytes) -> dict[str, str]:
    """Decode event stream headers; only string values are supported."""
    reader = BytesIO(data)
    headers = {}
    while True:
        length = reader.read(1)
        if not length:
            return headers
        name = _read(reader, _int(length))
        value_type = _int(_read(reader, 1))
        if value_type != _HEADER_VALUE_TYPE_STRING:
            raise OSError(f"unsupported header value type {value_type}")
        value = _read(reader, _int(_read(reader, 2)))
        headers[name.decode()] = value.decode()


class SelectObjectReader:
    """
    Reader of SelectObjectContent response. Iterating or calling stream()
    yields record payloads; stats() gives the last Progress or Stats event.
    The caller must close() the reader.
    """

    def __init__(self, response):
        self._response = response
        self._stats: Optional[Stats] = None
        self._done = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, exc_traceback):
        self.close()

    def readable(self) -> bool:
        """Return this is readable."""
        return True

    def writeable(self) -> bool:
        """Return this is not writeable."""
        return False

    def close(self):
        """Close response and release network resources."""
        self._response.close()
        self._response.release_conn()

    def stats(self) -> Optional[Stats]:
        """Get stats information."""
        return self._stats

    def _next_message(self) -> tuple[dict[str, str], bytes]:
        """Read and verify one message; return headers and payload."""
        prelude = _read(self._response, _PRELUDE_LENGTH)
        prelude_crc = _read(self._response, _CRC_LENGTH)
        if _crc32(prelude) != _int(prelude_crc):
            raise OSError(
                f"prelude CRC mismatch; expected: {_crc32(prelude)}, "
                f"got: {_int(prelude_crc)}"
            )

        total_length = _int(prelude[:4])
        header_length = _int(prelude[4:])
        data = _read(
            self._response,
            total_length - _PRELUDE_LENGTH - 2 * _CRC_LENGTH,
        )
        message_crc = _int(_read(self._response, _CRC_LENGTH))
        expected_crc = _crc32(prelude + prelude_crc + data)
        if expected_crc != message_crc:
            raise OSError(
                f"message CRC mismatch; expected: {expected_crc}, "
                f"got: {message_crc}"
            )
        return decode_headers(data[:header_length]), data[header_length:]

    def _payloads(self) -> Iterator[bytes]:
        while not self._done:
            headers, payload = self._next_message()
            if headers.get(":message-type") == "error":
                self._done = True
                raise S3Error(
                    response=self._response,
                    code=headers.get(":error-code"),
                    message=headers.get(":error-message"),
                    resource=None,
                    request_id=None,
                    host_id=None,
                )
            event_type = headers.get(":event-type")
            if event_type == "End":
                self._done = True
            elif event_type in ("Progress", "Stats"):
                self._stats = Stats.fromxml(fromstring(payload))
            elif event_type == "Records":
                if payload:
                    yield payload
            elif event_type != "Cont":
                raise InternalError(f"unknown event-type {event_type}")

    def stream(self, num_bytes: int = 32 * 1024) -> Iterator[bytes]:
        """Yield record data in chunks of at most num_bytes."""
        for payload in self._payloads():
            for offset in range(0, len(payload), num_bytes):
                yield payload[offset:offset + num_bytes]

    def __iter__(self) -> Iterator[bytes]:
        return self.stream()

    def read(self) -> bytes:
        """Read all record data."""
        return b"".join(self._payloads())
