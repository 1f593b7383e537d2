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

from binascii import crc32
from unittest import TestCase, mock
from xml.etree import ElementTree as ET

from s3wire import S3Client, S3Error
from s3wire.select import (CSVInputSerialization, CSVOutputSerialization,
                           JSONInputSerialization, JSONOutputSerialization,
                           SelectRequest)
from s3wire.xml import marshal

from .mocks import MockConnection, MockResponse

SELECT_URL = ("https://localhost:9000/my-bucket/data.csv"
              "?select=&select-type=2")
NS = "{http://s3.amazonaws.com/doc/2006-03-01/}"

STATS = (b"<Stats><BytesScanned>100</BytesScanned>"
         b"<BytesProcessed>100</BytesProcessed>"
         b"<BytesReturned>8</BytesReturned></Stats>")


def encode_message(headers, payload=b""):
    encoded = b""
    for name, value in headers.items():
        name, value = name.encode(), value.encode()
        encoded += (
            len(name).to_bytes(1, "big") + name + b"\x07" +
            len(value).to_bytes(2, "big") + value
        )
    total = 12 + len(encoded) + len(payload) + 4
    prelude = total.to_bytes(4, "big") + len(encoded).to_bytes(4, "big")
    message = (
        prelude + (crc32(prelude) & 0xffffffff).to_bytes(4, "big") +
        encoded + payload
    )
    return message + (crc32(message) & 0xffffffff).to_bytes(4, "big")


def event(event_type, payload=b""):
    return encode_message(
        {":message-type": "event", ":event-type": event_type}, payload,
    )


def records_stream():
    return (
        event("Records", b"a,b\n") + event("Cont") +
        event("Records", b"c,d\n") + event("Stats", STATS) + event("End")
    )


class SelectRequestTest(TestCase):
    def test_csv_request(self):
        request = SelectRequest(
            "select * from S3Object",
            CSVInputSerialization(file_header_info="USE"),
            CSVOutputSerialization(record_delimiter="\n"),
            request_progress=True,
        )
        element = ET.fromstring(marshal(request))
        self.assertEqual(element.findtext(NS + "Expression"),
                         "select * from S3Object")
        self.assertEqual(element.findtext(NS + "ExpressionType"), "SQL")
        self.assertEqual(
            element.findtext(
                f"{NS}InputSerialization/{NS}CSV/{NS}FileHeaderInfo"),
            "USE",
        )
        self.assertEqual(
            element.findtext(f"{NS}RequestProgress/{NS}Enabled"), "true",
        )

    def test_json_request(self):
        request = SelectRequest(
            "select * from S3Object s",
            JSONInputSerialization(compression_type="GZIP",
                                   json_type="LINES"),
            JSONOutputSerialization(),
        )
        element = ET.fromstring(marshal(request))
        self.assertEqual(
            element.findtext(f"{NS}InputSerialization/{NS}CompressionType"),
            "GZIP",
        )
        self.assertIsNone(element.find(NS + "RequestProgress"))

    def test_invalid_choice(self):
        with self.assertRaises(ValueError):
            CSVInputSerialization(file_header_info="MAYBE")
        with self.assertRaises(ValueError):
            JSONInputSerialization(compression_type="ZIP")


class SelectObjectContentTest(TestCase):
    def setUp(self):
        patcher = mock.patch('urllib3.PoolManager')
        self.addCleanup(patcher.stop)
        self.server = MockConnection()
        patcher.start().return_value = self.server
        self.client = S3Client("localhost:9000")
        self.request = SelectRequest(
            "select * from S3Object",
            CSVInputSerialization(),
            CSVOutputSerialization(),
        )

    def select(self, content):
        response = MockResponse("POST", SELECT_URL, 200, None, content)
        self.server.mock_add_request(response)
        reader = self.client.select_object_content(
            "my-bucket", "data.csv", self.request,
        )
        return reader, response

    def test_read_records(self):
        reader, response = self.select(records_stream())
        with reader:
            self.assertEqual(reader.read(), b"a,b\nc,d\n")
            stats = reader.stats()
        self.assertEqual(stats.bytes_scanned, 100)
        self.assertEqual(stats.bytes_returned, 8)
        self.assertTrue(response.closed)
        self.assertTrue(response.released)
        self.assertIn(b"select * from S3Object",
                      self.server.requests[0].body)

    def test_stream_chunks(self):
        reader, _ = self.select(records_stream())
        with reader:
            chunks = list(reader.stream(num_bytes=3))
        self.assertEqual(chunks, [b"a,b", b"\n", b"c,d", b"\n"])

    def test_error_message(self):
        reader, _ = self.select(
            event("Records", b"a,b\n") + encode_message({
                ":message-type": "error",
                ":error-code": "InvalidQuery",
                ":error-message": "syntax error",
            }),
        )
        with reader:
            records = iter(reader)
            self.assertEqual(next(records), b"a,b\n")
            with self.assertRaises(S3Error) as ctx:
                next(records)
        self.assertEqual(ctx.exception.code, "InvalidQuery")
        self.assertEqual(ctx.exception.message, "syntax error")

    def test_corrupted_message(self):
        message = bytearray(event("Records", b"a,b\n"))
        message[-1] ^= 0xff
        reader, _ = self.select(bytes(message))
        with reader:
            with self.assertRaises(OSError):
                reader.read()

    def test_truncated_stream(self):
        reader, _ = self.select(event("Records", b"a,b\n")[:10])
        with reader:
            with self.assertRaises(OSError):
                reader.read()
