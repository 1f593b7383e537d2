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

from unittest import TestCase, mock
from urllib.parse import quote

from s3wire import InternalError, S3Client, S3Error, XmlParserError

from .mocks import XML_HEADERS, MockConnection, MockResponse, generate_error

BUCKET_URL = "https://localhost:9000/my-bucket"


def listing_url(**query):
    params = {key.replace("_", "-"): value for key, value in query.items()}
    return BUCKET_URL + "?" + "&".join(
        f"{quote(key, safe='')}={quote(value, safe='')}"
        for key, value in sorted(params.items())
    )


def v2_url(**query):
    return listing_url(
        delimiter="", encoding_type="url", list_type="2", max_keys="1000",
        prefix="", **query,
    )


def contents(keys):
    return "".join(
        f"<Contents><Key>{key}</Key>"
        f"<LastModified>2026-10-19T09:00:00.000Z</LastModified>"
        f"<ETag>&quot;etag-{key}&quot;</ETag><Size>{len(key)}</Size>"
        f"<StorageClass>STANDARD</StorageClass></Contents>"
        for key in keys
    )


def listing(body, truncated=False, tag="ListBucketResult"):
    return f'''<?xml version="1.0" encoding="UTF-8"?>
<{tag} xmlns="http://s3.amazonaws.com/doc/2006-03-01/">
  <Name>my-bucket</Name>
  <IsTruncated>{"true" if truncated else "false"}</IsTruncated>
  {body}
</{tag}>'''


def page_response(url, body, truncated=False, tag="ListBucketResult"):
    return MockResponse("GET", url, 200, XML_HEADERS,
                        listing(body, truncated, tag))


class ListObjectsTest(TestCase):
    def setUp(self):
        patcher = mock.patch('urllib3.PoolManager')
        self.addCleanup(patcher.stop)
        self.server = MockConnection()
        patcher.start().return_value = self.server
        self.client = S3Client("localhost:9000")

    def test_invalid_max_keys(self):
        with self.assertRaises(ValueError):
            self.client.list_objects("my-bucket", max_keys=0)

    def test_nothing_fetched_before_iteration(self):
        self.client.list_objects("my-bucket", recursive=True)
        self.assertEqual(self.server.requests, [])

    def test_empty_bucket(self):
        self.server.mock_add_request(page_response(v2_url(), ""))
        objects = list(self.client.list_objects("my-bucket", recursive=True))
        self.assertEqual(objects, [])
        self.assertEqual(len(self.server.requests), 1)

    def test_pages_in_order(self):
        keys = [f"object-{i:04d}" for i in range(2500)]
        self.server.mock_add_request(page_response(
            v2_url(start_after="a"),
            contents(keys[:1000]) +
            "<NextContinuationToken>token1</NextContinuationToken>",
            truncated=True,
        ))
        self.server.mock_add_request(page_response(
            v2_url(continuation_token="token1"),
            contents(keys[1000:2000]) +
            "<NextContinuationToken>token2</NextContinuationToken>",
            truncated=True,
        ))
        self.server.mock_add_request(page_response(
            v2_url(continuation_token="token2"), contents(keys[2000:]),
        ))

        iterator = self.client.list_objects(
            "my-bucket", recursive=True, start_after="a",
        )
        names = [result.get().object_name for result in iterator]

        self.assertEqual(names, keys)
        self.assertEqual(iterator.pages, 3)
        self.assertEqual(len(self.server.requests), 3)
        self.assertNotIn("start-after", self.server.requests[1].query)
        self.assertEqual(self.server.requests[2].query["continuation-token"],
                         ["token2"])

    def test_object_fields(self):
        self.server.mock_add_request(page_response(
            listing_url(delimiter="/", encoding_type="url", list_type="2",
                        max_keys="1000", prefix="photos/"),
            "<EncodingType>url</EncodingType>" + contents(["photos%2Fa+b"]) +
            "<CommonPrefixes><Prefix>photos%2F2026%2F</Prefix>"
            "</CommonPrefixes>",
        ))
        objects = [
            result.get()
            for result in self.client.list_objects("my-bucket", "photos/")
        ]
        self.assertEqual(objects[0].object_name, "photos/a b")
        self.assertEqual(objects[0].etag, "etag-photos%2Fa+b")
        self.assertEqual(objects[0].size, 12)
        self.assertEqual(objects[0].last_modified.year, 2026)
        self.assertFalse(objects[0].is_dir)
        self.assertEqual(objects[1].object_name, "photos/2026/")
        self.assertTrue(objects[1].is_dir)

    def test_api_v1_marker(self):
        base = {"delimiter": "", "encoding_type": "url",
                "max_keys": "1000", "prefix": ""}
        self.server.mock_add_request(page_response(
            listing_url(**base), contents(["a", "b"]), truncated=True,
        ))
        self.server.mock_add_request(page_response(
            listing_url(marker="b", **base), contents(["c"]),
        ))
        names = [
            result.get().object_name
            for result in self.client.list_objects(
                "my-bucket", recursive=True, use_api_v1=True,
            )
        ]
        self.assertEqual(names, ["a", "b", "c"])

    def test_versions(self):
        base = {"delimiter": "", "encoding_type": "url",
                "max_keys": "1000", "prefix": "", "versions": ""}
        self.server.mock_add_request(page_response(
            listing_url(**base),
            "<Version><Key>a</Key><VersionId>v2</VersionId>"
            "<IsLatest>true</IsLatest><Size>1</Size></Version>"
            "<NextKeyMarker>a</NextKeyMarker>"
            "<NextVersionIdMarker>v2</NextVersionIdMarker>",
            truncated=True, tag="ListVersionsResult",
        ))
        self.server.mock_add_request(page_response(
            listing_url(key_marker="a", version_id_marker="v2", **base),
            "<DeleteMarker><Key>a</Key><VersionId>v1</VersionId>"
            "<IsLatest>false</IsLatest></DeleteMarker>",
            tag="ListVersionsResult",
        ))
        objects = [
            result.get()
            for result in self.client.list_objects(
                "my-bucket", recursive=True, include_version=True,
            )
        ]
        self.assertEqual([obj.version_id for obj in objects], ["v2", "v1"])
        self.assertFalse(objects[0].is_delete_marker)
        self.assertTrue(objects[1].is_delete_marker)

    def test_fetch_error_ends_sequence(self):
        self.server.mock_add_request(page_response(
            v2_url(),
            contents(["a", "b"]) +
            "<NextContinuationToken>token1</NextContinuationToken>",
            truncated=True,
        ))
        self.server.mock_add_request(MockResponse(
            "GET", v2_url(continuation_token="token1"), 404, XML_HEADERS,
            generate_error("NoSuchBucket", "The specified bucket does not "
                           "exist", bucket_name="my-bucket"),
        ))

        results = list(self.client.list_objects("my-bucket", recursive=True))

        self.assertEqual(len(results), 3)
        self.assertTrue(results[0].ok)
        self.assertTrue(results[1].ok)
        self.assertFalse(results[2].ok)
        self.assertIsInstance(results[2].error, S3Error)
        self.assertEqual(results[2].error.code, "NoSuchBucket")
        with self.assertRaises(S3Error):
            results[2].get()

    def test_malformed_page_ends_sequence(self):
        self.server.mock_add_request(page_response(
            v2_url(),
            contents(["a"]) +
            "<NextContinuationToken>token1</NextContinuationToken>",
            truncated=True,
        ))
        self.server.mock_add_request(MockResponse(
            "GET", v2_url(continuation_token="token1"), 200, XML_HEADERS,
            "<ListBucketResult><Contents>",
        ))

        results = list(self.client.list_objects("my-bucket", recursive=True))

        self.assertEqual(len(results), 2)
        self.assertEqual(results[0].get().object_name, "a")
        self.assertFalse(results[1].ok)
        self.assertIsInstance(results[1].error, XmlParserError)
        self.assertEqual(len(self.server.requests), 2)

    def test_exhausted_iterator_does_not_fetch(self):
        self.server.mock_add_request(page_response(v2_url(), contents(["a"])))
        iterator = self.client.list_objects("my-bucket", recursive=True)
        self.assertEqual(len(list(iterator)), 1)
        with self.assertRaises(StopIteration):
            next(iterator)
        self.assertFalse(iterator.has_next())
        self.assertEqual(len(self.server.requests), 1)

    def test_truncated_page_without_marker(self):
        self.server.mock_add_request(
            page_response(v2_url(), "", truncated=True),
        )
        results = list(self.client.list_objects("my-bucket", recursive=True))
        self.assertEqual(len(results), 1)
        self.assertIsInstance(results[0].error, InternalError)
