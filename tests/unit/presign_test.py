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

from datetime import datetime, timedelta, timezone
from unittest import TestCase, mock
from urllib.parse import parse_qs, urlsplit

from s3wire import S3Client

from .mocks import MockConnection, MockResponse

REQUEST_DATE = datetime(2026, 10, 19, 9, 0, 0, tzinfo=timezone.utc)


class AnonymousPresignTest(TestCase):
    def setUp(self):
        self.client = S3Client("localhost:9000")

    def test_plain_url(self):
        self.assertEqual(
            self.client.presigned_get_object("my-bucket", "my-object"),
            "https://localhost:9000/my-bucket/my-object",
        )

    def test_response_headers(self):
        url = self.client.presigned_get_object(
            "my-bucket", "my-object",
            response_headers={"response-content-type": "application/json"},
            version_id="v1",
        )
        self.assertEqual(
            url,
            "https://localhost:9000/my-bucket/my-object"
            "?response-content-type=application%2Fjson&versionId=v1",
        )

    def test_expiry_bounds(self):
        for expires in (timedelta(0), timedelta(milliseconds=500),
                        timedelta(days=7, seconds=1)):
            with self.assertRaises(ValueError):
                self.client.presigned_put_object(
                    "my-bucket", "my-object", expires,
                )

    def test_invalid_names(self):
        with self.assertRaises(ValueError):
            self.client.presigned_get_object("my_bucket", "my-object")
        with self.assertRaises(ValueError):
            self.client.presigned_get_object("my-bucket", "")


class SignedPresignTest(TestCase):
    def setUp(self):
        self.client = S3Client(
            "localhost:9000", access_key="minio", secret_key="minio123",
            region="us-east-1",
        )

    def query_of(self, url):
        return parse_qs(urlsplit(url).query)

    def test_query_parameters(self):
        url = self.client.presigned_get_object(
            "my-bucket", "my-object", timedelta(hours=1),
            request_date=REQUEST_DATE,
        )
        self.assertTrue(url.startswith(
            "https://localhost:9000/my-bucket/my-object?"))
        query = self.query_of(url)
        self.assertEqual(query["X-Amz-Algorithm"], ["AWS4-HMAC-SHA256"])
        self.assertEqual(query["X-Amz-Credential"],
                         ["minio/20261019/us-east-1/s3/aws4_request"])
        self.assertEqual(query["X-Amz-Date"], ["20261019T090000Z"])
        self.assertEqual(query["X-Amz-Expires"], ["3600"])
        self.assertEqual(query["X-Amz-SignedHeaders"], ["host"])
        self.assertRegex(query["X-Amz-Signature"][0], "^[0-9a-f]{64}$")

    def test_signature_depends_on_method(self):
        get_url = self.client.get_presigned_url(
            "GET", "my-bucket", "my-object", request_date=REQUEST_DATE,
        )
        put_url = self.client.get_presigned_url(
            "PUT", "my-bucket", "my-object", request_date=REQUEST_DATE,
        )
        self.assertEqual(
            get_url,
            self.client.get_presigned_url(
                "GET", "my-bucket", "my-object", request_date=REQUEST_DATE,
            ),
        )
        self.assertNotEqual(self.query_of(get_url)["X-Amz-Signature"],
                            self.query_of(put_url)["X-Amz-Signature"])
        self.assertEqual(self.query_of(get_url)["X-Amz-Expires"], ["604800"])

    def test_session_token(self):
        client = S3Client(
            "localhost:9000", access_key="minio", secret_key="minio123",
            session_token="token/with+chars", region="us-east-1",
        )
        url = client.presigned_get_object("my-bucket", "my-object")
        self.assertIn("X-Amz-Security-Token=token%2Fwith%2Bchars", url)

    @mock.patch('urllib3.PoolManager')
    def test_region_lookup(self, mock_connection):
        server = MockConnection()
        mock_connection.return_value = server
        server.mock_add_request(MockResponse(
            "GET", "https://localhost:9000/my-bucket?location=", 200,
            {"Content-Type": "application/xml"},
            '<LocationConstraint xmlns="http://s3.amazonaws.com/doc/'
            '2006-03-01/">eu-central-1</LocationConstraint>',
        ))
        client = S3Client("localhost:9000", access_key="minio",
                          secret_key="minio123")
        url = client.presigned_put_object("my-bucket", "my-object")
        self.assertIn("%2Feu-central-1%2Fs3%2Faws4_request", url)
        client.presigned_put_object("my-bucket", "other-object")
        self.assertEqual(len(server.requests), 1)
