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

from datetime import datetime, timezone
from unittest import TestCase, mock
from xml.etree import ElementTree as ET

from s3wire import S3Client, S3Error
from s3wire.documents import (ENABLED, GOVERNANCE, LegalHold, Retention,
                              Tags, VersioningConfig)

from .mocks import XML_HEADERS, MockConnection, MockResponse, generate_error

BUCKET_URL = "https://localhost:9000/my-bucket"
OBJECT_URL = BUCKET_URL + "/my-object"
NS = "{http://s3.amazonaws.com/doc/2006-03-01/}"

TAGGING = '''<Tagging xmlns="http://s3.amazonaws.com/doc/2006-03-01/">
<TagSet><Tag><Key>Project</Key><Value>One</Value></Tag></TagSet>
</Tagging>'''

LIFECYCLE = ('<LifecycleConfiguration><Rule><ID>expire</ID>'
             '<Status>Enabled</Status></Rule></LifecycleConfiguration>')

POLICY = '{"Version":"2012-10-17","Statement":[]}'


def not_found(method, url, code):
    return MockResponse(method, url, 404, XML_HEADERS,
                        generate_error(code, "not configured"))


class ConfigTest(TestCase):
    def setUp(self):
        patcher = mock.patch('urllib3.PoolManager')
        self.addCleanup(patcher.stop)
        self.server = MockConnection()
        patcher.start().return_value = self.server
        self.client = S3Client("localhost:9000")

    def respond(self, method, url, status=200, content=None, headers=None):
        self.server.mock_add_request(MockResponse(
            method, url, status,
            XML_HEADERS if headers is None else headers, content,
        ))

    def test_get_bucket_tags(self):
        self.respond("GET", BUCKET_URL + "?tagging=", content=TAGGING)
        self.assertEqual(self.client.get_bucket_tags("my-bucket"),
                         {"Project": "One"})

    def test_get_bucket_tags_not_configured(self):
        self.server.mock_add_request(
            not_found("GET", BUCKET_URL + "?tagging=", "NoSuchTagSet"),
        )
        self.assertIsNone(self.client.get_bucket_tags("my-bucket"))

    def test_get_bucket_tags_other_error(self):
        self.server.mock_add_request(
            not_found("GET", BUCKET_URL + "?tagging=", "NoSuchBucket"),
        )
        with self.assertRaises(S3Error) as ctx:
            self.client.get_bucket_tags("my-bucket")
        self.assertEqual(ctx.exception.code, "NoSuchBucket")

    def test_set_object_tags(self):
        self.respond("PUT", OBJECT_URL + "?tagging=&versionId=v1")
        tags = Tags.new_object_tags()
        tags["Project"] = "One"
        self.client.set_object_tags("my-bucket", "my-object", tags, "v1")
        request = self.server.requests[0]
        self.assertEqual(request.headers["Content-Type"], "application/xml")
        self.assertIn("Content-MD5", request.headers)
        element = ET.fromstring(request.body)
        self.assertEqual(
            element.findtext(f"{NS}TagSet/{NS}Tag/{NS}Value"), "One",
        )

    def test_set_tags_type(self):
        with self.assertRaises(ValueError):
            self.client.set_bucket_tags("my-bucket", {"Project": "One"})

    def test_delete_object_tags(self):
        self.respond("DELETE", OBJECT_URL + "?tagging=", 204, headers={})
        self.client.delete_object_tags("my-bucket", "my-object")
        self.assertEqual(len(self.server.requests), 1)

    def test_bucket_policy(self):
        self.respond("GET", BUCKET_URL + "?policy=", content=POLICY,
                     headers={"Content-Type": "application/json"})
        self.respond("PUT", BUCKET_URL + "?policy=", 204, headers={})
        self.assertEqual(self.client.get_bucket_policy("my-bucket"), POLICY)
        self.client.set_bucket_policy("my-bucket", POLICY)
        request = self.server.requests[1]
        self.assertEqual(request.headers["Content-Type"], "application/json")
        self.assertEqual(request.body, POLICY.encode())

    def test_bucket_policy_not_configured(self):
        self.server.mock_add_request(not_found(
            "GET", BUCKET_URL + "?policy=", "NoSuchBucketPolicy",
        ))
        self.assertIsNone(self.client.get_bucket_policy("my-bucket"))

    def test_empty_document(self):
        with self.assertRaises(ValueError):
            self.client.set_bucket_lifecycle("my-bucket", "  ")
        self.assertEqual(self.server.requests, [])

    def test_bucket_lifecycle(self):
        self.server.mock_add_request(not_found(
            "GET", BUCKET_URL + "?lifecycle=", "NoSuchLifecycleConfiguration",
        ))
        self.respond("PUT", BUCKET_URL + "?lifecycle=")
        self.respond("GET", BUCKET_URL + "?lifecycle=", content=LIFECYCLE)
        self.assertIsNone(self.client.get_bucket_lifecycle("my-bucket"))
        self.client.set_bucket_lifecycle("my-bucket", LIFECYCLE)
        self.assertEqual(self.server.requests[1].body, LIFECYCLE.encode())
        self.assertEqual(self.client.get_bucket_lifecycle("my-bucket"),
                         LIFECYCLE)

    def test_delete_bucket_encryption_not_configured(self):
        self.server.mock_add_request(not_found(
            "DELETE", BUCKET_URL + "?encryption=",
            "ServerSideEncryptionConfigurationNotFoundError",
        ))
        self.client.delete_bucket_encryption("my-bucket")
        self.assertEqual(len(self.server.requests), 1)

    def test_get_bucket_versioning(self):
        self.respond(
            "GET", BUCKET_URL + "?versioning=",
            content='<VersioningConfiguration xmlns="http://s3.amazonaws.com'
                    '/doc/2006-03-01/"/>',
        )
        config = self.client.get_bucket_versioning("my-bucket")
        self.assertIsNone(config.status)
        self.assertEqual(config.status_string, "Off")

    def test_set_bucket_versioning(self):
        self.respond("PUT", BUCKET_URL + "?versioning=")
        self.client.set_bucket_versioning(
            "my-bucket", VersioningConfig(ENABLED, excluded_prefixes=["tmp/"]),
        )
        element = ET.fromstring(self.server.requests[0].body)
        self.assertEqual(element.findtext(NS + "Status"), "Enabled")
        self.assertEqual(
            element.findtext(f"{NS}ExcludedPrefixes/{NS}Prefix"), "tmp/",
        )

    def test_object_lock_not_configured(self):
        self.server.mock_add_request(not_found(
            "GET", BUCKET_URL + "?object-lock=",
            "ObjectLockConfigurationNotFoundError",
        ))
        self.assertIsNone(self.client.get_object_lock_config("my-bucket"))

    def test_object_retention(self):
        until = datetime(2027, 1, 1, tzinfo=timezone.utc)
        self.respond("PUT", OBJECT_URL + "?retention=")
        self.respond(
            "GET", OBJECT_URL + "?retention=",
            content="<Retention><Mode>GOVERNANCE</Mode>"
                    "<RetainUntilDate>2027-01-01T00:00:00.000Z"
                    "</RetainUntilDate></Retention>",
        )
        self.client.set_object_retention(
            "my-bucket", "my-object", Retention(GOVERNANCE, until),
        )
        self.assertEqual(
            self.client.get_object_retention("my-bucket", "my-object"),
            Retention(GOVERNANCE, until),
        )

    def test_legal_hold(self):
        self.respond("PUT", OBJECT_URL + "?legal-hold=")
        self.respond("GET", OBJECT_URL + "?legal-hold=",
                     content="<LegalHold><Status>ON</Status></LegalHold>")
        self.client.enable_object_legal_hold("my-bucket", "my-object")
        self.assertEqual(
            ET.fromstring(self.server.requests[0].body).findtext(
                NS + "Status"),
            "ON",
        )
        self.assertTrue(self.client.is_object_legal_hold_enabled(
            "my-bucket", "my-object"))

    def test_legal_hold_not_configured(self):
        self.server.mock_add_request(not_found(
            "GET", OBJECT_URL + "?legal-hold=",
            "NoSuchObjectLockConfiguration",
        ))
        self.assertFalse(self.client.is_object_legal_hold_enabled(
            "my-bucket", "my-object"))

    def test_delete_bucket_notification(self):
        self.respond("PUT", BUCKET_URL + "?notification=")
        self.client.delete_bucket_notification("my-bucket")
        element = ET.fromstring(self.server.requests[0].body)
        self.assertEqual(element.tag, NS + "NotificationConfiguration")
        self.assertEqual(list(element), [])


class DocumentsTest(TestCase):
    def test_object_tag_limit(self):
        tags = Tags.new_object_tags()
        for i in range(10):
            tags[f"key{i}"] = "value"
        with self.assertRaises(ValueError):
            tags["key10"] = "value"
        tags["key0"] = "replaced"
        self.assertEqual(tags["key0"], "replaced")

    def test_invalid_tag(self):
        tags = Tags.new_bucket_tags()
        with self.assertRaises(ValueError):
            tags[""] = "value"
        with self.assertRaises(ValueError):
            tags["key"] = "a&b"

    def test_versioning_status(self):
        with self.assertRaises(ValueError):
            VersioningConfig("Off")

    def test_retention_mode(self):
        with self.assertRaises(ValueError):
            Retention("LOCKED", datetime(2027, 1, 1, tzinfo=timezone.utc))

    def test_legal_hold_default(self):
        self.assertFalse(LegalHold().status)
