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

"""Replayable HTTP transport used by the unit tests."""

from io import BytesIO
from threading import Lock
from urllib.parse import parse_qs, urlsplit

from urllib3 import PoolManager
from urllib3._collections import HTTPHeaderDict

XML_HEADERS = {"Content-Type": "application/xml"}


def generate_error(code, message, request_id="3L137", host_id="3L137",
                   resource="/bucket", bucket_name=None, object_name=None):
    return f'''<?xml version="1.0" encoding="UTF-8"?>
<Error>
  <Code>{code}</Code>
  <Message>{message}</Message>
  <Resource>{resource}</Resource>
  <RequestId>{request_id}</RequestId>
  <HostId>{host_id}</HostId>
  <BucketName>{bucket_name or ""}</BucketName>
  <Key>{object_name or ""}</Key>
</Error>'''.encode()


class MockResponse:
    def __init__(self, method, url, status_code, response_headers=None,
                 content=None):
        self.method = method
        self.url = url
        self.status = status_code
        self.headers = HTTPHeaderDict(response_headers or {})
        if isinstance(content, str):
            content = content.encode()
        self._content = content or b""
        self._body = BytesIO(self._content)
        self.released = False
        self.closed = False

    @property
    def data(self):
        return self._content

    # pylint: disable=unused-argument
    def read(self, amt=None, **kwargs):
        return self._body.read(amt)

    def readline(self):
        return self._body.readline()

    def stream(self, amt=1024, **kwargs):
        while True:
            chunk = self._body.read(amt)
            if not chunk:
                break
            yield chunk

    def mock_verify(self, method, url):
        if (self.method, self.url) != (method, url):
            raise AssertionError(
                f"expected {self.method} {self.url}, got {method} {url}",
            )

    def release_conn(self):
        self.released = True

    def close(self):
        self.closed = True

    def isclosed(self):
        return self.closed


class MockRequest:
    def __init__(self, method, url, headers, body):
        self.method = method
        self.url = url
        self.headers = HTTPHeaderDict(headers or {})
        self.body = body

    @property
    def path(self):
        return urlsplit(self.url).path

    @property
    def query(self):
        return parse_qs(urlsplit(self.url).query, keep_blank_values=True)


class MockConnection(PoolManager):
    """PoolManager replaying queued responses; in order unless not ordered."""

    def __init__(self, ordered=True):
        super().__init__()
        self.ordered = ordered
        self.responses = []
        self.requests = []
        self._lock = Lock()

    def mock_add_request(self, response):
        self.responses.append(response)

    # pylint: disable=arguments-differ,unused-argument
    def urlopen(self, method, url, body=None, headers=None,
                preload_content=True, **kwargs):
        with self._lock:
            self.requests.append(MockRequest(method, url, headers, body))
            if not self.responses:
                raise AssertionError(f"unexpected request {method} {url}")
            if self.ordered:
                response = self.responses.pop(0)
                response.mock_verify(method, url)
                return response
            for i, response in enumerate(self.responses):
                if (response.method, response.url) == (method, url):
                    return self.responses.pop(i)
            raise AssertionError(f"unexpected request {method} {url}")

    def requests_of(self, method, marker=None):
        return [
            request for request in self.requests
            if request.method == method and (
                marker is None or marker in request.query
            )
        ]
