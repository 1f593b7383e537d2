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
s3wire - client library for the S3 compatible object storage wire protocol

    >>> from s3wire import S3Client
    >>> client = S3Client(
    ...     "play.min.io",
    ...     access_key="Q3AM3UQ867SPQQA43P2F",
    ...     secret_key="zuf+tfteSlswRu7BJ86wekitnifILbZam1KYY3TG",
    ... )
    >>> for result in client.list_objects("my-bucket", recursive=True):
    ...     print(result.get().object_name)

:license: Apache 2.0
"""

import logging

__title__ = "s3wire"
__author__ = "MinIO, Inc."
__version__ = "1.0.0"
__license__ = "Apache 2.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

# pylint: disable=unused-import,useless-import-alias,wrong-import-position
from .api import S3Client as S3Client
from .error import InternalError as InternalError
from .error import InvalidBucketNameError as InvalidBucketNameError
from .error import InvalidObjectNameError as InvalidObjectNameError
from .error import InvalidResponseError as InvalidResponseError
from .error import S3Error as S3Error
from .error import S3WireException as S3WireException
from .error import ServerError as ServerError
from .error import XmlParserError as XmlParserError
from .lazy_iterator import LazyIterator as LazyIterator
from .lazy_iterator import Result as Result
