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
Small documents exchanged by the tagging, versioning, retention and legal
hold APIs.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Type, TypeVar, Union, cast
from xml.etree import ElementTree as ET

from .time import from_iso8601utc, to_iso8601utc
from .xml import Element, SubElement, findall, findtext

ENABLED = "Enabled"
DISABLED = "Disabled"
SUSPENDED = "Suspended"
OFF = "Off"
GOVERNANCE = "GOVERNANCE"
COMPLIANCE = "COMPLIANCE"

_MAX_KEY_LENGTH = 128
_MAX_VALUE_LENGTH = 256
_MAX_OBJECT_TAG_COUNT = 10
_MAX_TAG_COUNT = 50

A = TypeVar("A", bound="Tags")


class Tags(dict):
    """Tag set of a bucket or an object, enforcing the tag count limits."""

    def __init__(self, for_object: bool = False):
        self._for_object = for_object
        super().__init__()

    def __setitem__(self, key: str, value: str):
        limit = _MAX_OBJECT_TAG_COUNT if self._for_object else _MAX_TAG_COUNT
        if key not in self and len(self) == limit:
            tag_type = "object" if self._for_object else "bucket"
            raise ValueError(f"{tag_type} tags are limited to {limit}")
        if not key or len(key) > _MAX_KEY_LENGTH or "&" in key:
            raise ValueError(f"tag key {key!r} is empty, too long or has '&'")
        if value is None or len(value) > _MAX_VALUE_LENGTH or "&" in value:
            raise ValueError(f"tag value {value!r} is too long or has '&'")
        super().__setitem__(key, value)

    def update(self, *args, **kwargs):
        for key, value in dict(*args, **kwargs).items():
            self[key] = value

    @classmethod
    def new_bucket_tags(cls: Type[A]) -> A:
        """Empty tag set for a bucket."""
        return cls()

    @classmethod
    def new_object_tags(cls: Type[A]) -> A:
        """Empty tag set for an object."""
        return cls(True)

    @classmethod
    def fromxml(cls: Type[A], element: ET.Element) -> A:
        """Create tags from <Tagging> element."""
        obj = cls()
        for tag in findall(element, "TagSet/Tag"):
            key = cast(str, findtext(tag, "Key", True))
            value = cast(str, findtext(tag, "Value", True))
            dict.__setitem__(obj, key, value)
        return obj

    def toxml(self, element: Optional[ET.Element]) -> ET.Element:
        """Convert to <Tagging> document."""
        element = Element("Tagging")
        tag_set = SubElement(element, "TagSet")
        for key, value in self.items():
            tag = SubElement(tag_set, "Tag")
            SubElement(tag, "Key", key)
            SubElement(tag, "Value", value)
        return element


B = TypeVar("B", bound="VersioningConfig")


@dataclass(frozen=True)
class VersioningConfig:
    """Bucket versioning configuration."""

    status: Optional[str] = None
    mfa_delete: Optional[str] = None
    excluded_prefixes: Optional[list[str]] = None
    exclude_folders: bool = False

    def __post_init__(self):
        if self.status is not None and self.status not in [ENABLED, SUSPENDED]:
            raise ValueError(
                f"versioning status must be {ENABLED} or {SUSPENDED}",
            )
        if (
                self.mfa_delete is not None and
                self.mfa_delete not in [ENABLED, DISABLED]
        ):
            raise ValueError(
                f"MFADelete must be {ENABLED} or {DISABLED}",
            )

    @property
    def status_string(self) -> str:
        """Status, or 'Off' for a bucket never versioned."""
        return OFF if self.status is None else self.status

    @classmethod
    def fromxml(cls: Type[B], element: ET.Element) -> B:
        """Parse <VersioningConfiguration> element."""
        excluded_prefixes = [
            prefix.text
            for prefix in findall(element, "ExcludedPrefixes/Prefix")
        ]
        return cls(
            status=findtext(element, "Status"),
            mfa_delete=findtext(element, "MFADelete"),
            excluded_prefixes=cast(
                Union[List[str], None], excluded_prefixes or None,
            ),
            exclude_folders=findtext(element, "ExcludeFolders") == "true",
        )

    def toxml(self, element: Optional[ET.Element]) -> ET.Element:
        """Convert to <VersioningConfiguration> document."""
        element = Element("VersioningConfiguration")
        if self.status:
            SubElement(element, "Status", self.status)
        if self.mfa_delete:
            SubElement(element, "MFADelete", self.mfa_delete)
        for prefix in self.excluded_prefixes or []:
            SubElement(
                SubElement(element, "ExcludedPrefixes"),
                "Prefix",
                prefix,
            )
        if self.exclude_folders:
            SubElement(element, "ExcludeFolders", "true")
        return element


C = TypeVar("C", bound="Retention")


@dataclass(frozen=True)
class Retention:
    """Object retention."""

    mode: str
    retain_until_date: datetime

    def __post_init__(self):
        if self.mode not in [GOVERNANCE, COMPLIANCE]:
            raise ValueError(
                f"retention mode must be {GOVERNANCE} or {COMPLIANCE}",
            )
        if not isinstance(self.retain_until_date, datetime):
            raise ValueError("retain_until_date must be a datetime")

    @classmethod
    def fromxml(cls: Type[C], element: ET.Element) -> C:
        """Parse <Retention> element."""
        mode = cast(str, findtext(element, "Mode", True))
        retain_until_date = cast(
            datetime,
            from_iso8601utc(
                cast(str, findtext(element, "RetainUntilDate", True)),
            ),
        )
        return cls(mode=mode, retain_until_date=retain_until_date)

    def toxml(self, element: Optional[ET.Element]) -> ET.Element:
        """Convert to <Retention> document."""
        element = Element("Retention")
        SubElement(element, "Mode", self.mode)
        SubElement(
            element,
            "RetainUntilDate",
            to_iso8601utc(self.retain_until_date),
        )
        return element

    def headers(self) -> dict[str, str]:
        """Object lock headers for object write requests."""
        return {
            "x-amz-object-lock-mode": self.mode,
            "x-amz-object-lock-retain-until-date": cast(
                str, to_iso8601utc(self.retain_until_date),
            ),
        }


D = TypeVar("D", bound="LegalHold")


@dataclass(frozen=True)
class LegalHold:
    """Object legal hold."""

    status: bool = False

    @classmethod
    def fromxml(cls: Type[D], element: ET.Element) -> D:
        """Parse <LegalHold> element."""
        return cls(findtext(element, "Status") == "ON")

    def toxml(self, element: Optional[ET.Element]) -> ET.Element:
        """Convert to <LegalHold> document."""
        element = Element("LegalHold")
        SubElement(element, "Status", "ON" if self.status else "OFF")
        return element
