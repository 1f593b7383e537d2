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

"""Batch documents sent to and returned by the multi-object delete call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Type, TypeVar, cast
from xml.etree import ElementTree as ET

from .xml import Element, SubElement, findall, findtext

# Maximum number of keys a single DeleteObjects request may carry.
MAX_DELETE_OBJECTS = 1000


@dataclass(frozen=True)
class DeleteObject:
    """Key, with optional version, to be removed."""

    name: str
    version_id: Optional[str] = None

    def toxml(self, element: Optional[ET.Element]) -> ET.Element:
        """Append <Object> to element."""
        if element is None:
            raise ValueError("<Object> needs a parent <Delete> element")
        element = SubElement(element, "Object")
        SubElement(element, "Key", self.name)
        if self.version_id is not None:
            SubElement(element, "VersionId", self.version_id)
        return element


@dataclass(frozen=True)
class DeleteRequest:
    """<Delete> document of one batch."""

    object_list: list[DeleteObject]
    quiet: bool = False

    def __post_init__(self):
        if len(self.object_list) > MAX_DELETE_OBJECTS:
            raise ValueError(
                f"a delete batch holds at most {MAX_DELETE_OBJECTS} keys"
            )

    def toxml(self, element: Optional[ET.Element]) -> ET.Element:
        element = Element("Delete")
        if self.quiet:
            SubElement(element, "Quiet", "true")
        for obj in self.object_list:
            obj.toxml(element)
        return element


A = TypeVar("A", bound="DeletedObject")


@dataclass(frozen=True)
class DeletedObject:
    """Key reported as removed, with any delete marker created."""

    name: str
    version_id: Optional[str] = None
    delete_marker: bool = False
    delete_marker_version_id: Optional[str] = None

    @classmethod
    def fromxml(cls: Type[A], element: ET.Element) -> A:
        """Parse <Deleted> element."""
        delete_marker = findtext(element, "DeleteMarker") or ""
        return cls(
            name=cast(str, findtext(element, "Key", True)),
            version_id=findtext(element, "VersionId"),
            delete_marker=delete_marker.lower() == "true",
            delete_marker_version_id=findtext(
                element, "DeleteMarkerVersionId",
            ),
        )


B = TypeVar("B", bound="DeleteError")


@dataclass(frozen=True)
class DeleteError:
    """Per key failure reported by DeleteObjects."""

    code: str
    message: Optional[str] = None
    name: Optional[str] = None
    version_id: Optional[str] = None

    @classmethod
    def fromxml(cls: Type[B], element: ET.Element) -> B:
        """Parse <Error> element."""
        return cls(
            code=cast(str, findtext(element, "Code", True)),
            message=findtext(element, "Message"),
            name=findtext(element, "Key"),
            version_id=findtext(element, "VersionId"),
        )


C = TypeVar("C", bound="DeleteResult")


@dataclass(frozen=True)
class DeleteResult:
    """<DeleteResult> document."""

    object_list: list[DeletedObject]
    error_list: list[DeleteError]

    @classmethod
    def fromxml(cls: Type[C], element: ET.Element) -> C:
        return cls(
            object_list=[
                DeletedObject.fromxml(tag)
                for tag in findall(element, "Deleted")
            ],
            error_list=[
                DeleteError.fromxml(tag) for tag in findall(element, "Error")
            ],
        )
