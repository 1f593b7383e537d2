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
s3wire.xml
~~~~~~~~~~

Namespace tolerant ElementTree helpers. S3 servers differ on whether
response documents carry the 2006-03-01 namespace, so lookups here work
either way.
"""

from __future__ import annotations

from typing import Optional, TypeVar
from xml.etree import ElementTree as ET

from typing_extensions import Protocol

S3_NAMESPACE = "http://s3.amazonaws.com/doc/2006-03-01/"


def Element(  # pylint: disable=invalid-name
        tag: str,
        namespace: Optional[str] = S3_NAMESPACE,
) -> ET.Element:
    """Create root element, optionally declaring a default namespace."""
    attrib = {"xmlns": namespace} if namespace else {}
    return ET.Element(tag, attrib)


def SubElement(  # pylint: disable=invalid-name
        parent: ET.Element,
        tag: str,
        text: Optional[str] = None,
) -> ET.Element:
    """Append child element with optional text."""
    child = ET.SubElement(parent, tag)
    if text is not None:
        child.text = text
    return child


def _qualify(element: ET.Element, path: str) -> tuple[str, dict[str, str]]:
    """Rewrite 'A/B' to 'ns:A/ns:B' when element is namespaced."""
    if not element.tag.startswith("{"):
        return path, {}
    namespace = element.tag[1:element.tag.index("}")]
    qualified = "/".join("ns:" + token for token in path.split("/"))
    return qualified, {"ns": namespace}


def localname(element: ET.Element) -> str:
    """Tag name without namespace."""
    return element.tag.rsplit("}", 1)[-1]


def findall(element: ET.Element, path: str) -> list[ET.Element]:
    """Namespace aware findall()."""
    path, namespaces = _qualify(element, path)
    return element.findall(path, namespaces)


def find(
        element: ET.Element,
        path: str,
        strict: bool = False,
) -> Optional[ET.Element]:
    """Namespace aware find(); strict raises ValueError on a miss."""
    qualified, namespaces = _qualify(element, path)
    child = element.find(qualified, namespaces)
    if child is None and strict:
        raise ValueError(f"XML element <{path}> not found")
    return child


def findtext(
        element: ET.Element,
        path: str,
        strict: bool = False,
        default: Optional[str] = None,
) -> Optional[str]:
    """Text of child element; empty element gives empty string."""
    child = find(element, path, strict)
    if child is None:
        return default
    return child.text or ""


T = TypeVar("T", bound="FromXml")


class FromXml(Protocol):
    """Typing stub for records built from an XML element."""

    @classmethod
    def fromxml(cls: type[T], element: ET.Element) -> T:
        """Build the record from element."""


class ToXml(Protocol):
    """Typing stub for records rendered to an XML element."""

    def toxml(self, element: Optional[ET.Element]) -> ET.Element:
        """
        Render into element. Root records receive None and must create and
        return their own root element.
        """


def fromstring(data: str | bytes) -> ET.Element:
    """Parse XML document; malformed input raises XmlParserError."""
    try:
        return ET.fromstring(data)
    except ET.ParseError as exc:
        # pylint: disable=import-outside-toplevel
        from .error import XmlParserError
        raise XmlParserError(f"malformed XML document; {exc}") from exc


def unmarshal(cls: type[T], data: str | bytes) -> T:
    """Build record of cls from XML document."""
    return cls.fromxml(fromstring(data))


def getbytes(element: ET.Element) -> bytes:
    """Serialize element without XML declaration."""
    return ET.tostring(element, encoding="utf-8", xml_declaration=False)


def marshal(obj: ToXml) -> bytes:
    """Serialize root record to XML bytes."""
    return getbytes(obj.toxml(None))
