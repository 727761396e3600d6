# -*- coding: utf-8 -*-
# Aliyun OSS Python Library for Object Storage Service, (C)
# 2026 aliyunoss contributors.
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
XML decoding functions.

OSS responses are decoded structurally into plain containers without any
type inference::

    <ListBucketResult>                  {"ListBucketResult": {
      <Name>bucket</Name>                   "Name": "bucket",
      <Prefix></Prefix>                     "Prefix": {},
      <Contents><Key>a</Key></Contents>     "Contents": [
      <Contents><Key>b</Key></Contents>         {"Key": "a"}, {"Key": "b"},
    </ListBucketResult>                     ],
                                        }}

Decoding never raises on malformed input; it returns a :class:`DecodeResult`
which the caller has to check.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union
from xml.etree import ElementTree as ET

from typing_extensions import TypeAlias

from .error import XmlParseError

XmlNode: TypeAlias = Union[str, Dict[str, "XmlNode"], List["XmlNode"]]


@dataclass(frozen=True)
class ParseFailure:
    """Parser diagnostic with the offending text."""

    message: str
    text: str | bytes
    position: Optional[Tuple[int, int]] = None


@dataclass(frozen=True)
class DecodeResult:
    """Either a decoded node or a parse failure."""

    node: Optional[XmlNode] = None
    error: Optional[ParseFailure] = None

    @property
    def ok(self) -> bool:
        """Check whether decoding succeeded."""
        return self.error is None

    def unwrap(self) -> XmlNode:
        """Return decoded node or raise XmlParseError on failure."""
        if self.error is not None:
            raise XmlParseError(self.error.message, self.error.text)
        return self.node  # type: ignore[return-value]


def _local_name(tag: str) -> str:
    """Strip namespace from element tag."""
    return tag.split("}", 1)[1] if tag.startswith("{") else tag


def _decode_element(element: ET.Element) -> XmlNode:
    """Decode element to text, or to a dict of its children."""
    children = list(element)
    if not children:
        return element.text if element.text else {}

    node: Dict[str, XmlNode] = {}
    for child in children:
        name = _local_name(child.tag)
        value = _decode_element(child)
        if name not in node:
            node[name] = value
            continue
        existing = node[name]
        # decoded elements are never lists, so a list marks repetition
        if isinstance(existing, list):
            existing.append(value)
        else:
            node[name] = [existing, value]
    return node


def decode(xml: str | bytes) -> DecodeResult:
    """Decode XML text into nested dict/list/str node."""
    if not isinstance(xml, (str, bytes)):
        raise TypeError(f"xml must be str or bytes, got {type(xml).__name__}")
    try:
        element = ET.fromstring(xml)
    except (ET.ParseError, LookupError, ValueError) as exc:
        # unknown or broken declared encoding surfaces as LookupError or
        # UnicodeError instead of ParseError
        return DecodeResult(
            error=ParseFailure(str(exc), xml, getattr(exc, "position", None)),
        )
    return DecodeResult(
        node={_local_name(element.tag): _decode_element(element)},
    )


def parse_error_xml(xml: str | bytes) -> DecodeResult:
    """Decode OSS error body and return the content of <Error> element."""
    result = decode(xml)
    if not result.ok:
        return result
    node = result.node
    details = node.get("Error") if isinstance(node, dict) else None
    if not isinstance(details, dict):
        return DecodeResult(
            error=ParseFailure("XML element <Error> not found", xml),
        )
    return DecodeResult(node=details)
