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
aliyunoss.casting
~~~~~~~~~~~~~~~~~

Value casting of decoded XML responses. Well-known metadata keys are
converted by name using a rule table; everything else stays text.

Casting is applied at the first level where a known key appears and does
not descend further below that level.
"""

from __future__ import absolute_import, annotations

import re
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from .xml import XmlNode

_INTEGER_REGEX = re.compile(r"[+-]?\d+", re.ASCII)
_FLOAT_REGEX = re.compile(r"[+-]?\d+(\.\d+)?([eE][+-]?\d+)?", re.ASCII)


class CastType(Enum):
    """Target type of a casting rule."""
    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    MAP = "map"


VALUE_CASTING_RULES: Mapping[str, CastType] = MappingProxyType({
    "Prefix": CastType.STRING,
    "Marker": CastType.STRING,
    "IsTruncated": CastType.BOOLEAN,
    "MaxKeys": CastType.INTEGER,
    "Delimiter": CastType.STRING,
})


def _parse_leading(
        regex: re.Pattern,
        value: str,
        func: Callable[[str], Any],
) -> Any:
    """Parse leading numeric text of value; None if there is none."""
    match = regex.match(value)
    return func(match.group(0)) if match else None


def cast_value(value: Any, cast_type: Optional[CastType]) -> Any:
    """Cast single decoded value by given rule."""
    if isinstance(value, dict) and not value:
        return None
    # already cast
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if cast_type is CastType.BOOLEAN:
        return value == "true"
    if cast_type is CastType.INTEGER:
        return (
            _parse_leading(_INTEGER_REGEX, value, int)
            if isinstance(value, str) else None
        )
    if cast_type is CastType.FLOAT:
        return (
            _parse_leading(_FLOAT_REGEX, value, float)
            if isinstance(value, str) else None
        )
    return value


def _has_rules(rules: Mapping[str, CastType], node: Mapping[str, Any]) -> bool:
    """Check whether any key of node has a casting rule."""
    return any(key in rules for key in node)


def cast_map_values(
        node: Mapping[str, Any],
        rules: Mapping[str, CastType] = VALUE_CASTING_RULES,
) -> dict[str, Any]:
    """Cast values of node by rules of their keys without descending."""
    return {
        key: cast_value(value, rules.get(key)) for key, value in node.items()
    }


def cast_data(
        node: XmlNode | dict[str, Any],
        rules: Mapping[str, CastType] = VALUE_CASTING_RULES,
) -> Any:
    """
    Cast decoded XML node.

    Every non-empty child mapping which contains a known key is cast at
    that level only; other child mappings are descended into. Sequences are
    left untouched. Never raises.
    """
    if not isinstance(node, dict):
        return node

    data: dict[str, Any] = {}
    for key, value in node.items():
        if isinstance(value, dict) and value:
            data[key] = (
                cast_map_values(value, rules) if _has_rules(rules, value)
                else cast_data(value, rules)
            )
        else:
            data[key] = cast_value(value, rules.get(key))
    return data
