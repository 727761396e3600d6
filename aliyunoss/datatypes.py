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
Request and response data types of OSS API.
"""

from __future__ import absolute_import, annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional
from urllib.parse import SplitResult

from .helpers import queryencode, quote


class Verb(Enum):
    """HTTP method of a request."""
    GET = "GET"
    HEAD = "HEAD"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"


@dataclass(frozen=True)
class Request:
    """
    Request descriptor.

    `resource` is what gets signed, in `/bucket/object` or `/bucket/` form,
    and is independent of `host` and `path` which address the request.
    `sub_resources` values of None are rendered as bare keys.
    """

    verb: Verb
    host: str
    path: str
    resource: str
    headers: Mapping[str, str] = field(default_factory=dict)
    query_params: Mapping[str, Any] = field(default_factory=dict)
    sub_resources: Mapping[str, Optional[str]] = field(default_factory=dict)
    body: Optional[bytes] = None

    def __post_init__(self):
        verb = self.verb.upper() if isinstance(self.verb, str) else self.verb
        object.__setattr__(self, "verb", Verb(verb))
        if not self.resource.startswith("/"):
            raise ValueError(f"resource {self.resource} must start with /")
        for name in ("headers", "query_params", "sub_resources"):
            object.__setattr__(
                self, name, MappingProxyType(dict(getattr(self, name) or {})),
            )

    def query_string(self) -> str:
        """Query string of sub-resources followed by query parameters."""
        params = [
            key if value is None else f"{key}={queryencode(str(value))}"
            for key, value in self.sub_resources.items()
        ]
        params += [
            f"{key}={queryencode(str(value))}"
            for key, value in self.query_params.items()
        ]
        return "&".join(params)

    def url(self, scheme: str = "https") -> SplitResult:
        """Get URL of this request."""
        return SplitResult(
            scheme, self.host, quote(self.path or "/"), self.query_string(),
            "",
        )


@dataclass(frozen=True)
class Response:
    """
    Successful response. `data` holds cast XML node for XML bodies and raw
    bytes otherwise.
    """

    status: int
    headers: Mapping[str, str]
    data: Any
