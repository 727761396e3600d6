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

"""Helper functions."""

from __future__ import absolute_import, annotations

import base64
import hashlib
import platform
import re
import urllib.parse
from typing import Dict, Mapping

from . import __title__, __version__

_DEFAULT_USER_AGENT = (
    f"AliyunOSS ({platform.system()}; {platform.machine()}) "
    f"{__title__}/{__version__}"
)

_AUTHORIZATION_REGEX = re.compile(r"^OSS ([^:]+):(.+)$")

DictType = Dict[str, str]


def quote(
        resource: str,
        safe: str = "/",
        encoding: str | None = None,
        errors: str | None = None,
) -> str:
    """
    Wrapper to urllib.parse.quote() replacing back to '~' for older python
    versions.
    """
    return urllib.parse.quote(
        resource,
        safe=safe,
        encoding=encoding,
        errors=errors,
    ).replace("%7E", "~")


def queryencode(
        query: str,
        safe: str = "",
        encoding: str | None = None,
        errors: str | None = None,
) -> str:
    """Encode query parameter value."""
    return quote(query, safe, encoding, errors)


def headers_to_strings(
        headers: Mapping[str, str],
        titled_key: bool = False,
) -> str:
    """Convert HTTP headers to multi-line string."""
    values = []
    for key, value in headers.items():
        key = key.title() if titled_key else key
        if titled_key:
            value = _AUTHORIZATION_REGEX.sub(r"OSS \1:*REDACTED*", value)
        values.append(f"{key}: {value}")
    return "\n".join(values)



def check_non_empty_string(string: str | bytes):
    """Check whether given string is not empty."""
    try:
        if not string.strip():
            raise ValueError()
    except AttributeError as exc:
        raise TypeError() from exc


def check_bucket_name(bucket_name: str):
    """Check whether bucket name is usable in host and resource."""
    if not isinstance(bucket_name, str):
        raise TypeError(
            f"bucket name must be str type, got {type(bucket_name).__name__}",
        )
    check_non_empty_string(bucket_name)
    if "/" in bucket_name or bucket_name != bucket_name.strip():
        raise ValueError(f"invalid bucket name {bucket_name}")


def check_object_name(object_name: str):
    """Check whether given object name is valid."""
    if not isinstance(object_name, str):
        raise TypeError(
            f"object name must be str type, got {type(object_name).__name__}",
        )
    check_non_empty_string(object_name)


def md5sum_hash(data: str | bytes | None) -> str | None:
    """Compute MD5 of data and return hash as Base64 encoded value."""
    if data is None:
        return None

    # indicate md5 hashing algorithm is not used in a security context.
    # Refer https://bugs.python.org/issue9216 for more information.
    hasher = hashlib.new(  # type: ignore[call-arg]
        "md5",
        usedforsecurity=False,
    )
    hasher.update(data.encode() if isinstance(data, str) else data)
    return base64.b64encode(hasher.digest()).decode()
