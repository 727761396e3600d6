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
aliyunoss.signer
~~~~~~~~~~~~~~~

This module implements all helpers for OSS signature version '1' support.

"""

from __future__ import absolute_import, annotations

import base64
import hashlib
import hmac
import json
from dataclasses import replace
from typing import Any, Mapping, Optional
from urllib.parse import SplitResult

from .credentials import Credentials
from .datatypes import Request
from .helpers import DictType, queryencode

_EXTENDED_HEADER_PREFIX = "x-oss-"
_SECURITY_TOKEN_HEADER = "x-oss-security-token"

# Query parameters which are signed along with sub-resources.
SIGNED_QUERY_PARAMS = frozenset([
    "response-content-type",
    "response-content-language",
    "response-expires",
    "response-cache-control",
    "response-content-disposition",
    "response-content-encoding",
])


def sign(secret_key: str, string_to_sign: str) -> str:
    """Return Base64 encoded HMAC-SHA1 of string-to-sign."""
    digest = hmac.new(
        secret_key.encode(), string_to_sign.encode(), hashlib.sha1,
    ).digest()
    return base64.b64encode(digest).decode()


def get_canonical_headers(headers: Mapping[str, str]) -> str:
    """Get canonicalized x-oss-* headers, each line ends with newline."""
    extended = {
        key.lower(): value for key, value in headers.items()
        if key.lower().startswith(_EXTENDED_HEADER_PREFIX)
    }
    return "".join(
        f"{key}:{value}\n" for key, value in sorted(extended.items())
    )


def get_canonical_resource(
        resource: str,
        sub_resources: Optional[Mapping[str, Optional[str]]] = None,
        query_params: Optional[Mapping[str, Any]] = None,
) -> str:
    """Get canonicalized resource."""
    entries = dict(sub_resources or {})
    for key, value in (query_params or {}).items():
        if key in SIGNED_QUERY_PARAMS:
            entries[key] = value
    if not entries:
        return resource

    return resource + "?" + "&".join(
        key if value is None else f"{key}={value}"
        for key, value in sorted(entries.items(), key=lambda item: item[0])
    )


def get_string_to_sign(request: Request) -> str:
    """Get string-to-sign of given request."""
    headers = request.headers
    canonical_resource = get_canonical_resource(
        request.resource, request.sub_resources, request.query_params,
    )

    # StringToSign =
    #   VERB + '\n' +
    #   Content-MD5 + '\n' +
    #   Content-Type + '\n' +
    #   Date + '\n' +
    #   CanonicalizedOSSHeaders +
    #   CanonicalizedResource
    return (
        f"{request.verb.value}\n"
        f"{headers.get('Content-MD5', '')}\n"
        f"{headers.get('Content-Type', '')}\n"
        f"{headers.get('Date', '')}\n"
        f"{get_canonical_headers(headers)}"
        f"{canonical_resource}"
    )


def get_authorization(access_key: str, signature: str) -> str:
    """Get authorization."""
    return f"OSS {access_key}:{signature}"


def sign_v1(request: Request, credentials: Credentials) -> DictType:
    """
    Do signature V1 of given request and return its headers including
    Authorization.
    """
    headers = dict(request.headers)
    if credentials.session_token:
        headers[_SECURITY_TOKEN_HEADER] = credentials.session_token
    string_to_sign = get_string_to_sign(replace(request, headers=headers))
    headers["Authorization"] = get_authorization(
        credentials.access_key, sign(credentials.secret_key, string_to_sign),
    )
    return headers


def presign_v1(
        request: Request,
        url: SplitResult,
        credentials: Credentials,
        expires: int,
) -> SplitResult:
    """
    Do signature V1 of given presign request. Expiry time in seconds since
    epoch takes the place of Date.
    """
    headers = dict(request.headers)
    headers["Date"] = str(expires)
    sub_resources = dict(request.sub_resources)
    if credentials.session_token:
        sub_resources["security-token"] = credentials.session_token
    signature = sign(
        credentials.secret_key,
        get_string_to_sign(
            replace(request, headers=headers, sub_resources=sub_resources),
        ),
    )

    query = url.query + "&" if url.query else ""
    query += (
        f"Expires={expires}"
        f"&OSSAccessKeyId={queryencode(credentials.access_key)}"
        f"&Signature={queryencode(signature)}"
    )
    if credentials.session_token:
        query += f"&security-token={queryencode(credentials.session_token)}"
    parts = list(url)
    parts[3] = query
    return SplitResult(*parts)


def sign_post_policy(
        policy: Mapping[str, Any],
        secret_key: str,
) -> dict[str, str]:
    """
    Sign POST policy document. The signature is computed over the Base64
    encoded policy, not over the JSON text.
    """
    policy_encoded = base64.b64encode(
        json.dumps(policy, separators=(",", ":"), ensure_ascii=False).encode(),
    ).decode()
    return {
        "policy": policy_encoded,
        "signature": sign(secret_key, policy_encoded),
    }
