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
aliyunoss.post_policy
~~~~~~~~~~~~~~~~~~~~~

This module contains :class:`PostPolicy <PostPolicy>` implementation.

"""

from __future__ import absolute_import, annotations

from collections import OrderedDict
from datetime import datetime
from typing import Any, Optional

from .credentials import Credentials
from .helpers import check_bucket_name
from .signer import sign_post_policy
from .time import to_iso8601utc

_EQ = "eq"
_STARTS_WITH = "starts-with"
_RESERVED_ELEMENTS = (
    "bucket",
    "x-oss-security-token",
    "OSSAccessKeyId",
    "policy",
    "Signature",
    "file",
)


def _trim_dollar(value: str) -> str:
    """Trim dollar character if present."""
    return value[1:] if value.startswith("$") else value


class PostPolicy:
    """
    Post policy information to be used to generate form-data for browser
    based uploads.
    """

    def __init__(self, bucket_name: str, expiration: datetime):
        check_bucket_name(bucket_name)
        if not isinstance(expiration, datetime):
            raise ValueError("expiration must be datetime type")
        self._bucket_name = bucket_name
        self._expiration = expiration
        self._conditions: OrderedDict = OrderedDict()
        self._conditions[_EQ] = OrderedDict()
        self._conditions[_STARTS_WITH] = OrderedDict()
        self._lower_limit: Optional[int] = None
        self._upper_limit: Optional[int] = None

    def add_equals_condition(self, element: str, value: str):
        """Add equals condition of an element and value."""
        if not element:
            raise ValueError("condition element cannot be empty")
        element = _trim_dollar(element)
        if element in ["success_action_redirect", "content-length-range"]:
            raise ValueError(element + " is unsupported for equals condition")
        if element in _RESERVED_ELEMENTS:
            raise ValueError(element + " cannot be set")
        self._conditions[_EQ][element] = value

    def remove_equals_condition(self, element: str):
        """Remove previously set equals condition of an element."""
        if not element:
            raise ValueError("condition element cannot be empty")
        self._conditions[_EQ].pop(element)

    def add_starts_with_condition(self, element: str, value: str):
        """
        Add starts-with condition of an element and value. Value set to empty
        string does matching any content condition.
        """
        if not element:
            raise ValueError("condition element cannot be empty")
        element = _trim_dollar(element)
        if (
                element in ["success_action_status", "content-length-range"] or
                (
                    element.startswith("x-oss-") and
                    not element.startswith("x-oss-meta-")
                )
        ):
            raise ValueError(
                f"{element} is unsupported for starts-with condition",
            )
        if element in _RESERVED_ELEMENTS:
            raise ValueError(element + " cannot be set")
        self._conditions[_STARTS_WITH][element] = value

    def remove_starts_with_condition(self, element: str):
        """Remove previously set starts-with condition of an element."""
        if not element:
            raise ValueError("condition element cannot be empty")
        self._conditions[_STARTS_WITH].pop(element)

    def add_content_length_range_condition(  # pylint: disable=invalid-name
            self, lower_limit: int, upper_limit: int):
        """Add content-length-range condition with lower and upper limits."""
        if lower_limit < 0:
            raise ValueError("lower limit cannot be negative number")
        if upper_limit < 0:
            raise ValueError("upper limit cannot be negative number")
        if lower_limit > upper_limit:
            raise ValueError("lower limit cannot be greater than upper limit")
        self._lower_limit = lower_limit
        self._upper_limit = upper_limit

    def remove_content_length_range_condition(  # pylint: disable=invalid-name
            self):
        """Remove previously set content-length-range condition."""
        self._lower_limit = None
        self._upper_limit = None

    def policy(self, session_token: Optional[str] = None) -> dict[str, Any]:
        """Return policy document of this post policy."""
        if (
                "key" not in self._conditions[_EQ] and
                "key" not in self._conditions[_STARTS_WITH]
        ):
            raise ValueError("key condition must be set")

        conditions: list[Any] = [{"bucket": self._bucket_name}]
        for cond_key, elements in self._conditions.items():
            for key, value in elements.items():
                conditions.append([cond_key, "$" + key, value])
        if self._lower_limit is not None and self._upper_limit is not None:
            conditions.append(
                ["content-length-range", self._lower_limit, self._upper_limit],
            )
        if session_token:
            conditions.append({"x-oss-security-token": session_token})
        return {
            "expiration": to_iso8601utc(self._expiration),
            "conditions": conditions,
        }

    def form_data(self, creds: Credentials) -> dict[str, str]:
        """
        Return form-data of this post policy. The returned dict contains
        OSSAccessKeyId, policy, Signature and x-oss-security-token if
        credentials carry one.
        """
        if not isinstance(creds, Credentials):
            raise ValueError("credentials must be Credentials type")

        signed = sign_post_policy(
            self.policy(creds.session_token), creds.secret_key,
        )
        form_data = {
            "OSSAccessKeyId": creds.access_key,
            "policy": signed["policy"],
            "Signature": signed["signature"],
        }
        if creds.session_token:
            form_data["x-oss-security-token"] = creds.session_token
        return form_data

    @property
    def bucket_name(self) -> str:
        """Get bucket name."""
        return self._bucket_name
