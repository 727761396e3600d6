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
aliyunoss.error
~~~~~~~~~~~~~~~~~~~

This module provides custom exception classes for the library and
OSS API specific errors.

"""

from __future__ import absolute_import, annotations

from typing import Any, Mapping, Optional


class OssException(Exception):
    """Base OSS exception."""


class XmlParseError(OssException):
    """Raised when a decode failure is unwrapped."""

    def __init__(self, message: str, text: Optional[str | bytes] = None):
        self._message = message
        self._text = text
        super().__init__(f"XML is not parsable; {message}")

    @property
    def text(self) -> Optional[str | bytes]:
        """Get the offending XML text."""
        return self._text

    def __reduce__(self):
        return type(self), (self._message, self._text)


class InvalidResponseError(OssException):
    """Raised to indicate that server sent unparsable XML response."""

    def __init__(
            self, code: int, content_type: Optional[str], body: Optional[str],
    ):
        self._code = code
        self._content_type = content_type
        self._body = body
        super().__init__(
            f"invalid XML response from server; Response code: {code}, "
            f"Content-Type: {content_type}, Body: {body}"
        )

    def __reduce__(self):
        return type(self), (self._code, self._content_type, self._body)


class OssError(OssException):
    """
    Raised to indicate that error response is received
    when executing OSS operation.
    """
    status_code: int
    body: bytes
    parsed_details: Optional[Mapping[str, Any]]
    request_id: Optional[str]

    _EXC_MUTABLES = {"__traceback__", "__context__", "__cause__"}

    def __init__(
        self,
        status_code: int,
        body: bytes,
        parsed_details: Optional[Mapping[str, Any]] = None,
        request_id: Optional[str] = None,
    ):
        object.__setattr__(self, "status_code", status_code)
        object.__setattr__(self, "body", body)
        object.__setattr__(self, "parsed_details", parsed_details)
        object.__setattr__(
            self,
            "request_id",
            request_id or self._detail("RequestId"),
        )

        super().__init__(
            f"OSS operation failed; status: {status_code}, "
            f"code: {self.code}, message: {self.message}, "
            f"request_id: {self.request_id}"
        )

        # freeze after init
        object.__setattr__(self, "_is_frozen", True)

    def __setattr__(self, name, value):
        if name in self._EXC_MUTABLES:
            object.__setattr__(self, name, value)
            return
        if getattr(self, "_is_frozen", False):
            raise AttributeError(
                f"{self.__class__.__name__} is frozen and "
                "does not allow attribute assignment"
            )
        object.__setattr__(self, name, value)

    def __delattr__(self, name):
        if name in self._EXC_MUTABLES:
            object.__delattr__(self, name)
            return
        if getattr(self, "_is_frozen", False):
            raise AttributeError(
                f"{self.__class__.__name__} is frozen and "
                "does not allow attribute deletion"
            )
        object.__delattr__(self, name)

    def __reduce__(self):
        return type(self), (
            self.status_code, self.body, self.parsed_details, self.request_id,
        )

    def _detail(self, name: str) -> Optional[str]:
        """Get text value of given key from parsed error details."""
        if not self.parsed_details:
            return None
        value = self.parsed_details.get(name)
        return value if isinstance(value, str) else None

    @property
    def code(self) -> Optional[str]:
        """Get OSS error code."""
        return self._detail("Code")

    @property
    def message(self) -> Optional[str]:
        """Get OSS error message."""
        return self._detail("Message")

    def __repr__(self):
        return (
            f"OssError(status_code={self.status_code!r}, code={self.code!r}, "
            f"message={self.message!r}, request_id={self.request_id!r})"
        )

    def __eq__(self, other):
        if not isinstance(other, OssError):
            return NotImplemented
        return (
            self.status_code == other.status_code
            and self.body == other.body
            and self.parsed_details == other.parsed_details
            and self.request_id == other.request_id
        )

    def __hash__(self):
        return hash((self.status_code, self.body, self.request_id))
