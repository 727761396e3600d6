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

"""Credential providers."""

from __future__ import annotations

import os
import threading
from abc import ABCMeta, abstractmethod
from typing import Any, Callable, Mapping, Optional

from .credentials import Credentials


class Provider(metaclass=ABCMeta):  # pylint: disable=too-few-public-methods
    """Credential retriever."""

    @abstractmethod
    def retrieve(self) -> Credentials:
        """Retrieve credentials and its expiry if available."""


class StaticProvider(Provider):
    """Fixed AccessKeyId/AccessKeySecret pair, optionally with STS token."""

    def __init__(
            self,
            access_key: str,
            secret_key: str,
            session_token: Optional[str] = None,
    ):
        self._credentials = Credentials(access_key, secret_key, session_token)

    def retrieve(self) -> Credentials:
        return self._credentials


class EnvOssProvider(Provider):
    """
    Credentials from OSS_ACCESS_KEY_ID, OSS_ACCESS_KEY_SECRET and optional
    OSS_SESSION_TOKEN environment variables, read on every retrieval.
    """

    def retrieve(self) -> Credentials:
        missing = [
            name for name in ("OSS_ACCESS_KEY_ID", "OSS_ACCESS_KEY_SECRET")
            if not os.environ.get(name)
        ]
        if missing:
            raise ValueError(
                f"environment variable {', '.join(missing)} is not set",
            )
        return Credentials(
            access_key=os.environ["OSS_ACCESS_KEY_ID"],
            secret_key=os.environ["OSS_ACCESS_KEY_SECRET"],
            session_token=os.environ.get("OSS_SESSION_TOKEN") or None,
        )


class StsTokenProvider(Provider):
    """
    Temporary credentials issued by STS. `fetcher` performs the AssumeRole
    call (or asks an application token service) and returns its JSON
    response; a new token is fetched only once the cached one is about to
    expire.

    Example:
        >>> def assume_role():
        ...     return requests.get("https://sts.example.com/token").json()
        >>>
        >>> client = Oss(
        ...     "oss-cn-hangzhou.aliyuncs.com",
        ...     credentials=StsTokenProvider(assume_role),
        ... )
    """

    def __init__(self, fetcher: Callable[[], Mapping[str, Any]]):
        if not callable(fetcher):
            raise TypeError("fetcher must be callable")
        self._fetcher = fetcher
        self._credentials: Optional[Credentials] = None
        self._lock = threading.Lock()

    def retrieve(self) -> Credentials:
        with self._lock:
            if self._credentials is None or self._credentials.is_expired():
                credentials = Credentials.from_sts(self._fetcher())
                if credentials.is_expired():
                    raise ValueError(
                        "STS returned credentials expiring at "
                        f"{credentials.expiration}",
                    )
                self._credentials = credentials
            return self._credentials
