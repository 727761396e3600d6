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

"""Credential definitions to access OSS service."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional

# STS tokens are renewed this long before they actually expire.
_EXPIRY_MARGIN = timedelta(seconds=10)
_STS_TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


@dataclass(frozen=True)
class Credentials:
    """
    AccessKeyId and AccessKeySecret of an account or RAM user, optionally
    with an STS security token and the time it stops being valid.
    """

    access_key: str
    secret_key: str
    session_token: Optional[str] = None
    expiration: Optional[datetime] = None

    def __post_init__(self):
        if not self.access_key:
            raise ValueError("AccessKeyId must not be empty")
        if not self.secret_key:
            raise ValueError("AccessKeySecret must not be empty")
        if self.expiration is not None and self.expiration.tzinfo is None:
            # naive expiry is UTC as returned by STS
            object.__setattr__(
                self, "expiration",
                self.expiration.replace(tzinfo=timezone.utc),
            )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Check whether STS token is expired or about to expire."""
        if self.expiration is None:
            return False
        now = now or datetime.now(timezone.utc)
        return self.expiration <= now + _EXPIRY_MARGIN

    @classmethod
    def from_sts(cls, data: Mapping[str, Any]) -> Credentials:
        """
        Create credentials from STS AssumeRole response, either the whole
        response or its "Credentials" member::

            {"Credentials": {"AccessKeyId": "STS.L4aBSCSJVMuKg5U1vFDw",
                             "AccessKeySecret": "wyLTSmsyPGP1ohvvw8xY",
                             "SecurityToken": "CAESrAIIARKAAShQquMn",
                             "Expiration": "2015-04-09T11:52:19Z"}}
        """
        data = data.get("Credentials", data)
        try:
            expiration = datetime.strptime(
                data["Expiration"], _STS_TIME_FORMAT,
            ).replace(tzinfo=timezone.utc)
            return cls(
                access_key=data["AccessKeyId"],
                secret_key=data["AccessKeySecret"],
                session_token=data["SecurityToken"],
                expiration=expiration,
            )
        except KeyError as exc:
            raise ValueError(f"STS credentials miss {exc.args[0]}") from exc
