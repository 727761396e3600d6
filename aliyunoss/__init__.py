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
aliyunoss - Aliyun Object Storage Service client with OSS signature V1

    >>> from aliyunoss import Oss
    >>> client = Oss(
    ...     "oss-cn-hangzhou.aliyuncs.com",
    ...     access_key_id="ACCESS-KEY-ID",
    ...     access_key_secret="ACCESS-KEY-SECRET",
    ... )
    >>> response = client.list_objects("my-bucket")
    >>> print(response.data["ListBucketResult"]["IsTruncated"])

:license: Apache 2.0, see LICENSE for more details.
"""

__title__ = "aliyunoss"
__author__ = "aliyunoss contributors"
__version__ = "0.3.0"
__license__ = "Apache 2.0"

# pylint: disable=unused-import,useless-import-alias
from .api import Oss as Oss
from .error import InvalidResponseError as InvalidResponseError
from .error import OssError as OssError
from .error import XmlParseError as XmlParseError
from .post_policy import PostPolicy as PostPolicy
from .signer import sign_post_policy as sign_post_policy
