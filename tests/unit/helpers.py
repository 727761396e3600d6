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

import base64
import hashlib
import hmac

ENDPOINT = "oss-example.oss-cn-hangzhou.aliyuncs.com"
ACCESS_KEY_ID = "44CF9590006BF252F707"
ACCESS_KEY_SECRET = "OtxrzxIsfpFjA7SwPzILwy8Bw21TLhquhboDYROV"
DATE = "Wed, 05 Dec 2018 02:34:57 GMT"


def expected_signature(string_to_sign, secret=ACCESS_KEY_SECRET):
    digest = hmac.new(
        secret.encode(), string_to_sign.encode(), hashlib.sha1,
    ).digest()
    return base64.b64encode(digest).decode()


def expected_authorization(string_to_sign):
    return "OSS {0}:{1}".format(
        ACCESS_KEY_ID, expected_signature(string_to_sign),
    )


def generate_error(code, message, request_id, host_id):
    return '''<?xml version="1.0" encoding="UTF-8"?>
    <Error>
      <Code>{0}</Code>
      <Message>{1}</Message>
      <RequestId>{2}</RequestId>
      <HostId>{3}</HostId>
    </Error>
    '''.format(code, message, request_id, host_id)
