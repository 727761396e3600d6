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

from urllib3._collections import HTTPHeaderDict


class MockResponse:
    def __init__(self, method, url, status_code, response_headers=None,
                 content=None):
        self.method = method
        self.url = url
        self.status = status_code
        self.headers = HTTPHeaderDict(response_headers or {})
        self.data = content
        self.request_headers = None
        self.request_body = None

    def mock_verify(self, method, url, headers, body):
        assert self.method == method, f"{self.method} != {method}"
        assert self.url == url, f"{self.url} != {url}"
        self.request_headers = headers
        self.request_body = body

    # dummy release connection call.
    def release_conn(self):
        return


class MockConnection:
    def __init__(self):
        self.requests = []

    def mock_add_request(self, request):
        self.requests.append(request)

    # noinspection PyUnusedLocal
    def urlopen(self, method, url, body=None, headers=None,
                preload_content=True, **kwargs):
        return_request = self.requests.pop(0)
        return_request.mock_verify(method, url, headers, body)
        return return_request

    def clear(self):
        return
