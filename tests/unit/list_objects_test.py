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

from unittest import TestCase, mock

from aliyunoss import Oss

from .helpers import (ACCESS_KEY_ID, ACCESS_KEY_SECRET, DATE,
                      expected_authorization)
from .oss_mocks import MockConnection, MockResponse


class ListObjectsTest(TestCase):
    @mock.patch("urllib3.PoolManager")
    def test_empty_list_objects_works(self, mock_connection):
        mock_data = '''<?xml version="1.0" encoding="UTF-8"?>
<ListBucketResult>
  <Name>bucket</Name>
  <Prefix></Prefix>
  <Marker></Marker>
  <MaxKeys>1000</MaxKeys>
  <Delimiter></Delimiter>
  <IsTruncated>false</IsTruncated>
</ListBucketResult>'''
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        mock_server.mock_add_request(
            MockResponse(
                "GET",
                "https://bucket.oss-cn-hangzhou.aliyuncs.com/",
                200,
                response_headers={"Content-Type": "application/xml"},
                content=mock_data.encode(),
            ),
        )
        client = Oss("oss-cn-hangzhou.aliyuncs.com")
        response = client.list_objects("bucket")
        self.assertEqual(
            response.data,
            {
                "ListBucketResult": {
                    "Name": "bucket",
                    "Prefix": None,
                    "Marker": None,
                    "MaxKeys": 1000,
                    "Delimiter": None,
                    "IsTruncated": False,
                },
            },
        )

    @mock.patch("urllib3.PoolManager")
    def test_list_objects_works(self, mock_connection):
        mock_data = '''<?xml version="1.0" encoding="UTF-8"?>
<ListBucketResult>
  <Name>bucket</Name>
  <Prefix>fun/</Prefix>
  <Marker></Marker>
  <MaxKeys>2</MaxKeys>
  <Delimiter>/</Delimiter>
  <IsTruncated>true</IsTruncated>
  <NextMarker>fun/movie/007.avi</NextMarker>
  <Contents>
    <Key>fun/movie/001.avi</Key>
    <LastModified>2012-02-24T08:43:07.000Z</LastModified>
    <ETag>&quot;5B3C1A2E053D763E1B002CC607C5A0FE&quot;</ETag>
    <Size>344606</Size>
    <Owner>
      <ID>0022012****</ID>
      <DisplayName>user-example</DisplayName>
    </Owner>
  </Contents>
  <Contents>
    <Key>fun/movie/007.avi</Key>
    <LastModified>2012-02-24T08:43:27.000Z</LastModified>
    <ETag>&quot;5B3C1A2E053D763E1B002CC607C5A0FE&quot;</ETag>
    <Size>344606</Size>
    <Owner>
      <ID>0022012****</ID>
      <DisplayName>user-example</DisplayName>
    </Owner>
  </Contents>
  <CommonPrefixes>
    <Prefix>fun/test/</Prefix>
  </CommonPrefixes>
</ListBucketResult>'''
        mock_server = MockConnection()
        mock_connection.return_value = mock_server
        response = MockResponse(
            "GET",
            "https://bucket.oss-cn-hangzhou.aliyuncs.com/"
            "?prefix=fun%2F&delimiter=%2F&max-keys=2",
            200,
            response_headers={"Content-Type": "application/xml"},
            content=mock_data.encode(),
        )
        mock_server.mock_add_request(response)
        client = Oss(
            "oss-cn-hangzhou.aliyuncs.com",
            access_key_id=ACCESS_KEY_ID,
            access_key_secret=ACCESS_KEY_SECRET,
        )
        with mock.patch("aliyunoss.time.to_http_header", return_value=DATE):
            result = client.list_objects(
                "bucket", prefix="fun/", delimiter="/", max_keys=2,
            ).data["ListBucketResult"]

        # query parameters of listing are not signed
        self.assertEqual(
            response.request_headers["Authorization"],
            expected_authorization("GET\n\n\n" + DATE + "\n/bucket/"),
        )
        self.assertEqual(result["Prefix"], "fun/")
        self.assertIsNone(result["Marker"])
        self.assertEqual(result["MaxKeys"], 2)
        self.assertEqual(result["Delimiter"], "/")
        self.assertIs(result["IsTruncated"], True)
        self.assertEqual(result["NextMarker"], "fun/movie/007.avi")
        self.assertEqual(len(result["Contents"]), 2)
        self.assertEqual(
            result["Contents"][0]["ETag"],
            '"5B3C1A2E053D763E1B002CC607C5A0FE"',
        )
        self.assertEqual(result["Contents"][1]["Size"], "344606")
        self.assertEqual(
            result["CommonPrefixes"], {"Prefix": "fun/test/"},
        )
