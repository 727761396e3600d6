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
import copy
import json
from datetime import datetime, timedelta, timezone
from unittest import TestCase

from aliyunoss import Oss, PostPolicy, sign_post_policy
from aliyunoss.credentials import Credentials

from .helpers import (ACCESS_KEY_ID, ACCESS_KEY_SECRET, ENDPOINT,
                      expected_signature)

POLICY = {
    "conditions": [
        ["content-length-range", 0, 10485760],
        {"bucket": "ahaha"},
        {"A": "a"},
        {"key": "ABC"},
    ],
    "expiration": "2013-12-01T12:00:00Z",
}


class SignPostPolicyTest(TestCase):
    def test_known_vector(self):
        self.assertEqual(
            sign_post_policy(POLICY, ACCESS_KEY_SECRET),
            {
                "policy": (
                    "eyJjb25kaXRpb25zIjpbWyJjb250ZW50LWxlbmd0aC1yYW5nZSIs"
                    "MCwxMDQ4NTc2MF0seyJidWNrZXQiOiJhaGFoYSJ9LHsiQSI6ImEi"
                    "fSx7ImtleSI6IkFCQyJ9XSwiZXhwaXJhdGlvbiI6IjIwMTMtMTIt"
                    "MDFUMTI6MDA6MDBaIn0="
                ),
                "signature": "W835KpLsL6k1/oo28RcsEflB6hw=",
            },
        )

    def test_key_order_is_kept(self):
        policy = {"expiration": "2013-12-01T12:00:00Z", "conditions": []}
        signed = sign_post_policy(policy, ACCESS_KEY_SECRET)
        self.assertEqual(
            base64.b64decode(signed["policy"]).decode(),
            '{"expiration":"2013-12-01T12:00:00Z","conditions":[]}',
        )

    def test_signature_is_over_encoded_policy(self):
        signed = sign_post_policy(POLICY, ACCESS_KEY_SECRET)
        self.assertEqual(
            signed["signature"], expected_signature(signed["policy"]),
        )

    def test_policy_is_not_mutated(self):
        policy = copy.deepcopy(POLICY)
        sign_post_policy(policy, ACCESS_KEY_SECRET)
        self.assertEqual(policy, POLICY)


class PostPolicyTest(TestCase):
    def _policy(self):
        return PostPolicy(
            "my-bucket", datetime(2013, 12, 1, 12, tzinfo=timezone.utc),
        )

    def test_policy_document(self):
        policy = self._policy()
        policy.add_equals_condition("key", "my-object")
        policy.add_starts_with_condition("$Content-Type", "image/")
        policy.add_content_length_range_condition(1, 1024)
        self.assertEqual(
            policy.policy(),
            {
                "expiration": "2013-12-01T12:00:00.000Z",
                "conditions": [
                    {"bucket": "my-bucket"},
                    ["eq", "$key", "my-object"],
                    ["starts-with", "$Content-Type", "image/"],
                    ["content-length-range", 1, 1024],
                ],
            },
        )

    def test_key_condition_required(self):
        with self.assertRaises(ValueError):
            self._policy().policy()

    def test_reserved_elements(self):
        policy = self._policy()
        with self.assertRaises(ValueError):
            policy.add_equals_condition("bucket", "other")
        with self.assertRaises(ValueError):
            policy.add_starts_with_condition("x-oss-security-token", "")

    def test_invalid_content_length_range(self):
        with self.assertRaises(ValueError):
            self._policy().add_content_length_range_condition(10, 1)
        with self.assertRaises(ValueError):
            self._policy().add_content_length_range_condition(-1, 1)

    def test_expiration_must_be_datetime(self):
        with self.assertRaises(ValueError):
            PostPolicy("my-bucket", "2013-12-01T12:00:00Z")

    def test_form_data(self):
        policy = self._policy()
        policy.add_starts_with_condition("key", "uploads/")
        form_data = policy.form_data(
            Credentials(ACCESS_KEY_ID, ACCESS_KEY_SECRET),
        )
        self.assertEqual(
            sorted(form_data), ["OSSAccessKeyId", "Signature", "policy"],
        )
        self.assertEqual(form_data["OSSAccessKeyId"], ACCESS_KEY_ID)
        self.assertEqual(
            form_data["Signature"], expected_signature(form_data["policy"]),
        )
        document = json.loads(base64.b64decode(form_data["policy"]))
        self.assertIn(["starts-with", "$key", "uploads/"],
                      document["conditions"])

    def test_form_data_with_session_token(self):
        policy = self._policy()
        policy.add_equals_condition("key", "my-object")
        form_data = policy.form_data(
            Credentials(ACCESS_KEY_ID, ACCESS_KEY_SECRET, "token"),
        )
        self.assertEqual(form_data["x-oss-security-token"], "token")
        document = json.loads(base64.b64decode(form_data["policy"]))
        self.assertIn({"x-oss-security-token": "token"},
                      document["conditions"])


class PresignedPostPolicyTest(TestCase):
    def test_anonymous_client(self):
        policy = PostPolicy(
            "my-bucket", datetime.now(timezone.utc) + timedelta(days=1),
        )
        policy.add_equals_condition("key", "my-object")
        with self.assertRaises(ValueError):
            Oss(ENDPOINT).presigned_post_policy(policy)

    def test_form_data(self):
        policy = PostPolicy(
            "my-bucket", datetime.now(timezone.utc) + timedelta(days=1),
        )
        policy.add_equals_condition("key", "my-object")
        client = Oss(
            ENDPOINT,
            access_key_id=ACCESS_KEY_ID,
            access_key_secret=ACCESS_KEY_SECRET,
        )
        form_data = client.presigned_post_policy(policy)
        self.assertEqual(form_data["OSSAccessKeyId"], ACCESS_KEY_ID)

    def test_policy_type(self):
        client = Oss(
            ENDPOINT,
            access_key_id=ACCESS_KEY_ID,
            access_key_secret=ACCESS_KEY_SECRET,
        )
        with self.assertRaises(ValueError):
            client.presigned_post_policy(POLICY)
