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

# pylint: disable=too-many-arguments

"""
Aliyun Object Storage Service (aka OSS) client to perform object
operations.
"""

from __future__ import absolute_import, annotations

import os
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Mapping, Optional, TextIO
from urllib.parse import urlunsplit

import certifi
import urllib3

try:
    from urllib3.response import BaseHTTPResponse  # type: ignore[attr-defined]
except ImportError:
    from urllib3.response import HTTPResponse as BaseHTTPResponse

from urllib3.util import Timeout

from . import time
from .casting import cast_data
from .credentials import StaticProvider
from .credentials.providers import Provider
from .datatypes import Request, Response, Verb
from .error import InvalidResponseError, OssError
from .helpers import (_DEFAULT_USER_AGENT, check_bucket_name,
                      check_object_name, headers_to_strings, md5sum_hash)
from .post_policy import PostPolicy
from .signer import presign_v1, sign_v1
from .xml import decode, parse_error_xml

_XML_CONTENT_TYPES = ("application/xml", "text/xml")


class Oss:
    """
    Aliyun Object Storage Service client to perform object operations.
    """
    _endpoint: str
    _scheme: str
    _user_agent: str
    _trace_stream: Optional[TextIO]
    _provider: Optional[Provider]
    _http: urllib3.PoolManager

    def __init__(
            self,
            endpoint: str,
            access_key_id: Optional[str] = None,
            access_key_secret: Optional[str] = None,
            session_token: Optional[str] = None,
            secure: bool = True,
            http_client: Optional[urllib3.PoolManager] = None,
            credentials: Optional[Provider] = None,
            cert_check: bool = True,
    ):
        """
        Initializes a new Oss client object.

        Args:
            endpoint (str):
                Region endpoint of the OSS service, e.g.
                "oss-cn-hangzhou.aliyuncs.com". Buckets are addressed as
                "<bucket>.<endpoint>".

            access_key_id (Optional[str], default=None):
                AccessKeyId of your account.

            access_key_secret (Optional[str], default=None):
                AccessKeySecret of your account.

            session_token (Optional[str], default=None):
                STS security token of your account.

            secure (bool, default=True):
                Flag to indicate whether to use a secure (TLS) connection.

            http_client (Optional[urllib3.PoolManager], default=None):
                Customized HTTP client.

            credentials (Optional[Provider], default=None):
                Credentials provider of your account.

            cert_check (bool, default=True):
                Flag to enable/disable server certificate validation
                for HTTPS connections.

        Example:
            >>> from aliyunoss import Oss
            >>>
            >>> client = Oss(
            ...     endpoint="oss-cn-hangzhou.aliyuncs.com",
            ...     access_key_id="ACCESS-KEY-ID",
            ...     access_key_secret="ACCESS-KEY-SECRET",
            ... )
            >>>
            >>> # Create client with credentials from environment
            >>> from aliyunoss.credentials import EnvOssProvider
            >>> client = Oss(
            ...     endpoint="oss-cn-hangzhou.aliyuncs.com",
            ...     credentials=EnvOssProvider(),
            ... )
        """
        # Validate http client has correct base class.
        if http_client and not isinstance(http_client, urllib3.PoolManager):
            raise TypeError(
                "HTTP client should be urllib3.PoolManager like object, "
                f"got {type(http_client).__name__}",
            )
        if not isinstance(endpoint, str) or not endpoint.strip():
            raise ValueError("endpoint must be non-empty string")

        self._endpoint = endpoint
        self._scheme = "https" if secure else "http"
        self._user_agent = _DEFAULT_USER_AGENT
        self._trace_stream = None
        if access_key_id:
            if access_key_secret is None:
                raise ValueError(
                    "access key secret must be provided with access key id",
                )
            credentials = StaticProvider(
                access_key_id, access_key_secret, session_token,
            )
        self._provider = credentials

        # Load CA certificates from SSL_CERT_FILE file if set
        timeout = timedelta(minutes=5).seconds
        self._http = http_client or urllib3.PoolManager(
            timeout=Timeout(connect=timeout, read=timeout),
            cert_reqs='CERT_REQUIRED' if cert_check else 'CERT_NONE',
            ca_certs=os.environ.get('SSL_CERT_FILE') or certifi.where(),
        )

    def __del__(self):
        if hasattr(self, "_http"):  # Only required for unit test run
            self._http.clear()

    def _object_request(
            self,
            verb: Verb,
            bucket_name: str,
            object_name: str,
            headers: Optional[Mapping[str, str]] = None,
            sub_resources: Optional[Mapping[str, Optional[str]]] = None,
            body: Optional[bytes] = None,
    ) -> Request:
        """Build request descriptor of an object."""
        check_bucket_name(bucket_name)
        check_object_name(object_name)
        return Request(
            verb=verb,
            host=f"{bucket_name}.{self._endpoint}",
            path=f"/{object_name}",
            resource=f"/{bucket_name}/{object_name}",
            headers=headers or {},
            sub_resources=sub_resources or {},
            body=body,
        )

    def _trace_request(self, request: Request, headers: Mapping[str, str]):
        """Write request to trace stream."""
        if not self._trace_stream:
            return
        query = request.query_string()
        query = ("?" + query) if query else ""
        self._trace_stream.write("---------START-HTTP---------\n")
        self._trace_stream.write(
            f"{request.verb.value} {request.path or '/'}{query} HTTP/1.1\n",
        )
        self._trace_stream.write(headers_to_strings(headers, titled_key=True))
        self._trace_stream.write("\n")
        if request.body is not None:
            self._trace_stream.write("\n")
            self._trace_stream.write(request.body.decode(errors="replace"))
            self._trace_stream.write("\n")
        self._trace_stream.write("\n")

    def _trace_response(self, response: BaseHTTPResponse, with_body: bool):
        """Write response to trace stream."""
        if not self._trace_stream:
            return
        self._trace_stream.write(f"HTTP/1.1 {response.status}\n")
        self._trace_stream.write(headers_to_strings(response.headers))
        self._trace_stream.write("\n")
        if with_body and response.data:
            self._trace_stream.write("\n")
            self._trace_stream.write(response.data.decode(errors="replace"))
            self._trace_stream.write("\n")
        self._trace_stream.write("----------END-HTTP----------\n")

    @staticmethod
    def _is_xml(response: BaseHTTPResponse) -> bool:
        """Check whether response advertises XML content."""
        content_type = response.headers.get("content-type", "")
        return any(
            value.strip() in _XML_CONTENT_TYPES
            for value in content_type.split(";")
        )

    def _url_open(self, request: Request) -> Response:
        """Execute HTTP request."""
        headers = dict(request.headers)
        if not headers.get("Date"):
            headers["Date"] = time.to_http_header(time.utcnow())
        if request.verb in [Verb.PUT, Verb.POST]:
            body = request.body or b""
            headers["Content-Length"] = str(len(body))
            if not headers.get("Content-Type"):
                headers["Content-Type"] = "application/octet-stream"
            if not headers.get("Content-MD5"):
                headers["Content-MD5"] = str(md5sum_hash(body))
        request = replace(request, headers=headers)

        if self._provider is not None:
            headers = sign_v1(request, self._provider.retrieve())
        headers["User-Agent"] = self._user_agent

        self._trace_request(request, headers)

        response = self._http.urlopen(
            request.verb.value,
            urlunsplit(request.url(self._scheme)),
            body=request.body,
            headers=headers,
            preload_content=True,
        )

        self._trace_response(response, self._is_xml(response))

        if response.status in [200, 204, 206]:
            return Response(
                response.status,
                response.headers,
                self._read_data(request, response),
            )

        parsed_details = None
        if response.data:
            result = parse_error_xml(response.data)
            parsed_details = result.node if result.ok else None
        raise OssError(
            response.status,
            response.data or b"",
            parsed_details,
            response.headers.get("x-oss-request-id"),
        )

    def _read_data(self, request: Request, response: BaseHTTPResponse):
        """Get response data; XML is decoded and cast."""
        if request.verb == Verb.HEAD or not response.data:
            return b""
        if not self._is_xml(response):
            return response.data

        result = decode(response.data)
        if not result.ok:
            raise InvalidResponseError(
                response.status,
                response.headers.get("content-type"),
                response.data.decode(errors="replace"),
            )
        return cast_data(result.node)

    def set_app_info(self, app_name: str, app_version: str):
        """
        Set your application name and version to user agent header.

        Args:
            app_name (str):
                Application name.

            app_version (str):
                Application version.

        Example:
            >>> client.set_app_info('my_app', '1.0.2')
        """
        if not (app_name and app_version):
            raise ValueError("Application name/version cannot be empty.")
        self._user_agent = f"{_DEFAULT_USER_AGENT} {app_name}/{app_version}"

    def trace_on(self, stream: TextIO):
        """
        Enable http trace.

        Args:
            stream (TextIO):
                Stream for writing HTTP call tracing.

        Example:
            >>> client.trace_on(sys.stdout)
        """
        if not stream:
            raise ValueError('Input stream for trace output is invalid.')
        # Save new output stream.
        self._trace_stream = stream

    def trace_off(self):
        """Disable HTTP trace."""
        self._trace_stream = None

    def get_object(
            self,
            bucket_name: str,
            object_name: str,
            headers: Optional[Mapping[str, str]] = None,
            sub_resources: Optional[Mapping[str, Optional[str]]] = None,
    ) -> Response:
        """
        Get object data, or an object sub-resource like ACL.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_name (str):
                Object name in the bucket.

            headers (Optional[Mapping[str, str]], default=None):
                Request headers, e.g. Range.

            sub_resources (Optional[Mapping[str, Optional[str]]],
                           default=None):
                Sub-resources to get instead of object data.

        Returns:
            Response:
                Response with raw object data, or decoded XML for
                sub-resources.

        Example:
            >>> response = client.get_object("my-bucket", "my-object")
            >>> acl = client.get_object(
            ...     "my-bucket", "my-object", sub_resources={"acl": None},
            ... )
        """
        return self._url_open(
            self._object_request(
                Verb.GET, bucket_name, object_name, headers, sub_resources,
            ),
        )

    def get_object_acl(self, bucket_name: str, object_name: str) -> Response:
        """
        Get access control policy of an object.

        Example:
            >>> response = client.get_object_acl("my-bucket", "my-object")
            >>> print(response.data["AccessControlPolicy"])
        """
        return self.get_object(
            bucket_name, object_name, sub_resources={"acl": None},
        )

    def head_object(
            self,
            bucket_name: str,
            object_name: str,
            headers: Optional[Mapping[str, str]] = None,
    ) -> Response:
        """
        Get object metadata without its content.

        Example:
            >>> response = client.head_object("my-bucket", "my-object")
            >>> print(response.headers["ETag"])
        """
        return self._url_open(
            self._object_request(Verb.HEAD, bucket_name, object_name, headers),
        )

    def put_object(
            self,
            bucket_name: str,
            object_name: str,
            body: str | bytes,
            headers: Optional[Mapping[str, str]] = None,
            sub_resources: Optional[Mapping[str, Optional[str]]] = None,
    ) -> Response:
        """
        Upload data to an object. Existing object of the same name is
        overwritten.

        Args:
            bucket_name (str):
                Name of the bucket.

            object_name (str):
                Object name in the bucket.

            body (str | bytes):
                Object data.

            headers (Optional[Mapping[str, str]], default=None):
                Request headers, e.g. Content-Type or x-oss-meta-*.

            sub_resources (Optional[Mapping[str, Optional[str]]],
                           default=None):
                Sub-resources to put instead of object data.

        Example:
            >>> client.put_object(
            ...     "my-bucket", "my-object", b"hello",
            ...     headers={"Content-Type": "text/plain"},
            ... )
        """
        if not isinstance(body, (str, bytes)):
            raise TypeError("body must be str or bytes type")
        return self._url_open(
            self._object_request(
                Verb.PUT,
                bucket_name,
                object_name,
                headers,
                sub_resources,
                body.encode() if isinstance(body, str) else body,
            ),
        )

    def put_object_acl(
            self, bucket_name: str, object_name: str, acl: str,
    ) -> Response:
        """
        Set access control of an object.

        Example:
            >>> client.put_object_acl("my-bucket", "my-object", "private")
        """
        if not isinstance(acl, str):
            raise TypeError(f"acl must be str type, got {type(acl).__name__}")
        if not acl.strip():
            raise ValueError("acl must be non-empty string, e.g. private")
        return self.put_object(
            bucket_name,
            object_name,
            b"",
            {"x-oss-object-acl": acl},
            {"acl": None},
        )

    def delete_object(self, bucket_name: str, object_name: str) -> Response:
        """
        Delete an object.

        Example:
            >>> client.delete_object("my-bucket", "my-object")
        """
        return self._url_open(
            self._object_request(Verb.DELETE, bucket_name, object_name),
        )

    def list_objects(
            self,
            bucket_name: str,
            prefix: Optional[str] = None,
            marker: Optional[str] = None,
            delimiter: Optional[str] = None,
            max_keys: Optional[int] = None,
    ) -> Response:
        """
        List objects of a bucket, one page per call.

        Returns:
            Response:
                Response whose data is the cast ListBucketResult with
                IsTruncated as bool and MaxKeys as int.

        Example:
            >>> response = client.list_objects("my-bucket", prefix="logs/")
            >>> result = response.data["ListBucketResult"]
            >>> if result["IsTruncated"]:
            ...     print(result["NextMarker"])
        """
        check_bucket_name(bucket_name)
        query_params = {}
        if prefix is not None:
            query_params["prefix"] = prefix
        if marker is not None:
            query_params["marker"] = marker
        if delimiter is not None:
            query_params["delimiter"] = delimiter
        if max_keys is not None:
            query_params["max-keys"] = str(max_keys)
        return self._url_open(
            Request(
                verb=Verb.GET,
                host=f"{bucket_name}.{self._endpoint}",
                path="/",
                resource=f"/{bucket_name}/",
                query_params=query_params,
            ),
        )

    def get_presigned_url(
            self,
            method: str,
            bucket_name: str,
            object_name: str,
            expires: datetime | int,
            headers: Optional[Mapping[str, str]] = None,
            sub_resources: Optional[Mapping[str, Optional[str]]] = None,
            query_params: Optional[Mapping[str, str]] = None,
    ) -> str:
        """
        Get a presigned URL of an object.

        Args:
            method (str):
                HTTP method to allow (e.g., "GET", "PUT", "DELETE").

            bucket_name (str):
                Name of the bucket.

            object_name (str):
                Object name in the bucket.

            expires (datetime | int):
                Expiry time, as datetime or seconds since epoch.

            headers (Optional[Mapping[str, str]], default=None):
                Headers the request must be sent with, e.g. Content-Type.

            sub_resources (Optional[Mapping[str, Optional[str]]],
                           default=None):
                Sub-resources of the request.

            query_params (Optional[Mapping[str, str]], default=None):
                Extra query parameters like response-content-type.

        Returns:
            str:
                A presigned URL string.

        Example:
            >>> url = client.get_presigned_url(
            ...     "PUT", "my-bucket", "my-object",
            ...     datetime.now(timezone.utc) + timedelta(hours=2),
            ... )
        """
        expires = time.to_unix(expires)
        if expires < 1:
            raise ValueError("expires must be positive")

        request = replace(
            self._object_request(
                Verb(method.upper()), bucket_name, object_name, headers,
                sub_resources,
            ),
            query_params=query_params or {},
        )
        url = request.url(self._scheme)
        if self._provider is not None:
            url = presign_v1(request, url, self._provider.retrieve(), expires)
        return urlunsplit(url)

    def object_url(
            self, bucket_name: str, object_name: str, expires: datetime | int,
    ) -> str:
        """
        Get a presigned URL to download an object.

        Example:
            >>> url = client.object_url("my-bucket", "my-object", 1547105286)
        """
        return self.get_presigned_url(
            "GET", bucket_name, object_name, expires,
        )

    def presigned_post_policy(self, policy: PostPolicy) -> dict[str, str]:
        """
        Get form-data for a PostPolicy to upload an object using POST.

        Example:
            >>> policy = PostPolicy(
            ...     "my-bucket",
            ...     datetime.now(timezone.utc) + timedelta(days=10),
            ... )
            >>> policy.add_starts_with_condition("key", "my/object/prefix/")
            >>> policy.add_content_length_range_condition(
            ...     1*1024*1024, 10*1024*1024,
            ... )
            >>> form_data = client.presigned_post_policy(policy)
        """
        if not isinstance(policy, PostPolicy):
            raise ValueError("policy must be PostPolicy type")
        if not self._provider:
            raise ValueError(
                "anonymous access does not require presigned post form-data",
            )
        return policy.form_data(self._provider.retrieve())
