# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import urlparse, urlunparse

import aws_sqs_query.interfaces.http as interfaces_http

DEFAULT_PORTS: dict[str, int] = {"http": 80, "https": 443}


@dataclass(kw_only=True, frozen=True)
class Endpoint(interfaces_http.Endpoint):
    """Universal Resource Identifier of a queue service endpoint.

    The endpoint is immutable, so it can be shared between concurrent signing calls.
    """

    host: str
    scheme: str = "https"
    port: int | None = None
    path: str = "/"

    def __post_init__(self) -> None:
        if not self.host:
            raise ValueError("Endpoint host must be a non-empty string.")
        if not self.path:
            object.__setattr__(self, "path", "/")

    @property
    def netloc(self) -> str:
        if self.port is not None:
            return f"{self.host}:{self.port}"
        return self.host

    @property
    def signing_host(self) -> str:
        """The host component that takes part in the signature.

        The host is lower-cased and always carries a port. When no port is set the
        scheme's default port is used.
        """
        host = self.host.lower()
        port = self.port if self.port is not None else DEFAULT_PORTS.get(self.scheme)
        if port is None:
            return host
        return f"{host}:{port}"

    def build(self) -> str:
        components = (self.scheme, self.netloc, self.path, "", "", "")
        return urlunparse(components)

    def with_path(self, path: str | None) -> Endpoint:
        """Return a copy of the endpoint targeting a different path."""
        return Endpoint(
            host=self.host, scheme=self.scheme, port=self.port, path=path or "/"
        )

    @classmethod
    def from_url(cls, url: str) -> Endpoint:
        """Build an endpoint from a URL, for example
        ``https://sqs.us-east-1.amazonaws.com``."""
        parts = urlparse(url)
        if not parts.scheme or not parts.hostname:
            raise ValueError(f"Unable to parse endpoint URL: {url!r}")
        return cls(
            scheme=parts.scheme,
            host=parts.hostname,
            port=parts.port,
            path=parts.path or "/",
        )

    @classmethod
    def for_region(cls, region: str) -> Endpoint:
        """The standard regional endpoint for the queue service."""
        return cls(host=f"sqs.{region}.amazonaws.com", scheme="https", port=443)


@dataclass(kw_only=True)
class HTTPRequest(interfaces_http.HTTPRequest):
    """HTTP primitives for a request sent to the queue service."""

    destination: Endpoint
    method: str = "POST"
    headers: dict[str, str] = field(default_factory=dict[str, str])
    body: bytes = b""


@dataclass(kw_only=True)
class HTTPResponse(interfaces_http.HTTPResponse):
    """Basic implementation of :py:class:`.interfaces.http.HTTPResponse`."""

    status: int
    headers: dict[str, str] = field(default_factory=dict[str, str])
    body: bytes = b""
    reason: str | None = None
