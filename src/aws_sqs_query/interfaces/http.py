# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable


@runtime_checkable
class Endpoint(Protocol):
    """Target location for a signed request.

    Host, path and port are inputs to the signature as well as the transport.
    """

    scheme: str
    """For example ``https``."""

    host: str
    """The hostname, for example ``sqs.us-east-1.amazonaws.com``."""

    port: int | None
    """An explicit port number. ``None`` means the default port for the scheme."""

    path: str
    """Path component, ``/`` when empty."""

    def build(self) -> str:
        """Construct the URL string ``{scheme}://{host}:{port}{path}``."""
        ...

    @property
    def netloc(self) -> str:
        """Construct netloc string in format ``{host}:{port}``."""
        ...


class HTTPRequest(Protocol):
    """HTTP primitives for a request sent to the queue service."""

    destination: Endpoint
    method: str
    headers: Mapping[str, str]
    body: bytes


class HTTPResponse(Protocol):
    """HTTP primitives for a response received from the queue service."""

    status: int
    """The 3 digit response status code (1xx, 2xx, 3xx, 4xx, 5xx)."""

    headers: Mapping[str, str]

    body: bytes
    """The fully read response payload."""

    reason: str | None
    """Optional string provided by the server explaining the status."""


class HTTPClient(Protocol):
    """An asynchronous HTTP client interface."""

    async def send(self, *, request: HTTPRequest) -> HTTPResponse:
        """Send HTTP request over the wire and return the response.

        :param request: The request including destination, headers and body.
        """
        ...

    async def close(self) -> None:
        """Release any pooled connections held by the client."""
        ...
