#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
from dataclasses import dataclass
from typing import Final

import aiohttp

from .._http import HTTPResponse
from ..interfaces.http import HTTPClient, HTTPRequest
from ..interfaces.http import HTTPResponse as HTTPResponseInterface

logger: Final = logging.getLogger(__name__)


@dataclass(kw_only=True)
class AIOHTTPClientConfig:
    """Configuration that applies to all requests made with an AIOHTTPClient."""

    read_timeout: float | None = None
    """Seconds to wait for the complete response, or None for no limit."""

    connect_timeout: float | None = None
    """Seconds to wait for a connection to be established, or None for no limit."""


class AIOHTTPClient(HTTPClient):
    """Implementation of :py:class:`.interfaces.http.HTTPClient` using aiohttp.

    Retry and connection reuse are left to aiohttp's connection pool.
    """

    def __init__(
        self,
        *,
        client_config: AIOHTTPClientConfig | None = None,
        _session: aiohttp.ClientSession | None = None,
    ) -> None:
        """
        :param client_config: Configuration that applies to all requests made with this
        client.
        """
        self._config = client_config or AIOHTTPClientConfig()
        self._session = _session

    def _get_session(self) -> aiohttp.ClientSession:
        # The session must be created inside a running event loop.
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(
                total=self._config.read_timeout,
                connect=self._config.connect_timeout,
            )
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def send(self, *, request: HTTPRequest) -> HTTPResponseInterface:
        """Send HTTP request using aiohttp client.

        :param request: The request including destination, headers and body.
        """
        url = request.destination.build()
        logger.debug("Sending %s request to %s", request.method, url)
        async with self._get_session().request(
            method=request.method,
            url=url,
            headers=dict(request.headers),
            data=request.body,
        ) as resp:
            return await self._marshal_response(resp)

    async def _marshal_response(
        self, aiohttp_resp: aiohttp.ClientResponse
    ) -> HTTPResponseInterface:
        """Convert a ``aiohttp.ClientResponse`` to a ``aws_sqs_query.HTTPResponse``"""
        body = await aiohttp_resp.read()
        logger.debug(
            "Received response with status %s (%d bytes)",
            aiohttp_resp.status,
            len(body),
        )
        return HTTPResponse(
            status=aiohttp_resp.status,
            headers={name: value for name, value in aiohttp_resp.headers.items()},
            body=body,
            reason=aiohttp_resp.reason,
        )

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
