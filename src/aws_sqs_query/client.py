#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
from collections.abc import Callable, Mapping, Sequence
from types import TracebackType
from typing import Final, Self
from urllib.parse import urlparse

from ._http import HTTPRequest
from ._identity import AWSCredentialIdentity, AWSIdentityProperties
from .aio.aiohttp import AIOHTTPClient
from .config import SQSClientConfig
from .deserializers import QueryResponseParser
from .exceptions import ValidationError
from .identity import create_default_chain
from .interfaces.http import HTTPClient, HTTPResponse
from .interfaces.identity import IdentityResolver
from .params import QueryParameters
from .signers import SigV2Signer, SigV2SigningProperties
from .types import (
    CreateQueueResult,
    EmptyResult,
    GetQueueAttributesResult,
    ListQueuesResult,
    ReceiveMessageResult,
    SendMessageResult,
)

_LOGGER: Final = logging.getLogger(__name__)

CONTENT_TYPE = "application/x-www-form-urlencoded"


def path_from_queue_url(queue_url: str) -> str:
    """Extract the request path, ``/{account}/{queue}``, from a queue URL."""
    path = urlparse(queue_url).path
    if not path or path == "/":
        raise ValidationError(f"Unable to determine queue path from {queue_url!r}.")
    return path


class SQSClient:
    """Asynchronous client for the queue service Query API.

    Every operation serializes its input with :py:class:`QueryParameters`, resolves
    a credential snapshot, signs the parameters with :py:class:`SigV2Signer`, sends
    them as a form-encoded POST body and parses the XML response.

    Use as an async context manager, or call :py:meth:`close` when done::

        async with SQSClient(SQSClientConfig(region="eu-west-1")) as client:
            result = await client.create_queue("jobs")
    """

    def __init__(
        self,
        config: SQSClientConfig | None = None,
        *,
        signer: SigV2Signer | None = None,
        parser: QueryResponseParser | None = None,
    ) -> None:
        self._config = config or SQSClientConfig()
        self._signer = signer or SigV2Signer()
        self._parser = parser or QueryResponseParser()
        self._http_client: HTTPClient | None = None
        self._owns_http_client = False
        self._identity_resolver: (
            IdentityResolver[AWSCredentialIdentity, AWSIdentityProperties] | None
        ) = None

    @property
    def config(self) -> SQSClientConfig:
        return self._config

    async def _prepare(self) -> None:
        if not self._config.is_resolved:
            await self._config.resolve()
        if self._http_client is None:
            if self._config.http_client is not None:
                self._http_client = self._config.http_client
            else:
                self._http_client = AIOHTTPClient()
                self._owns_http_client = True
        if self._identity_resolver is None:
            self._identity_resolver = (
                self._config.aws_credentials_identity_resolver
                or create_default_chain()
            )

    async def _invoke[T](
        self,
        operation: str,
        params: QueryParameters,
        parse: Callable[[HTTPResponse], T],
        *,
        queue_url: str | None = None,
    ) -> T:
        await self._prepare()
        assert self._http_client is not None
        assert self._identity_resolver is not None

        endpoint = self._config.endpoint
        if queue_url is not None:
            endpoint = endpoint.with_path(path_from_queue_url(queue_url))

        identity = await self._identity_resolver.get_identity(
            properties=self._config.identity_properties
        )
        body = self._signer.sign(
            operation=operation,
            params=params,
            identity=identity,
            endpoint=endpoint,
            properties=SigV2SigningProperties(version=self._config.api_version),
        )
        request = HTTPRequest(
            destination=endpoint,
            method="POST",
            headers={"Content-Type": CONTENT_TYPE, "Host": endpoint.signing_host},
            body=body.encode("utf-8"),
        )
        _LOGGER.debug("Invoking %s against %s", operation, endpoint.build())
        response = await self._http_client.send(request=request)
        _LOGGER.debug("%s returned status %s", operation, response.status)
        return parse(response)

    async def create_queue(
        self, name: str, attributes: Mapping[str, str | int | bool] | None = None
    ) -> CreateQueueResult:
        """Create a queue, or return the URL of an existing queue with that name.

        :param name: The name of the queue.
        :param attributes: Queue attributes, such as ``VisibilityTimeout``.
        """
        params = (
            QueryParameters().add("QueueName", name).add_map("Attribute", attributes)
        )
        return await self._invoke(
            "CreateQueue", params, self._parser.parse_create_queue
        )

    async def delete_queue(self, queue_url: str) -> EmptyResult:
        return await self._invoke(
            "DeleteQueue",
            QueryParameters(),
            self._parser.parse_empty,
            queue_url=queue_url,
        )

    async def list_queues(
        self, queue_name_prefix: str | None = None
    ) -> ListQueuesResult:
        """List queue URLs, optionally only those whose names start with a prefix."""
        params = QueryParameters().add("QueueNamePrefix", queue_name_prefix)
        return await self._invoke("ListQueues", params, self._parser.parse_list_queues)

    async def send_message(
        self, queue_url: str, message_body: str
    ) -> SendMessageResult:
        params = QueryParameters().add("MessageBody", message_body)
        return await self._invoke(
            "SendMessage",
            params,
            self._parser.parse_send_message,
            queue_url=queue_url,
        )

    async def receive_message(
        self,
        queue_url: str,
        *,
        attribute_names: Sequence[str] | None = None,
        max_number_of_messages: int | None = None,
        visibility_timeout: int | None = None,
    ) -> ReceiveMessageResult:
        """Receive up to ``max_number_of_messages`` messages from a queue.

        :param queue_url: The URL of the queue.
        :param attribute_names: Message attributes to return, such as ``All``.
        :param max_number_of_messages: Maximum number of messages to return (1-10).
        :param visibility_timeout: Seconds the received messages stay hidden.
        """
        params = (
            QueryParameters()
            .add_list("AttributeName", attribute_names)
            .add("MaxNumberOfMessages", max_number_of_messages)
            .add("VisibilityTimeout", visibility_timeout)
        )
        return await self._invoke(
            "ReceiveMessage",
            params,
            self._parser.parse_receive_message,
            queue_url=queue_url,
        )

    async def delete_message(self, queue_url: str, receipt_handle: str) -> EmptyResult:
        params = QueryParameters().add("ReceiptHandle", receipt_handle)
        return await self._invoke(
            "DeleteMessage", params, self._parser.parse_empty, queue_url=queue_url
        )

    async def change_message_visibility(
        self, queue_url: str, receipt_handle: str, visibility_timeout: int
    ) -> EmptyResult:
        params = (
            QueryParameters()
            .add("ReceiptHandle", receipt_handle)
            .add("VisibilityTimeout", visibility_timeout)
        )
        return await self._invoke(
            "ChangeMessageVisibility",
            params,
            self._parser.parse_empty,
            queue_url=queue_url,
        )

    async def get_queue_attributes(
        self, queue_url: str, attribute_names: Sequence[str] = ("All",)
    ) -> GetQueueAttributesResult:
        params = QueryParameters().add_list("AttributeName", attribute_names)
        return await self._invoke(
            "GetQueueAttributes",
            params,
            self._parser.parse_get_queue_attributes,
            queue_url=queue_url,
        )

    async def set_queue_attributes(
        self, queue_url: str, name: str, value: str | int | bool
    ) -> EmptyResult:
        params = (
            QueryParameters().add("Attribute.Name", name).add("Attribute.Value", value)
        )
        return await self._invoke(
            "SetQueueAttributes", params, self._parser.parse_empty, queue_url=queue_url
        )

    async def close(self) -> None:
        """Release the connections held by the HTTP client.

        A client supplied through the config is left open for its owner to close.
        """
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.close()
        self._http_client = None
        self._owns_http_client = False

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.close()

