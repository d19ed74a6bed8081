#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""Parsers for the XML documents returned by the Query API."""

import logging
from typing import Final
from xml.etree import ElementTree

from .exceptions import DeserializationError, Fault, SQSServiceError
from .interfaces.http import HTTPResponse
from .types import (
    CreateQueueResult,
    EmptyResult,
    GetQueueAttributesResult,
    ListQueuesResult,
    Message,
    ReceiveMessageResult,
    ResponseMetadata,
    SendMessageResult,
)

logger: Final = logging.getLogger(__name__)

_FAULTS: dict[str, Fault] = {"Sender": "client", "Receiver": "server"}


def _local_name(tag: str) -> str:
    # Documents are namespaced by API version; match on the local name only.
    return tag.rsplit("}", 1)[-1]


def _children(element: ElementTree.Element, name: str) -> list[ElementTree.Element]:
    return [child for child in element if _local_name(child.tag) == name]


def _child(element: ElementTree.Element, name: str) -> ElementTree.Element | None:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def _find(element: ElementTree.Element, *path: str) -> ElementTree.Element | None:
    current: ElementTree.Element | None = element
    for name in path:
        if current is None:
            return None
        current = _child(current, name)
    return current


def _text(element: ElementTree.Element, *path: str, default: str = "") -> str:
    found = _find(element, *path)
    if found is None or found.text is None:
        return default
    return found.text


def _required_text(element: ElementTree.Element, *path: str) -> str:
    found = _find(element, *path)
    if found is None:
        raise DeserializationError(
            f"Expected element {'/'.join(path)} in {_local_name(element.tag)}."
        )
    return found.text or ""


def _attributes(element: ElementTree.Element) -> dict[str, str]:
    return {
        _required_text(attribute, "Name"): _text(attribute, "Value")
        for attribute in _children(element, "Attribute")
    }


class QueryResponseParser:
    """Turns raw transport responses into typed results or service errors."""

    def parse_document(self, body: bytes) -> ElementTree.Element:
        try:
            return ElementTree.fromstring(body)
        except ElementTree.ParseError as e:
            raise DeserializationError(
                f"Unable to parse response body as XML: {body[:256]!r}"
            ) from e

    def check_response(
        self, response: HTTPResponse, *, expected_status: int = 200
    ) -> ElementTree.Element:
        """Raise for error responses and return the parsed document otherwise."""
        if response.status != expected_status:
            raise self.parse_error(response)
        root = self.parse_document(response.body)
        if _local_name(root.tag) == "ErrorResponse":
            raise self.parse_error(response, root=root)
        return root

    def parse_error(
        self,
        response: HTTPResponse,
        *,
        root: ElementTree.Element | None = None,
    ) -> SQSServiceError:
        try:
            root = root if root is not None else self.parse_document(response.body)
        except DeserializationError:
            logger.debug("Unparseable error response with status %s", response.status)
            return SQSServiceError(
                code=f"HTTP{response.status}",
                message=response.reason or "",
                fault="server" if response.status >= 500 else "client",
                status=response.status,
            )

        error = _find(root, "Error")
        if error is None:
            error = root
        error_type = _text(error, "Type")
        fault = _FAULTS.get(error_type)
        if fault is None and response.status >= 400:
            fault = "server" if response.status >= 500 else "client"
        request_id = _text(root, "RequestId") or _text(
            root, "ResponseMetadata", "RequestId"
        )
        return SQSServiceError(
            code=_text(error, "Code", default=f"HTTP{response.status}"),
            message=_text(error, "Message"),
            fault=fault,
            request_id=request_id or None,
            status=response.status,
        )

    def response_metadata(self, root: ElementTree.Element) -> ResponseMetadata:
        return ResponseMetadata(
            request_id=_text(root, "ResponseMetadata", "RequestId") or None
        )

    def parse_empty(self, response: HTTPResponse) -> EmptyResult:
        root = self.check_response(response)
        return EmptyResult(response_metadata=self.response_metadata(root))

    def parse_create_queue(self, response: HTTPResponse) -> CreateQueueResult:
        root = self.check_response(response)
        return CreateQueueResult(
            queue_url=_required_text(root, "CreateQueueResult", "QueueUrl"),
            response_metadata=self.response_metadata(root),
        )

    def parse_list_queues(self, response: HTTPResponse) -> ListQueuesResult:
        root = self.check_response(response)
        result = _find(root, "ListQueuesResult")
        urls = (
            [url.text or "" for url in _children(result, "QueueUrl")]
            if result is not None
            else []
        )
        return ListQueuesResult(
            queue_urls=urls, response_metadata=self.response_metadata(root)
        )

    def parse_send_message(self, response: HTTPResponse) -> SendMessageResult:
        root = self.check_response(response)
        return SendMessageResult(
            message_id=_required_text(root, "SendMessageResult", "MessageId"),
            md5_of_message_body=_text(root, "SendMessageResult", "MD5OfMessageBody"),
            response_metadata=self.response_metadata(root),
        )

    def parse_receive_message(self, response: HTTPResponse) -> ReceiveMessageResult:
        root = self.check_response(response)
        result = _find(root, "ReceiveMessageResult")
        messages: list[Message] = []
        if result is not None:
            for element in _children(result, "Message"):
                messages.append(
                    Message(
                        message_id=_required_text(element, "MessageId"),
                        receipt_handle=_required_text(element, "ReceiptHandle"),
                        md5_of_body=_text(element, "MD5OfBody"),
                        body=_text(element, "Body"),
                        attributes=_attributes(element),
                    )
                )
        return ReceiveMessageResult(
            messages=messages, response_metadata=self.response_metadata(root)
        )

    def parse_get_queue_attributes(
        self, response: HTTPResponse
    ) -> GetQueueAttributesResult:
        root = self.check_response(response)
        result = _find(root, "GetQueueAttributesResult")
        return GetQueueAttributesResult(
            attributes=_attributes(result) if result is not None else {},
            response_metadata=self.response_metadata(root),
        )
