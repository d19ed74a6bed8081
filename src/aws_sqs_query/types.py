#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""Typed results of the queue operations."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ResponseMetadata:
    request_id: str | None = None


@dataclass(frozen=True, kw_only=True)
class EmptyResult:
    """Result of an operation that returns nothing but its metadata."""

    response_metadata: ResponseMetadata = field(default_factory=ResponseMetadata)


@dataclass(frozen=True, kw_only=True)
class CreateQueueResult:
    queue_url: str
    response_metadata: ResponseMetadata = field(default_factory=ResponseMetadata)


@dataclass(frozen=True, kw_only=True)
class ListQueuesResult:
    queue_urls: list[str] = field(default_factory=list[str])
    response_metadata: ResponseMetadata = field(default_factory=ResponseMetadata)


@dataclass(frozen=True, kw_only=True)
class SendMessageResult:
    message_id: str
    md5_of_message_body: str
    response_metadata: ResponseMetadata = field(default_factory=ResponseMetadata)


@dataclass(frozen=True, kw_only=True)
class Message:
    message_id: str
    receipt_handle: str
    md5_of_body: str
    body: str
    attributes: dict[str, str] = field(default_factory=dict[str, str])


@dataclass(frozen=True, kw_only=True)
class ReceiveMessageResult:
    messages: list[Message] = field(default_factory=list[Message])
    response_metadata: ResponseMetadata = field(default_factory=ResponseMetadata)


@dataclass(frozen=True, kw_only=True)
class GetQueueAttributesResult:
    attributes: dict[str, str] = field(default_factory=dict[str, str])
    response_metadata: ResponseMetadata = field(default_factory=ResponseMetadata)
