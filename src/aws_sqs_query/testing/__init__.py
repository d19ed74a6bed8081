#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""Offline test doubles: an in-memory queue backend and a canned HTTP client."""

from .mock import SUPPORTED_REGIONS, MockSQSClient
from .mockhttp import MockHTTPClient, MockHTTPClientError
from .store import AccountData, InMemoryQueueStore, StoredMessage, StoredQueue

__all__ = (
    "SUPPORTED_REGIONS",
    "AccountData",
    "InMemoryQueueStore",
    "MockHTTPClient",
    "MockHTTPClientError",
    "MockSQSClient",
    "StoredMessage",
    "StoredQueue",
)
