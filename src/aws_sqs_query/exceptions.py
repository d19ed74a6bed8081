# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass, field
from typing import Literal


class BaseSQSQueryException(Exception):
    """Top-level exception to capture client-related errors."""


class ValidationError(BaseSQSQueryException, ValueError):
    """Caller input was missing or malformed and no request was produced."""


class EncodingError(BaseSQSQueryException, ValueError):
    """A parameter value cannot be represented as valid text for transport."""


class IdentityError(BaseSQSQueryException):
    """Credentials could not be resolved."""


class DeserializationError(BaseSQSQueryException):
    """The service response could not be parsed."""


type Fault = Literal["client", "server"] | None
"""Whether the client or server is at fault.

If None, then there was not enough information to determine fault.
"""


@dataclass(kw_only=True)
class SQSServiceError(BaseSQSQueryException):
    """An error returned by the queue service."""

    code: str
    """The service error code, such as ``AWS.SimpleQueueService.NonExistentQueue``."""

    message: str = field(default="", kw_only=False)
    """The message of the error."""

    fault: Fault = None
    """Whether the client or server is at fault."""

    request_id: str | None = None
    """The request id reported by the service, if any."""

    status: int | None = None
    """The HTTP status code of the response that carried the error."""

    def __post_init__(self):
        super().__init__(f"{self.code}: {self.message}" if self.message else self.code)
