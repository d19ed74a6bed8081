# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""Signed Query API client for Amazon SQS, with an in-memory mock backend for
offline testing."""

from __future__ import annotations

from ._http import Endpoint, HTTPRequest, HTTPResponse
from ._identity import AWSCredentialIdentity, AWSIdentityProperties
from .client import SQSClient, path_from_queue_url
from .config import SQSClientConfig
from .exceptions import (
    BaseSQSQueryException,
    EncodingError,
    IdentityError,
    SQSServiceError,
    ValidationError,
)
from .params import QueryParameters, flatten
from .signers import SigV2Signer, SigV2SigningProperties

__license__ = "Apache-2.0"
__version__ = "0.1.0"

__all__ = (
    "AWSCredentialIdentity",
    "AWSIdentityProperties",
    "BaseSQSQueryException",
    "EncodingError",
    "Endpoint",
    "HTTPRequest",
    "HTTPResponse",
    "IdentityError",
    "QueryParameters",
    "SQSClient",
    "SQSClientConfig",
    "SQSServiceError",
    "SigV2Signer",
    "SigV2SigningProperties",
    "ValidationError",
    "flatten",
    "path_from_queue_url",
)
