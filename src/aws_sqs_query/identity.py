#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
import os
from collections.abc import Mapping, Sequence
from typing import Any, Final

from ._identity import AWSCredentialIdentity, AWSIdentityProperties
from .exceptions import IdentityError
from .interfaces.identity import Identity, IdentityResolver

logger: Final = logging.getLogger(__name__)

type AWSCredentialsResolver = IdentityResolver[
    AWSCredentialIdentity, AWSIdentityProperties
]


class CachingIdentityResolver[I: Identity, IP: Mapping[str, Any]](
    IdentityResolver[I, IP]
):
    """Hands out the same snapshot until it expires, then resolves a new one."""

    def __init__(self) -> None:
        self._cached: I | None = None

    async def get_identity(self, *, properties: IP) -> I:
        if self._cached is None or self._cached.is_expired:
            self._cached = await self._get_identity(properties=properties)
        return self._cached

    async def _get_identity(self, *, properties: IP) -> I:
        raise NotImplementedError


class ChainedIdentityResolver[I: Identity, IP: Mapping[str, Any]](
    CachingIdentityResolver[I, IP]
):
    """Attempts to resolve an identity by checking a sequence of sub-resolvers.

    If a nested resolver raises a :py:class:`IdentityError`, the next resolver in
    the chain will be attempted.
    """

    def __init__(self, resolvers: Sequence[IdentityResolver[I, IP]]) -> None:
        """Construct a ChainedIdentityResolver.

        :param resolvers: The sequence of resolvers to resolve identity from.
        """
        super().__init__()
        self._resolvers = resolvers

    async def _get_identity(self, *, properties: IP) -> I:
        logger.debug("Attempting to resolve identity from resolver chain.")
        for resolver in self._resolvers:
            try:
                logger.debug("Attempting to resolve identity from %s.", type(resolver))
                return await resolver.get_identity(properties=properties)
            except IdentityError as e:
                logger.debug(
                    "Failed to resolve identity from %s: %s", type(resolver), e
                )

        raise IdentityError("Failed to resolve identity from resolver chain.")


class StaticCredentialsResolver(
    IdentityResolver[AWSCredentialIdentity, AWSIdentityProperties]
):
    """Resolve static AWS credentials from the resolver properties."""

    async def get_identity(
        self, *, properties: AWSIdentityProperties
    ) -> AWSCredentialIdentity:
        access_key_id = properties.get("access_key_id")
        secret_access_key = properties.get("secret_access_key")
        if access_key_id and secret_access_key:
            return AWSCredentialIdentity(
                access_key_id=access_key_id,
                secret_access_key=secret_access_key,
                session_token=properties.get("session_token"),
            )
        raise IdentityError(
            "Attempted to resolve AWS credentials from config, but credentials "
            "weren't configured."
        )


class EnvironmentCredentialsResolver(
    IdentityResolver[AWSCredentialIdentity, AWSIdentityProperties]
):
    """Resolves AWS Credentials from system environment variables."""

    def __init__(self, environ: Mapping[str, str] | None = None):
        self._environ = environ
        self._credentials: AWSCredentialIdentity | None = None

    async def get_identity(
        self, *, properties: AWSIdentityProperties
    ) -> AWSCredentialIdentity:
        if self._credentials is not None:
            return self._credentials

        environ = os.environ if self._environ is None else self._environ
        access_key_id = environ.get("AWS_ACCESS_KEY_ID")
        secret_access_key = environ.get("AWS_SECRET_ACCESS_KEY")
        session_token = environ.get("AWS_SESSION_TOKEN")

        if not access_key_id or not secret_access_key:
            raise IdentityError(
                "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY are required"
            )

        self._credentials = AWSCredentialIdentity(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token or None,
        )
        return self._credentials


def create_default_chain() -> AWSCredentialsResolver:
    """Creates the default credential provider chain."""
    return ChainedIdentityResolver[AWSCredentialIdentity, AWSIdentityProperties](
        resolvers=(
            StaticCredentialsResolver(),
            EnvironmentCredentialsResolver(),
        )
    )
