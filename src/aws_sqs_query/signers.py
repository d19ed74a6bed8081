# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import base64
import datetime
import hmac
import logging
from collections.abc import Mapping
from hashlib import sha256
from typing import Final, Required, TypedDict
from urllib.parse import quote

from ._http import Endpoint
from .exceptions import EncodingError, ValidationError
from .interfaces.identity import AWSCredentialsIdentity

logger: Final = logging.getLogger(__name__)

SIGV2_TIMESTAMP_FORMAT: str = "%Y-%m-%dT%H:%M:%SZ"
SIGNATURE_METHOD: str = "HmacSHA256"
SIGNATURE_VERSION: str = "2"
SIGNING_METHOD: str = "POST"

SIGNATURE_PARAM: str = "Signature"
SESSION_TOKEN_PARAM: str = "SecurityToken"


class SigV2SigningProperties(TypedDict, total=False):
    version: Required[str]
    date: str | datetime.datetime


class SigV2Signer:
    """Request signer for applying the AWS Signature Version 2 algorithm to Query
    API parameters.

    The signer holds no state. Every call reads the supplied credential snapshot
    once, so concurrent calls never observe a mismatched access key and secret key.
    """

    def sign(
        self,
        *,
        operation: str,
        params: Mapping[str, str | bytes | None],
        identity: AWSCredentialsIdentity,
        endpoint: Endpoint,
        properties: SigV2SigningProperties,
    ) -> str:
        """Produce a signed ``application/x-www-form-urlencoded`` body.

        :param operation: The API action name, for example ``SendMessage``.
        :param params: Flat, wire-ready parameters for the operation. ``None`` values
            are omitted.
        :param identity: A set of credentials representing an AWS Identity or role
            capacity.
        :param endpoint: Destination whose host, port and path are part of the
            signature.
        :param properties: SigV2SigningProperties defining the API version and,
            optionally, a fixed signing date.
        """
        self._validate_identity(identity=identity)
        # Snapshot the credential values before doing any work.
        access_key_id = identity.access_key_id
        secret_key = identity.secret_access_key
        session_token = identity.session_token
        self._validate(
            operation=operation, access_key_id=access_key_id, secret_key=secret_key
        )

        signed_params = self.signed_parameters(
            operation=operation,
            params=params,
            access_key_id=access_key_id,
            session_token=session_token,
            properties=properties,
        )
        canonical_query = self.canonical_query(params=signed_params)
        string_to_sign = self.string_to_sign(
            endpoint=endpoint, canonical_query=canonical_query
        )
        logger.debug(
            "Signing %s request for %s%s",
            operation,
            endpoint.signing_host,
            endpoint.path,
        )

        signed_params[SIGNATURE_PARAM] = self._signature(
            string_to_sign=string_to_sign, secret_key=secret_key
        )
        return self.canonical_query(params=signed_params)

    def signed_parameters(
        self,
        *,
        operation: str,
        params: Mapping[str, str | bytes | None],
        access_key_id: str,
        session_token: str | None,
        properties: SigV2SigningProperties,
    ) -> dict[str, str]:
        """Merge the caller parameters with the fixed authentication parameters.

        A caller parameter may repeat a fixed parameter only with the same value.
        """
        version = properties.get("version")
        if not version:
            raise ValidationError("A Query API version is required for signing.")

        fixed = {
            "Action": operation,
            "Version": version,
            "Timestamp": self._timestamp(properties=properties),
            "AWSAccessKeyId": access_key_id,
            "SignatureMethod": SIGNATURE_METHOD,
            "SignatureVersion": SIGNATURE_VERSION,
        }
        if session_token:
            fixed[SESSION_TOKEN_PARAM] = session_token

        merged: dict[str, str] = {}
        for key, value in params.items():
            if value is None:
                continue
            if not isinstance(key, str) or not key:
                raise ValidationError(f"Invalid parameter name: {key!r}")
            if key == SIGNATURE_PARAM:
                raise ValidationError(f"{SIGNATURE_PARAM} is computed by the signer.")
            self._to_text("parameter name", key)
            merged[key] = self._to_text(key, value)

        for key, value in fixed.items():
            existing = merged.get(key)
            if existing is not None and existing != value:
                raise ValidationError(
                    f"Parameter {key} collides with a signing parameter: "
                    f"{existing!r} != {value!r}"
                )
            merged[key] = value
        return merged

    def canonical_query(self, *, params: Mapping[str, str]) -> str:
        """Encode parameters as ``key=value`` pairs joined by ``&`` in ascending
        byte order of their keys."""
        ordered = sorted(params.items(), key=lambda item: item[0].encode("utf-8"))
        return "&".join(f"{_encode(key)}={_encode(value)}" for key, value in ordered)

    def string_to_sign(self, *, endpoint: Endpoint, canonical_query: str) -> str:
        """The SigV2 string to sign is defined as:
            <HTTPMethod>\n
            <lower-cased host[:non-default port]>\n
            <path>\n
            <CanonicalQueryString>
        """
        return (
            f"{SIGNING_METHOD}\n"
            f"{endpoint.signing_host}\n"
            f"{endpoint.path or '/'}\n"
            f"{canonical_query}"
        )

    def _signature(self, *, string_to_sign: str, secret_key: str) -> str:
        digest = hmac.new(
            key=secret_key.encode("utf-8"),
            msg=string_to_sign.encode("utf-8"),
            digestmod=sha256,
        ).digest()
        return base64.b64encode(digest).decode("ascii")

    def _validate_identity(self, *, identity: AWSCredentialsIdentity) -> None:
        """Perform runtime and expiration checks before attempting signing."""
        if not isinstance(identity, AWSCredentialsIdentity):  # pyright: ignore
            raise ValidationError(
                "Received unexpected value for identity parameter. Expected "
                f"AWSCredentialIdentity but received {type(identity)}."
            )
        if identity.is_expired:
            raise ValidationError(
                f"Provided identity expired at {identity.expiration}. Please "
                "refresh the credentials or update the expiration parameter."
            )

    def _validate(
        self, *, operation: str, access_key_id: str, secret_key: str
    ) -> None:
        if not operation:
            raise ValidationError("An operation name is required for signing.")
        if not access_key_id:
            raise ValidationError("An access key id is required for signing.")
        if not secret_key:
            raise ValidationError("A secret access key is required for signing.")

    def _timestamp(self, *, properties: SigV2SigningProperties) -> str:
        date = properties.get("date")
        if date is None:
            date = datetime.datetime.now(datetime.UTC)
        if isinstance(date, datetime.datetime):
            if date.tzinfo is not None:
                date = date.astimezone(datetime.UTC)
            return date.strftime(SIGV2_TIMESTAMP_FORMAT)
        try:
            datetime.datetime.strptime(date, SIGV2_TIMESTAMP_FORMAT)
        except (TypeError, ValueError) as e:
            raise ValidationError(
                f"Signing date {date!r} does not match {SIGV2_TIMESTAMP_FORMAT}."
            ) from e
        return date

    def _to_text(self, key: str, value: str | bytes) -> str:
        match value:
            case str():
                try:
                    value.encode("utf-8")
                except UnicodeEncodeError as e:
                    raise EncodingError(
                        f"Value of {key} cannot be encoded as UTF-8."
                    ) from e
                return value
            case bytes():
                try:
                    return value.decode("utf-8")
                except UnicodeDecodeError as e:
                    raise EncodingError(
                        f"Value of {key} is not a valid UTF-8 byte sequence."
                    ) from e
            case _:
                raise ValidationError(
                    f"Value of {key} must be a wire-ready string, "
                    f"got {type(value).__name__}."
                )


def _encode(value: str) -> str:
    # RFC 3986: only unreserved characters are left unescaped.
    try:
        return quote(value, safe="")
    except UnicodeEncodeError as e:
        raise EncodingError(f"Cannot encode {value!r} for transport.") from e
