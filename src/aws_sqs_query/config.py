#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import os
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, ClassVar, Literal

from ._http import Endpoint
from ._identity import AWSCredentialIdentity, AWSIdentityProperties
from .interfaces.http import HTTPClient
from .interfaces.identity import IdentityResolver

DEFAULT_REGION = "us-east-1"
DEFAULT_API_VERSION = "2009-02-01"

SOURCE_CONSTRUCTOR = "constructor"
SOURCE_ENVIRONMENT = "environment"
SOURCE_DEFAULT = "default"
SOURCE_IN_CODE_UPDATE = "in_code_update"

SourceType = Literal["constructor", "environment", "default", "in_code_update"]


class ConfigValue:
    """Configuration value with metadata about its source"""

    def __init__(self, value: Any, source: SourceType):
        self.value = value
        self.source = source


class SQSClientConfig:
    """Queue client configuration with precedence-based resolution.

    Values are taken from, in order: constructor arguments, environment variables,
    defaults. The sentinel value (...) distinguishes "not provided" from
    "explicitly set to None".

    HOW TO ADD A NEW CONFIG FIELD:

    1. Add the parameter to the __init__ method with sentinel default.
    2. Add the field to CONFIG_FIELDS with its "default", optional "env_var" (a
       name or a tuple of names checked in order) and optional "validator".
    3. Add property getter and setter.
    """

    CONFIG_FIELDS: ClassVar[dict[str, dict[str, Any]]] = {
        "region": {
            "env_var": ("AWS_REGION", "AWS_DEFAULT_REGION"),
            "default": DEFAULT_REGION,
            "validator": "_validate_string",
        },
        "endpoint_uri": {
            "env_var": ("AWS_ENDPOINT_URL_SQS", "AWS_ENDPOINT_URL"),
            "default": None,
            "validator": "_validate_endpoint_uri",
        },
        "api_version": {
            "default": DEFAULT_API_VERSION,
            "validator": "_validate_string",
        },
        "aws_access_key_id": {
            "env_var": "AWS_ACCESS_KEY_ID",
            "default": None,
            "validator": "_validate_optional_string",
        },
        "aws_secret_access_key": {
            "env_var": "AWS_SECRET_ACCESS_KEY",
            "default": None,
            "validator": "_validate_optional_string",
        },
        "aws_session_token": {
            "env_var": "AWS_SESSION_TOKEN",
            "default": None,
            "validator": "_validate_optional_string",
        },
        "aws_credentials_identity_resolver": {"default": None},
        "http_client": {"default": None},
    }

    def __init__(
        self,
        *,
        region: str = ...,  # type: ignore[assignment]
        endpoint_uri: str | Endpoint | None = ...,  # type: ignore[assignment]
        api_version: str = ...,  # type: ignore[assignment]
        aws_access_key_id: str | None = ...,  # type: ignore[assignment]
        aws_secret_access_key: str | None = ...,  # type: ignore[assignment]
        aws_session_token: str | None = ...,  # type: ignore[assignment]
        aws_credentials_identity_resolver: IdentityResolver[
            AWSCredentialIdentity, AWSIdentityProperties
        ]
        | None = ...,  # type: ignore[assignment]
        http_client: HTTPClient | None = ...,  # type: ignore[assignment]
    ):
        self._constructor_values = {
            k: v for k, v in locals().items() if k != "self" and v is not ...
        }
        self._resolved = False

    async def resolve(
        self,
        *,
        environment_loader: Callable[[], Awaitable[Mapping[str, str]]] | None = None,
    ) -> None:
        """Resolve configuration from all sources

        Args:
            environment_loader: Custom environment loader function
        """
        if self._resolved:
            raise RuntimeError(
                "Config has already been resolved. Multiple calls to resolve() are "
                "not allowed."
            )

        env_values = await (environment_loader or self._load_environment_values)()
        for field_name, field_info in self.CONFIG_FIELDS.items():
            setattr(
                self,
                f"_{field_name}",
                self._resolve_field(field_name, field_info, env_values),
            )
        self._resolved = True

    @property
    def is_resolved(self) -> bool:
        return self._resolved

    async def _load_environment_values(self) -> Mapping[str, str]:
        return os.environ

    def _resolve_field(
        self,
        field_name: str,
        field_info: dict[str, Any],
        env_values: Mapping[str, str],
    ) -> ConfigValue:
        env_vars = field_info.get("env_var") or ()
        if isinstance(env_vars, str):
            env_vars = (env_vars,)

        if field_name in self._constructor_values:
            value = self._constructor_values[field_name]
            source: SourceType = SOURCE_CONSTRUCTOR
        else:
            value, source = field_info["default"], SOURCE_DEFAULT
            for env_var in env_vars:
                if env_values.get(env_var):
                    value, source = env_values[env_var], SOURCE_ENVIRONMENT
                    break

        if validator := field_info.get("validator"):
            getattr(self, validator)(value, field_name)
        return ConfigValue(value, source)

    def _validate_string(self, value: Any, field_name: str) -> None:
        if not isinstance(value, str) or not value:
            raise TypeError(f"{field_name} must be a non-empty str")

    def _validate_optional_string(self, value: Any, field_name: str) -> None:
        if value is not None and not isinstance(value, str):
            raise TypeError(f"{field_name} must be str or None")

    def _validate_endpoint_uri(self, value: Any, field_name: str) -> None:
        if value is not None and not isinstance(value, str | Endpoint):
            raise TypeError(f"{field_name} must be a string or Endpoint")

    def get_config_value_object(self, field_name: str) -> ConfigValue:
        """Get the raw ConfigValue object for a field"""
        if not self._resolved:
            raise RuntimeError("Config must be resolved before accessing values")
        return getattr(self, f"_{field_name}")

    @property
    def endpoint(self) -> Endpoint:
        """The endpoint requests are sent to, derived from the region by default."""
        uri = self.endpoint_uri
        if uri is None:
            return Endpoint.for_region(self.region)
        if isinstance(uri, Endpoint):
            return uri
        return Endpoint.from_url(uri)

    @property
    def identity_properties(self) -> AWSIdentityProperties:
        return AWSIdentityProperties(
            access_key_id=self.aws_access_key_id,
            secret_access_key=self.aws_secret_access_key,
            session_token=self.aws_session_token,
        )

    @property
    def region(self) -> str:
        return self.get_config_value_object("region").value

    @region.setter
    def region(self, value: str) -> None:
        self._region = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def endpoint_uri(self) -> str | Endpoint | None:
        return self.get_config_value_object("endpoint_uri").value

    @endpoint_uri.setter
    def endpoint_uri(self, value: str | Endpoint | None) -> None:
        self._endpoint_uri = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def api_version(self) -> str:
        return self.get_config_value_object("api_version").value

    @api_version.setter
    def api_version(self, value: str) -> None:
        self._api_version = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def aws_access_key_id(self) -> str | None:
        return self.get_config_value_object("aws_access_key_id").value

    @aws_access_key_id.setter
    def aws_access_key_id(self, value: str | None) -> None:
        self._aws_access_key_id = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def aws_secret_access_key(self) -> str | None:
        return self.get_config_value_object("aws_secret_access_key").value

    @aws_secret_access_key.setter
    def aws_secret_access_key(self, value: str | None) -> None:
        self._aws_secret_access_key = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def aws_session_token(self) -> str | None:
        return self.get_config_value_object("aws_session_token").value

    @aws_session_token.setter
    def aws_session_token(self, value: str | None) -> None:
        self._aws_session_token = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def aws_credentials_identity_resolver(
        self,
    ) -> IdentityResolver[AWSCredentialIdentity, AWSIdentityProperties] | None:
        return self.get_config_value_object("aws_credentials_identity_resolver").value

    @aws_credentials_identity_resolver.setter
    def aws_credentials_identity_resolver(
        self,
        value: IdentityResolver[AWSCredentialIdentity, AWSIdentityProperties] | None,
    ) -> None:
        self._aws_credentials_identity_resolver = ConfigValue(
            value, SOURCE_IN_CODE_UPDATE
        )

    @property
    def http_client(self) -> HTTPClient | None:
        return self.get_config_value_object("http_client").value

    @http_client.setter
    def http_client(self, value: HTTPClient | None) -> None:
        self._http_client = ConfigValue(value, SOURCE_IN_CODE_UPDATE)
