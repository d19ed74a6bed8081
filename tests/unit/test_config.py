#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import Awaitable, Callable, Mapping

import pytest
from aws_sqs_query import Endpoint, SQSClientConfig
from aws_sqs_query.config import (
    DEFAULT_API_VERSION,
    DEFAULT_REGION,
    SOURCE_CONSTRUCTOR,
    SOURCE_DEFAULT,
    SOURCE_ENVIRONMENT,
    SOURCE_IN_CODE_UPDATE,
)
from aws_sqs_query.identity import StaticCredentialsResolver


def loader(values: Mapping[str, str]) -> Callable[[], Awaitable[Mapping[str, str]]]:
    async def load() -> Mapping[str, str]:
        return values

    return load


class TestSQSClientConfig:
    @pytest.mark.asyncio
    async def test_resolve_with_defaults(self):
        config = SQSClientConfig()
        await config.resolve(environment_loader=loader({}))
        assert config.is_resolved
        assert config.region == DEFAULT_REGION
        assert config.api_version == DEFAULT_API_VERSION
        assert config.endpoint_uri is None
        assert config.aws_access_key_id is None
        assert config.http_client is None
        assert config.get_config_value_object("region").source == SOURCE_DEFAULT

    @pytest.mark.asyncio
    async def test_constructor_values_win(self):
        config = SQSClientConfig(region="eu-west-1", aws_access_key_id="AKID")
        await config.resolve(
            environment_loader=loader(
                {"AWS_REGION": "us-west-2", "AWS_ACCESS_KEY_ID": "ENVAKID"}
            )
        )
        assert config.region == "eu-west-1"
        assert config.aws_access_key_id == "AKID"
        assert config.get_config_value_object("region").source == SOURCE_CONSTRUCTOR

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field_name,env_var,value",
        [
            ("region", "AWS_REGION", "us-west-2"),
            ("region", "AWS_DEFAULT_REGION", "sa-east-1"),
            ("endpoint_uri", "AWS_ENDPOINT_URL_SQS", "http://localhost:9324"),
            ("endpoint_uri", "AWS_ENDPOINT_URL", "http://localhost:4566"),
            ("aws_access_key_id", "AWS_ACCESS_KEY_ID", "ENVAKID"),
            ("aws_secret_access_key", "AWS_SECRET_ACCESS_KEY", "ENVSECRET"),
            ("aws_session_token", "AWS_SESSION_TOKEN", "ENVTOKEN"),
        ],
    )
    async def test_environment_values(self, field_name: str, env_var: str, value: str):
        config = SQSClientConfig()
        await config.resolve(environment_loader=loader({env_var: value}))
        assert getattr(config, field_name) == value
        source = config.get_config_value_object(field_name).source
        assert source == SOURCE_ENVIRONMENT

    @pytest.mark.asyncio
    async def test_environment_variable_order(self):
        config = SQSClientConfig()
        await config.resolve(
            environment_loader=loader(
                {"AWS_REGION": "us-west-1", "AWS_DEFAULT_REGION": "us-west-2"}
            )
        )
        assert config.region == "us-west-1"

    @pytest.mark.asyncio
    async def test_empty_environment_values_are_ignored(self):
        config = SQSClientConfig()
        await config.resolve(environment_loader=loader({"AWS_REGION": ""}))
        assert config.region == DEFAULT_REGION
        assert config.get_config_value_object("region").source == SOURCE_DEFAULT

    @pytest.mark.asyncio
    async def test_explicit_none_is_a_constructor_value(self):
        config = SQSClientConfig(aws_access_key_id=None)
        await config.resolve(
            environment_loader=loader({"AWS_ACCESS_KEY_ID": "ENVAKID"})
        )
        assert config.aws_access_key_id is None
        source = config.get_config_value_object("aws_access_key_id").source
        assert source == SOURCE_CONSTRUCTOR

    @pytest.mark.asyncio
    async def test_resolve_reads_os_environ(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("AWS_REGION", "ap-northeast-1")
        config = SQSClientConfig()
        await config.resolve()
        assert config.region == "ap-northeast-1"

    @pytest.mark.asyncio
    async def test_resolve_twice_raises(self):
        config = SQSClientConfig()
        await config.resolve(environment_loader=loader({}))
        with pytest.raises(RuntimeError):
            await config.resolve(environment_loader=loader({}))

    def test_access_before_resolve_raises(self):
        config = SQSClientConfig(region="us-east-1")
        assert not config.is_resolved
        with pytest.raises(RuntimeError):
            _ = config.region

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"region": ""},
            {"region": 1},
            {"api_version": None},
            {"aws_access_key_id": 123},
            {"endpoint_uri": 8080},
        ],
    )
    async def test_invalid_values(self, kwargs: dict[str, object]):
        config = SQSClientConfig(**kwargs)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            await config.resolve(environment_loader=loader({}))

    @pytest.mark.asyncio
    async def test_setters_record_in_code_updates(self):
        config = SQSClientConfig()
        await config.resolve(environment_loader=loader({}))
        config.region = "us-west-2"
        assert config.region == "us-west-2"
        source = config.get_config_value_object("region").source
        assert source == SOURCE_IN_CODE_UPDATE

    @pytest.mark.asyncio
    async def test_regional_endpoint(self):
        config = SQSClientConfig(region="eu-west-1")
        await config.resolve(environment_loader=loader({}))
        assert config.endpoint == Endpoint(
            host="sqs.eu-west-1.amazonaws.com", scheme="https", port=443
        )

    @pytest.mark.asyncio
    async def test_endpoint_from_url(self):
        config = SQSClientConfig(endpoint_uri="http://localhost:9324")
        await config.resolve(environment_loader=loader({}))
        assert config.endpoint == Endpoint(
            host="localhost", scheme="http", port=9324, path="/"
        )

    @pytest.mark.asyncio
    async def test_endpoint_object(self):
        endpoint = Endpoint(host="queue.example.com")
        config = SQSClientConfig(endpoint_uri=endpoint)
        await config.resolve(environment_loader=loader({}))
        assert config.endpoint is endpoint

    @pytest.mark.asyncio
    async def test_identity_properties(self):
        resolver = StaticCredentialsResolver()
        config = SQSClientConfig(
            aws_access_key_id="AKID",
            aws_secret_access_key="SECRET",
            aws_credentials_identity_resolver=resolver,
        )
        await config.resolve(environment_loader=loader({}))
        assert config.identity_properties == {
            "access_key_id": "AKID",
            "secret_access_key": "SECRET",
            "session_token": None,
        }
        assert config.aws_credentials_identity_resolver is resolver
