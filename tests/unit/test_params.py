from typing import Any

import pytest
from aws_sqs_query import QueryParameters, ValidationError, flatten
from aws_sqs_query.params import serialize_scalar


@pytest.mark.parametrize(
    "value,expected",
    [
        ("abc", "abc"),
        ("", ""),
        (10, "10"),
        (-1, "-1"),
        (True, "true"),
        (False, "false"),
    ],
)
def test_serialize_scalar(value: str | int | bool, expected: str) -> None:
    assert serialize_scalar(value) == expected


def test_serialize_scalar_rejects_other_types() -> None:
    with pytest.raises(ValidationError):
        serialize_scalar(1.5)  # type: ignore[arg-type]


def test_add_scalars() -> None:
    params = (
        QueryParameters()
        .add("QueueName", "jobs")
        .add("MaxNumberOfMessages", 10)
        .add("Skipped", None)
    )
    assert params.to_dict() == {"QueueName": "jobs", "MaxNumberOfMessages": "10"}
    assert "Skipped" not in params
    assert len(params) == 2


def test_add_list() -> None:
    params = QueryParameters().add_list("AttributeName", ["All", "Policy"])
    assert params.to_dict() == {"AttributeName.1": "All", "AttributeName.2": "Policy"}


def test_add_list_rejects_strings() -> None:
    with pytest.raises(ValidationError):
        QueryParameters().add_list("AttributeName", "All")


def test_add_struct_list() -> None:
    params = QueryParameters().add_struct_list(
        "Entry",
        [{"Id": "a", "DelaySeconds": 5}, {"Id": "b", "DelaySeconds": 0}],
    )
    assert params.to_dict() == {
        "Entry.1.Id": "a",
        "Entry.1.DelaySeconds": "5",
        "Entry.2.Id": "b",
        "Entry.2.DelaySeconds": "0",
    }


def test_add_map_is_deterministic() -> None:
    first = QueryParameters().add_map(
        "Attribute", {"VisibilityTimeout": 60, "DelaySeconds": 5}
    )
    second = QueryParameters().add_map(
        "Attribute", {"DelaySeconds": 5, "VisibilityTimeout": 60}
    )
    assert first.to_dict() == second.to_dict() == {
        "Attribute.1.Name": "DelaySeconds",
        "Attribute.1.Value": "5",
        "Attribute.2.Name": "VisibilityTimeout",
        "Attribute.2.Value": "60",
    }


def test_add_map_custom_member_names() -> None:
    params = QueryParameters().add_map(
        "Tag", {"team": "core"}, key_name="Key", value_name="Value"
    )
    assert params.to_dict() == {"Tag.1.Key": "team", "Tag.1.Value": "core"}


def test_duplicate_key_raises() -> None:
    params = QueryParameters().add("Attribute.1.Name", "DelaySeconds")
    with pytest.raises(ValidationError):
        params.add_map("Attribute", {"VisibilityTimeout": 60})


def test_initial_values_and_update() -> None:
    params = QueryParameters({"QueueName": "jobs"}).update({"QueueNamePrefix": "j"})
    assert dict(params) == {"QueueName": "jobs", "QueueNamePrefix": "j"}
    with pytest.raises(ValidationError):
        params.update({"QueueName": "other"})


@pytest.mark.parametrize(
    "value,expected",
    [
        ({"QueueName": "q"}, {"QueueName": "q"}),
        (
            {"QueueName": "q", "AttributeName": ["All"]},
            {"QueueName": "q", "AttributeName.1": "All"},
        ),
        (
            {"Attribute": [{"Name": "DelaySeconds", "Value": 5}]},
            {"Attribute.1.Name": "DelaySeconds", "Attribute.1.Value": "5"},
        ),
        (
            {"Outer": {"Inner": [True, {"Deep": "x"}]}},
            {"Outer.Inner.1": "true", "Outer.Inner.2.Deep": "x"},
        ),
        ({"Skipped": None, "Kept": ""}, {"Kept": ""}),
    ],
)
def test_flatten(value: dict[str, Any], expected: dict[str, str]) -> None:
    assert flatten(value) == expected


def test_flatten_with_prefix() -> None:
    assert flatten({"Name": "a"}, prefix="Attribute.1") == {"Attribute.1.Name": "a"}


@pytest.mark.parametrize(
    "value",
    [
        {"Attribute.1": "x", "Attribute": ["y"]},
        {"A.B": "x", "A": {"B": "y"}},
    ],
)
def test_flatten_collisions(value: dict[str, Any]) -> None:
    with pytest.raises(ValidationError):
        flatten(value)


@pytest.mark.parametrize(
    "value",
    [
        {"Body": b"bytes"},
        {"Ratio": 0.5},
        {"": "empty name"},
        {1: "non-string name"},
    ],
)
def test_flatten_invalid_input(value: dict[Any, Any]) -> None:
    with pytest.raises(ValidationError):
        flatten(value)
