# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""Serialization of structured operation input into flat Query API parameters.

The Query protocol has no nesting. Lists and structures are expressed through
positional key suffixes, for example a list of attribute structures becomes::

    Attribute.1.Name=VisibilityTimeout
    Attribute.1.Value=60
    Attribute.2.Name=DelaySeconds
    Attribute.2.Value=5

Indexes start at 1. The result of flattening is independent of the order in
which values were added, since the signer defines the final ordering.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from .exceptions import ValidationError

type ScalarValue = str | int | bool | None
type ParameterValue = (
    ScalarValue | Mapping[str, ParameterValue] | Sequence[ParameterValue]
)


def serialize_scalar(value: str | int | bool) -> str:
    """Render a scalar in its wire form."""
    match value:
        case bool():
            return "true" if value else "false"
        case int():
            return str(value)
        case str():
            return value
        case _:
            raise ValidationError(
                f"Unsupported parameter value of type {type(value).__name__}: "
                f"{value!r}"
            )


class QueryParameters(Mapping[str, str]):
    """Accumulates flat, wire-ready parameters for a single operation.

    Every key may only be written once. Writing a key twice is a caller error and
    raises :py:class:`ValidationError`, which also covers structured values that
    collide with a scalar after flattening.
    """

    def __init__(self, initial: Mapping[str, ScalarValue] | None = None) -> None:
        self._params: dict[str, str] = {}
        if initial is not None:
            for name, value in initial.items():
                self.add(name, value)

    def add(self, name: str, value: ScalarValue) -> QueryParameters:
        """Add a single scalar parameter. ``None`` values are skipped."""
        if value is None:
            return self
        if not name:
            raise ValidationError("Parameter names must be non-empty strings.")
        if name in self._params:
            raise ValidationError(f"Duplicate parameter after flattening: {name}")
        self._params[name] = serialize_scalar(value)
        return self

    def add_list(
        self, prefix: str, values: Sequence[ScalarValue] | None
    ) -> QueryParameters:
        """Add ``prefix.1``, ``prefix.2``, ... for each value."""
        if values is None:
            return self
        if isinstance(values, str):
            raise ValidationError(f"Expected a list of values for {prefix}, got a str.")
        for index, value in enumerate(values, start=1):
            self.add(f"{prefix}.{index}", value)
        return self

    def add_struct_list(
        self, prefix: str, items: Sequence[Mapping[str, ScalarValue]] | None
    ) -> QueryParameters:
        """Add ``prefix.N.Field`` for every member of every structure."""
        if items is None:
            return self
        for index, item in enumerate(items, start=1):
            for member, value in item.items():
                self.add(f"{prefix}.{index}.{member}", value)
        return self

    def add_map(
        self,
        prefix: str,
        mapping: Mapping[str, ScalarValue] | None,
        *,
        key_name: str = "Name",
        value_name: str = "Value",
    ) -> QueryParameters:
        """Add a map as a list of key/value structures.

        Entries are emitted in sorted key order so the positional indexes are
        deterministic.
        """
        if mapping is None:
            return self
        return self.add_struct_list(
            prefix,
            [{key_name: key, value_name: mapping[key]} for key in sorted(mapping)],
        )

    def update(self, other: Mapping[str, ScalarValue]) -> QueryParameters:
        for name, value in other.items():
            self.add(name, value)
        return self

    def to_dict(self) -> dict[str, str]:
        return dict(self._params)

    def __getitem__(self, key: str) -> str:
        return self._params[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __repr__(self) -> str:
        return f"QueryParameters({self._params!r})"


def flatten(value: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten an arbitrarily nested structure into dotted Query parameter keys.

    Mappings contribute their keys, sequences contribute 1-based indexes::

        >>> flatten({"QueueName": "q", "AttributeName": ["All"]})
        {'QueueName': 'q', 'AttributeName.1': 'All'}
    """
    params = QueryParameters()
    for key, item in _walk(value, prefix):
        params.add(key, item)
    return params.to_dict()


def _walk(value: Any, prefix: str) -> Iterator[tuple[str, ScalarValue]]:
    match value:
        case None | str() | int() | bool():
            if not prefix:
                raise ValidationError("Scalar values must be nested under a name.")
            yield prefix, value
        case bytes() | bytearray():
            raise ValidationError(
                f"Binary values must be decoded to text before flattening: {prefix}"
            )
        case Mapping():
            for key, item in value.items():
                if not isinstance(key, str) or not key:
                    raise ValidationError(
                        f"Parameter names must be non-empty strings, got {key!r}."
                    )
                yield from _walk(item, f"{prefix}.{key}" if prefix else key)
        case Sequence():
            for index, item in enumerate(value, start=1):
                if not prefix:
                    raise ValidationError("Lists must be nested under a name.")
                yield from _walk(item, f"{prefix}.{index}")
        case _:
            raise ValidationError(
                f"Unsupported parameter value of type {type(value).__name__}."
            )
