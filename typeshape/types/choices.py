"""
choices.py - kinds that accept a fixed set of values.

Public API
----------
Literal
    Exactly one ``bool`` / ``int`` / ``float`` / ``str`` / ``Enum`` member.
Enum
    One of several strings, or one of the members of a single
    :class:`enum.Enum` class.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional

from ..errors import SchemaError
from ..parameterized import Parameterized
from ..result import Ok
from ..utils import _json_safe, coerce_flag
from .base import Type, json_type
from .commons import check_inclusion, check_type, fail
from .scalars import Boolean, Float, Integer

__all__ = ["Literal", "Enum"]


def _plain_type(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, enum.Enum):
        return "atom"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    raise SchemaError(f"literal must be a bool, int, float, str or Enum member, got {value!r}")


@dataclass(frozen=True, kw_only=True)
class Literal(Type):
    value: Any = None

    OPTIONS = {"value": None}

    def _check_value(self, value):
        _plain_type(value)
        return value

    def _validate(self):
        if self.value is None:
            raise SchemaError("Literal requires a :value")

    def _inner(self) -> Type:
        plain = _plain_type(self.value)
        if plain == "boolean":
            return Boolean()
        if plain == "integer":
            return Integer()
        if plain == "float":
            return Float()
        return Enum.new(values=[self.value])

    def parse_type(self, value, options):
        plain = _plain_type(self.value)
        if coerce_flag(options) and _plain_kind(value) != plain:
            result = self._inner().parse_type(value, options)
            if not result.ok:
                return result
            value = result.value
        mismatch = check_type(value, plain)
        if mismatch is None and value != self.value:
            mismatch = fail("must be %{expected}, got %{actual}", expected=self.value, actual=value)
        return mismatch or Ok(value)

    def to_json_schema(self):
        return {**self._annotations(), "const": _json_safe(self.value)}


def _plain_kind(value: Any) -> Optional[str]:
    try:
        return _plain_type(value)
    except SchemaError:
        return None


@dataclass(frozen=True, kw_only=True)
class Enum(Type):
    values: Optional[Parameterized] = None

    OPTIONS = {"values": "must be %{expected}, got %{actual}"}

    def _check_values(self, values):
        if isinstance(values, type) and issubclass(values, enum.Enum):
            values = list(values)
        values = tuple(values)
        if not values:
            raise SchemaError("Enum :values must not be empty")
        if all(isinstance(v, str) and not isinstance(v, enum.Enum) for v in values):
            return values
        if all(isinstance(v, enum.Enum) for v in values) and len({type(v) for v in values}) == 1:
            return values
        raise SchemaError("Enum :values must be all strings or all members of one Enum class")

    def _validate(self):
        if self.values is None:
            raise SchemaError("Enum requires :values")

    @property
    def of_members(self) -> bool:
        return isinstance(self.values.value[0], enum.Enum)

    def parse_type(self, value, options):
        if coerce_flag(options):
            value = self._coerce(value)
        return check_inclusion(value, self.values) or Ok(value)

    def _coerce(self, value):
        allowed = self.values.value
        if self.of_members and isinstance(value, str) and not isinstance(value, enum.Enum):
            for member in allowed:
                if value in (str(member.value), member.name):
                    return member
        if not self.of_members and isinstance(value, enum.Enum):
            for text in (str(value.value), value.name):
                if text in allowed:
                    return text
        return value

    def to_json_schema(self):
        values = [_json_safe(v) for v in self.values.value]
        schema = self._annotations()
        if schema["examples"] is None:
            schema["examples"] = values[:1]
        if all(isinstance(v, str) for v in values):
            schema["type"] = json_type("string", self.required)
        schema["enum"] = values
        return schema
