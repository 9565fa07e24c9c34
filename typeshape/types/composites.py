"""
composites.py - kinds that own child descriptors.

Public API
----------
Mapping
    Fixed ``shape`` of named fields; ``mode="strip"`` ignores unknown
    input keys, ``mode="strict"`` reports each as ``"unknown field"``.
Struct
    A strict mapping whose output is an instance of a ``dataclass``.
Record
    Arbitrary keys validated by ``keys``, every value by ``values``.
List
    Homogeneous items with optional item-count bounds.
Tuple
    Fixed positional ``shape``.
Branded
    Wraps another descriptor's output as ``(brand, value)``.

Every composite except :class:`Branded` goes through
:class:`~typeshape.aggregate.Aggregate`: all children are parsed, their
issues collected, and a partially valid input yields an ``ErrPartial``.
"""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass, field
from typing import Any, Mapping as _Mapping, Optional

from ..aggregate import Aggregate, parse_child
from ..context import Context
from ..errors import SchemaError
from ..issue import issue
from ..parameterized import Parameterized
from ..result import Ok
from ..utils import _json_safe, canonical_key, coerce_flag, lookup
from .base import Type, is_type, json_type
from .commons import check_length, check_type, fail, require_choice, require_int
from .scalars import String

__all__ = ["Mapping", "Struct", "Record", "List", "Tuple", "Branded"]


def _require_type(kind: str, option: str, value: Any) -> Type:
    if not is_type(value):
        raise SchemaError(f"{kind} option :{option} must be a descriptor, got {value!r}")
    return value


def _require_shape(kind: str, shape: Any) -> dict:
    if not isinstance(shape, _Mapping):
        raise SchemaError(f"{kind} option :shape must be a mapping of field -> descriptor, got {shape!r}")
    for key, value in shape.items():
        _require_type(kind, f"shape[{key!r}]", value)
    return dict(shape)


def _properties(shape: _Mapping[Any, Type]) -> dict[str, Any]:
    from ..validator import json_schema

    return {canonical_key(k): json_schema(t) for k, t in shape.items()}


# --------------------------------------------------------------------------- #
# Mapping / Struct / Record                                                   #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True, kw_only=True)
class Mapping(Type):
    shape: dict = field(default_factory=dict)
    mode: str = "strip"

    OPTIONS = {"shape": None, "mode": None}

    def _check_shape(self, value):
        return _require_shape("Mapping", value)

    def _check_mode(self, value):
        return require_choice("Mapping", "mode", value, ("strip", "strict"))

    def parse_type(self, value, options):
        mismatch = check_type(value, "map")
        if mismatch:
            return mismatch

        agg = Aggregate(options)
        for key, child in self.shape.items():
            agg.visit(key, child, lookup(value, key))

        if self.mode == "strict":
            known = {canonical_key(k) for k in self.shape}
            agg.add_issues(
                issue((key,), "unknown field") for key in value if canonical_key(key) not in known
            )
        return agg.settle(dict)

    def to_json_schema(self):
        return {
            **self._annotations(),
            "type": json_type("object", self.required),
            "properties": _properties(self.shape),
            "required": [canonical_key(k) for k, t in self.shape.items() if t.required],
            "additionalProperties": self.mode == "strip",
        }


@dataclass(frozen=True, kw_only=True)
class Struct(Type):
    cls: Optional[type] = None
    shape: dict = field(default_factory=dict)

    OPTIONS = {"cls": None, "shape": None}

    def _check_cls(self, value):
        if not (isinstance(value, type) and dataclasses.is_dataclass(value)):
            raise SchemaError(f"Struct option :cls must be a dataclass, got {value!r}")
        return value

    def _check_shape(self, value):
        shape = _require_shape("Struct", value)
        if not all(isinstance(k, str) for k in shape):
            raise SchemaError("Struct :shape keys must be field names")
        return shape

    def _validate(self):
        if self.cls is None:
            raise SchemaError("Struct requires :cls")
        names = {f.name for f in dataclasses.fields(self.cls)}
        unknown = sorted(set(self.shape) - names)
        if unknown:
            raise SchemaError(f"Struct :shape names fields {unknown} that {self.cls.__name__} does not define")
        missing = sorted(
            f.name for f in dataclasses.fields(self.cls)
            if f.name not in self.shape
            and f.default is dataclasses.MISSING
            and f.default_factory is dataclasses.MISSING
        )
        if missing:
            raise SchemaError(f"Struct :shape is missing required fields {missing} of {self.cls.__name__}")

    def _as_mapping(self) -> Mapping:
        return Mapping(shape=self.shape, mode="strict")

    def parse_type(self, value, options):
        if isinstance(value, self.cls):
            value = {name: getattr(value, name) for name in self.shape}
        result = self._as_mapping().parse_type(value, options)
        if isinstance(result, Ok):
            return Ok(self.cls(**result.value))
        return result

    def to_json_schema(self):
        return {**self._as_mapping().to_json_schema(), **self._annotations(), "type": json_type("object", self.required)}


@dataclass(frozen=True, kw_only=True)
class Record(Type):
    keys: Type = field(default_factory=lambda: String.new(trim=True, min=1))
    values: Optional[Type] = None

    OPTIONS = {"keys": None, "values": None}

    def _check_keys(self, value):
        return _require_type("Record", "keys", value)

    def _check_values(self, value):
        return _require_type("Record", "values", value)

    def _validate(self):
        if self.values is None:
            raise SchemaError("Record requires :values")

    def parse_type(self, value, options):
        mismatch = check_type(value, "map")
        if mismatch:
            return mismatch

        agg = Aggregate(options)
        for key, item in value.items():
            parsed_key = parse_child(self.keys, key, (key,), options)
            if not parsed_key.ok:
                agg.add_issues(parsed_key.issues)
                continue
            agg.visit(parsed_key.value, self.values, item)
        return agg.settle(dict)

    def to_json_schema(self):
        from ..validator import json_schema

        return {
            **self._annotations(),
            "type": json_type("object", self.required),
            "properties": {},
            "required": [],
            "additionalProperties": json_schema(self.values),
        }


# --------------------------------------------------------------------------- #
# List / Tuple                                                                #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True, kw_only=True)
class List(Type):
    inner: Optional[Type] = None
    length: Optional[Parameterized] = None
    min: Optional[Parameterized] = None
    max: Optional[Parameterized] = None

    OPTIONS = {
        "inner": None,
        "length": "must have %{expected} items, got %{actual}",
        "min": "must have at least %{expected} items, got %{actual}",
        "max": "must have at most %{expected} items, got %{actual}",
    }

    def _check_inner(self, value):
        return _require_type("List", "inner", value)

    def _check_length(self, value):
        return require_int("List", "length", value, 1)

    def _check_min(self, value):
        return require_int("List", "min", value, 0)

    def _check_max(self, value):
        return require_int("List", "max", value, 0)

    def _validate(self):
        if self.inner is None:
            raise SchemaError("List requires an :inner descriptor")

    def parse_type(self, value, options):
        mismatch = check_type(value, "list") or check_length(value, is_=self.length, min=self.min, max=self.max)
        if mismatch:
            return mismatch

        agg = Aggregate(options)
        for index, item in enumerate(value):
            agg.visit(index, self.inner, item)
        return agg.settle(lambda parsed: [v for _, v in parsed])

    def to_json_schema(self):
        from ..validator import json_schema

        low, high = (self.min, self.max) if self.length is None else (self.length, self.length)
        return {
            **self._annotations(),
            "type": json_type("array", self.required),
            "items": json_schema(self.inner),
            "minItems": None if low is None else low.value,
            "maxItems": None if high is None else high.value,
        }


@dataclass(frozen=True, kw_only=True)
class Tuple(Type):
    shape: tuple = ()

    OPTIONS = {"shape": None}

    def _check_shape(self, value):
        value = tuple(value)
        if not value:
            raise SchemaError("Tuple :shape must not be empty")
        for index, child in enumerate(value):
            _require_type("Tuple", f"shape[{index}]", child)
        return value

    def parse_type(self, value, options):
        if coerce_flag(options) and isinstance(value, list):
            value = tuple(value)
        mismatch = check_type(value, "tuple")
        if mismatch:
            return mismatch
        if len(value) != len(self.shape):
            return fail(
                "expected a tuple with %{expected} elements, got %{actual}",
                expected=len(self.shape),
                actual=len(value),
            )

        agg = Aggregate(options)
        for index, (item, child) in enumerate(zip(value, self.shape)):
            agg.visit(index, child, item)
        return agg.settle(lambda parsed: tuple(v for _, v in parsed))

    def to_json_schema(self):
        from ..validator import json_schema

        return {
            **self._annotations(),
            "type": json_type("array", self.required),
            "prefixItems": [json_schema(t) for t in self.shape],
            "items": False,
            "minItems": len(self.shape),
            "maxItems": len(self.shape),
        }


# --------------------------------------------------------------------------- #
# Branded                                                                     #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True, kw_only=True)
class Branded(Type):
    brand: Any = None
    inner: Optional[Type] = None

    OPTIONS = {"brand": None, "inner": None}

    def _check_brand(self, value):
        if not isinstance(value, (str, enum.Enum)):
            raise SchemaError(f"Branded option :brand must be a string or Enum member, got {value!r}")
        return value

    def _check_inner(self, value):
        return _require_type("Branded", "inner", value)

    def _validate(self):
        if self.brand is None or self.inner is None:
            raise SchemaError("Branded requires :brand and :inner")

    def parse_type(self, value, options):
        result = Context.new(self.inner, value, options).parse().unwrap()
        if result.ok:
            return Ok((self.brand, result.value))
        return result

    def to_json_schema(self):
        from ..validator import json_schema

        examples = None
        if self.example is not None:
            examples = [_json_safe(self.example)]
        elif self.inner.example is not None:
            examples = [[_json_safe(self.brand), _json_safe(self.inner.example)]]
        return {
            **self._annotations(),
            "examples": examples,
            "type": json_type("array", self.required),
            "prefixItems": [{"const": _json_safe(self.brand)}, json_schema(self.inner)],
            "items": False,
            "minItems": 2,
            "maxItems": 2,
        }
