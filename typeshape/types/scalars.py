"""
scalars.py - single-value kinds: any, boolean, strings and numbers.

Public API
----------
Any, Boolean, String, Numeric, Integer, Float, Number, Decimal

With ``coerce`` enabled each kind first tries to convert the incoming
value into its native Python type (e.g. ``"42"`` -> ``42`` for
:class:`Integer`); values it has no conversion for fall through to the
ordinary type check and fail there.
"""

from __future__ import annotations

import decimal
import math
import re
from dataclasses import dataclass
from typing import Any as _Any, Optional

from ..errors import SchemaError
from ..issue import Disjunction, Escaped
from ..parameterized import Parameterized
from ..result import Ok
from ..utils import coerce_flag, parse_float, parse_integer, round_half_away
from .base import Type, json_type
from .commons import (
    check_length,
    check_number,
    check_regex,
    check_type,
    fail,
    is_int,
    require_int,
    require_number,
)

__all__ = ["Any", "Boolean", "String", "Numeric", "Integer", "Float", "Number", "Decimal"]


@dataclass(frozen=True, kw_only=True)
class Any(Type):
    """Accepts every non-null value unchanged."""

    def parse_type(self, value, options):
        return Ok(value)

    def to_json_schema(self):
        return self._annotations()


# --------------------------------------------------------------------------- #
# Boolean                                                                     #
# --------------------------------------------------------------------------- #

_TRUTHY = ("true", "enabled", "on", "yes")
_FALSY = ("false", "disabled", "off", "no")


@dataclass(frozen=True, kw_only=True)
class Boolean(Type):

    def parse_type(self, value, options):
        if coerce_flag(options) and not isinstance(value, bool):
            if is_int(value) and value in (0, 1):
                value = bool(value)
            elif isinstance(value, str):
                text = value.lower()
                if text not in _TRUTHY + _FALSY:
                    return fail(
                        "expected a boolean-like string (%{expected}), got %{actual}",
                        expected=Disjunction(list(_TRUTHY + _FALSY)),
                        actual=text,
                    )
                value = text in _TRUTHY
        return check_type(value, "boolean") or Ok(value)

    def to_json_schema(self):
        return {**self._annotations(), "type": json_type("boolean", self.required)}


# --------------------------------------------------------------------------- #
# Strings                                                                     #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True, kw_only=True)
class String(Type):
    trim: bool = False
    length: Optional[Parameterized] = None
    min: Optional[Parameterized] = None
    max: Optional[Parameterized] = None
    contains: Optional[Parameterized] = None
    starts_with: Optional[Parameterized] = None
    ends_with: Optional[Parameterized] = None
    regex: Optional[Parameterized] = None

    OPTIONS = {
        "trim": None,
        "length": "must be %{expected} characters long, got %{actual}",
        "min": "must be at least %{expected} characters long, got %{actual}",
        "max": "must be at most %{expected} characters long, got %{actual}",
        "contains": "must contain %{substring}",
        "starts_with": "must start with %{substring}",
        "ends_with": "must end with %{substring}",
        "regex": "must match pattern %{pattern}",
    }

    def _check_trim(self, value):
        if not isinstance(value, bool):
            raise SchemaError(f"String option :trim must be a bool, got {value!r}")
        return value

    def _check_length(self, value):
        return require_int("String", "length", value, 1)

    def _check_min(self, value):
        return require_int("String", "min", value, 0)

    def _check_max(self, value):
        return require_int("String", "max", value, 1)

    def _substring(self, option, value):
        if not isinstance(value, str) or not value:
            raise SchemaError(f"String option :{option} must be a non-empty string, got {value!r}")
        return value

    def _check_contains(self, value):
        return self._substring("contains", value)

    def _check_starts_with(self, value):
        return self._substring("starts_with", value)

    def _check_ends_with(self, value):
        return self._substring("ends_with", value)

    def _check_regex(self, value):
        if isinstance(value, str):
            return re.compile(value)
        if isinstance(value, re.Pattern):
            return value
        raise SchemaError(f"String option :regex must be a pattern, got {value!r}")

    def parse_type(self, value, options):
        if self.trim and isinstance(value, str):
            value = value.strip()
        return (
            check_type(value, "string")
            or _check_affix(self.contains, self.contains.value in value if self.contains else True)
            or _check_affix(self.ends_with, value.endswith(self.ends_with.value) if self.ends_with else True)
            or check_length(value, is_=self.length, min=self.min, max=self.max)
            or check_regex(value, self.regex)
            or _check_affix(self.starts_with, value.startswith(self.starts_with.value) if self.starts_with else True)
            or Ok(value)
        )

    def to_json_schema(self):
        return {
            **self._annotations(),
            "type": json_type("string", self.required),
            "maxLength": _value(self.max) or _value(self.length),
            "minLength": _value(self.min) or _value(self.length),
            "pattern": self.regex.value.pattern if self.regex else None,
        }


def _check_affix(option: Optional[Parameterized], holds: bool):
    if option is None or holds:
        return None
    return fail(option.error, substring=option.value)


def _value(option: Optional[Parameterized]) -> _Any:
    return None if option is None else option.value


_DIGITS = re.compile(r"^[0-9]+$")


@dataclass(frozen=True, kw_only=True)
class Numeric(Type):
    """A string made of ASCII digits only (account numbers, zip codes...)."""

    min: Optional[Parameterized] = None
    max: Optional[Parameterized] = None

    OPTIONS = {
        "min": "must be at least %{expected} characters long, got %{actual}",
        "max": "must be at most %{expected} characters long, got %{actual}",
    }

    def _check_min(self, value):
        return require_int("Numeric", "min", value, 1)

    def _check_max(self, value):
        return require_int("Numeric", "max", value, 1)

    def parse_type(self, value, options):
        digits = Parameterized.new(_DIGITS, {"error": "must contain only 0-9 digits"})
        return (
            check_type(value, "string")
            or check_regex(value, digits)
            or check_length(value, min=self.min, max=self.max)
            or Ok(value)
        )

    def to_json_schema(self):
        return {
            **self._annotations(),
            "type": json_type("string", self.required),
            "maxLength": _value(self.max),
            "minLength": _value(self.min),
            "pattern": _DIGITS.pattern,
        }


# --------------------------------------------------------------------------- #
# Numbers                                                                     #
# --------------------------------------------------------------------------- #

_AT_LEAST = "must be at least %{expected}, got %{actual}"
_AT_MOST = "must be at most %{expected}, got %{actual}"


@dataclass(frozen=True, kw_only=True)
class _Bounded(Type):
    min: Optional[Parameterized] = None
    max: Optional[Parameterized] = None

    OPTIONS = {"min": _AT_LEAST, "max": _AT_MOST}

    def _check_min(self, value):
        return require_number(type(self).__name__, "min", value)

    def _check_max(self, value):
        return require_number(type(self).__name__, "max", value)

    def _validate(self):
        if self.min is not None and self.max is not None and self.min.value > self.max.value:
            raise SchemaError(f"{type(self).__name__} :min must not exceed :max")

    def _bounds(self) -> dict[str, _Any]:
        return {"minimum": _json_number(self.min), "maximum": _json_number(self.max)}


def _json_number(option: Optional[Parameterized]) -> _Any:
    if option is None:
        return None
    value = option.value
    return float(value) if isinstance(value, decimal.Decimal) else value


@dataclass(frozen=True, kw_only=True)
class Integer(_Bounded):

    def parse_type(self, value, options):
        if coerce_flag(options):
            value = self._coerce(value)
            if not isinstance(value, Ok):
                return value
            value = value.value
        return check_type(value, "integer") or check_number(value, min=self.min, max=self.max) or Ok(value)

    def _coerce(self, value):
        if isinstance(value, float) and math.isfinite(value):
            return Ok(round_half_away(value))
        if isinstance(value, decimal.Decimal) and value.is_finite():
            return Ok(round_half_away(value))
        if isinstance(value, str):
            n = parse_integer(value)
            return fail("cannot be coerced to integer") if n is None else Ok(n)
        return Ok(value)

    def to_json_schema(self):
        return {**self._annotations(), "type": json_type("integer", self.required), **self._bounds()}


@dataclass(frozen=True, kw_only=True)
class Float(_Bounded):
    precision: Optional[int] = None
    range: Optional[Parameterized] = None

    OPTIONS = {
        "min": _AT_LEAST,
        "max": _AT_MOST,
        "precision": None,
        "range": "must be within range %{expected}, got %{actual}",
    }

    def _check_precision(self, value):
        return require_int("Float", "precision", value, 0)

    def _check_range(self, value):
        if not (isinstance(value, tuple) and len(value) == 2 and all(map(_is_num, value))):
            raise SchemaError(f"Float option :range must be a (low, high) tuple, got {value!r}")
        if value[0] > value[1]:
            raise SchemaError(f"Float option :range must be ascending, got {value!r}")
        return value

    def _validate(self):
        if self.range is not None and (self.min is not None or self.max is not None):
            raise SchemaError("Float cannot use :range together with :min or :max")
        super()._validate()

    def parse_type(self, value, options):
        if coerce_flag(options) and not isinstance(value, bool):
            if isinstance(value, (int, decimal.Decimal)):
                value = float(value)
            elif isinstance(value, str):
                parsed = parse_float(value)
                if parsed is None:
                    return fail("cannot be coerced to float")
                value = parsed
        return (
            check_type(value, "float")
            or check_number(value, min=self.min, max=self.max)
            or self._check_in_range(value)
            or Ok(value if self.precision is None else round(value, self.precision))
        )

    def _check_in_range(self, value):
        if self.range is None:
            return None
        low, high = self.range.value
        if low <= value <= high:
            return None
        return fail(self.range.error, expected=Escaped(f"{low}..{high}"), actual=value)

    def to_json_schema(self):
        bounds = self._bounds()
        if self.range is not None:
            bounds = {"minimum": self.range.value[0], "maximum": self.range.value[1]}
        return {**self._annotations(), "type": json_type("number", self.required), **bounds}


def _is_num(value: _Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True, kw_only=True)
class Number(_Bounded):
    """An ``int`` or a ``float``."""

    def parse_type(self, value, options):
        if coerce_flag(options):
            if isinstance(value, decimal.Decimal):
                value = float(value)
            elif isinstance(value, str):
                parsed = parse_integer(value)
                if parsed is None:
                    parsed = parse_float(value)
                if parsed is None:
                    return fail("cannot be coerced to number")
                value = parsed
        return check_type(value, "number") or check_number(value, min=self.min, max=self.max) or Ok(value)

    def to_json_schema(self):
        return {**self._annotations(), "type": json_type("number", self.required), **self._bounds()}


@dataclass(frozen=True, kw_only=True)
class Decimal(_Bounded):
    """An exact :class:`decimal.Decimal`."""

    def parse_type(self, value, options):
        if coerce_flag(options) and not isinstance(value, bool):
            if isinstance(value, int):
                value = decimal.Decimal(value)
            elif isinstance(value, float):
                value = decimal.Decimal(repr(value))
            elif isinstance(value, str):
                try:
                    value = decimal.Decimal(value.strip())
                except decimal.InvalidOperation:
                    return fail("cannot be coerced to Decimal")
                if not value.is_finite():
                    return fail("cannot be coerced to Decimal")
        return check_type(value, "Decimal") or check_number(value, min=self.min, max=self.max) or Ok(value)

    def to_json_schema(self):
        return {**self._annotations(), "type": json_type("number", self.required), **self._bounds()}
