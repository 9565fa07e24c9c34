"""
temporal.py - calendar dates and timezone-aware date-times.

Bounds (``min`` / ``max``) may be given as a concrete value, a
zero-argument callable, a :class:`~typeshape.utils.Ref`, or a relative
``(n, unit, "from_now")`` tuple; lazy bounds are resolved on every parse,
so ``min=(0, "day", "from_now")`` always means "now".
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from typing import Any, Optional

from ..errors import SchemaError
from ..issue import Escaped
from ..parameterized import Parameterized
from ..result import Ok
from ..utils import coerce_flag, describe_relative, is_lazy, is_relative, resolve
from .base import Type, json_type
from .commons import check_type, fail

__all__ = ["Date", "DateTime"]


@dataclass(frozen=True, kw_only=True)
class _Temporal(Type):
    min: Optional[Parameterized] = None
    max: Optional[Parameterized] = None

    OPTIONS = {"min": "must be after %{value}", "max": "must be before %{value}"}

    TYPE_NAME = ""
    FORMAT = ""
    COERCE_ERROR = ""

    def _bound(self, option: str, value: Any) -> Any:
        if is_lazy(value) or self._is_native(value):
            return value
        raise SchemaError(
            f"{type(self).__name__} option :{option} must be a {self.TYPE_NAME}, a callable, "
            f"a Ref or a relative tuple, got {value!r}"
        )

    def _check_min(self, value):
        return self._bound("min", value)

    def _check_max(self, value):
        return self._bound("max", value)

    def parse_type(self, value, options):
        if coerce_flag(options) and isinstance(value, str):
            parsed = self._from_iso(value)
            if parsed is None:
                return fail(self.COERCE_ERROR)
            value = parsed
        return (
            check_type(value, self.TYPE_NAME)
            or self._compare(value, self.min, lambda v, bound: v < bound)
            or self._compare(value, self.max, lambda v, bound: v > bound)
            or Ok(value)
        )

    def _compare(self, value, bound: Optional[Parameterized], beyond):
        if bound is None:
            return None
        expected = self._native(resolve(bound.value))
        if not beyond(value, expected):
            return None
        shown = Escaped(describe_relative(bound.value)) if is_relative(bound.value) else expected
        return fail(bound.error, value=shown)

    def to_json_schema(self):
        return {**self._annotations(), "type": json_type("string", self.required), "format": self.FORMAT}


@dataclass(frozen=True, kw_only=True)
class DateTime(_Temporal):
    """A timezone-aware :class:`datetime.datetime`.

    Naive datetimes are compared as UTC; ISO strings without an offset are
    rejected when coercing.
    """

    TYPE_NAME = "datetime"
    FORMAT = "date-time"
    COERCE_ERROR = "must be a valid ISO8601 date-time string"

    def _is_native(self, value):
        return isinstance(value, _dt.datetime)

    def _native(self, value):
        if not isinstance(value, _dt.datetime):
            raise SchemaError(f"date-time bound resolved to {value!r}")
        return _aware(value)

    def _from_iso(self, text):
        try:
            parsed = _dt.datetime.fromisoformat(text)
        except ValueError:
            return None
        return parsed if parsed.tzinfo is not None else None

    def _compare(self, value, bound, beyond):
        return super()._compare(_aware(value), bound, beyond)


def _aware(value: _dt.datetime) -> _dt.datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=_dt.timezone.utc)


@dataclass(frozen=True, kw_only=True)
class Date(_Temporal):
    """A calendar :class:`datetime.date` (datetimes are rejected)."""

    TYPE_NAME = "date"
    FORMAT = "date"
    COERCE_ERROR = "must be a valid ISO8601 date string"

    def _is_native(self, value):
        return isinstance(value, _dt.date) and not isinstance(value, _dt.datetime)

    def _native(self, value):
        if isinstance(value, _dt.datetime):
            return value.date()
        if not isinstance(value, _dt.date):
            raise SchemaError(f"date bound resolved to {value!r}")
        return value

    def _from_iso(self, text):
        try:
            return _dt.date.fromisoformat(text)
        except ValueError:
            return None
