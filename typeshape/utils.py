"""
utils.py - shared, low-level helpers for the typeshape package.

This module consolidates common helpers for:
- Options (the per-call ``coerce`` flag)
- Strict number parsing for coercion
- Resolution of lazily specified values (defaults, date bounds)
- Key canonicalisation for mapping lookups
- Type naming for "expected type X, got Y" messages
- JSON-safe dumping of example values
"""

from __future__ import annotations

import calendar
import dataclasses
import datetime as _dt
import importlib
import inspect
import math
import re
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

import pandas as pd

from .errors import SchemaError

# --------------------------------------------------------------------------- #
# Options                                                                     #
# --------------------------------------------------------------------------- #

_COERCE_VALUES = (False, True, "unsafe")


def coerce_flag(options: Mapping[str, Any] | None) -> bool | str:
    """Return the ``coerce`` option: ``False``, ``True`` or ``"unsafe"``."""
    flag = (options or {}).get("coerce") or False
    if flag not in _COERCE_VALUES:
        raise SchemaError(f"coerce must be one of False, True or 'unsafe', got {flag!r}")
    return flag


def normalize_options(options: Mapping[str, Any] | None) -> dict[str, Any]:
    """Validate per-call options, returning a fresh ``dict``."""
    opts = dict(options or {})
    unknown = set(opts) - {"coerce"}
    if unknown:
        raise SchemaError(f"unknown parse option(s): {sorted(unknown)}")
    opts["coerce"] = coerce_flag(opts)
    return opts


# --------------------------------------------------------------------------- #
# Number parsing                                                              #
# --------------------------------------------------------------------------- #

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


def parse_integer(value: str) -> Optional[int]:
    """Strictly parse a whole-number string; ``None`` when it isn't one."""
    if not isinstance(value, str) or not _INT_RE.fullmatch(value):
        return None
    return int(value)


def parse_float(value: str) -> Optional[float]:
    """Strictly parse a decimal string (no ``nan``/``inf``); ``None`` otherwise."""
    if not isinstance(value, str) or not _FLOAT_RE.fullmatch(value):
        return None
    return float(value)


def round_half_away(value: float | Decimal) -> int:
    """Round to the nearest integer, ties away from zero."""
    if isinstance(value, Decimal):
        return int(value.to_integral_value(rounding="ROUND_HALF_UP"))
    return int(math.floor(abs(value) + 0.5)) * (1 if value >= 0 else -1)


# --------------------------------------------------------------------------- #
# Lazy value resolution                                                       #
# --------------------------------------------------------------------------- #

TIME_UNITS = ("second", "minute", "hour", "day", "week", "month", "year")


@dataclasses.dataclass(frozen=True)
class Ref:
    """A lazy ``"package.module:attribute"`` reference to a callable.

    Resolved with :mod:`importlib` on every call; descriptors built from
    references stay free of closures.
    """

    target: str

    def __post_init__(self):
        if not isinstance(self.target, str) or not re.fullmatch(r"[\w.]+:[\w.]+", self.target):
            raise SchemaError(f"reference must look like 'package.module:attribute', got {self.target!r}")

    def load(self) -> Any:
        module_name, _, attr = self.target.partition(":")
        obj: Any = importlib.import_module(module_name)
        for part in attr.split("."):
            obj = getattr(obj, part)
        return obj

    def __call__(self, *args: Any) -> Any:
        return self.load()(*args)


def is_relative(value: Any) -> bool:
    """True for ``(n, unit, "from_now")`` tuples."""
    return (
        isinstance(value, tuple)
        and len(value) == 3
        and isinstance(value[0], int)
        and not isinstance(value[0], bool)
        and value[1] in TIME_UNITS
        and value[2] == "from_now"
    )


def _now() -> _dt.datetime:
    """Current UTC time (second precision)."""
    return _dt.datetime.now(_dt.timezone.utc).replace(microsecond=0)


def _add_months(moment: _dt.datetime, months: int) -> _dt.datetime:
    total = moment.month - 1 + months
    year, month = moment.year + total // 12, total % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def shift(moment: _dt.datetime, n: int, unit: str) -> _dt.datetime:
    """Move *moment* by *n* calendar *unit*s."""
    if unit == "month":
        return _add_months(moment, n)
    if unit == "year":
        return _add_months(moment, 12 * n)
    return moment + _dt.timedelta(**{f"{unit}s": n})


def describe_relative(value: Tuple[int, str, str]) -> str:
    n, unit, _ = value
    return f"{n} {unit}s from now"


def resolve(value: Any) -> Any:
    """Resolve a literal, a zero-argument callable, a reference or a relative time.

    Suppliers may return ``Ok(value)``; an ``Err`` or ``None`` is a
    configuration fault and raises :class:`SchemaError`.
    """
    if is_relative(value):
        return shift(_now(), value[0], value[1])
    if callable(value) and not isinstance(value, type):
        return _normalize(value())
    return value


def _normalize(value: Any) -> Any:
    from .result import Err, Ok

    if isinstance(value, Ok):
        return value.value
    if isinstance(value, Err):
        raise SchemaError(f"default supplier failed: {[i.message for i in value.issues]}")
    if value is None:
        raise SchemaError("default value cannot be None")
    return value


def is_lazy(value: Any) -> bool:
    """True when :func:`resolve` would compute *value* instead of returning it."""
    return is_relative(value) or (callable(value) and not isinstance(value, type))


def arity(fn: Any) -> int:
    """Number of positional parameters *fn* takes (references are loaded)."""
    if isinstance(fn, Ref):
        fn = fn.load()
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return 1
    params = [
        p for p in sig.parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty
    ]
    return len(params)


# --------------------------------------------------------------------------- #
# Mapping keys                                                                #
# --------------------------------------------------------------------------- #

def canonical_key(key: Any) -> str:
    """Identifier/string equivalence: ``Color.RED`` (value ``"red"``) ~ ``"red"``."""
    if isinstance(key, Enum):
        key = key.value
    return str(key)


def lookup(mapping: Mapping[Any, Any], key: Any, default: Any = None) -> Any:
    """Fetch *key* by identity first, then by its canonical string form."""
    if key in mapping:
        return mapping[key]
    wanted = canonical_key(key)
    for k, v in mapping.items():
        if canonical_key(k) == wanted:
            return v
    return default


def same_key(a: Any, b: Any) -> bool:
    """Plain equality, except that an Enum member also equals its string form."""
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    if a == b:
        return True
    if isinstance(a, Enum) and isinstance(b, str) or isinstance(b, Enum) and isinstance(a, str):
        return canonical_key(a) == canonical_key(b)
    return False


# --------------------------------------------------------------------------- #
# Type naming                                                                 #
# --------------------------------------------------------------------------- #

def typeof(value: Any, hint: str | None = None) -> str:
    """Name *value*'s type the way issue messages spell it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, Enum):
        return "atom" if hint == "atom" else type(value).__name__
    if isinstance(value, str):
        return "string"
    if isinstance(value, int):
        return "number" if hint == "number" else "integer"
    if isinstance(value, float):
        return "number" if hint == "number" else "float"
    if isinstance(value, Decimal):
        return "Decimal"
    if isinstance(value, _dt.datetime):
        return "datetime"
    if isinstance(value, _dt.date):
        return "date"
    if isinstance(value, Mapping):
        return "map"
    if isinstance(value, list):
        return "list"
    if isinstance(value, tuple):
        return "tuple"
    if callable(value):
        return "function"
    return type(value).__name__


# --------------------------------------------------------------------------- #
# JSON-safe dumping                                                           #
# --------------------------------------------------------------------------- #

def _json_safe(x: Any) -> Any:
    """Recursively prepare a value for a JSON Schema document."""
    if isinstance(x, Mapping):
        return {canonical_key(k): _json_safe(v) for k, v in x.items()}
    if isinstance(x, (list, tuple, set, frozenset)):
        return [_json_safe(v) for v in x]
    if isinstance(x, Enum):
        return _json_safe(x.value)
    if isinstance(x, Decimal):
        return float(x)
    if isinstance(x, _dt.datetime):
        text = x.isoformat()
        return text[:-6] + "Z" if text.endswith("+00:00") else text
    if isinstance(x, _dt.date):
        return x.isoformat()
    if isinstance(x, re.Pattern):
        return x.pattern
    if dataclasses.is_dataclass(x) and not isinstance(x, type):
        return _json_safe(dataclasses.asdict(x))

    if isinstance(x, pd.DataFrame):
        return _json_safe(x.to_dict(orient="records"))

    return x
