"""
commons.py - validation helpers shared by the leaf kinds.

Each ``check_*`` helper returns ``None`` when the value passes and an
``Err`` otherwise, so kinds can chain them::

    return check_type(value, "integer") or check_number(value, min=..., max=...) or Ok(value)
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from ..issue import Disjunction, Escaped, issue
from ..parameterized import Parameterized
from ..result import Err
from ..errors import SchemaError
from ..utils import typeof

__all__ = [
    "check_type",
    "check_length",
    "check_number",
    "check_regex",
    "check_inclusion",
    "fail",
    "is_int",
    "is_number",
    "require_int",
    "require_number",
    "require_choice",
]


def fail(template: str, **params: Any) -> Err:
    return Err([issue(template, **params)])


def check_type(value: Any, expected: str) -> Optional[Err]:
    actual = typeof(value, expected)
    if actual == expected:
        return None
    return fail(
        "expected type %{expected}, got %{actual}",
        expected=Escaped(expected),
        actual=Escaped(actual),
    )


_OPS = {
    "is": lambda expected, actual: actual == expected,
    "min": lambda expected, actual: actual >= expected,
    "max": lambda expected, actual: actual <= expected,
}


def _check(actual: Any, constraints: dict[str, Optional[Parameterized]], to_num=lambda v: v) -> Optional[Err]:
    for op, expected in constraints.items():
        if expected is None:
            continue
        if not _OPS[op](to_num(expected.value), actual):
            return fail(expected.error, actual=actual, expected=expected.value)
    return None


def check_length(value: Any, *, is_=None, min=None, max=None) -> Optional[Err]:
    """Exact / minimum / maximum length of a string, list or mapping."""
    return _check(len(value), {"is": is_, "min": min, "max": max})


def _n(value: Any) -> Any:
    return float(value) if isinstance(value, Decimal) else value


def check_number(value: Any, *, is_=None, min=None, max=None) -> Optional[Err]:
    """Exact / minimum / maximum value; ``Decimal`` compares as float."""
    return _check(_n(value), {"is": is_, "min": min, "max": max}, to_num=_n)


def check_regex(value: str, regex: Optional[Parameterized]) -> Optional[Err]:
    if regex is None or regex.value.search(value):
        return None
    return fail(regex.error, pattern=regex.value)


def check_inclusion(value: Any, allowed: Optional[Parameterized]) -> Optional[Err]:
    if allowed is None or value in allowed.value:
        return None
    return fail(allowed.error, expected=Disjunction(list(allowed.value)), actual=value)


# --------------------------------------------------------------------------- #
# Option checks (construction time)                                          #
# --------------------------------------------------------------------------- #

def is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def require_int(kind: str, option: str, value: Any, minimum: int) -> int:
    if not is_int(value) or value < minimum:
        raise SchemaError(f"{kind} option :{option} must be an integer >= {minimum}, got {value!r}")
    return value


def require_number(kind: str, option: str, value: Any) -> Any:
    if not is_number(value):
        raise SchemaError(f"{kind} option :{option} must be a number, got {value!r}")
    return value


def require_choice(kind: str, option: str, value: Any, choices: tuple) -> Any:
    if value not in choices:
        raise SchemaError(f"{kind} option :{option} must be one of {list(choices)}, got {value!r}")
    return value
