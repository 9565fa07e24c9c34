"""Shared helpers for the typeshape test-suite (std-lib only)."""
from __future__ import annotations

import dataclasses
import enum
from typing import Any

import typeshape as ts

# ------------------------------------------------------------------ #
# Fixtures shared across modules                                      #
# ------------------------------------------------------------------ #
class Color(enum.Enum):
    RED = "red"
    GREEN = "green"


@dataclasses.dataclass
class User:
    name: str
    age: int
    nickname: str | None = None


def constant_bound():
    """Zero-argument supplier used through ``ts.Ref`` in the tests."""
    return 10


def is_even(value):
    return value % 2 == 0


# ------------------------------------------------------------------ #
# Tiny helpers                                                       #
# ------------------------------------------------------------------ #
def ok(descriptor, value: Any, **options: Any) -> Any:
    """Parse and return the value, failing loudly with the report if invalid."""
    result = ts.parse(descriptor, value, **options)
    if not result.ok:
        raise AssertionError(ts.pretty_print(result.issues))
    return result.value


def messages(descriptor, value: Any, **options: Any) -> list[str]:
    """Rendered messages of a parse that is expected to fail."""
    result = ts.parse(descriptor, value, **options)
    if result.ok:
        raise AssertionError(f"expected issues, got Ok({result.value!r})")
    return [i.message for i in result.issues]


def summary(descriptor, value: Any, **options: Any) -> dict[str, list[str]]:
    result = ts.parse(descriptor, value, **options)
    if result.ok:
        raise AssertionError(f"expected issues, got Ok({result.value!r})")
    return ts.summarize(result.issues)
