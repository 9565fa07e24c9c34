"""
parameterized.py - a constraint value paired with its own parameters.

Every constraint that can fail at parse time (a minimum, a regex, a list
of allowed values...) is stored as a :class:`Parameterized` so that the
engine can read ``.params["error"]`` without knowing the constraint's
shape.  Leaf kinds provide the default template; callers override it with
:func:`p`::

    >>> from typeshape import integer, p
    >>> integer(min=p(18, error="must be an adult")).min.params["error"]
    'must be an adult'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, TypeVar

__all__ = ["Parameterized", "p"]

T = TypeVar("T")


@dataclass(frozen=True)
class Parameterized(Generic[T]):
    """A configured value plus override parameters (chiefly ``error``)."""

    value: T
    params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "params", dict(self.params))

    @classmethod
    def new(cls, value: Any, defaults: Mapping[str, Any] | None = None, **overrides: Any) -> "Parameterized":
        """Wrap *value*, merging *overrides* on top of *defaults*.

        When *value* is already a :class:`Parameterized` (the caller passed
        ``p(18, error=...)``) its own params win over the kind's defaults.
        """
        merged = dict(defaults or {})
        if isinstance(value, Parameterized):
            merged.update(value.params)
            value = value.value
        merged.update(overrides)
        return cls(value, merged)

    @property
    def error(self) -> str:
        return self.params.get("error", "is invalid")


def p(value: Any, **params: Any) -> Parameterized:
    """Shorthand used by callers to attach a custom error to an option."""
    return Parameterized(value, params)
