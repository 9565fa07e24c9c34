"""
result.py - parse outcomes.

``Ok(value)`` for a fully validated value, ``Err(issues)`` otherwise.
``ErrPartial(issues, partial)`` is an ``Err`` that also carries the
substructure a composite kind managed to validate; leaf kinds never
return it and the public entry point never surfaces it (callers only
see ``Ok`` or ``Err``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence, Union

from .issue import Issue

__all__ = ["Ok", "Err", "ErrPartial", "Result"]


@dataclass(frozen=True)
class Ok:
    value: Any = None

    ok = True

    def unwrap(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Err:
    issues: Sequence[Issue] = field(default_factory=tuple)

    ok = False

    def __post_init__(self):
        object.__setattr__(self, "issues", list(self.issues))

    def unwrap(self) -> Any:
        from .errors import ValidationError

        raise ValidationError(self.issues)


@dataclass(frozen=True)
class ErrPartial(Err):
    partial: Any = None


Result = Union[Ok, Err]
