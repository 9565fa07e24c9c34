"""
base.py - the Type contract every descriptor kind implements.

A descriptor is an immutable ``dataclass`` carrying a common envelope
(``required``, ``default``, ``effects``, ``description``, ``example``)
plus kind-specific fields.  Kinds implement two operations:

``parse_type(value, options) -> Ok | Err | ErrPartial``
    Coerce (when ``options["coerce"]`` allows) and validate one non-null
    value.  Only composites may return ``ErrPartial``.

``to_json_schema() -> dict``
    A JSON Schema fragment; ``None`` values are dropped by the caller.

Kind-specific configuration goes through :meth:`Type.new` /
:meth:`Type.evolve`, driven by the class-level ``OPTIONS`` table
(option name -> default error template, or ``None`` for options that
cannot fail at parse time).  Unknown option names are rejected.  An
option ``foo`` can be checked and normalised by a ``_check_foo`` method,
and cross-option rules live in ``_validate``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, ClassVar, Mapping, Union

from ..effects import Refine, Transform
from ..errors import SchemaError
from ..parameterized import Parameterized
from ..utils import Ref, _json_safe

__all__ = ["Type", "json_type", "is_type"]

logger = logging.getLogger(__name__)

_ENVELOPE = ("required", "default", "description", "example")


@dataclass(frozen=True, kw_only=True)
class Type:
    required: bool = True
    default: Any = None
    effects: tuple = ()
    description: str | None = None
    example: Any = None

    OPTIONS: ClassVar[Mapping[str, str | None]] = {}

    # ------------------------------------------------------------------ #
    # Construction                                                        #
    # ------------------------------------------------------------------ #
    @classmethod
    def new(klass, **options: Any) -> "Type":
        return klass().evolve(**options)

    def evolve(self, **options: Any) -> "Type":
        """Return a copy with *options* applied; unknown names are rejected."""
        current = self
        for name, value in options.items():
            if name in _ENVELOPE:
                current = current._set_envelope(name, value)
            elif name in self.OPTIONS:
                current = current._set_option(name, value)
            else:
                logger.debug("rejected option %r for %s", name, type(self).__name__)
                raise SchemaError(f"unknown option :{name} for {type(self).__name__}")
        current._validate()
        return current

    def _set_envelope(self, name: str, value: Any) -> "Type":
        if name == "default":
            return self.with_default(value)
        if name == "description":
            return self.describe(value)
        if name == "required" and not isinstance(value, bool):
            raise SchemaError(f"required must be a bool, got {value!r}")
        return replace(self, **{name: value})

    def _set_option(self, name: str, value: Any) -> "Type":
        params = dict(value.params) if isinstance(value, Parameterized) else {}
        raw = value.value if isinstance(value, Parameterized) else value

        if raw is not None:
            check = getattr(self, f"_check_{name}", None)
            if check is not None:
                raw = check(raw)

        template = self.OPTIONS[name]
        if raw is None:
            stored = None
        elif template is None:
            if params:
                raise SchemaError(f"option :{name} of {type(self).__name__} takes no parameters")
            stored = raw
        else:
            stored = Parameterized.new(raw, {"error": template}, **params)
        return replace(self, **{name: stored})

    def _validate(self) -> None:
        """Cross-option rules; raise :class:`SchemaError` when violated."""

    # ------------------------------------------------------------------ #
    # Envelope modifiers                                                  #
    # ------------------------------------------------------------------ #
    def optional(self) -> "Type":
        return replace(self, required=False)

    def with_default(self, value: Any) -> "Type":
        """Use *value* (a literal, supplier, ``Ref`` or relative time) when absent."""
        return replace(self, required=False, default=value)

    def describe(self, text: str | None) -> "Type":
        if text is not None and (not isinstance(text, str) or not text):
            raise SchemaError(f"description must be a non-empty string or None, got {text!r}")
        return replace(self, description=text)

    def with_example(self, value: Any) -> "Type":
        return replace(self, example=value)

    def transform(self, fn: Union[Callable[[Any], Any], Ref]) -> "Type":
        _ensure_callable(fn)
        return replace(self, effects=self.effects + (Transform(fn),))

    def refine(self, fn: Union[Callable[..., Any], Ref], error: str | None = None) -> "Type":
        _ensure_callable(fn)
        return replace(self, effects=self.effects + (Refine.new(fn, error),))

    # ------------------------------------------------------------------ #
    # Contract                                                            #
    # ------------------------------------------------------------------ #
    def parse_type(self, value: Any, options: Mapping[str, Any]):
        raise NotImplementedError

    def to_json_schema(self) -> dict[str, Any]:
        raise NotImplementedError

    # ------------------------------------------------------------------ #
    # Conveniences                                                        #
    # ------------------------------------------------------------------ #
    def parse(self, value: Any, **options: Any):
        from ..validator import parse

        return parse(self, value, **options)

    def json_schema(self) -> dict[str, Any]:
        from ..validator import json_schema

        return json_schema(self)

    def _annotations(self) -> dict[str, Any]:
        """``description`` / ``examples`` shared by every fragment."""
        return {
            "description": self.description,
            "examples": None if self.example is None else [_json_safe(self.example)],
        }


def _ensure_callable(fn: Any) -> None:
    if not (isinstance(fn, Ref) or callable(fn)):
        raise SchemaError(f"expected a callable or a Ref, got {fn!r}")


def json_type(name: str, required: bool) -> str | list[str]:
    """JSON Schema ``type``, widened with ``"null"`` for optional descriptors."""
    return name if required else [name, "null"]


def is_type(value: Any) -> bool:
    return isinstance(value, Type)
