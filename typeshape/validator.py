"""
validator.py - entry points for evaluating descriptors
======================================================

Every descriptor kind implements the same two operations (see
:mod:`typeshape.types.base`); this module is the one place callers go
through to run them against a value.

Public API
----------
parse(descriptor, value, **options) -> Ok | Err
    Run *value* through the descriptor's full pipeline (default, required
    check, kind parse, effects).  ``options`` accepts ``coerce`` only.

parse_or_raise(descriptor, value, **options) -> Any
    Same as :func:`parse`, returning the validated value or raising
    :class:`~typeshape.errors.ValidationError` with every issue.

json_schema(descriptor) -> dict
    The descriptor's JSON Schema fragment with ``None`` values dropped.
"""

from __future__ import annotations

from typing import Any

from .context import Context
from .errors import SchemaError, ValidationError
from .result import Err, Ok
from .types.base import is_type

__all__ = ["parse", "parse_or_raise", "json_schema"]


def _require_descriptor(descriptor: Any) -> None:
    if not is_type(descriptor):
        raise SchemaError(f"expected a descriptor, got {type(descriptor).__name__}")


def parse(descriptor: Any, value: Any, **options: Any) -> Ok | Err:
    """Validate (and, with ``coerce=True``, convert) *value*.

    Never returns a partial outcome: callers see ``Ok(value)`` or
    ``Err(issues)`` with at least one issue.
    """
    _require_descriptor(descriptor)
    return Context.new(descriptor, value, options).parse().unwrap()


def parse_or_raise(descriptor: Any, value: Any, **options: Any) -> Any:
    result = parse(descriptor, value, **options)
    if not result.ok:
        raise ValidationError(result.issues)
    return result.value


def json_schema(descriptor: Any) -> dict[str, Any]:
    _require_descriptor(descriptor)
    return {k: v for k, v in descriptor.to_json_schema().items() if v is not None}
