"""
errors.py - exception types raised by typeshape.

Validation failures are *values* (see :mod:`typeshape.result`); the
exceptions below are reserved for two situations:

SchemaError
    A descriptor was misconfigured while it was being built (unknown
    option, bad discriminated-union branch, invalid literal, a default
    that resolves to ``None``...).  Always raised at build time or while
    resolving a default, never reported as an Issue.

ValidationError
    Raised only by :func:`typeshape.validator.parse_or_raise` for callers
    who prefer exceptions over inspecting an ``Err``.
"""

from __future__ import annotations

from typing import Sequence

__all__ = [
    "SchemaError",
    "ValidationError",
]


class SchemaError(ValueError):
    """Raised when a descriptor is built with an invalid configuration."""


class ValidationError(ValueError):
    """Raised by ``parse_or_raise`` when the input does not validate."""

    def __init__(self, issues: Sequence["Issue"]):  # noqa: F821
        from .issue import pretty_print

        self.issues = list(issues)
        super().__init__(pretty_print(self.issues))
