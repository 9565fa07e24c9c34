"""
unions.py - "one of several descriptors".

Union
    Alternatives are tried in declared order and the first fully valid one
    wins.  When none is valid the failure reported is the one that got
    furthest: highest :func:`~typeshape.context.score`, and among equal
    scores the alternative evaluated *last*.  That way a union of
    ``integer()`` and ``float_()`` fed ``"x"`` reports the float's error,
    while a mapping that validated most of its fields beats a scalar
    alternative that failed outright.
DiscriminatedUnion
    Branches are mappings sharing a literal ``discriminator`` field; the
    input's value for that field selects exactly one branch, which then
    parses the whole input.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..context import Context
from ..errors import SchemaError
from ..issue import Disjunction, Escaped
from ..utils import canonical_key, lookup, same_key
from .base import Type, is_type
from .choices import Literal
from .commons import check_type, fail
from .composites import Mapping, Struct

__all__ = ["Union", "DiscriminatedUnion"]

logger = logging.getLogger(__name__)


def _json(descriptor: Type) -> dict:
    from ..validator import json_schema

    return json_schema(descriptor)


@dataclass(frozen=True, kw_only=True)
class Union(Type):
    types: tuple = ()

    OPTIONS = {"types": None}

    def _check_types(self, value):
        value = tuple(value)
        if len(value) < 2:
            raise SchemaError("Union needs at least two alternatives")
        for alternative in value:
            if not is_type(alternative):
                raise SchemaError(f"Union alternatives must be descriptors, got {alternative!r}")
        return value

    def _validate(self):
        if not self.types:
            raise SchemaError("Union requires :types")

    def parse_type(self, value, options):
        best: Optional[Context] = None
        for index, alternative in enumerate(self.types):
            ctx = Context.new(alternative, value, options).parse()
            if ctx.valid:
                logger.debug("union matched alternative %d (%s)", index, type(alternative).__name__)
                return ctx.unwrap()
            if best is None or ctx.score >= best.score:
                best = ctx
        logger.debug("union failed; reporting %s (score %d)", type(best.type).__name__, best.score)
        return best.unwrap()

    def to_json_schema(self):
        return {**self._annotations(), "anyOf": [_json(t) for t in self.types]}


@dataclass(frozen=True, kw_only=True)
class DiscriminatedUnion(Type):
    discriminator: Any = None
    types: tuple = ()

    OPTIONS = {"discriminator": None, "types": None}

    def _check_types(self, value):
        value = tuple(value)
        if len(value) < 2:
            raise SchemaError("DiscriminatedUnion needs at least two branches")
        return value

    def _validate(self):
        if self.discriminator is None or not self.types:
            raise SchemaError("DiscriminatedUnion requires :discriminator and :types")
        for branch in self.types:
            if not isinstance(branch, (Mapping, Struct)):
                raise SchemaError(
                    f"discriminated union only accepts mapping descriptors, got {type(branch).__name__}"
                )
            tag = lookup(branch.shape, self.discriminator)
            if tag is None:
                raise SchemaError(
                    f"the discriminator field {self.discriminator!r} must exist in all mapping descriptors"
                )
            if not isinstance(tag, Literal):
                raise SchemaError(
                    f"the discriminator field {self.discriminator!r} must be a literal, got {type(tag).__name__}"
                )

    def _tags(self) -> list:
        return [lookup(branch.shape, self.discriminator).value for branch in self.types]

    def parse_type(self, value, options):
        mismatch = check_type(value, "map")
        if mismatch:
            return mismatch

        actual = lookup(value, self.discriminator)
        for branch, tag in zip(self.types, self._tags()):
            if actual is not None and same_key(tag, actual):
                logger.debug("discriminated union dispatched %r to %s", actual, type(branch).__name__)
                return Context.new(branch, value, options).parse().unwrap()

        return fail(
            "expected field %{field} to be one of %{expected}, got %{actual}",
            field=Escaped(canonical_key(self.discriminator)),
            expected=Disjunction(self._tags()),
            actual=actual,
        )

    def to_json_schema(self):
        return {
            **self._annotations(),
            "oneOf": [_json(t) for t in self.types],
            "discriminator": {"propertyName": canonical_key(self.discriminator)},
        }
