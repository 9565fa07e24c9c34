"""
builders.py - one constructor function per descriptor kind.

    >>> from typeshape import mapping, string, integer
    >>> user = mapping({"name": string(min=1), "age": integer(min=18).optional()})

Keyword arguments are the kind's options plus the shared envelope
(``required``, ``default``, ``description``, ``example``); anything else
raises :class:`~typeshape.errors.SchemaError`.  Builders whose names
would shadow Python built-ins carry a trailing underscore.
"""

from __future__ import annotations

from typing import Any, Iterable

from . import types as t

__all__ = [
    "any_",
    "boolean",
    "string",
    "numeric",
    "integer",
    "float_",
    "number",
    "decimal",
    "literal",
    "enum",
    "date",
    "date_time",
    "email",
    "phone",
    "uri",
    "uuid",
    "ip",
    "cidr",
    "mapping",
    "strict_mapping",
    "struct",
    "record",
    "list_",
    "tuple_",
    "branded",
    "union",
    "discriminated_union",
]


# --------------------------------------------------------------------------- #
# Leaves                                                                      #
# --------------------------------------------------------------------------- #

def any_(**opts: Any) -> t.Any:
    return t.Any.new(**opts)


def boolean(**opts: Any) -> t.Boolean:
    return t.Boolean.new(**opts)


def string(**opts: Any) -> t.String:
    """``trim``, ``length``, ``min``, ``max``, ``contains``, ``starts_with``, ``ends_with``, ``regex``."""
    return t.String.new(**opts)


def numeric(**opts: Any) -> t.Numeric:
    return t.Numeric.new(**opts)


def integer(**opts: Any) -> t.Integer:
    return t.Integer.new(**opts)


def float_(**opts: Any) -> t.Float:
    """``min``, ``max``, ``range=(low, high)`` and ``precision``."""
    return t.Float.new(**opts)


def number(**opts: Any) -> t.Number:
    return t.Number.new(**opts)


def decimal(**opts: Any) -> t.Decimal:
    return t.Decimal.new(**opts)


def literal(value: Any, **opts: Any) -> t.Literal:
    return t.Literal.new(value=value, **opts)


def enum(values: Any, **opts: Any) -> t.Enum:
    """*values* is a list of strings, a list of members of one Enum, or an Enum class."""
    return t.Enum.new(values=values, **opts)


def date(**opts: Any) -> t.Date:
    return t.Date.new(**opts)


def date_time(**opts: Any) -> t.DateTime:
    return t.DateTime.new(**opts)


def email(**opts: Any) -> t.Email:
    return t.Email.new(**opts)


def phone(**opts: Any) -> t.Phone:
    return t.Phone.new(**opts)


def uri(**opts: Any) -> t.URI:
    return t.URI.new(**opts)


def uuid(**opts: Any) -> t.UUID:
    return t.UUID.new(**opts)


def ip(**opts: Any) -> t.IP:
    return t.IP.new(**opts)


def cidr(**opts: Any) -> t.CIDR:
    return t.CIDR.new(**opts)


# --------------------------------------------------------------------------- #
# Composites                                                                  #
# --------------------------------------------------------------------------- #

def mapping(shape: dict, **opts: Any) -> t.Mapping:
    return t.Mapping.new(shape=shape, **opts)


def strict_mapping(shape: dict, **opts: Any) -> t.Mapping:
    return t.Mapping.new(shape=shape, mode="strict", **opts)


def struct(cls: type, shape: dict, **opts: Any) -> t.Struct:
    return t.Struct.new(cls=cls, shape=shape, **opts)


def record(values: t.Type, *, keys: t.Type | None = None, **opts: Any) -> t.Record:
    if keys is not None:
        opts["keys"] = keys
    return t.Record.new(values=values, **opts)


def list_(inner: t.Type, **opts: Any) -> t.List:
    return t.List.new(inner=inner, **opts)


def tuple_(shape: Iterable[t.Type], **opts: Any) -> t.Tuple:
    return t.Tuple.new(shape=shape, **opts)


def branded(brand: Any, inner: t.Type, **opts: Any) -> t.Branded:
    return t.Branded.new(brand=brand, inner=inner, **opts)


def union(types: Iterable[t.Type], **opts: Any) -> t.Union:
    return t.Union.new(types=types, **opts)


def discriminated_union(discriminator: Any, types: Iterable[t.Type], **opts: Any) -> t.DiscriminatedUnion:
    return t.DiscriminatedUnion.new(discriminator=discriminator, types=types, **opts)
