"""
Descriptor kinds.

Every kind is a frozen dataclass subclassing :class:`~typeshape.types.base.Type`;
most callers build them through :mod:`typeshape.builders` instead.
"""

from .base import Type
from .choices import Enum, Literal
from .composites import Branded, List, Mapping, Record, Struct, Tuple
from .formats import CIDR, IP, URI, UUID, Email, Phone
from .scalars import Any, Boolean, Decimal, Float, Integer, Number, Numeric, String
from .temporal import Date, DateTime
from .unions import DiscriminatedUnion, Union

__all__ = [
    "Type",
    "Any",
    "Boolean",
    "String",
    "Numeric",
    "Integer",
    "Float",
    "Number",
    "Decimal",
    "Literal",
    "Enum",
    "Date",
    "DateTime",
    "Email",
    "Phone",
    "URI",
    "UUID",
    "IP",
    "CIDR",
    "Mapping",
    "Struct",
    "Record",
    "List",
    "Tuple",
    "Branded",
    "Union",
    "DiscriminatedUnion",
]
