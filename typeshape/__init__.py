"""
typeshape – declarative schema validation and data coercion.

Descriptors are built with the functions in :mod:`typeshape.builders`,
evaluated with :func:`parse`, and exported with :func:`json_schema`::

    >>> import typeshape as ts
    >>> ts.parse(ts.integer(min=18), "21", coerce=True)
    Ok(value=21)
"""
from .builders import *  # noqa: F401,F403
from .builders import __all__ as _builders
from .card import to_markdown_card
from .context import Context
from .effects import Continue, Fail, FailWith
from .errors import SchemaError, ValidationError
from .issue import Conjunction, Disjunction, Escaped, Issue, pretty_print, summarize
from .parameterized import Parameterized, p
from .parser import parse_input
from .result import Err, ErrPartial, Ok
from .utils import Ref
from .validator import json_schema, parse, parse_or_raise

__all__ = [
    *_builders,
    "parse",
    "parse_or_raise",
    "json_schema",
    "parse_input",
    "to_markdown_card",
    "summarize",
    "pretty_print",
    "Ok",
    "Err",
    "ErrPartial",
    "Issue",
    "Escaped",
    "Conjunction",
    "Disjunction",
    "Context",
    "Continue",
    "Fail",
    "FailWith",
    "Parameterized",
    "p",
    "Ref",
    "SchemaError",
    "ValidationError",
]
