"""
parser.py - command-line / JSON / mapping input loader
======================================================

Feeds user input into a :class:`~typeshape.types.Mapping` descriptor the
same way whatever its source, so a script can expose its input schema as
CLI flags for free.

Public API
----------
`build_arg_parser(descriptor: Mapping) -> argparse.ArgumentParser`
    Construct an `argparse` instance with one ``--field-name`` flag per
    field of *descriptor*.

`parse_input(source=None, *, schema) -> Ok | Err`
    Convert user-supplied *source* (CLI string / tokens / JSON literal /
    Mapping) into a raw mapping and evaluate it against *schema* with
    coercion enabled, so ``"--count 3"`` and ``{"count": "3"}`` both yield
    an integer.
"""

from __future__ import annotations

import argparse
import json
import shlex
import sys
from typing import Any, Mapping, Sequence

from .errors import SchemaError
from .result import Err, Ok
from .types import Boolean, Enum, List, Mapping as MappingType, Struct
from .utils import canonical_key
from .validator import parse

__all__ = ["build_arg_parser", "parse_input"]

# --------------------------------------------------------------------------- #
# Parser builder                                                              #
# --------------------------------------------------------------------------- #

def build_arg_parser(descriptor: MappingType) -> argparse.ArgumentParser:
    """Return an :pyclass:`argparse.ArgumentParser` for *descriptor*.

    Parameters
    ----------
    descriptor : typeshape.types.Mapping
        A mapping (or struct) descriptor.  Every top-level field becomes a
        ``--<field-name>`` flag: booleans are ``store_true`` switches, enums
        get ``choices``, lists accept several values and any other composite
        expects a JSON literal.  Values stay strings where no ``type`` fits;
        coercion during evaluation converts them.
    """
    if not isinstance(descriptor, (MappingType, Struct)):
        raise SchemaError(f"build_arg_parser expects a mapping descriptor, got {type(descriptor).__name__}")

    p = argparse.ArgumentParser(description=descriptor.description or "", add_help=False)

    # standard meta flags ----------------------------------------------------
    p.add_argument("-h", "--help", action="help", help="Show this help message and exit.")

    for key, field in descriptor.shape.items():
        name = canonical_key(key)
        flag = f"--{name.replace('_', '-')}"
        kwargs: dict[str, Any] = {
            "dest": name,
            "help": field.description or "",
            "default": argparse.SUPPRESS,
        }

        if isinstance(field, Boolean):
            kwargs["action"] = "store_true"
        elif isinstance(field, Enum):
            kwargs["choices"] = [canonical_key(v) for v in field.values.value]
        elif isinstance(field, List):
            kwargs["nargs"] = "*"
        elif isinstance(field, (MappingType, Struct)):
            kwargs["type"] = json.loads
        else:
            kwargs["type"] = str

        p.add_argument(flag, **kwargs)

    return p

# --------------------------------------------------------------------------- #
# Input parsing utility                                                       #
# --------------------------------------------------------------------------- #

def _raw_input(source: Any, descriptor: MappingType) -> dict[str, Any]:
    # Mapping - already dict-like ------------------------------------------
    if isinstance(source, Mapping):
        return dict(source)

    # Decide how to treat *source* -----------------------------------------
    argv: list[str]
    if isinstance(source, str):
        try:
            loaded = json.loads(source)
        except json.JSONDecodeError:
            argv = shlex.split(source)
        else:
            if not isinstance(loaded, dict):
                raise TypeError(f"JSON input must be an object, got {type(loaded).__name__}")
            return loaded
    elif source is None:
        argv = sys.argv[1:]
    elif isinstance(source, Sequence) and not isinstance(source, (str, bytes)):
        argv = list(source)
    else:
        raise TypeError(f"Unsupported type for parse_input: {type(source)}")

    # CLI style - use argparse ---------------------------------------------
    parser = build_arg_parser(descriptor)
    namespace, unknown = parser.parse_known_args(argv)
    if unknown:
        raise ValueError(f"Unknown argument(s): {unknown}. Use --help.")
    return vars(namespace)


def parse_input(
    source: None | str | Sequence[str] | Mapping[str, Any] = None,
    *,
    schema: MappingType,
) -> Ok | Err:
    """Load *source* and evaluate it against *schema* (with coercion).

    Parameters
    ----------
    source
        Supported variants:
        * ``Mapping`` - copied directly.
        * ``str``  - interpreted as: JSON object literal → load; else CLI string.
        * ``Sequence[str]`` - treated as CLI tokens.
        * ``None`` - default to ``sys.argv[1:]``.
    schema
        The mapping descriptor driving flag generation and evaluation.

    Returns
    -------
    Ok | Err
        The validated mapping, or every issue found.  Only the options the
        user actually supplied are passed on, so absent flags fall back to
        the descriptor's defaults.
    """
    return parse(schema, _raw_input(source, schema), coerce=True)
