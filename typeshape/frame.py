"""
frame.py - row-wise validation of a pandas DataFrame.

Public API
----------
parse_frame(descriptor, df, *, coerce=False) -> Ok | Err
    Validate every row of *df* against a :class:`~typeshape.types.Mapping`
    descriptor.  Missing cells (``NaN`` / ``NaT`` / ``None``) are treated
    as absent values, so optional columns and defaults behave exactly as
    they do for mappings.  On success the result holds a new DataFrame of
    the validated rows (same index); otherwise every issue of every row,
    each path starting with the row's index label.
"""

from __future__ import annotations

import logging
from typing import Any

import pandas as pd

from .errors import SchemaError
from .issue import prepend_path
from .result import Err, Ok
from .types import Mapping
from .validator import parse

__all__ = ["parse_frame"]

logger = logging.getLogger(__name__)


def _cell(value: Any) -> Any:
    if isinstance(value, (list, tuple, dict)):
        return value
    return None if pd.isna(value) else value


def parse_frame(descriptor: Mapping, df: pd.DataFrame, *, coerce: bool | str = False) -> Ok | Err:
    if not isinstance(descriptor, Mapping):
        raise SchemaError(f"parse_frame expects a Mapping descriptor, got {type(descriptor).__name__}")
    if not isinstance(df, pd.DataFrame):
        raise TypeError(f"parse_frame expects a pandas DataFrame, got {type(df).__name__}")

    rows: list[dict[str, Any]] = []
    issues = []
    for index, record in zip(df.index, df.to_dict(orient="records")):
        result = parse(descriptor, {k: _cell(v) for k, v in record.items()}, coerce=coerce)
        if result.ok:
            rows.append(result.value)
        else:
            issues.extend(prepend_path(result.issues, (index,)))

    logger.debug("validated %d rows, %d issues", len(df), len(issues))
    if issues:
        return Err(issues)
    return Ok(pd.DataFrame(rows, index=df.index, columns=list(rows[0]) if rows else None))
