"""
aggregate.py - partial-success protocol shared by composite kinds.

Mappings, structs, records, lists and tuples all fan out over their
children the same way: every child is parsed independently through its
own :class:`~typeshape.context.Context` (with its key or index as path
segment), successes and issues are accumulated, and nothing stops early.
Once every child has been visited the outcome is settled by one rule:

* no issues                         -> ``Ok(full structure)``
* issues and no successful child    -> ``Err(issues)``
* issues and some successful child  -> ``ErrPartial(issues, successes only)``
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Sequence

from .context import Context
from .issue import Issue
from .result import Err, ErrPartial, Ok

__all__ = ["parse_child", "Aggregate"]


def parse_child(type: Any, value: Any, path: Sequence[Any], options: Mapping[str, Any]) -> Ok | Err:
    """Run one child through the full pipeline at the given relative *path*."""
    return Context.new(type, value, options).put_path(path).parse().unwrap()


class Aggregate:
    """Accumulates child outcomes for one composite parse."""

    def __init__(self, options: Mapping[str, Any]):
        self.options = options
        self.parsed: list[tuple[Any, Any]] = []
        self.issues: list[Issue] = []

    def visit(self, key: Any, type: Any, value: Any, path: Sequence[Any] | None = None) -> Ok | Err:
        result = parse_child(type, value, (key,) if path is None else path, self.options)
        if result.ok:
            self.parsed.append((key, result.value))
        else:
            self.issues.extend(result.issues)
        return result

    def add_issues(self, issues: Iterable[Issue]) -> None:
        self.issues.extend(issues)

    def settle(self, build: Callable[[list[tuple[Any, Any]]], Any]) -> Ok | Err:
        if not self.issues:
            return Ok(build(self.parsed))
        if not self.parsed:
            return Err(self.issues)
        return ErrPartial(self.issues, build(self.parsed))
