"""
issue.py - validation issues, their paths and their rendering.

An :class:`Issue` is created by a leaf kind with a path *relative to its
own node* (usually empty).  Every enclosing composite prepends its own
segment with :func:`prepend_path` while the recursion unwinds, so by the
time an issue reaches the caller its path is absolute from the root.

Rendering substitutes every ``%{name}`` placeholder in the template with
a kind-aware rendering of ``params[name]``:

* ``None`` / ``True`` / ``False`` -> ``null`` / ``true`` / ``false``
* strings are single-quoted, ``Enum`` members get a ``:`` sigil
* :class:`Escaped` values are inserted verbatim
* :class:`Conjunction` / :class:`Disjunction` render as natural-language
  lists (``'a', 'b' and 'c'`` / ``'a', 'b' or 'c'``)
* datetimes and dates in ISO-8601, compiled regexes as ``/source/``
"""

from __future__ import annotations

import datetime as _dt
import re
from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Mapping, Sequence, Union

from .parameterized import Parameterized

__all__ = [
    "Issue",
    "Escaped",
    "Conjunction",
    "Disjunction",
    "issue",
    "prepend_path",
    "render",
    "dotted",
    "summarize",
    "pretty_print",
]

Segment = Union[str, int, Enum]

_PLACEHOLDER = re.compile(r"%\{(\w+)\}")


# --------------------------------------------------------------------------- #
# Parameter wrappers                                                          #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class Escaped:
    """A pre-rendered value, inserted into the message as-is."""
    value: Any


@dataclass(frozen=True)
class Conjunction:
    """A list rendered as ``a, b and c``."""
    values: Sequence[Any]


@dataclass(frozen=True)
class Disjunction:
    """A list rendered as ``a, b or c``."""
    values: Sequence[Any]


# --------------------------------------------------------------------------- #
# Issue                                                                       #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class Issue:
    """One validation failure: where it happened and what went wrong."""

    path: tuple = ()
    template: str = ""
    params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "path", tuple(self.path))
        object.__setattr__(self, "params", dict(self.params))

    @property
    def message(self) -> str:
        def substitute(match: re.Match) -> str:
            key = match.group(1)
            return render(self.params[key]) if key in self.params else match.group(0)

        return _PLACEHOLDER.sub(substitute, self.template)

    def __str__(self) -> str:
        return self.message


def issue(*args: Any, **params: Any) -> Issue:
    """Build an issue as ``issue(template)`` or ``issue(path, template)``.

    Keyword arguments become the template parameters.
    """
    if len(args) == 1 and isinstance(args[0], str):
        return Issue((), args[0], params)
    if len(args) == 2 and isinstance(args[1], str):
        return Issue(tuple(args[0]), args[1], params)
    raise TypeError(f"issue() expects (template) or (path, template), got {args!r}")


def prepend_path(issues: Union[Issue, Iterable[Issue]], segments: Sequence[Segment]):
    """Prefix *segments* to the path of one issue or of every issue given."""
    if isinstance(issues, Issue):
        if not segments:
            return issues
        return replace(issues, path=tuple(segments) + issues.path)
    return [prepend_path(i, segments) for i in issues]


# --------------------------------------------------------------------------- #
# Rendering                                                                   #
# --------------------------------------------------------------------------- #

def render(value: Any) -> str:
    """Render a template parameter for humans."""
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, Escaped):
        return str(value.value)
    if isinstance(value, Conjunction):
        return _render_list(value.values, "and")
    if isinstance(value, Disjunction):
        return _render_list(value.values, "or")
    if isinstance(value, Parameterized):
        return render(value.value)
    if isinstance(value, Enum):
        return f":{value.name}"
    if isinstance(value, str):
        return f"'{value}'"
    if isinstance(value, _dt.datetime):
        text = value.isoformat()
        return text[:-6] + "Z" if text.endswith("+00:00") else text
    if isinstance(value, _dt.date):
        return value.isoformat()
    if isinstance(value, re.Pattern):
        return f"/{value.pattern}/"
    if isinstance(value, Decimal):
        return str(value)
    return str(value)


def _render_list(values: Sequence[Any], connector: str) -> str:
    rendered = [render(v) for v in values]
    if not rendered:
        return ""
    if len(rendered) == 1:
        return rendered[0]
    return ", ".join(rendered[:-1]) + f" {connector} " + rendered[-1]


def _segment(seg: Segment) -> str:
    if isinstance(seg, Enum):
        return str(seg.value) if isinstance(seg.value, str) else seg.name
    return str(seg)


def dotted(path: Sequence[Segment]) -> str:
    """``("user", 0, "email")`` -> ``"user.0.email"``; root is ``""``."""
    return ".".join(_segment(s) for s in path)


# --------------------------------------------------------------------------- #
# Reports                                                                     #
# --------------------------------------------------------------------------- #

def summarize(issues: Iterable[Issue]) -> dict[str, list[str]]:
    """Group rendered messages by dotted path, preserving first-seen order."""
    summary: dict[str, list[str]] = {}
    for i in issues:
        summary.setdefault(dotted(i.path), []).append(i.message)
    return summary


_RED_UNDERLINE = "\x1b[31m\x1b[4m"
_RESET = "\x1b[0m"


def pretty_print(issues: Iterable[Issue], *, color: bool = False) -> str:
    """Multi-line report with one line per path.

    ``color=True`` highlights each path with ANSI red + underline for
    terminal output.
    """
    lines = ["One or more fields failed validation:"]
    for path, messages in summarize(issues).items():
        label = path or "(root)"
        if color:
            label = f"{_RED_UNDERLINE}{label}{_RESET}"
        lines.append(f"  * Field `{label}` {', '.join(messages)};")
    return "\n".join(lines) + "\n"
