"""
context.py - the per-value parse pipeline.

One :class:`Context` exists per parse attempt of one value (each child of
a composite gets its own).  :meth:`Context.parse` drives it through four
states, in fixed order, each of which may stop the pipeline:

1. resolve default  - fill an absent (``None``) output from ``type.default``
2. validate required - absent + required -> ``"is required"``; absent +
                       optional -> halt successfully with ``None``
3. parse type       - delegate to the kind's ``parse_type``; an
                       ``ErrPartial`` keeps the partial output and raises
                       the context's ``score`` (used by union resolution)
4. apply effects    - transforms / refines, see :mod:`typeshape.effects`

Contexts are immutable; every step returns a new one.
"""

from __future__ import annotations

import copy
import dataclasses
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping, Sequence

from .effects import apply_effects
from .issue import Issue, issue, prepend_path
from .result import Err, ErrPartial, Ok
from .utils import is_lazy, normalize_options, resolve

__all__ = ["Context", "score"]

_CONTINUE, _HALT, _ERROR = "continue", "halt", "error"


@dataclass(frozen=True)
class Context:
    type: Any
    input: Any = None
    output: Any = None
    path: tuple = ()
    issues: tuple = ()
    score: int = 0
    options: Mapping[str, Any] = field(default_factory=dict)
    valid: bool = True

    # ------------------------------------------------------------------ #
    # Construction & bookkeeping                                          #
    # ------------------------------------------------------------------ #
    @classmethod
    def new(cls, type: Any, input: Any, options: Mapping[str, Any] | None = None) -> "Context":
        return cls(type=type, input=input, output=input, options=normalize_options(options))

    def put_path(self, path: Sequence[Any]) -> "Context":
        return replace(self, path=tuple(path))

    def append_issues(self, new_issues: Iterable[Issue]) -> "Context":
        """Append issues; a context with any issue is permanently invalid."""
        new_issues = tuple(new_issues)
        if not new_issues:
            return self
        return replace(self, issues=self.issues + new_issues, valid=False)

    def add_issue(self, template: str, **params: Any) -> "Context":
        """Append one issue at this context's path (handy inside refines)."""
        return self.append_issues([issue(self.path, template, **params)])

    def inc_score(self, inc: int = 1) -> "Context":
        if inc == 0:
            return self
        return replace(self, score=self.score + inc)

    def unwrap(self) -> Ok | Err:
        if self.valid:
            return Ok(self.output)
        return Err(self.issues)

    # ------------------------------------------------------------------ #
    # Pipeline                                                            #
    # ------------------------------------------------------------------ #
    def parse(self) -> "Context":
        ctx = self
        for step in (_resolve_default, _validate_required, _parse_type, _apply_effects):
            status, ctx = step(ctx)
            if status != _CONTINUE:
                break
        return ctx


def _resolve_default(ctx: Context):
    default = ctx.type.default
    if ctx.output is not None or default is None:
        return _CONTINUE, ctx
    value = resolve(default) if is_lazy(default) else copy.deepcopy(default)
    return _CONTINUE, replace(ctx, output=value)


def _validate_required(ctx: Context):
    if ctx.output is not None:
        return _CONTINUE, ctx
    if ctx.type.required:
        return _ERROR, ctx.append_issues([issue(ctx.path, "is required")])
    return _HALT, ctx


def _parse_type(ctx: Context):
    result = ctx.type.parse_type(ctx.output, ctx.options)
    if isinstance(result, Ok):
        return _CONTINUE, replace(ctx, output=result.value)
    if isinstance(result, ErrPartial):
        ctx = replace(ctx, output=result.partial).inc_score(score(result.partial))
        return _ERROR, ctx.append_issues(prepend_path(result.issues, ctx.path))
    if isinstance(result, Err):
        return _ERROR, replace(ctx, output=None).append_issues(prepend_path(result.issues, ctx.path))
    raise TypeError(f"{type(ctx.type).__name__}.parse_type returned {result!r}")


def _apply_effects(ctx: Context):
    if not ctx.type.effects:
        return _CONTINUE, ctx
    ok, ctx = apply_effects(ctx)
    return (_CONTINUE if ok else _ERROR), ctx


def score(value: Any) -> int:
    """Rough count of how much of a partial value validated."""
    if value is None:
        return 0
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        value = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    if isinstance(value, Mapping):
        return 1 + sum(score(v) for v in value.values())
    if isinstance(value, (list, tuple)):
        return 1 + sum(score(v) for v in value)
    return 1
