"""
effects.py - post-parse transform / refine steps.

A descriptor's ``effects`` tuple runs in declared order once default
resolution, the required-check and the kind's own parse have all fully
succeeded.  A :class:`Transform` always succeeds and replaces the output;
a :class:`Refine` either lets the pipeline continue or appends an issue
and halts it, so later effects never run after a failed refine.

Refine predicates take the current output (one argument) or the output
and the current :class:`~typeshape.context.Context` (two arguments).
Their return value is interpreted as follows:

===================================  ==========================================
return value                         outcome
===================================  ==========================================
``True``, :class:`Continue`, ``Ok``  continue unchanged
a valid ``Context``                  continue with that context
``False``, an empty ``Err``          issue from the refine's own template
:class:`Fail`                        issue from ``Fail.message``
an ``Exception`` instance            issue whose template is ``str(exc)``
an ``Err`` carrying issues           those issues, at the current path
:class:`FailWith`, invalid Context   that context's issues, verbatim
===================================  ==========================================

Anything else is a programming error and raises ``TypeError``.  Exceptions
*raised* by a transform or refine are never converted into issues.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Mapping, Union

from .issue import issue, prepend_path
from .parameterized import Parameterized
from .result import Err, Ok
from .utils import Ref, arity

__all__ = [
    "Transform",
    "Refine",
    "Continue",
    "Fail",
    "FailWith",
    "apply_effects",
]

logger = logging.getLogger(__name__)

REFINE_ERROR = "is invalid"


# --------------------------------------------------------------------------- #
# Refine outcomes                                                             #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class Continue:
    """The refinement holds."""


@dataclass(frozen=True)
class Fail:
    """The refinement failed with its own message template."""

    message: str
    params: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FailWith:
    """The refinement failed; report the given context's issues as-is."""

    context: Any


# --------------------------------------------------------------------------- #
# Steps                                                                       #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class Transform:
    fn: Union[Callable[[Any], Any], Ref]

    def apply(self, ctx):
        return True, replace(ctx, output=self.fn(ctx.output))


@dataclass(frozen=True)
class Refine:
    check: Parameterized

    @classmethod
    def new(cls, fn: Union[Callable[..., Any], Ref], error: str | None = None) -> "Refine":
        overrides = {"error": error} if error is not None else {}
        return cls(Parameterized.new(fn, {"error": REFINE_ERROR}, **overrides))

    def apply(self, ctx):
        from .context import Context

        fn = self.check.value
        if arity(fn) >= 2:
            outcome = fn(ctx.output, ctx)
        else:
            outcome = fn(ctx.output)

        if outcome is True or isinstance(outcome, (Continue, Ok)):
            return True, ctx
        if isinstance(outcome, Context):
            return outcome.valid, outcome
        if isinstance(outcome, FailWith):
            failed = outcome.context
            if failed.valid:
                failed = failed.append_issues([issue(ctx.path, self.check.error, actual=ctx.output)])
            return False, failed
        if outcome is False or (isinstance(outcome, Err) and not outcome.issues):
            return False, ctx.append_issues([issue(ctx.path, self.check.error, actual=ctx.output)])
        if isinstance(outcome, Err):
            return False, ctx.append_issues(prepend_path(outcome.issues, ctx.path))
        if isinstance(outcome, Fail):
            params = {"actual": ctx.output, **outcome.params}
            return False, ctx.append_issues([issue(ctx.path, outcome.message, **params)])
        if isinstance(outcome, BaseException):
            return False, ctx.append_issues([issue(ctx.path, str(outcome))])

        raise TypeError(
            f"refine {getattr(fn, '__name__', fn)!r} returned {outcome!r}; expected a bool, "
            "Continue, Fail, FailWith, Ok, Err, a Context or an exception instance"
        )


Effect = Union[Transform, Refine]


def apply_effects(ctx):
    """Run ``ctx.type.effects`` in order, stopping at the first failed refine.

    Returns ``(succeeded, context)``.
    """
    for effect in ctx.type.effects:
        ok, ctx = effect.apply(ctx)
        if not ok:
            logger.debug("refine failed at path %r", ctx.path)
            return False, ctx
    return True, ctx
