# typeshape/card.py
from __future__ import annotations
from typing import Any, Iterable, Sequence

from .issue import Issue, summarize

__all__ = ["to_markdown_card"]

def _format_list(v: Sequence[Any]) -> str:
    """Return a bulleted Markdown list (no surrounding blank lines)."""
    return "\n".join(f"- {item}" for item in v)

def to_markdown_card(issues: Iterable[Issue], *, heading_level: int = 2) -> str:
    """
    Convert *issues* into a Markdown card.

    Parameters
    ----------
    issues : Iterable[Issue]
        Issues from an ``Err`` (an ``Err`` itself is accepted too).
    heading_level : int, default 2
        Markdown heading level for each field path (##, ###, …).

    Returns
    -------
    str
        Markdown document with one section per path in first-seen order;
        an empty string when there are no issues.
    """
    if not 1 <= heading_level <= 6:
        raise ValueError(f"heading_level must be between 1 and 6, got {heading_level}")
    issues = getattr(issues, "issues", issues)

    h = "#" * heading_level
    parts: list[str] = []
    for path, messages in summarize(issues).items():
        parts.append(f"{h} `{path}`" if path else f"{h} (root)")
        parts.append(_format_list(messages))
        parts.append("")             # blank line after each section
    return "\n".join(parts).rstrip()
