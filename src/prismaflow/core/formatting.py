"""Text composition for flowchart box labels."""

import textwrap
from typing import Iterable, Tuple, Union

from .models import ExclusionReason

# Column widths for wrapped cells: two-column boxes and the
# removed-before-screening box.
WIDE_WRAP = 33
NARROW_WRAP = 32


def wrap(text: str, width: int) -> str:
    """Greedy word wrap to ``width`` columns, joined with newlines.

    Whitespace is normalised first.  Words are never split, so a single
    word longer than ``width`` occupies its own over-long line.
    """
    if not text:
        return ""
    text = " ".join(text.split())
    if not text:
        return ""
    return textwrap.fill(
        text,
        width=width,
        break_long_words=False,
        break_on_hyphens=False,
    )


def compose_cell(label: str, count: int, stacked: bool = False) -> str:
    """Join a label and its count, e.g. ``"Records screened (n = 12)"``."""
    if stacked:
        return f"{label}\n(n = {count})"
    return f"{label} (n = {count})"


def compose_multi_reason(
    base: str,
    reasons: Iterable[Union[ExclusionReason, Tuple[str, int]]],
) -> str:
    """Append one ``reason (n = count)`` line per exclusion reason, in order."""
    lines = [base]
    for item in reasons:
        if isinstance(item, ExclusionReason):
            reason, count = item.reason, item.count
        else:
            reason, count = item
        lines.append(f"\n{reason} (n = {count})")
    return "".join(lines)
