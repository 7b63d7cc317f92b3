"""Exception and warning types raised by the flowchart pipeline.

Assembly-stage errors (missing or malformed data) are raised before any
diagram source is emitted, so a failed render never produces a partial
diagram.  Overlay lookups that miss are reported through
``UnresolvedURLWarning`` and never abort a render.
"""

from __future__ import annotations

from typing import Optional


class PrismaError(Exception):
    """Base class for all flowchart errors."""


class MissingDataError(PrismaError):
    """A metric required by the active variant has no count or label."""

    def __init__(self, metric: str, kind: str = "count") -> None:
        self.metric = metric
        self.kind = kind
        super().__init__(f"Missing {kind} for metric '{metric}'")


class MalformedExclusionTableError(PrismaError):
    """An exclusion-reason table could not be parsed."""

    def __init__(self, metric: str, detail: str) -> None:
        self.metric = metric
        self.detail = detail
        super().__init__(f"Malformed exclusion table '{metric}': {detail}")


class InvalidCountError(PrismaError):
    """A scalar count is not a non-negative integer."""

    def __init__(self, metric: str, value: object) -> None:
        self.metric = metric
        self.value = value
        super().__init__(f"Invalid count for metric '{metric}': {value!r}")


class TemplateFormatError(PrismaError):
    """The data template is missing columns or uses unknown box names."""


class RenderError(PrismaError):
    """The graph rendering engine failed to lay out the diagram."""


class RasterizationError(PrismaError):
    """The external rasterizer failed while exporting PDF or PNG."""

    def __init__(self, message: str, filename: Optional[str] = None) -> None:
        self.filename = filename
        super().__init__(message)


class UnresolvedURLWarning(UserWarning):
    """One or more active boxes have no hyperlink target."""
