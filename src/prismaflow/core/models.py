"""Core domain models for flowchart data, style and diagram elements."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, field_validator

from ..config.settings import settings
from .errors import InvalidCountError, MalformedExclusionTableError, MissingDataError
from .ids import BoxName, NodeId, TOOLTIP_SLOTS


class ExclusionReason(BaseModel):
    """One row of an exclusion table: a reason and how many reports it removed."""

    model_config = ConfigDict(frozen=True)

    reason: str
    count: NonNegativeInt


def parse_count(metric: str, raw: Any) -> int:
    """Parse a count cell, accepting ``"12"`` and ``"12.0"``.

    Raises:
        InvalidCountError: The value is not a non-negative integer.
    """
    text = str(raw).strip()
    try:
        value = int(text)
    except ValueError:
        try:
            as_float = float(text)
        except ValueError:
            raise InvalidCountError(metric, raw) from None
        if not as_float.is_integer():
            raise InvalidCountError(metric, raw)
        value = int(as_float)
    if value < 0:
        raise InvalidCountError(metric, raw)
    return value


def parse_exclusion_table(metric: str, value: Any) -> List[ExclusionReason]:
    """Coerce an exclusion table into an ordered list of reasons.

    Accepts ``ExclusionReason`` objects, ``(reason, count)`` pairs or the
    template cell form ``"Reason 1, 10; Reason 2, 20"``.  Order is kept
    exactly as given.
    """
    if value is None:
        return []
    if isinstance(value, str):
        rows: List[Tuple[str, Any]] = []
        for part in value.split(";"):
            part = part.strip()
            if not part:
                continue
            reason, sep, count = part.rpartition(",")
            if not sep:
                raise MalformedExclusionTableError(metric, f"missing count in {part!r}")
            rows.append((reason.strip(), count.strip()))
        value = rows
    reasons: List[ExclusionReason] = []
    for row in value:
        if isinstance(row, ExclusionReason):
            reasons.append(row)
            continue
        if isinstance(row, Mapping):
            row = (row.get("reason"), row.get("count"))
        try:
            reason, count = row
        except (TypeError, ValueError):
            raise MalformedExclusionTableError(metric, f"expected (reason, count), got {row!r}")
        if reason is None or str(reason).strip() == "":
            raise MalformedExclusionTableError(metric, f"empty reason in {row!r}")
        try:
            number = parse_count(metric, count)
        except InvalidCountError:
            raise MalformedExclusionTableError(
                metric, f"count {count!r} for {reason!r} is not a non-negative integer"
            ) from None
        reasons.append(ExclusionReason(reason=str(reason), count=number))
    return reasons


class FlowData(BaseModel):
    """Counts and box texts for one flowchart.

    ``counts`` and ``labels`` are keyed by metric name.  The header boxes
    (``prevstud``, ``newstud``, ``othstud``) carry text only and are keyed
    by box name in ``labels``.  The two exclusion tables list one reason
    per line inside a single box.
    """

    model_config = ConfigDict(frozen=True)

    counts: Dict[str, NonNegativeInt] = Field(default_factory=dict)
    labels: Dict[str, str] = Field(default_factory=dict)
    dbr_excluded: List[ExclusionReason] = Field(default_factory=list)
    other_excluded: List[ExclusionReason] = Field(default_factory=list)

    @field_validator("dbr_excluded", "other_excluded", mode="before")
    @classmethod
    def _coerce_exclusions(cls, v: Any, info) -> List[ExclusionReason]:
        return parse_exclusion_table(info.field_name, v)

    def count(self, metric: str) -> int:
        """Return the count for ``metric`` or raise ``MissingDataError``."""
        value = self.counts.get(metric)
        if value is None:
            raise MissingDataError(metric, "count")
        return value

    def label(self, metric: str) -> str:
        """Return the display text for ``metric`` or raise ``MissingDataError``."""
        value = self.labels.get(metric)
        if value is None:
            raise MissingDataError(metric, "label")
        return value

    def exclusions(self, metric: str) -> List[ExclusionReason]:
        if metric == "dbr_excluded":
            return self.dbr_excluded
        if metric == "other_excluded":
            return self.other_excluded
        raise KeyError(metric)


class Tooltips(BaseModel):
    """Mouse-over text per node.  Nodes without an entry have no tooltip."""

    model_config = ConfigDict(frozen=True)

    entries: Dict[NodeId, str] = Field(default_factory=dict)

    @classmethod
    def from_sequence(cls, values: Iterable[Optional[str]]) -> "Tooltips":
        """Build tooltips from the ordered template sequence (at most 22 slots)."""
        values = list(values)
        if len(values) > len(TOOLTIP_SLOTS):
            raise ValueError(
                f"Expected at most {len(TOOLTIP_SLOTS)} tooltips, got {len(values)}"
            )
        entries = {
            node: value
            for node, value in zip(TOOLTIP_SLOTS, values)
            if value
        }
        return cls(entries=entries)

    def get(self, node: NodeId) -> str:
        return self.entries.get(node, "")


class UrlMap(BaseModel):
    """Hyperlink targets keyed by logical box name."""

    model_config = ConfigDict(frozen=True)

    urls: Dict[BoxName, str] = Field(default_factory=dict)

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Optional[str]]]) -> "UrlMap":
        """Build from a plain ``{box_name: url}`` mapping, dropping empty URLs."""
        if not mapping:
            return cls()
        return cls(urls={box: url for box, url in mapping.items() if url})

    def get(self, box: BoxName) -> Optional[str]:
        return self.urls.get(box)

    def __len__(self) -> int:
        return len(self.urls)


class DiagramStyle(BaseModel):
    """Font, colours and arrow shapes.  Independent of topology."""

    model_config = ConfigDict(frozen=True)

    font: str = Field(default_factory=lambda: settings.font)
    title_colour: str = Field(default_factory=lambda: settings.title_colour)
    greybox_colour: str = Field(default_factory=lambda: settings.greybox_colour)
    main_colour: str = Field(default_factory=lambda: settings.main_colour)
    arrow_colour: str = Field(default_factory=lambda: settings.arrow_colour)
    arrow_head: str = Field(default_factory=lambda: settings.arrow_head)
    arrow_tail: str = Field(default_factory=lambda: settings.arrow_tail)


class RenderConfig(BaseModel):
    """Flags and style for one render call."""

    model_config = ConfigDict(frozen=True)

    previous: bool = True
    other: bool = True
    style: DiagramStyle = Field(default_factory=DiagramStyle)


class PrismaData(BaseModel):
    """Everything the data loader produces for one flowchart."""

    model_config = ConfigDict(frozen=True)

    flow: FlowData
    tooltips: Tooltips = Field(default_factory=Tooltips)
    urls: UrlMap = Field(default_factory=UrlMap)


@dataclass(frozen=True)
class Node:
    """A positioned box in the diagram."""

    id: NodeId
    label: str
    x: float
    y: float
    width: Optional[float]
    height: Optional[float]
    color: str
    shape: str = "box"
    style: Optional[str] = None
    tooltip: str = ""
    fontname: Optional[str] = None

    @property
    def pos(self) -> str:
        """Graphviz pinned position, e.g. ``"4,7.5!"``."""
        return f"{format_number(self.x)},{format_number(self.y)}!"


@dataclass(frozen=True)
class Edge:
    """A directed connector between two nodes."""

    source: NodeId
    target: NodeId
    color: str
    arrowhead: str
    arrowtail: str
    group: Optional[str] = None
    style: Optional[str] = None
    constraint: bool = True

    @property
    def key(self) -> Tuple[NodeId, NodeId]:
        return (self.source, self.target)

    @property
    def invisible(self) -> bool:
        return self.style == "invis"


RankGroup = Tuple[NodeId, ...]

Number = Union[int, float]


def format_number(value: Number) -> str:
    """Format a coordinate without float noise (``4.0`` -> ``4``, ``0.1+0.2`` -> ``0.3``)."""
    rounded = round(float(value), 4)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:g}"
