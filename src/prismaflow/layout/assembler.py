"""Assembly of positioned nodes, edges and rank groups for one variant.

The assembler is the only place box text is composed.  All metrics the
active variant needs are checked before any node is built, so missing
data fails the whole render instead of producing a blank box.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from ..core.formatting import (
    NARROW_WRAP,
    WIDE_WRAP,
    compose_cell,
    compose_multi_reason,
    wrap,
)
from ..core.ids import NodeId
from ..core.models import DiagramStyle, Edge, FlowData, Node, RankGroup, Tooltips
from ..utils.logging import get_logger
from . import topology
from .variant import VariantParams

logger = get_logger(__name__)


@dataclass(frozen=True)
class Assembly:
    """Nodes, edges and rank groups of one variant, in emission order."""

    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...]
    rank_groups: Tuple[RankGroup, ...]

    @property
    def node_ids(self) -> Tuple[NodeId, ...]:
        return tuple(node.id for node in self.nodes)

    def node(self, node_id: NodeId) -> Node:
        for node in self.nodes:
            if node.id == node_id:
                return node
        raise KeyError(node_id)


# -- box text ---------------------------------------------------------------

def _identified(flow: FlowData, metrics: Tuple[str, ...]) -> str:
    lines = ["Records identified from:"]
    lines.extend(compose_cell(flow.label(m), flow.count(m)) for m in metrics)
    return "\n".join(lines)


def _stacked(metric: str) -> Callable[[FlowData], str]:
    def build(flow: FlowData) -> str:
        return compose_cell(flow.label(metric), flow.count(metric), stacked=True)
    return build


def _text(key: str) -> Callable[[FlowData], str]:
    def build(flow: FlowData) -> str:
        return flow.label(key)
    return build


def _previous_studies(flow: FlowData) -> str:
    studies = wrap(compose_cell(flow.label("previous_studies"), flow.count("previous_studies")), WIDE_WRAP)
    reports = wrap(flow.label("previous_reports"), WIDE_WRAP)
    return f"{studies}\n\n{reports}\n(n = {flow.count('previous_reports')})"


def _removed_before_screening(flow: FlowData) -> str:
    cells = [
        wrap(compose_cell(flow.label(m), flow.count(m)), NARROW_WRAP)
        for m in ("duplicates", "excluded_automatic", "excluded_other")
    ]
    return "Records removed before\nscreening:\n" + "\n".join(cells)


def _excluded_with_reasons(metric: str) -> Callable[[FlowData], str]:
    def build(flow: FlowData) -> str:
        return compose_multi_reason(flow.label(metric), flow.exclusions(metric))
    return build


def _new_studies(flow: FlowData) -> str:
    return (
        f"{wrap(flow.label('new_studies'), WIDE_WRAP)}\n(n = {flow.count('new_studies')})\n"
        f"{wrap(flow.label('new_reports'), WIDE_WRAP)}\n(n = {flow.count('new_reports')})"
    )


def _totals(flow: FlowData) -> str:
    studies = wrap(compose_cell(flow.label("total_studies"), flow.count("total_studies")), WIDE_WRAP)
    reports = wrap(compose_cell(flow.label("total_reports"), flow.count("total_reports")), WIDE_WRAP)
    return f"{studies}\n{reports}"


LABELS: Dict[NodeId, Callable[[FlowData], str]] = {
    NodeId.N1: _text("prevstud"),
    NodeId.N2: _previous_studies,
    NodeId.N3: _text("newstud"),
    NodeId.N4: lambda flow: _identified(flow, ("database_results", "register_results")),
    NodeId.N5: _removed_before_screening,
    NodeId.N6: _stacked("records_screened"),
    NodeId.N7: _stacked("records_excluded"),
    NodeId.N8: _stacked("dbr_sought_reports"),
    NodeId.N9: _stacked("dbr_notretrieved_reports"),
    NodeId.N10: _stacked("dbr_assessed"),
    NodeId.N11: _excluded_with_reasons("dbr_excluded"),
    NodeId.N12: _new_studies,
    NodeId.N13: _text("othstud"),
    NodeId.N14: lambda flow: _identified(
        flow, ("website_results", "organisation_results", "citations_results")
    ),
    NodeId.N15: _stacked("other_sought_reports"),
    NodeId.N16: _stacked("other_notretrieved_reports"),
    NodeId.N17: _stacked("other_assessed"),
    NodeId.N18: _excluded_with_reasons("other_excluded"),
    NodeId.N19: _totals,
}


# -- styling ----------------------------------------------------------------

def _node_style(role: str, style: DiagramStyle) -> Tuple[str, str]:
    """Return ``(color, graphviz style)`` for a node role."""
    if role == "title_header":
        return style.title_colour, "rounded,filled"
    if role == "grey_header":
        return style.greybox_colour, "rounded,filled"
    if role == "grey":
        return style.greybox_colour, "filled"
    if role == "main":
        return style.main_colour, ""
    if role == "rail":
        return "White", "filled,rounded"
    return "White", ""


def _edge(spec: topology.EdgeSpec, style: DiagramStyle) -> Edge:
    if spec.kind == "invisible":
        return Edge(spec.source, spec.target, "transparent", "none", "none",
                    group=spec.cluster, style="invis")
    if spec.kind == "hidden":
        return Edge(spec.source, spec.target, "White", "none", "none", group=spec.cluster)
    if spec.kind == "line":
        return Edge(spec.source, spec.target, style.arrow_colour, "none", style.arrow_tail,
                    group=spec.cluster)
    if spec.kind == "feedback":
        return Edge(spec.source, spec.target, style.arrow_colour, style.arrow_head, "none",
                    group=spec.cluster, constraint=False)
    return Edge(spec.source, spec.target, style.arrow_colour, style.arrow_head, style.arrow_tail,
                group=spec.cluster, style=spec.style)


# -- assembly ---------------------------------------------------------------

def check_required(flow: FlowData, variant: VariantParams) -> None:
    """Raise ``MissingDataError`` for the first metric the variant needs but lacks."""
    for name, needs_count in variant.required_metrics:
        if needs_count:
            flow.count(name)
        flow.label(name)


def _rail(
    spec: topology.NodeSpec,
    variant: VariantParams,
    tooltips: Tooltips,
    style: DiagramStyle,
) -> Node:
    if spec.id == NodeId.INCLUDED:
        y = variant.h_adj1 + spec.row
        height = spec.height - variant.h_adj2
    else:
        y = variant.y_offset + spec.row
        height = spec.height
    color, node_style = _node_style("rail", style)
    return Node(
        id=spec.id,
        label="",
        x=spec.col,
        y=y,
        width=spec.width,
        height=height,
        color=color,
        style=node_style,
        tooltip=tooltips.get(spec.id),
    )


def _box(
    spec: topology.NodeSpec,
    flow: FlowData,
    variant: VariantParams,
    tooltips: Tooltips,
    style: DiagramStyle,
) -> Node:
    color, node_style = _node_style(spec.role, style)
    x = variant.x_offset + spec.col
    y = variant.y_offset + spec.row
    if spec.role == "corner":
        return Node(
            id=spec.id, label="", x=x, y=y, width=spec.width, height=spec.height,
            color=color, shape="square",
        )
    return Node(
        id=spec.id,
        label=LABELS[spec.id](flow),
        x=x,
        y=y,
        width=spec.width,
        height=spec.height,
        color=color,
        style=node_style or None,
        tooltip=tooltips.get(spec.id),
        fontname=style.font,
    )


def assemble(
    flow: FlowData,
    tooltips: Tooltips,
    variant: VariantParams,
    style: DiagramStyle,
) -> Assembly:
    """Build every node, edge and rank group active in ``variant``.

    Raises:
        MissingDataError: A metric required by an active node has no count
            or label.  Raised before any node is built.
    """
    check_required(flow, variant)

    nodes: List[Node] = []
    for node_id in variant.node_ids:
        spec = topology.NODES[node_id]
        if spec.role == "rail":
            nodes.append(_rail(spec, variant, tooltips, style))
        else:
            nodes.append(_box(spec, flow, variant, tooltips, style))

    edges = tuple(
        _edge(spec, style)
        for spec in topology.EDGES
        if (spec.source, spec.target) in variant.edge_ids
    )

    active = set(variant.node_ids)
    rank_groups = tuple(
        group
        for group in (tuple(n for n in rank if n in active) for rank in topology.RANKS)
        if group
    )

    logger.debug(
        f"Assembled variant {variant.variant.value}: "
        f"{len(nodes)} nodes, {len(edges)} edges, {len(rank_groups)} rank groups"
    )
    return Assembly(nodes=tuple(nodes), edges=edges, rank_groups=rank_groups)
