"""Serialisation of an assembled diagram into Graphviz DOT source.

The emitted source pins every node with ``pos="x,y!"`` and is meant for
the ``neato`` engine.  Output is a pure function of the assembly, so two
emissions of the same inputs are byte-identical.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

import graphviz

from ..core.ids import NodeId
from ..core.models import Edge, Node, format_number
from . import topology
from .assembler import Assembly
from .variant import VariantParams

GRAPH_TOOLTIP = "Click the boxes for further information"


@dataclass(frozen=True)
class DiagramDescription:
    """DOT source plus what the overlays need to find nodes after rendering."""

    source: str
    variant: VariantParams

    @property
    def rendered_ids(self) -> Dict[NodeId, str]:
        return self.variant.rendered_ids

    def __str__(self) -> str:
        return self.source


def escape_text(text: str) -> str:
    """Escape backslashes and turn newlines into DOT ``\\n`` line breaks."""
    return text.replace("\\", "\\\\").replace("\n", "\\n")


def _node_attrs(node: Node) -> Dict[str, str]:
    attrs: Dict[str, str] = {"color": node.color, "pos": node.pos}
    if node.shape != "box":
        attrs["shape"] = node.shape
    if node.style:
        attrs["style"] = node.style
    if node.fontname:
        attrs["fontname"] = node.fontname
    if node.width is not None:
        attrs["width"] = format_number(node.width)
    if node.height is not None:
        attrs["height"] = format_number(node.height)
    attrs["tooltip"] = graphviz.nohtml(escape_text(node.tooltip))
    return attrs


def _edge_attrs(edge: Edge) -> Dict[str, str]:
    attrs = {
        "color": edge.color,
        "arrowhead": edge.arrowhead,
        "arrowtail": edge.arrowtail,
    }
    if edge.style:
        attrs["style"] = edge.style
    if not edge.constraint:
        attrs["constraint"] = "false"
    return attrs


def _add_edges(graph: graphviz.Digraph, edges: List[Edge]) -> None:
    for edge in edges:
        graph.edge(str(edge.source), str(edge.target), **_edge_attrs(edge))


def emit(assembly: Assembly, variant: VariantParams, name: Optional[str] = "prisma") -> DiagramDescription:
    """Serialise ``assembly`` to DOT.

    Nodes are declared in ``variant.node_ids`` order, which fixes the
    ``nodeN`` ids Graphviz assigns in SVG output.  Edges are grouped into
    the template clusters, then rank groups are emitted as
    ``rank=same`` subgraphs.
    """
    dot = graphviz.Digraph(name)
    dot.attr("graph", splines="ortho", layout="neato", tooltip=GRAPH_TOOLTIP)
    dot.attr("node", shape="box")

    for node in assembly.nodes:
        dot.node(str(node.id), label=graphviz.nohtml(escape_text(node.label)), **_node_attrs(node))

    for cluster in topology.CLUSTERS:
        members = [edge for edge in assembly.edges if edge.group == cluster]
        if not members:
            continue
        with dot.subgraph(name=cluster) as sub:
            _add_edges(sub, members)

    _add_edges(dot, [edge for edge in assembly.edges if edge.group is None])

    for group in assembly.rank_groups:
        with dot.subgraph() as rank:
            rank.attr(rank="same")
            for node_id in group:
                rank.node(str(node_id))

    return DiagramDescription(source=dot.source, variant=variant)
