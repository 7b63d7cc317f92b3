"""Selection of the diagram variant from the two inclusion flags.

The ``previous`` and ``other`` flags pick one of four fixed topologies.
``select_variant`` returns a complete, immutable parameter bundle so that
no downstream component has to branch on the flags again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Dict, FrozenSet, Tuple

from ..core.ids import BoxName, NodeId, NODE_BOX_NAMES
from . import topology


class Variant(str, Enum):
    """The four topologies, named by (previous, other): P = present, F = absent."""

    PP = "PP"
    FP = "FP"
    PF = "PF"
    FF = "FF"

    @classmethod
    def from_flags(cls, previous: bool, other: bool) -> "Variant":
        return cls(("P" if previous else "F") + ("P" if other else "F"))


# Pixel coordinates of the rotated section labels, relative to the
# rendered rail groups.  These are Graphviz calibration constants used
# only when the rail geometry cannot be read from the rendered SVG.
LABEL_CALIBRATION: Dict[Variant, Dict[NodeId, Tuple[float, float]]] = {
    Variant.PP: {
        NodeId.IDENTIFICATION: (610, 19),
        NodeId.SCREENING: (365, 19),
        NodeId.INCLUDED: (105, 19),
    },
    Variant.PF: {
        NodeId.IDENTIFICATION: (610, 19),
        NodeId.SCREENING: (365, 19),
        NodeId.INCLUDED: (105, 19),
    },
    Variant.FP: {
        NodeId.IDENTIFICATION: (502, 19),
        NodeId.SCREENING: (257, 19),
        NodeId.INCLUDED: (38, 19),
    },
    Variant.FF: {
        NodeId.IDENTIFICATION: (502, 19),
        NodeId.SCREENING: (257, 19),
        NodeId.INCLUDED: (38, 19),
    },
}


@dataclass(frozen=True)
class VariantParams:
    """Everything that differs between the four variants.

    Attributes:
        variant: Which of the four topologies is active.
        x_offset, y_offset: Grid origin shift added to every box position.
        h_adj1, h_adj2: Vertical position and height adjustments for the
            "Included" rail so it spans only the active rows.
        node_ids: Active nodes in emission order.
        edge_ids: Active ``(source, target)`` pairs.
        label_positions: Fallback coordinates for the rotated rail labels.
    """

    variant: Variant
    previous: bool
    other: bool
    x_offset: float
    y_offset: float
    h_adj1: float
    h_adj2: float
    node_ids: Tuple[NodeId, ...]
    edge_ids: FrozenSet[Tuple[NodeId, NodeId]]
    label_positions: Dict[NodeId, Tuple[float, float]] = field(compare=False, hash=False)

    @property
    def rendered_ids(self) -> Dict[NodeId, str]:
        """Map each active node to the SVG group id Graphviz gives it.

        Graphviz numbers node groups ``node1``, ``node2``, ... in the order
        nodes are declared, so ids shift when optional arms are absent.
        """
        return {node: f"node{i}" for i, node in enumerate(self.node_ids, start=1)}

    @property
    def box_names(self) -> Dict[NodeId, BoxName]:
        return {node: NODE_BOX_NAMES[node] for node in self.node_ids}

    @property
    def required_metrics(self) -> Tuple[Tuple[str, bool], ...]:
        """``(name, needs_count)`` pairs for every active node, in emission order."""
        required = []
        for node in self.node_ids:
            spec = topology.NODES[node]
            required.extend((metric, True) for metric in spec.metrics)
            required.extend((text, False) for text in spec.texts)
        return tuple(required)

    def is_active(self, node: NodeId) -> bool:
        return node in self.node_ids


def _blocks(previous: bool, other: bool) -> FrozenSet[str]:
    blocks = {topology.MAIN}
    if previous:
        blocks.add(topology.PREVIOUS)
    if other:
        blocks.add(topology.OTHER)
    return frozenset(blocks)


@lru_cache(maxsize=None)
def select_variant(previous: bool, other: bool) -> VariantParams:
    """Return the parameter bundle for a flag combination.

    Every combination is valid.  Without the previous-studies arm the
    layout shifts left by 3.5 units and the "Included" rail shrinks,
    since the totals row is gone.
    """
    previous, other = bool(previous), bool(other)
    variant = Variant.from_flags(previous, other)
    blocks = _blocks(previous, other)
    node_ids = tuple(
        node for node in NodeId if topology.NODES[node].block in blocks
    )
    edge_ids = frozenset(
        (edge.source, edge.target) for edge in topology.EDGES if edge.block in blocks
    )
    if previous:
        x_offset, h_adj1, h_adj2 = 0.0, 0.0, 0.0
    else:
        x_offset, h_adj1, h_adj2 = -3.5, 0.63, 1.4

    return VariantParams(
        variant=variant,
        previous=previous,
        other=other,
        x_offset=x_offset,
        y_offset=0.0,
        h_adj1=h_adj1,
        h_adj2=h_adj2,
        node_ids=node_ids,
        edge_ids=edge_ids,
        label_positions=LABEL_CALIBRATION[variant],
    )
