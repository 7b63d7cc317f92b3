"""Closed identifier vocabularies for flowchart nodes and boxes."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class NodeId(str, Enum):
    """Node identifiers used in the diagram description.

    The three section rails are named, the content boxes are numbered and
    ``A``/``B`` are the zero-size corner nodes used to bend feedback edges.
    Declaration order here is the order nodes are emitted.
    """

    IDENTIFICATION = "identification"
    SCREENING = "screening"
    INCLUDED = "included"
    N1 = "1"
    N2 = "2"
    N3 = "3"
    N4 = "4"
    N5 = "5"
    N6 = "6"
    N7 = "7"
    N8 = "8"
    N9 = "9"
    N10 = "10"
    N11 = "11"
    N12 = "12"
    N13 = "13"
    N14 = "14"
    N15 = "15"
    N16 = "16"
    N17 = "17"
    N18 = "18"
    N19 = "19"
    A = "A"
    B = "B"

    def __str__(self) -> str:
        return self.value


class BoxName(str, Enum):
    """Logical box names used by the hyperlink mapping."""

    IDENTIFICATION = "identification"
    SCREENING = "screening"
    INCLUDED = "included"
    PREVSTUD = "prevstud"
    NEWSTUD = "newstud"
    OTHSTUD = "othstud"
    BOX1 = "box1"
    BOX2 = "box2"
    BOX3 = "box3"
    BOX4 = "box4"
    BOX5 = "box5"
    BOX6 = "box6"
    BOX7 = "box7"
    BOX8 = "box8"
    BOX9 = "box9"
    BOX10 = "box10"
    BOX11 = "box11"
    BOX12 = "box12"
    BOX13 = "box13"
    BOX14 = "box14"
    BOX15 = "box15"
    BOX16 = "box16"
    A = "A"
    B = "B"

    def __str__(self) -> str:
        return self.value


RAIL_NODES: Tuple[NodeId, ...] = (NodeId.IDENTIFICATION, NodeId.SCREENING, NodeId.INCLUDED)

# Node -> box name used when resolving hyperlinks
NODE_BOX_NAMES: Dict[NodeId, BoxName] = {
    NodeId.IDENTIFICATION: BoxName.IDENTIFICATION,
    NodeId.SCREENING: BoxName.SCREENING,
    NodeId.INCLUDED: BoxName.INCLUDED,
    NodeId.N1: BoxName.PREVSTUD,
    NodeId.N2: BoxName.BOX1,
    NodeId.N3: BoxName.NEWSTUD,
    NodeId.N4: BoxName.BOX2,
    NodeId.N5: BoxName.BOX3,
    NodeId.N6: BoxName.BOX4,
    NodeId.N7: BoxName.BOX5,
    NodeId.N8: BoxName.BOX6,
    NodeId.N9: BoxName.BOX7,
    NodeId.N10: BoxName.BOX8,
    NodeId.N11: BoxName.BOX9,
    NodeId.N12: BoxName.BOX10,
    NodeId.N13: BoxName.OTHSTUD,
    NodeId.N14: BoxName.BOX11,
    NodeId.N15: BoxName.BOX12,
    NodeId.N16: BoxName.BOX13,
    NodeId.N17: BoxName.BOX14,
    NodeId.N18: BoxName.BOX15,
    NodeId.N19: BoxName.BOX16,
    NodeId.A: BoxName.A,
    NodeId.B: BoxName.B,
}

# Tooltip slots follow the row order of the data template, not node order.
TOOLTIP_SLOTS: Tuple[NodeId, ...] = (
    NodeId.N1,
    NodeId.N2,
    NodeId.N3,
    NodeId.N4,
    NodeId.N13,
    NodeId.N14,
    NodeId.N5,
    NodeId.N6,
    NodeId.N7,
    NodeId.N8,
    NodeId.N9,
    NodeId.N15,
    NodeId.N16,
    NodeId.N10,
    NodeId.N11,
    NodeId.N17,
    NodeId.N18,
    NodeId.N12,
    NodeId.N19,
    NodeId.IDENTIFICATION,
    NodeId.SCREENING,
    NodeId.INCLUDED,
)

# Header boxes whose text is keyed by box name rather than by metric
HEADER_BOXES: Tuple[BoxName, ...] = (BoxName.PREVSTUD, BoxName.NEWSTUD, BoxName.OTHSTUD)
