"""The fixed PRISMA 2020 template: node grid and edge list.

Every node and edge of the full diagram is listed here once, tagged with
the optional arm (``previous`` or ``other``) it belongs to.  Variants
filter these tables; they never add to them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..core.ids import NodeId

MAIN = "main"
PREVIOUS = "previous"
OTHER = "other"


@dataclass(frozen=True)
class NodeSpec:
    """Grid placement and data requirements of one template node.

    ``col``/``row`` are offsets added to the variant origin.  ``metrics``
    need both a count and a label; ``texts`` need a label only.
    """

    id: NodeId
    col: float
    row: float
    role: str
    block: str = MAIN
    width: float = 3
    height: Optional[float] = 0.5
    metrics: Tuple[str, ...] = ()
    texts: Tuple[str, ...] = ()


@dataclass(frozen=True)
class EdgeSpec:
    """One template edge.  ``kind`` selects colour and arrow shapes."""

    source: NodeId
    target: NodeId
    kind: str
    block: str = MAIN
    cluster: Optional[str] = None
    style: Optional[str] = None


N = NodeId

# Rails are positioned by the variant, see ``assembler._rail``.
RAILS: Tuple[NodeSpec, ...] = (
    NodeSpec(N.IDENTIFICATION, -1.4, 7.93, "rail", width=0.4, height=2.6),
    NodeSpec(N.SCREENING, -1.4, 4.5, "rail", width=0.4, height=3.5),
    NodeSpec(N.INCLUDED, -1.4, 0.87, "rail", width=0.4, height=2.5),
)

BOXES: Tuple[NodeSpec, ...] = (
    NodeSpec(N.N1, 0.5, 9, "grey_header", PREVIOUS, texts=("prevstud",)),
    NodeSpec(N.N2, 0.5, 7.5, "grey", PREVIOUS, metrics=("previous_studies", "previous_reports")),
    NodeSpec(N.N3, 6, 9, "title_header", width=7, texts=("newstud",)),
    NodeSpec(N.N4, 4, 7.5, "main", metrics=("database_results", "register_results")),
    NodeSpec(N.N5, 8, 7.5, "main", metrics=("duplicates", "excluded_automatic", "excluded_other")),
    NodeSpec(N.N6, 4, 5.5, "main", metrics=("records_screened",)),
    NodeSpec(N.N7, 8, 5.5, "main", metrics=("records_excluded",)),
    NodeSpec(N.N8, 4, 4.5, "main", metrics=("dbr_sought_reports",)),
    NodeSpec(N.N9, 8, 4.5, "main", metrics=("dbr_notretrieved_reports",)),
    NodeSpec(N.N10, 4, 3.5, "main", metrics=("dbr_assessed",)),
    NodeSpec(N.N11, 8, 3.5, "main", texts=("dbr_excluded",)),
    NodeSpec(N.N12, 4, 1.5, "main", metrics=("new_studies", "new_reports")),
    NodeSpec(N.N13, 13.5, 9, "grey_header", OTHER, width=7, texts=("othstud",)),
    NodeSpec(
        N.N14, 11.5, 7.5, "grey", OTHER,
        metrics=("website_results", "organisation_results", "citations_results"),
    ),
    NodeSpec(N.N15, 11.5, 4.5, "grey", OTHER, metrics=("other_sought_reports",)),
    NodeSpec(N.N16, 15.5, 4.5, "grey", OTHER, metrics=("other_notretrieved_reports",)),
    NodeSpec(N.N17, 11.5, 3.5, "grey", OTHER, metrics=("other_assessed",)),
    NodeSpec(N.N18, 15.5, 3.5, "grey", OTHER, texts=("other_excluded",)),
    NodeSpec(N.N19, 4, 0, "grey", PREVIOUS, metrics=("total_studies", "total_reports")),
    NodeSpec(N.A, 0.5, 0, "corner", PREVIOUS, width=0, height=None),
    NodeSpec(N.B, 11.5, 1.5, "corner", OTHER, width=0, height=None),
)

NODES: Dict[NodeId, NodeSpec] = {spec.id: spec for spec in RAILS + BOXES}

EDGES: Tuple[EdgeSpec, ...] = (
    # previous-studies arm, bent round A into the totals box
    EdgeSpec(N.N1, N.N2, "hidden", PREVIOUS, "cluster0"),
    EdgeSpec(N.N2, N.A, "line", PREVIOUS, "cluster0"),
    EdgeSpec(N.A, N.N19, "feedback", PREVIOUS, "cluster0"),
    # databases and registers
    EdgeSpec(N.N3, N.N4, "invisible", cluster="cluster1"),
    EdgeSpec(N.N3, N.N5, "invisible", cluster="cluster1"),
    EdgeSpec(N.N4, N.N5, "arrow", cluster="cluster1", style="filled"),
    EdgeSpec(N.N4, N.N6, "arrow", cluster="cluster1", style="filled"),
    EdgeSpec(N.N6, N.N7, "arrow", cluster="cluster1", style="filled"),
    EdgeSpec(N.N6, N.N8, "arrow", cluster="cluster1", style="filled"),
    EdgeSpec(N.N8, N.N9, "arrow", cluster="cluster1", style="filled"),
    EdgeSpec(N.N8, N.N10, "arrow", cluster="cluster1", style="filled"),
    EdgeSpec(N.N10, N.N11, "arrow", cluster="cluster1", style="filled"),
    EdgeSpec(N.N10, N.N12, "arrow", cluster="cluster1", style="filled"),
    EdgeSpec(N.N5, N.N7, "invisible", cluster="cluster1"),
    EdgeSpec(N.N7, N.N9, "invisible", cluster="cluster1"),
    EdgeSpec(N.N9, N.N11, "invisible", cluster="cluster1"),
    EdgeSpec(N.N16, N.N18, "invisible", OTHER, "cluster1"),
    # other methods arm, bent round B into the new-studies box
    EdgeSpec(N.N13, N.N14, "hidden", OTHER, "cluster2"),
    EdgeSpec(N.N14, N.N15, "arrow", OTHER, "cluster2"),
    EdgeSpec(N.N15, N.N16, "arrow", OTHER, "cluster2"),
    EdgeSpec(N.N15, N.N17, "arrow", OTHER, "cluster2"),
    EdgeSpec(N.N17, N.N18, "arrow", OTHER, "cluster2"),
    EdgeSpec(N.N17, N.B, "line", OTHER, "cluster2"),
    EdgeSpec(N.B, N.N12, "feedback", OTHER, "cluster2"),
    # new studies into the totals box
    EdgeSpec(N.N12, N.N19, "arrow", PREVIOUS),
)

# Rows that must render level; members of inactive arms are dropped.
RANKS: Tuple[Tuple[NodeId, ...], ...] = (
    (N.A, N.N19),
    (N.N1, N.N3, N.N13),
    (N.N2, N.N4, N.N5, N.N14),
    (N.N6, N.N7),
    (N.N8, N.N9, N.N15, N.N16),
    (N.N10, N.N11, N.N17, N.N18),
    (N.N12, N.B),
)

CLUSTERS: Tuple[str, ...] = ("cluster0", "cluster1", "cluster2")
