"""Shared fixtures for the flowchart test suite."""

from typing import Dict, Optional

import pytest

from prismaflow.core.ids import NodeId, RAIL_NODES
from prismaflow.core.models import FlowData, PrismaData
from prismaflow.io.loader import read_prisma_data, template_path
from prismaflow.layout.variant import VariantParams

COUNTS: Dict[str, int] = {
    "previous_studies": 10,
    "previous_reports": 12,
    "database_results": 350,
    "register_results": 20,
    "website_results": 15,
    "organisation_results": 8,
    "citations_results": 22,
    "duplicates": 60,
    "excluded_automatic": 5,
    "excluded_other": 3,
    "records_screened": 302,
    "records_excluded": 250,
    "dbr_sought_reports": 52,
    "dbr_notretrieved_reports": 4,
    "other_sought_reports": 45,
    "other_notretrieved_reports": 6,
    "dbr_assessed": 48,
    "other_assessed": 39,
    "new_studies": 25,
    "new_reports": 35,
    "total_studies": 35,
    "total_reports": 47,
}

LABELS: Dict[str, str] = {
    "prevstud": "Previous studies",
    "newstud": "Identification of new studies via databases and registers",
    "othstud": "Identification of new studies via other methods",
    "previous_studies": "Studies included in previous version of review",
    "previous_reports": "Reports of studies included in previous version of review",
    "database_results": "Databases",
    "register_results": "Registers",
    "website_results": "Websites",
    "organisation_results": "Organisations",
    "citations_results": "Citation searching",
    "duplicates": "Duplicate records",
    "excluded_automatic": "Records marked as ineligible by automation tools",
    "excluded_other": "Records removed for other reasons",
    "records_screened": "Records screened",
    "records_excluded": "Records excluded",
    "dbr_sought_reports": "Reports sought for retrieval",
    "dbr_notretrieved_reports": "Reports not retrieved",
    "other_sought_reports": "Reports sought for retrieval",
    "other_notretrieved_reports": "Reports not retrieved",
    "dbr_assessed": "Reports assessed for eligibility",
    "dbr_excluded": "Reports excluded:",
    "other_assessed": "Reports assessed for eligibility",
    "other_excluded": "Reports excluded:",
    "new_studies": "New studies included in review",
    "new_reports": "Reports of new included studies",
    "total_studies": "Total studies included in review",
    "total_reports": "Reports of total included studies",
}


@pytest.fixture
def flow() -> FlowData:
    """Complete flow data covering every metric of the full diagram."""
    return FlowData(
        counts=COUNTS,
        labels=LABELS,
        dbr_excluded=[("Wrong population", 10), ("Wrong outcome", 8), ("Not RCT", 5)],
        other_excluded="Wrong setting, 20; Duplicate report, 9",
    )


@pytest.fixture
def template_data() -> PrismaData:
    """The bundled template loaded through the CSV reader."""
    return read_prisma_data(template_path())


@pytest.fixture
def template_csv() -> str:
    return template_path().read_text(encoding="utf-8")


# Rail outline used by the fake SVGs: x 10..39, y -587..-400
RAIL_POLYGON = "10,-400 39,-400 39,-587 10,-587 10,-400"


def fake_svg(
    variant: VariantParams,
    tooltips: Optional[Dict[NodeId, str]] = None,
    skip: tuple = (),
    outline: bool = True,
) -> str:
    """A minimal stand-in for Graphviz SVG output.

    One ``<g id="nodeN" class="node">`` group per active node, in
    declaration order.  Nodes with a tooltip get Graphviz's nested
    ``<g id="a_nodeN"><a xlink:title=...>`` anchor.
    """
    tooltips = tooltips or {}
    parts = [
        '<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" '
        'width="800pt" height="600pt" viewBox="0 0 800 600">',
        '<g id="graph0" class="graph">',
    ]
    for node, rendered in variant.rendered_ids.items():
        if node in skip:
            continue
        points = RAIL_POLYGON if node in RAIL_NODES else "100,-100 200,-100 200,-150 100,-150 100,-100"
        shape = f'<polygon fill="none" stroke="black" points="{points}"/>' if outline else ""
        content = f'{shape}<text x="150" y="-120">{node.value}</text>'
        if node in tooltips:
            content = (
                f'<g id="a_{rendered}"><a xlink:title="{tooltips[node]}">{content}</a></g>'
            )
        parts.append(f'<g id="{rendered}" class="node"><title>{node.value}</title>{content}</g>')
    parts.append("</g></svg>")
    return "".join(parts)


@pytest.fixture
def svg_factory():
    return fake_svg
