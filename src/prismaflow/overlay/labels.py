"""Rotated section labels on the Identification/Screening/Included rails.

Graphviz cannot rotate node labels, so the three section names are drawn
as free-standing ``<text>`` elements appended to the rendered rail nodes
after layout.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Dict, Optional, Tuple

from ..config.settings import settings
from ..core.ids import NodeId, RAIL_NODES
from ..layout.variant import VariantParams
from ..utils.logging import get_logger
from . import svg as svgtools

logger = get_logger(__name__)

SECTION_LABELS: Dict[NodeId, str] = {
    NodeId.IDENTIFICATION: "Identification",
    NodeId.SCREENING: "Screening",
    NodeId.INCLUDED: "Included",
}

LABEL_CLASS = "section-label"

# Baseline shift that centres a rotated glyph run on the rail, as a
# fraction of the font size.
_BASELINE_SHIFT = 0.35


def label_position(
    group: ET.Element,
    node: NodeId,
    variant: VariantParams,
    font_size: float,
) -> Tuple[float, float]:
    """Coordinates for a ``rotate(-90)`` text centred on the rail.

    Under ``rotate(-90)`` a point ``(x, y)`` is drawn at ``(y, -x)``, so
    the rail centre ``(cx, cy)`` maps to ``(-cy, cx)``.  Falls back to the
    variant's calibration table when the outline cannot be read.
    """
    bounds = svgtools.shape_bounds(group)
    if bounds is None:
        logger.debug(f"No outline for rail '{node.value}', using calibration table")
        return variant.label_positions[node]
    xmin, ymin, xmax, ymax = bounds
    cx = (xmin + xmax) / 2
    cy = (ymin + ymax) / 2
    return round(-cy, 2), round(cx + font_size * _BASELINE_SHIFT, 2)


def _has_label(group: ET.Element) -> bool:
    return any(t.get("class") == LABEL_CLASS for t in group.iter(svgtools.tag("text")))


def add_section_labels(
    svg: str,
    variant: VariantParams,
    font: Optional[str] = None,
    font_size: Optional[float] = None,
) -> str:
    """Append the three rotated section labels to the rendered rails.

    Rails missing from the SVG are skipped.  Applying the pass twice
    leaves the output unchanged.
    """
    font = font or settings.font
    font_size = font_size or settings.label_font_size
    root = svgtools.parse(svg)
    rendered = variant.rendered_ids
    for node in RAIL_NODES:
        group = svgtools.find_group(root, rendered[node])
        if group is None:
            logger.warning(f"Rail '{node.value}' not found in rendered output; label skipped")
            continue
        if _has_label(group):
            continue
        x, y = label_position(group, node, variant, font_size)
        text = ET.SubElement(
            group,
            svgtools.tag("text"),
            {
                "class": LABEL_CLASS,
                "text-anchor": "middle",
                "transform": "rotate(-90)",
                "x": f"{x:g}",
                "y": f"{y:g}",
                "font-family": f"{font},sans-Serif",
                "font-size": f"{font_size:.2f}",
            },
        )
        text.text = SECTION_LABELS[node]
    return svgtools.serialize(root)
