"""Per-box hyperlinks on rendered flowcharts.

Each active node is looked up by its box name in the URL mapping and,
when a URL exists, its drawn content is wrapped in an anchor that opens
in a new window.  Nodes are handled independently and a second pass is a
no-op, so the result does not depend on mapping order.
"""

from __future__ import annotations

import warnings
import xml.etree.ElementTree as ET
from typing import List, Optional

from ..core.errors import UnresolvedURLWarning
from ..core.ids import BoxName, NodeId
from ..core.models import UrlMap
from ..layout.variant import VariantParams
from ..utils.logging import get_logger
from . import svg as svgtools

logger = get_logger(__name__)

_HREF = "href"
_XLINK_HREF = f"{{{svgtools.XLINK_NS}}}href"


def _link_anchor(group: ET.Element, url: str) -> None:
    """Point the node's content at ``url``.

    Graphviz already wraps nodes that carry a tooltip in an ``<a>``; that
    anchor is reused.  Otherwise everything but the ``<title>`` is moved
    into a new anchor.
    """
    anchor = group.find(f".//{svgtools.tag('a')}")
    if anchor is None:
        anchor = ET.Element(svgtools.tag("a"))
        children = [child for child in group if child.tag != svgtools.tag("title")]
        for child in children:
            group.remove(child)
            anchor.append(child)
        group.append(anchor)
    anchor.set(_HREF, url)
    anchor.set(_XLINK_HREF, url)
    anchor.set("target", "_blank")


def resolve_links(variant: VariantParams, urls: UrlMap) -> List[tuple]:
    """Outer join of the variant's boxes with the URL mapping.

    Returns ``(node, box, url_or_None)`` for every active node in emission
    order.
    """
    return [(node, box, urls.get(box)) for node, box in variant.box_names.items()]


def add_hyperlinks(svg: str, variant: VariantParams, urls: Optional[UrlMap]) -> str:
    """Wrap each linked box of the rendered ``svg`` in an anchor.

    Boxes without a URL stay unlinked.  When the mapping is non-empty the
    unlinked boxes are reported once through ``UnresolvedURLWarning``.
    """
    urls = urls or UrlMap()
    root = svgtools.parse(svg)
    rendered = variant.rendered_ids
    unresolved: List[BoxName] = []
    linked = 0
    for node, box, url in resolve_links(variant, urls):
        if url is None:
            if node not in (NodeId.A, NodeId.B):
                unresolved.append(box)
            continue
        group = svgtools.find_group(root, rendered[node])
        if group is None:
            logger.warning(f"Box '{box.value}' ({rendered[node]}) not found in rendered output; link skipped")
            continue
        _link_anchor(group, url)
        linked += 1

    if urls and unresolved:
        warnings.warn(
            "No URL for boxes: " + ", ".join(box.value for box in unresolved),
            UnresolvedURLWarning,
            stacklevel=2,
        )
    logger.debug(f"Linked {linked} boxes in variant {variant.variant.value}")
    return svgtools.serialize(root)
