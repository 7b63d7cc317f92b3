"""Helpers for reading and rewriting Graphviz SVG output."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import List, Optional, Tuple

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
NAMESPACES = {"svg": SVG_NS, "xlink": XLINK_NS}

ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)

_NUMBER = re.compile(r"-?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")

Bounds = Tuple[float, float, float, float]


def tag(name: str) -> str:
    """Qualified SVG tag name, e.g. ``tag("g")``."""
    return f"{{{SVG_NS}}}{name}"


def parse(svg: str) -> ET.Element:
    return ET.fromstring(svg)


def serialize(root: ET.Element) -> str:
    return ET.tostring(root, encoding="unicode")


def find_group(root: ET.Element, group_id: str) -> Optional[ET.Element]:
    """Return the ``<g>`` element with the given ``id``, if rendered."""
    for element in root.iter(tag("g")):
        if element.get("id") == group_id:
            return element
    return None


def _points(element: ET.Element) -> List[Tuple[float, float]]:
    raw = element.get("points") if element.tag == tag("polygon") else element.get("d")
    if not raw:
        return []
    numbers = [float(n) for n in _NUMBER.findall(raw)]
    return list(zip(numbers[0::2], numbers[1::2]))


def shape_bounds(group: ET.Element) -> Optional[Bounds]:
    """Bounding box ``(xmin, ymin, xmax, ymax)`` of a node's drawn outline."""
    points: List[Tuple[float, float]] = []
    for name in ("polygon", "path"):
        for element in group.iter(tag(name)):
            points.extend(_points(element))
    if not points:
        return None
    xs = [x for x, _ in points]
    ys = [y for _, y in points]
    return min(xs), min(ys), max(xs), max(ys)
