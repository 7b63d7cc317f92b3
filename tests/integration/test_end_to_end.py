"""End-to-end integration tests for flowchart rendering.

These tests run the full pipeline, from the bundled CSV template through
Graphviz to post-processed SVG.  They need the Graphviz executables on
PATH and are skipped otherwise.
"""

import shutil
import xml.etree.ElementTree as ET

import pytest

from prismaflow import prisma_flowchart, read_prisma_data
from prismaflow.core.ids import NodeId
from prismaflow.core.models import DiagramStyle
from prismaflow.io.loader import template_path
from prismaflow.overlay.svg import find_group, tag

pytestmark = [
    pytest.mark.graphviz,
    pytest.mark.skipif(shutil.which("neato") is None, reason="Graphviz executables not installed"),
]

FLAGS = [(True, True), (True, False), (False, True), (False, False)]


@pytest.fixture(scope="module")
def data():
    return read_prisma_data(template_path())


@pytest.mark.parametrize("previous, other", FLAGS)
def test_every_node_rendered(data, previous, other):
    """Each active node appears as its own group, in declaration order."""
    chart = prisma_flowchart(data, previous=previous, other=other)
    root = ET.fromstring(chart.svg)
    for node, rendered in chart.variant.rendered_ids.items():
        group = find_group(root, rendered)
        assert group is not None, rendered
        assert group.find(tag("title")).text == str(node)


@pytest.mark.parametrize("previous, other", FLAGS)
def test_section_labels(data, previous, other):
    chart = prisma_flowchart(data, previous=previous, other=other)
    root = ET.fromstring(chart.svg)
    labels = [t.text for t in root.iter(tag("text")) if t.get("class") == "section-label"]
    assert labels == ["Identification", "Screening", "Included"]


def test_counts_in_boxes(data):
    chart = prisma_flowchart(data, previous=False, other=False)
    assert "(n = 302)" in chart.svg
    assert "Reason 1 (n = 10)" in chart.svg


def test_interactive_links(data):
    chart = prisma_flowchart(data, interactive=True)
    root = ET.fromstring(chart.svg)
    hrefs = {a.get("href") for a in root.iter(tag("a")) if a.get("href")}
    assert "box1.html" in hrefs
    assert len(hrefs) == 22


def test_not_interactive_has_no_links(data):
    chart = prisma_flowchart(data)
    assert 'href="box1.html"' not in chart.svg


def test_style_applied(data):
    chart = prisma_flowchart(data, style=DiagramStyle(title_colour="LightBlue"))
    group = find_group(ET.fromstring(chart.svg), chart.variant.rendered_ids[NodeId.N3])
    fills = {e.get("fill", "").lower() for e in group.iter() if e.get("fill")}
    assert fills & {"lightblue", "#add8e6"}


@pytest.mark.parametrize("suffix", [".svg", ".html", ".dot"])
def test_save(data, tmp_path, suffix):
    chart = prisma_flowchart(data, previous=False)
    path = chart.save(tmp_path / f"prisma{suffix}")
    content = path.read_text(encoding="utf-8")
    if suffix == ".dot":
        assert content == chart.source
    else:
        assert "Identification" in content


def test_save_rejects_unknown_suffix(data, tmp_path):
    chart = prisma_flowchart(data, previous=False)
    with pytest.raises(ValueError):
        chart.save(tmp_path / "prisma.jpeg")
