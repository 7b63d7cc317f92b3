"""Unit tests for DOT emission."""

import pytest

from prismaflow.core.ids import NodeId
from prismaflow.core.models import DiagramStyle, FlowData, PrismaData, RenderConfig, Tooltips
from prismaflow.flowchart import build_description
from prismaflow.layout.assembler import assemble
from prismaflow.layout.emitter import GRAPH_TOOLTIP, emit, escape_text
from prismaflow.layout.variant import select_variant


def _describe(flow: FlowData, previous: bool = True, other: bool = True, **style):
    variant = select_variant(previous, other)
    assembly = assemble(flow, Tooltips(), variant, DiagramStyle(**style))
    return assembly, emit(assembly, variant)


class TestEmit:
    """Tests for the DOT serialiser."""

    def test_deterministic(self, flow: FlowData) -> None:
        data = PrismaData(flow=flow)
        config = RenderConfig(previous=False, other=True)
        first = build_description(data, config)
        second = build_description(data, config)
        assert first.source == second.source
        assert str(first) == first.source

    def test_graph_attributes(self, flow: FlowData) -> None:
        _, description = _describe(flow)
        source = description.source
        assert source.startswith("digraph prisma {")
        assert "layout=neato" in source
        assert "splines=ortho" in source
        assert GRAPH_TOOLTIP in source

    def test_positions_pinned(self, flow: FlowData) -> None:
        _, description = _describe(flow, previous=False)
        assert 'pos="0.5,7.5!"' in description.source
        assert 'pos="-1.4,4.5!"' in description.source

    def test_nodes_declared_in_order(self, flow: FlowData) -> None:
        assembly, description = _describe(flow)
        lines = description.source.split("\n")
        declared = [line.strip().split(" ")[0] for line in lines if "label=" in line]
        assert declared == [str(n) for n in assembly.node_ids]

    def test_rank_groups_emitted(self, flow: FlowData) -> None:
        assembly, description = _describe(flow, previous=False, other=False)
        assert description.source.count("rank=same") == len(assembly.rank_groups)

    def test_invisible_edges(self, flow: FlowData) -> None:
        _, description = _describe(flow, previous=False, other=False)
        assert "3 -> 4 [arrowhead=none arrowtail=none color=transparent style=invis]" in description.source

    def test_feedback_edge_unconstrained(self, flow: FlowData) -> None:
        _, description = _describe(flow)
        line = next(l for l in description.source.split("\n") if "A -> 19" in l)
        assert "constraint=false" in line

    def test_style_changes_only_attributes(self, flow: FlowData) -> None:
        _, plain = _describe(flow)
        _, styled = _describe(flow, arrow_colour="Red")
        assert plain.source != styled.source
        assert plain.source.count("->") == styled.source.count("->")
        assert "color=Red" in styled.source

    def test_description_carries_variant(self, flow: FlowData) -> None:
        _, description = _describe(flow, previous=True, other=False)
        assert description.rendered_ids[NodeId.N1] == "node4"


class TestEscapeText:
    """Tests for label escaping."""

    @pytest.mark.parametrize(
        "text, expected",
        [("a\nb", "a\\nb"), ("back\\slash", "back\\\\slash"), ("plain", "plain")],
    )
    def test_escape(self, text: str, expected: str) -> None:
        assert escape_text(text) == expected

    def test_quotes_survive(self, flow: FlowData) -> None:
        labels = dict(flow.labels, records_screened='Records "screened"')
        data = flow.model_copy(update={"labels": labels})
        _, description = _describe(data, previous=False, other=False)
        assert 'Records \\"screened\\"\\n(n = 302)' in description.source
