"""Unit tests for flowchart data models."""

import pytest
from pydantic import ValidationError

from prismaflow.core.errors import InvalidCountError, MalformedExclusionTableError, MissingDataError
from prismaflow.core.ids import BoxName, NodeId, TOOLTIP_SLOTS
from prismaflow.core.models import (
    DiagramStyle,
    ExclusionReason,
    FlowData,
    Node,
    Tooltips,
    UrlMap,
    format_number,
    parse_count,
    parse_exclusion_table,
)


class TestParseExclusionTable:
    """Tests for exclusion table coercion."""

    def test_cell_form(self) -> None:
        reasons = parse_exclusion_table("dbr_excluded", "Reason 1, 10; Reason 2, 20")
        assert reasons == [
            ExclusionReason(reason="Reason 1", count=10),
            ExclusionReason(reason="Reason 2", count=20),
        ]

    def test_reason_with_comma(self) -> None:
        """Only the last comma separates the count."""
        reasons = parse_exclusion_table("dbr_excluded", "Wrong population, adults, 7")
        assert reasons[0].reason == "Wrong population, adults"
        assert reasons[0].count == 7

    def test_pairs_and_mappings(self) -> None:
        reasons = parse_exclusion_table(
            "other_excluded", [("A", 1), {"reason": "B", "count": "2"}]
        )
        assert [(r.reason, r.count) for r in reasons] == [("A", 1), ("B", 2)]

    def test_none_is_empty(self) -> None:
        assert parse_exclusion_table("dbr_excluded", None) == []

    def test_integer_valued_float_counts(self) -> None:
        reasons = parse_exclusion_table("dbr_excluded", "Reason 1, 10.0; Reason 2, 3")
        assert [r.count for r in reasons] == [10, 3]
        assert parse_exclusion_table("other_excluded", [("A", 4.0)])[0].count == 4

    @pytest.mark.parametrize(
        "value",
        ["Reason without count", "Reason, many", "Reason, -3", "Reason, 2.5", [("only one",)], [(None, 2)]],
    )
    def test_malformed(self, value) -> None:
        with pytest.raises(MalformedExclusionTableError) as exc:
            parse_exclusion_table("dbr_excluded", value)
        assert exc.value.metric == "dbr_excluded"


class TestFlowData:
    """Tests for FlowData."""

    def test_count_and_label(self, flow: FlowData) -> None:
        assert flow.count("records_screened") == 302
        assert flow.label("records_screened") == "Records screened"

    def test_missing_count(self) -> None:
        data = FlowData(labels={"previous_studies": "Studies"})
        with pytest.raises(MissingDataError) as exc:
            data.count("previous_studies")
        assert exc.value.metric == "previous_studies"
        assert "previous_studies" in str(exc.value)

    def test_missing_label(self) -> None:
        with pytest.raises(MissingDataError) as exc:
            FlowData(counts={"duplicates": 1}).label("duplicates")
        assert exc.value.kind == "label"

    def test_negative_count_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FlowData(counts={"duplicates": -1})

    def test_exclusions_coerced_in_order(self, flow: FlowData) -> None:
        assert [r.reason for r in flow.exclusions("dbr_excluded")] == [
            "Wrong population",
            "Wrong outcome",
            "Not RCT",
        ]
        assert flow.exclusions("other_excluded")[1] == ExclusionReason(
            reason="Duplicate report", count=9
        )

    def test_malformed_exclusions_raise(self) -> None:
        with pytest.raises(MalformedExclusionTableError):
            FlowData(dbr_excluded="Reason 1 10")


class TestTooltips:
    """Tests for tooltip slot mapping."""

    def test_slot_order(self) -> None:
        values = [f"tip {i}" for i in range(1, 23)]
        tips = Tooltips.from_sequence(values)
        assert tips.get(NodeId.N1) == "tip 1"
        assert tips.get(NodeId.N13) == "tip 5"
        assert tips.get(NodeId.N5) == "tip 7"
        assert tips.get(NodeId.N12) == "tip 18"
        assert tips.get(NodeId.INCLUDED) == "tip 22"

    def test_missing_slots_are_empty(self) -> None:
        tips = Tooltips.from_sequence(["first"])
        assert tips.get(NodeId.N1) == "first"
        assert tips.get(NodeId.N19) == ""

    def test_too_many(self) -> None:
        with pytest.raises(ValueError):
            Tooltips.from_sequence(["x"] * (len(TOOLTIP_SLOTS) + 1))


class TestUrlMap:
    """Tests for the hyperlink mapping."""

    def test_from_mapping_drops_empty(self) -> None:
        urls = UrlMap.from_mapping({"box1": "https://example.org", "box2": "", "box3": None})
        assert len(urls) == 1
        assert urls.get(BoxName.BOX1) == "https://example.org"
        assert urls.get(BoxName.BOX2) is None

    def test_unknown_box_rejected(self) -> None:
        with pytest.raises(ValidationError):
            UrlMap.from_mapping({"box99": "https://example.org"})


class TestStyleAndNodes:
    """Tests for style defaults and node geometry."""

    def test_style_defaults(self) -> None:
        style = DiagramStyle()
        assert style.font == "Helvetica"
        assert style.title_colour == "Goldenrod1"
        assert style.greybox_colour == "Gainsboro"
        assert style.arrow_head == "normal"
        assert style.arrow_tail == "none"

    def test_style_is_frozen(self) -> None:
        with pytest.raises(ValidationError):
            DiagramStyle().font = "Arial"

    @pytest.mark.parametrize(
        "value, expected",
        [(4.0, "4"), (-3.5, "-3.5"), (0.1 + 0.2, "0.3"), (7.93, "7.93"), (0, "0")],
    )
    def test_format_number(self, value: float, expected: str) -> None:
        assert format_number(value) == expected

    def test_pos(self) -> None:
        node = Node(NodeId.N4, "", x=0.5, y=7.5, width=3, height=0.5, color="Black")
        assert node.pos == "0.5,7.5!"


class TestParseCount:
    """Tests for count parsing shared by scalar cells and exclusion tables."""

    def test_values(self) -> None:
        assert parse_count("x", "12") == 12
        assert parse_count("x", "0") == 0
        assert parse_count("x", "3.0") == 3
        assert parse_count("x", " 7 ") == 7

    @pytest.mark.parametrize("value", ["abc", "-4", "2.5", ""])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(InvalidCountError) as exc:
            parse_count("records_screened", value)
        assert exc.value.metric == "records_screened"
