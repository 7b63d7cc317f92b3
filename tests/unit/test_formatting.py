"""Unit tests for box text composition."""

import pytest

from prismaflow.core.formatting import (
    NARROW_WRAP,
    WIDE_WRAP,
    compose_cell,
    compose_multi_reason,
    wrap,
)
from prismaflow.core.models import ExclusionReason


class TestWrap:
    """Tests for greedy word wrapping."""

    @pytest.mark.parametrize("width", [WIDE_WRAP, NARROW_WRAP, 10])
    def test_lines_fit_unless_single_word(self, width: int) -> None:
        """No line exceeds the width except a single over-long word."""
        text = (
            "Reports of studies included in previous version of review "
            "with an extraordinarilylongwordthatcannotbesplit in the middle"
        )
        for line in wrap(text, width).split("\n"):
            assert len(line) <= width or " " not in line

    def test_words_preserved(self) -> None:
        """Wrapping only changes where lines break."""
        text = "Records marked as ineligible   by automation\ttools"
        wrapped = wrap(text, NARROW_WRAP)
        assert wrapped.split() == text.split()

    def test_short_text_unchanged(self) -> None:
        assert wrap("Databases", WIDE_WRAP) == "Databases"

    def test_empty(self) -> None:
        assert wrap("", WIDE_WRAP) == ""
        assert wrap("   ", WIDE_WRAP) == ""

    def test_long_word_on_own_line(self) -> None:
        assert wrap("a " + "x" * 40 + " b", 10) == "a\n" + "x" * 40 + "\nb"


class TestComposeCell:
    """Tests for label and count composition."""

    def test_inline(self) -> None:
        assert compose_cell("Databases", 350) == "Databases (n = 350)"

    def test_stacked(self) -> None:
        assert compose_cell("Records screened", 0, stacked=True) == "Records screened\n(n = 0)"


class TestComposeMultiReason:
    """Tests for exclusion reason lists."""

    def test_order_preserved(self) -> None:
        reasons = [("Zeta", 1), ("Alpha", 20), ("Mu", 3)]
        text = compose_multi_reason("Reports excluded:", reasons)
        assert text == (
            "Reports excluded:\n"
            "Zeta (n = 1)\n"
            "Alpha (n = 20)\n"
            "Mu (n = 3)"
        )

    def test_accepts_models(self) -> None:
        reasons = [ExclusionReason(reason="Wrong design", count=4)]
        assert compose_multi_reason("Excluded", reasons) == "Excluded\nWrong design (n = 4)"

    def test_no_reasons(self) -> None:
        assert compose_multi_reason("Reports excluded:", []) == "Reports excluded:"
