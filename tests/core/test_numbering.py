"""
Unit tests for numbering helpers.
"""

import pytest

from paper_toolkit.core.models import NumberingStyle
from paper_toolkit.core.utils.numbering import format_number, sub_item_labels, to_alphabetic, to_roman


class TestToRoman:
    """Tests for to_roman."""

    @pytest.mark.parametrize(
        "num, expected",
        [(1, "I"), (4, "IV"), (9, "IX"), (14, "XIV"), (40, "XL"), (1994, "MCMXCIV")],
    )
    def test_to_roman_when_positive_then_numeral(self, num, expected):
        assert to_roman(num) == expected

    def test_to_roman_when_zero_then_raises(self):
        with pytest.raises(ValueError, match="positive"):
            to_roman(0)


class TestToAlphabetic:
    """Tests for to_alphabetic."""

    @pytest.mark.parametrize("num, expected", [(1, "A"), (3, "C"), (26, "Z"), (27, "AA"), (52, "AZ"), (53, "BA")])
    def test_to_alphabetic_when_positive_then_letters(self, num, expected):
        assert to_alphabetic(num) == expected

    def test_to_alphabetic_when_negative_then_raises(self):
        with pytest.raises(ValueError):
            to_alphabetic(-1)


class TestFormatNumber:
    """Tests for format_number and sub_item_labels."""

    def test_format_number_when_styles_then_rendered(self):
        assert format_number(3) == "3"
        assert format_number(3, NumberingStyle.ROMAN) == "III"
        assert format_number(3, "alphabetic") == "C"

    def test_format_number_when_unknown_style_then_raises(self):
        with pytest.raises(ValueError):
            format_number(3, "greek")

    def test_sub_item_labels_when_two_items_then_two_labels(self, sample_document):
        question = sample_document.find_question("sec-b", "g-b2", "q-b2")
        assert sub_item_labels(question, NumberingStyle.ROMAN) == ["I", "II"]

    def test_sub_item_labels_when_no_items_then_empty(self, make_mcq):
        assert sub_item_labels(make_mcq("q-1")) == []
