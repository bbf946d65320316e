"""
Numbering helpers.

Formats running numbers for display in the three styles a group can use
for its sub-items: decimal, Roman numerals and spreadsheet-style letters.
"""

from __future__ import annotations

from typing import List, Union

from ..models.questions import Question
from ..models.types import NumberingStyle

_ROMAN_NUMERALS = (
    (1000, "M"),
    (900, "CM"),
    (500, "D"),
    (400, "CD"),
    (100, "C"),
    (90, "XC"),
    (50, "L"),
    (40, "XL"),
    (10, "X"),
    (9, "IX"),
    (5, "V"),
    (4, "IV"),
    (1, "I"),
)


def to_roman(num: int) -> str:
    """Convert a positive integer to upper-case Roman numerals (4 -> "IV")."""
    if num < 1:
        raise ValueError(f"Roman numerals need a positive number: {num}")
    result = []
    for value, symbol in _ROMAN_NUMERALS:
        while num >= value:
            result.append(symbol)
            num -= value
    return "".join(result)


def to_alphabetic(num: int) -> str:
    """Convert a positive integer to letters: 1 -> "A", 26 -> "Z", 27 -> "AA"."""
    if num < 1:
        raise ValueError(f"Alphabetic labels need a positive number: {num}")
    result = ""
    while num > 0:
        num -= 1
        result = chr(ord("A") + num % 26) + result
        num //= 26
    return result


def format_number(num: int, style: Union[NumberingStyle, str] = NumberingStyle.NUMERIC) -> str:
    """
    Format a 1-based number in the given style.

    Args:
        num: Number to format
        style: NumberingStyle or its wire string

    Returns:
        "3", "III" or "C"
    """
    style = NumberingStyle(style)
    if style is NumberingStyle.ROMAN:
        return to_roman(num)
    if style is NumberingStyle.ALPHABETIC:
        return to_alphabetic(num)
    return str(num)


def sub_item_labels(question: Question, style: Union[NumberingStyle, str] = NumberingStyle.NUMERIC) -> List[str]:
    """Labels for each sub-item of a question, in order."""
    return [format_number(i, style) for i in range(1, len(question.items) + 1)]
