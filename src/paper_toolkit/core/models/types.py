"""
Module: types

Purpose:
    Enumerations shared by the document model: the question type
    vocabulary (also used for groups), conditional-group logic, and the
    numbering style applied to sub-items.

Key Functions:
    - group_title(type): Human-readable heading for a group type
"""

from __future__ import annotations

from enum import Enum
from typing import Union


class QuestionType(str, Enum):
    """Question kind; the value is the wire string."""
    MCQ = "mcq"
    TRUE_FALSE = "true-false"
    FILL_IN_THE_BLANKS = "fill-in-the-blanks"
    SHORT_QUESTION = "short-question"
    LONG_QUESTION = "long-question"
    CONDITIONAL = "conditional"
    PARA_QUESTION = "para-question"

    def __str__(self) -> str:
        return self.value


class GroupLogic(str, Enum):
    """How a student treats the alternatives of a conditional group."""
    AND = "AND"  # Answer all
    OR = "OR"    # Answer any one

    def __str__(self) -> str:
        return self.value


class NumberingStyle(str, Enum):
    """Label style for sub-items inside a group's questions."""
    NUMERIC = "numeric"
    ROMAN = "roman"
    ALPHABETIC = "alphabetic"

    def __str__(self) -> str:
        return self.value


_GROUP_TITLES = {
    QuestionType.MCQ: "Multiple Choice Questions",
    QuestionType.TRUE_FALSE: "True / False",
    QuestionType.FILL_IN_THE_BLANKS: "Fill in the Blanks",
    QuestionType.SHORT_QUESTION: "Short Questions",
    QuestionType.LONG_QUESTION: "Long Questions",
    QuestionType.CONDITIONAL: "Conditional Questions",
    QuestionType.PARA_QUESTION: "Paragraph Questions",
}


def group_title(group_type: Union[QuestionType, str]) -> str:
    """
    Display heading for a group type.

    Args:
        group_type: QuestionType or its wire string

    Returns:
        Heading such as "Multiple Choice Questions", or "Untitled Group"
        for anything outside the vocabulary
    """
    try:
        return _GROUP_TITLES[QuestionType(group_type)]
    except ValueError:
        return "Untitled Group"
