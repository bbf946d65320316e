"""
Core Models Package

Immutable, validated data models for the paper document.

All models in this package are frozen dataclasses. A change always
produces a new instance, so duplicated or filtered documents can never
share mutable structure with the original.

| Model | Role |
|-------|------|
| `Document` | Ordered sections (the whole paper) |
| `Section` | Titled block owning groups |
| `QuestionGroup` | Typed cluster of questions |
| `Question` | Single item with a typed payload |
"""

from .types import GroupLogic, NumberingStyle, QuestionType, group_title
from .content import (
    ConditionalContent,
    FillInBlanksContent,
    MultipleChoiceContent,
    ParagraphContent,
    QuestionContent,
    TrueFalseContent,
    WrittenContent,
    content_class_for,
    content_from_dict,
)
from .questions import Question
from .groups import QuestionGroup
from .sections import Section
from .document import Document, NumberedQuestion

__all__ = [
    "GroupLogic",
    "NumberingStyle",
    "QuestionType",
    "group_title",
    "ConditionalContent",
    "FillInBlanksContent",
    "MultipleChoiceContent",
    "ParagraphContent",
    "QuestionContent",
    "TrueFalseContent",
    "WrittenContent",
    "content_class_for",
    "content_from_dict",
    "Question",
    "QuestionGroup",
    "Section",
    "Document",
    "NumberedQuestion",
]
