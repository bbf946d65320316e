"""
Module: questions

Purpose:
    Provides the Question dataclass - a single assessment item whose
    content payload is determined by its type. Immutable; marks totals
    are calculated, never stored.

Key Functions:
    - Question.total_marks: Calculated from item marks or the flat mark
    - Question.items: Sub-items (sub-questions, alternatives, passage questions)
    - Question.to_dict() / Question.from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - .content: Payload classes
    - .types.QuestionType

Used By:
    - core.models.groups.QuestionGroup
    - editor.commands
    - editor.drafts
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Optional, Tuple

from .content import ITEM_MARKS_KEYS, QuestionContent, content_class_for, content_from_dict
from .types import QuestionType


@dataclass(frozen=True)
class Question:
    """
    Assessment item (immutable).

    Attributes:
        id: Unique identifier like "q-1760822400000-0000-a1b2c3"
        type: Question kind; selects the content class
        content: Type-specific payload
        marks: Flat mark for the whole question (optional)
        item_marks: One mark per sub-item, for types that have sub-items

    Invariants:
        - content is an instance of the class registered for type
        - marks and item_marks are non-negative
        - total_marks is always calculated

    Example:
        >>> q = Question(
        ...     id="q-1",
        ...     type=QuestionType.MCQ,
        ...     content=MultipleChoiceContent(choices=("A", "B"), correct_answer=0),
        ...     marks=1,
        ... )
        >>> q.total_marks
        1
    """

    id: str
    type: QuestionType
    content: QuestionContent
    marks: Optional[int] = None
    item_marks: Tuple[int, ...] = ()

    def __post_init__(self) -> None:
        """Validate question on construction."""
        if not isinstance(self.id, str) or not self.id:
            raise ValueError(f"Question id must be a non-empty string: {self.id!r}")
        object.__setattr__(self, "type", QuestionType(self.type))

        expected = content_class_for(self.type)
        if not isinstance(self.content, expected):
            raise ValueError(
                f"{self.type.value} question needs {expected.__name__}, "
                f"got {type(self.content).__name__}"
            )

        if self.marks is not None and (isinstance(self.marks, bool) or not isinstance(self.marks, int) or self.marks < 0):
            raise ValueError(f"marks must be a non-negative integer: {self.marks!r}")

        item_marks = tuple(self.item_marks)
        for mark in item_marks:
            if isinstance(mark, bool) or not isinstance(mark, int) or mark < 0:
                raise ValueError(f"item marks must be non-negative integers: {item_marks!r}")
        if item_marks and self.type not in ITEM_MARKS_KEYS:
            raise ValueError(f"{self.type.value} questions have no sub-items to mark")
        object.__setattr__(self, "item_marks", item_marks)

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties (NEVER stored)
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def items(self) -> Tuple[str, ...]:
        """Sub-item texts (empty for single-prompt types)."""
        return self.content.items

    @cached_property
    def total_marks(self) -> int:
        """Sum of item marks when present, otherwise the flat mark (or 0)."""
        if self.item_marks:
            return sum(self.item_marks)
        return self.marks or 0

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize to the wire dictionary.

        Note: total_marks is NOT stored.
        """
        d = {
            "id": self.id,
            "type": self.type.value,
            "content": self.content.to_dict(),
        }
        if self.marks is not None:
            d["marks"] = self.marks
        if self.item_marks:
            d[ITEM_MARKS_KEYS[self.type]] = list(self.item_marks)
        return d

    @classmethod
    def from_dict(cls, data: dict) -> Question:
        """
        Deserialize from the wire dictionary.

        Raises:
            ValueError: If the type is unknown or the payload is invalid
            KeyError: If a required field is missing
        """
        question_type = QuestionType(data["type"])
        marks_key = ITEM_MARKS_KEYS.get(question_type)
        return cls(
            id=data["id"],
            type=question_type,
            content=content_from_dict(question_type, data.get("content", {})),
            marks=data.get("marks"),
            item_marks=tuple(data.get(marks_key) or ()) if marks_key else (),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"Question({self.id!r}, type={self.type.value}, marks={self.total_marks})"
