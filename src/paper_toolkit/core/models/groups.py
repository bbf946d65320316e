"""
Module: groups

Purpose:
    Provides the QuestionGroup dataclass - a cluster of questions sharing a
    type, an instruction line and (for conditional groups) AND/OR logic.
    Question order is display and numbering order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .questions import Question
from .types import GroupLogic, NumberingStyle, QuestionType, group_title


@dataclass(frozen=True)
class QuestionGroup:
    """
    Question group (immutable).

    Attributes:
        id: Unique identifier like "g-1760822400000-0000-a1b2c3"
        type: Default question type and editing form of the group
        instruction: Instruction line shown above the questions
        logic: AND/OR, only for conditional groups
        numbering_style: Label style for sub-items of member questions
        questions: Member questions in display order

    Invariants:
        - logic is None unless type is CONDITIONAL
    """

    id: str
    type: QuestionType
    instruction: str = ""
    logic: Optional[GroupLogic] = None
    numbering_style: NumberingStyle = NumberingStyle.NUMERIC
    questions: Tuple[Question, ...] = ()

    def __post_init__(self) -> None:
        """Validate group on construction."""
        if not isinstance(self.id, str) or not self.id:
            raise ValueError(f"Group id must be a non-empty string: {self.id!r}")
        if not isinstance(self.instruction, str):
            raise ValueError(f"instruction must be a string: {self.instruction!r}")
        object.__setattr__(self, "type", QuestionType(self.type))
        object.__setattr__(self, "numbering_style", NumberingStyle(self.numbering_style))
        if self.logic is not None:
            if self.type is not QuestionType.CONDITIONAL:
                raise ValueError(f"logic is only valid for conditional groups, not {self.type.value}")
            object.__setattr__(self, "logic", GroupLogic(self.logic))
        object.__setattr__(self, "questions", tuple(self.questions))

    @property
    def title(self) -> str:
        """Display heading derived from the group type."""
        return group_title(self.type)

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @property
    def total_marks(self) -> int:
        return sum(q.total_marks for q in self.questions)

    def find_question(self, question_id: str) -> Optional[Question]:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None

    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "type": self.type.value,
            "instruction": self.instruction,
            "numberingStyle": self.numbering_style.value,
            "questions": [q.to_dict() for q in self.questions],
        }
        if self.logic is not None:
            d["logic"] = self.logic.value
        return d

    @classmethod
    def from_dict(cls, data: dict) -> QuestionGroup:
        """
        Deserialize from the wire dictionary.

        A stray logic value on a non-conditional group is dropped, and a
        missing numberingStyle defaults to numeric.
        """
        group_type = QuestionType(data["type"])
        logic = data.get("logic") if group_type is QuestionType.CONDITIONAL else None
        return cls(
            id=data["id"],
            type=group_type,
            instruction=data.get("instruction") or "",
            logic=logic or None,
            numbering_style=data.get("numberingStyle") or NumberingStyle.NUMERIC,
            questions=tuple(Question.from_dict(q) for q in data.get("questions", [])),
        )

    def __repr__(self) -> str:
        return f"QuestionGroup({self.id!r}, type={self.type.value}, questions={len(self.questions)})"
