"""
Module: content

Purpose:
    Per-type question payloads. Each QuestionType maps to exactly one
    content class; together they form a tagged union keyed by the type,
    so code never has to guess which fields a payload carries.

Key Classes:
    - MultipleChoiceContent: Prompt, ordered choices, correct index
    - TrueFalseContent: Prompt, fixed True/False choices, correct index
    - FillInBlanksContent: Single prompt
    - WrittenContent: Optional prompt plus sub-questions (short/long)
    - ConditionalContent: Alternatives plus AND/OR logic
    - ParagraphContent: Passage plus questions keyed to it

Key Functions:
    - content_class_for(type): Content class for a question type
    - content_from_dict(type, data): Build the right payload from wire data

Wire Names:
    Field names on the wire keep the camelCase used by exported papers
    (questionText, correctAnswer, subQuestions, conditionalQuestions,
    paraText, paraQuestions).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple, Type, Union

from .types import GroupLogic, QuestionType

TRUE_FALSE_CHOICES: Tuple[str, str] = ("True", "False")


def _require_text(value: Any, name: str) -> None:
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string: {value!r}")


def _as_text_tuple(owner: object, attr: str) -> None:
    """Coerce a sequence field to a tuple of strings on a frozen instance."""
    values = getattr(owner, attr)
    if isinstance(values, str) or not isinstance(values, (list, tuple)):
        raise ValueError(f"{attr} must be a list of strings: {values!r}")
    values = tuple(values)
    for i, item in enumerate(values):
        _require_text(item, f"{attr}[{i}]")
    object.__setattr__(owner, attr, values)


def _require_index(value: Any, size: int, name: str) -> None:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer: {value!r}")
    if not (0 <= value < size):
        raise ValueError(f"{name} out of range 0-{size - 1}: {value}")


@dataclass(frozen=True)
class MultipleChoiceContent:
    """
    Multiple-choice payload.

    Invariants:
        - at least two choices
        - 0 <= correct_answer < len(choices)
    """

    choices: Tuple[str, ...]
    correct_answer: int = 0
    question_text: str = ""

    def __post_init__(self) -> None:
        _require_text(self.question_text, "question_text")
        _as_text_tuple(self, "choices")
        if len(self.choices) < 2:
            raise ValueError(f"mcq needs at least 2 choices, got {len(self.choices)}")
        _require_index(self.correct_answer, len(self.choices), "correct_answer")

    @property
    def items(self) -> Tuple[str, ...]:
        return ()

    def to_dict(self) -> dict:
        return {
            "questionText": self.question_text,
            "choices": list(self.choices),
            "correctAnswer": self.correct_answer,
        }

    @classmethod
    def from_dict(cls, data: dict) -> MultipleChoiceContent:
        return cls(
            choices=data.get("choices", ()),
            correct_answer=data.get("correctAnswer", 0),
            question_text=data.get("questionText", ""),
        )


@dataclass(frozen=True)
class TrueFalseContent:
    """True/false payload. Choices are always ("True", "False")."""

    correct_answer: int = 0
    question_text: str = ""

    def __post_init__(self) -> None:
        _require_text(self.question_text, "question_text")
        _require_index(self.correct_answer, 2, "correct_answer")

    @property
    def choices(self) -> Tuple[str, str]:
        return TRUE_FALSE_CHOICES

    @property
    def items(self) -> Tuple[str, ...]:
        return ()

    def to_dict(self) -> dict:
        return {
            "questionText": self.question_text,
            "choices": list(TRUE_FALSE_CHOICES),
            "correctAnswer": self.correct_answer,
        }

    @classmethod
    def from_dict(cls, data: dict) -> TrueFalseContent:
        choices = data.get("choices")
        if choices is not None and (not isinstance(choices, (list, tuple)) or tuple(choices) != TRUE_FALSE_CHOICES):
            raise ValueError(f"true-false choices must be {list(TRUE_FALSE_CHOICES)}: {choices!r}")
        return cls(
            correct_answer=data.get("correctAnswer", 0),
            question_text=data.get("questionText", ""),
        )


@dataclass(frozen=True)
class FillInBlanksContent:
    """Fill-in-the-blanks payload: the prompt is the whole question."""

    question_text: str = ""

    def __post_init__(self) -> None:
        _require_text(self.question_text, "question_text")

    @property
    def items(self) -> Tuple[str, ...]:
        return ()

    def to_dict(self) -> dict:
        return {"questionText": self.question_text}

    @classmethod
    def from_dict(cls, data: dict) -> FillInBlanksContent:
        return cls(question_text=data.get("questionText", ""))


@dataclass(frozen=True)
class WrittenContent:
    """Short or long answer payload: optional prompt plus sub-questions."""

    question_text: str = ""
    sub_questions: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _require_text(self.question_text, "question_text")
        _as_text_tuple(self, "sub_questions")

    @property
    def items(self) -> Tuple[str, ...]:
        return self.sub_questions

    def to_dict(self) -> dict:
        return {
            "questionText": self.question_text,
            "subQuestions": list(self.sub_questions),
        }

    @classmethod
    def from_dict(cls, data: dict) -> WrittenContent:
        return cls(
            question_text=data.get("questionText", ""),
            sub_questions=data.get("subQuestions", ()),
        )


@dataclass(frozen=True)
class ConditionalContent:
    """Alternatives of which the student answers all (AND) or one (OR)."""

    questions: Tuple[str, ...] = ()
    logic: GroupLogic = GroupLogic.OR

    def __post_init__(self) -> None:
        _as_text_tuple(self, "questions")
        object.__setattr__(self, "logic", GroupLogic(self.logic))

    @property
    def items(self) -> Tuple[str, ...]:
        return self.questions

    def to_dict(self) -> dict:
        return {
            "conditionalQuestions": list(self.questions),
            "logic": self.logic.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ConditionalContent:
        return cls(
            questions=data.get("conditionalQuestions", ()),
            logic=data.get("logic") or GroupLogic.OR,
        )


@dataclass(frozen=True)
class ParagraphContent:
    """A passage followed by questions about it."""

    passage: str = ""
    questions: Tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        _require_text(self.passage, "passage")
        _as_text_tuple(self, "questions")

    @property
    def items(self) -> Tuple[str, ...]:
        return self.questions

    def to_dict(self) -> dict:
        return {
            "paraText": self.passage,
            "paraQuestions": list(self.questions),
        }

    @classmethod
    def from_dict(cls, data: dict) -> ParagraphContent:
        return cls(
            passage=data.get("paraText", ""),
            questions=data.get("paraQuestions", ()),
        )


QuestionContent = Union[
    MultipleChoiceContent,
    TrueFalseContent,
    FillInBlanksContent,
    WrittenContent,
    ConditionalContent,
    ParagraphContent,
]

CONTENT_CLASSES: Dict[QuestionType, Type[Any]] = {
    QuestionType.MCQ: MultipleChoiceContent,
    QuestionType.TRUE_FALSE: TrueFalseContent,
    QuestionType.FILL_IN_THE_BLANKS: FillInBlanksContent,
    QuestionType.SHORT_QUESTION: WrittenContent,
    QuestionType.LONG_QUESTION: WrittenContent,
    QuestionType.CONDITIONAL: ConditionalContent,
    QuestionType.PARA_QUESTION: ParagraphContent,
}

# Wire key holding per-item marks, for the types that have sub-items
ITEM_MARKS_KEYS: Dict[QuestionType, str] = {
    QuestionType.SHORT_QUESTION: "subQuestionMarks",
    QuestionType.LONG_QUESTION: "subQuestionMarks",
    QuestionType.CONDITIONAL: "conditionalQuestionMarks",
    QuestionType.PARA_QUESTION: "paraQuestionMarks",
}


def content_class_for(question_type: Union[QuestionType, str]) -> Type[Any]:
    """Content class used by the given question type."""
    return CONTENT_CLASSES[QuestionType(question_type)]


def content_from_dict(question_type: Union[QuestionType, str], data: dict) -> QuestionContent:
    """
    Build a payload for a question type from its wire dictionary.

    Args:
        question_type: Type tag of the owning question
        data: Wire dictionary for the content

    Returns:
        Content instance of the class registered for the type

    Raises:
        ValueError: If the type is unknown or the payload breaks its rules
    """
    if not isinstance(data, dict):
        raise ValueError(f"content must be an object: {data!r}")
    return content_class_for(question_type).from_dict(data)
