"""
Module: editor.drafts

Purpose:
    Staged edit buffers behind the section, group and question dialogs.
    A draft is plain mutable state; the document only changes when the
    draft is submitted through a PaperEditor. Throwing a draft away (the
    dialog was closed) leaves the document exactly as it was.

Key Classes:
    - SectionDraft: Title + instruction
    - GroupDraft: Type, instruction, logic, numbering style
    - QuestionDraft: Type-specific fields plus marks, with form validation
    - DraftError: Submitted draft failed validation (errors by field)

Example:
    >>> draft = QuestionDraft(type=QuestionType.SHORT_QUESTION)
    >>> draft.add_item("Define osmosis", 2)
    >>> draft.add_item("Give an example", 1)
    >>> draft.submit(editor, section.id, group.id).total_marks
    3
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

from paper_toolkit.core.models import (
    GroupLogic,
    NumberingStyle,
    Question,
    QuestionGroup,
    QuestionType,
    Section,
    content_class_for,
)
from paper_toolkit.core.models.content import (
    ConditionalContent,
    FillInBlanksContent,
    MultipleChoiceContent,
    ParagraphContent,
    TrueFalseContent,
    WrittenContent,
)

from .commands import EditorError

if TYPE_CHECKING:
    from .controller import PaperEditor

logger = logging.getLogger(__name__)

# Types answered with one prompt and one flat mark
SINGLE_PROMPT_TYPES = frozenset({
    QuestionType.MCQ,
    QuestionType.TRUE_FALSE,
    QuestionType.FILL_IN_THE_BLANKS,
})
WRITTEN_TYPES = frozenset({QuestionType.SHORT_QUESTION, QuestionType.LONG_QUESTION})

_ITEM_LABELS = {
    QuestionType.SHORT_QUESTION: "Sub-question",
    QuestionType.LONG_QUESTION: "Sub-question",
    QuestionType.PARA_QUESTION: "Paragraph question",
    QuestionType.CONDITIONAL: "Conditional question",
}


class DraftError(EditorError):
    """A draft was submitted with invalid fields."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__(f"Draft has {len(errors)} invalid field(s): {', '.join(sorted(errors))}")
        self.errors = dict(errors)


# ─────────────────────────────────────────────────────────────────────────────
# Section
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class SectionDraft:
    """Buffer for the section dialog. section_id is set when editing."""

    title: str = ""
    instruction: str = ""
    section_id: Optional[str] = None

    @classmethod
    def from_section(cls, section: Section) -> SectionDraft:
        return cls(title=section.title, instruction=section.instruction, section_id=section.id)

    def validate(self) -> Dict[str, str]:
        errors = {}
        if not self.title.strip():
            errors["title"] = "Section title is required"
        return errors

    def submit(self, editor: PaperEditor) -> Optional[Section]:
        """
        Apply the draft.

        Returns:
            The created or updated section, None if the edited one is gone

        Raises:
            DraftError: If the title is empty
        """
        errors = self.validate()
        if errors:
            raise DraftError(errors)
        if self.section_id is None:
            return editor.add_section(self.title, self.instruction)
        if not editor.edit_section(self.section_id, self.title, self.instruction):
            return None
        return editor.document.find_section(self.section_id)


# ─────────────────────────────────────────────────────────────────────────────
# Group
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class GroupDraft:
    """Buffer for the group dialog. group_id is set when editing."""

    type: QuestionType = QuestionType.MCQ
    instruction: str = ""
    logic: Optional[GroupLogic] = None
    numbering_style: NumberingStyle = NumberingStyle.NUMERIC
    group_id: Optional[str] = None

    @classmethod
    def from_group(cls, group: QuestionGroup) -> GroupDraft:
        return cls(
            type=group.type,
            instruction=group.instruction,
            logic=group.logic,
            numbering_style=group.numbering_style,
            group_id=group.id,
        )

    def validate(self) -> Dict[str, str]:
        errors = {}
        try:
            group_type = QuestionType(self.type)
        except ValueError:
            errors["type"] = f"Unknown question type: {self.type!r}"
            group_type = None
        if group_type is QuestionType.CONDITIONAL and self.logic:
            try:
                GroupLogic(self.logic)
            except ValueError:
                errors["logic"] = "Logic must be AND or OR"
        try:
            NumberingStyle(self.numbering_style)
        except ValueError:
            errors["numbering_style"] = f"Unknown numbering style: {self.numbering_style!r}"
        return errors

    def submit(self, editor: PaperEditor, section_id: str) -> Optional[QuestionGroup]:
        """
        Apply the draft to a section.

        Returns:
            The created or updated group, None if the target is gone
        """
        errors = self.validate()
        if errors:
            raise DraftError(errors)
        if self.group_id is None:
            return editor.add_group(section_id, self.type, self.instruction, self.logic, self.numbering_style)
        if not editor.edit_group(
            section_id, self.group_id, self.type, self.instruction, self.logic, self.numbering_style
        ):
            return None
        return editor.document.find_group(section_id, self.group_id)


# ─────────────────────────────────────────────────────────────────────────────
# Question
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class QuestionDraft:
    """
    Buffer for the question dialog.

    Attributes:
        type: Question kind (usually the owning group's type)
        question_text: Prompt (mcq, true-false, fill-in, short/long)
        choices: Multiple-choice options
        correct_answer: Index of the correct choice (mcq, true-false)
        passage: Paragraph text (para-question)
        items: Sub-questions, paragraph questions or alternatives
        item_marks: One mark per entry of items
        marks: Flat mark for single-prompt questions
        logic: AND/OR for conditional questions
        question_id: Set when editing an existing question
    """

    type: QuestionType = QuestionType.MCQ
    question_text: str = ""
    choices: List[str] = field(default_factory=lambda: ["", "", "", ""])
    correct_answer: int = 0
    passage: str = ""
    items: List[str] = field(default_factory=list)
    item_marks: List[int] = field(default_factory=list)
    marks: int = 1
    logic: GroupLogic = GroupLogic.OR
    question_id: Optional[str] = None

    @classmethod
    def from_question(cls, question: Question) -> QuestionDraft:
        """Load an existing question into a draft."""
        content = question.content
        draft = cls(type=question.type, question_id=question.id, marks=question.marks or 0)
        draft.question_text = getattr(content, "question_text", "")
        if isinstance(content, MultipleChoiceContent):
            draft.choices = list(content.choices)
        if isinstance(content, (MultipleChoiceContent, TrueFalseContent)):
            draft.correct_answer = content.correct_answer
        if isinstance(content, ParagraphContent):
            draft.passage = content.passage
        if isinstance(content, ConditionalContent):
            draft.logic = content.logic
        draft.items = list(question.items)
        marks = list(question.item_marks)
        draft.item_marks = (marks + [1] * len(draft.items))[: len(draft.items)]
        return draft

    @property
    def has_items(self) -> bool:
        return bool(self.items)

    def add_item(self, text: str = "", mark: int = 1) -> None:
        self.items.append(text)
        self.item_marks.append(mark)

    def remove_item(self, index: int) -> None:
        del self.items[index]
        del self.item_marks[index]

    def validate(self) -> Dict[str, str]:
        """
        Check the form fields.

        Returns:
            Field name -> message; empty when the draft can be submitted
        """
        errors: Dict[str, str] = {}
        try:
            qtype = QuestionType(self.type)
        except ValueError:
            return {"type": f"Unknown question type: {self.type!r}"}

        if qtype in SINGLE_PROMPT_TYPES:
            if not self.question_text.strip():
                errors["question_text"] = "Question text is required"
            if self.marks <= 0:
                errors["marks"] = "Marks must be greater than 0"
            if qtype is QuestionType.MCQ and len(self.choices) < 2:
                errors["choices"] = "At least two choices are required"
            return errors

        if qtype in WRITTEN_TYPES and not self.has_items:
            if not self.question_text.strip():
                errors["question_text"] = "Question text is required when no sub-questions are added"
            if self.marks <= 0:
                errors["marks"] = "Marks must be greater than 0"
            return errors

        if qtype is QuestionType.PARA_QUESTION and not self.passage.strip():
            errors["passage"] = "Paragraph text is required"

        label = _ITEM_LABELS[qtype]
        for i, text in enumerate(self.items):
            if not text.strip():
                errors[f"items[{i}]"] = f"{label} text is required"
        for i in range(len(self.items)):
            mark = self.item_marks[i] if i < len(self.item_marks) else 0
            if mark <= 0:
                errors[f"item_marks[{i}]"] = f"{label} marks must be greater than 0"
        return errors

    def build(self, question_id: str = "draft") -> Question:
        """
        Turn the draft into a Question; blank sub-items are dropped.

        Raises:
            DraftError: If the fields cannot form a valid question
        """
        qtype = QuestionType(self.type)
        pairs = [
            (text, mark)
            for text, mark in zip(self.items, self.item_marks + [0] * len(self.items))
            if text.strip()
        ]
        items = tuple(text for text, _ in pairs)
        item_marks = tuple(mark for _, mark in pairs)

        content_cls = content_class_for(qtype)
        try:
            if content_cls is MultipleChoiceContent:
                content = MultipleChoiceContent(tuple(self.choices), self.correct_answer, self.question_text)
            elif content_cls is TrueFalseContent:
                content = TrueFalseContent(self.correct_answer, self.question_text)
            elif content_cls is FillInBlanksContent:
                content = FillInBlanksContent(self.question_text)
            elif content_cls is WrittenContent:
                content = WrittenContent(self.question_text, items)
            elif content_cls is ConditionalContent:
                content = ConditionalContent(items, self.logic)
            else:
                content = ParagraphContent(self.passage, items)

            if qtype in SINGLE_PROMPT_TYPES or (qtype in WRITTEN_TYPES and not items):
                return Question(question_id, qtype, content, marks=self.marks)
            return Question(question_id, qtype, content, item_marks=item_marks)
        except ValueError as e:
            raise DraftError({"content": str(e)}) from e

    def submit(self, editor: PaperEditor, section_id: str, group_id: str) -> Optional[Question]:
        """
        Validate and apply the draft to a group.

        Returns:
            The stored question, None if the section/group/question is gone

        Raises:
            DraftError: If validation fails
        """
        errors = self.validate()
        if errors:
            logger.debug(f"Question draft rejected: {sorted(errors)}")
            raise DraftError(errors)
        question = self.build(self.question_id or "draft")
        if self.question_id is None:
            return editor.add_question(section_id, group_id, question)
        return editor.edit_question(section_id, group_id, self.question_id, question)
