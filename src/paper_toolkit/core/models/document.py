"""
Module: document

Purpose:
    Provides the Document dataclass - the ordered list of sections that
    makes up a paper - and the read accessors the editor and views use.
    Nothing here mutates; every change goes through editor.commands.

Key Functions:
    - Document.numbered_questions(): Depth-first running numbers
    - Document.question_number(id): Number of one question
    - Document.all_ids(): Every section, group and question id in order
    - Document.to_list() / Document.from_list(): Wire conversion

Numbering:
    Question numbers come from a left-to-right, depth-first walk of
    sections -> groups -> questions starting at 1 on every walk. They are
    derived on demand and never stored on a Question.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, NamedTuple, Optional, Tuple

from .groups import QuestionGroup
from .questions import Question
from .sections import Section


class NumberedQuestion(NamedTuple):
    """A question with its running number and owners."""
    number: int
    section: Section
    group: QuestionGroup
    question: Question


@dataclass(frozen=True)
class Document:
    """
    Whole paper (immutable).

    Attributes:
        sections: Sections in display order (the only user-reorderable level)

    Example:
        >>> doc = Document()
        >>> doc.question_count
        0
    """

    sections: Tuple[Section, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "sections", tuple(self.sections))

    def __len__(self) -> int:
        return len(self.sections)

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections)

    # ─────────────────────────────────────────────────────────────────────────
    # Lookup
    # ─────────────────────────────────────────────────────────────────────────

    def find_section(self, section_id: str) -> Optional[Section]:
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    def find_group(self, section_id: str, group_id: str) -> Optional[QuestionGroup]:
        section = self.find_section(section_id)
        return section.find_group(group_id) if section else None

    def find_question(self, section_id: str, group_id: str, question_id: str) -> Optional[Question]:
        group = self.find_group(section_id, group_id)
        return group.find_question(question_id) if group else None

    def index_of(self, section_id: str) -> int:
        """Position of a section, or -1 when absent."""
        for i, section in enumerate(self.sections):
            if section.id == section_id:
                return i
        return -1

    @property
    def section_ids(self) -> List[str]:
        return [s.id for s in self.sections]

    def all_ids(self) -> List[str]:
        """Every section, group and question id, depth-first."""
        ids: List[str] = []
        for section in self.sections:
            ids.append(section.id)
            for group in section.groups:
                ids.append(group.id)
                ids.extend(q.id for q in group.questions)
        return ids

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties (NEVER stored)
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def question_count(self) -> int:
        return sum(s.question_count for s in self.sections)

    @property
    def group_count(self) -> int:
        return sum(len(s.groups) for s in self.sections)

    @property
    def total_marks(self) -> int:
        return sum(s.total_marks for s in self.sections)

    def numbered_questions(self) -> Iterator[NumberedQuestion]:
        """
        Walk the paper depth-first, numbering questions from 1.

        Yields:
            NumberedQuestion for every question in display order
        """
        number = 0
        for section in self.sections:
            for group in section.groups:
                for question in group.questions:
                    number += 1
                    yield NumberedQuestion(number, section, group, question)

    def question_number(self, question_id: str) -> Optional[int]:
        """Running number of a question, or None if it is not in the paper."""
        for entry in self.numbered_questions():
            if entry.question.id == question_id:
                return entry.number
        return None

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_list(self) -> list:
        return [s.to_dict() for s in self.sections]

    @classmethod
    def from_list(cls, data: list) -> Document:
        return cls(sections=tuple(Section.from_dict(s) for s in data))

    def __repr__(self) -> str:
        return f"Document(sections={len(self.sections)}, questions={self.question_count})"
