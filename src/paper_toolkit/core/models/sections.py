"""
Module: sections

Purpose:
    Provides the Section dataclass - a titled block of the paper owning an
    ordered list of question groups.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .groups import QuestionGroup


@dataclass(frozen=True)
class Section:
    """
    Paper section (immutable).

    Attributes:
        id: Unique identifier like "sec-1760822400000-0000-a1b2c3"
        title: Section heading (non-empty when created via the editor)
        instruction: Optional instruction paragraph
        groups: Question groups in display order
    """

    id: str
    title: str
    instruction: str = ""
    groups: Tuple[QuestionGroup, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise ValueError(f"Section id must be a non-empty string: {self.id!r}")
        if not isinstance(self.title, str):
            raise ValueError(f"title must be a string: {self.title!r}")
        if not isinstance(self.instruction, str):
            raise ValueError(f"instruction must be a string: {self.instruction!r}")
        object.__setattr__(self, "groups", tuple(self.groups))

    @property
    def question_count(self) -> int:
        """Running question count: sum of group counts in order."""
        return sum(g.question_count for g in self.groups)

    @property
    def total_marks(self) -> int:
        return sum(g.total_marks for g in self.groups)

    def find_group(self, group_id: str) -> Optional[QuestionGroup]:
        for group in self.groups:
            if group.id == group_id:
                return group
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "instruction": self.instruction,
            "groups": [g.to_dict() for g in self.groups],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Section:
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            instruction=data.get("instruction") or "",
            groups=tuple(QuestionGroup.from_dict(g) for g in data.get("groups", [])),
        )

    def __repr__(self) -> str:
        return f"Section({self.id!r}, title={self.title!r}, groups={len(self.groups)})"
