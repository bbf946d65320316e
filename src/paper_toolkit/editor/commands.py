"""
Module: editor.commands

Purpose:
    The command layer: one pure function per entity per verb. Each takes
    the current Document and returns a new Document (plus the created
    entity where there is one). Nothing is mutated in place, so observers
    only ever see the before and after documents.

Key Functions:
    - add_section / edit_section / rename_section / delete_section
    - duplicate_section: Deep clone with fresh ids and " (copy)" suffix
    - reorder_sections / move_section: Section order (only level users reorder)
    - add_group / edit_group / delete_group
    - add_question / edit_question / delete_question
    - clear_document

Key Classes:
    - EditorError: Base of all editor errors
    - CommandError: Precondition failure (empty title, bad payload)
    - NotFoundError: Target id does not resolve
    - ReorderError: Requested order is not a permutation of the sections

Used By:
    - editor.controller.PaperEditor (applies, autosaves, reports not-found)
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from paper_toolkit.core.ids import GROUP_PREFIX, QUESTION_PREFIX, SECTION_PREFIX, IdGenerator, new_id
from paper_toolkit.core.models import (
    Document,
    GroupLogic,
    NumberingStyle,
    Question,
    QuestionGroup,
    QuestionType,
    Section,
)

logger = logging.getLogger(__name__)

COPY_SUFFIX = " (copy)"

QuestionInput = Union[Question, Mapping[str, Any]]


class EditorError(Exception):
    """Base class for editor errors."""
    pass


class CommandError(EditorError):
    """A command's preconditions are not met."""
    pass


class NotFoundError(CommandError):
    """The section, group or question targeted by a command does not exist."""

    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind} not found: {entity_id!r}")
        self.kind = kind
        self.entity_id = entity_id


class ReorderError(CommandError):
    """Requested section order is not a permutation of the current sections."""
    pass


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _next_id(ids: Optional[IdGenerator], prefix: str) -> str:
    return ids.next(prefix) if ids is not None else new_id(prefix)


def _clean_title(title: Any) -> str:
    if not isinstance(title, str) or not title.strip():
        raise CommandError("Section title must not be empty")
    return title.strip()


def _clean_text(value: Any, name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise CommandError(f"{name} must be a string: {value!r}")
    return value


def _get_section(document: Document, section_id: str) -> Section:
    section = document.find_section(section_id)
    if section is None:
        raise NotFoundError("section", section_id)
    return section


def _get_group(section: Section, group_id: str) -> QuestionGroup:
    group = section.find_group(group_id)
    if group is None:
        raise NotFoundError("group", group_id)
    return group


def _with_section(document: Document, section: Section) -> Document:
    return replace(
        document,
        sections=tuple(section if s.id == section.id else s for s in document.sections),
    )


def _with_group(section: Section, group: QuestionGroup) -> Section:
    return replace(
        section,
        groups=tuple(group if g.id == group.id else g for g in section.groups),
    )


def _group_logic(group_type: QuestionType, logic: Any) -> Optional[GroupLogic]:
    """Logic survives only on conditional groups, defaulting to OR there."""
    if group_type is not QuestionType.CONDITIONAL:
        return None
    try:
        return GroupLogic(logic) if logic else GroupLogic.OR
    except ValueError as e:
        raise CommandError(f"Invalid group logic: {logic!r}") from e


def _group_type(group_type: Any) -> QuestionType:
    try:
        return QuestionType(group_type)
    except ValueError as e:
        raise CommandError(f"Unknown group type: {group_type!r}") from e


def _numbering_style(style: Any, default: NumberingStyle) -> NumberingStyle:
    if not style:
        return default
    try:
        return NumberingStyle(style)
    except ValueError as e:
        raise CommandError(f"Unknown numbering style: {style!r}") from e


def _build_question(question: QuestionInput, question_id: str) -> Question:
    """Materialize caller input as a Question carrying question_id."""
    if isinstance(question, Question):
        return replace(question, id=question_id)
    if isinstance(question, Mapping):
        try:
            return Question.from_dict({**question, "id": question_id})
        except (KeyError, TypeError, ValueError) as e:
            raise CommandError(f"Invalid question: {e}") from e
    raise CommandError(f"Unsupported question value: {type(question).__name__}")


def _check_type_agreement(group: QuestionGroup, question: Question, enforce: bool) -> None:
    if question.type is group.type:
        return
    if enforce:
        raise CommandError(
            f"{question.type.value} question does not belong in a {group.type.value} group"
        )
    logger.debug(f"Question {question.id} ({question.type.value}) stored in {group.type.value} group {group.id}")


# ─────────────────────────────────────────────────────────────────────────────
# Sections
# ─────────────────────────────────────────────────────────────────────────────

def add_section(
    document: Document,
    title: str,
    instruction: str = "",
    *,
    ids: Optional[IdGenerator] = None,
) -> Tuple[Document, Section]:
    """
    Append a new, empty section.

    Args:
        document: Current document
        title: Section title; trimmed, must not be empty
        instruction: Optional instruction text

    Returns:
        (new document, created section)

    Raises:
        CommandError: If the title is empty
    """
    section = Section(
        id=_next_id(ids, SECTION_PREFIX),
        title=_clean_title(title),
        instruction=_clean_text(instruction, "instruction"),
    )
    return replace(document, sections=document.sections + (section,)), section


def edit_section(document: Document, section_id: str, title: str, instruction: str = "") -> Document:
    """Rewrite a section's title and instruction; its groups are untouched."""
    clean_title = _clean_title(title)
    section = _get_section(document, section_id)
    updated = replace(section, title=clean_title, instruction=_clean_text(instruction, "instruction"))
    return _with_section(document, updated)


def rename_section(document: Document, section_id: str, new_title: str) -> Document:
    """
    Inline title edit.

    Empty or whitespace-only input keeps the prior title: the same
    document object is returned.
    """
    section = _get_section(document, section_id)
    if not isinstance(new_title, str) or not new_title.strip():
        return document
    return _with_section(document, replace(section, title=new_title.strip()))


def delete_section(document: Document, section_id: str) -> Document:
    """Remove a section together with all of its groups and questions."""
    _get_section(document, section_id)
    return replace(
        document,
        sections=tuple(s for s in document.sections if s.id != section_id),
    )


def duplicate_section(
    document: Document,
    section_id: str,
    *,
    ids: Optional[IdGenerator] = None,
) -> Tuple[Document, Section]:
    """
    Deep-clone a section and append the clone to the end of the document.

    The clone, every group and every question get fresh ids; the title
    gains a " (copy)" suffix. Payloads are immutable, so nothing mutable
    is shared with the source.
    """
    source = _get_section(document, section_id)
    groups = tuple(
        replace(
            group,
            id=_next_id(ids, GROUP_PREFIX),
            questions=tuple(replace(q, id=_next_id(ids, QUESTION_PREFIX)) for q in group.questions),
        )
        for group in source.groups
    )
    clone = replace(
        source,
        id=_next_id(ids, SECTION_PREFIX),
        title=source.title + COPY_SUFFIX,
        groups=groups,
    )
    return replace(document, sections=document.sections + (clone,)), clone


def reorder_sections(document: Document, ordered_ids: Iterable[str]) -> Document:
    """
    Replace the section order.

    Args:
        document: Current document
        ordered_ids: Every current section id exactly once, in the new order

    Raises:
        ReorderError: If ordered_ids is not a permutation of the section ids
    """
    order = list(ordered_ids)
    current = document.section_ids
    if len(order) != len(current) or len(set(order)) != len(order) or set(order) != set(current):
        missing = sorted(set(current) - set(order))
        unknown = sorted(set(order) - set(current))
        raise ReorderError(
            f"Order must be a permutation of the {len(current)} section ids "
            f"(missing={missing}, unknown={unknown}, given={len(order)})"
        )
    by_id = {s.id: s for s in document.sections}
    return replace(document, sections=tuple(by_id[sid] for sid in order))


def move_section(document: Document, section_id: str, new_index: int) -> Document:
    """
    Drag-and-drop splice: remove a section and insert it at new_index.

    The index is clamped to the valid range.
    """
    old_index = document.index_of(section_id)
    if old_index < 0:
        raise NotFoundError("section", section_id)
    sections = list(document.sections)
    section = sections.pop(old_index)
    new_index = max(0, min(new_index, len(sections)))
    sections.insert(new_index, section)
    return replace(document, sections=tuple(sections))


def clear_document(document: Document) -> Document:
    """Drop every section."""
    return replace(document, sections=())


# ─────────────────────────────────────────────────────────────────────────────
# Groups
# ─────────────────────────────────────────────────────────────────────────────

def add_group(
    document: Document,
    section_id: str,
    group_type: Union[QuestionType, str],
    instruction: str = "",
    logic: Optional[Union[GroupLogic, str]] = None,
    numbering_style: Union[NumberingStyle, str] = NumberingStyle.NUMERIC,
    *,
    ids: Optional[IdGenerator] = None,
) -> Tuple[Document, QuestionGroup]:
    """
    Append a new, empty group to a section.

    logic is kept only for conditional groups (defaulting to OR there)
    and dropped for every other type.

    Returns:
        (new document, created group)
    """
    gtype = _group_type(group_type)
    section = _get_section(document, section_id)
    group = QuestionGroup(
        id=_next_id(ids, GROUP_PREFIX),
        type=gtype,
        instruction=_clean_text(instruction, "instruction"),
        logic=_group_logic(gtype, logic),
        numbering_style=_numbering_style(numbering_style, NumberingStyle.NUMERIC),
    )
    section = replace(section, groups=section.groups + (group,))
    return _with_section(document, section), group


def edit_group(
    document: Document,
    section_id: str,
    group_id: str,
    group_type: Union[QuestionType, str],
    instruction: str = "",
    logic: Optional[Union[GroupLogic, str]] = None,
    numbering_style: Optional[Union[NumberingStyle, str]] = None,
) -> Document:
    """
    Rewrite a group's type, instruction, logic and numbering style.

    Questions are kept. numbering_style=None keeps the current style.
    """
    gtype = _group_type(group_type)
    section = _get_section(document, section_id)
    group = _get_group(section, group_id)
    updated = replace(
        group,
        type=gtype,
        instruction=_clean_text(instruction, "instruction"),
        logic=_group_logic(gtype, logic),
        numbering_style=_numbering_style(numbering_style, group.numbering_style),
    )
    return _with_section(document, _with_group(section, updated))


def delete_group(document: Document, section_id: str, group_id: str) -> Document:
    """Remove a group and its questions from the owning section."""
    section = _get_section(document, section_id)
    _get_group(section, group_id)
    section = replace(section, groups=tuple(g for g in section.groups if g.id != group_id))
    return _with_section(document, section)


# ─────────────────────────────────────────────────────────────────────────────
# Questions
# ─────────────────────────────────────────────────────────────────────────────

def add_question(
    document: Document,
    section_id: str,
    group_id: str,
    question: QuestionInput,
    *,
    ids: Optional[IdGenerator] = None,
    enforce_type_agreement: bool = False,
) -> Tuple[Document, Question]:
    """
    Append a question to a group.

    Args:
        document: Current document
        section_id: Owning section
        group_id: Owning group
        question: Question (its id is replaced) or wire-form mapping with
            "type" and "content"
        enforce_type_agreement: Reject a type different from the group's

    Returns:
        (new document, stored question with its fresh id)
    """
    section = _get_section(document, section_id)
    group = _get_group(section, group_id)
    stored = _build_question(question, _next_id(ids, QUESTION_PREFIX))
    _check_type_agreement(group, stored, enforce_type_agreement)
    group = replace(group, questions=group.questions + (stored,))
    return _with_section(document, _with_group(section, group)), stored


def edit_question(
    document: Document,
    section_id: str,
    group_id: str,
    question_id: str,
    question: QuestionInput,
    *,
    enforce_type_agreement: bool = False,
) -> Tuple[Document, Question]:
    """
    Replace a question in place, keeping its id and position.

    Returns:
        (new document, stored question)
    """
    section = _get_section(document, section_id)
    group = _get_group(section, group_id)
    if group.find_question(question_id) is None:
        raise NotFoundError("question", question_id)
    stored = _build_question(question, question_id)
    _check_type_agreement(group, stored, enforce_type_agreement)
    group = replace(
        group,
        questions=tuple(stored if q.id == question_id else q for q in group.questions),
    )
    return _with_section(document, _with_group(section, group)), stored


def delete_question(document: Document, section_id: str, group_id: str, question_id: str) -> Document:
    """Remove one question; the group stays even when it becomes empty."""
    section = _get_section(document, section_id)
    group = _get_group(section, group_id)
    if group.find_question(question_id) is None:
        raise NotFoundError("question", question_id)
    group = replace(group, questions=tuple(q for q in group.questions if q.id != question_id))
    return _with_section(document, _with_group(section, group))
