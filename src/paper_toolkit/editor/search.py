"""
Module: editor.search

Purpose:
    Derive a filtered, read-only view of the document from a free-text
    query. Filtering works at section and group granularity; questions
    inside a kept group are always kept.

Rules (case-insensitive):
    - A group is kept if its type or instruction contains the query.
    - A section is kept if its title or instruction contains the query,
      or if at least one of its groups is kept.
    - The empty query keeps everything: filter_document(doc, "") == doc.
"""

from __future__ import annotations

from dataclasses import replace

from paper_toolkit.core.models import Document, QuestionGroup, Section


def group_matches(group: QuestionGroup, needle: str) -> bool:
    """Check a group against an already lower-cased query."""
    return needle == "" or needle in group.type.value or needle in group.instruction.lower()


def section_matches(section: Section, needle: str) -> bool:
    """Check a section's own text against an already lower-cased query."""
    return needle == "" or needle in section.title.lower() or needle in section.instruction.lower()


def filter_document(document: Document, query: str) -> Document:
    """
    Filter a document by query.

    Args:
        document: Source document (not modified)
        query: Free text; matching ignores case

    Returns:
        A new Document holding the kept sections, each with only its kept groups

    Example:
        >>> filter_document(doc, "vocabulary").section_ids
        ['sec-...']
    """
    needle = (query or "").lower()
    if needle == "":
        return document

    kept = []
    for section in document.sections:
        groups = tuple(g for g in section.groups if group_matches(g, needle))
        if section_matches(section, needle) or groups:
            kept.append(replace(section, groups=groups))
    return replace(document, sections=tuple(kept))
