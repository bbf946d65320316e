"""
Module: editor.controller

Purpose:
    The caller-facing mutation surface. PaperEditor applies command-layer
    functions to the store's document, commits (and so autosaves) every
    successful change, and turns an unresolved target into an explicit
    "not found" result instead of an exception.

Key Classes:
    - PaperEditor: Session facade over DocumentStore + commands

Results:
    - add_* / duplicate_section return the created entity, or None when
      the parent/target id does not resolve
    - edit_* / delete_* / rename_section / move_section return True when
      applied, False when nothing changed
    - reorder_sections raises ReorderError for a non-permutation
    - CommandError propagates for invalid input (empty title, bad payload)

Used By:
    - editor.confirm.ConfirmationGate
    - editor.drafts
    - cli
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional, Tuple, TypeVar, Union

from paper_toolkit.core.ids import IdGenerator
from paper_toolkit.core.models import (
    Document,
    GroupLogic,
    NumberingStyle,
    Question,
    QuestionGroup,
    QuestionType,
    Section,
)

from . import commands
from .commands import NotFoundError, QuestionInput
from .config import EditorConfig
from .persistence import DocumentPersistence, JsonFileStorage, read_import, write_export
from .persistence import export_json as _export_json
from .persistence import import_json as _import_json
from .search import filter_document
from .store import DocumentStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PaperEditor:
    """
    Editing session over one paper.

    Args:
        store: Store owning the live document
        config: Editor configuration (import strictness, type policy, export)
        ids: Identifier generator (defaults to the shared one)

    Example:
        >>> editor = PaperEditor.from_config(EditorConfig(storage_path=tmp / "store.json"))
        >>> section = editor.add_section("Quiz 1")
        >>> group = editor.add_group(section.id, "mcq", "Pick one")
        >>> editor.add_question(section.id, group.id, {
        ...     "type": "mcq", "content": {"choices": ["A", "B"], "correctAnswer": 0}})
    """

    def __init__(
        self,
        store: DocumentStore,
        config: Optional[EditorConfig] = None,
        ids: Optional[IdGenerator] = None,
    ) -> None:
        self.store = store
        self.config = config or EditorConfig()
        self.ids = ids

    @classmethod
    def from_config(cls, config: EditorConfig, ids: Optional[IdGenerator] = None) -> PaperEditor:
        """Build an editor whose autosave goes to config.storage_path."""
        persistence = DocumentPersistence(JsonFileStorage(config.storage_path), config.storage_key)
        return cls(DocumentStore(persistence), config, ids)

    # ─────────────────────────────────────────────────────────────────────────
    # Read access
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def document(self) -> Document:
        return self.store.document

    def filtered(self, query: str) -> Document:
        """Read-only view of the document filtered by query."""
        return filter_document(self.store.document, query)

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _apply(self, action: str, command: Callable[[Document], Tuple[Document, T]]) -> Optional[T]:
        """Run a command, commit its document, return its value (None if not found)."""
        try:
            document, value = command(self.store.document)
        except NotFoundError as e:
            logger.debug(f"{action} skipped: {e}")
            return None
        self.store.commit(document)
        logger.debug(f"{action} applied")
        return value

    def _apply_flag(self, action: str, command: Callable[[Document], Document]) -> bool:
        return self._apply(action, lambda doc: (command(doc), True)) is not None

    # ─────────────────────────────────────────────────────────────────────────
    # Sections
    # ─────────────────────────────────────────────────────────────────────────

    def add_section(self, title: str, instruction: str = "") -> Section:
        """Append a section; raises CommandError for an empty title."""
        section = self._apply(
            "add_section",
            lambda doc: commands.add_section(doc, title, instruction, ids=self.ids),
        )
        logger.info(f"Added section {section.title!r}")
        return section

    def edit_section(self, section_id: str, title: str, instruction: str = "") -> bool:
        return self._apply_flag(
            "edit_section",
            lambda doc: commands.edit_section(doc, section_id, title, instruction),
        )

    def rename_section(self, section_id: str, new_title: str) -> bool:
        """Inline rename; empty input keeps the old title and returns False."""
        try:
            document = commands.rename_section(self.store.document, section_id, new_title)
        except NotFoundError as e:
            logger.debug(f"rename_section skipped: {e}")
            return False
        if document is self.store.document:
            logger.debug("rename_section ignored empty title")
            return False
        self.store.commit(document)
        return True

    def delete_section(self, section_id: str) -> bool:
        """Delete a section and its subtree. User surfaces go through ConfirmationGate."""
        return self._apply_flag(
            "delete_section",
            lambda doc: commands.delete_section(doc, section_id),
        )

    def duplicate_section(self, section_id: str) -> Optional[Section]:
        clone = self._apply(
            "duplicate_section",
            lambda doc: commands.duplicate_section(doc, section_id, ids=self.ids),
        )
        if clone is not None:
            logger.info(f"Duplicated section {section_id} as {clone.id}")
        return clone

    def reorder_sections(self, ordered_ids: Iterable[str]) -> None:
        """Apply a full new section order; raises ReorderError if invalid."""
        self.store.commit(commands.reorder_sections(self.store.document, ordered_ids))

    def move_section(self, section_id: str, new_index: int) -> bool:
        return self._apply_flag(
            "move_section",
            lambda doc: commands.move_section(doc, section_id, new_index),
        )

    def clear(self) -> None:
        """Drop every section. User surfaces go through ConfirmationGate."""
        self.store.commit(commands.clear_document(self.store.document))
        logger.info("Cleared paper")

    # ─────────────────────────────────────────────────────────────────────────
    # Groups
    # ─────────────────────────────────────────────────────────────────────────

    def add_group(
        self,
        section_id: str,
        group_type: Union[QuestionType, str],
        instruction: str = "",
        logic: Optional[Union[GroupLogic, str]] = None,
        numbering_style: Union[NumberingStyle, str] = NumberingStyle.NUMERIC,
    ) -> Optional[QuestionGroup]:
        return self._apply(
            "add_group",
            lambda doc: commands.add_group(
                doc, section_id, group_type, instruction, logic, numbering_style, ids=self.ids
            ),
        )

    def edit_group(
        self,
        section_id: str,
        group_id: str,
        group_type: Union[QuestionType, str],
        instruction: str = "",
        logic: Optional[Union[GroupLogic, str]] = None,
        numbering_style: Optional[Union[NumberingStyle, str]] = None,
    ) -> bool:
        return self._apply_flag(
            "edit_group",
            lambda doc: commands.edit_group(
                doc, section_id, group_id, group_type, instruction, logic, numbering_style
            ),
        )

    def delete_group(self, section_id: str, group_id: str) -> bool:
        return self._apply_flag(
            "delete_group",
            lambda doc: commands.delete_group(doc, section_id, group_id),
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Questions
    # ─────────────────────────────────────────────────────────────────────────

    def add_question(self, section_id: str, group_id: str, question: QuestionInput) -> Optional[Question]:
        return self._apply(
            "add_question",
            lambda doc: commands.add_question(
                doc, section_id, group_id, question,
                ids=self.ids,
                enforce_type_agreement=self.config.enforce_type_agreement,
            ),
        )

    def edit_question(
        self,
        section_id: str,
        group_id: str,
        question_id: str,
        question: QuestionInput,
    ) -> Optional[Question]:
        return self._apply(
            "edit_question",
            lambda doc: commands.edit_question(
                doc, section_id, group_id, question_id, question,
                enforce_type_agreement=self.config.enforce_type_agreement,
            ),
        )

    def delete_question(self, section_id: str, group_id: str, question_id: str) -> bool:
        return self._apply_flag(
            "delete_question",
            lambda doc: commands.delete_question(doc, section_id, group_id, question_id),
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Export / Import
    # ─────────────────────────────────────────────────────────────────────────

    def export_json(self) -> str:
        """Pretty-printed JSON of the current document."""
        return _export_json(self.store.document)

    def export_to_file(self, directory: Optional[Path] = None) -> Path:
        """Write paper.json (or the configured name) and return its path."""
        target = Path(directory) if directory is not None else self.config.resolved_export_dir
        return write_export(self.store.document, target, self.config.export_filename)

    def import_json(self, text: str) -> Document:
        """
        Replace the whole document with imported JSON.

        Raises:
            ImportFormatError: The current document is left untouched
        """
        document = _import_json(text, strict=self.config.strict_import)
        self.store.commit(document)
        logger.info(f"Imported {len(document)} section(s)")
        return document

    def import_file(self, path: Path) -> Document:
        """Read a file and import it; same failure contract as import_json."""
        document = read_import(path, strict=self.config.strict_import)
        self.store.commit(document)
        logger.info(f"Imported {len(document)} section(s) from {path}")
        return document
