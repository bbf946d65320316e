"""
Module: editor.store

Purpose:
    Holds the single live Document of an editing session and persists it
    after every committed change. Views subscribe to Qt signals instead of
    polling.

Key Classes:
    - DocumentStore: QObject owning the current Document

Signals:
    - documentChanged(object): New Document installed
    - saveFailed(str): Autosave failed; the in-memory document is kept
"""
from __future__ import annotations

import logging
from typing import Optional, Protocol

from PySide6.QtCore import QObject, Signal

from paper_toolkit.core.models import Document

from .persistence import StorageError

logger = logging.getLogger(__name__)


class PersistencePort(Protocol):
    """What the store needs from a persistence adapter."""

    def load(self) -> Document: ...

    def save(self, document: Document) -> None: ...


class DocumentStore(QObject):
    """
    Owner of the current Document.

    The document is loaded once from the persistence port on construction.
    commit() installs a new document, autosaves it and emits
    documentChanged. A failed save is reported through saveFailed and
    last_save_error but never rolls the document back.

    Usage:
        store = DocumentStore(DocumentPersistence(MemoryStorage()))
        store.documentChanged.connect(view.refresh)
        store.commit(new_document)
    """

    documentChanged = Signal(object)
    saveFailed = Signal(str)

    def __init__(self, persistence: PersistencePort, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._persistence = persistence
        self._document = persistence.load()
        self.last_save_error: Optional[str] = None
        logger.debug(f"Loaded paper with {len(self._document)} section(s)")

    @property
    def document(self) -> Document:
        """Current document (immutable, safe to hand out)."""
        return self._document

    def commit(self, document: Document) -> bool:
        """
        Install a new document and autosave it.

        Args:
            document: Document produced by a command

        Returns:
            True if the autosave succeeded
        """
        self._document = document
        saved = self.save()
        self.documentChanged.emit(document)
        return saved

    def save(self) -> bool:
        """Write the current document through the persistence port."""
        try:
            self._persistence.save(self._document)
        except StorageError as e:
            self.last_save_error = str(e)
            logger.warning(f"Autosave failed: {e}")
            self.saveFailed.emit(str(e))
            return False
        self.last_save_error = None
        return True
