"""
Editor Package

Editing session over a paper document: pure commands, the autosaving
store, persistence, search, confirmation of destructive actions and
staged dialog drafts.

Typical use:
    editor = PaperEditor.from_config(default_config())
    section = editor.add_section("Section A")
"""

from .commands import CommandError, EditorError, NotFoundError, ReorderError
from .config import EditorConfig, default_config
from .confirm import ActionKind, ConfirmationGate, PendingAction
from .controller import PaperEditor
from .drafts import DraftError, GroupDraft, QuestionDraft, SectionDraft
from .persistence import (
    DocumentPersistence,
    ImportFormatError,
    JsonFileStorage,
    MemoryStorage,
    PersistenceError,
    StorageError,
)
from .search import filter_document
from .store import DocumentStore

__all__ = [
    "CommandError",
    "EditorError",
    "NotFoundError",
    "ReorderError",
    "EditorConfig",
    "default_config",
    "ActionKind",
    "ConfirmationGate",
    "PendingAction",
    "PaperEditor",
    "DraftError",
    "GroupDraft",
    "QuestionDraft",
    "SectionDraft",
    "DocumentPersistence",
    "ImportFormatError",
    "JsonFileStorage",
    "MemoryStorage",
    "PersistenceError",
    "StorageError",
    "filter_document",
    "DocumentStore",
]
