"""Confirmation gate for destructive actions.

Deleting a section, group or question (or clearing the whole paper) is a
two-step flow: request_confirm() records the action and asks the view to
show a prompt; only confirm() runs it. A new request replaces whatever
was pending, and cancel() drops it without touching the document.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from PySide6.QtCore import QObject, Signal

if TYPE_CHECKING:
    from .controller import PaperEditor

logger = logging.getLogger(__name__)


class ActionKind(str, Enum):
    DELETE_SECTION = "delete-section"
    DELETE_GROUP = "delete-group"
    DELETE_QUESTION = "delete-question"
    CLEAR_DOCUMENT = "clear-document"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PendingAction:
    """A destructive action waiting for the user's answer."""

    kind: ActionKind
    section_id: Optional[str] = None
    group_id: Optional[str] = None
    question_id: Optional[str] = None

    @classmethod
    def delete_section(cls, section_id: str) -> PendingAction:
        return cls(ActionKind.DELETE_SECTION, section_id)

    @classmethod
    def delete_group(cls, section_id: str, group_id: str) -> PendingAction:
        return cls(ActionKind.DELETE_GROUP, section_id, group_id)

    @classmethod
    def delete_question(cls, section_id: str, group_id: str, question_id: str) -> PendingAction:
        return cls(ActionKind.DELETE_QUESTION, section_id, group_id, question_id)

    @classmethod
    def clear_document(cls) -> PendingAction:
        return cls(ActionKind.CLEAR_DOCUMENT)

    @property
    def message(self) -> str:
        """Prompt text for the confirmation dialog."""
        if self.kind is ActionKind.DELETE_SECTION:
            return "Are you sure you want to delete this section and all of its question groups?"
        if self.kind is ActionKind.DELETE_GROUP:
            return "Are you sure you want to delete this question group and all of its questions?"
        if self.kind is ActionKind.DELETE_QUESTION:
            return "Are you sure you want to delete this question?"
        return "Are you sure you want to clear the whole paper? This cannot be undone."


class ConfirmationGate(QObject):
    """Holds at most one pending destructive action.

    Usage:
        gate = ConfirmationGate(editor)
        gate.confirmationRequested.connect(dialog.ask)
        gate.request_confirm(PendingAction.delete_section(section.id))

        # In the dialog handler
        gate.confirm()   # or gate.cancel()
    """

    # Emitted with the prompt text when a new action is pending
    confirmationRequested = Signal(str)
    # Emitted with the PendingAction after it has run
    actionConfirmed = Signal(object)
    # Emitted with the PendingAction that was discarded
    actionCancelled = Signal(object)

    def __init__(self, editor: PaperEditor, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._editor = editor
        self._pending: Optional[PendingAction] = None

    @property
    def pending(self) -> Optional[PendingAction]:
        return self._pending

    def request_confirm(self, action: PendingAction) -> None:
        """Record an action (replacing any pending one) and ask for confirmation."""
        if self._pending is not None:
            logger.debug(f"Replacing pending {self._pending.kind} with {action.kind}")
        self._pending = action
        self.confirmationRequested.emit(action.message)

    def confirm(self) -> bool:
        """Run the pending action.

        Returns:
            The editor's result, or False when nothing was pending
        """
        action = self._pending
        if action is None:
            return False
        self._pending = None
        result = self._execute(action)
        logger.info(f"Confirmed {action.kind}")
        self.actionConfirmed.emit(action)
        return result

    def cancel(self) -> None:
        """Discard the pending action without running it."""
        action = self._pending
        if action is None:
            return
        self._pending = None
        logger.debug(f"Cancelled {action.kind}")
        self.actionCancelled.emit(action)

    def _execute(self, action: PendingAction) -> bool:
        if action.kind is ActionKind.DELETE_SECTION:
            return self._editor.delete_section(action.section_id)
        if action.kind is ActionKind.DELETE_GROUP:
            return self._editor.delete_group(action.section_id, action.group_id)
        if action.kind is ActionKind.DELETE_QUESTION:
            return self._editor.delete_question(action.section_id, action.group_id, action.question_id)
        self._editor.clear()
        return True
