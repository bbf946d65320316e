"""
Module: editor.persistence

Purpose:
    Persist the document in a local key/value store (autosave) and move it
    in and out of files (export/import). All three use the same JSON
    array of sections.

Key Classes:
    - StoragePort: Protocol for key/value storage (get/set/remove item)
    - JsonFileStorage: Key/value pairs in one JSON file, written atomically
    - MemoryStorage: In-process storage for tests and throwaway sessions
    - DocumentPersistence: Load/save a Document under a fixed key

Key Functions:
    - export_json(document): Pretty-printed JSON text
    - write_export(document, directory): Write paper.json, return its path
    - import_json(text): Parse and validate an imported paper

Error Handling:
    - StorageError: The backing store could not be read or written
    - ImportFormatError: Imported text is not a valid paper. `message` is
      the user-facing summary, `errors` lists each broken entity.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from paper_toolkit.core.models import Document
from paper_toolkit.core.schemas import ValidationError
from paper_toolkit.core.utils.serialization import deserialize_document, dumps_document

from .commands import EditorError
from .config import EXPORT_FILENAME, STORAGE_KEY

logger = logging.getLogger(__name__)


class PersistenceError(EditorError):
    """Base class for persistence failures."""
    pass


class StorageError(PersistenceError):
    """Backing storage is unavailable or a write failed."""
    pass


class ImportFormatError(PersistenceError):
    """Imported content is not a valid paper document."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


# ─────────────────────────────────────────────────────────────────────────────
# Key/value storage
# ─────────────────────────────────────────────────────────────────────────────

class StoragePort(Protocol):
    """Minimal key/value store holding text values."""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """Dictionary-backed storage."""

    def __init__(self, items: Optional[Dict[str, str]] = None) -> None:
        self.items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class JsonFileStorage:
    """
    Key/value pairs stored as one JSON object on disk.

    The file is re-read on every access so two stores pointing at the
    same path never disagree. A corrupted file reads as empty (with a
    warning); writes replace the file atomically through a temp file.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Storage file {self.path} is corrupted, treating as empty: {e}")
            return {}
        except OSError as e:
            raise StorageError(f"Failed to read storage {self.path}: {e}") from e
        if not isinstance(data, dict):
            logger.warning(f"Storage file {self.path} does not hold an object, treating as empty")
            return {}
        return data

    def _write(self, data: Dict[str, str]) -> None:
        """Safely write with atomic replacement."""
        temp_path = self.path.with_suffix(".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            temp_path.replace(self.path)
        except OSError as e:
            try:
                if temp_path.exists():
                    temp_path.unlink()
            except OSError:
                logger.debug(f"Could not remove temp file {temp_path}")
            raise StorageError(f"Failed to write storage {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


# ─────────────────────────────────────────────────────────────────────────────
# Autosave
# ─────────────────────────────────────────────────────────────────────────────

class DocumentPersistence:
    """
    Autosave adapter: the whole document under one storage key.

    Args:
        storage: Key/value store
        key: Storage key for the document
    """

    def __init__(self, storage: StoragePort, key: str = STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key

    def load(self) -> Document:
        """
        Read the stored document.

        Returns an empty Document when the key is absent, or when its value
        cannot be parsed or is not a valid paper. Never raises for bad data;
        storage failures are logged and also yield an empty document.
        """
        try:
            raw = self.storage.get_item(self.key)
        except StorageError as e:
            logger.warning(f"Could not read saved paper: {e}")
            return Document()
        if raw is None:
            return Document()

        try:
            return deserialize_document(json.loads(raw), validate=True)
        except json.JSONDecodeError as e:
            logger.warning(f"Saved paper under {self.key!r} is not JSON, starting empty: {e}")
        except (ValidationError, TypeError) as e:
            logger.warning(f"Saved paper under {self.key!r} is invalid, starting empty: {e}")
        return Document()

    def save(self, document: Document) -> None:
        """
        Write the document.

        Raises:
            StorageError: If the store rejects the write
        """
        self.storage.set_item(self.key, dumps_document(document))
        logger.debug(f"Autosaved {len(document)} section(s) under {self.key!r}")

    def clear(self) -> None:
        """Remove the stored document."""
        self.storage.remove_item(self.key)


# ─────────────────────────────────────────────────────────────────────────────
# Export / Import
# ─────────────────────────────────────────────────────────────────────────────

def export_json(document: Document) -> str:
    """Serialize the document as pretty-printed (2-space) JSON."""
    return dumps_document(document, pretty=True)


def write_export(document: Document, directory: Path, filename: str = EXPORT_FILENAME) -> Path:
    """
    Write the export artifact.

    Args:
        document: Document to export
        directory: Destination directory (created if missing)
        filename: Artifact name, paper.json by default

    Returns:
        Path of the written file

    Raises:
        StorageError: If the file cannot be written
    """
    path = Path(directory) / filename
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(export_json(document), encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Failed to write export {path}: {e}") from e
    logger.info(f"Exported {len(document)} section(s) to {path}")
    return path


def import_json(text: str, *, strict: bool = True) -> Document:
    """
    Parse imported text into a Document.

    Args:
        text: File contents
        strict: Also validate against the JSON schema

    Returns:
        The imported Document

    Raises:
        ImportFormatError: "Failed to parse JSON" when the text is not JSON,
            "Invalid format" when the top-level value is not an array,
            or a validation summary listing every broken entity
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise ImportFormatError("Failed to parse JSON", errors=[str(e)]) from e

    if not isinstance(data, list):
        raise ImportFormatError(
            "Invalid format",
            errors=[f"Expected a JSON array of sections, got {type(data).__name__}"],
        )

    try:
        return deserialize_document(data, validate=True, strict=strict)
    except ValidationError as e:
        raise ImportFormatError(f"Invalid paper: {len(e.errors)} problem(s) found", errors=e.errors) from e


def read_import(path: Path, *, strict: bool = True) -> Document:
    """
    Read and parse an import file.

    Raises:
        StorageError: If the file cannot be read
        ImportFormatError: If its contents are not a valid paper
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise StorageError(f"Failed to read {path}: {e}") from e
    return import_json(text, strict=strict)
