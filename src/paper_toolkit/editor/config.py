"""
Module: editor.config

Purpose:
    Configuration dataclass for the paper editor. Immutable configuration
    with validation on construction.

Key Classes:
    - EditorConfig: Storage location, import strictness, type policy

Key Functions:
    - default_config(): Config rooted at the app data directory

Used By:
    - editor.controller.PaperEditor
    - cli
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from paper_toolkit.common.paths import get_export_dir, get_storage_path

STORAGE_KEY = "paper_generator_v2"
EXPORT_FILENAME = "paper.json"


@dataclass(frozen=True)
class EditorConfig:
    """
    Configuration for a paper editing session (immutable).

    Attributes:
        storage_path: JSON key/value file backing autosave
        storage_key: Key under which the document is stored
        export_dir: Default directory for export_json()
        export_filename: File name of exported papers
        strict_import: Run jsonschema on imports in addition to basic checks
        enforce_type_agreement: Reject questions whose type differs from
            their group's type

    Example:
        >>> config = EditorConfig(storage_path=Path("/tmp/store.json"))
        >>> config.storage_key
        'paper_generator_v2'
    """

    storage_path: Path = field(default_factory=get_storage_path)
    storage_key: str = STORAGE_KEY
    export_dir: Optional[Path] = None
    export_filename: str = EXPORT_FILENAME

    # Import / command policy
    strict_import: bool = True
    enforce_type_agreement: bool = False

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        object.__setattr__(self, "storage_path", Path(self.storage_path))
        if self.export_dir is not None:
            object.__setattr__(self, "export_dir", Path(self.export_dir))
        if not self.storage_key or not self.storage_key.strip():
            raise ValueError(f"storage_key must be non-empty: {self.storage_key!r}")
        if not self.export_filename.endswith(".json"):
            raise ValueError(f"export_filename must end with .json: {self.export_filename!r}")

    @property
    def resolved_export_dir(self) -> Path:
        return self.export_dir if self.export_dir is not None else get_export_dir()


def default_config() -> EditorConfig:
    """Configuration rooted at the application data directory."""
    return EditorConfig()
