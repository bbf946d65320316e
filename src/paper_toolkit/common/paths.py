"""
Path utilities for handling dev vs production (frozen) file locations.

Dev mode: Uses local workspace/ directory
Frozen mode: Uses the system-standard app data location
Override: PAPER_TOOLKIT_HOME points both modes at an explicit directory
"""
from __future__ import annotations

import os
import sys
from pathlib import Path

from PySide6.QtCore import QStandardPaths

HOME_ENV_VAR = "PAPER_TOOLKIT_HOME"
STORAGE_FILENAME = "local_storage.json"


def is_frozen() -> bool:
    """Check if running as a frozen (PyInstaller) application."""
    return getattr(sys, 'frozen', False) or hasattr(sys, '_MEIPASS')


def get_app_data_dir() -> Path:
    """
    Get the application data directory for internal state files.

    Override: $PAPER_TOOLKIT_HOME
    Frozen: Qt AppLocalDataLocation (e.g. %LOCALAPPDATA%/Paper Builder)
    Dev: workspace/
    """
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    if is_frozen():
        app_data = Path(QStandardPaths.writableLocation(
            QStandardPaths.StandardLocation.AppLocalDataLocation
        ))
        app_data.mkdir(parents=True, exist_ok=True)
        return app_data
    # Dev mode: use local workspace
    return Path.cwd() / "workspace"


def get_storage_path() -> Path:
    """Get the path of the key/value file backing autosave."""
    return get_app_data_dir() / STORAGE_FILENAME


def get_export_dir() -> Path:
    """
    Get the default directory for exported papers.

    Frozen: the user's Documents folder
    Dev: workspace/exports
    """
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser() / "exports"
    if is_frozen():
        docs = Path(QStandardPaths.writableLocation(
            QStandardPaths.StandardLocation.DocumentsLocation
        ))
        return docs / "Paper Builder"
    return Path.cwd() / "workspace" / "exports"
