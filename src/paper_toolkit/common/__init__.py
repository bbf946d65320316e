"""Common utilities shared across the toolkit."""

from __future__ import annotations

from .logging_utils import configure_logging
from .paths import get_app_data_dir, get_export_dir, get_storage_path, is_frozen

__all__ = [
    "configure_logging",
    "get_app_data_dir",
    "get_export_dir",
    "get_storage_path",
    "is_frozen",
]
