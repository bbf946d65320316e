"""Top-level package for the Paper Builder toolkit.

Provides subpackages:
- paper_toolkit.core – document model, payload schemas, serialization
- paper_toolkit.editor – command layer, store, persistence, search, confirmation gate
- paper_toolkit.common – paths and logging helpers
- paper_toolkit.cli – command-line entry point
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.is_file():
        for line in pyproject.read_text(encoding="utf-8").splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    try:
        return pkg_version("paper-builder-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__copyright__ = "Copyright 2026 Paper Builder Toolkit contributors"
__all__: list[str] = ["__version__"]
