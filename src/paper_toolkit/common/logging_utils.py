"""
Logging setup for command-line use.
"""
from __future__ import annotations

import logging


def configure_logging(verbose: bool = False) -> None:
    """
    Configure root logging with the plain message format used by the tools.

    Args:
        verbose: Log DEBUG records (not-found no-ops, autosave writes) too.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        force=True,
    )
