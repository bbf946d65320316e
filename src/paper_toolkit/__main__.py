"""Entry point for ``python -m paper_toolkit``."""
import sys

from paper_toolkit.cli import main

sys.exit(main())
