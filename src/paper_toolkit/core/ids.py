"""
Module: ids

Purpose:
    Generate identifiers for sections, groups and questions. Identifiers
    are unique within the process and sort lexicographically in creation
    order, so an id alone tells which of two entities is older.

Key Classes:
    - IdGenerator: Stateful generator (clock + sequence + random suffix)

Key Functions:
    - new_id(prefix): Draw an id from the module-level generator

Format:
    "<prefix><epoch ms, 13 digits>-<sequence, 4 digits>-<6 base36 chars>"
    e.g. "sec-1760822400000-0003-k2f9qa"

Used By:
    - editor.commands: every entity creation and duplication
"""

from __future__ import annotations

import random
import string
import threading
import time
from typing import Callable, Optional

SECTION_PREFIX = "sec-"
GROUP_PREFIX = "g-"
QUESTION_PREFIX = "q-"

_ALPHABET = string.digits + string.ascii_lowercase
_SEQ_LIMIT = 10_000


class IdGenerator:
    """
    Time-ordered identifier source.

    The millisecond clock gives the coarse order. A per-millisecond sequence
    keeps ids ordered (and distinct) when several are minted within the same
    millisecond, and the generator never lets its clock run backwards.

    Args:
        clock: Returns the current time in epoch milliseconds
        rng: Random source for the suffix (seedable in tests)

    Example:
        >>> gen = IdGenerator(clock=lambda: 1_700_000_000_000, rng=random.Random(1))
        >>> a, b = gen.next("q-"), gen.next("q-")
        >>> a < b
        True
    """

    def __init__(
        self,
        clock: Optional[Callable[[], int]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._clock = clock or (lambda: time.time_ns() // 1_000_000)
        self._rng = rng or random.Random()
        self._lock = threading.Lock()
        self._last_ms = -1
        self._seq = 0

    def next(self, prefix: str = "") -> str:
        """Return a new identifier with the given prefix."""
        with self._lock:
            now = max(self._clock(), self._last_ms)
            if now == self._last_ms:
                self._seq += 1
                if self._seq >= _SEQ_LIMIT:
                    # Sequence exhausted for this millisecond: borrow the next one
                    now += 1
                    self._seq = 0
            else:
                self._seq = 0
            self._last_ms = now
            seq = self._seq

        suffix = "".join(self._rng.choice(_ALPHABET) for _ in range(6))
        return f"{prefix}{now:013d}-{seq:04d}-{suffix}"


_default_generator = IdGenerator()


def new_id(prefix: str = "") -> str:
    """Draw an identifier from the shared generator."""
    return _default_generator.next(prefix)
