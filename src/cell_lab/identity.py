"""
Cell identifier generation.

Every cell takes an id factory (a zero-argument callable returning a
string). Clones reuse their parent's factory, so a whole lineage draws
from one source. Production code uses uuid4; tests and reproducible runs
use SeededIdFactory or SequentialIdFactory.
"""

import itertools
import uuid
from typing import Callable, Optional

import numpy as np

IdFactory = Callable[[], str]

ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
SEEDED_ID_LENGTH = 8


def uuid_id_factory() -> str:
    """Return a short random id (48 bits of a uuid4)."""
    return uuid.uuid4().hex[:12]


class SeededIdFactory:
    """Deterministic base-36 ids drawn from a seeded numpy Generator.

    Two factories built with the same seed yield the same id sequence.
    Ids already handed out are remembered so a draw is never reused.

    Example:
        >>> a, b = SeededIdFactory(7), SeededIdFactory(7)
        >>> [a() for _ in range(3)] == [b() for _ in range(3)]
        True
    """

    def __init__(self, seed: Optional[int] = None, length: int = SEEDED_ID_LENGTH):
        if length <= 0:
            raise ValueError(f"Id length must be positive, got {length}")
        self.seed = seed
        self.length = length
        self._rng = np.random.default_rng(seed)
        self._issued = set()

    def __call__(self) -> str:
        while True:
            indices = self._rng.integers(0, len(ID_ALPHABET), size=self.length)
            cell_id = "".join(ID_ALPHABET[i] for i in indices)
            if cell_id not in self._issued:
                self._issued.add(cell_id)
                return cell_id


class SequentialIdFactory:
    """Readable ids for tests: cell-0001, cell-0002, ..."""

    def __init__(self, prefix: str = "cell", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}-{next(self._counter):04d}"
