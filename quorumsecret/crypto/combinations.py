"""k-subset enumeration.

``KSubsets`` is a restartable lazy sequence: every iteration yields the
same tuples in the same (lexicographic over input order) order, so
majority tallies built on top of it are reproducible.
"""

from __future__ import annotations

import itertools
import math
from typing import Generic, Iterator, Sequence, Tuple, TypeVar

T = TypeVar("T")


class KSubsets(Generic[T]):
    """All size-*k* subsets of *items*, each in input order."""

    def __init__(self, items: Sequence[T], k: int) -> None:
        items = tuple(items)
        if k < 1 or k > len(items):
            raise ValueError(f"Invalid subset size: k={k}, n={len(items)}")
        self.items = items
        self.k = k

    def __iter__(self) -> Iterator[Tuple[T, ...]]:
        return itertools.combinations(self.items, self.k)

    def __len__(self) -> int:
        return math.comb(len(self.items), self.k)
