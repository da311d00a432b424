"""Consensus reconstruction from possibly-corrupted shares.

Every k-subset of the supplied shares is interpolated on its own.  The
constant term produced by the most subsets wins; ties go to the value
seen first in enumeration order.  A minority of corrupted shares can
therefore be outvoted, and the shares that agree with the winner are
reported alongside it.

API
---
reconstruct(shares, k)        -> ReconstructionOutcome
evaluate_subsets(points, k)   -> iterator of SubsetResult
tally(results)                -> read-only {secret: (subset, …)}
"""

from __future__ import annotations

from collections import abc
from dataclasses import dataclass
from functools import reduce
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple, Union

from quorumsecret.crypto.combinations import KSubsets
from quorumsecret.crypto.errors import InsufficientSharesError, NoConsensusError
from quorumsecret.crypto.field import DEFAULT_FIELD, PrimeField
from quorumsecret.crypto.interpolation import SubsetResult, try_constant_term

Point = Tuple[int, int]
Subset = Tuple[int, ...]
Shares = Union[Mapping[int, int], Iterable[Point]]


@dataclass(frozen=True)
class ReconstructionOutcome:
    secret: int
    contributing_indices: Tuple[int, ...]
    votes: int
    subsets_tried: int
    subsets_skipped: int
    candidates: int


def normalize_shares(shares: Shares, field: PrimeField | None = None) -> List[Point]:
    """Return the shares as points ordered by index, values reduced.

    Duplicate indices (only possible for point lists) are kept, in their
    original relative order.
    """
    field = field or DEFAULT_FIELD
    items = shares.items() if isinstance(shares, abc.Mapping) else shares
    points = [(int(x), field.reduce(int(y))) for x, y in items]
    return sorted(points, key=lambda pt: pt[0])


def evaluate_subsets(
    points: List[Point], k: int, field: PrimeField | None = None
) -> Iterator[SubsetResult]:
    """Interpolate every k-subset of *points*, in enumeration order.

    Subsets are taken over positions so that two shares carrying the same
    index still form (singular) subsets of their own.
    """
    for positions in KSubsets(range(len(points)), k):
        yield try_constant_term([points[i] for i in positions], field)


def _record(acc: Dict[int, List[Subset]], result: SubsetResult) -> Dict[int, List[Subset]]:
    if result.ok:
        acc.setdefault(result.secret, []).append(result.indices)
    return acc


def tally(results: Iterable[SubsetResult]) -> Mapping[int, Tuple[Subset, ...]]:
    """Group successful subsets by the secret they produced.

    Singular subsets are skipped.  Keys keep first-seen order.
    """
    acc = reduce(_record, results, {})
    return MappingProxyType({secret: tuple(subsets) for secret, subsets in acc.items()})


def reconstruct(
    shares: Shares, k: int, field: PrimeField | None = None
) -> ReconstructionOutcome:
    """Reconstruct the majority secret from *shares* with threshold *k*.

    Raises ``InsufficientSharesError`` if fewer than *k* shares are given
    and ``NoConsensusError`` if every subset was singular.
    """
    if k < 1:
        raise ValueError(f"Invalid threshold: k={k}")
    field = field or DEFAULT_FIELD
    points = normalize_shares(shares, field)
    if len(points) < k:
        raise InsufficientSharesError(len(points), k)

    tried = 0
    skipped = 0

    def _counted(results: Iterator[SubsetResult]) -> Iterator[SubsetResult]:
        nonlocal tried, skipped
        for result in results:
            tried += 1
            if not result.ok:
                skipped += 1
            yield result

    candidates = tally(_counted(evaluate_subsets(points, k, field)))
    if not candidates:
        raise NoConsensusError(tried)

    # max() keeps the first maximal key, i.e. the first one seen
    secret = max(candidates, key=lambda s: len(candidates[s]))
    winners = candidates[secret]
    contributing = sorted({idx for subset in winners for idx in subset})

    return ReconstructionOutcome(
        secret=secret,
        contributing_indices=tuple(contributing),
        votes=len(winners),
        subsets_tried=tried,
        subsets_skipped=skipped,
        candidates=len(candidates),
    )
