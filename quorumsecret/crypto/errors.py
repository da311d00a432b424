"""Error taxonomy for share reconstruction.

Only ``InsufficientSharesError`` and ``NoConsensusError`` reach callers of
the consensus engine.  ``SingularSystemError`` is scoped to one subset and
``NoInverseError`` only ever surfaces as its cause.
"""

from __future__ import annotations

from typing import Sequence


class NoInverseError(ZeroDivisionError):
    """*value* has no multiplicative inverse modulo *modulus*."""

    def __init__(self, value: int, modulus: int, gcd: int) -> None:
        super().__init__(f"{value} is not invertible mod p (gcd={gcd})")
        self.value = value
        self.modulus = modulus
        self.gcd = gcd


class SingularSystemError(ArithmeticError):
    """The interpolation matrix of one subset has no usable pivot."""

    def __init__(self, indices: Sequence[int], column: int) -> None:
        super().__init__(
            f"Singular system for subset {tuple(indices)} (no invertible pivot in column {column})"
        )
        self.indices = tuple(indices)
        self.column = column


class ReconstructionError(Exception):
    """Run-level failure: no secret can be reported for this input."""


class InsufficientSharesError(ReconstructionError, ValueError):
    def __init__(self, available: int, threshold: int) -> None:
        super().__init__(
            f"Insufficient shares: {available} supplied, threshold is {threshold}"
        )
        self.available = available
        self.threshold = threshold


class NoConsensusError(ReconstructionError):
    def __init__(self, subsets_tried: int) -> None:
        super().__init__(
            f"No valid secret could be reconstructed ({subsets_tried} subsets, all singular)"
        )
        self.subsets_tried = subsets_tried


class InvalidRecordError(ValueError):
    """A share record is malformed or violates the n/k constraints."""
