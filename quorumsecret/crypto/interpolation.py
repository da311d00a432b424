"""Polynomial interpolation over F_p by Gaussian elimination.

Given k points (x_i, y_i) the coefficients c_0 … c_{k-1} of the unique
degree-(k-1) polynomial through them solve the Vandermonde system

    sum_j  x_i^j * c_j  =  y_i        (i = 0 … k-1)

The constant term c_0 is the Shamir secret for that set of points.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from quorumsecret.crypto.errors import NoInverseError, SingularSystemError
from quorumsecret.crypto.field import DEFAULT_FIELD, PrimeField

Point = Tuple[int, int]


@dataclass(frozen=True)
class SubsetResult:
    """Outcome of interpolating one subset: a constant term or the error."""

    indices: Tuple[int, ...]
    secret: Optional[int] = None
    error: Optional[SingularSystemError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def vandermonde(xs: Sequence[int], field: PrimeField) -> List[List[int]]:
    """Row i, column j holds x_i^j mod p."""
    k = len(xs)
    return [[field.pow(x, j) for j in range(k)] for x in xs]


def solve_coefficients(points: Sequence[Point], field: PrimeField | None = None) -> List[int]:
    """Return [c_0, …, c_{k-1}] for the polynomial through *points*.

    Raises ``SingularSystemError`` when elimination meets a zero (or
    non-invertible) pivot.
    """
    field = field or DEFAULT_FIELD
    indices = [x for x, _ in points]
    xs = [field.reduce(x) for x in indices]
    matrix = vandermonde(xs, field)
    n = len(points)

    # Augmented matrix [A | y]
    aug = [row + [field.reduce(y)] for row, (_, y) in zip(matrix, points)]
    pivot_inv: List[int] = []

    # ---- forward elimination ----
    for p in range(n):
        # Partial pivoting: largest representative, first row on ties
        best = max(range(p, n), key=lambda r: aug[r][p])
        aug[p], aug[best] = aug[best], aug[p]

        if aug[p][p] == 0:
            raise SingularSystemError(indices, p)
        try:
            inv_p = field.inv(aug[p][p])
        except NoInverseError as exc:
            raise SingularSystemError(indices, p) from exc
        pivot_inv.append(inv_p)

        for i in range(p + 1, n):
            alpha = field.mul(aug[i][p], inv_p)
            if alpha == 0:
                continue
            for j in range(p, n + 1):
                aug[i][j] = field.sub(aug[i][j], field.mul(alpha, aug[p][j]))

    # ---- back substitution ----
    coeffs = [0] * n
    for i in range(n - 1, -1, -1):
        acc = 0
        for j in range(i + 1, n):
            acc = field.add(acc, field.mul(aug[i][j], coeffs[j]))
        coeffs[i] = field.mul(field.sub(aug[i][n], acc), pivot_inv[i])
    return coeffs


def constant_term(points: Sequence[Point], field: PrimeField | None = None) -> int:
    """Secret (coefficient of x^0) of the polynomial through *points*."""
    return solve_coefficients(points, field)[0]


def try_constant_term(points: Sequence[Point], field: PrimeField | None = None) -> SubsetResult:
    """Like ``constant_term`` but a singular system is returned, not raised."""
    indices = tuple(x for x, _ in points)
    try:
        return SubsetResult(indices=indices, secret=constant_term(points, field))
    except SingularSystemError as exc:
        return SubsetResult(indices=indices, error=exc)
