"""Shamir (K-of-N) share generation over F_p.

API
---
share(secret, n, k)    -> list of (x_i, y_i)  with x_i = 1..n
eval_poly(coeffs, x)   -> f(x)

Reconstruction lives in ``quorumsecret.crypto.consensus``.
"""

from __future__ import annotations

import secrets
from typing import List, Tuple

from quorumsecret.crypto.field import DEFAULT_FIELD, PrimeField

Point = Tuple[int, int]


def share(secret: int, n: int, k: int, field: PrimeField | None = None) -> List[Point]:
    """Split *secret* into *n* shares with threshold *k*.

    A random polynomial f of degree k-1 is chosen such that f(0) = secret.
    Shares are (i, f(i)) for i = 1 … n.
    """
    if k < 1 or k > n:
        raise ValueError(f"Invalid threshold: k={k}, n={n}")
    field = field or DEFAULT_FIELD
    if n >= field.modulus:
        raise ValueError(f"Too many shares for the field: n={n}")

    # Random coefficients a_1 … a_{k-1}
    coeffs = [field.reduce(secret)] + [
        secrets.randbelow(field.modulus) for _ in range(k - 1)
    ]
    return [(i, eval_poly(coeffs, i, field)) for i in range(1, n + 1)]


def eval_poly(coeffs: List[int], x: int, field: PrimeField | None = None) -> int:
    """Evaluate polynomial (Horner's method) mod p."""
    field = field or DEFAULT_FIELD
    result = 0
    for c in reversed(coeffs):
        result = field.add(field.mul(result, x), c)
    return result
