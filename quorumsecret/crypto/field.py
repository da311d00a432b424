"""Prime-field arithmetic F_p.

All values are Python ints reduced mod the field's modulus.  A
``PrimeField`` is built once per run and handed to every caller; the
module-level helpers operate on the default field over ``config.PRIME``.
"""

from __future__ import annotations

from quorumsecret.config import PRIME
from quorumsecret.crypto.errors import NoInverseError


class PrimeField:
    """Arithmetic modulo a fixed prime."""

    __slots__ = ("modulus",)

    def __init__(self, modulus: int) -> None:
        if modulus < 2:
            raise ValueError(f"Invalid field modulus: {modulus}")
        self.modulus = modulus

    def __repr__(self) -> str:
        return f"PrimeField({self.modulus})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PrimeField) and other.modulus == self.modulus

    def __hash__(self) -> int:
        return hash(self.modulus)

    def reduce(self, a: int) -> int:
        """Reduce an integer into [0, modulus)."""
        return a % self.modulus

    def add(self, a: int, b: int) -> int:
        return (a + b) % self.modulus

    def sub(self, a: int, b: int) -> int:
        return (a - b) % self.modulus

    def mul(self, a: int, b: int) -> int:
        return (a * b) % self.modulus

    def neg(self, a: int) -> int:
        return (-a) % self.modulus

    def pow(self, a: int, e: int) -> int:
        """Modular exponentiation for a non-negative exponent."""
        if e < 0:
            raise ValueError(f"Negative exponent: {e}")
        return pow(a, e, self.modulus)

    def inv(self, a: int) -> int:
        """Multiplicative inverse via the extended Euclidean algorithm.

        Raises ``NoInverseError`` when gcd(a, modulus) != 1, which for a
        prime modulus means a ≡ 0.
        """
        a = a % self.modulus
        old_r, r = a, self.modulus
        old_s, s = 1, 0
        while r:
            q = old_r // r
            old_r, r = r, old_r - q * r
            old_s, s = s, old_s - q * s
        if old_r != 1:
            raise NoInverseError(a, self.modulus, old_r)
        return old_s % self.modulus


DEFAULT_FIELD = PrimeField(PRIME)


def add(a: int, b: int) -> int:
    """Field addition."""
    return DEFAULT_FIELD.add(a, b)


def sub(a: int, b: int) -> int:
    """Field subtraction."""
    return DEFAULT_FIELD.sub(a, b)


def mul(a: int, b: int) -> int:
    """Field multiplication."""
    return DEFAULT_FIELD.mul(a, b)


def power(a: int, e: int) -> int:
    """Field exponentiation."""
    return DEFAULT_FIELD.pow(a, e)


def inv(a: int) -> int:
    """Multiplicative inverse (extended Euclid)."""
    return DEFAULT_FIELD.inv(a)


def neg(a: int) -> int:
    """Additive inverse."""
    return DEFAULT_FIELD.neg(a)


def reduce(a: int) -> int:
    """Reduce an integer into [0, PRIME)."""
    return DEFAULT_FIELD.reduce(a)
