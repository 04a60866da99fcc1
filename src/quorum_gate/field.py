"""Modular arithmetic over a prime field."""
from __future__ import annotations

from quorum_gate.errors import NonInvertible


def extended_gcd(a: int, b: int) -> tuple[int, int, int]:
    """Return ``(g, x, y)`` such that ``a*x + b*y == g == gcd(a, b)``.

    Iterative form: two running Bézout pairs are advanced with the quotient of
    the current remainders until the second remainder reaches zero.
    """
    x0, y0 = 1, 0
    x1, y1 = 0, 1
    while b != 0:
        q = a // b
        a, b = b, a - q * b
        x0, x1 = x1, x0 - q * x1
        y0, y1 = y1, y0 - q * y1
    return a, x0, y0


def modular_inverse(a: int, modulus: int) -> int:
    """Return ``a⁻¹ mod modulus`` in ``[0, modulus)``.

    Raises :class:`NonInvertible` when ``a`` shares a factor with ``modulus``.
    """
    g, x, _ = extended_gcd(a % modulus, modulus)
    if g != 1:
        raise NonInvertible(f"{a} has no inverse modulo {modulus}")
    return (x % modulus + modulus) % modulus


__all__ = ["extended_gcd", "modular_inverse"]
