"""Shamir secret sharing over a small prime field.

``reconstruct``
    Recover the constant term of the interpolating polynomial from share
    points with Lagrange's formula evaluated at ``x = 0``.

``split_secret``
    Dealer-side helper deriving share points from a secret and coefficients.
    The gate itself never derives or checks shares against the polynomial.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from quorum_gate.errors import InsufficientShares
from quorum_gate.field import modular_inverse

DEFAULT_PRIME = 2089


@dataclass(frozen=True)
class Share:
    x: int
    y: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)


def _as_points(points: Iterable[Share | tuple[int, int]]) -> list[tuple[int, int]]:
    result = []
    for point in points:
        if isinstance(point, Share):
            result.append(point.as_tuple())
        else:
            x, y = point
            result.append((x, y))
    return result


def reconstruct(points: Iterable[Share | tuple[int, int]], prime: int = DEFAULT_PRIME) -> int:
    """Return the secret encoded by ``points``.

    Raises :class:`~quorum_gate.errors.NonInvertible` when two x values
    coincide modulo ``prime`` and :class:`InsufficientShares` on an empty set.
    """
    pts = _as_points(points)
    if not pts:
        raise InsufficientShares("At least one share is required")

    secret = 0
    for i, (xi, yi) in enumerate(pts):
        numerator = 1
        denominator = 1
        for j, (xj, _) in enumerate(pts):
            if i == j:
                continue
            numerator = (numerator * (prime - xj % prime)) % prime
            denominator = (denominator * ((xi + prime - xj) % prime)) % prime
        coefficient = (numerator * modular_inverse(denominator, prime)) % prime
        secret = (secret + yi * coefficient) % prime
    return secret


def evaluate_polynomial(secret: int, coefficients: Sequence[int], x: int, prime: int = DEFAULT_PRIME) -> int:
    """Evaluate ``secret + c1*x + c2*x^2 + ...`` modulo ``prime``."""
    y = secret % prime
    power = 1
    for c in coefficients:
        power = (power * x) % prime
        y = (y + c * power) % prime
    return y


def split_secret(
    secret: int,
    coefficients: Sequence[int],
    xs: Iterable[int],
    prime: int = DEFAULT_PRIME,
) -> list[Share]:
    """Derive one share per x value from ``secret`` and higher-order ``coefficients``."""
    if secret < 0 or secret >= prime:
        raise ValueError("Secret out of range")
    return [Share(x, evaluate_polynomial(secret, coefficients, x, prime)) for x in xs]


__all__ = ["DEFAULT_PRIME", "Share", "evaluate_polynomial", "reconstruct", "split_secret"]
