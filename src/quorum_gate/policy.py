"""Gate configuration.

The policy gathers the values that the gate fixes at construction time: the
field prime, the reconstruction threshold, the number of participant slots,
the expected secret and the capacity of the content buffer. Values can be
overridden by environment variables so that demos and tests can run other
small fields without code changes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from quorum_gate.shamir import DEFAULT_PRIME


def _is_prime(n: int) -> bool:
    if n < 2:
        return False
    divisor = 2
    while divisor * divisor <= n:
        if n % divisor == 0:
            return False
        divisor += 1
    return True


def _load_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class GatePolicy:
    """Holds the constants a gate is built with."""

    prime: int = DEFAULT_PRIME
    threshold: int = 3
    total_participants: int = 5
    expected_secret: int = 11
    buffer_capacity: int = 64

    def validate(self) -> "GatePolicy":
        if not _is_prime(self.prime):
            raise ValueError(f"{self.prime} is not prime")
        if self.threshold < 1:
            raise ValueError("threshold must be positive")
        if self.threshold > self.total_participants:
            raise ValueError("threshold cannot exceed the number of participants")
        if not 0 <= self.expected_secret < self.prime:
            raise ValueError("expected secret must be a field element")
        if self.buffer_capacity < 0:
            raise ValueError("buffer capacity cannot be negative")
        return self


def load_policy() -> GatePolicy:
    """Load the gate policy considering environment overrides."""

    return GatePolicy(
        prime=_load_int("QUORUM_GATE_PRIME", DEFAULT_PRIME),
        threshold=_load_int("QUORUM_GATE_THRESHOLD", 3),
        total_participants=_load_int("QUORUM_GATE_PARTICIPANTS", 5),
        expected_secret=_load_int("QUORUM_GATE_SECRET", 11),
        buffer_capacity=_load_int("QUORUM_GATE_BUFFER", 64),
    )


policy = load_policy()


__all__ = ["GatePolicy", "policy", "load_policy"]
