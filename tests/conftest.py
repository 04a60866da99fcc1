"""Test configuration helpers."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_src_on_path() -> None:
    src = Path(__file__).resolve().parent.parent / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))


_ensure_src_on_path()

from quorum_gate.gate import ShareGate  # noqa: E402
from quorum_gate.policy import GatePolicy  # noqa: E402

from reference_data import REFERENCE_COEFFICIENTS, REFERENCE_SHARES  # noqa: E402


@pytest.fixture
def reference_policy() -> GatePolicy:
    return GatePolicy(prime=2089, threshold=3, total_participants=5, expected_secret=11, buffer_capacity=64)


@pytest.fixture
def gate(reference_policy) -> ShareGate:
    """Configured gate with five participants holding the reference shares."""
    g = ShareGate("dealer", policy=reference_policy)
    g.configure(REFERENCE_COEFFICIENTS, caller="dealer")
    for index, (x, y) in enumerate(REFERENCE_SHARES, start=1):
        g.issue_share(f"voter-{index}", x, y)
    return g
