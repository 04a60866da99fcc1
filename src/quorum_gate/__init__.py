"""Threshold secret-sharing gate for a single one-way transition."""

from __future__ import annotations

from quorum_gate.errors import (
    AlreadyVoted,
    ContentTooLarge,
    InvalidPolynomialDegree,
    NonInvertible,
    QuorumGateError,
    UpgradeNotApproved,
)
from quorum_gate.field import modular_inverse
from quorum_gate.gate import ShareGate
from quorum_gate.policy import GatePolicy
from quorum_gate.shamir import Share, reconstruct, split_secret

__all__ = [
    "AlreadyVoted",
    "ContentTooLarge",
    "GatePolicy",
    "InvalidPolynomialDegree",
    "NonInvertible",
    "QuorumGateError",
    "Share",
    "ShareGate",
    "UpgradeNotApproved",
    "modular_inverse",
    "reconstruct",
    "split_secret",
]
