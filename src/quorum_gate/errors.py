"""Error kinds raised by the quorum gate."""
from __future__ import annotations


class QuorumGateError(RuntimeError):
    """Base class for every failure surfaced by the gate."""

    code = "quorum_gate_error"
    default_message = "Quorum gate operation failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class AlreadyVoted(QuorumGateError):
    code = "already_voted"
    default_message = "Participant has already voted"


class InsufficientShares(QuorumGateError):
    code = "insufficient_shares"
    default_message = "Insufficient shares to compute the result"


class NonInvertible(QuorumGateError):
    code = "non_invertible"
    default_message = "Non-invertible element encountered"


class UpgradeNotApproved(QuorumGateError):
    code = "upgrade_not_approved"
    default_message = "Upgrade has not been approved"


class ContentTooLarge(QuorumGateError):
    code = "content_too_large"
    default_message = "Content is too large for the content buffer"


class InvalidContent(QuorumGateError):
    code = "invalid_content"
    default_message = "Content is not valid UTF-8"


class InvalidPolynomialDegree(QuorumGateError):
    code = "invalid_polynomial_degree"
    default_message = "Invalid polynomial degree"


class Unauthorized(QuorumGateError):
    code = "unauthorized"
    default_message = "Caller is not authorized for this record"


class UnknownParticipant(QuorumGateError):
    code = "unknown_participant"
    default_message = "Participant has not been issued a share"


class ParticipantExists(QuorumGateError):
    code = "participant_exists"
    default_message = "Participant has already been issued a share"


class ParticipantLimitReached(QuorumGateError):
    code = "participant_limit_reached"
    default_message = "All participant slots are taken"


__all__ = [
    "AlreadyVoted",
    "ContentTooLarge",
    "InsufficientShares",
    "InvalidContent",
    "InvalidPolynomialDegree",
    "NonInvertible",
    "ParticipantExists",
    "ParticipantLimitReached",
    "QuorumGateError",
    "Unauthorized",
    "UnknownParticipant",
    "UpgradeNotApproved",
]
