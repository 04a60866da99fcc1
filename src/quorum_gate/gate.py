"""Threshold-gated approval of a one-way transition.

A dealer commits polynomial coefficients once, participants are issued one
share each, and every participant may vote exactly once. The shares of the
first ``threshold`` affirmative votes are kept; :meth:`ShareGate.evaluate`
interpolates them and opens the gate only if the recovered value equals the
expected secret.

Shares are taken as issued. Nothing here checks that they lie on the
committed polynomial, so the dealer (or whoever issues shares) is trusted.

Configuration is not a precondition of issuing shares, voting or evaluating:
the coefficients are a record of the dealer's commitment, not an input to
reconstruction. A gate whose dealer never calls :meth:`ShareGate.configure`
still opens once ``threshold`` correct shares are voted in; only the dealer
authority stays unrevoked. ``snapshot()["configured"]`` reports which case
applies.
"""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence

from quorum_gate.audit import NullAuditTrail
from quorum_gate.authority import NO_AUTHORITY, Authorizer, IdentityAuthorizer
from quorum_gate.errors import (
    AlreadyVoted,
    InvalidPolynomialDegree,
    ParticipantExists,
    ParticipantLimitReached,
    QuorumGateError,
    Unauthorized,
    UnknownParticipant,
    UpgradeNotApproved,
)
from quorum_gate.executor import ContentBuffer, UpgradeExecutor
from quorum_gate.metrics import GateMetrics
from quorum_gate.policy import GatePolicy, policy as default_policy
from quorum_gate.shamir import Share, reconstruct

_logger = logging.getLogger(__name__)


@dataclass
class Participant:
    participant_id: str
    share: Share
    authority: str
    has_voted: bool = False


@dataclass
class GateState:
    threshold: int
    total_participants: int
    dealer_authority: str
    shares_collected: int = 0
    x_values: List[int] = field(default_factory=list)
    y_values: List[int] = field(default_factory=list)
    yes_count: int = 0
    total_count: int = 0
    gate_open: bool = False
    coefficients: List[int] = field(default_factory=list)
    configured: bool = False
    transitioned: bool = False

    def __post_init__(self) -> None:
        if not self.x_values:
            self.x_values = [0] * self.threshold
        if not self.y_values:
            self.y_values = [0] * self.threshold

    def collected_points(self) -> list[tuple[int, int]]:
        n = self.shares_collected
        return list(zip(self.x_values[:n], self.y_values[:n]))


class ShareGate:
    """State machine collecting votes and shares for a single transition."""

    def __init__(
        self,
        dealer: str,
        *,
        policy: GatePolicy | None = None,
        executor: UpgradeExecutor | None = None,
        authorizer: Authorizer | None = None,
        audit: Any = None,
        metrics: GateMetrics | None = None,
    ) -> None:
        self.policy = (policy or default_policy).validate()
        self.state = GateState(
            threshold=self.policy.threshold,
            total_participants=self.policy.total_participants,
            dealer_authority=dealer,
        )
        self.executor = executor or UpgradeExecutor(ContentBuffer(self.policy.buffer_capacity))
        self.authorizer = authorizer or IdentityAuthorizer()
        self.audit = audit or NullAuditTrail()
        self.metrics = metrics or GateMetrics()
        self._participants: Dict[str, Participant] = {}
        self._lock = threading.Lock()

    @contextmanager
    def _transaction(self) -> Iterator[GateState]:
        # Preconditions are checked before the first mutation inside each block.
        with self._lock:
            yield self.state

    # -- dealer -----------------------------------------------------------

    def configure(self, coefficients: Sequence[int], *, caller: Any) -> None:
        """Commit the dealer polynomial and revoke dealer authority."""

        with self._transaction() as state:
            if not self.authorizer.is_authorized(state.dealer_authority, caller):
                raise Unauthorized("Dealer authority is missing or has been revoked")
            if len(coefficients) != state.threshold:
                raise InvalidPolynomialDegree(
                    f"Expected {state.threshold} coefficients, got {len(coefficients)}"
                )
            state.coefficients = [int(c) % self.policy.prime for c in coefficients]
            state.dealer_authority = NO_AUTHORITY
            state.configured = True
        _logger.info("polynomial committed, dealer authority revoked")
        self.audit.record("gate.configured", details={"degree": len(coefficients) - 1})

    def issue_share(self, participant_id: str, x: int, y: int, *, authority: str | None = None) -> Participant:
        """Create the record for ``participant_id`` holding share ``(x, y)``."""

        with self._transaction():
            if participant_id in self._participants:
                raise ParticipantExists(f"Participant {participant_id!r} already holds a share")
            if len(self._participants) >= self.policy.total_participants:
                raise ParticipantLimitReached(
                    f"Gate accepts at most {self.policy.total_participants} participants"
                )
            participant = Participant(
                participant_id=participant_id,
                share=Share(int(x), int(y)),
                authority=participant_id if authority is None else authority,
            )
            self._participants[participant_id] = participant
        self.audit.record("gate.share_issued", details={"participant": participant_id, "x": participant.share.x})
        return participant

    # -- voting -----------------------------------------------------------

    def submit_vote(self, participant_id: str, affirm: bool, *, caller: Any = None) -> None:
        """Record the single vote of ``participant_id``."""

        try:
            with self._transaction() as state:
                participant = self._participants.get(participant_id)
                if participant is None:
                    raise UnknownParticipant(f"No share was issued to {participant_id!r}")
                claimed = participant_id if caller is None else caller
                if not self.authorizer.is_authorized(participant.authority, claimed):
                    raise Unauthorized(f"Caller may not vote for {participant_id!r}")
                if participant.has_voted:
                    raise AlreadyVoted(f"Participant {participant_id!r} has already voted")

                participant.has_voted = True
                state.total_count += 1
                if affirm:
                    state.yes_count += 1
                    if state.shares_collected < state.threshold:
                        index = state.shares_collected
                        state.x_values[index] = participant.share.x
                        state.y_values[index] = participant.share.y
                        state.shares_collected += 1
        except QuorumGateError as exc:
            self.metrics.rejected_votes.labels(reason=exc.code).inc()
            _logger.warning("vote from %s rejected: %s", participant_id, exc)
            raise

        self.metrics.votes.labels(affirm=str(bool(affirm)).lower()).inc()
        _logger.debug("vote from %s recorded (affirm=%s)", participant_id, affirm)
        self.audit.record(
            "gate.vote",
            details={"participant": participant_id, "affirm": bool(affirm), "total": state.total_count},
        )

    # -- result -----------------------------------------------------------

    def evaluate(self) -> bool:
        """Recompute the gate flag from the collected shares."""

        with self._transaction() as state:
            if state.yes_count >= state.threshold:
                secret = reconstruct(state.collected_points(), self.policy.prime)
                state.gate_open = secret == self.policy.expected_secret
                outcome = "open" if state.gate_open else "mismatch"
            else:
                state.gate_open = False
                outcome = "no_quorum"
            result = state.gate_open
        self.metrics.evaluations.labels(outcome=outcome).inc()
        _logger.info("gate evaluated: %s (%d yes of %d votes)", outcome, state.yes_count, state.total_count)
        self.audit.record("gate.evaluated", details={"outcome": outcome, "yes": state.yes_count})
        return result

    def execute_transition(self, content: str | bytes | None = None) -> str:
        """Run the downstream transition; only allowed while the gate is open."""

        with self._transaction() as state:
            if not state.gate_open:
                raise UpgradeNotApproved()
            written = self.executor.execute(content)
            state.transitioned = True
        self.metrics.transitions.inc()
        self.audit.record("gate.transition", details={"content": written})
        return written

    # -- inspection -------------------------------------------------------

    @property
    def gate_open(self) -> bool:
        return self.state.gate_open

    def participant(self, participant_id: str) -> Optional[Participant]:
        return self._participants.get(participant_id)

    @property
    def participants(self) -> List[Participant]:
        return list(self._participants.values())

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            state = self.state
            return {
                "threshold": state.threshold,
                "total_participants": state.total_participants,
                "issued": len(self._participants),
                "shares_collected": state.shares_collected,
                "x_values": list(state.x_values),
                "y_values": list(state.y_values),
                "yes_count": state.yes_count,
                "total_count": state.total_count,
                "gate_open": state.gate_open,
                "configured": state.configured,
                "transitioned": state.transitioned,
                "dealer_authority_revoked": state.dealer_authority == NO_AUTHORITY,
                "content": self.executor.buffer.read(),
            }


__all__ = ["GateState", "Participant", "ShareGate"]
