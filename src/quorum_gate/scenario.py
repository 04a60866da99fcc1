"""Scenario files describing a complete gate run.

A scenario is a YAML mapping::

    policy: {threshold: 3, participants: 5, secret: 11}
    dealer: dealer
    coefficients: [11, 5, 9]
    participants:
      - {id: alice, x: 1}          # y derived from the coefficients
      - {id: bob, share: [2, 57]}  # explicit share
    votes: {alice: true, bob: true}
    execute: true
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from quorum_gate.errors import QuorumGateError
from quorum_gate.gate import ShareGate
from quorum_gate.policy import GatePolicy, policy as default_policy
from quorum_gate.shamir import evaluate_polynomial


class ScenarioError(ValueError):
    """Raised when a scenario file is malformed."""


@dataclass
class ScenarioResult:
    gate: ShareGate
    errors: List[Dict[str, str]] = field(default_factory=list)

    def summary(self) -> Dict[str, Any]:
        data = self.gate.snapshot()
        data["errors"] = list(self.errors)
        return data


def load_scenario(path: os.PathLike[str] | str) -> Dict[str, Any]:
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ScenarioError("Scenario must be a mapping")
    return data


def _policy_from(data: Dict[str, Any]) -> GatePolicy:
    raw = data.get("policy") or {}
    if not isinstance(raw, dict):
        raise ScenarioError("'policy' must be a mapping")
    try:
        return GatePolicy(
            prime=int(raw.get("prime", default_policy.prime)),
            threshold=int(raw.get("threshold", default_policy.threshold)),
            total_participants=int(raw.get("participants", default_policy.total_participants)),
            expected_secret=int(raw.get("secret", default_policy.expected_secret)),
            buffer_capacity=int(raw.get("buffer", default_policy.buffer_capacity)),
        ).validate()
    except (TypeError, ValueError) as exc:
        raise ScenarioError(f"Invalid policy: {exc}") from exc


def _coefficients_from(data: Dict[str, Any]) -> List[int]:
    raw = data.get("coefficients") or []
    try:
        return [int(c) for c in raw]
    except (TypeError, ValueError) as exc:
        raise ScenarioError(f"Invalid coefficients: {exc}") from exc


def _share_for(entry: Dict[str, Any], coefficients: List[int], prime: int) -> tuple[int, int]:
    try:
        if "share" in entry:
            x, y = entry["share"]
            return int(x), int(y)
        if "x" not in entry:
            raise ScenarioError(f"Participant {entry.get('id')!r} needs 'share' or 'x'")
        x = int(entry["x"])
        if "y" in entry:
            return x, int(entry["y"])
    except (TypeError, ValueError) as exc:
        raise ScenarioError(f"Invalid share for participant {entry.get('id')!r}: {exc}") from exc
    if not coefficients:
        raise ScenarioError("Deriving shares requires 'coefficients'")
    return x, evaluate_polynomial(coefficients[0], coefficients[1:], x, prime)


def _votes_from(data: Dict[str, Any]) -> List[tuple[str, bool]]:
    raw = data.get("votes") or {}
    if isinstance(raw, dict):
        raw = [{"id": k, "affirm": v} for k, v in raw.items()]
    if not isinstance(raw, list):
        raise ScenarioError("'votes' must be a mapping or a list")
    votes = []
    for vote in raw:
        try:
            participant_id, affirm = vote["id"], vote["affirm"]
        except (TypeError, KeyError) as exc:
            raise ScenarioError(f"Each vote needs 'id' and 'affirm': {vote!r}") from exc
        if not isinstance(affirm, bool):
            raise ScenarioError(f"Vote of {participant_id!r} must be true or false")
        votes.append((str(participant_id), affirm))
    return votes


def run_scenario(data: Dict[str, Any], *, audit: Any = None) -> ScenarioResult:
    """Replay ``data`` against a fresh gate.

    The whole file is parsed before the gate is touched. Gate errors from
    individual steps are collected rather than raised so the result reflects
    everything that was accepted.
    """
    gate_policy = _policy_from(data)
    dealer = str(data.get("dealer", "dealer"))
    coefficients = _coefficients_from(data)

    participants = data.get("participants") or []
    if not isinstance(participants, list):
        raise ScenarioError("'participants' must be a list")
    shares = []
    for entry in participants:
        if not isinstance(entry, dict) or "id" not in entry:
            raise ScenarioError("Each participant needs an 'id'")
        shares.append((str(entry["id"]), _share_for(entry, coefficients, gate_policy.prime)))
    votes = _votes_from(data)
    content = data.get("content")
    if content is not None and not isinstance(content, str):
        raise ScenarioError("'content' must be a string")

    gate = ShareGate(dealer, policy=gate_policy, audit=audit)
    result = ScenarioResult(gate=gate)

    def attempt(step: str, fn, *args, **kwargs) -> Optional[Any]:
        try:
            return fn(*args, **kwargs)
        except QuorumGateError as exc:
            result.errors.append({"step": step, "code": exc.code, "message": str(exc)})
            return None

    if "coefficients" in data:
        attempt("configure", gate.configure, coefficients, caller=dealer)
    for participant_id, (x, y) in shares:
        attempt(f"issue:{participant_id}", gate.issue_share, participant_id, x, y)
    for participant_id, affirm in votes:
        attempt(f"vote:{participant_id}", gate.submit_vote, participant_id, affirm)

    attempt("evaluate", gate.evaluate)
    if data.get("execute"):
        attempt("execute", gate.execute_transition, content)
    return result


__all__ = ["ScenarioError", "ScenarioResult", "load_scenario", "run_scenario"]
