"""Prometheus counters for gate activity."""
from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, generate_latest


class GateMetrics:
    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()
        self.votes = Counter(
            "quorum_gate_votes",
            "Votes accepted by the gate",
            ["affirm"],
            registry=self.registry,
        )
        self.rejected_votes = Counter(
            "quorum_gate_rejected_votes",
            "Vote submissions rejected before mutation",
            ["reason"],
            registry=self.registry,
        )
        self.evaluations = Counter(
            "quorum_gate_evaluations",
            "Gate evaluations by outcome",
            ["outcome"],
            registry=self.registry,
        )
        self.transitions = Counter(
            "quorum_gate_transitions",
            "Executed downstream transitions",
            registry=self.registry,
        )

    def value(self, name: str, **labels: str) -> float:
        """Current sample value, ``0.0`` when the series has not been touched."""
        result = self.registry.get_sample_value(name, labels or None)
        return result or 0.0

    def exposition(self) -> bytes:
        return generate_latest(self.registry)


__all__ = ["GateMetrics"]
