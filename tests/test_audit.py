import json
import threading

from quorum_gate.audit import GENESIS, AuditTrail, resolve_audit_dir
from quorum_gate.gate import ShareGate
from quorum_gate.policy import GatePolicy


def test_record_event_creates_signed_chain(tmp_path):
    trail = AuditTrail(tmp_path)
    assert trail.head() == GENESIS

    first_path = trail.record("first", details={"value": 1})
    second_path = trail.record("second", details={"value": 2})

    assert first_path.exists()
    assert second_path.exists()
    assert first_path != second_path

    for path in (first_path, second_path):
        assert trail.verify(path)

    chain_state = (tmp_path / "chain.state").read_text().strip()
    second_data = json.loads(second_path.read_text())
    assert chain_state == second_data["chain_hash"]
    assert second_data["payload"]["prev_hash"] == json.loads(first_path.read_text())["chain_hash"]


def test_tampered_entry_fails_verification(tmp_path):
    trail = AuditTrail(tmp_path)
    path = trail.record("gate.vote", details={"affirm": True})

    data = json.loads(path.read_text())
    data["payload"]["details"]["affirm"] = False
    path.write_text(json.dumps(data))

    assert not trail.verify(path)


def test_custom_directory_from_environment(tmp_path, monkeypatch):
    target = tmp_path / "nested" / "audit"
    monkeypatch.setenv("QUORUM_GATE_AUDIT_DIR", str(target))

    assert resolve_audit_dir() == target
    trail = AuditTrail()
    assert target.exists()
    assert trail.record("test").parent == target


def test_gate_run_is_audited(tmp_path):
    trail = AuditTrail(tmp_path)
    gate = ShareGate("dealer", policy=GatePolicy(), audit=trail)
    gate.configure([11, 5, 9], caller="dealer")
    for index, (x, y) in enumerate([(1, 25), (2, 57), (3, 107)], start=1):
        gate.issue_share(f"voter-{index}", x, y)
        gate.submit_vote(f"voter-{index}", True)
    gate.evaluate()
    gate.execute_transition()

    entries = [json.loads(p.read_text()) for p in tmp_path.glob("audit_*.json")]
    events = sorted(e["payload"]["event"] for e in entries)
    assert events.count("gate.vote") == 3
    assert events.count("gate.share_issued") == 3
    assert {"gate.configured", "gate.evaluated", "gate.transition"} <= set(events)
    for path in tmp_path.glob("audit_*.json"):
        assert trail.verify(path)


def test_concurrent_records_form_a_single_chain(tmp_path):
    trail = AuditTrail(tmp_path)
    trail.record("warm-up")
    start = threading.Barrier(8)

    def worker(n):
        start.wait()
        trail.record("gate.vote", details={"worker": n})

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    entries = [json.loads(p.read_text()) for p in tmp_path.glob("audit_*.json")]
    assert len(entries) == 9
    by_prev = {e["payload"]["prev_hash"]: e for e in entries}
    assert len(by_prev) == 9

    # walk from the genesis entry to the stored head
    cursor = GENESIS
    for _ in entries:
        cursor = by_prev[cursor]["chain_hash"]
    assert cursor == trail.head()
