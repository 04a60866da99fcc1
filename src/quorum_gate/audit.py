"""Offline audit trail for gate events with Ed25519 signatures and hash chaining."""
from __future__ import annotations

import hashlib
import json
import logging
import os
import threading
import time
import uuid
from pathlib import Path
from typing import Any, Dict

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

_logger = logging.getLogger(__name__)

GENESIS = "GENESIS"


def resolve_audit_dir() -> Path:
    """Return the directory where audit entries should be stored.

    ``QUORUM_GATE_AUDIT_DIR`` overrides the default ``~/.quorum_gate_audit``.
    """

    override = os.environ.get("QUORUM_GATE_AUDIT_DIR")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".quorum_gate_audit"


def _canonical(payload: Dict[str, Any]) -> bytes:
    return json.dumps(payload, ensure_ascii=False, sort_keys=True).encode("utf-8")


class AuditTrail:
    """Append-only directory of signed, chained JSON entries."""

    def __init__(self, directory: os.PathLike[str] | str | None = None) -> None:
        self.directory = Path(directory) if directory is not None else resolve_audit_dir()
        self.directory.mkdir(parents=True, exist_ok=True)
        self.key_path = self.directory / "signing_key.pem"
        self.chain_state_path = self.directory / "chain.state"
        self._lock = threading.Lock()

    def _load_private_key(self) -> Ed25519PrivateKey:
        if self.key_path.exists():
            data = self.key_path.read_bytes()
            return serialization.load_pem_private_key(data, password=None)  # type: ignore[return-value]
        private_key = Ed25519PrivateKey.generate()
        self.key_path.write_bytes(
            private_key.private_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PrivateFormat.PKCS8,
                encryption_algorithm=serialization.NoEncryption(),
            )
        )
        return private_key

    def head(self) -> str:
        """Chain hash of the latest entry, or ``GENESIS`` for an empty trail."""
        try:
            return self.chain_state_path.read_text().strip()
        except FileNotFoundError:
            return GENESIS

    def record(self, event: str, *, details: Dict[str, Any] | None = None) -> Path:
        # Reading the head and storing the new one must not interleave.
        with self._lock:
            return self._append(event, details)

    def _append(self, event: str, details: Dict[str, Any] | None) -> Path:
        timestamp = int(time.time())
        payload = {
            "event": event,
            "details": details or {},
            "timestamp": timestamp,
            "prev_hash": self.head(),
        }
        message = _canonical(payload)
        signature = self._load_private_key().sign(message)
        chain_hash = hashlib.sha3_512(message + signature).hexdigest()
        entry = {
            "payload": payload,
            "signature": signature.hex(),
            "chain_hash": chain_hash,
        }
        file_path = self.directory / f"audit_{timestamp}_{uuid.uuid4().hex}.json"
        file_path.write_text(json.dumps(entry, ensure_ascii=False, indent=2))
        self.chain_state_path.write_text(chain_hash)
        _logger.debug("audit %s -> %s", event, file_path.name)
        return file_path

    def verify(self, path: os.PathLike[str] | str) -> bool:
        data = json.loads(Path(path).read_text())
        payload = _canonical(data["payload"])
        signature_hex = data.get("signature")
        signature = bytes.fromhex(signature_hex) if signature_hex else b""
        with self._lock:
            public_key = self._load_private_key().public_key()
        try:
            public_key.verify(signature, payload)
        except InvalidSignature:
            return False
        expected_chain_hash = hashlib.sha3_512(payload + signature).hexdigest()
        return expected_chain_hash == data.get("chain_hash")


class NullAuditTrail:
    """Audit sink that drops every event."""

    def record(self, event: str, *, details: Dict[str, Any] | None = None) -> None:
        return None


__all__ = ["AuditTrail", "GENESIS", "NullAuditTrail", "resolve_audit_dir"]
