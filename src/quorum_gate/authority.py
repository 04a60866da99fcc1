"""Capability checks for privileged gate operations.

The gate never verifies signatures itself. It stores an authority identifier
on each record and asks an :class:`Authorizer` whether a caller matches it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

# Stored in place of the dealer authority once configuration is done.
NO_AUTHORITY = ""


class Authorizer(Protocol):
    def is_authorized(self, authority: str, caller: Any) -> bool:
        ...


class IdentityAuthorizer:
    """Trust the caller's claimed identity as-is."""

    def is_authorized(self, authority: str, caller: Any) -> bool:
        if authority == NO_AUTHORITY:
            return False
        return isinstance(caller, str) and caller == authority


@dataclass(frozen=True)
class SignedCaller:
    public_key: bytes
    message: bytes
    signature: bytes

    @property
    def identity(self) -> str:
        return self.public_key.hex()


def public_identity(private_key: Ed25519PrivateKey) -> str:
    raw = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )
    return raw.hex()


def sign_as(private_key: Ed25519PrivateKey, message: bytes) -> SignedCaller:
    raw = bytes.fromhex(public_identity(private_key))
    return SignedCaller(public_key=raw, message=message, signature=private_key.sign(message))


class Ed25519Authorizer:
    """Accept a caller whose signature verifies under the stored public key."""

    def is_authorized(self, authority: str, caller: Any) -> bool:
        if authority == NO_AUTHORITY or not isinstance(caller, SignedCaller):
            return False
        if caller.identity != authority:
            return False
        try:
            Ed25519PublicKey.from_public_bytes(caller.public_key).verify(caller.signature, caller.message)
        except (InvalidSignature, ValueError):
            return False
        return True


__all__ = [
    "Authorizer",
    "Ed25519Authorizer",
    "IdentityAuthorizer",
    "NO_AUTHORITY",
    "SignedCaller",
    "public_identity",
    "sign_as",
]
