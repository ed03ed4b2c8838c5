"""Curve25519 key agreement."""

from __future__ import annotations

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PrivateKey, X25519PublicKey

__all__ = ["curve25519_keypair", "curve25519_shared_key"]

_KEY_SIZE = 32


def curve25519_keypair() -> tuple[bytes, bytes]:
    """Return a fresh ``(private, public)`` pair of 32-byte Curve25519 keys."""
    private_key = X25519PrivateKey.generate()
    private = private_key.private_bytes(
        serialization.Encoding.Raw,
        serialization.PrivateFormat.Raw,
        serialization.NoEncryption(),
    )
    public = private_key.public_key().public_bytes(
        serialization.Encoding.Raw, serialization.PublicFormat.Raw
    )
    return private, public


def curve25519_shared_key(private: bytes, public: bytes) -> bytes:
    """Return the 32-byte shared secret of ``private`` and a peer's ``public`` key.

    A low-order peer key yields 32 zero bytes.
    """
    if len(private) != _KEY_SIZE or len(public) != _KEY_SIZE:
        raise ValueError("Curve25519 keys must be 32 bytes long")
    private_key = X25519PrivateKey.from_private_bytes(bytes(private))
    peer_key = X25519PublicKey.from_public_bytes(bytes(public))
    try:
        return private_key.exchange(peer_key)
    except ValueError:
        return bytes(_KEY_SIZE)