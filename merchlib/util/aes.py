"""AES-CBC encryption with PKCS#5/PKCS#7 padding."""

from __future__ import annotations

import base64
from typing import Callable

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

__all__ = [
    "pkcs5_padding",
    "pkcs5_unpadding",
    "pkcs7_padding",
    "pkcs7_unpadding",
    "aes_encrypt",
    "aes_decrypt",
    "aes_encrypt_pkcs5",
    "aes_encrypt_pkcs7",
    "aes_encrypt_pkcs7_base64",
    "aes_decrypt_pkcs5",
    "aes_decrypt_pkcs7",
    "aes_decrypt_pkcs7_base64",
    "aes_encrypt_simple",
    "aes_decrypt_simple",
]

_BLOCK_SIZE = 16

Padding = Callable[[bytes, int], bytes]
Unpadding = Callable[[bytes], bytes]


def pkcs5_padding(data: bytes, block_size: int) -> bytes:
    """Pad ``data`` to a multiple of ``block_size``; always adds at least one byte."""
    pad = block_size - len(data) % block_size
    return bytes(data) + bytes([pad]) * pad


def pkcs5_unpadding(data: bytes) -> bytes:
    """Strip padding; returns ``b"unpadding error"`` when the pad length is too large."""
    if not data:
        raise ValueError("cannot unpad empty data")
    pad = data[-1]
    if len(data) < pad:
        return b"unpadding error"
    return bytes(data[: len(data) - pad])


def pkcs7_padding(data: bytes, block_size: int) -> bytes:
    """Pad ``data`` to a multiple of ``block_size``; always adds at least one byte."""
    pad = block_size - len(data) % block_size
    return bytes(data) + bytes([pad]) * pad


def pkcs7_unpadding(data: bytes) -> bytes:
    """Strip the padding named by the last byte."""
    if not data:
        raise ValueError("cannot unpad empty data")
    pad = data[-1]
    if pad > len(data):
        raise ValueError(f"padding length {pad} exceeds data length {len(data)}")
    return bytes(data[: len(data) - pad])


def aes_encrypt(data: bytes, key: bytes, iv: bytes, padding: Padding) -> bytes:
    """Pad ``data`` with ``padding`` and encrypt it with AES-CBC."""
    padded = padding(bytes(data), _BLOCK_SIZE)
    encryptor = Cipher(algorithms.AES(bytes(key)), modes.CBC(bytes(iv))).encryptor()
    return encryptor.update(padded) + encryptor.finalize()


def aes_decrypt(data: bytes, key: bytes, iv: bytes, unpadding: Unpadding) -> bytes:
    """Decrypt AES-CBC ``data`` and remove padding with ``unpadding``."""
    decryptor = Cipher(algorithms.AES(bytes(key)), modes.CBC(bytes(iv))).decryptor()
    plain = decryptor.update(bytes(data)) + decryptor.finalize()
    return unpadding(plain)


def aes_encrypt_pkcs5(data: bytes, key: bytes, iv: bytes) -> bytes:
    return aes_encrypt(data, key, iv, pkcs5_padding)


def aes_encrypt_pkcs7(data: bytes, key: bytes, iv: bytes) -> bytes:
    return aes_encrypt(data, key, iv, pkcs7_padding)


def aes_encrypt_pkcs7_base64(data: bytes, key: bytes, iv: bytes) -> bytes:
    """Encrypt with PKCS#7 padding and return the standard base64 encoding."""
    return base64.b64encode(aes_encrypt(data, key, iv, pkcs7_padding))


def aes_decrypt_pkcs5(data: bytes, key: bytes, iv: bytes) -> bytes:
    return aes_decrypt(data, key, iv, pkcs5_unpadding)


def aes_decrypt_pkcs7(data: bytes, key: bytes, iv: bytes) -> bytes:
    return aes_decrypt(data, key, iv, pkcs7_unpadding)


def aes_decrypt_pkcs7_base64(data: bytes, key: bytes, iv: bytes) -> bytes:
    """Base64-decode ``data`` and decrypt it with PKCS#7 unpadding."""
    return aes_decrypt(base64.b64decode(data, validate=True), key, iv, pkcs7_unpadding)


def aes_encrypt_simple(data: bytes, key: str, iv: str) -> bytes:
    """Decrypt ``data`` with PKCS#5 unpadding using text key and IV.

    Behaves exactly like :func:`aes_decrypt_simple`.
    """
    return aes_decrypt_pkcs5(data, key.encode("utf-8"), iv.encode("utf-8"))


def aes_decrypt_simple(data: bytes, key: str, iv: str) -> bytes:
    """Decrypt ``data`` with PKCS#5 unpadding using text key and IV."""
    return aes_decrypt_pkcs5(data, key.encode("utf-8"), iv.encode("utf-8"))