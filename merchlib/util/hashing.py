"""Digest helpers: MD5, SHA-1, HMAC and CRC-32 over UTF-8 text."""

from __future__ import annotations

import base64
import hashlib
import hmac
import zlib

__all__ = ["md5_hex", "sha1_hex", "hmac_sha1", "hmac_sha256", "hash_crc32"]


def md5_hex(text: str) -> str:
    """Return the lowercase hex MD5 digest of ``text``."""
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def sha1_hex(text: str) -> str:
    """Return the lowercase hex SHA-1 digest of ``text``."""
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


def hmac_sha1(key: str, data: str) -> str:
    """Return the standard base64 encoding of HMAC-SHA1(key, data)."""
    mac = hmac.new(key.encode("utf-8"), data.encode("utf-8"), hashlib.sha1)
    return base64.b64encode(mac.digest()).decode("ascii")


def hmac_sha256(message: str, secret: str) -> str:
    """Return base64 of the hex HMAC-SHA256 digest of ``message`` keyed by ``secret``."""
    mac = hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256)
    return base64.b64encode(mac.hexdigest().encode("ascii")).decode("ascii")


def hash_crc32(text: str) -> int:
    """Return the IEEE CRC-32 checksum of ``text`` as an unsigned 32-bit int."""
    return zlib.crc32(text.encode("utf-8")) & 0xFFFFFFFF