"""RFC 4122 / DCE 1.1 UUIDs: parsing, formatting and versions 1 through 5."""

from __future__ import annotations

import hashlib
import os
import re
import secrets
import threading
import time
from enum import IntEnum
from typing import Any

import psutil

__all__ = [
    "Variant",
    "Domain",
    "UUID",
    "NIL",
    "NAMESPACE_DNS",
    "NAMESPACE_URL",
    "NAMESPACE_OID",
    "NAMESPACE_X500",
    "uuid_and",
    "uuid_or",
    "new_v1",
    "new_v2",
    "new_v3",
    "new_v4",
    "new_v5",
]

# 100-nanosecond intervals between the UUID epoch (1582-10-15) and the Unix epoch.
_EPOCH_START = 122192928000000000

_URN_PREFIX = b"urn:uuid:"
_BYTE_GROUPS = (8, 4, 4, 4, 12)
_HEX = re.compile(rb"[0-9a-fA-F]*")
_SIZE = 16


class Variant(IntEnum):
    """UUID layout variants."""

    NCS = 0
    RFC4122 = 1
    MICROSOFT = 2
    FUTURE = 3


class Domain(IntEnum):
    """DCE security domains used by version 2 UUIDs."""

    PERSON = 0
    GROUP = 1
    ORG = 2


def _show(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


class UUID:
    """Immutable 16-byte universally unique identifier."""

    __slots__ = ("_bytes",)

    def __init__(self, data: bytes = bytes(_SIZE)) -> None:
        raw = bytes(data)
        if len(raw) != _SIZE:
            raise ValueError(f"uuid: UUID must be exactly 16 bytes long, got {len(raw)} bytes")
        self._bytes = raw

    # -- inspection ---------------------------------------------------

    def version(self) -> int:
        """Return the algorithm version stored in the UUID."""
        return self._bytes[6] >> 4

    def variant(self) -> Variant:
        """Return the layout variant stored in the UUID."""
        octet = self._bytes[8]
        if octet & 0x80 == 0x00:
            return Variant.NCS
        if (octet & 0xC0) | 0x80 == 0x80:
            return Variant.RFC4122
        if (octet & 0xE0) | 0xC0 == 0xC0:
            return Variant.MICROSOFT
        return Variant.FUTURE

    def to_bytes(self) -> bytes:
        return self._bytes

    # -- derivation ---------------------------------------------------

    def with_version(self, version: int) -> "UUID":
        """Return a copy with the version bits set to ``version``."""
        raw = bytearray(self._bytes)
        raw[6] = (raw[6] & 0x0F) | ((version << 4) & 0xFF)
        return UUID(bytes(raw))

    def with_variant(self) -> "UUID":
        """Return a copy with the RFC 4122 variant bits set."""
        raw = bytearray(self._bytes)
        raw[8] = (raw[8] & 0xBF) | 0x80
        return UUID(bytes(raw))

    # -- parsing ------------------------------------------------------

    @classmethod
    def from_string(cls, text: str | bytes) -> "UUID":
        """Parse the canonical, braced (``{...}``) or ``urn:uuid:`` form."""
        raw = text.encode("utf-8") if isinstance(text, str) else bytes(text)
        if len(raw) < 32:
            raise ValueError(f"uuid: UUID string too short: {_show(raw)}")

        rest = raw
        braced = False
        if rest[:9] == _URN_PREFIX:
            rest = rest[9:]
        elif rest[:1] == b"{":
            braced = True
            rest = rest[1:]

        out = bytearray()
        for group_no, group in enumerate(_BYTE_GROUPS):
            if group_no > 0:
                if rest[:1] != b"-":
                    raise ValueError("uuid: invalid string format")
                rest = rest[1:]
            if len(rest) < group:
                raise ValueError(f"uuid: UUID string too short: {_show(raw)}")
            if group_no == 4 and len(rest) > group and (
                (braced and rest[group : group + 1] != b"}")
                or len(rest) - group > 1
                or not braced
            ):
                raise ValueError(f"uuid: UUID string too long: {_show(raw)}")
            chunk = rest[:group]
            if not _HEX.fullmatch(chunk):
                raise ValueError(f"uuid: invalid hex digits in {_show(chunk)!r}")
            out += bytes.fromhex(chunk.decode("ascii"))
            rest = rest[group:]
        return cls(bytes(out))

    @classmethod
    def from_bytes(cls, data: bytes) -> "UUID":
        """Build a UUID from exactly 16 raw bytes."""
        return cls(data)

    @classmethod
    def from_string_or_nil(cls, text: str | bytes) -> "UUID":
        """Like :meth:`from_string` but returns the nil UUID on bad input."""
        try:
            return cls.from_string(text)
        except ValueError:
            return NIL

    @classmethod
    def from_bytes_or_nil(cls, data: bytes) -> "UUID":
        """Like :meth:`from_bytes` but returns the nil UUID on bad input."""
        try:
            return cls.from_bytes(data)
        except ValueError:
            return NIL

    # -- Python protocols ---------------------------------------------

    def __str__(self) -> str:
        h = self._bytes.hex()
        return f"{h[0:8]}-{h[8:12]}-{h[12:16]}-{h[16:20]}-{h[20:]}"

    def __repr__(self) -> str:
        return f"UUID('{self}')"

    def __bytes__(self) -> bytes:
        return self._bytes

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, UUID):
            return NotImplemented
        return self._bytes == other._bytes

    def __hash__(self) -> int:
        return hash(self._bytes)


NIL = UUID()
NAMESPACE_DNS = UUID.from_string("6ba7b810-9dad-11d1-80b4-00c04fd430c8")
NAMESPACE_URL = UUID.from_string("6ba7b811-9dad-11d1-80b4-00c04fd430c8")
NAMESPACE_OID = UUID.from_string("6ba7b812-9dad-11d1-80b4-00c04fd430c8")
NAMESPACE_X500 = UUID.from_string("6ba7b814-9dad-11d1-80b4-00c04fd430c8")


def uuid_and(u1: UUID, u2: UUID) -> UUID:
    """Return the bitwise AND of two UUIDs."""
    return UUID(bytes(a & b for a, b in zip(u1.to_bytes(), u2.to_bytes())))


def uuid_or(u1: UUID, u2: UUID) -> UUID:
    """Return the bitwise OR of two UUIDs."""
    return UUID(bytes(a | b for a, b in zip(u1.to_bytes(), u2.to_bytes())))


# -- time-based state -------------------------------------------------


def _parse_mac(text: str) -> bytes | None:
    parts = re.split(r"[:\-]", text)
    if not all(re.fullmatch(r"[0-9a-fA-F]{2}", part) for part in parts):
        return None
    return bytes(int(part, 16) for part in parts)


def _find_hardware_addr() -> bytes:
    try:
        interfaces = psutil.net_if_addrs()
    except (OSError, RuntimeError):
        interfaces = {}
    for snics in interfaces.values():
        for snic in snics:
            if snic.family != psutil.AF_LINK:
                continue
            mac = _parse_mac(snic.address or "")
            if mac is not None and len(mac) >= 6 and any(mac):
                return mac[:6]
    # No usable interface: random address with the multicast bit set.
    random_addr = bytearray(secrets.token_bytes(6))
    random_addr[0] |= 0x01
    return bytes(random_addr)


def _posix_uid() -> int:
    try:
        return os.getuid() & 0xFFFFFFFF
    except AttributeError:
        return 0xFFFFFFFF


def _posix_gid() -> int:
    try:
        return os.getgid() & 0xFFFFFFFF
    except AttributeError:
        return 0xFFFFFFFF


class _Clock:
    """Shared timestamp, clock sequence and node for version 1 and 2 UUIDs."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ready = False
        self._clock_sequence = 0
        self._last_time = 0
        self._hardware_addr = bytes(6)

    def read(self) -> tuple[int, int, bytes]:
        with self._lock:
            if not self._ready:
                self._clock_sequence = int.from_bytes(secrets.token_bytes(2), "big")
                self._hardware_addr = _find_hardware_addr()
                self._ready = True
            now = _EPOCH_START + time.time_ns() // 100
            if now <= self._last_time:
                self._clock_sequence = (self._clock_sequence + 1) & 0xFFFF
            self._last_time = now
            return now, self._clock_sequence, self._hardware_addr


_clock = _Clock()


def new_v1() -> UUID:
    """Return a UUID built from the current time and the node's hardware address."""
    now, clock_seq, node = _clock.read()
    raw = bytearray(_SIZE)
    raw[0:4] = (now & 0xFFFFFFFF).to_bytes(4, "big")
    raw[4:6] = ((now >> 32) & 0xFFFF).to_bytes(2, "big")
    raw[6:8] = ((now >> 48) & 0xFFFF).to_bytes(2, "big")
    raw[8:10] = clock_seq.to_bytes(2, "big")
    raw[10:] = node
    return UUID(bytes(raw)).with_version(1).with_variant()


def new_v2(domain: int) -> UUID:
    """Return a DCE security UUID carrying the POSIX UID or GID for ``domain``."""
    if not 0 <= domain <= 0xFF:
        raise ValueError(f"domain must fit in one byte, got {domain}")
    now, clock_seq, node = _clock.read()
    raw = bytearray(_SIZE)
    if domain == Domain.PERSON:
        raw[0:4] = _posix_uid().to_bytes(4, "big")
    elif domain == Domain.GROUP:
        raw[0:4] = _posix_gid().to_bytes(4, "big")
    raw[4:6] = ((now >> 32) & 0xFFFF).to_bytes(2, "big")
    raw[6:8] = ((now >> 48) & 0xFFFF).to_bytes(2, "big")
    raw[8:10] = clock_seq.to_bytes(2, "big")
    raw[9] = domain
    raw[10:] = node
    return UUID(bytes(raw)).with_version(2).with_variant()


def _from_hash(digest: bytes, version: int) -> UUID:
    return UUID(digest[:_SIZE]).with_version(version).with_variant()


def new_v3(namespace: UUID, name: str) -> UUID:
    """Return the name-based UUID using MD5."""
    digest = hashlib.md5(namespace.to_bytes() + name.encode("utf-8")).digest()
    return _from_hash(digest, 3)


def new_v4() -> UUID:
    """Return a random UUID."""
    return _from_hash(secrets.token_bytes(_SIZE), 4)


def new_v5(namespace: UUID, name: str) -> UUID:
    """Return the name-based UUID using SHA-1."""
    digest = hashlib.sha1(namespace.to_bytes() + name.encode("utf-8")).digest()
    return _from_hash(digest, 5)