"""IP address helpers: public and client addresses, geolocation and private ranges."""

from __future__ import annotations

import ipaddress
import re
import socket
from typing import Mapping

import psutil
import requests

from merchlib.util.jsonutil import json_to_map

__all__ = [
    "IPLookupError",
    "EXTERNAL_IP_URL",
    "IP_LOCATION_URL",
    "get_external_ip",
    "client_public_ip",
    "get_ip_address",
    "get_intranet_ips",
    "is_intranet",
]

EXTERNAL_IP_URL = "https://ipw.cn/api/ip/myip"
IP_LOCATION_URL = "https://restapi.amap.com/v3/ip"

_INT_TEXT = re.compile(r"[+-]?[0-9]+")
_IGNORED_PREFIXES = ("docker", "w-")


class IPLookupError(RuntimeError):
    """Raised when the address lookup service does not answer successfully."""


def get_external_ip() -> str:
    """Return this server's public IP as reported by the lookup service."""
    response = requests.get(EXTERNAL_IP_URL)
    return response.text.strip()


def _header(headers: Mapping[str, str], name: str) -> str:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return ""


def _split_host(hostport: str) -> str | None:
    """Return the host part of ``host:port`` or ``[host]:port``, or None if malformed."""
    if hostport.startswith("["):
        end = hostport.find("]")
        if end < 0 or hostport[end + 1 : end + 2] != ":":
            return None
        host = hostport[1:end]
        if "[" in host or "]" in hostport[end + 1 :]:
            return None
        return host
    host, sep, _port = hostport.rpartition(":")
    if not sep or ":" in host or "[" in hostport or "]" in hostport:
        return None
    return host


def client_public_ip(headers: Mapping[str, str], remote_addr: str) -> str:
    """Best-effort client IP: X-Forwarded-For, then X-Real-Ip, then the peer address."""
    for candidate in _header(headers, "X-Forwarded-For").split(","):
        candidate = candidate.strip()
        if candidate:
            return candidate
    real_ip = _header(headers, "X-Real-Ip").strip()
    if real_ip:
        return real_ip
    host = _split_host(remote_addr.strip())
    return host if host is not None else ""


def get_ip_address(ip: str, key: str) -> tuple[str, str]:
    """Look up ``(province, city)`` for ``ip``; unknown parts come back empty."""
    response = requests.get(IP_LOCATION_URL, params={"key": key, "ip": ip})
    if response.status_code != 200:
        raise IPLookupError("查询地址失败！")
    result = json_to_map(response.content)
    province_obj = result.get("province")
    city_obj = result.get("city")
    if province_obj is None or city_obj is None:
        return "", ""
    if not isinstance(province_obj, str):
        return "", ""
    if not isinstance(city_obj, str):
        return province_obj, ""
    return province_obj, city_obj


def get_intranet_ips() -> list[str]:
    """Return the private IPv4 addresses of interfaces that are up and not loopback."""
    stats = psutil.net_if_stats()
    ips: list[str] = []
    for name, snics in psutil.net_if_addrs().items():
        iface = stats.get(name)
        if iface is None or not iface.isup:
            continue
        if "loopback" in str(getattr(iface, "flags", "")).split(","):
            continue
        if name.startswith(_IGNORED_PREFIXES):
            continue
        for snic in snics:
            if snic.family != socket.AF_INET:
                continue
            try:
                address = ipaddress.IPv4Address(snic.address)
            except ValueError:
                continue
            if address.is_loopback:
                continue
            text = str(address)
            if is_intranet(text):
                ips.append(text)
    return ips


def is_intranet(ip: str) -> bool:
    """Return whether ``ip`` is in 10/8, 172.16/12 or 192.168/16."""
    if ip.startswith(("10.", "192.168.")):
        return True
    if ip.startswith("172."):
        parts = ip.split(".")
        if len(parts) != 4 or not _INT_TEXT.fullmatch(parts[1]):
            return False
        return 16 <= int(parts[1]) <= 31
    return False