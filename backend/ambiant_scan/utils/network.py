"""Client IP helpers used in front of the GeoIP lookup."""

import re
from typing import Mapping

_PRIVATE_172 = re.compile(r"^172\.(1[6-9]|2\d|3[01])\.")
_LOCAL_NAMES = {"127.0.0.1", "::1", "localhost"}


def is_private_ip(ip: str) -> bool:
    """Return True for loopback and RFC 1918 addresses.

    Matches 127.0.0.1, ::1 and localhost exactly, 10.* and 192.168.* by
    prefix, and 172.16.0.0 - 172.31.255.255.
    """
    return (
        ip in _LOCAL_NAMES
        or ip.startswith("10.")
        or ip.startswith("192.168.")
        or _PRIVATE_172.match(ip) is not None
    )


def client_ip_from_headers(
    headers: Mapping[str, str], socket_address: str | None
) -> tuple[str, str]:
    """Extract the real client IP behind reverse proxies.

    Priority: Fly-Client-IP, first X-Forwarded-For entry, X-Real-IP, then
    the socket address with any IPv4-mapped ``::ffff:`` prefix removed.
    ``headers`` must be case-insensitive (Starlette headers are).

    Returns:
        ``(ip, source)`` where source names the header that supplied it.
    """
    fly_ip = headers.get("fly-client-ip")
    if fly_ip:
        return fly_ip.strip(), "fly-client-ip"

    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first, "x-forwarded-for"

    real_ip = headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip(), "x-real-ip"

    address = socket_address or ""
    if address.startswith("::ffff:"):
        address = address[len("::ffff:"):]
    return address, "socket"
