import ipaddress
import re
import socket
from urllib.parse import urlsplit

ALLOWED_SCHEMES = ("http", "https")
SCHEME_PATTERN = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)
PRIVATE_HOST_PREFIX_PATTERN = re.compile(
    r"^(?:127\.|10\.|192\.168\.|172\.(?:1[6-9]|2\d|3[01])\.|0\.|169\.254\.)"
)
BLOCKED_HOSTNAMES = {"localhost"}
# Shorthand IPv4 hosts: 1 to 4 decimal, octal or hex parts.
NUMERIC_HOST_PATTERN = re.compile(r"^(?:0x[0-9a-f]*|\d+)(?:\.(?:0x[0-9a-f]*|\d+)){0,3}$")

INVALID_URL = "Invalid URL"
UNSUPPORTED_SCHEME = "Only HTTP/HTTPS URLs are supported"
PRIVATE_ADDRESS = "Private or reserved addresses are not allowed"


def normalize_target_url(raw_url: str) -> str:
    """Trim the user-supplied target and default it to https when it has no scheme."""
    candidate = raw_url.strip()
    if not candidate or SCHEME_PATTERN.match(candidate):
        return candidate
    return f"https://{candidate}"


def _canonical_ipv4(host: str) -> str:
    if not NUMERIC_HOST_PATTERN.match(host):
        return host
    try:
        packed = socket.inet_aton(host)
    except OSError:
        return host
    return str(ipaddress.IPv4Address(packed))


def _is_restricted_ip_literal(host: str) -> bool:
    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        return False
    return (
        address.is_private
        or address.is_loopback
        or address.is_link_local
        or address.is_reserved
        or address.is_unspecified
    )


def validate_url(url: str) -> str | None:
    """Return a rejection reason for ``url``, or None when it may be fetched.

    This only inspects the hostname string. Names that resolve to internal
    addresses are not caught, so treat it as a guard rail rather than a
    complete SSRF defense.
    """
    try:
        parsed = urlsplit(url)
        host = parsed.hostname
        # Accessing the port validates it.
        parsed.port
    except ValueError:
        return INVALID_URL

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        if not parsed.scheme or not parsed.netloc:
            return INVALID_URL
        return UNSUPPORTED_SCHEME
    if not host:
        return INVALID_URL

    host = _canonical_ipv4(host.lower().rstrip("."))
    if host in BLOCKED_HOSTNAMES:
        return PRIVATE_ADDRESS
    if PRIVATE_HOST_PREFIX_PATTERN.match(host):
        return PRIVATE_ADDRESS
    if _is_restricted_ip_literal(host):
        return PRIVATE_ADDRESS
    return None
