from __future__ import annotations

import ipaddress
import re
from urllib.parse import urlsplit

from page_analyzer.common.errors import InvalidUrlError

DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
}

_LABEL = r"[a-z0-9_](?:[a-z0-9_-]{0,61}[a-z0-9_])?"
HOSTNAME_RE = re.compile(rf"^{_LABEL}(?:\.{_LABEL})*$")


def _canonical_host(host: str) -> str | None:
    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        if not host.isascii():
            try:
                host = host.encode("idna").decode("ascii")
            except UnicodeError:
                return None
        if len(host) <= 253 and HOSTNAME_RE.match(host):
            return host
        return None
    return f"[{address.compressed}]" if address.version == 6 else address.compressed


def normalize_url(raw_url: str) -> str:
    """Reduce user input to ``scheme://host[:port]``.

    Only http and https are accepted. The port is kept only when it differs
    from the scheme default; path, query, fragment and user-info are dropped.
    """
    candidate = (raw_url or "").strip()
    if not candidate:
        raise InvalidUrlError(raw_url, "empty url")

    try:
        parts = urlsplit(candidate)
        port = parts.port
    except ValueError as exc:
        raise InvalidUrlError(raw_url, str(exc)) from exc

    scheme = parts.scheme.lower()
    if not scheme or not parts.netloc:
        raise InvalidUrlError(raw_url, "url must be absolute")
    if scheme not in DEFAULT_PORTS:
        raise InvalidUrlError(raw_url, f"unsupported scheme {scheme!r}")

    # urlsplit already lower-cases hostname
    host = _canonical_host(parts.hostname or "")
    if not host:
        raise InvalidUrlError(raw_url, "missing or malformed host")

    if port is None or port == DEFAULT_PORTS[scheme]:
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port}"
