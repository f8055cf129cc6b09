from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit

SCHEME_MARKER = "://"
DEFAULT_SCHEME_PREFIX = "https://"


def normalize_url_input(raw: str) -> Optional[str]:
    """Turn what a user typed into an absolute URL string, or None if it can't be one.

    Only two things happen: ``https://`` is prepended when no ``://`` appears anywhere in the
    trimmed input, and the result must parse with a non-empty scheme and host. Hosts are not
    checked against real domains, so ``notaurl`` becomes ``https://notaurl``.
    """
    trimmed = (raw or "").strip()
    if not trimmed:
        return None
    # urlsplit silently drops tabs/newlines and accepts spaces; a strict URL parser refuses them.
    if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in trimmed):
        return None

    with_scheme = trimmed if SCHEME_MARKER in trimmed else DEFAULT_SCHEME_PREFIX + trimmed

    try:
        parts = urlsplit(with_scheme)
        host = parts.hostname
        # Raises for a non-numeric or out-of-range port.
        parts.port
    except ValueError:
        return None
    if not parts.scheme or not host:
        return None
    return with_scheme
