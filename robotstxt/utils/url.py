from __future__ import annotations

import re
from typing import Optional
from urllib.parse import unquote_to_bytes, urlsplit


_scheme_re = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")

# schemes that cannot be used without an authority part
_HOST_SCHEMES = {"http", "https", "ftp", "ws", "wss"}


def percent_decode(value: str) -> str:
    """Decode %XX escapes as UTF-8.

    Malformed escapes are left as they are. A result that is not valid UTF-8
    decodes to the empty string.
    """
    if "%" not in value:
        return value
    try:
        return unquote_to_bytes(value).decode("utf-8")
    except UnicodeDecodeError:
        return ""


def parse_absolute_url(value: str) -> Optional[str]:
    value = value.strip()
    if not value or any(ch.isspace() for ch in value):
        return None
    try:
        parts = urlsplit(value)
    except ValueError:
        return None
    if not parts.scheme or not _scheme_re.match(parts.scheme):
        return None
    if parts.scheme.lower() in _HOST_SCHEMES and not parts.hostname:
        return None
    return value
