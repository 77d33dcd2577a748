from __future__ import annotations

import hashlib
import re

_whitespace_re = re.compile(r"\s+")


def normalize_player_name(value: str) -> str:
    """Lowercase and collapse whitespace so lookups are case insensitive."""

    v = value.strip().lower()
    v = _whitespace_re.sub(" ", v)
    return v


def hash_name(value: str) -> str:
    """MD5 hex digest of a normalized player name.

    The digest covers the UTF-8 bytes plus a trailing NUL byte, which is how
    the hashed name tables distributed with the R package were produced.
    """

    data = normalize_player_name(value).encode("utf-8") + b"\x00"
    return hashlib.md5(data).hexdigest()
