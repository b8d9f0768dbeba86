"""Token helpers shared by the normalizers."""
from __future__ import annotations

from typing import Iterable

TOKEN_DELIMITER = ":"
PAIR_SEPARATOR = "="

# `%` first so later replacements are not double-escaped.
_ESCAPES = (
    ("%", "%25"),
    (TOKEN_DELIMITER, "%3A"),
    (PAIR_SEPARATOR, "%3D"),
)


def escape_token(value: str) -> str:
    """Escape delimiter characters so a token never contains a raw `:` or `=`."""
    for raw, escaped in _ESCAPES:
        if raw in value:
            value = value.replace(raw, escaped)
    return value


def render_pair(name: str, value: str) -> str:
    return f"{escape_token(name)}{PAIR_SEPARATOR}{escape_token(value)}"


def prune_segments(segments: Iterable[str]) -> list[str]:
    return [segment for segment in segments if segment]


def split_segments(path: str) -> list[str]:
    """Split a slash-separated path and drop empty segments."""
    return prune_segments(path.split("/"))
