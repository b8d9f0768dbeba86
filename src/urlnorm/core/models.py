"""Input model for the normalization pipeline."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qsl, unquote, urlsplit


@dataclass(frozen=True, slots=True)
class ParsedUrl:
    """Structured view of an already-parsed URL.

    ``fragment`` excludes the leading ``#`` and is ``None`` when the URL has no
    fragment at all.
    """

    scheme: str = ""
    host: Optional[str] = None
    path_segments: tuple[str, ...] = tuple()
    query_pairs: tuple[tuple[str, str], ...] = tuple()
    fragment: Optional[str] = None

    @classmethod
    def from_url(cls, url: str) -> "ParsedUrl":
        """Adapt :func:`urllib.parse.urlsplit` output.

        No validation happens here: whatever ``urlsplit`` accepts is mapped
        field by field. The host and path segments are percent-decoded; the port
        is not kept.
        """
        parts = urlsplit(url.strip())
        fragment: Optional[str] = parts.fragment
        if not fragment and "#" not in url:
            fragment = None
        return cls(
            scheme=parts.scheme.lower(),
            host=unquote(parts.hostname) if parts.hostname else None,
            path_segments=tuple(unquote(segment) for segment in parts.path.split("/")),
            query_pairs=tuple(parse_qsl(parts.query, keep_blank_values=True)),
            fragment=fragment,
        )
