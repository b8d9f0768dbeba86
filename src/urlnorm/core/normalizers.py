"""Per-component normalization rules.

Each function is pure: it reads one URL component plus the relevant rules and
returns the normalized contribution of that component.
"""
from __future__ import annotations

from typing import Iterable, Optional

from ..matchers import Matcher, PrefixMatcher, RegexMatcher
from ..utils import prune_segments, split_segments


def normalize_host(
    host: Optional[str],
    prefixes: PrefixMatcher,
    strip_repeated: bool = False,
) -> str:
    """Lowercase ``host`` and strip the longest matching configured prefix.

    A prefix is only removed when something is left after it, so ``www.`` on its
    own stays intact. With ``strip_repeated`` stacked prefixes such as
    ``m.www.example.com`` are removed one after another.
    """
    if not host:
        return ""
    host = host.lower()
    while True:
        prefix = prefixes.longest_prefix(host)
        if prefix is None or len(prefix) >= len(host):
            return host
        host = host[len(prefix):]
        if not strip_repeated:
            return host


def normalize_path(
    segments: Iterable[str],
    extension_matcher: Optional[Matcher] = None,
    extension_length: int = 0,
) -> list[str]:
    """Drop empty segments, optionally trimming a file extension off the last one."""
    kept = prune_segments(segments)
    if kept and extension_matcher:
        kept[-1] = _trim_extension(kept[-1], extension_matcher, extension_length)
    return kept


def normalize_query(
    pairs: Iterable[tuple[str, str]],
    drop: Matcher,
) -> list[tuple[str, str]]:
    """Filter out pairs whose name ``drop`` accepts, then sort by name and value."""
    return sorted((name, value) for name, value in pairs if not drop(name))


def normalize_fragment(fragment: Optional[str], significant: RegexMatcher) -> list[str]:
    """Turn a routing fragment into path segments; discard anything else.

    The route is the ``route`` group when the matching pattern defines one,
    otherwise whatever follows the match.
    """
    if not fragment:
        return []
    match = significant.first_match(fragment)
    if match is None:
        return []
    if "route" in match.re.groupindex:
        route = match.group("route") or ""
    else:
        route = fragment[match.end():]
    return split_segments(route)


def _trim_extension(segment: str, matcher: Matcher, max_length: int) -> str:
    stem, dot, extension = segment.rpartition(".")
    if not dot or not stem or not extension:
        return segment
    if len(extension) <= max_length and matcher(extension):
        return stem
    return segment


__all__ = [
    "normalize_host",
    "normalize_path",
    "normalize_query",
    "normalize_fragment",
]
