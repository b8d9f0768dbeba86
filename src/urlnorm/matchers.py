"""Matcher capability used by the drop and significance rules."""
from __future__ import annotations

import re
from typing import Iterable, Optional, Protocol, Union, runtime_checkable


@runtime_checkable
class Matcher(Protocol):
    """Minimal interface: decide whether a string is matched by a rule set."""

    def __call__(self, value: str) -> bool:
        ...


class RegexMatcher:
    """Ordered regular expressions, first match wins.

    ``mode="fullmatch"`` requires a pattern to cover the whole value (used for
    query parameter names); ``mode="search"`` accepts a match anywhere (used for
    fragments, where patterns carry their own anchors).
    """

    __slots__ = ("patterns", "mode")

    def __init__(
        self,
        patterns: Iterable[Union[str, re.Pattern[str]]] = (),
        mode: str = "fullmatch",
    ) -> None:
        if mode not in {"fullmatch", "search"}:
            raise ValueError(f"Unsupported match mode: {mode}")
        self.patterns = tuple(re.compile(pattern) for pattern in patterns)
        self.mode = mode

    def first_match(self, value: str) -> Optional[re.Match[str]]:
        for pattern in self.patterns:
            match = getattr(pattern, self.mode)(value)
            if match is not None:
                return match
        return None

    def __call__(self, value: str) -> bool:
        return self.first_match(value) is not None

    def __bool__(self) -> bool:
        return bool(self.patterns)

    def __repr__(self) -> str:
        sources = ", ".join(repr(pattern.pattern) for pattern in self.patterns)
        return f"RegexMatcher([{sources}], mode={self.mode!r})"


class PrefixMatcher:
    """Literal prefixes plus optional regexes anchored at the start of the value."""

    __slots__ = ("prefixes", "patterns")

    def __init__(
        self,
        prefixes: Iterable[str],
        patterns: Iterable[Union[str, re.Pattern[str]]] = (),
    ) -> None:
        # Longest first so callers asking for the match get the most specific prefix.
        self.prefixes = tuple(sorted(set(prefixes), key=lambda item: (-len(item), item)))
        self.patterns = tuple(re.compile(pattern) for pattern in patterns)

    def longest_prefix(self, value: str) -> Optional[str]:
        best = None
        for prefix in self.prefixes:
            if value.startswith(prefix):
                best = prefix
                break
        for pattern in self.patterns:
            match = pattern.match(value)
            if match and match.group(0) and (best is None or len(match.group(0)) > len(best)):
                best = match.group(0)
        return best

    def __call__(self, value: str) -> bool:
        return self.longest_prefix(value) is not None


class ExactMatcher:
    __slots__ = ("values",)

    def __init__(self, values: Iterable[str]) -> None:
        self.values = frozenset(values)

    def __call__(self, value: str) -> bool:
        return value in self.values


__all__ = ["Matcher", "RegexMatcher", "PrefixMatcher", "ExactMatcher"]
