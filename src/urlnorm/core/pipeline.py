"""Normalization orchestration: compose the component rules into one key."""
from __future__ import annotations

from typing import Iterator, Optional, Union

from ..config import PatternConfiguration, build_default_configuration
from ..utils import TOKEN_DELIMITER, escape_token, render_pair
from .models import ParsedUrl
from .normalizers import normalize_fragment, normalize_host, normalize_path, normalize_query

UrlLike = Union[ParsedUrl, str]


def token_stream(configuration: PatternConfiguration, url: ParsedUrl) -> Iterator[str]:
    """Yield the escaped tokens of the key: host, path, fragment route, query.

    The scheme is ignored. The host token is always emitted, empty when the URL
    has no host, so positions stay unambiguous.
    """
    yield escape_token(
        normalize_host(
            url.host,
            configuration.host_prefix_matcher,
            configuration.strip_repeated_host_prefixes,
        )
    )
    for segment in normalize_path(
        url.path_segments,
        configuration.path_extension_matcher,
        configuration.path_extension_length,
    ):
        yield escape_token(segment)
    for segment in normalize_fragment(url.fragment, configuration.fragment_matcher):
        yield escape_token(segment)
    for name, value in normalize_query(url.query_pairs, configuration.query_drop_matcher):
        yield render_pair(name, value)


def normalize(configuration: PatternConfiguration, url: ParsedUrl) -> str:
    """Compute the normalization string for ``url``.

    Every token is followed by ``:``; inside tokens ``%``, ``:`` and ``=`` are
    percent-escaped and a query pair is rendered ``name=value``. A bare host
    therefore yields ``"google.com:"``.
    """
    return "".join(token + TOKEN_DELIMITER for token in token_stream(configuration, url))


class UrlNormalizer:
    """Convenience wrapper binding a configuration to the normalization entry points."""

    def __init__(self, configuration: Optional[PatternConfiguration] = None) -> None:
        self.configuration = configuration or build_default_configuration()

    def compute_normalization_string(self, url: UrlLike) -> str:
        return normalize(self.configuration, _as_parsed(url))

    def normalize_text(self, url: str) -> str:
        return normalize(self.configuration, ParsedUrl.from_url(url))

    def are_same(self, a: UrlLike, b: UrlLike) -> bool:
        """Are these two URLs considered the same resource?"""
        return self.compute_normalization_string(a) == self.compute_normalization_string(b)


def _as_parsed(url: UrlLike) -> ParsedUrl:
    if isinstance(url, ParsedUrl):
        return url
    return ParsedUrl.from_url(url)


__all__ = ["normalize", "token_stream", "UrlNormalizer"]
