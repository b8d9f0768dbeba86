"""Canonical comparison keys for clustering and deduplicating URLs."""
from __future__ import annotations

from .clustering import UrlCluster, cluster_urls
from .config import (
    ConfigError,
    InvalidPatternError,
    NormalizerOptions,
    PatternConfiguration,
    build_configuration,
    build_default_configuration,
    load_options,
)
from .core import ParsedUrl, UrlNormalizer, normalize, token_stream
from .matchers import ExactMatcher, Matcher, PrefixMatcher, RegexMatcher

__all__ = [
    "ConfigError",
    "ExactMatcher",
    "InvalidPatternError",
    "Matcher",
    "NormalizerOptions",
    "ParsedUrl",
    "PatternConfiguration",
    "PrefixMatcher",
    "RegexMatcher",
    "UrlCluster",
    "UrlNormalizer",
    "build_configuration",
    "build_default_configuration",
    "cluster_urls",
    "load_options",
    "normalize",
    "token_stream",
]
