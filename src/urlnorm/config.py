"""Pattern configuration for URL normalization."""
from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Iterable, Union

from .matchers import PrefixMatcher, RegexMatcher

logger = logging.getLogger(__name__)

# Common www- and mobile-style host prefixes (www, www1, ww1, m, mobile, ...).
DEFAULT_HOST_PREFIXES = frozenset(
    {
        "www.",
        "www1.",
        "www2.",
        "www3.",
        "ww1.",
        "m.",
        "mobile.",
    }
)

# Analytics and click-tracking parameter names, matched against the whole name.
DEFAULT_QUERY_DROP_PATTERNS = (
    r"utm_.*",
    r"gclid",
    r"_ga",
    r"_gl",
    r"msclkid",
    r"fbclid",
    r"mc_cid",
    r"mc_eid",
    r"[Ww][Tt]\.mc_(id|ev)",
    r"__[a-z]+",
)

# Host prefix families matched at the start of the host: www, ww, www12, www-03, m, mobile, m-abc.
DEFAULT_HOST_PREFIX_PATTERNS = (
    r"(www?[0-9]*|m|mobile)(-[a-z0-9]{1,3})?\.",
)

# SPA-style `/#/route` and hashbang `#!route` fragments.
DEFAULT_FRAGMENT_SIGNIFICANT_PATTERNS = (
    r"^/",
    r"^!/?",
)

DEFAULT_PATH_EXTENSION_LENGTH = 6

# Opt-in: trims extensions like .html, .aspx or .html5 from the last path segment.
COMMON_PATH_EXTENSION_PATTERN = r"[a-zA-Z]+[0-9]?"

ROLE_HOST_PREFIX = "host-prefix"
ROLE_QUERY_DROP = "query-drop"
ROLE_FRAGMENT_SIGNIFICANT = "fragment-significant"
ROLE_PATH_EXTENSION = "path-extension"


class ConfigError(ValueError):
    """Raised when a normalization configuration cannot be built."""


class InvalidPatternError(ConfigError):
    """A regular expression supplied in the configuration failed to compile."""

    def __init__(self, pattern: str, role: str, reason: str) -> None:
        super().__init__(f"Invalid {role} pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.role = role
        self.reason = reason


@dataclass(slots=True)
class NormalizerOptions:
    host_prefixes: set[str] = field(default_factory=set)
    host_prefix_patterns: list[str] = field(default_factory=list)
    query_drop_patterns: list[str] = field(default_factory=list)
    fragment_significant_patterns: list[str] = field(default_factory=list)
    strip_repeated_host_prefixes: bool = False
    path_extension_patterns: list[str] = field(default_factory=list)
    path_extension_length: int = DEFAULT_PATH_EXTENSION_LENGTH

    @classmethod
    def default(cls) -> "NormalizerOptions":
        return cls(
            host_prefixes=set(DEFAULT_HOST_PREFIXES),
            host_prefix_patterns=list(DEFAULT_HOST_PREFIX_PATTERNS),
            query_drop_patterns=list(DEFAULT_QUERY_DROP_PATTERNS),
            fragment_significant_patterns=list(DEFAULT_FRAGMENT_SIGNIFICANT_PATTERNS),
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "NormalizerOptions":
        """Build options from a mapping, filling missing keys with the defaults."""
        known = {item.name for item in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration option(s): {', '.join(unknown)}")
        options = cls.default()
        for name, value in data.items():
            if name in {"strip_repeated_host_prefixes", "path_extension_length"}:
                setattr(options, name, value)
            elif name == "host_prefixes":
                options.host_prefixes = set(_string_items(name, value))
            else:
                setattr(options, name, list(_string_items(name, value)))
        return options


@dataclass(frozen=True)
class PatternConfiguration:
    """Compiled, immutable rule set shared by every normalization call."""

    host_prefixes: frozenset[str]
    host_prefix_patterns: tuple[re.Pattern[str], ...]
    query_drop_patterns: tuple[re.Pattern[str], ...]
    fragment_significant_patterns: tuple[re.Pattern[str], ...]
    strip_repeated_host_prefixes: bool = False
    path_extension_patterns: tuple[re.Pattern[str], ...] = ()
    path_extension_length: int = DEFAULT_PATH_EXTENSION_LENGTH
    host_prefix_matcher: PrefixMatcher = field(init=False, repr=False, compare=False)
    query_drop_matcher: RegexMatcher = field(init=False, repr=False, compare=False)
    fragment_matcher: RegexMatcher = field(init=False, repr=False, compare=False)
    path_extension_matcher: RegexMatcher = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "host_prefix_matcher", PrefixMatcher(self.host_prefixes, self.host_prefix_patterns)
        )
        object.__setattr__(self, "query_drop_matcher", RegexMatcher(self.query_drop_patterns))
        object.__setattr__(
            self, "fragment_matcher", RegexMatcher(self.fragment_significant_patterns, mode="search")
        )
        object.__setattr__(self, "path_extension_matcher", RegexMatcher(self.path_extension_patterns))


def build_default_configuration() -> PatternConfiguration:
    return build_configuration(NormalizerOptions.default())


def build_configuration(
    options: Union[NormalizerOptions, Mapping[str, Any], None] = None,
) -> PatternConfiguration:
    """Compile ``options`` into a :class:`PatternConfiguration`.

    Every pattern is compiled before the configuration object is created, so a
    failure leaves nothing half-built behind. Raises :class:`InvalidPatternError`
    naming the first pattern that does not compile, or :class:`ConfigError` for
    other invalid option values.
    """
    if options is None:
        options = NormalizerOptions.default()
    elif isinstance(options, Mapping):
        options = NormalizerOptions.from_mapping(options)

    prefixes = frozenset(prefix.lower() for prefix in _string_items("host_prefixes", options.host_prefixes))
    if "" in prefixes:
        raise ConfigError("Host prefixes must be non-empty strings")
    if not isinstance(options.strip_repeated_host_prefixes, bool):
        raise ConfigError(
            f"strip_repeated_host_prefixes must be a boolean, got {options.strip_repeated_host_prefixes!r}"
        )
    length = options.path_extension_length
    if isinstance(length, bool) or not isinstance(length, int) or length < 0:
        raise ConfigError(
            f"path_extension_length must be a non-negative integer, got {options.path_extension_length!r}"
        )

    configuration = PatternConfiguration(
        host_prefixes=prefixes,
        host_prefix_patterns=_compile_all(options.host_prefix_patterns, ROLE_HOST_PREFIX),
        query_drop_patterns=_compile_all(options.query_drop_patterns, ROLE_QUERY_DROP),
        fragment_significant_patterns=_compile_all(
            options.fragment_significant_patterns, ROLE_FRAGMENT_SIGNIFICANT
        ),
        strip_repeated_host_prefixes=options.strip_repeated_host_prefixes,
        path_extension_patterns=_compile_all(options.path_extension_patterns, ROLE_PATH_EXTENSION),
        path_extension_length=options.path_extension_length,
    )
    logger.debug(
        "Built configuration (prefixes=%s, prefix_patterns=%s, drop=%s, fragment=%s, extension=%s)",
        len(configuration.host_prefixes),
        len(configuration.host_prefix_patterns),
        len(configuration.query_drop_patterns),
        len(configuration.fragment_significant_patterns),
        len(configuration.path_extension_patterns),
    )
    return configuration


def load_options(path: Union[str, Path]) -> NormalizerOptions:
    """Read normalizer options from a JSON document."""
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Configuration file {path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise ConfigError(f"Configuration file {path} must contain a JSON object")
    return NormalizerOptions.from_mapping(payload)


def _compile_all(sources: Iterable[str], role: str) -> tuple[re.Pattern[str], ...]:
    compiled = []
    for source in _string_items(role, sources):
        try:
            compiled.append(re.compile(source))
        except re.error as exc:
            raise InvalidPatternError(source, role, str(exc)) from exc
    return tuple(compiled)


def _string_items(name: str, values: Any) -> list[str]:
    if isinstance(values, str) or not isinstance(values, Iterable):
        raise ConfigError(f"{name} must be a collection of strings, got {type(values).__name__}")
    items = list(values)
    for item in items:
        if not isinstance(item, str):
            raise ConfigError(f"{name} entries must be strings, got {item!r}")
    return items
