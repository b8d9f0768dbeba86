import re

import pytest

from urlnorm.matchers import ExactMatcher, Matcher, PrefixMatcher, RegexMatcher


def test_regex_matcher_fullmatch_requires_whole_value():
    matcher = RegexMatcher(["ref"])
    assert matcher("ref")
    assert not matcher("referrer")


def test_regex_matcher_search_mode_matches_anywhere():
    matcher = RegexMatcher([re.compile("bar")], mode="search")
    assert matcher("foobarbaz")


def test_regex_matcher_returns_first_match_in_order():
    matcher = RegexMatcher([r"^a(?P<tail>.*)", r"^ab"], mode="search")
    match = matcher.first_match("abc")
    assert match is not None
    assert match.re.pattern == r"^a(?P<tail>.*)"


def test_empty_regex_matcher_matches_nothing_and_is_falsy():
    matcher = RegexMatcher()
    assert not matcher("anything")
    assert not matcher


def test_regex_matcher_rejects_unknown_mode():
    with pytest.raises(ValueError):
        RegexMatcher(["a"], mode="match-ish")


def test_prefix_matcher_prefers_longest():
    matcher = PrefixMatcher({"www.", "www.m.", "w"})
    assert matcher.longest_prefix("www.m.example.com") == "www.m."
    assert matcher.longest_prefix("example.com") is None
    assert matcher("wiki.org")


def test_matchers_satisfy_protocol():
    for matcher in (RegexMatcher(["a"]), PrefixMatcher(["a"]), ExactMatcher(["a"])):
        assert isinstance(matcher, Matcher)
        assert matcher("a")
    assert not ExactMatcher(["a"])("ab")


def test_prefix_matcher_patterns_compete_on_length():
    matcher = PrefixMatcher({"www."}, [r"(www?[0-9]*|m)(-[a-z0-9]{1,3})?\."])
    assert matcher.longest_prefix("www-03.example.com") == "www-03."
    assert matcher.longest_prefix("www.example.com") == "www."
    assert matcher.longest_prefix("m.example.com") == "m."
    assert matcher.longest_prefix("test.www.example.com") is None
