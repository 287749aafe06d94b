import pytest

from authservice.trigger_rules import (
    StringMatch,
    TriggerRule,
    match_string,
    trigger_rule_matches_path,
)


def test_excluded():
    rules = [
        TriggerRule(
            excluded_paths=[StringMatch(exact="/good-x"), StringMatch(exact="/allow-x")]
        )
    ]
    assert not trigger_rule_matches_path("/good-x", rules)
    assert not trigger_rule_matches_path("/allow-x", rules)
    assert trigger_rule_matches_path("/good-1", rules)
    assert trigger_rule_matches_path("/allow-1", rules)
    assert trigger_rule_matches_path("/other", rules)


def test_included():
    rules = [
        TriggerRule(
            included_paths=[StringMatch(prefix="/good"), StringMatch(prefix="/allow")]
        )
    ]
    assert trigger_rule_matches_path("/good-x", rules)
    assert trigger_rule_matches_path("/allow-x", rules)
    assert trigger_rule_matches_path("/good-2", rules)
    assert trigger_rule_matches_path("/allow-1", rules)
    assert not trigger_rule_matches_path("/other", rules)


def test_both_included_and_excluded():
    rules = [
        TriggerRule(
            excluded_paths=[StringMatch(exact="/good-x"), StringMatch(exact="/allow-x")],
            included_paths=[StringMatch(prefix="/good"), StringMatch(prefix="/allow")],
        )
    ]
    assert not trigger_rule_matches_path("/good-x", rules)
    assert not trigger_rule_matches_path("/allow-x", rules)
    assert trigger_rule_matches_path("/good-1", rules)
    assert trigger_rule_matches_path("/allow-1", rules)
    assert not trigger_rule_matches_path("/other", rules)


def test_always_trigger_when_path_is_empty():
    assert trigger_rule_matches_path("", [])
    rules = [TriggerRule(included_paths=[StringMatch(exact="/x")])]
    assert trigger_rule_matches_path("", rules)


def test_always_trigger_when_no_rules():
    assert trigger_rule_matches_path("/test", [])


def test_trigger_when_any_rule_matches_with_multiple_rules():
    rules = [TriggerRule(excluded_paths=[StringMatch(exact="/hello")])]
    assert not trigger_rule_matches_path("/hello", rules)
    assert trigger_rule_matches_path("/other", rules)

    rules.append(TriggerRule(included_paths=[StringMatch(exact="/hello")]))
    assert trigger_rule_matches_path("/hello", rules)
    assert trigger_rule_matches_path("/other", rules)


def test_match_string_empty_matches_nothing():
    assert not match_string("", StringMatch())


def test_match_string_exact():
    match = StringMatch(exact="exact")
    assert match_string("exact", match)
    assert not match_string("exac", match)
    assert not match_string("exacy", match)


def test_match_string_prefix():
    match = StringMatch(prefix="prefix")
    assert match_string("prefix-1", match)
    assert match_string("prefix", match)
    assert not match_string("prefi", match)
    assert not match_string("prefiy", match)


def test_match_string_suffix():
    match = StringMatch(suffix="suffix")
    assert match_string("1-suffix", match)
    assert match_string("suffix", match)
    assert not match_string("suffi", match)
    assert not match_string("suffiy", match)


def test_match_string_regex():
    match = StringMatch(regex=".+abc.+")
    assert match_string("1-abc-1", match)
    assert not match_string("1-abc", match)
    assert not match_string("abc-1", match)
    assert not match_string("1-ac-1", match)


def test_empty_exact_still_matches_empty_string():
    assert match_string("", StringMatch(exact=""))
    assert not match_string("x", StringMatch(exact=""))


def test_string_match_rejects_several_kinds():
    with pytest.raises(ValueError):
        StringMatch(exact="a", prefix="b")