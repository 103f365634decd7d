import math

from menu_engine.candidates import CandidateStore
from menu_engine.config import MenuConfig
from menu_engine.matching import (
    FuzzyPolicy,
    MatchList,
    MatchPolicy,
    Matcher,
    SubstringPolicy,
    build_policy,
    fuzzy_score,
    tokenize,
)

FRUIT = ["apple", "banana", "apply", "ample"]


def make_matcher(lines, policy) -> Matcher:
    return Matcher(CandidateStore.from_lines(lines), policy)


def texts(matcher: Matcher, matches: MatchList) -> list[str]:
    return [matcher.store[index].text for index in matches]


def test_empty_query_matches_everything_in_input_order() -> None:
    matcher = make_matcher(FRUIT, FuzzyPolicy())

    matches = matcher.rebuild("")

    assert matches.indices == (0, 1, 2, 3)
    assert matches.query == ""


def test_substring_prefix_tier() -> None:
    matcher = make_matcher(["apple", "banana", "apply"], SubstringPolicy())

    assert texts(matcher, matcher.rebuild("ap")) == ["apple", "apply"]


def test_substring_tiers_exact_then_prefix_then_rest() -> None:
    matcher = make_matcher(["grape", "apple", "ap"], SubstringPolicy())

    assert texts(matcher, matcher.rebuild("ap")) == ["ap", "apple", "grape"]


def test_substring_requires_every_token() -> None:
    lines = ["bar foo", "foobar", "foo x bar", "baz"]
    matcher = make_matcher(lines, SubstringPolicy())

    result = texts(matcher, matcher.rebuild("foo bar"))

    assert result == ["foobar", "foo x bar", "bar foo"]


def test_substring_case_folding() -> None:
    sensitive = make_matcher(["Apple", "apple"], SubstringPolicy())
    insensitive = make_matcher(
        ["Apple", "apple"], SubstringPolicy(case_sensitive=False)
    )

    assert texts(sensitive, sensitive.rebuild("AP")) == []
    assert texts(insensitive, insensitive.rebuild("AP")) == ["Apple", "apple"]


def test_query_of_only_delimiters_keeps_everything() -> None:
    matcher = make_matcher(FRUIT, SubstringPolicy())

    assert len(matcher.rebuild("   ")) == len(FRUIT)


def test_fuzzy_subsequence_with_stable_ties() -> None:
    matcher = make_matcher(FRUIT, FuzzyPolicy())

    assert texts(matcher, matcher.rebuild("ae")) == ["apple", "ample"]


def test_fuzzy_prefers_tighter_and_earlier_matches() -> None:
    matcher = make_matcher(["xaxxb", "axxb", "ab"], FuzzyPolicy())

    assert texts(matcher, matcher.rebuild("ab")) == ["ab", "axxb", "xaxxb"]


def test_fuzzy_records_scores_on_candidates() -> None:
    matcher = make_matcher(["axb"], FuzzyPolicy())

    matcher.rebuild("ab")

    assert math.isclose(matcher.store[0].score, math.log(2) + 0)


def test_fuzzy_score_values() -> None:
    assert fuzzy_score("ae", "banana") is None
    assert math.isclose(fuzzy_score("ae", "apple"), math.log(2) + 2)
    assert math.isclose(fuzzy_score("b", "ab"), math.log(3) - 1)
    assert fuzzy_score("", "anything") == 0.0


def test_fuzzy_case_insensitive() -> None:
    matcher = make_matcher(["README", "notes"], FuzzyPolicy(case_sensitive=False))

    assert texts(matcher, matcher.rebuild("rdm")) == ["README"]


def test_tokenize_splits_on_every_delimiter() -> None:
    assert tokenize("  a  b ") == ["a", "b"]
    assert tokenize("a,b c", " ,") == ["a", "b", "c"]
    assert tokenize("") == []


def test_match_list_neighbours() -> None:
    matches = MatchList(indices=(4, 2, 7))

    assert matches.head == 0
    assert matches.tail == 2
    assert matches.successor(1) == 2
    assert matches.successor(2) is None
    assert matches.predecessor(0) is None
    assert matches.predecessor(2) == 1
    assert MatchList().head is None
    assert not MatchList()


def test_build_policy_follows_config() -> None:
    fuzzy = build_policy(MenuConfig(lines=5))
    substring = build_policy(
        MenuConfig(lines=5, policy=MatchPolicy.SUBSTRING, case_sensitive=False)
    )

    assert isinstance(fuzzy, FuzzyPolicy)
    assert isinstance(substring, SubstringPolicy)
    assert substring.case_sensitive is False
