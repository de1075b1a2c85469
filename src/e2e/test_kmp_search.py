# src/e2e/test_kmp_search.py

import pytest

from docsearch.kmp import build_failure_table, compile_pattern, search, search_pattern


def _brute_positions(text: str, pattern: str) -> list[int]:
    m = len(pattern)
    return [i for i in range(len(text) - m + 1) if text[i:i + m] == pattern]


def test_overlapping_matches_are_counted():
    res = search("aaaa", "aa")
    assert res.count == 3
    assert res.positions == [0, 1, 2]
    assert search("aaa", "aa").count == 2


def test_positions_capped_but_count_is_not():
    res = search("abababab", "ab", max_positions=2)
    assert res.count == 4
    assert res.positions == [0, 2]


def test_raising_cap_only_changes_retained_positions():
    text = "the cat sat on the mat with the hat " * 5
    counts = set()
    for cap in (0, 1, 3, 12, 100):
        res = search(text, "the", max_positions=cap)
        counts.add(res.count)
        full = _brute_positions(text, "the")
        assert res.positions == full[:cap]
    assert counts == {15}


@pytest.mark.parametrize("text,pattern", [
    ("", "a"),
    ("abc", ""),
    ("ab", "abc"),
    ("", ""),
])
def test_empty_or_too_long_pattern_is_empty_result(text, pattern):
    res = search(text, pattern)
    assert res.count == 0 and res.positions == []


@pytest.mark.parametrize("text,pattern", [
    ("abracadabra", "abra"),
    ("aabaabaabaab", "aabaab"),
    ("mississippi", "issi"),
    ("xyxxyxyxyyxyxyxyyxyxyxx", "xyxyyxyxyxx"),
    ("no match here", "zzz"),
])
def test_agrees_with_brute_force(text, pattern):
    res = search(text, pattern, max_positions=1000)
    expected = _brute_positions(text, pattern)
    assert res.count == len(expected)
    assert res.positions == expected


def test_comparison_is_exact():
    assert search("Hello", "hello").count == 0
    assert search("Hello", "Hello").count == 1


def test_precomputed_table_gives_same_result():
    text, pat = "abcabcabcab", "abcab"
    assert search(text, pat, build_failure_table(pat)) == search(text, pat)
    assert search_pattern(text, compile_pattern(pat)) == search(text, pat)


def test_negative_cap_rejected():
    with pytest.raises(ValueError):
        search("abc", "a", max_positions=-1)


def test_default_cap_comes_from_config():
    from docsearch import config as CFG
    res = search("a" * 50, "a")
    assert res.count == 50
    assert len(res.positions) == CFG.MAX_POSITIONS
