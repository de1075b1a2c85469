"""
Knuth-Morris-Pratt substring matching.

``build_failure_table`` preprocesses a pattern once; ``search`` then scans a
text in O(n + m), counting every (possibly overlapping) occurrence and keeping
the first few start offsets for snippet generation.
"""
from __future__ import annotations
from typing import List, Optional, Sequence

from . import config as CFG
from .models import MatchSet, Pattern

def build_failure_table(pattern: str) -> List[int]:
    """
    failure[i] = length of the longest proper prefix of pattern that is also
    a suffix of pattern[:i+1]. Empty pattern -> [].
    """
    m = len(pattern)
    failure = [0] * m
    length = 0
    i = 1
    while i < m:
        if pattern[i] == pattern[length]:
            length += 1
            failure[i] = length
            i += 1
        elif length != 0:
            length = failure[length - 1]   # fall back, do not advance i
        else:
            failure[i] = 0
            i += 1
    return failure

def compile_pattern(text: str) -> Pattern:
    return Pattern(text=text, failure=tuple(build_failure_table(text)))

def search(text: str,
           pattern: str,
           failure_table: Optional[Sequence[int]] = None,
           max_positions: int = CFG.MAX_POSITIONS) -> MatchSet:
    """
    Count occurrences of pattern in text, overlaps included ("aa" in "aaa" -> 2).

    Only the first ``max_positions`` start offsets are retained; ``count`` is
    always the true total. Comparison is exact: callers fold case beforehand.
    """
    if max_positions < 0:
        raise ValueError(f"max_positions must be >= 0, got {max_positions}")
    n, m = len(text), len(pattern)
    if m == 0 or m > n:
        return MatchSet(count=0, positions=[])

    failure = failure_table if failure_table is not None else build_failure_table(pattern)
    positions: List[int] = []
    count = 0
    i = j = 0
    while i < n:
        if text[i] == pattern[j]:
            i += 1
            j += 1
            if j == m:
                count += 1
                if len(positions) < max_positions:
                    positions.append(i - j)
                j = failure[j - 1]
        elif j != 0:
            j = failure[j - 1]
        else:
            i += 1
    return MatchSet(count=count, positions=positions)

def search_pattern(text: str, pattern: Pattern, max_positions: int = CFG.MAX_POSITIONS) -> MatchSet:
    """Same as search(), with a precompiled Pattern."""
    return search(text, pattern.text, pattern.failure, max_positions=max_positions)
