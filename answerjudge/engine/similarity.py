"""
String and token-set similarity metrics used by the judge.

  - jaro_winkler          : [0, 1], rewards shared prefixes (typos late in a word)
  - damerau_levenshtein   : edit distance; insert/delete/substitute/adjacent swap
  - jaccard               : |A & B| / |A | B| over token sets
  - best_token_similarity : max Jaro-Winkler over all token pairs

All functions are pure and deterministic, and accept empty inputs.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

WINKLER_SCALING = 0.1
WINKLER_MAX_PREFIX = 4


def jaro_winkler(left: str, right: str) -> float:
    """
    Jaro-Winkler similarity.

    Conventions:
      - either string empty -> 0.0 (including both empty)
      - equal strings       -> 1.0

    Examples:
      jaro_winkler("martha", "marhta") -> ~0.961
      jaro_winkler("apollo", "april")  -> 0.76
    """
    if not left or not right:
        return 0.0
    if left == right:
        return 1.0

    n_left = len(left)
    n_right = len(right)
    window = max(0, max(n_left, n_right) // 2 - 1)

    left_matched = [False] * n_left
    right_matched = [False] * n_right

    # Pass 1: greedy matching inside the search window
    matches = 0
    for i, ch in enumerate(left):
        start = max(0, i - window)
        end = min(i + window + 1, n_right)
        for j in range(start, end):
            if right_matched[j] or right[j] != ch:
                continue
            left_matched[i] = True
            right_matched[j] = True
            matches += 1
            break

    if matches == 0:
        return 0.0

    # Pass 2: count matched characters that appear in a different order
    transpositions = 0
    k = 0
    for i, ch in enumerate(left):
        if not left_matched[i]:
            continue
        while not right_matched[k]:
            k += 1
        if ch != right[k]:
            transpositions += 1
        k += 1

    m = float(matches)
    jaro = (m / n_left + m / n_right + (m - transpositions / 2.0) / m) / 3.0

    prefix = 0
    for a, b in zip(left[:WINKLER_MAX_PREFIX], right[:WINKLER_MAX_PREFIX]):
        if a != b:
            break
        prefix += 1

    return jaro + prefix * WINKLER_SCALING * (1.0 - jaro)


def damerau_levenshtein(left: str, right: str) -> int:
    """
    Unrestricted Damerau-Levenshtein distance.

    Insertions, deletions, substitutions and transpositions of adjacent
    characters each cost 1. Uses the last-row-seen table `da` so a swap can
    be charged even when other edits sit between the swapped characters.

    Examples:
      damerau_levenshtein("ca", "ac")    -> 1
      damerau_levenshtein("ca", "abc")   -> 2
      damerau_levenshtein("henry", "hrney") -> 2
    """
    n_left = len(left)
    n_right = len(right)
    infinite = n_left + n_right

    # Row index (1-based) of the last occurrence of each character in `left`.
    da: Dict[str, int] = {}

    # (n_left + 2) x (n_right + 2); row/col 0 hold the sentinel.
    d: List[List[int]] = [[0] * (n_right + 2) for _ in range(n_left + 2)]
    d[0][0] = infinite
    for i in range(n_left + 1):
        d[i + 1][0] = infinite
        d[i + 1][1] = i
    for j in range(n_right + 1):
        d[0][j + 1] = infinite
        d[1][j + 1] = j

    for i in range(1, n_left + 1):
        db = 0
        for j in range(1, n_right + 1):
            i1 = da.get(right[j - 1], 0)
            j1 = db
            cost = 0 if left[i - 1] == right[j - 1] else 1
            if cost == 0:
                db = j
            d[i + 1][j + 1] = min(
                d[i][j] + cost,                                  # substitution
                d[i + 1][j] + 1,                                 # insertion
                d[i][j + 1] + 1,                                 # deletion
                d[i1][j1] + (i - i1 - 1) + 1 + (j - j1 - 1),     # transposition
            )
        da[left[i - 1]] = i

    return d[n_left + 1][n_right + 1]


def jaccard(set_a: Iterable[str], set_b: Iterable[str]) -> float:
    """Jaccard index of two token collections; two empty sets count as identical (1.0)."""
    a = set(set_a)
    b = set(set_b)
    union = a | b
    if not union:
        return 1.0
    return len(a & b) / len(union)


def best_token_similarity(tokens_a: Sequence[str], tokens_b: Sequence[str]) -> float:
    """
    Highest Jaro-Winkler score over the cross product of two token lists.

    Answers "is there at least one close word in common?" without requiring
    exact equality. Returns 0.0 if either side has no tokens.
    """
    best = 0.0
    for a in tokens_a:
        for b in tokens_b:
            best = max(best, jaro_winkler(a, b))
    return best
