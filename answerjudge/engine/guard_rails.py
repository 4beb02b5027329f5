"""
Guard rails: hard vetoes applied before fuzzy scoring.

Fuzzy metrics happily call "Henry VI" and "Henry VIII" near-identical, and
"Apollo 13" vs "April 13" share the only token that is spelled the same.
These checks reject such lexically close but semantically wrong guesses.

Checks (independent; reasons accumulate):
  1) monarch numeral  : guess starts with a monarch first name -> the numbers
                        on both sides must be the same set
  2) cross-consistency: both sides have numbers -> same set, and at least one
                        shared or near-identical non-numeric word
  3) single head word : answer is "<word> <number>" -> the guess needs a word
                        close to that head word
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, List, Sequence, Tuple

from .normalize import NormalizedText, fold_number_words, normalize, strip_diacritics
from .similarity import best_token_similarity

MONARCH_FIRST_NAMES: FrozenSet[str] = frozenset({
    "henry", "louis", "edward", "philip", "charles", "john", "george",
    "james", "william", "richard", "mary", "elizabeth", "victoria",
})

# Minimum best-token Jaro-Winkler when numbers agree but no word is shared.
SHARED_TERM_THRESHOLD = 0.93
# Minimum best-token Jaro-Winkler for "<word> <number>" answers.
HEAD_WORD_THRESHOLD = 0.90

REASON_MONARCH = "Monarch numeral mismatch (e.g., VI vs VIII)"
REASON_NUMERIC = "Numeric tokens differ (e.g., 1984 vs 1990)"
REASON_SHARED_TERM = "Needs a matching non-numeric term; numeric match alone is insufficient"
REASON_HEAD_WORD = "Head word too different"


@dataclass(frozen=True)
class GuardRailResult:
    passed: bool
    reasons: Tuple[str, ...]
    normalized_answer: NormalizedText
    normalized_guess: NormalizedText


def _number_set(tokens: Sequence[str]) -> List[str]:
    return sorted(set(tokens))


def _first_raw_token(raw: str) -> str:
    # No punctuation cleanup or number folding: "Henry," is not "henry".
    parts = strip_diacritics(raw.lower().strip()).split()
    return parts[0] if parts else ""


def evaluate_guard_rails(answer_raw: str, guess_raw: str) -> GuardRailResult:
    """
    Run every guard rail on a raw (answer, guess) pair.

    Returns:
      GuardRailResult with passed=True and no reasons, or passed=False and
      one reason per failed check (in check order).

    Examples:
      evaluate_guard_rails("Henry VI", "Henry VIII").reasons
        -> ("Monarch numeral mismatch (e.g., VI vs VIII)", "Numeric tokens differ (e.g., 1984 vs 1990)")
      evaluate_guard_rails("Apollo 13", "April 13").reasons
        -> ("Needs a matching non-numeric term; ...", "Head word too different")
    """
    answer = normalize(fold_number_words(answer_raw))
    guess = normalize(fold_number_words(guess_raw))

    answer_numbers = _number_set(answer.numeric_tokens)
    guess_numbers = _number_set(guess.numeric_tokens)

    reasons: List[str] = []

    # 1) Regnal numbers are load-bearing: "Henry V" != "Henry VI".
    if _first_raw_token(guess_raw) in MONARCH_FIRST_NAMES:
        if (answer_numbers or guess_numbers) and answer_numbers != guess_numbers:
            reasons.append(REASON_MONARCH)

    # 2) Numbers on both sides must agree, and agreeing numbers are not enough.
    if answer_numbers and guess_numbers:
        if answer_numbers != guess_numbers:
            reasons.append(REASON_NUMERIC)
        else:
            shared = sum(1 for t in answer.non_numeric_tokens if t in guess.non_numeric_tokens)
            best = best_token_similarity(answer.non_numeric_tokens, guess.non_numeric_tokens)
            if shared == 0 and best < SHARED_TERM_THRESHOLD:
                reasons.append(REASON_SHARED_TERM)

    # 3) "<word> <number>" answers: the word carries the identity.
    if len(answer.non_numeric_tokens) == 1 and len(answer.numeric_tokens) == 1:
        best = best_token_similarity(answer.non_numeric_tokens, guess.non_numeric_tokens)
        if best < HEAD_WORD_THRESHOLD:
            reasons.append(REASON_HEAD_WORD)

    return GuardRailResult(
        passed=not reasons,
        reasons=tuple(reasons),
        normalized_answer=answer,
        normalized_guess=guess,
    )
