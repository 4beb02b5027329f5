"""
Answer decision: is this guess the article title (or close enough)?

Three phases, each able to finish the decision:
  1) alias       : normalized guess equals the normalized title or any
                   normalized alias -> accept
  2) guard_rails : any guard rail fails -> reject (fuzzy cannot override)
  3) fuzzy       : Jaro-Winkler, Damerau-Levenshtein and token Jaccard,
                   judged by a rule picked from the longer normalized length

Fuzzy rules (n = max normalized length):
  - n <= 5       short-title rule : (dl <= 1 and jaccard >= 0.85) or jw >= 0.95
  - 5 < n <= 10  mid-length rule  : jw >= 0.91 or dl <= 2 or combined >= 0.91
  - n > 10       long-title rule  : jw >= 0.89 or combined >= 0.89
  where combined = 0.6 * jw + 0.4 * jaccard.

Every call recomputes from scratch; same inputs -> same Decision.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Literal, Sequence, Tuple, Union

from .guard_rails import evaluate_guard_rails
from .normalize import NormalizedText, fold_number_words, normalize
from .similarity import damerau_levenshtein, jaccard, jaro_winkler

Phase = Literal["alias", "guard_rails", "fuzzy"]

SHORT_TITLE_MAX = 5
MID_LENGTH_MAX = 10

JW_WEIGHT = 0.6
JACCARD_WEIGHT = 0.4

RULE_SHORT = "short-title rule"
RULE_MID = "mid-length rule"
RULE_LONG = "long-title rule"

REASON_ALIAS = "Exact match after normalization (or alias)"
REASON_FUZZY_REJECT = "Fuzzy similarity below threshold"


@dataclass(frozen=True)
class AliasDetails:
    phase: Literal["alias"] = "alias"


@dataclass(frozen=True)
class GuardRailDetails:
    reasons: Tuple[str, ...]
    normalized_answer: NormalizedText
    normalized_guess: NormalizedText
    phase: Literal["guard_rails"] = "guard_rails"


@dataclass(frozen=True)
class FuzzyDetails:
    answer_normalized: str
    guess_normalized: str
    jaro_winkler: float
    damerau_levenshtein: int
    token_jaccard: float
    combined_score: float
    applied_rule: str
    phase: Literal["fuzzy"] = "fuzzy"


PhaseDetails = Union[AliasDetails, GuardRailDetails, FuzzyDetails]


@dataclass(frozen=True)
class Decision:
    accepted: bool
    reason: str
    details: PhaseDetails

    @property
    def phase(self) -> Phase:
        return self.details.phase

    def as_dict(self) -> Dict:
        """Plain JSON-friendly dict (sets become sorted lists)."""
        return {
            "accepted": self.accepted,
            "reason": self.reason,
            "phase": self.phase,
            "details": _jsonable(asdict(self.details)),
        }


def _jsonable(value):
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    return value


def _prepare(raw: str) -> NormalizedText:
    return normalize(fold_number_words(raw))


def _fuzzy_rule(n: int, jw: float, dl: int, tok: float, combined: float) -> Tuple[bool, str]:
    """Pick the length bucket and apply its acceptance rule."""
    # Only read in the long branch, where it is always 0.89.
    jw_threshold = 0.93 if n <= MID_LENGTH_MAX else 0.89

    if n <= SHORT_TITLE_MAX:
        return (dl <= 1 and tok >= 0.85) or jw >= 0.95, RULE_SHORT
    if n <= MID_LENGTH_MAX:
        return jw >= 0.91 or dl <= 2 or combined >= 0.91, RULE_MID
    return jw >= jw_threshold or combined >= 0.89, RULE_LONG


def decide(answer: str, guess: str, aliases: Sequence[str] = ()) -> Decision:
    """
    Judge `guess` against the title `answer` and its known `aliases`.

    Args:
      answer  : canonical article title
      guess   : free text typed by the player
      aliases : alternate names; duplicates are harmless

    Returns:
      Decision (never raises for string input, "" included).

    Examples:
      decide("Henry V", "Henry Five", ["Henry the Fifth"]).accepted -> True
      decide("Apollo 13", "April 13", []).accepted                  -> False
    """
    answer_norm = _prepare(answer)
    guess_norm = _prepare(guess)

    # 1) Exact title or alias after normalization
    targets = {answer_norm.normalized}
    targets.update(_prepare(alias).normalized for alias in aliases)
    if guess_norm.normalized in targets:
        return Decision(accepted=True, reason=REASON_ALIAS, details=AliasDetails())

    # 2) Hard vetoes
    guards = evaluate_guard_rails(answer, guess)
    if not guards.passed:
        return Decision(
            accepted=False,
            reason="; ".join(guards.reasons),
            details=GuardRailDetails(
                reasons=guards.reasons,
                normalized_answer=guards.normalized_answer,
                normalized_guess=guards.normalized_guess,
            ),
        )

    # 3) Fuzzy scoring over the normalized forms
    a = answer_norm.normalized
    g = guess_norm.normalized
    jw = jaro_winkler(a, g)
    dl = damerau_levenshtein(a, g)
    tok = jaccard(answer_norm.token_set, guess_norm.token_set)
    combined = JW_WEIGHT * jw + JACCARD_WEIGHT * tok

    accepted, rule = _fuzzy_rule(max(len(a), len(g)), jw, dl, tok, combined)

    return Decision(
        accepted=accepted,
        reason=f"Fuzzy match passed ({rule})" if accepted else REASON_FUZZY_REJECT,
        details=FuzzyDetails(
            answer_normalized=a,
            guess_normalized=g,
            jaro_winkler=jw,
            damerau_levenshtein=dl,
            token_jaccard=tok,
            combined_score=combined,
            applied_rule=rule,
        ),
    )
