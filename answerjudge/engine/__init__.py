from .normalize import NormalizedText, normalize, fold_number_words
from .similarity import jaro_winkler, damerau_levenshtein, jaccard, best_token_similarity
from .guard_rails import GuardRailResult, evaluate_guard_rails
from .decision import Decision, AliasDetails, GuardRailDetails, FuzzyDetails, decide
from .validation import validate_guess

__all__ = [
    "decide", "validate_guess", "evaluate_guard_rails",
    "normalize", "fold_number_words",
    "jaro_winkler", "damerau_levenshtein", "jaccard", "best_token_similarity",
    "NormalizedText", "GuardRailResult", "Decision",
    "AliasDetails", "GuardRailDetails", "FuzzyDetails",
]
