"""
Regrading harness core primitives.

- run_case:  judge a single stored guess and flatten the decision into a row.
- select_cases: deterministic seeded sample shared by run_batch and the CLI.
- run_batch: judge many cases in sequence (optionally a seeded sample).

These functions are intentionally UI-agnostic so they can be reused by
a CLI app, a notebook, or future services without changes.
"""

from __future__ import annotations
import random
import time
from typing import Dict, Iterable, List

from answerjudge.datasets import check_case
from answerjudge.engine import decide

# Diagnostic columns copied from fuzzy-phase decisions (None otherwise).
FUZZY_FIELDS = ("jaro_winkler", "damerau_levenshtein", "token_jaccard",
                "combined_score", "applied_rule")


def run_case(case: Dict) -> Dict:
    """
    Judge one case: {"answer", "guess", "aliases"?, "expected"?}.

    Raises:
        ValueError if the case record is malformed (see datasets.check_case).

    Returns:
        dict with keys:
            answer, guess, aliases, expected (bool | None), accepted (bool),
            correct (bool | None; None when the case is unlabeled),
            phase, reason, time_ms, plus the FUZZY_FIELDS diagnostics
    """
    problem = check_case(case)
    if problem is not None:
        raise ValueError(f"Malformed case ({problem}): {case!r}")

    aliases = list(case.get("aliases", []))
    expected = case.get("expected")

    t0 = time.perf_counter_ns()
    decision = decide(case["answer"], case["guess"], aliases)
    t1 = time.perf_counter_ns()

    row = {
        "answer": case["answer"],
        "guess": case["guess"],
        "aliases": aliases,
        "expected": expected,
        "accepted": decision.accepted,
        "correct": None if expected is None else decision.accepted == expected,
        "phase": decision.phase,
        "reason": decision.reason,
        "time_ms": (t1 - t0) / 1_000_000.0,
    }
    for field in FUZZY_FIELDS:
        row[field] = getattr(decision.details, field, None)
    return row


def select_cases(
        cases: Iterable[Dict],
        sample: int | None = None,
        seed: int | None = None,
) -> List[Dict]:
    """
    Deterministic sample without replacement.

    Returns every case when 'sample' is None or not smaller than the number of
    cases; otherwise a seeded shuffle cut down to 'sample' cases.

    Raises:
        ValueError if 'sample' is given and is less than 1.
    """
    pool = list(cases)
    if sample is None:
        return pool
    if sample < 1:
        raise ValueError(f"sample must be at least 1, got {sample}")
    if sample < len(pool):
        rng = random.Random(seed)
        rng.shuffle(pool)
        pool = pool[:sample]
    return pool


def run_batch(
        cases: Iterable[Dict],
        *,
        sample: int | None = None,
        seed: int | None = None,
) -> List[Dict]:
    """
    Judge many cases back-to-back.

    The cases are first passed through select_cases(sample, seed); output
    order follows the (possibly shuffled) case order.
    """
    return [run_case(c) for c in select_cases(cases, sample, seed)]
