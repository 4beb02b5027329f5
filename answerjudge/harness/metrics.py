"""
Summary metrics for a regrading run.

Given the rows produced by harness.run_case, report how the judge did
against the human labels ("expected") where present:
  - accuracy  : correct / labeled
  - precision : true accepts / all accepts (labeled only)
  - recall    : true accepts / all expected accepts
plus per-phase counts and latency percentiles over every row.
"""

from __future__ import annotations
from collections import Counter
from typing import Dict, List

import numpy as np


def _ratio(num: int, den: int) -> float | None:
    return num / den if den else None


def summarize(results: List[Dict]) -> Dict:
    """Return a JSON-serializable summary dict for a batch of results."""
    labeled = [r for r in results if r.get("expected") is not None]

    accepted = np.array([bool(r["accepted"]) for r in labeled], dtype=bool)
    expected = np.array([bool(r["expected"]) for r in labeled], dtype=bool)

    tp = int(np.sum(accepted & expected))
    fp = int(np.sum(accepted & ~expected))
    fn = int(np.sum(~accepted & expected))
    correct = int(np.sum(accepted == expected))

    times = np.array([float(r["time_ms"]) for r in results], dtype=float)
    if times.size:
        p50, p95 = (float(x) for x in np.percentile(times, [50, 95]))
    else:
        p50 = p95 = 0.0

    return {
        "num_cases": len(results),
        "num_accepted": sum(1 for r in results if r["accepted"]),
        "num_labeled": len(labeled),
        "accuracy": _ratio(correct, len(labeled)),
        "precision": _ratio(tp, tp + fp),
        "recall": _ratio(tp, tp + fn),
        "phase_counts": dict(sorted(Counter(r["phase"] for r in results).items())),
        "time_ms_p50": p50,
        "time_ms_p95": p95,
        "false_positives": [
            {"answer": r["answer"], "guess": r["guess"], "phase": r["phase"]}
            for r in labeled if r["accepted"] and not r["expected"]
        ],
        "false_negatives": [
            {"answer": r["answer"], "guess": r["guess"], "phase": r["phase"]}
            for r in labeled if not r["accepted"] and r["expected"]
        ],
    }


def _fmt(x: float | None) -> str:
    return "n/a" if x is None else f"{x:.3f}"


def pretty_metrics(summary: Dict) -> str:
    """
    One-line console summary.

    Example:
        cases=120 accepted=64 | labeled=100 acc=0.970 prec=0.984 rec=0.953 | p50=0.041ms p95=0.120ms
    """
    return (
        f"cases={summary['num_cases']} accepted={summary['num_accepted']} "
        f"| labeled={summary['num_labeled']} acc={_fmt(summary['accuracy'])} "
        f"prec={_fmt(summary['precision'])} rec={_fmt(summary['recall'])} "
        f"| p50={summary['time_ms_p50']:.3f}ms p95={summary['time_ms_p95']:.3f}ms"
    )
