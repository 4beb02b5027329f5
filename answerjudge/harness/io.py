"""
I/O utilities for regrading runs.

Responsibilities:
- write_csv:     flatten per-case results into a tidy CSV (one row per case).
- write_manifest:dump a JSON manifest with config, hashes, and metadata.
- timestamp_id:  stable UTC run ID string.
- git_commit_or_unknown: best-effort short commit hash for reproducibility.

Notes:
- Text cells starting with '=', '+', '-' or '@' are prefixed with an
  apostrophe so spreadsheet apps don't evaluate guesses as formulas.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List
import csv
import json
import subprocess
import datetime as dt

ALIAS_SEPARATOR = " | "

FIELDS = [
    "answer", "guess", "aliases", "expected", "accepted", "correct", "phase",
    "applied_rule", "jaro_winkler", "damerau_levenshtein", "token_jaccard",
    "combined_score", "time_ms", "reason",
]


def _excel_safe(text: str) -> str:
    """
    Prefix with an apostrophe so spreadsheet apps treat it as text.
    Example: "-1 Ramsey" -> "'-1 Ramsey"
    """
    return "'" + text if text and text[0] in "=+-@" else text


def _round(x, ndigits: int = 4):
    return "" if x is None else round(float(x), ndigits)


def write_csv(results: List[Dict], path: str) -> str:
    """
    Serialize a batch of regrading results to CSV.

    Schema (columns): see FIELDS. Aliases are joined with " | ";
    missing values (unlabeled cases, non-fuzzy diagnostics) are empty cells.

    Args:
      results  : list of dicts returned by harness.run_case.
      path     : output CSV path.

    Returns:
      The path written (string).
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=FIELDS)
        w.writeheader()

        for r in results:
            dl = r.get("damerau_levenshtein")
            row = {
                "answer": _excel_safe(r["answer"]),
                "guess": _excel_safe(r["guess"]),
                "aliases": _excel_safe(ALIAS_SEPARATOR.join(r.get("aliases", []))),
                "expected": "" if r.get("expected") is None else r["expected"],
                "accepted": r["accepted"],
                "correct": "" if r.get("correct") is None else r["correct"],
                "phase": r["phase"],
                "applied_rule": r.get("applied_rule") or "",
                "jaro_winkler": _round(r.get("jaro_winkler")),
                "damerau_levenshtein": "" if dl is None else dl,
                "token_jaccard": _round(r.get("token_jaccard")),
                "combined_score": _round(r.get("combined_score")),
                "time_ms": round(float(r["time_ms"]), 3),
                "reason": r["reason"],
            }
            w.writerow(row)

    return str(p)


def write_manifest(manifest: Dict, path: str) -> str:
    """
    Write a JSON manifest with run configuration and dataset validation summary.

    Typical keys:
      - run_id, git_commit
      - config: CLI args (cases, sample, seed, outdir)
      - cases: output of datasets.validate_cases(...)
      - metrics: output of harness.summarize(...)
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2, ensure_ascii=False)
    return str(p)


def timestamp_id() -> str:
    """
    Return a compact UTC timestamp suitable for filenames, e.g. 20250820T024121Z.
    """
    return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def git_commit_or_unknown() -> str:
    """
    Best-effort short git hash of the current repo state.
    Returns 'unknown' if git is not available or the call fails.
    """
    try:
        return (
            subprocess.check_output(
                ["git", "rev-parse", "--short", "HEAD"],
                stderr=subprocess.DEVNULL,
            )
            .decode()
            .strip()
        )
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
