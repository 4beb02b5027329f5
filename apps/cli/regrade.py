# apps/cli/regrade.py
"""
CLI entry point for regrading stored guesses.

This script:
  1) Validates the case file (prints counts + SHA, flags invalid lines).
  2) Loads the cases and optionally draws a deterministic sample.
  3) Judges every case with a live progress indicator and writes:
       - CSV:  per-case verdicts + similarity diagnostics
       - JSON: manifest with config, case-file hash, metrics, git commit, etc.
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

# Optional rich progress bar
try:
    from tqdm import tqdm  # pip install tqdm
    _HAS_TQDM = True
except ImportError:
    _HAS_TQDM = False

from answerjudge.datasets import validate_cases, pretty_summary, read_cases
from answerjudge.harness import run_case, select_cases, summarize, pretty_metrics
from answerjudge.harness.io import write_csv, write_manifest, timestamp_id, git_commit_or_unknown


def _positive_int(text: str) -> int:
    """argparse type for --sample: an integer >= 1."""
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def main():
    """
    Parse CLI args, validate the case file, regrade with progress, and write outputs.
    """
    ap = argparse.ArgumentParser(description="answerjudge — regrade stored guesses")
    ap.add_argument("--cases", required=True,
                    help="path to a JSON Lines case file ({answer, guess, aliases?, expected?})")
    ap.add_argument("--sample", type=_positive_int,
                    help="regrade only a subset of cases (deterministic by seed)")
    ap.add_argument("--seed", type=int, default=123, help="RNG seed for --sample")
    ap.add_argument("--outdir", default="reports", help="directory for output files")
    ap.add_argument("--strict", action="store_true",
                    help="stop if the case file fails validation")
    ap.add_argument(
        "--progress",
        choices=["auto", "bar", "plain", "off"],
        default="auto",
        help="Show run progress (auto=bar if tqdm available, else plain text)."
    )
    args = ap.parse_args()

    # 1) Validate case file and print a one-liner summary
    rep = validate_cases(args.cases)
    print(pretty_summary(rep))
    for issue in rep["issues"]:
        print(f"  - {issue}")
    if not rep["cases"]["exists"]:
        raise SystemExit(f"Case file not found: {args.cases}")
    if args.strict and not rep["passed"]:
        raise SystemExit("Validation failed — fix the case file before regrading.")

    # 2) Load valid cases (invalid lines were reported above and are skipped)
    cases = select_cases(read_cases(args.cases, skip_invalid=True), args.sample, args.seed)
    total = len(cases)

    # 3) Progress mode
    mode = args.progress
    if mode == "auto":
        mode = "bar" if (_HAS_TQDM and sys.stderr.isatty()) else "plain"

    results = []
    start = time.time()
    last_print = 0.0

    iterator = tqdm(cases, ncols=80, desc="Regrading", unit="case") if mode == "bar" else cases

    # 4) Judge with live progress
    for idx, case in enumerate(iterator, 1):
        results.append(run_case(case))

        if mode == "plain":
            now = time.time()
            if (now - last_print >= 1.0) or (idx == total):
                elapsed = now - start
                rate = (idx / elapsed) if elapsed > 0 else 0.0
                remaining = (total - idx) / rate if rate > 0 else 0.0
                pct = 100.0 * idx / max(1, total)
                sys.stderr.write(
                    f"\r[{idx}/{total}] {pct:5.1f}% | elapsed {elapsed:6.1f}s | ETA {remaining:5.1f}s"
                )
                sys.stderr.flush()
                last_print = now

    if mode == "plain":
        sys.stderr.write("\n")
        sys.stderr.flush()

    # 5) Metrics + outputs (CSV + manifest)
    metrics = summarize(results)
    print(pretty_metrics(metrics))

    run_id = timestamp_id()
    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    csv_path = outdir / f"regrade_{run_id}.csv"
    manifest_path = outdir / f"regrade_{run_id}_manifest.json"

    write_csv(results, str(csv_path))
    manifest = {
        "run_id": run_id,
        "git_commit": git_commit_or_unknown(),
        "config": vars(args),
        "cases": rep,
        "num_cases": len(results),
        "metrics": metrics,
    }
    write_manifest(manifest, str(manifest_path))

    print(f"Wrote: {csv_path}")
    print(f"Wrote: {manifest_path}")


if __name__ == "__main__":
    main()
