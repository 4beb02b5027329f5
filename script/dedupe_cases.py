"""
Remove duplicate cases from a JSON Lines case file.

Features:
- Two cases are duplicates when their answers, guesses and alias sets
  normalize to the same text ("Henry V" / "henry 5th" count as one) and they
  carry the same "expected" label, so "near-identical" stored guesses are
  only regraded once. Cases that differ in aliases or label are all kept.
- Preserves original order by default (stable dedupe); the first case wins.
- Optional --exact mode compares raw strings (and alias order) instead.
- Overwrite in place by default, or write to a separate --out path.

Usage:
    python -m script.dedupe_cases --in data/cases.jsonl --out data/cases_dedup.jsonl
"""

import argparse
from pathlib import Path

from answerjudge.datasets import read_cases, write_cases
from answerjudge.engine import fold_number_words, normalize


def _norm(text: str) -> str:
    return normalize(fold_number_words(text)).normalized


def normalized_key(case: dict) -> tuple:
    return (
        _norm(case["answer"]),
        _norm(case["guess"]),
        tuple(sorted({_norm(a) for a in case.get("aliases", [])})),
        case.get("expected"),
    )


def exact_key(case: dict) -> tuple:
    return case["answer"], case["guess"], tuple(case.get("aliases", [])), case.get("expected")


def unique_cases(cases: list[dict], key=normalized_key) -> list[dict]:
    seen, out = set(), []
    for c in cases:
        k = key(c)
        if k not in seen:
            seen.add(k)
            out.append(c)
    return out


def main():
    ap = argparse.ArgumentParser(description="Remove duplicate cases from a case file.")
    ap.add_argument("--in", dest="inp", required=True, help="input .jsonl case file")
    ap.add_argument("--out", dest="out", help="output file (default: overwrite input)")
    ap.add_argument("--exact", action="store_true", help="compare raw answer/guess strings")
    args = ap.parse_args()

    inp = Path(args.inp)
    outp = Path(args.out) if args.out else inp

    cases = read_cases(inp)
    out = unique_cases(cases, key=exact_key if args.exact else normalized_key)

    write_cases(out, outp)
    print(f"Input: {inp} ({len(cases)} cases) → Output: {outp} ({len(out)} unique)")

if __name__ == "__main__":
    main()
