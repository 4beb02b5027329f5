# apps/cli/judge.py
"""
Judge a single guess from the command line.

Prints the verdict, the deciding phase with its diagnostics, and the
normalized tokens of both sides (handy when tuning aliases):

    python -m apps.cli.judge --answer "Henry V" --guess "Henry Five" \
        --alias "King Henry V" --alias "Henry the Fifth"

Use --json for a machine-readable Decision.
"""

from __future__ import annotations

import argparse
import json

from answerjudge.engine import NormalizedText, decide, fold_number_words, normalize


def _describe(label: str, norm: NormalizedText) -> str:
    tokens = ", ".join(sorted(norm.token_set)) or "—"
    return f"{label}: normalized='{norm.normalized}' tokens=[{tokens}]"


def main():
    ap = argparse.ArgumentParser(description="answerjudge — judge one guess")
    ap.add_argument("--answer", required=True, help="canonical article title")
    ap.add_argument("--guess", required=True, help="the player's guess")
    ap.add_argument("--alias", action="append", default=[],
                    help="alternate name for the answer (repeatable)")
    ap.add_argument("--json", action="store_true", help="print the decision as JSON")
    args = ap.parse_args()

    decision = decide(args.answer, args.guess, args.alias)

    if args.json:
        print(json.dumps(decision.as_dict(), indent=2, ensure_ascii=False))
        return

    verdict = "Accepted" if decision.accepted else "Rejected"
    print(f"{verdict} [{decision.phase}] {decision.reason}")

    details = decision.details
    if decision.phase == "guard_rails":
        for r in details.reasons:
            print(f"  - {r}")
    elif decision.phase == "fuzzy":
        print(f"  Jaro-Winkler:        {details.jaro_winkler:.4f}")
        print(f"  Damerau-Levenshtein: {details.damerau_levenshtein}")
        print(f"  Token Jaccard:       {details.token_jaccard:.4f}")
        print(f"  Combined score:      {details.combined_score:.4f}")
        print(f"  Rule:                {details.applied_rule}")

    print(_describe("Answer", normalize(fold_number_words(args.answer))))
    print(_describe("Guess ", normalize(fold_number_words(args.guess))))


if __name__ == "__main__":
    main()
