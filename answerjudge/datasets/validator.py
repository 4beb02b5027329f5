"""
Case-file validator for answerjudge regrading runs.

What this module does:
- Validate a JSON Lines case file (one judging case per line).
- Enforce record rules: "answer" and "guess" are strings, "aliases" (optional)
  is a list of strings, "expected" (optional) is a boolean.
- Count invalid lines, duplicate (answer, guess) pairs and labeled cases;
  compute SHA-256 of the raw file.
- Return a machine-readable dict (for manifests) and provide a pretty one-line summary.

Typical use:
    from answerjudge.datasets import validate_cases, pretty_summary
    rep = validate_cases("data/cases.jsonl")
    print(pretty_summary(rep))
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, List, Optional, Tuple
import hashlib
import json


# -----------------------------
# Dataclasses for structured reports
# -----------------------------

@dataclass
class FileReport:
    """Per-file diagnostics and metadata."""
    path: str            # file path (as given)
    exists: bool         # did the file exist on disk?
    count: int           # number of VALID cases
    sha256: str          # SHA-256 of raw file bytes (empty string if missing)
    unique_count: int    # distinct (answer, guess) pairs among valid cases
    labeled_count: int   # valid cases carrying an "expected" verdict
    invalid_lines: int   # number of invalid lines encountered


@dataclass
class ValidationReport:
    """Top-level validation result for one case file."""
    cases: FileReport
    passed: bool
    issues: List[str]    # human-friendly list of problems (if any)


# -----------------------------
# Helpers
# -----------------------------

def _sha256_file(path: Path) -> str:
    """Compute SHA-256 of a file's raw bytes."""
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def check_case(record) -> Optional[str]:
    """
    Return None if `record` is a usable case, else a short description of
    what is wrong with it.
    """
    if not isinstance(record, dict):
        return "not a JSON object"
    for key in ("answer", "guess"):
        if not isinstance(record.get(key), str):
            return f"'{key}' must be a string"
    aliases = record.get("aliases", [])
    if not isinstance(aliases, list) or not all(isinstance(a, str) for a in aliases):
        return "'aliases' must be a list of strings"
    if "expected" in record and not isinstance(record["expected"], bool):
        return "'expected' must be true or false"
    return None


def _load_and_check(path: Path) -> Tuple[List[Dict], int, List[str]]:
    """
    Parse and validate every line of a case file.

    Rules:
      - one UTF-8 JSON object per line (split on LF only)
      - blank lines are ignored (not counted as invalid)
      - records must pass check_case

    Returns:
      (valid_cases, invalid_count, first_problems)
    """
    valid: List[Dict] = []
    invalid = 0
    problems: List[str] = []

    with path.open("rb") as f:
        for lineno, raw in enumerate(f, start=1):
            try:
                line = raw.decode("utf-8").strip()
            except UnicodeDecodeError:
                problem = "not valid UTF-8"
            else:
                if not line:
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError:
                    problem = "invalid JSON"
                else:
                    problem = check_case(record)
            if problem is None:
                valid.append(record)
            else:
                invalid += 1
                if len(problems) < 5:
                    problems.append(f"line {lineno}: {problem}")

    return valid, invalid, problems


def _as_dict(rep: ValidationReport) -> Dict:
    """Dataclass → plain dict (stable ordering)."""
    return asdict(rep)


# -----------------------------
# Public API
# -----------------------------

def validate_cases(cases_path: str) -> Dict:
    """
    Validate a regrading case file.

    Parameters
    ----------
    cases_path : str
        Path to the JSON Lines case file.

    Returns
    -------
    Dict
        A JSON-serializable dictionary (see ValidationReport schema) with:
          - counts, SHA-256, duplicate/invalid/labeled figures
          - `passed` boolean (strict: requires non-empty and no invalid lines)
          - `issues` (list of strings) to surface any problems
    """
    issues: List[str] = []
    p = Path(cases_path)

    if not p.exists():
        issues.append(f"cases file not found: {cases_path}")
        rep = ValidationReport(
            cases=FileReport(cases_path, False, 0, "", 0, 0, 0),
            passed=False,
            issues=issues,
        )
        return _as_dict(rep)

    cases, invalid, problems = _load_and_check(p)
    pairs = {(c["answer"], c["guess"]) for c in cases}

    report = FileReport(
        path=str(p),
        exists=True,
        count=len(cases),
        sha256=_sha256_file(p),
        unique_count=len(pairs),
        labeled_count=sum(1 for c in cases if "expected" in c),
        invalid_lines=invalid,
    )

    if report.count == 0:
        issues.append("cases file contains 0 valid cases")
    if invalid:
        issues.append(f"cases has {invalid} invalid line(s)")
        issues.extend(problems)
    # Duplicates are reported but do not fail validation
    if report.count != report.unique_count:
        issues.append("cases contains duplicate (answer, guess) pairs")

    passed = report.count > 0 and invalid == 0

    rep = ValidationReport(cases=report, passed=passed, issues=issues)
    return _as_dict(rep)


def pretty_summary(report: Dict) -> str:
    """
    Produce a compact, human-friendly one-liner for console/docs.

    Example:
        cases=120 (uniq=118, labeled=100, sha=abc123...) | invalid=0 | OK
    """
    c = report["cases"]
    status = "OK" if report["passed"] else "FAIL"
    sha = (c.get("sha256") or "")[:12]
    return (
        f"cases={c['count']} (uniq={c['unique_count']}, labeled={c['labeled_count']}, sha={sha}) "
        f"| invalid={c['invalid_lines']} | {status}"
    )
