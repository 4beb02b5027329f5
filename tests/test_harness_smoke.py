import argparse
import csv
import json
from pathlib import Path

import pytest
from answerjudge.harness import (
    run_case, run_batch, select_cases, summarize, pretty_metrics, write_csv, write_manifest,
)

CASES = [
    {"answer": "Henry V", "guess": "Henry Five", "aliases": ["Henry the Fifth"], "expected": True},
    {"answer": "Apollo 13", "guess": "April 13", "expected": False},
    {"answer": "Beatles", "guess": "Beetles", "expected": True},
    {"answer": "Cats", "guess": "Bats", "expected": True},       # judge rejects: false negative
    {"answer": "Area 51", "guess": "Area Fifty One"},           # unlabeled
]


def test_run_case_smoke():
    r = run_case(CASES[0])
    assert r["accepted"] is True and r["correct"] is True
    assert r["phase"] == "alias"
    assert r["jaro_winkler"] is None
    assert r["time_ms"] >= 0


def test_run_case_fuzzy_diagnostics():
    r = run_case(CASES[2])
    assert r["phase"] == "fuzzy"
    assert r["applied_rule"] == "mid-length rule"
    assert r["damerau_levenshtein"] == 1


def test_run_case_unlabeled():
    r = run_case(CASES[4])
    assert r["expected"] is None and r["correct"] is None


def test_run_case_rejects_malformed():
    with pytest.raises(ValueError):
        run_case({"answer": "Henry V"})


def test_run_batch_sample_is_deterministic():
    a = run_batch(CASES, sample=3, seed=7)
    b = run_batch(CASES, sample=3, seed=7)
    assert len(a) == 3
    assert [r["guess"] for r in a] == [r["guess"] for r in b]
    assert len(run_batch(CASES)) == len(CASES)


def test_select_cases_sampling():
    assert select_cases(CASES) == CASES
    assert select_cases(CASES, sample=len(CASES) + 3) == CASES
    picked = select_cases(CASES, sample=2, seed=7)
    assert len(picked) == 2
    assert [r["guess"] for r in run_batch(CASES, sample=2, seed=7)] == [c["guess"] for c in picked]


@pytest.mark.parametrize("sample", [0, -1])
def test_select_cases_rejects_non_positive_sample(sample):
    with pytest.raises(ValueError):
        select_cases(CASES, sample=sample)
    with pytest.raises(ValueError):
        run_batch(CASES, sample=sample)


@pytest.mark.parametrize("text", ["0", "-1", "x"])
def test_regrade_cli_rejects_bad_sample(text):
    from apps.cli.regrade import _positive_int
    with pytest.raises((argparse.ArgumentTypeError, ValueError)):
        _positive_int(text)


def test_regrade_cli_accepts_positive_sample():
    from apps.cli.regrade import _positive_int
    assert _positive_int("3") == 3


def test_summarize_metrics():
    s = summarize(run_batch(CASES))
    assert s["num_cases"] == 5
    assert s["num_labeled"] == 4
    assert s["accuracy"] == pytest.approx(0.75)
    assert s["precision"] == pytest.approx(1.0)
    assert s["recall"] == pytest.approx(2 / 3)
    assert s["false_negatives"] == [{"answer": "Cats", "guess": "Bats", "phase": "fuzzy"}]
    assert s["false_positives"] == []
    assert s["phase_counts"] == {"alias": 2, "fuzzy": 2, "guard_rails": 1}
    assert "acc=0.750" in pretty_metrics(s)


def test_summarize_empty():
    s = summarize([])
    assert s["accuracy"] is None and s["time_ms_p50"] == 0.0
    assert "acc=n/a" in pretty_metrics(s)


def test_write_csv_and_manifest(tmp_path: Path):
    results = run_batch(CASES)
    csv_path = write_csv(results, str(tmp_path / "run.csv"))
    with open(csv_path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == len(CASES)
    assert rows[0]["aliases"] == "Henry the Fifth"
    assert rows[4]["expected"] == ""

    manifest_path = write_manifest({"metrics": summarize(results)}, str(tmp_path / "m.json"))
    data = json.loads(Path(manifest_path).read_text(encoding="utf-8"))
    assert data["metrics"]["num_cases"] == 5


def test_write_csv_escapes_formula_like_text(tmp_path: Path):
    r = run_case({"answer": "=SUM(A1)", "guess": "-1"})
    csv_path = write_csv([r], str(tmp_path / "run.csv"))
    with open(csv_path, newline="", encoding="utf-8") as f:
        row = next(csv.DictReader(f))
    assert row["answer"] == "'=SUM(A1)"
    assert row["guess"] == "'-1"
