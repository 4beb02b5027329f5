import json
from pathlib import Path

import pytest
from answerjudge.datasets import validate_cases, pretty_summary, read_cases, write_cases, read_lines, write_lines


def _write(p: Path, records):
    p.write_text("\n".join(json.dumps(r) for r in records) + "\n", encoding="utf-8")


def test_validate_cases_happy_path(tmp_path: Path):
    cases = tmp_path / "cases.jsonl"
    _write(cases, [
        {"answer": "Henry V", "guess": "Henry Five", "aliases": ["Henry the Fifth"], "expected": True},
        {"answer": "Apollo 13", "guess": "April 13", "expected": False},
        {"answer": "Area 51", "guess": "Area Fifty One"},
    ])

    rep = validate_cases(str(cases))
    assert rep["passed"] is True
    assert rep["cases"]["count"] == 3
    assert rep["cases"]["labeled_count"] == 2
    assert len(rep["cases"]["sha256"]) == 64
    s = pretty_summary(rep)
    assert "cases=3" in s and "labeled=2" in s and s.endswith("OK")


def test_validate_cases_flags_errors(tmp_path: Path):
    cases = tmp_path / "cases.jsonl"
    cases.write_text(
        '{"answer": "Henry V", "guess": "Henry Five"}\n'
        'not json\n'
        '{"answer": "Henry V"}\n'
        '{"answer": "Henry V", "guess": "x", "aliases": "Henry the Fifth"}\n'
        '{"answer": "Henry V", "guess": "x", "expected": "yes"}\n'
        '\n',
        encoding="utf-8",
    )

    rep = validate_cases(str(cases))
    assert rep["passed"] is False
    assert rep["cases"]["count"] == 1
    assert rep["cases"]["invalid_lines"] == 4
    assert any("invalid" in msg for msg in rep["issues"])
    assert any(msg.startswith("line 2:") for msg in rep["issues"])
    assert pretty_summary(rep).endswith("FAIL")


def test_validate_cases_duplicates_are_reported_not_fatal(tmp_path: Path):
    cases = tmp_path / "cases.jsonl"
    _write(cases, [{"answer": "Cats", "guess": "Bats"}] * 2)

    rep = validate_cases(str(cases))
    assert rep["passed"] is True
    assert rep["cases"]["unique_count"] == 1
    assert any("duplicate" in msg for msg in rep["issues"])


def test_validate_cases_missing_file(tmp_path: Path):
    rep = validate_cases(str(tmp_path / "nope.jsonl"))
    assert rep["passed"] is False
    assert rep["cases"]["exists"] is False
    assert any("not found" in msg for msg in rep["issues"])


def test_read_and_write_cases(tmp_path: Path):
    p = tmp_path / "out" / "cases.jsonl"
    records = [{"answer": "Björk", "guess": "bjork", "expected": True}]
    write_cases(records, p)
    assert "Björk" in p.read_text(encoding="utf-8")
    assert read_cases(p) == records


def test_read_cases_skip_invalid(tmp_path: Path):
    p = tmp_path / "cases.jsonl"
    p.write_text('{"answer": "a", "guess": "b"}\nnot json\n{"guess": "b"}\n', encoding="utf-8")
    assert read_cases(p, skip_invalid=True) == [{"answer": "a", "guess": "b"}]
    with pytest.raises(json.JSONDecodeError):
        read_cases(p)


def test_read_cases_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        read_cases(tmp_path / "missing.jsonl")


@pytest.mark.parametrize("sep", ["\x85", "\u2028", "\u2029"])
def test_cases_with_unicode_line_separators_read_back(tmp_path: Path, sep):
    p = tmp_path / "cases.jsonl"
    records = [
        {"answer": "Nena", "guess": f"Ne{sep}na", "expected": True},
        {"answer": "Muse", "guess": "Musee"},
    ]
    write_cases(records, p)

    rep = validate_cases(str(p))
    assert rep["passed"] is True and rep["cases"]["count"] == 2
    assert read_cases(p) == records
    assert read_cases(p, skip_invalid=True) == records


def test_validate_cases_reports_non_utf8_lines(tmp_path: Path):
    p = tmp_path / "cases.jsonl"
    p.write_bytes(
        b'{"answer": "Henry V", "guess": "Henry Five"}\n'
        b'{"answer": "\xff", "guess": "x"}\n'
    )

    rep = validate_cases(str(p))
    assert rep["passed"] is False
    assert rep["cases"]["count"] == 1
    assert rep["cases"]["invalid_lines"] == 1
    assert "line 2: not valid UTF-8" in rep["issues"]

    assert read_cases(p, skip_invalid=True) == [{"answer": "Henry V", "guess": "Henry Five"}]
    with pytest.raises(UnicodeDecodeError):
        read_cases(p)


def test_read_lines_splits_on_newlines_only(tmp_path: Path):
    p = tmp_path / "titles.txt"
    write_lines(["Ne\x85na", "Up In", "Muse"], p)
    assert read_lines(p) == ["Ne\x85na", "Up In", "Muse"]
