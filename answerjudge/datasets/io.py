from __future__ import annotations
import json
from pathlib import Path
from typing import Dict, Iterable, Iterator, List

from .validator import check_case


def read_lines(p: Path | str) -> List[str]:
    """
    Read a UTF-8 text file into a list of lines, stripping trailing CR/LF.
    Only newline characters end a line; U+0085/U+2028/U+2029 stay in the text.
    Raises FileNotFoundError if the path doesn't exist.
    """
    p = Path(p)
    if not p.exists():
        raise FileNotFoundError(p)
    with p.open("r", encoding="utf-8", newline="") as f:
        return [ln.rstrip("\r\n") for ln in f]


def write_lines(lines: Iterable[str], p: Path | str) -> str:
    """
    Write lines to a UTF-8 text file, ensuring a trailing newline.
    Returns the string path written.
    """
    p = Path(p)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return str(p)


def _raw_lines(p: Path | str) -> Iterator[bytes]:
    """
    Yield the raw bytes of each line of a JSON Lines file.

    Lines are split on b"\\n" only, the JSON Lines separator, and decoded by
    the caller so a single bad byte sequence only spoils its own line.
    """
    p = Path(p)
    if not p.exists():
        raise FileNotFoundError(p)
    with p.open("rb") as f:
        for raw in f:
            yield raw.rstrip(b"\r\n")


def read_cases(p: Path | str, skip_invalid: bool = False) -> List[Dict]:
    """
    Load a JSON Lines case file: one {"answer", "guess", "aliases"?, "expected"?}
    object per line. Blank lines are skipped.

    By default a line that is not UTF-8 raises UnicodeDecodeError and a line
    that is not JSON raises json.JSONDecodeError (run validate_cases first for
    a friendly report). With skip_invalid=True, such lines and records that
    fail check_case are dropped silently.
    """
    cases: List[Dict] = []
    for raw in _raw_lines(p):
        try:
            line = raw.decode("utf-8")
        except UnicodeDecodeError:
            if skip_invalid:
                continue
            raise
        if not line.strip():
            continue
        try:
            record = json.loads(line)
        except json.JSONDecodeError:
            if skip_invalid:
                continue
            raise
        if skip_invalid and check_case(record) is not None:
            continue
        cases.append(record)
    return cases


def write_cases(cases: Iterable[Dict], p: Path | str) -> str:
    """Write cases as JSON Lines (non-ASCII kept readable). Returns the path."""
    return write_lines((json.dumps(c, ensure_ascii=False) for c in cases), p)
