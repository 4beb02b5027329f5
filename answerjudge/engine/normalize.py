"""
Text normalization for answer judging.

Two stages, applied in this order by the judge:
  1) fold_number_words(raw): spelled-out numbers and ordinals -> digits
     ("Area Fifty One" -> "area 51", "Henry the Fifth" -> "henry the 5").
     Runs first because it needs to look at two-token windows
     ("twenty" + "one") before the tokenizer tags anything.
  2) normalize(raw): diacritics, case, punctuation, articles, and numeric
     tagging. Every number, whatever its surface form (digits, "21st",
     "fifth", "V"), becomes a single tag like "num_5".

Output is a NormalizedText:
  - normalized        : the emitted tokens joined by single spaces
  - tokens            : emitted tokens, in order
  - token_set         : emitted tokens minus stopwords (deduplicated)
  - numeric_tokens    : the "num_<n>" tags, in order
  - non_numeric_tokens: emitted tokens minus tags and stopwords

Known limitation: any token made only of m/d/c/l/x/v/i ("mix", "civic", "i")
parses as a Roman numeral. Threshold tuning downstream assumes this.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Tuple

ARTICLES: FrozenSet[str] = frozenset({"the", "a", "an"})
STOPWORDS: FrozenSet[str] = frozenset(
    {"of", "and", "for", "to", "in", "on", "at", "by", "with", "from"}
)

NUMERIC_PREFIX = "num_"

ROMAN_VALUES: Dict[str, int] = {"m": 1000, "d": 500, "c": 100, "l": 50, "x": 10, "v": 5, "i": 1}

UNITS: Dict[str, int] = {
    "zero": 0, "one": 1, "two": 2, "three": 3, "four": 4, "five": 5,
    "six": 6, "seven": 7, "eight": 8, "nine": 9, "ten": 10, "eleven": 11,
    "twelve": 12, "thirteen": 13, "fourteen": 14, "fifteen": 15,
    "sixteen": 16, "seventeen": 17, "eighteen": 18, "nineteen": 19,
}

TENS: Dict[str, int] = {
    "twenty": 20, "thirty": 30, "forty": 40, "fifty": 50,
    "sixty": 60, "seventy": 70, "eighty": 80, "ninety": 90,
}

ORDINAL_UNITS: Dict[str, int] = {
    "first": 1, "second": 2, "third": 3, "fourth": 4, "fifth": 5,
    "sixth": 6, "seventh": 7, "eighth": 8, "ninth": 9, "tenth": 10,
    "eleventh": 11, "twelfth": 12, "thirteenth": 13, "fourteenth": 14,
    "fifteenth": 15, "sixteenth": 16, "seventeenth": 17, "eighteenth": 18,
    "nineteenth": 19,
}

ORDINAL_TENS: Dict[str, int] = {
    "twentieth": 20, "thirtieth": 30, "fortieth": 40, "fiftieth": 50,
    "sixtieth": 60, "seventieth": 70, "eightieth": 80, "ninetieth": 90,
}

# Single-token cardinals, checked last (only "hundred" is new by then).
NUMBER_WORDS: Dict[str, int] = {**UNITS, **TENS, "hundred": 100}
NUMBER_WORDS.pop("zero")

_APOSTROPHES_RE = re.compile(r"[’'`]")
_PARENS_RE = re.compile(r"[()]")
_SEPARATORS_RE = re.compile(r"[-_:.,/]")
_WHITESPACE_RE = re.compile(r"\s+")
_ORDINAL_SUFFIX_RE = re.compile(r"^([0-9]+)(st|nd|rd|th)$")
_DIGITS_RE = re.compile(r"^[0-9]+$")
_ROMAN_RE = re.compile(r"^[mdclxvi]+$")


@dataclass(frozen=True)
class NormalizedText:
    normalized: str
    tokens: Tuple[str, ...]
    token_set: FrozenSet[str]
    numeric_tokens: Tuple[str, ...]
    non_numeric_tokens: Tuple[str, ...]


def strip_diacritics(value: str) -> str:
    """Decompose (NFD) and drop combining marks: "café" -> "cafe"."""
    decomposed = unicodedata.normalize("NFD", value)
    return "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")


def _clean(value: str) -> str:
    # Shared punctuation pass; callers handle '&' themselves.
    value = _APOSTROPHES_RE.sub("", value)
    value = _PARENS_RE.sub(" ", value)
    value = _SEPARATORS_RE.sub(" ", value)
    return _WHITESPACE_RE.sub(" ", value).strip()


def _number_window(tokens: List[str], index: int) -> Optional[Tuple[int, int]]:
    """
    Try to read a spelled-out number starting at tokens[index].

    Returns (value, consumed) or None. Cardinal tens pair only with a cardinal
    unit ("twenty one"), ordinal tens only with an ordinal unit
    ("twentieth first" -> 21).
    """
    token = tokens[index]
    following = tokens[index + 1] if index + 1 < len(tokens) else None

    if token in UNITS:
        return UNITS[token], 1

    if token in TENS:
        if following in UNITS:
            return TENS[token] + UNITS[following], 2
        return TENS[token], 1

    if token in ORDINAL_UNITS:
        return ORDINAL_UNITS[token], 1

    if token in ORDINAL_TENS:
        if following in ORDINAL_UNITS:
            return ORDINAL_TENS[token] + ORDINAL_UNITS[following], 2
        return ORDINAL_TENS[token], 1

    return None


def roman_to_int(token: str) -> Optional[int]:
    """
    Parse a lowercase Roman numeral with the subtractive-pair rule.

    Scans right to left; a symbol smaller than the one after it is subtracted.
    Malformed numerals like "iiii" or "vx" still parse (4 and 5).
    """
    roman = token.lower()
    if not _ROMAN_RE.match(roman):
        return None

    total = 0
    previous = 0
    for ch in reversed(roman):
        current = ROMAN_VALUES[ch]
        total += -current if current < previous else current
        previous = current
    return total


def fold_number_words(raw: str) -> str:
    """
    Replace spelled-out numbers and ordinals with digits.

    Examples:
      fold_number_words("Area Fifty One")  -> "area 51"
      fold_number_words("Henry the Fifth") -> "henry the 5"
    """
    cleaned = _clean(strip_diacritics(raw).lower())
    tokens = cleaned.split(" ") if cleaned else []

    out: List[str] = []
    i = 0
    while i < len(tokens):
        window = _number_window(tokens, i)
        if window is not None:
            value, consumed = window
            out.append(str(value))
            i += consumed
        else:
            out.append(tokens[i])
            i += 1
    return " ".join(out)


def _digits_value(digits: str) -> str:
    # Decimal text of the digit run without int(): very long runs would hit
    # the interpreter's int/str conversion limit.
    return digits.lstrip("0") or "0"


def _numeric_value(tokens: List[str], index: int) -> Optional[Tuple[str, int]]:
    """First matching numeric reading of tokens[index] as (value, consumed)."""
    window = _number_window(tokens, index)
    if window is not None:
        value, consumed = window
        return str(value), consumed

    token = tokens[index]

    m = _ORDINAL_SUFFIX_RE.match(token)
    if m:
        return _digits_value(m.group(1)), 1

    if _DIGITS_RE.match(token):
        return _digits_value(token), 1

    roman = roman_to_int(token)
    if roman is not None:
        return str(roman), 1

    if token in NUMBER_WORDS:
        return str(NUMBER_WORDS[token]), 1

    return None


def normalize(raw: str, drop_articles: bool = True) -> NormalizedText:
    """
    Canonicalize `raw` for comparison.

    Pipeline (fixed order): strip diacritics, lowercase, '&' -> "and",
    punctuation collapse, tokenize, drop articles, tag numbers.

    Pass fold_number_words(raw) instead of raw when number words matter.
    Never raises; "" gives an empty NormalizedText.
    """
    text = strip_diacritics(raw).lower()
    text = _clean(text.replace("&", " and "))
    tokens = text.split(" ") if text else []

    emitted: List[str] = []
    numeric: List[str] = []

    i = 0
    while i < len(tokens):
        token = tokens[i]
        if drop_articles and token in ARTICLES:
            i += 1
            continue

        reading = _numeric_value(tokens, i)
        if reading is None:
            emitted.append(token)
            i += 1
            continue

        value, consumed = reading
        tag = f"{NUMERIC_PREFIX}{value}"
        emitted.append(tag)
        numeric.append(tag)
        i += consumed

    content = [t for t in emitted if t not in STOPWORDS]

    return NormalizedText(
        normalized=" ".join(emitted),
        tokens=tuple(emitted),
        token_set=frozenset(content),
        numeric_tokens=tuple(numeric),
        non_numeric_tokens=tuple(t for t in content if not t.startswith(NUMERIC_PREFIX)),
    )
