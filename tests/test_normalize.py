import pytest
from answerjudge.engine import normalize, fold_number_words
from answerjudge.engine.normalize import roman_to_int, strip_diacritics

# --- normalize() golden table: raw -> normalized string ---
@pytest.mark.parametrize("raw,expected", [
    ("Café", "cafe"),
    ("The Beatles", "beatles"),
    ("Tom & Jerry", "tom and jerry"),
    ("Henry VIII", "henry num_8"),
    ("Apollo 13", "apollo num_13"),
    ("21st Century Fox", "num_21 century fox"),
    ("Catch-22", "catch num_22"),
    ("Ocean's Eleven", "oceans num_11"),
    ("Area Fifty One", "area num_51"),
    ("I, Robot", "num_1 robot"),
    ("James Bond 007", "james bond num_7"),
    ("Star Wars: Episode IV", "star wars episode num_4"),
    ("  Spaced   out  ", "spaced out"),
    ("(The) Godfather", "godfather"),
])
def test_normalize_golden(raw, expected):
    assert normalize(raw).normalized == expected

def test_normalize_keeps_articles_when_asked():
    assert normalize("The Beatles", drop_articles=False).normalized == "the beatles"

def test_normalize_token_views():
    n = normalize("One Hundred Years of Solitude")
    assert n.tokens == ("num_1", "num_100", "years", "of", "solitude")
    assert n.numeric_tokens == ("num_1", "num_100")
    assert n.non_numeric_tokens == ("years", "solitude")
    assert n.token_set == frozenset({"num_1", "num_100", "years", "solitude"})

def test_normalize_token_set_dedupes_and_drops_stopwords():
    n = normalize("New York, New York and the City of Dreams")
    assert "and" not in n.token_set and "of" not in n.token_set
    assert n.token_set == frozenset({"new", "york", "city", "dreams"})
    # order and repeats survive in the ordered views
    assert n.non_numeric_tokens[:4] == ("new", "york", "new", "york")

def test_normalize_empty_input():
    n = normalize("")
    assert n.normalized == ""
    assert n.tokens == () and n.numeric_tokens == () and n.non_numeric_tokens == ()
    assert n.token_set == frozenset()

def test_normalize_punctuation_only():
    assert normalize("-- ... //").normalized == ""

def test_numbers_are_interchangeable():
    forms = ["Henry 5", "Henry Five", "Henry Fifth", "Henry V", "Henry 5th"]
    assert {normalize(f).normalized for f in forms} == {"henry num_5"}

def test_roman_false_positive_is_kept():
    # Words spelled only with m/d/c/l/x/v/i are read as numerals.
    assert normalize("Mix").normalized == "num_1009"
    assert normalize("Civic").numeric_tokens == ("num_203",)

def test_long_digit_runs_do_not_raise():
    n = normalize("9" * 5000)
    assert n.numeric_tokens == ("num_" + "9" * 5000,)

# --- fold_number_words() ---
@pytest.mark.parametrize("raw,expected", [
    ("Henry the Fifth", "henry the 5"),
    ("Area Fifty-One", "area 51"),
    ("Twenty First Century", "20 1 century"),
    ("twentieth first", "21"),
    ("Ninety", "90"),
    ("Café (film)", "cafe film"),
    ("Tom & Jerry", "tom & jerry"),
    ("", ""),
])
def test_fold_number_words(raw, expected):
    assert fold_number_words(raw) == expected

@pytest.mark.parametrize("token,expected", [
    ("xiv", 14),
    ("mcmlxxxiv", 1984),
    ("VIII", 8),
    ("iiii", 4),
    ("abc", None),
    ("", None),
])
def test_roman_to_int(token, expected):
    assert roman_to_int(token) == expected

def test_strip_diacritics():
    assert strip_diacritics("Björk Guðmundsdóttir") == "Bjork Guðmundsdottir"
