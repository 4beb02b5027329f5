"""
Fetch English aliases for article titles from Wikidata and write case stubs.

What it does:
- Reads titles (one per line) from --titles.
- Calls the Wikidata wbgetentities API (sites=enwiki, props=aliases) per title,
  retrying 429/5xx responses with backoff.
- Keeps the English alias values, drops self references, de-duplicates in order.
- A title whose request still fails is reported on stderr and written with no
  aliases, so one bad title never loses the rest of the run.
- Writes one {"answer": title, "aliases": [...]} JSON object per line; add
  "guess"/"expected" fields to turn them into regrading cases.

Usage:
    python -m script.fetch_aliases --titles data/titles.txt --out data/aliases.jsonl
"""

import argparse
import sys

import requests
from requests.adapters import HTTPAdapter
from urllib3.util import Retry

from answerjudge.datasets import read_lines, write_cases

URL = "https://www.wikidata.org/w/api.php"
USER_AGENT = "answerjudge-alias-fetch/1.0"
RETRY_STATUSES = (429, 500, 502, 503, 504)


def unique_preserve_order(items):
    seen = set()
    out = []
    for x in items:
        if x not in seen:
            seen.add(x)
            out.append(x)
    return out


def make_session(retries: int = 3, backoff: float = 1.0) -> requests.Session:
    """Session whose GETs are retried on connection errors and RETRY_STATUSES."""
    retry = Retry(
        total=retries,
        backoff_factor=backoff,
        status_forcelist=RETRY_STATUSES,
        allowed_methods=frozenset({"GET"}),
        respect_retry_after_header=True,
    )
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def parse_aliases(payload: dict, title: str) -> list[str]:
    """Extract English alias strings for `title` from a wbgetentities response."""
    entities = payload.get("entities") or {}
    if not entities:
        return []
    entity = next(iter(entities.values()))
    values = [a.get("value", "") for a in (entity.get("aliases") or {}).get("en", [])]
    return unique_preserve_order(v for v in values if v and v != title)


def fetch_aliases(title: str, url: str = URL, session: requests.Session | None = None) -> list[str]:
    params = {
        "action": "wbgetentities",
        "format": "json",
        "titles": title,
        "sites": "enwiki",
        "props": "aliases",
    }
    http = session or requests
    r = http.get(url, params=params, headers={"User-Agent": USER_AGENT}, timeout=30)
    r.raise_for_status()
    return parse_aliases(r.json(), title)


def collect_aliases(titles, url: str, session) -> tuple[list[dict], list[str]]:
    """
    Fetch aliases for every title.

    Returns (records, failed_titles). A failed title still gets a record with
    an empty alias list.
    """
    records, failed = [], []
    for title in titles:
        try:
            aliases = fetch_aliases(title, url, session=session)
        except (requests.RequestException, ValueError) as e:
            print(f"{title}: failed ({e})", file=sys.stderr)
            failed.append(title)
            aliases = []
        else:
            print(f"{title}: {len(aliases)} aliases")
        records.append({"answer": title, "aliases": aliases})
    return records, failed


def main():
    ap = argparse.ArgumentParser(description="Fetch Wikidata aliases for article titles")
    ap.add_argument("--titles", required=True, help="text file, one title per line")
    ap.add_argument("--url", default=URL)
    ap.add_argument("--out", default="data/aliases.jsonl")
    ap.add_argument("--retries", type=int, default=3, help="retries per request on 429/5xx")
    args = ap.parse_args()

    titles = unique_preserve_order(t.strip() for t in read_lines(args.titles) if t.strip())

    with make_session(retries=args.retries) as session:
        records, failed = collect_aliases(titles, args.url, session)

    write_cases(records, args.out)
    print(f"Wrote {len(records)} titles -> {args.out}")
    if failed:
        print(f"{len(failed)} title(s) failed and were written without aliases", file=sys.stderr)

if __name__ == "__main__":
    main()
