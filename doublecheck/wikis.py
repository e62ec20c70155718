#!/usr/bin/env python3
"""
Wiki key resolution.

Maps short wiki keys (e.g. "enwiki") to the domain serving their Action API.
"""

from typing import Optional
from urllib.parse import urlencode

from doublecheck.errors import InvalidArgument

WIKI_TO_DOMAIN = {
    "enwiki": "en.wikipedia.org",
    "frwiki": "fr.wikipedia.org",
    "dewiki": "de.wikipedia.org",
    "eswiki": "es.wikipedia.org",
    "ptwiki": "pt.wikipedia.org",
    "ruwiki": "ru.wikipedia.org",
    "zhwiki": "zh.wikipedia.org",
    "jawiki": "ja.wikipedia.org",
    "idwiki": "id.wikipedia.org",
    "trwiki": "tr.wikipedia.org",
    "bnwiki": "bn.wikipedia.org",
    "lvwiki": "lv.wikipedia.org",
    "nlwiki": "nl.wikipedia.org",
    "plwiki": "pl.wikipedia.org",
    "fawiki": "fa.wikipedia.org",
    "wikidatawiki": "www.wikidata.org",
    "testwiki": "test.wikipedia.org",
}


def resolve_domain(wiki: str, table: Optional[dict] = None) -> str:
    """
    Resolve a wiki key to its domain.

    Raises:
        InvalidArgument: if the key is unknown
    """
    table = WIKI_TO_DOMAIN if table is None else table
    try:
        return table[wiki]
    except KeyError:
        raise InvalidArgument(f"Unknown wiki key: {wiki!r}") from None


def api_url(domain: str) -> str:
    """Action API endpoint for a domain."""
    return f"http://{domain}/w/api.php"


def sandbox_url(domain: str, params: dict) -> str:
    """Special:ApiSandbox link reproducing a query, handy when reading logs."""
    return f"http://{domain}/wiki/Special:ApiSandbox#{urlencode(params)}"
