"""Tests for wiki key resolution."""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from doublecheck.errors import InvalidArgument
from doublecheck.wikis import api_url, resolve_domain, sandbox_url


class TestResolveDomain:

    def test_known_keys(self):
        assert resolve_domain("enwiki") == "en.wikipedia.org"
        assert resolve_domain("wikidatawiki") == "www.wikidata.org"

    def test_unknown_key(self):
        with pytest.raises(InvalidArgument, match="xxwiki"):
            resolve_domain("xxwiki")

    def test_custom_table(self):
        assert resolve_domain("local", {"local": "localhost:8080"}) == "localhost:8080"


class TestUrls:

    def test_api_url(self):
        assert api_url("en.wikipedia.org") == "http://en.wikipedia.org/w/api.php"

    def test_sandbox_url(self):
        url = sandbox_url("en.wikipedia.org", {"action": "query", "rcshow": "!bot"})
        assert url == "http://en.wikipedia.org/wiki/Special:ApiSandbox#action=query&rcshow=%21bot"
