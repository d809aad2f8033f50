"""
Tests for token extraction and classification.
"""

import pytest
from wikimark.classify import classify_token, strip_base_host
from wikimark.models import Classification


class TestStripBaseHost:
    """Test removal of the base host suffix."""

    def test_strips_suffix(self):
        assert strip_base_host("q42.wikimark.net", "wikimark.net") == "q42"

    def test_strips_suffix_with_port(self):
        assert strip_base_host("python.localhost:8080", "localhost:8080") == "python"

    def test_keeps_dots_in_token(self):
        assert strip_base_host("new.york.wikimark.net", "wikimark.net") == "new.york"

    def test_host_without_suffix_is_unchanged(self):
        assert strip_base_host("example.com", "wikimark.net") == "example.com"

    def test_bare_base_host_is_unchanged(self):
        """Nothing before the suffix means there is no token to strip."""
        assert strip_base_host(".wikimark.net", "wikimark.net") == ".wikimark.net"
        assert strip_base_host("wikimark.net", "wikimark.net") == "wikimark.net"


class TestClassifyToken:
    """Test lookup vs. search classification."""

    @pytest.mark.parametrize("token", ["Q42", "q42", "Q1", "q123456789"])
    def test_item_ids_are_lookups(self, token):
        assert classify_token(token) == Classification.LOOKUP

    def test_item_id_anywhere_is_lookup(self):
        """The pattern is not anchored."""
        assert classify_token("faq2") == Classification.LOOKUP
        assert classify_token("xq7y") == Classification.LOOKUP

    @pytest.mark.parametrize("token", ["python", "Q", "q-42", "42", "", "new york"])
    def test_other_tokens_are_searches(self, token):
        assert classify_token(token) == Classification.SEARCH
