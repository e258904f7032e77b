# tests/unit/versioning/test_unit_hashing.py — v1
"""Tests for versioning/hashing.py."""

from __future__ import annotations

import hashlib

from taghelpers.versioning.hashing import (
    append_query_string,
    compute_version_token,
    decode_version_token,
)


class TestComputeVersionToken:
    def test_decodes_to_sha256_digest(self):
        token = compute_version_token(b"body {}")
        assert decode_version_token(token) == hashlib.sha256(b"body {}").digest()
        assert len(decode_version_token(token)) == 32

    def test_url_safe_without_padding(self):
        token = compute_version_token(b"\xff" * 100)
        assert "=" not in token
        assert "+" not in token
        assert "/" not in token
        assert len(token) == 43

    def test_deterministic(self):
        assert compute_version_token(b"x") == compute_version_token(b"x")
        assert compute_version_token(b"x") != compute_version_token(b"y")

    def test_empty_content(self):
        assert len(decode_version_token(compute_version_token(b""))) == 32


class TestAppendQueryString:
    def test_no_existing_query(self):
        assert append_query_string("/a.css", "v", "abc") == "/a.css?v=abc"

    def test_existing_query(self):
        assert append_query_string("/a.css?x=1", "v", "abc") == "/a.css?x=1&v=abc"

    def test_fragment_kept_last(self):
        assert append_query_string("/a.css#top", "v", "abc") == "/a.css?v=abc#top"

    def test_value_encoded(self):
        assert append_query_string("/a", "v", "a b&c") == "/a?v=a%20b%26c"
