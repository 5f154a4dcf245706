"""Tests for asset download and checksum."""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest
import requests

from aursync.common.errors import FetchError
from aursync.release.asset_fetcher import AssetFetcher, sha256_file
from conftest import FakeResponse, FakeSession


class TestSha256File:
    def test_known_digest(self, tmp_path: Path):
        path = tmp_path / "asset"
        path.write_bytes(b"test")
        assert sha256_file(path) == "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08"

    def test_digest_is_lowercase_hex(self, tmp_path: Path):
        path = tmp_path / "asset"
        path.write_bytes(b"\x00" * 10)
        digest = sha256_file(path)
        assert digest == digest.lower()
        assert len(digest) == 64


class TestAssetFetcher:
    def test_fetch_sha256_streams_chunks(self, tmp_path: Path):
        chunks = [b"widget-", b"", b"1.1.0"]
        fetcher = AssetFetcher(session=FakeSession(FakeResponse(chunks=chunks)))

        digest = fetcher.fetch_sha256("https://example.com/asset", tmp_path)

        assert digest == hashlib.sha256(b"widget-1.1.0").hexdigest()

    def test_temporary_file_removed_after_hashing(self, tmp_path: Path):
        fetcher = AssetFetcher(session=FakeSession(FakeResponse(chunks=[b"data"])))
        fetcher.fetch_sha256("https://example.com/asset", tmp_path)
        assert list(tmp_path.iterdir()) == []

    def test_download_uses_streaming(self, tmp_path: Path):
        session = FakeSession(FakeResponse(chunks=[b"data"]))
        path = AssetFetcher(session=session).download("https://example.com/asset", tmp_path)

        assert path.read_bytes() == b"data"
        assert session.requests[0]["stream"] is True

    def test_http_error_raises(self, tmp_path: Path):
        fetcher = AssetFetcher(session=FakeSession(FakeResponse(status_code=404)))

        with pytest.raises(FetchError):
            fetcher.fetch_sha256("https://example.com/missing", tmp_path)
        assert list(tmp_path.iterdir()) == []

    def test_network_error_raises(self, tmp_path: Path):
        session = FakeSession(error=requests.exceptions.ConnectionError("reset"))

        with pytest.raises(FetchError, match="failed to download"):
            AssetFetcher(session=session).download("https://example.com/asset", tmp_path)
