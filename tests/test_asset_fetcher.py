# tests/test_asset_fetcher.py
"""Tests for concurrent logo / QR downloads."""

from unittest.mock import patch

import httpx

from app.infrastructure.external import asset_fetcher
from app.infrastructure.external.asset_fetcher import fetch_assets

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


def _client_factory(handler):
    """Build an AsyncClient factory that routes every request to ``handler``."""
    real_client = httpx.AsyncClient

    def _factory(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    return _factory


def test_fetches_images_concurrently(event_loop):
    def handler(request):
        return httpx.Response(200, content=PNG_BYTES, headers={"content-type": "image/png"})

    with patch.object(asset_fetcher.httpx, "AsyncClient", _client_factory(handler)):
        result = event_loop.run_until_complete(
            fetch_assets(
                {"logo": "https://cdn.example.com/logo.png", "qr_code": "https://cdn.example.com/qr.png"}
            )
        )
    assert result == {"logo": PNG_BYTES, "qr_code": PNG_BYTES}


def test_failures_resolve_to_none(event_loop):
    def handler(request):
        if request.url.path == "/missing.png":
            return httpx.Response(404)
        if request.url.path == "/timeout.png":
            raise httpx.ConnectTimeout("timed out", request=request)
        return httpx.Response(200, content=b"<html></html>", headers={"content-type": "text/html"})

    urls = {
        "missing": "https://cdn.example.com/missing.png",
        "slow": "https://cdn.example.com/timeout.png",
        "html": "https://cdn.example.com/page.png",
    }
    with patch.object(asset_fetcher.httpx, "AsyncClient", _client_factory(handler)):
        result = event_loop.run_until_complete(fetch_assets(urls))
    assert result == {"missing": None, "slow": None, "html": None}


def test_blank_urls_are_skipped(event_loop):
    calls = []

    def handler(request):
        calls.append(request.url)
        return httpx.Response(200, content=PNG_BYTES, headers={"content-type": "image/png"})

    with patch.object(asset_fetcher.httpx, "AsyncClient", _client_factory(handler)):
        result = event_loop.run_until_complete(fetch_assets({"logo": None, "qr_code": "  "}))
    assert result == {"logo": None, "qr_code": None}
    assert calls == []
