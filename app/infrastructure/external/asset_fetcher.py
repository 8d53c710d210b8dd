# app/infrastructure/external/asset_fetcher.py
"""
Fetch the images an invoice prints: company logo and UPI QR code.

A missing image never blocks a document, so every failure (bad URL,
timeout, HTTP error, non-image body) resolves to None and is logged.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import httpx
from loguru import logger

DEFAULT_TIMEOUT = 10.0


async def fetch_asset(
    client: httpx.AsyncClient,
    url: Optional[str],
) -> Optional[bytes]:
    if not url or not url.strip():
        return None

    try:
        resp = await client.get(url.strip())
        resp.raise_for_status()
    except httpx.HTTPError as exc:
        logger.warning("Asset fetch failed for {}: {}", url, exc)
        return None

    content_type = resp.headers.get("content-type", "")
    if not content_type.startswith("image/"):
        logger.warning("Asset at {} is not an image (content-type={!r})", url, content_type)
        return None
    return resp.content


async def fetch_assets(
    urls: dict[str, Optional[str]],
    timeout: float = DEFAULT_TIMEOUT,
) -> dict[str, Optional[bytes]]:
    """
    Fetch several images concurrently.

    Args:
        urls: name -> URL, e.g. ``{"logo": ..., "qr_code": ...}``.
            Blank URLs are skipped.
        timeout: Per-request timeout in seconds.

    Returns:
        name -> image bytes, or None where the image is unavailable.
    """
    names = list(urls)
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
        results = await asyncio.gather(*(fetch_asset(client, urls[name]) for name in names))
    fetched = dict(zip(names, results))
    logger.debug(
        "Fetched {}/{} invoice assets",
        sum(1 for data in results if data is not None),
        len(names),
    )
    return fetched
