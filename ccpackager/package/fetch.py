"""Load code package bytes from a local path or an http(s) URL."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse

import httpx

MAX_PACKAGE_BYTES = 100 * 1024 * 1024  # 100 MiB


def _looks_like_url(s: str) -> bool:
    u = urlparse(s)
    return u.scheme in {"http", "https"} and bool(u.netloc)


def _download(url: str, transport: httpx.BaseTransport | None = None) -> bytes:
    chunks: list[bytes] = []
    total = 0
    with httpx.Client(timeout=60, transport=transport, follow_redirects=True) as client:
        with client.stream("GET", url) as r:
            r.raise_for_status()
            for chunk in r.iter_bytes():
                total += len(chunk)
                if total > MAX_PACKAGE_BYTES:
                    raise ValueError(f"code package exceeds {MAX_PACKAGE_BYTES} bytes: {url}")
                chunks.append(chunk)
    return b"".join(chunks)


def load_package(source: str, transport: httpx.BaseTransport | None = None) -> bytes:
    """Return the bytes of the code package at *source* (path or URL)."""
    if _looks_like_url(source):
        return _download(source, transport=transport)
    return Path(source).read_bytes()
