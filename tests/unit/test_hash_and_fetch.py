from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from ccpackager.package import fetch
from ccpackager.package.fetch import load_package
from ccpackager.signing.checks import sha256_bytes, verify_sha256_bytes, write_sidecar


def test_sha256_verify_roundtrip(tmp_path: Path) -> None:
    """
    Compute sha256 for a payload, verify success, and ensure a mismatch raises.
    """
    data = b"ccpackager unit test payload\n"
    digest = sha256_bytes(data)
    assert (
        isinstance(digest, str)
        and len(digest) == 64
        and all(c in "0123456789abcdef" for c in digest)
    )

    # Plain hex and prefixed forms are both accepted
    verify_sha256_bytes(data, expected=digest)
    verify_sha256_bytes(data, expected=f"sha256:{digest.upper()}")
    verify_sha256_bytes(data, expected=f" SHA256:{digest}\n")

    with pytest.raises(ValueError):
        verify_sha256_bytes(data, expected="0" * 64)

    sidecar = write_sidecar(tmp_path / "cc.tar.gz", data)
    assert sidecar.name == "cc.tar.gz.sha256"
    assert sidecar.read_text(encoding="utf-8") == digest


def test_load_package_from_path(tmp_path: Path) -> None:
    p = tmp_path / "cc.tar.gz"
    p.write_bytes(b"bytes")
    assert load_package(str(p)) == b"bytes"


def test_load_package_from_url() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/packages/cc.tar.gz"
        return httpx.Response(200, content=b"remote-bytes")

    data = load_package(
        "https://example.com/packages/cc.tar.gz", transport=httpx.MockTransport(handler)
    )
    assert data == b"remote-bytes"


def test_load_package_http_error() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(404))
    with pytest.raises(httpx.HTTPStatusError):
        load_package("http://example.com/missing.tar.gz", transport=transport)


def test_load_package_size_cap(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(fetch, "MAX_PACKAGE_BYTES", 8)
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"x" * 64))
    with pytest.raises(ValueError):
        load_package("http://example.com/big.tar.gz", transport=transport)
