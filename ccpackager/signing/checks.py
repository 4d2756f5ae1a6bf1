"""Package digests.

A produced code package is published with a ``<archive>.sha256`` sidecar; a
received one can be checked against a digest before it is validated.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

DIGEST_PREFIX = "sha256:"


def sha256_bytes(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _expected_hex(expected: str) -> str:
    digest = expected.strip()
    if digest.lower().startswith(DIGEST_PREFIX):
        digest = digest[len(DIGEST_PREFIX):]
    return digest.lower()


def verify_sha256_bytes(data: bytes, expected: str) -> None:
    """Raise ValueError unless the code package *data* hashes to *expected*.

    *expected* is the hex digest, bare or as ``sha256:<hex>``, in any case.
    """
    got = sha256_bytes(data)
    want = _expected_hex(expected)
    if got != want:
        raise ValueError(f"package digest mismatch: got {got}, expected {want}")


def write_sidecar(path: Path, data: bytes) -> Path:
    """Write the digest of the package *data* next to it, as ``<path>.sha256``."""
    sidecar = path.with_name(path.name + ".sha256")
    sidecar.write_text(sha256_bytes(data), encoding="utf-8")
    return sidecar
