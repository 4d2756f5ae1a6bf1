"""Dockerfile for the chaincode runtime image.

The compiled binary is shipped as ``binpackage.tar`` and unpacked into
``/usr/local/bin`` on top of the configured runtime base image.
"""

from __future__ import annotations

from ccpackager.config import PackagerSettings, get_settings

BINARY_ARCHIVE = "binpackage.tar"
BINARY_DEST = "/usr/local/bin"


def generate_dockerfile(settings: PackagerSettings | None = None) -> str:
    settings = settings or get_settings()
    return "\n".join(
        [
            f"FROM {settings.runtime}",
            f"ADD {BINARY_ARCHIVE} {BINARY_DEST}",
        ]
    )
