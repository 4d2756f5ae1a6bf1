"""Configuration management using Pydantic Settings."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class PackagerSettings(BaseSettings):
    """Settings for the Go chaincode platform, loaded from environment variables.

    Fields
    ------
    runtime: str
        Base image of the generated Dockerfile.
    builder: str
        Image the generated build script runs in.
    dynamic_link: bool
        Link the chaincode binary dynamically instead of statically.
    gopath: str | None
        Legacy workspace roots, ``os.pathsep`` separated. Falls back to the
        ``GOPATH`` environment variable and then to ``~/go`` like the Go toolchain.
    go_binary: str
        Go executable used for the module-ownership query.
    resolve_timeout: float | None
        Seconds allowed for the module-ownership query. ``None`` waits forever.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHAINCODE_GOLANG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    runtime: str = "hyperledger/fabric-baseos:2.5"
    builder: str = "hyperledger/fabric-ccenv:2.5"
    dynamic_link: bool = False
    gopath: str | None = None
    go_binary: str = "go"
    resolve_timeout: float | None = None

    def workspace_roots(self) -> list[Path]:
        """Return the legacy workspace roots in search order."""
        raw = self.gopath or os.environ.get("GOPATH") or str(Path.home() / "go")
        return [Path(p).expanduser() for p in raw.split(os.pathsep) if p]


# Global settings instance
_settings: PackagerSettings | None = None


def get_settings() -> PackagerSettings:
    """Get or create settings instance."""
    global _settings
    if _settings is None:
        _settings = PackagerSettings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
