"""Go chaincode platform: validate → describe → collect → tar, plus build config."""

from __future__ import annotations

from dataclasses import dataclass, field

from ccpackager.buildpacks.golang import docker_build_options
from ccpackager.collect.source import find_source
from ccpackager.config import PackagerSettings, get_settings
from ccpackager.logging import get_logger
from ccpackager.package.docker import generate_dockerfile
from ccpackager.package.tar import build_package
from ccpackager.resolve.descriptor import SourceDescriptor, describe_code
from ccpackager.resolve.modules import GoModuleResolver, ModuleResolver
from ccpackager.resolve.paths import normalize_path, validate_path
from ccpackager.security.archive import validate_package
from ccpackager.types import BuildOptions

log = get_logger()


@dataclass
class Platform:
    """Packaging, validation and build configuration for Go chaincode.

    Every call is independent; the instance only holds configuration and the
    module resolver, so one platform can serve concurrent callers.
    """

    settings: PackagerSettings = field(default_factory=get_settings)
    resolver: ModuleResolver | None = None

    name: str = field(default="GOLANG", init=False)

    def __post_init__(self) -> None:
        if self.resolver is None:
            self.resolver = GoModuleResolver(
                go_binary=self.settings.go_binary, timeout=self.settings.resolve_timeout
            )

    def validate_path(self, identifier: str) -> None:
        validate_path(identifier)

    def normalize_path(self, identifier: str) -> str:
        return normalize_path(identifier, self.resolver)

    def describe_code(self, identifier: str) -> SourceDescriptor:
        return describe_code(identifier, self.settings, self.resolver)

    def validate_code_package(self, code_package: bytes) -> None:
        validate_package(code_package)

    def get_deployment_payload(self, identifier: str) -> bytes:
        """Build the code package for *identifier*; the first failing stage raises."""
        self.validate_path(identifier)
        descriptor = self.describe_code(identifier)
        sources = find_source(descriptor)
        payload = build_package(sources)
        log.info(
            "deployment payload ready",
            extra={"identifier": descriptor.path, "entries": len(sources)},
        )
        return payload

    def generate_dockerfile(self) -> str:
        return generate_dockerfile(self.settings)

    def docker_build_options(self, identifier: str) -> BuildOptions:
        return docker_build_options(identifier, self.settings)
