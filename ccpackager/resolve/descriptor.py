"""Source descriptors for the two supported layouts.

A descriptor is built once per packaging call by :func:`describe_code` and
tells the collector which trees to walk and how to name their files:

- ``GopathSource``: legacy workspace layout, ``<workspace>/src/<path>``.
- ``ModuleSource``: self-contained module carrying its own ``go.mod``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from ccpackager.config import PackagerSettings
from ccpackager.errors import SourceNotFoundError
from ccpackager.logging import get_logger
from ccpackager.resolve.modules import ModuleResolver
from ccpackager.resolve.paths import module_relative_path

log = get_logger()

METADATA_DIRNAME = "META-INF"


@dataclass(frozen=True)
class CodeTree:
    """A directory to walk; archive names are taken relative to ``relative_to``."""

    root: Path
    relative_to: Path


@dataclass(frozen=True)
class GopathSource:
    path: str
    source_dir: Path
    metadata_dir: Path | None
    workspace: Path

    uses_module_convention: ClassVar[bool] = False

    def code_trees(self) -> list[CodeTree]:
        return [CodeTree(root=self.source_dir, relative_to=self.workspace / "src")]


@dataclass(frozen=True)
class ModuleSource:
    path: str
    source_dir: Path
    metadata_dir: Path | None
    module_root: Path
    module_path: str = ""

    uses_module_convention: ClassVar[bool] = True

    def code_trees(self) -> list[CodeTree]:
        # The module builds as a whole: go.mod, go.sum, vendor/ and sibling packages
        return [CodeTree(root=self.module_root, relative_to=self.module_root)]


SourceDescriptor = GopathSource | ModuleSource


def describe_code(
    identifier: str, settings: PackagerSettings, resolver: ModuleResolver
) -> SourceDescriptor:
    """Resolve *identifier* to the descriptor of its source layout."""
    directory = Path(identifier)
    if directory.is_dir():
        info = resolver.module_for(directory)
        if info is not None:
            source_dir = directory.resolve()
            module_root = info.root.resolve()
            desc = ModuleSource(
                path=module_relative_path(source_dir, module_root),
                source_dir=source_dir,
                metadata_dir=source_dir / METADATA_DIRNAME,
                module_root=module_root,
                module_path=info.module_path,
            )
            log.debug(
                "module layout",
                extra={"identifier": identifier, "module_root": str(module_root)},
            )
            return desc

    import_path = identifier.rstrip("/")
    for workspace in settings.workspace_roots():
        candidate = workspace / "src" / import_path
        if candidate.is_dir():
            log.debug("workspace layout", extra={"identifier": identifier})
            return GopathSource(
                path=import_path,
                source_dir=candidate,
                metadata_dir=candidate / METADATA_DIRNAME,
                workspace=workspace,
            )
    raise SourceNotFoundError(identifier)
