"""Shared models: source files, archive entries, module info, build options."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel


@dataclass(frozen=True)
class SourceFile:
    """A file on disk selected for packaging."""

    local_path: Path
    mode: int


# archive path -> file on disk
SourceMap = dict[str, SourceFile]


@dataclass(frozen=True)
class ArchiveEntry:
    """A single member of a code package.

    A name ending in ``/`` is a directory marker and carries no content.
    Regular entries carry either in-memory ``content`` or a ``local_path``.
    """

    name: str
    mode: int
    content: bytes | None = None
    local_path: Path | None = None

    @property
    def is_dir(self) -> bool:
        return self.name.endswith("/")

    @classmethod
    def from_source(cls, name: str, source: SourceFile) -> ArchiveEntry:
        return cls(name=name, mode=source.mode, local_path=source.local_path)


class ModuleInfo(BaseModel):
    """Answer of the module-ownership query for a directory."""

    root: Path
    module_path: str = ""


class BuildOptions(BaseModel):
    """Shell script compiling a package, and the image it runs in."""

    cmd: str
    image: str | None = None
