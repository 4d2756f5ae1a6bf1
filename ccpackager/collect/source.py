"""Source collection: map archive paths to files on disk.

Code lands under ``src/`` and metadata under ``META-INF/``. Which directories
are walked, and what archive names are relative to, comes from the
descriptor; this module only walks and names.
"""

from __future__ import annotations

import os
import stat
from collections.abc import Iterator
from pathlib import Path

from ccpackager.collect.metadata import collect_metadata
from ccpackager.errors import EmptySourceError, SourceNotFoundError
from ccpackager.logging import get_logger
from ccpackager.resolve.descriptor import SourceDescriptor
from ccpackager.types import SourceFile, SourceMap

log = get_logger()

SOURCE_PREFIX = "src"


def _walk_files(root: Path, exclude: Path | None) -> Iterator[tuple[Path, os.stat_result]]:
    """Yield regular files under *root* in sorted order.

    Hidden directories and *exclude* are not descended. Symlinks are skipped.
    """
    for dirpath, dirnames, filenames in os.walk(root):
        here = Path(dirpath)
        dirnames[:] = sorted(
            d for d in dirnames if not d.startswith(".") and (here / d) != exclude
        )
        for filename in sorted(filenames):
            local = here / filename
            st = os.lstat(local)
            if not stat.S_ISREG(st.st_mode):
                log.debug("skipping non-regular file", extra={"entry": str(local)})
                continue
            yield local, st


def _archive_name(relative: Path) -> str:
    return f"{SOURCE_PREFIX}/{relative.as_posix()}"


def find_source(descriptor: SourceDescriptor) -> SourceMap:
    """Enumerate the files to package for *descriptor*.

    Raises SourceNotFoundError if the source directory is missing and
    EmptySourceError if it holds no code. Metadata files are checked against
    the whitelist in :mod:`ccpackager.collect.metadata`.
    """
    if not descriptor.source_dir.is_dir():
        raise SourceNotFoundError(str(descriptor.source_dir))

    metadata_dir = descriptor.metadata_dir
    sources: SourceMap = {}
    for tree in descriptor.code_trees():
        for local, st in _walk_files(tree.root, exclude=metadata_dir):
            name = _archive_name(local.relative_to(tree.relative_to))
            sources[name] = SourceFile(local_path=local, mode=st.st_mode)

    if not sources:
        raise EmptySourceError(descriptor.path)

    if metadata_dir is not None and metadata_dir.is_dir():
        sources.update(collect_metadata(metadata_dir))

    log.debug(
        "collected source",
        extra={"identifier": descriptor.path, "entries": len(sources)},
    )
    return sources
