"""Code package serialization: gzip-compressed tar.

Design goals:
- Stable output: entries sorted by name, zeroed timestamps and ownership,
  zero gzip mtime. Equal inputs produce identical bytes.
- Headers carry the mode collected from disk unchanged; the validator, not
  the builder, decides whether a mode is acceptable.
- Whole-stream compression, built in memory.
"""

from __future__ import annotations

import gzip
import io
import tarfile
from collections.abc import Iterable, Mapping

from ccpackager.logging import get_logger
from ccpackager.types import ArchiveEntry, SourceFile

log = get_logger()


def _as_entries(entries: Mapping[str, SourceFile] | Iterable[ArchiveEntry]) -> list[ArchiveEntry]:
    if isinstance(entries, Mapping):
        items = [ArchiveEntry.from_source(name, src) for name, src in entries.items()]
    else:
        items = list(entries)

    seen: set[str] = set()
    for entry in items:
        if entry.name in seen:
            raise ValueError(f"duplicate archive entry: {entry.name}")
        seen.add(entry.name)
    return sorted(items, key=lambda e: e.name)


def _header(entry: ArchiveEntry, size: int) -> tarfile.TarInfo:
    info = tarfile.TarInfo(name=entry.name)
    info.mode = entry.mode
    info.size = size
    info.mtime = 0
    info.uid = info.gid = 0
    info.uname = info.gname = ""
    if entry.is_dir:
        info.type = tarfile.DIRTYPE
        info.size = 0
    return info


def _write_entry(tw: tarfile.TarFile, entry: ArchiveEntry) -> None:
    if entry.is_dir:
        tw.addfile(_header(entry, 0))
        return
    if entry.local_path is not None:
        with open(entry.local_path, "rb") as f:
            size = f.seek(0, io.SEEK_END)
            f.seek(0)
            tw.addfile(_header(entry, size), f)
        return
    content = entry.content or b""
    tw.addfile(_header(entry, len(content)), io.BytesIO(content))


def build_package(entries: Mapping[str, SourceFile] | Iterable[ArchiveEntry]) -> bytes:
    """Serialize *entries* into a gzip-compressed tar stream.

    Parameters
    ----------
    entries: Mapping[str, SourceFile] | Iterable[ArchiveEntry]
        Either the collector's archive-path -> file mapping, or explicit entries
        (names ending in ``/`` are directory markers without content).

    Returns
    -------
    bytes
        The code package.
    """
    items = _as_entries(entries)
    buf = io.BytesIO()
    with gzip.GzipFile(fileobj=buf, mode="wb", mtime=0) as gz:
        with tarfile.open(fileobj=gz, mode="w", format=tarfile.PAX_FORMAT) as tw:
            for entry in items:
                _write_entry(tw, entry)
    data = buf.getvalue()
    log.info("code package built", extra={"entries": len(items)})
    return data
