"""Code package validation.

Every archive is checked before it is trusted for a build. Rejected:
- setuid/setgid bits on any entry, file or directory
- names outside the ``src/`` and ``META-INF/`` namespaces (absolute paths included)
- ``..`` traversal
- symlinks, hard links and device nodes

Validation stops at the first offending entry.
"""

from __future__ import annotations

import io
import stat
import tarfile
import zlib
from collections.abc import Iterator

from ccpackager.errors import PackageFormatError, PackageValidationError
from ccpackager.logging import get_logger

log = get_logger()

ALLOWED_PREFIXES = ("src/", "META-INF/")
PRIVILEGED_BITS = stat.S_ISUID | stat.S_ISGID

_CORRUPT = (tarfile.TarError, OSError, EOFError, zlib.error)


def _check_trailer(tf: tarfile.TarFile) -> None:
    """Everything after the last member must be end-of-archive padding.

    tarfile stops iterating quietly at a bad header that is not the first
    one, while other readers skip it and go on extracting. Reading to the end
    also makes gzip verify its CRC and length trailer.
    """
    tf.fileobj.seek(tf.offset)
    if tf.fileobj.read().strip(b"\0"):
        raise PackageFormatError(f"unreadable tar header at offset {tf.offset}")


def _members(data: bytes) -> Iterator[tarfile.TarInfo]:
    try:
        with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as tf:
            yield from tf
            _check_trailer(tf)
    except _CORRUPT as exc:
        raise PackageFormatError(str(exc) or type(exc).__name__) from exc


def _entry_name(member: tarfile.TarInfo) -> str:
    # tarfile drops the trailing slash of directory names
    return member.name + "/" if member.isdir() else member.name


def _check_entry(member: tarfile.TarInfo) -> None:
    name = _entry_name(member)
    if member.mode & PRIVILEGED_BITS:
        raise PackageValidationError(
            name, PackageValidationError.PRIVILEGED_MODE, f"mode {member.mode:o}"
        )
    if not name.startswith(ALLOWED_PREFIXES):
        raise PackageValidationError(
            name, PackageValidationError.BAD_NAMESPACE, "must start with src/ or META-INF/"
        )
    if ".." in name.split("/"):
        raise PackageValidationError(name, PackageValidationError.PATH_TRAVERSAL)
    if not (member.isreg() or member.isdir()):
        raise PackageValidationError(
            name, PackageValidationError.UNSUPPORTED_TYPE, f"type {member.type!r}"
        )


def validate_package(data: bytes) -> None:
    """Raise unless every entry of the code package *data* is acceptable.

    PackageFormatError for corrupt gzip/tar data, PackageValidationError for the
    first entry breaking the policy. An empty, well-formed archive passes.
    """
    count = 0
    for member in _members(data):
        try:
            _check_entry(member)
        except PackageValidationError as exc:
            log.warning(str(exc), extra={"entry": exc.path, "rule": exc.rule})
            raise
        count += 1
    log.info("code package validated", extra={"entries": count})


def list_package(data: bytes) -> list[str]:
    """Return entry names of the code package *data* in archive order."""
    return [_entry_name(m) for m in _members(data)]
