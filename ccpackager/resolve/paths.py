"""Path validation and normalization for chaincode identifiers."""

from __future__ import annotations

import re
from pathlib import Path

from ccpackager.errors import InvalidPathError, ResolutionError
from ccpackager.resolve.modules import ModuleResolver

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")
_ELEMENT = re.compile(r"^[A-Za-z0-9_~+-][A-Za-z0-9_.~+-]*$")


def validate_path(identifier: str) -> None:
    """Raise InvalidPathError unless *identifier* is a bare import-style path.

    Accepted: alphanumeric segments (plus ``_ - ~ +`` and inner dots) joined by
    ``/``, starting with a letter or digit, with at most one trailing ``/``.
    """
    if not identifier:
        raise InvalidPathError(identifier, "empty path")
    if _SCHEME.match(identifier):
        raise InvalidPathError(identifier, "network scheme not allowed")
    if not identifier[0].isascii() or not identifier[0].isalnum():
        raise InvalidPathError(identifier, "must start with a letter or digit")

    body = identifier[:-1] if identifier.endswith("/") else identifier
    for element in body.split("/"):
        if not _ELEMENT.match(element):
            raise InvalidPathError(identifier, f"bad path element {element!r}")


def module_relative_path(directory: Path, module_root: Path) -> str:
    """Return *directory* relative to *module_root* in POSIX form."""
    try:
        rel = directory.resolve().relative_to(module_root.resolve())
    except ValueError as exc:
        raise ResolutionError(
            str(directory), f"not inside its module root {module_root}"
        ) from exc
    return rel.as_posix()


def normalize_path(identifier: str, resolver: ModuleResolver) -> str:
    """Return the canonical identifier for *identifier*.

    Locations owned by a module collapse to their path relative to the module
    root. Anything else, including paths that do not exist locally, is
    returned unchanged.
    """
    directory = Path(identifier)
    if not directory.is_dir():
        return identifier

    info = resolver.module_for(directory)
    if info is None:
        return identifier
    return module_relative_path(directory, info.root)
