"""Error taxonomy for packaging and validation.

Every failure is terminal for the call that raised it. Messages carry the
offending path (and the violated rule) so callers can show them as-is.
"""

from __future__ import annotations


class PackagingError(Exception):
    """Base class for all errors raised by ccpackager."""


class InvalidPathError(PackagingError):
    def __init__(self, path: str, reason: str = "not a valid import path") -> None:
        super().__init__(f"invalid path: {path!r}: {reason}")
        self.path = path
        self.reason = reason


class ResolutionError(PackagingError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"failed to resolve module for {path!r}: {reason}")
        self.path = path
        self.reason = reason


class SourceNotFoundError(PackagingError):
    def __init__(self, path: str) -> None:
        super().__init__(f"source not found: {path}")
        self.path = path


class EmptySourceError(PackagingError):
    def __init__(self, path: str) -> None:
        super().__init__(f"no source files found in {path}")
        self.path = path


class UnexpectedMetadataError(PackagingError):
    def __init__(self, path: str) -> None:
        super().__init__(
            f"metadata file found in unexpected location: {path} "
            "(expected META-INF/statedb/couchdb/indexes or "
            "META-INF/statedb/couchdb/collections/<collection_name>/indexes)"
        )
        self.path = path


class InvalidMetadataError(PackagingError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"invalid metadata file {path}: {reason}")
        self.path = path
        self.reason = reason


class PackageFormatError(PackagingError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"malformed code package: {reason}")
        self.reason = reason


class PackageValidationError(PackagingError):
    """An archive entry violates the packaging security policy."""

    PRIVILEGED_MODE = "privileged-mode"
    BAD_NAMESPACE = "bad-namespace"
    PATH_TRAVERSAL = "path-traversal"
    UNSUPPORTED_TYPE = "unsupported-type"

    def __init__(self, path: str, rule: str, detail: str = "") -> None:
        msg = f"illegal entry in code package: {path} ({rule})"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)
        self.path = path
        self.rule = rule
        self.detail = detail
