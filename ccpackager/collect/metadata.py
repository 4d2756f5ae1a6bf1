"""Metadata whitelist for the META-INF namespace.

Only the subtrees listed in ``METADATA_RULES`` may appear under a chaincode's
metadata directory. Each rule pairs a pattern over the META-INF-relative path
with a validator for the file content. Adding a new kind of metadata means
adding a row here; the collector does not change.
"""

from __future__ import annotations

import json
import os
import re
import stat
from collections.abc import Callable
from pathlib import Path

from jsonschema import ValidationError

from ccpackager.errors import InvalidMetadataError, UnexpectedMetadataError
from ccpackager.logging import get_logger
from ccpackager.types import SourceFile, SourceMap
from ccpackager.validator import validate_couchdb_index

log = get_logger()

METADATA_PREFIX = "META-INF"

# (name, content) -> None; raises InvalidMetadataError
MetadataValidator = Callable[[str, bytes], None]


def _couchdb_index_file(name: str, content: bytes) -> None:
    try:
        doc = json.loads(content)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InvalidMetadataError(name, f"index file is not valid JSON: {exc}") from exc
    try:
        validate_couchdb_index(doc)
    except ValidationError as exc:
        raise InvalidMetadataError(name, f"invalid index definition: {exc.message}") from exc


METADATA_RULES: tuple[tuple[re.Pattern[str], MetadataValidator], ...] = (
    (re.compile(r"^statedb/couchdb/indexes/[^/]+\.json$"), _couchdb_index_file),
    # Indexes on a private data collection
    (
        re.compile(r"^statedb/couchdb/collections/[^/]+/indexes/[^/]+\.json$"),
        _couchdb_index_file,
    ),
)


def validate_metadata_file(relpath: str, content: bytes) -> None:
    """Check one metadata file against the whitelist.

    *relpath* is relative to the metadata directory and uses ``/``.
    """
    name = f"{METADATA_PREFIX}/{relpath}"
    for pattern, check in METADATA_RULES:
        if pattern.match(relpath):
            check(name, content)
            return
    raise UnexpectedMetadataError(name)


def collect_metadata(metadata_dir: Path) -> SourceMap:
    """Collect and validate every non-hidden regular file under *metadata_dir*.

    Only hidden files are skipped; a visible file inside a hidden directory
    still has to match a rule. Symlinks and special files are never read.
    """
    sources: SourceMap = {}
    for dirpath, dirnames, filenames in os.walk(metadata_dir):
        dirnames.sort()
        for filename in sorted(filenames):
            if filename.startswith("."):
                log.debug("skipping hidden metadata file", extra={"entry": filename})
                continue
            local = Path(dirpath) / filename
            st = os.lstat(local)
            if not stat.S_ISREG(st.st_mode):
                log.debug("skipping non-regular metadata file", extra={"entry": str(local)})
                continue
            relpath = local.relative_to(metadata_dir).as_posix()
            validate_metadata_file(relpath, local.read_bytes())
            sources[f"{METADATA_PREFIX}/{relpath}"] = SourceFile(
                local_path=local, mode=st.st_mode
            )
    return sources
