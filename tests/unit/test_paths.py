from __future__ import annotations

from pathlib import Path

import pytest
from conftest import FakeResolver

from ccpackager.errors import InvalidPathError, ResolutionError
from ccpackager.resolve.paths import module_relative_path, normalize_path, validate_path

NOOP = "github.com/hyperledger/fabric/core/chaincode/platforms/golang/testdata/src/chaincodes/noop"


@pytest.mark.parametrize(
    "path, ok",
    [
        ("http://" + NOOP, False),
        ("https://" + NOOP, False),
        ("git+ssh://" + NOOP, False),
        (":" + NOOP, False),
        ("/" + NOOP, False),
        ("." + NOOP, False),
        ("", False),
        ("chaincodes/../../etc", False),
        ("chaincodes//noop", False),
        ("chaincodes/noop with space", False),
        (NOOP, True),
        ("chaincodes/empty/", True),
        ("testdata/ccmodule", True),
        ("example.com/my-org/cc_v2~beta+1", True),
    ],
)
def test_validate_path(path: str, ok: bool) -> None:
    if ok:
        validate_path(path)
    else:
        with pytest.raises(InvalidPathError) as excinfo:
            validate_path(path)
        assert excinfo.value.path == path


def test_normalize_path_outside_module_is_identity(tmp_path: Path) -> None:
    resolver = FakeResolver()
    assert normalize_path("github.com/hyperledger/fabric/cmd/peer", resolver) == (
        "github.com/hyperledger/fabric/cmd/peer"
    )
    assert normalize_path("missing", resolver) == "missing"
    # Existing directory that no module owns
    assert normalize_path(str(tmp_path), resolver) == str(tmp_path)


def test_normalize_path_missing_dir_skips_query() -> None:
    resolver = FakeResolver()
    normalize_path("definitely/not/here", resolver)
    assert resolver.calls == []


def test_normalize_path_strips_module_root(
    fixtures_dir: Path, module_resolver: FakeResolver, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(fixtures_dir)
    assert normalize_path("modroot/ccmodule", module_resolver) == "ccmodule"
    assert normalize_path("modroot", module_resolver) == "."


def test_module_relative_path_outside_root(tmp_path: Path) -> None:
    (tmp_path / "a").mkdir()
    (tmp_path / "b").mkdir()
    with pytest.raises(ResolutionError):
        module_relative_path(tmp_path / "a", tmp_path / "b")
