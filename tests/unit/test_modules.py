from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path

import pytest

from ccpackager.errors import ResolutionError
from ccpackager.resolve import modules
from ccpackager.resolve.modules import GoModuleResolver, read_module_path


def _fake_run(stdout: str = "", exc: Exception | None = None):
    calls: list[dict] = []

    def run(cmd, **kwargs):
        calls.append({"cmd": cmd, **kwargs})
        if exc is not None:
            raise exc
        return subprocess.CompletedProcess(cmd, 0, stdout=stdout, stderr="")

    return run, calls


def test_no_module_when_gomod_is_devnull(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    run, calls = _fake_run(stdout=os.devnull + "\n")
    monkeypatch.setattr(modules.subprocess, "run", run)

    assert GoModuleResolver().module_for(tmp_path) is None
    assert calls[0]["cmd"] == ["go", "env", "GOMOD"]
    assert calls[0]["cwd"] == tmp_path


def test_no_module_when_gomod_is_empty(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    run, _ = _fake_run(stdout="\n")
    monkeypatch.setattr(modules.subprocess, "run", run)
    assert GoModuleResolver().module_for(tmp_path) is None


def test_module_root_and_path(fixtures_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    gomod = fixtures_dir / "modroot" / "go.mod"
    run, calls = _fake_run(stdout=f"{gomod}\n")
    monkeypatch.setattr(modules.subprocess, "run", run)

    info = GoModuleResolver(go_binary="go1.22", timeout=5).module_for(gomod.parent / "ccmodule")
    assert info is not None
    assert info.root == gomod.parent
    assert info.module_path == "github.com/example/modroot"
    assert calls[0]["cmd"][0] == "go1.22"
    assert calls[0]["timeout"] == 5


@pytest.mark.parametrize(
    "exc",
    [
        FileNotFoundError("go"),
        subprocess.CalledProcessError(1, ["go", "env", "GOMOD"], stderr="go: broken"),
        subprocess.TimeoutExpired(["go", "env", "GOMOD"], 1),
    ],
)
def test_toolchain_failures_raise_resolution_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, exc: Exception
) -> None:
    run, _ = _fake_run(exc=exc)
    monkeypatch.setattr(modules.subprocess, "run", run)
    with pytest.raises(ResolutionError) as excinfo:
        GoModuleResolver(timeout=1).module_for(tmp_path)
    assert excinfo.value.__cause__ is exc


def test_read_module_path(tmp_path: Path) -> None:
    gomod = tmp_path / "go.mod"
    gomod.write_text('// comment\nmodule "example.com/quoted" // trailing\n\ngo 1.20\n')
    assert read_module_path(gomod) == "example.com/quoted"

    gomod.write_text("go 1.20\n")
    assert read_module_path(gomod) == ""
    assert read_module_path(tmp_path / "missing.mod") == ""


@pytest.mark.timeout(60)
@pytest.mark.skipif(shutil.which("go") is None, reason="go toolchain not installed")
def test_real_toolchain(tmp_path: Path) -> None:
    (tmp_path / "go.mod").write_text("module example.com/real\n\ngo 1.20\n")
    sub = tmp_path / "cc"
    sub.mkdir()

    info = GoModuleResolver().module_for(sub)
    assert info is not None
    assert info.root.resolve() == tmp_path.resolve()
    assert info.module_path == "example.com/real"
