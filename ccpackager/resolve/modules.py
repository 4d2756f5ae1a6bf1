"""Module-ownership query: which Go module, if any, owns a directory.

The resolver is a small Protocol so the Path Resolver can be given a
deterministic fake in tests instead of shelling out to the toolchain.
"""

from __future__ import annotations

import os
import re
import subprocess
from pathlib import Path
from typing import Protocol

from ccpackager.errors import ResolutionError
from ccpackager.logging import get_logger
from ccpackager.types import ModuleInfo

log = get_logger()

_MODULE_DIRECTIVE = re.compile(r"^\s*module\s+(\"[^\"]*\"|`[^`]*`|\S+)")


class ModuleResolver(Protocol):
    def module_for(self, directory: Path) -> ModuleInfo | None: ...


def read_module_path(gomod: Path) -> str:
    """Return the declared module path of a ``go.mod`` file ("" if none)."""
    try:
        text = gomod.read_text(encoding="utf-8")
    except OSError:
        return ""
    for line in text.splitlines():
        m = _MODULE_DIRECTIVE.match(line)
        if m:
            return m.group(1).strip("\"`")
    return ""


class GoModuleResolver:
    """Ask ``go env GOMOD`` which module file governs a directory."""

    def __init__(self, go_binary: str = "go", timeout: float | None = None) -> None:
        self.go_binary = go_binary
        self.timeout = timeout

    def module_for(self, directory: Path) -> ModuleInfo | None:
        # cwd= instead of chdir keeps concurrent callers independent
        try:
            proc = subprocess.run(
                [self.go_binary, "env", "GOMOD"],
                cwd=directory,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as exc:
            raise ResolutionError(str(directory), f"cannot run {self.go_binary}: {exc}") from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
            raise ResolutionError(str(directory), detail) from exc
        except subprocess.TimeoutExpired as exc:
            raise ResolutionError(
                str(directory), f"{self.go_binary} env GOMOD timed out after {self.timeout}s"
            ) from exc

        gomod = proc.stdout.strip()
        if not gomod or gomod == os.devnull:
            return None
        gomod_path = Path(gomod)
        info = ModuleInfo(root=gomod_path.parent, module_path=read_module_path(gomod_path))
        log.debug("module found", extra={"module_root": str(info.root)})
        return info
