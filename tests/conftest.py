from __future__ import annotations

from pathlib import Path

import pytest

from ccpackager.config import PackagerSettings, reset_settings
from ccpackager.types import ModuleInfo

FIXTURES = Path(__file__).resolve().parents[1] / "fixtures"


class FakeResolver:
    """Deterministic stand-in for `go env GOMOD`.

    *modules* maps a module root to its declared module path; any directory at
    or below a root is owned by that module.
    """

    def __init__(self, modules: dict[Path, str] | None = None) -> None:
        self.modules = {root.resolve(): path for root, path in (modules or {}).items()}
        self.calls: list[Path] = []

    def module_for(self, directory: Path) -> ModuleInfo | None:
        d = directory.resolve()
        self.calls.append(d)
        for root, module_path in self.modules.items():
            if d == root or root in d.parents:
                return ModuleInfo(root=root, module_path=module_path)
        return None


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def settings() -> PackagerSettings:
    return PackagerSettings(gopath=str(FIXTURES / "gopath"))


@pytest.fixture
def module_resolver() -> FakeResolver:
    return FakeResolver({FIXTURES / "modroot": "github.com/example/modroot"})
