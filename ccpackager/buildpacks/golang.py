"""Go buildpack: the script that compiles a code package inside the builder image.

The script picks one of three build modes at container build time, based on
what the unpacked package contains under ``/chaincode/input/src``:

- ``go.mod`` and ``vendor/``: module build against vendored dependencies only
- ``go.mod`` alone: module build resolving through the public module proxy
- neither: legacy workspace build with ``GOPATH`` pointed at the input

The text is consumed verbatim by the container build invoker.
"""

from __future__ import annotations

from ccpackager.config import PackagerSettings, get_settings
from ccpackager.types import BuildOptions

STATIC_LDFLAGS_OPTS = "-ldflags \"-linkmode external -extldflags '-static'\""
DYNAMIC_LDFLAGS_OPTS = ""

INPUT_SRC = "/chaincode/input/src"
OUTPUT_BINARY = "/chaincode/output/chaincode"
MODULE_PROXY = "https://proxy.golang.org"

_BUILD_SCRIPT = """
set -e
if [ -f "{src}/go.mod" ] && [ -d "{src}/vendor" ]; then
    cd {src}
    GO111MODULE=on go build -v -mod=vendor {ldflags} -o {out} {path}
elif [ -f "{src}/go.mod" ]; then
    cd {src}
    GO111MODULE=on GOPROXY={proxy} go build -v -mod=readonly {ldflags} -o {out} {path}
else
    GOPATH=/chaincode/input:$GOPATH go build -v {ldflags} -o {out} {path}
fi
echo Done!
"""


def get_ldflags_opts(settings: PackagerSettings | None = None) -> str:
    settings = settings or get_settings()
    if settings.dynamic_link:
        return DYNAMIC_LDFLAGS_OPTS
    return STATIC_LDFLAGS_OPTS


def generate_build_script(identifier: str, settings: PackagerSettings | None = None) -> str:
    return _BUILD_SCRIPT.format(
        src=INPUT_SRC,
        out=OUTPUT_BINARY,
        proxy=MODULE_PROXY,
        ldflags=get_ldflags_opts(settings),
        path=identifier,
    )


def docker_build_options(
    identifier: str, settings: PackagerSettings | None = None
) -> BuildOptions:
    settings = settings or get_settings()
    return BuildOptions(cmd=generate_build_script(identifier, settings), image=settings.builder)
