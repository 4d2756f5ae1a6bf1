"""ccpackager CLI: package, validate and describe builds of Go chaincode.

Commands:
- package IDENTIFIER --out FILE (writes FILE and FILE.sha256)
- validate SOURCE [--sha256 HEX] (SOURCE is a path or http(s) URL)
- build-script IDENTIFIER
- dockerfile
- normalize IDENTIFIER
"""

from __future__ import annotations

from pathlib import Path

import httpx
import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ccpackager.core import Platform
from ccpackager.errors import PackagingError
from ccpackager.package.fetch import load_package
from ccpackager.security.archive import list_package
from ccpackager.signing.checks import sha256_bytes, verify_sha256_bytes, write_sidecar

app = typer.Typer(add_completion=False, help="Package and validate Go chaincode")
console = Console()


def _fail(message: str) -> None:
    rprint(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(code=1)


@app.command()
def package(
    identifier: str = typer.Argument(..., help="Chaincode import path or module directory"),
    out: str = typer.Option("chaincode.tar.gz", "--out", help="Where to write the package"),
) -> None:
    try:
        payload = Platform().get_deployment_payload(identifier)
    except PackagingError as exc:
        _fail(str(exc))

    out_path = Path(out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(payload)
    write_sidecar(out_path, payload)
    rprint(f"[green]Packaged:[/green] {out_path} sha256:{sha256_bytes(payload)}")


@app.command()
def validate(
    source: str = typer.Argument(..., help="Code package path or http(s) URL"),
    sha256: str | None = typer.Option(
        None, "--sha256", help="Expected digest (hex or sha256:<hex>)"
    ),
) -> None:
    try:
        data = load_package(source)
    except (OSError, ValueError, httpx.HTTPError) as exc:
        _fail(f"cannot read {source}: {exc}")

    if sha256:
        try:
            verify_sha256_bytes(data, expected=sha256)
        except ValueError as exc:
            _fail(str(exc))

    try:
        Platform().validate_code_package(data)
        names = list_package(data)
    except PackagingError as exc:
        _fail(str(exc))

    table = Table(title="Code package entries")
    table.add_column("Entry", style="cyan")
    for name in names:
        table.add_row(name)
    console.print(table)
    rprint("[green]Code package is valid.[/green]")


@app.command("build-script")
def build_script(
    identifier: str = typer.Argument(..., help="Identifier passed to go build"),
) -> None:
    opts = Platform().docker_build_options(identifier)
    print(opts.cmd)


@app.command()
def dockerfile() -> None:
    print(Platform().generate_dockerfile())


@app.command()
def normalize(
    identifier: str = typer.Argument(..., help="Chaincode import path or module directory"),
) -> None:
    try:
        print(Platform().normalize_path(identifier))
    except PackagingError as exc:
        _fail(str(exc))


if __name__ == "__main__":
    app()
