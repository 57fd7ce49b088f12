"""
smbshare command line
"""

import asyncio
import sys
from pathlib import Path
from typing import Awaitable, Callable, Optional, TypeVar

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

import smbshare.utils.logger as logger_mod
from smbshare.accessors.factory import create_file_accessor
from smbshare.accessors.file_accessor import FileAccessor
from smbshare.config.configuration import SmbShareConfiguration
from smbshare.engine.health import ShareHealthCheck
from smbshare.engine.write import WriteMode
from smbshare.errors import SmbShareError
from smbshare.utils.logger import setup_logging

T = TypeVar("T")

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="File operations on SMB shares through smbclient.",
)

console = Console()
err_console = Console(stderr=True)


@app.callback()
def main(
        ctx: typer.Context,
        config: Optional[Path] = typer.Option(
            None, "--config", help="TOML configuration file"
        ),
        log_level: Optional[str] = typer.Option(
            None, "--log-level", help="debug | info | warning | error"
        ),
        log_file: Optional[str] = typer.Option(None, "--log-file", help="Also log to this file"),
        log_type: Optional[str] = typer.Option(None, "--log-type", help="plain | json"),
        no_color: bool = typer.Option(False, "--no-color", help="Disable colored log output"),
        kerberos: Optional[bool] = typer.Option(
            None, "--kerberos/--no-kerberos", help="Authenticate with the current Kerberos ticket"
        ),
        username: Optional[str] = typer.Option(None, "-u", "--username"),
        password: Optional[str] = typer.Option(
            None, "-p", "--password", envvar="SMBSHARE_PASSWORD"
        ),
        domain: Optional[str] = typer.Option(None, "-d", "--domain"),
        backend: Optional[str] = typer.Option(
            None, "--backend", help="auto | smbclient | local"
        ),
):
    if no_color:
        logger_mod.NO_COLOR = True

    cfg = SmbShareConfiguration()

    try:
        if config:
            cfg.load_from_toml(str(config))
    except (OSError, ValueError) as e:
        raise typer.BadParameter(str(e), param_hint="--config")

    # ---------- CLI overrides ----------
    if username:
        cfg.auth.username = username
        if kerberos is None:
            cfg.auth.kerberos = False
    if password:
        cfg.auth.password = password
    if domain:
        cfg.auth.domain = domain
    if kerberos is not None:
        cfg.auth.kerberos = kerberos
    if backend:
        cfg.backend.kind = backend
    if log_level:
        cfg.logging.level = log_level
    if log_file:
        cfg.logging.file = log_file
    if log_type:
        cfg.logging.type = log_type

    setup_logging(
        log_level=cfg.logging.level,
        log_file_path=cfg.logging.file,
        log_type=cfg.logging.type or "plain",
    )

    ctx.obj = cfg


def _run(ctx: typer.Context, op: Callable[[FileAccessor], Awaitable[T]]) -> T:
    cfg: SmbShareConfiguration = ctx.obj

    async def _main():
        accessor = await create_file_accessor(cfg)
        return await op(accessor)

    try:
        return asyncio.run(_main())
    except (SmbShareError, OSError, ValueError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(code=1)


@app.command("ls")
def list_files(
        ctx: typer.Context,
        directory: str = typer.Argument(..., help="//server/share[/path]"),
):
    """List the files in a directory."""
    files = _run(ctx, lambda fa: fa.enumerate_files(directory))

    table = Table(title=directory, show_header=True, header_style="bold")
    table.add_column("Name")
    for name in files:
        table.add_row(name)
    console.print(table)


@app.command("exists")
def exists(
        ctx: typer.Context,
        directory: str = typer.Argument(...),
        file_name: str = typer.Argument(...),
):
    """Check whether a file exists (case-insensitive). Exit code 1 when absent."""
    found = _run(ctx, lambda fa: fa.file_exists(file_name, directory))
    console.print("yes" if found else "no")
    if not found:
        raise typer.Exit(code=1)


@app.command("get")
def get(
        ctx: typer.Context,
        directory: str = typer.Argument(...),
        file_name: str = typer.Argument(...),
        dest: Optional[Path] = typer.Argument(None, help="Local destination (default: stdout)"),
):
    """Download a file."""

    async def _get(fa: FileAccessor) -> int:
        stream = await fa.read_file(directory, file_name)
        with stream:
            data = stream.read()
        if dest:
            dest.write_bytes(data)
        else:
            sys.stdout.buffer.write(data)
            sys.stdout.flush()
        return len(data)

    size = _run(ctx, _get)
    if dest:
        err_console.print(f"{directory}/{file_name} -> {dest} ({size} bytes)")


@app.command("put")
def put(
        ctx: typer.Context,
        source: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
        file_path: str = typer.Argument(..., help="//server/share/path/name"),
        mode: WriteMode = typer.Option(WriteMode.OVERWRITE, "--mode", case_sensitive=False),
):
    """Upload a local file."""

    async def _put(fa: FileAccessor):
        directory, file_name = fa.split_path(file_path)
        with open(source, "rb") as stream:
            await fa.write_file(directory, file_name, stream, mode)

    _run(ctx, _put)
    err_console.print(f"{source} -> {file_path} ({mode.value})")


@app.command("rm")
def remove(
        ctx: typer.Context,
        file_path: str = typer.Argument(...),
):
    """Delete a file."""

    async def _rm(fa: FileAccessor):
        directory, file_name = fa.split_path(file_path)
        await fa.delete_file(directory, file_name)

    _run(ctx, _rm)


@app.command("mv")
def move(
        ctx: typer.Context,
        source: str = typer.Argument(...),
        destination: str = typer.Argument(...),
):
    """Move a file (copy then delete; not atomic)."""

    async def _mv(fa: FileAccessor):
        source_dir, source_name = fa.split_path(source)
        dest_dir, dest_name = fa.split_path(destination)
        await fa.move_file(source_dir, source_name, dest_dir, dest_name)

    _run(ctx, _mv)


@app.command("mkdir")
def mkdir(
        ctx: typer.Context,
        directory: str = typer.Argument(...),
):
    """Create a directory (no-op when it exists)."""
    _run(ctx, lambda fa: fa.create_directory(directory))


@app.command("check")
def check(
        ctx: typer.Context,
        directory: str = typer.Argument(...),
):
    """Check connectivity to a share directory."""
    result = _run(ctx, lambda fa: ShareHealthCheck(fa, directory).check())

    if result.healthy:
        console.print(f"[green]Healthy[/green] {escape(result.description)}", highlight=False)
    else:
        console.print(f"[red]Unhealthy[/red] {escape(result.description)}", highlight=False)
        raise typer.Exit(code=1)
