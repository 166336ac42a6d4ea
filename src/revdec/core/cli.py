"""CLI"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from revdec.core.decoder import ErrorDecoder
from revdec.core.errors import DecodeError
from revdec.core.formatting import format_args, panic_reason
from revdec.core.interface import InterfaceDescription, load_interface
from revdec.core.models import CollisionPolicy
from revdec.core.settings import settings
from revdec.core.utils import configure_logger

revdec_cli = typer.Typer(help="Decode smart-contract revert data against an ABI")


def _load(abi_path: Optional[Path]) -> InterfaceDescription:
    """Load the interface from --abi or the configured default."""
    configure_logger(settings.log_level, settings.log_file)

    abi_path = abi_path or settings.abi_path
    if abi_path is None:
        typer.echo("Error: no ABI given, use --abi or set REVDEC_ABI_PATH")
        raise typer.Exit(code=1)

    try:
        return load_interface(abi_path)
    except ValueError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)


@revdec_cli.command("error")
def decode_error_data(
    data: str = typer.Argument(..., help="Hex-encoded revert data, e.g. 0x08c379a0..."),
    abi_path: Optional[Path] = typer.Option(
        None,
        "--abi",
        "-a",
        help="Build artifact or ABI JSON file declaring the errors.",
    ),
    on_collision: Optional[CollisionPolicy] = typer.Option(
        None,
        "--on-collision",
        help="What to do when several errors share a selector.",
    ),
    include_builtins: Optional[bool] = typer.Option(
        None,
        "--builtins/--no-builtins",
        help="Also match Solidity's Error(string) and Panic(uint256).",
    ),
):
    """Decode error data into its name and arguments"""
    interface = _load(abi_path)

    try:
        decoder = ErrorDecoder(
            interface,
            policy=on_collision or settings.collision_policy,
            include_builtins=(
                settings.include_builtins if include_builtins is None else include_builtins
            ),
        )
    except ValueError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)

    try:
        result = decoder.decode(data)
    except DecodeError as e:
        typer.echo(f"Failed to decode error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Error name: {result.error_name}")
    typer.echo(f"Args: {format_args(result)}")
    reason = panic_reason(result)
    if reason:
        typer.echo(f"Reason: {reason}")


@revdec_cli.command("selectors")
def list_selectors(
    abi_path: Optional[Path] = typer.Option(
        None,
        "--abi",
        "-a",
        help="Build artifact or ABI JSON file declaring the errors.",
    ),
):
    """List the selector of every declared error"""
    interface = _load(abi_path)
    collisions = interface.collisions()

    table = Table(title=f"Errors in {interface.source}")
    table.add_column("Selector", style="cyan")
    table.add_column("Signature")
    table.add_column("Source", style="dim")

    for error in interface:
        selector = "0x" + error.selector.hex()
        if error.selector in collisions:
            selector = f"[yellow]{selector} (collision)[/yellow]"
        table.add_row(selector, error.signature, error.source or "")

    Console().print(table)


if __name__ == "__main__":
    revdec_cli()
