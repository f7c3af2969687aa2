"""Main CLI entry point using Typer.

This module defines the top-level CLI commands:
- loom manifest: Show the generator manifest for a project
- loom tool fs ls: List a directory of the generated project tree
"""
from __future__ import annotations

import sys
from pathlib import Path  # noqa: TC003 - Typer requires runtime access
from typing import Annotated

import structlog
import typer
from rich.console import Console

from loom import __version__
from loom.cli.config import get_config

app = typer.Typer(
    name="loom",
    help="Loom - Generator discovery CLI",
    no_args_is_help=True,
)
tool_app = typer.Typer(help="Low-level tools for debugging generators.", no_args_is_help=True)
fs_app = typer.Typer(help="Inspect the generated file tree.", no_args_is_help=True)
tool_app.add_typer(fs_app, name="fs")
app.add_typer(tool_app, name="tool")

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"loom {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output."),
    ] = False,
) -> None:
    """Loom - Generator discovery CLI.

    Use 'loom COMMAND --help' for information on specific commands.
    """
    level = 10 if verbose else get_config().log_level_number  # 10 is DEBUG
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


@app.command()
def manifest(
    root: Annotated[
        Path | None,
        typer.Option("--root", "-r", help="Project root (defaults to LOOM_ROOT or '.')."),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write manifest JSON to file."),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output raw JSON."),
    ] = False,
) -> None:
    """Show the generator manifest.

    Discovers the project's generators and prints every generator, its
    output path and the imports the generated driver needs.

    Examples:
        loom manifest

        loom manifest --json

        loom manifest --root ./my-app --output manifest.json
    """
    from loom.cli.commands.manifest import run_manifest  # noqa: PLC0415

    run_manifest(root=root, output=output, json_output=json_output)


@fs_app.command("ls")
def fs_ls(
    path: Annotated[
        str,
        typer.Argument(help="Project-relative directory to list."),
    ] = ".",
    root: Annotated[
        Path | None,
        typer.Option("--root", "-r", help="Project root (defaults to LOOM_ROOT or '.')."),
    ] = None,
) -> None:
    """List a directory of the generated project tree.

    Directories are listed first with a trailing slash.

    Examples:
        loom tool fs ls

        loom tool fs ls loom/internal
    """
    from loom.cli.commands.fs import run_ls  # noqa: PLC0415

    run_ls(path=path, root=root)


if __name__ == "__main__":
    app()
