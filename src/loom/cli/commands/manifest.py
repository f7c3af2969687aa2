"""Manifest command implementation."""
from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from loom.cli.config import get_config
from loom.generator import GeneratorError, State, load_manifest

console = Console()
err_console = Console(stderr=True)


def load_project(root: Path | None) -> tuple[Path, State]:
    """Load the manifest for ``root`` or the configured project root.

    Exits with status 1 if loading fails.
    """
    config = get_config()
    root_path = root or config.root

    try:
        state = load_manifest(root_path, module_name=config.module_name)
    except GeneratorError as e:
        err_console.print(f"[red]✗[/red] {e}")
        raise SystemExit(1) from None
    return root_path, state


def run_manifest(*, root: Path | None, output: Path | None, json_output: bool) -> None:
    """Execute manifest command.

    Args:
        root: Project root override.
        output: Path to write manifest file.
        json_output: Output raw JSON.
    """
    if not json_output:
        console.print(f"[blue]i[/blue] Loading generators in {root or get_config().root}...")

    _, state = load_project(root)

    if json_output:
        console.print_json(state.to_canonical_json())
    else:
        _print_summary(state)

    if output:
        output.write_text(state.to_canonical_json())
        console.print(f"[green]✓[/green] Manifest written to {output}")


def _print_summary(state: State) -> None:
    """Print manifest summary."""
    table = Table(title="Generators")
    table.add_column("Kind", style="cyan")
    table.add_column("Path")
    table.add_column("Import")
    table.add_column("Alias", style="dim")

    kinds = (
        ("file generator", state.file_generators),
        ("file server", state.file_servers),
        ("generate dir", state.generate_dirs),
        ("serve files", state.serve_files),
    )
    for kind, generators in kinds:
        for g in generators:
            table.add_row(kind, g.path, g.import_.path, g.import_.name)

    console.print(table)

    tree = Tree("[bold]Imports[/bold]")
    for imp in state.imports:
        tree.add(f"{imp.name} [dim]{imp.path}[/dim]")
    console.print(tree)

    console.print(f"[green]✓[/green] Fingerprint: {state.fingerprint()[:12]}")
