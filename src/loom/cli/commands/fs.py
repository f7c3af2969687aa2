"""File tree listing command implementation.

The listing reflects the project as the build sees it: files on disk plus the
paths the manifest's generators will produce or serve.
"""
from __future__ import annotations

from pathlib import Path, PurePosixPath

from rich.console import Console

from loom.cli.commands.manifest import load_project
from loom.generator import State

console = Console()
err_console = Console(stderr=True)


def _generated_entries(state: State) -> list[tuple[PurePosixPath, bool]]:
    """Output paths with whether each one is a directory."""
    entries = [(PurePosixPath(g.path), False) for g in state.file_generators]
    for generators in (state.file_servers, state.generate_dirs, state.serve_files):
        entries.extend((PurePosixPath(g.path), True) for g in generators)
    return entries


def list_directory(root_path: Path, state: State, path: str) -> list[str]:
    """List the entries of ``path`` in the project's virtual tree.

    Args:
        root_path: Project root directory.
        state: Manifest for the project.
        path: Project-relative POSIX directory.

    Returns:
        Entry names, directories first then files, each group sorted by
        name. Directory names end with ``/``.

    Raises:
        FileNotFoundError: If nothing exists at ``path``.
        NotADirectoryError: If ``path`` is a file.
    """
    target = PurePosixPath(path)
    if target.is_absolute() or ".." in target.parts:
        msg = f"Path must be relative to the project root: {path}"
        raise ValueError(msg)

    entries: dict[str, bool] = {}
    found = False

    on_disk = root_path / target
    if on_disk.is_file():
        msg = f"Not a directory: {path}"
        raise NotADirectoryError(msg)
    if on_disk.is_dir():
        found = True
        for child in on_disk.iterdir():
            entries[child.name] = child.is_dir()

    depth = len(target.parts)
    for generated, is_dir in _generated_entries(state):
        if generated == target:
            if not is_dir:
                msg = f"Not a directory: {path}"
                raise NotADirectoryError(msg)
            found = True
            continue
        if not generated.is_relative_to(target):
            continue
        found = True
        rest = generated.parts[depth:]
        name = rest[0]
        entries[name] = entries.get(name, False) or is_dir or len(rest) > 1

    if not found:
        msg = f"No such directory: {path}"
        raise FileNotFoundError(msg)

    dirs = sorted(name for name, is_dir in entries.items() if is_dir)
    files = sorted(name for name, is_dir in entries.items() if not is_dir)
    return [f"{name}/" for name in dirs] + files


def run_ls(*, path: str, root: Path | None) -> None:
    """Execute the fs ls command.

    Args:
        path: Project-relative directory to list.
        root: Project root override.
    """
    root_path, state = load_project(root)

    try:
        names = list_directory(root_path, state, path)
    except (OSError, ValueError) as e:
        err_console.print(f"[red]✗[/red] {e}")
        raise SystemExit(1) from None

    for name in names:
        console.print(name, markup=False, highlight=False)
