"""Resolve project directories to dotted import paths."""
from __future__ import annotations

import re
import tomllib
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

import structlog

logger = structlog.get_logger()

_NAME_SEPARATORS = re.compile(r"[-.\s]+")


def normalize_module_name(name: str) -> str:
    """Turn a distribution or directory name into an import name.

    Example:
        >>> normalize_module_name("My-App.web")
        'my_app_web'
    """
    return _NAME_SEPARATORS.sub("_", name.strip()).lower()


def _read_project_name(pyproject: Path) -> str | None:
    if not pyproject.is_file():
        return None
    with pyproject.open("rb") as f:
        data = tomllib.load(f)
    name = data.get("project", {}).get("name")
    return name if isinstance(name, str) and name else None


@dataclass(frozen=True)
class Module:
    """The importable root of a project.

    Attributes:
        name: Top-level import name (``myapp``).
        directory: Project root on disk.
    """

    name: str
    directory: Path

    @classmethod
    def find(cls, root_path: Path, name: str | None = None) -> Module:
        """Work out the import name for the project at ``root_path``.

        Uses, in order: the explicit ``name``, ``[project].name`` from
        ``pyproject.toml``, then the root directory's own name.

        Raises:
            ValueError: If the resulting name is not a valid identifier.
            tomllib.TOMLDecodeError: If ``pyproject.toml`` is malformed.
        """
        raw = name or _read_project_name(root_path / "pyproject.toml")
        if raw is None:
            raw = root_path.resolve().name
        module_name = normalize_module_name(raw)
        if not module_name.isidentifier():
            msg = f"Cannot derive a module name for {root_path}: {raw!r}"
            raise ValueError(msg)
        logger.debug("resolved_module", module=module_name, root=str(root_path))
        return cls(name=module_name, directory=root_path)

    def import_path(self, directory: str) -> str:
        """Map a project-relative directory to its import path.

        Example:
            >>> Module("myapp", Path(".")).import_path("generator/sitemap")
            'myapp.generator.sitemap'

        Raises:
            ValueError: If a path segment is not importable.
        """
        parts = [p for p in PurePosixPath(directory).parts if p != "."]
        for part in parts:
            if not part.isidentifier():
                msg = f"Path contains a non-importable module segment: {part!r}"
                raise ValueError(msg)
        return ".".join([self.name, *parts])
