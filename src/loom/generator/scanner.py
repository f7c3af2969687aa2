"""Candidate generator directory scanning.

Generators live in two places inside a project:

- ``generator/**`` for user generators, searched recursively
- ``loom/internal/generator/*/`` for framework-internal generators, exactly
  one level deep

Any directory holding at least one Python source file is a candidate.
Whether it really defines a generator is decided later by the inspector.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

import structlog

from loom._internal.parser import is_source_file
from loom.generator.errors import ScanError

logger = structlog.get_logger()

# Files under this prefix belong to the generator mechanism itself
RESERVED_PREFIX = "generator/generator/"


@dataclass(frozen=True, slots=True)
class SearchRoot:
    """A directory the scanner searches for generator packages.

    Attributes:
        prefix: Project-relative POSIX directory.
        recursive: Search every level below ``prefix``. When false, only
            source files exactly one directory below ``prefix`` count.
    """

    prefix: str
    recursive: bool


SEARCH_ROOTS = (
    SearchRoot(prefix="generator", recursive=True),
    SearchRoot(prefix="loom/internal/generator", recursive=False),
)


def is_reserved(path: str) -> bool:
    """Check if a project-relative file path is in the reserved namespace.

    Packages in ``generator/generator/...`` are meant for internal
    generators, not user-defined ones.
    """
    return path.startswith(RESERVED_PREFIX)


class CandidateScanner:
    """Finds directories that may contain a generator.

    Example:
        >>> scanner = CandidateScanner(root_path=Path("my-app"))
        >>> scanner.scan()
        ['generator/sitemap', 'loom/internal/generator/tailwind']
    """

    # Directory names to skip (exact match in path parts)
    SKIP_DIRS = frozenset(
        [
            "__pycache__",
            ".venv",
            "venv",
            ".git",
            ".mypy_cache",
            ".ruff_cache",
            ".pytest_cache",
            "site-packages",
        ]
    )

    def __init__(
        self,
        root_path: Path,
        search_roots: tuple[SearchRoot, ...] = SEARCH_ROOTS,
    ) -> None:
        """Initialize the scanner.

        Args:
            root_path: Project root directory.
            search_roots: Directories to search.
        """
        self.root_path = root_path
        self.search_roots = search_roots

    def scan(self) -> list[str]:
        """Return candidate directories.

        Returns:
            Project-relative POSIX directories, each listed once, sorted
            lexicographically.

        Raises:
            ScanError: If a directory cannot be read.
        """
        directories: set[str] = set()
        for search_root in self.search_roots:
            for file_path in self._walk(search_root):
                if is_reserved(file_path):
                    logger.debug("skipping_reserved", path=file_path)
                    continue
                directories.add(str(PurePosixPath(file_path).parent))

        candidates = sorted(directories)
        logger.info(
            "scanning_generators",
            root=str(self.root_path),
            candidate_count=len(candidates),
        )
        return candidates

    def _walk(self, search_root: SearchRoot) -> list[str]:
        """Walk a search root and collect qualifying source files.

        Returns:
            Project-relative POSIX file paths.
        """
        top = self.root_path / search_root.prefix
        if not top.is_dir():
            return []

        def onerror(err: OSError) -> None:
            raise ScanError(Path(err.filename or top), err) from err

        found: list[str] = []
        for dirpath, dirnames, filenames in os.walk(top, topdown=True, onerror=onerror):
            relative = PurePosixPath(Path(dirpath).relative_to(self.root_path).as_posix())
            depth = len(relative.parts) - len(PurePosixPath(search_root.prefix).parts)

            if not search_root.recursive and depth >= 1:
                # Nothing deeper than one level below the root counts
                dirnames[:] = []
            else:
                dirnames[:] = [d for d in dirnames if d not in self.SKIP_DIRS]

            if not search_root.recursive and depth != 1:
                continue

            for filename in filenames:
                if is_source_file(filename):
                    found.append(str(relative / filename))

        return found
