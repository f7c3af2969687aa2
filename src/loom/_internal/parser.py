"""Structural parsing of generator packages.

Generator packages are user code. They are inspected with ``ast`` only, never
imported, so loading a manifest has no side effects.
"""
from __future__ import annotations

import ast
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from loom.generator.errors import ParseError

logger = structlog.get_logger()

# Filename prefixes to skip
SKIP_FILE_PREFIXES = (".", "test_", "conftest")
# Filename suffixes to skip
SKIP_FILE_SUFFIXES = ("_test.py",)


def is_source_file(filename: str) -> bool:
    """Check whether a filename is a qualifying Python source file.

    Example:
        >>> is_source_file("generator.py")
        True
        >>> is_source_file("test_generator.py")
        False
    """
    if not filename.endswith(".py"):
        return False
    if filename.startswith(SKIP_FILE_PREFIXES):
        return False
    return not filename.endswith(SKIP_FILE_SUFFIXES)


@dataclass(frozen=True, slots=True)
class ClassInfo:
    """A top-level class and the methods it defines directly."""

    name: str
    file_path: Path
    methods: frozenset[str] = frozenset()

    def has_method(self, name: str) -> bool:
        """Check whether the class body defines ``name``."""
        return name in self.methods


@dataclass(frozen=True, slots=True)
class Package:
    """Structural description of a package directory."""

    directory: Path
    classes: dict[str, ClassInfo] = field(default_factory=dict)

    def find_class(self, name: str) -> ClassInfo | None:
        """Look up a top-level class by name."""
        return self.classes.get(name)


def _methods_of(node: ast.ClassDef) -> frozenset[str]:
    return frozenset(
        child.name
        for child in node.body
        if isinstance(child, ast.FunctionDef | ast.AsyncFunctionDef)
    )


class PackageParser:
    """Parses package directories under a project root.

    Example:
        >>> parser = PackageParser(Path("my-app"))
        >>> pkg = parser.parse("generator/sitemap")
        >>> pkg.find_class("Generator").has_method("generate")
        True
    """

    def __init__(self, root_path: Path) -> None:
        self.root_path = root_path

    def parse(self, directory: str) -> Package:
        """Parse the source files directly inside ``directory``.

        Args:
            directory: Project-relative POSIX directory.

        Returns:
            Package describing its top-level classes. When two files define
            the same class name, the first file in name order wins.

        Raises:
            ParseError: If a file cannot be read or is not valid Python.
        """
        package_dir = self.root_path / directory
        try:
            files = sorted(
                entry
                for entry in package_dir.iterdir()
                if entry.is_file() and is_source_file(entry.name)
            )
        except OSError as e:
            raise ParseError(package_dir, e) from e

        classes: dict[str, ClassInfo] = {}
        for file_path in files:
            for info in self._parse_file(file_path):
                classes.setdefault(info.name, info)

        logger.debug(
            "parsed_package",
            directory=directory,
            file_count=len(files),
            classes=sorted(classes),
        )
        return Package(directory=package_dir, classes=classes)

    def _parse_file(self, file_path: Path) -> list[ClassInfo]:
        try:
            source = file_path.read_text(encoding="utf-8")
            tree = ast.parse(source, filename=str(file_path))
        except (OSError, SyntaxError, UnicodeDecodeError, ValueError) as e:
            raise ParseError(file_path, e) from e

        return [
            ClassInfo(name=node.name, file_path=file_path, methods=_methods_of(node))
            for node in tree.body
            if isinstance(node, ast.ClassDef)
        ]
