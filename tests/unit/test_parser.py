"""Tests for structural package parsing."""
from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


class TestIsSourceFile:
    """Tests for is_source_file."""

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("generator.py", True),
            ("__init__.py", True),
            ("README.md", False),
            ("test_generator.py", False),
            ("generator_test.py", False),
            ("conftest.py", False),
            (".hidden.py", False),
        ],
    )
    def test_filenames(self, filename: str, expected: bool) -> None:
        """Only non-test Python modules qualify."""
        from loom._internal.parser import is_source_file

        assert is_source_file(filename) is expected


class TestPackageParser:
    """Tests for PackageParser."""

    def test_finds_class_and_methods(
        self, tmp_path: Path, write_file: Callable[..., Path]
    ) -> None:
        """Top-level classes and their methods are collected."""
        from loom._internal.parser import PackageParser

        write_file(
            "generator/sitemap/generator.py",
            """
            class Generator:
                def generate(self, fsys, file):
                    pass

                async def serve(self, fsys, file):
                    pass

                name = "sitemap"
            """,
        )

        pkg = PackageParser(tmp_path).parse("generator/sitemap")
        generator = pkg.find_class("Generator")

        assert generator is not None
        assert generator.has_method("generate")
        assert generator.has_method("serve")
        assert not generator.has_method("name")
        assert not generator.has_method("generate_cmd")

    def test_missing_class(self, tmp_path: Path, write_file: Callable[..., Path]) -> None:
        """find_class returns None for undefined names."""
        from loom._internal.parser import PackageParser

        write_file("generator/util/helpers.py", "def helper():\n    pass\n")

        pkg = PackageParser(tmp_path).parse("generator/util")

        assert pkg.find_class("Generator") is None

    def test_ignores_nested_classes(
        self, tmp_path: Path, write_file: Callable[..., Path]
    ) -> None:
        """Only module-level classes count."""
        from loom._internal.parser import PackageParser

        write_file(
            "generator/nested/mod.py",
            """
            def factory():
                class Generator:
                    def generate(self):
                        pass
                return Generator
            """,
        )

        pkg = PackageParser(tmp_path).parse("generator/nested")

        assert pkg.find_class("Generator") is None

    def test_does_not_execute_code(
        self, tmp_path: Path, write_file: Callable[..., Path]
    ) -> None:
        """Parsing never runs the package."""
        from loom._internal.parser import PackageParser

        write_file(
            "generator/side/generator.py",
            """
            raise RuntimeError("imported")

            class Generator:
                def generate(self):
                    pass
            """,
        )

        pkg = PackageParser(tmp_path).parse("generator/side")

        assert pkg.find_class("Generator") is not None

    def test_first_file_wins(self, tmp_path: Path, write_file: Callable[..., Path]) -> None:
        """A class defined in two files is taken from the first in name order."""
        from loom._internal.parser import PackageParser

        write_file("generator/dup/a.py", "class Generator:\n    def serve(self):\n        pass\n")
        write_file("generator/dup/b.py", "class Generator:\n    def generate(self):\n        pass\n")

        generator = PackageParser(tmp_path).parse("generator/dup").find_class("Generator")

        assert generator is not None
        assert generator.file_path.name == "a.py"
        assert generator.has_method("serve")
        assert not generator.has_method("generate")

    def test_skips_test_modules(self, tmp_path: Path, write_file: Callable[..., Path]) -> None:
        """Test modules in a package are not parsed."""
        from loom._internal.parser import PackageParser

        write_file("generator/t/test_generator.py", "class Generator:\n    pass\n")
        write_file("generator/t/__init__.py", "")

        pkg = PackageParser(tmp_path).parse("generator/t")

        assert pkg.find_class("Generator") is None

    def test_syntax_error_raises(self, tmp_path: Path, write_file: Callable[..., Path]) -> None:
        """Broken source is a ParseError naming the file."""
        from loom._internal.parser import PackageParser
        from loom.generator.errors import ParseError

        broken = write_file("generator/broken/generator.py", "class Generator(:\n")

        with pytest.raises(ParseError) as exc_info:
            PackageParser(tmp_path).parse("generator/broken")

        assert exc_info.value.file_path == broken
        assert "generator.py" in str(exc_info.value)

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        """An unreadable directory is a ParseError."""
        from loom._internal.parser import PackageParser
        from loom.generator.errors import ParseError

        with pytest.raises(ParseError):
            PackageParser(tmp_path).parse("generator/missing")
