"""Shared fixtures for building throwaway projects."""
from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from textwrap import dedent

import pytest

WriteFile = Callable[[str, str], Path]


def generator_source(*methods: str) -> str:
    """Source for a Generator class defining ``methods``."""
    body = "".join(f"\n    def {m}(self, fsys, file):\n        pass\n" for m in methods)
    return "class Generator:\n" + (body or "    pass\n")


@pytest.fixture
def write_file(tmp_path: Path) -> WriteFile:
    """Write a file below tmp_path, creating parent directories."""

    def write(relative: str, content: str = "") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dedent(content))
        return path

    return write


@pytest.fixture
def write_generator(write_file: WriteFile) -> Callable[..., Path]:
    """Write ``<directory>/generator.py`` with a Generator class."""

    def write(directory: str, *methods: str) -> Path:
        return write_file(f"{directory}/generator.py", generator_source(*methods))

    return write
