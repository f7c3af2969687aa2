"""Errors raised while loading generators."""
from __future__ import annotations

from pathlib import Path  # noqa: TC003


class GeneratorError(Exception):
    """Base class for generator loading failures."""


class ScanError(GeneratorError):
    """The project tree could not be enumerated."""

    def __init__(self, path: Path, error: BaseException) -> None:
        self.path = path
        self.error = error
        super().__init__(f"scan: unable to read {path}: {error}")


class ParseError(GeneratorError):
    """A candidate generator package could not be parsed."""

    def __init__(self, file_path: Path, error: BaseException) -> None:
        self.file_path = file_path
        self.error = error
        super().__init__(f"unable to parse {file_path}: {error}")


class GeneratorLoadError(GeneratorError):
    """Loading the generator manifest failed."""
