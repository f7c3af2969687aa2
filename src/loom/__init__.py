"""Loom generator discovery.

Finds the generators a project defines, works out which capabilities each
one offers and composes them, together with the framework's built-in
generators, into a single deterministic manifest.

Example:
    >>> from pathlib import Path
    >>> from loom import load_manifest
    >>> state = load_manifest(Path("my-app"))
    >>> [g.path for g in state.file_generators][:2]
    ['loom/cmd/app/main.py', 'loom/internal/web/web.py']
"""
from __future__ import annotations

from loom.generator import (
    Capability,
    CodeGenerator,
    GeneratorError,
    GeneratorLoader,
    GeneratorLoadError,
    Import,
    ImportSet,
    ParseError,
    ScanError,
    State,
    load_manifest,
)

__version__ = "0.1.0"

__all__ = [
    "Capability",
    "CodeGenerator",
    "GeneratorError",
    "GeneratorLoadError",
    "GeneratorLoader",
    "Import",
    "ImportSet",
    "ParseError",
    "ScanError",
    "State",
    "__version__",
    "load_manifest",
]
