"""Generator discovery and manifest composition."""
from __future__ import annotations

from loom.generator.builtins import FILE_GENERATORS, FILE_SERVERS, BuiltinGenerator
from loom.generator.errors import GeneratorError, GeneratorLoadError, ParseError, ScanError
from loom.generator.imports import Import, ImportSet
from loom.generator.inspector import Capability, Inspector
from loom.generator.loader import GeneratorLoader, load_manifest
from loom.generator.scanner import CandidateScanner
from loom.generator.state import CodeGenerator, State

__all__ = [
    "FILE_GENERATORS",
    "FILE_SERVERS",
    "BuiltinGenerator",
    "CandidateScanner",
    "Capability",
    "CodeGenerator",
    "GeneratorError",
    "GeneratorLoadError",
    "GeneratorLoader",
    "Import",
    "ImportSet",
    "Inspector",
    "ParseError",
    "ScanError",
    "State",
    "load_manifest",
]
