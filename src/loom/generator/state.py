"""Generator manifest model.

The manifest is what the driver-writing stage consumes: every generator the
build must run, where its output goes, and the imports the driver needs.
"""
from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from loom.generator.imports import camel_name

if TYPE_CHECKING:
    from collections.abc import Iterator

    from loom.generator.imports import Import


@dataclass(frozen=True, slots=True)
class CodeGenerator:
    """A generator entry in the manifest.

    Attributes:
        import_: Import the driver uses to reach the generator package.
        path: Project-relative POSIX output path the generator owns.
        camel: camelCase form of the import alias, for generated symbols.
            Unique across a manifest because aliases are.
    """

    import_: Import
    path: str
    camel: str

    @classmethod
    def create(cls, import_: Import, path: str) -> CodeGenerator:
        """Build an entry, deriving ``camel`` from the import alias."""
        return cls(import_=import_, path=path, camel=camel_name(import_.name))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "import": self.import_.to_dict(),
            "path": self.path,
            "camel": self.camel,
        }


@dataclass(frozen=True)
class State:
    """Complete generator manifest for one load.

    Instances are immutable once returned by the loader.
    """

    file_generators: tuple[CodeGenerator, ...] = ()
    file_servers: tuple[CodeGenerator, ...] = ()
    generate_dirs: tuple[CodeGenerator, ...] = ()
    serve_files: tuple[CodeGenerator, ...] = ()
    imports: tuple[Import, ...] = ()

    def generators(self) -> Iterator[CodeGenerator]:
        """Iterate over every entry in all four lists."""
        yield from self.file_generators
        yield from self.file_servers
        yield from self.generate_dirs
        yield from self.serve_files

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "file_generators": [g.to_dict() for g in self.file_generators],
            "file_servers": [g.to_dict() for g in self.file_servers],
            "generate_dirs": [g.to_dict() for g in self.generate_dirs],
            "serve_files": [g.to_dict() for g in self.serve_files],
            "imports": [i.to_dict() for i in self.imports],
        }

    def to_canonical_json(self) -> str:
        """Serialize to canonical JSON (camelCase, sorted keys, no whitespace).

        List order is preserved, since manifest order is significant.
        """
        data = {camel_name(key): value for key, value in self.to_dict().items()}
        return json.dumps(data, separators=(",", ":"), sort_keys=True, ensure_ascii=False)

    def fingerprint(self) -> str:
        """Compute SHA-256 fingerprint of canonical form.

        Returns:
            64-character hex string.
        """
        canonical = self.to_canonical_json()
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
