"""Import alias allocation for generated driver code.

The generated driver imports every generator package it wires together.
Two packages can share a trailing segment (``loom.framework.view`` and
``myapp.generator.view``), so each import path gets a local alias that is
unique within the driver module.
"""
from __future__ import annotations

import keyword
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

_INVALID_CHARS = re.compile(r"[^a-z0-9_]")
_DEFAULT_NAME = "pkg"
_WORD_BREAK = re.compile(r"_([a-z])")


@dataclass(frozen=True, slots=True)
class Import:
    """A single import the driver declares.

    Attributes:
        path: Dotted import reference (``loom.framework.view``).
        name: Local alias bound to it (``view``).
    """

    path: str
    name: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary."""
        return {"name": self.name, "path": self.path}


def assume_name(path: str) -> str:
    """Derive a candidate alias from an import path.

    Uses the trailing dotted segment, lowercased and stripped down to a valid
    Python identifier. Keywords get a trailing underscore.

    Example:
        >>> assume_name("loom.framework.view.node-modules")
        'nodemodules'
        >>> assume_name("myapp.generator.import")
        'import_'
    """
    segment = path.rsplit(".", 1)[-1].lower()
    name = _INVALID_CHARS.sub("", segment).lstrip("_0123456789")
    if not name:
        name = _DEFAULT_NAME
    if keyword.iskeyword(name):
        name += "_"
    return name


def camel_name(alias: str) -> str:
    """camelCase form of an alias, used for generated symbol names.

    Only an underscore followed by a lowercase letter is folded, so keyword
    suffixes survive and distinct lowercase aliases stay distinct.

    Example:
        >>> camel_name("node_modules")
        'nodeModules'
        >>> camel_name("import_")
        'import_'
        >>> camel_name("foo__bar")
        'foo_Bar'
    """
    return _WORD_BREAK.sub(lambda m: m.group(1).upper(), alias)


class ImportSet:
    """Allocates collision-free aliases for import paths.

    Aliases are handed out in call order and never change once allocated, so
    adding the same path twice returns the same alias.

    Example:
        >>> imports = ImportSet()
        >>> imports.add("loom.framework.view")
        'view'
        >>> imports.add("myapp.generator.view")
        'view2'
        >>> imports.add("loom.framework.view")
        'view'
    """

    def __init__(self, reserved: Iterable[Import] = ()) -> None:
        """Initialize the set.

        Args:
            reserved: Imports whose aliases are held back for later explicit
                registration. They are not listed until added.
        """
        self._by_path: dict[str, Import] = {}
        self._names: set[str] = set()
        self._reserved: dict[str, str] = {}
        self.reserve(reserved)

    def reserve(self, imports: Iterable[Import]) -> None:
        """Hold aliases back so only their own paths can take them.

        Raises:
            ValueError: If an alias is already bound to another path.
        """
        for imp in imports:
            existing = self._by_path.get(imp.path)
            if imp.name in self._names and (existing is None or existing.name != imp.name):
                msg = f"Import alias {imp.name!r} is already taken"
                raise ValueError(msg)
            self._reserved[imp.name] = imp.path

    def add(self, path: str) -> str:
        """Return the alias for ``path``, allocating one on first use."""
        existing = self._by_path.get(path)
        if existing is not None:
            return existing.name

        base = assume_name(path)
        name = base
        counter = 2
        while not self._available(name, path):
            name = f"{base}{counter}"
            counter += 1
        return self._bind(name, path)

    def add_named(self, name: str, path: str) -> str:
        """Bind ``path`` to an explicit alias.

        Raises:
            ValueError: If ``name`` is already bound to another path, or
                ``path`` already has a different alias.
        """
        existing = self._by_path.get(path)
        if existing is not None:
            if existing.name != name:
                msg = f"Import {path!r} is already aliased as {existing.name!r}"
                raise ValueError(msg)
            return name
        if name in self._names:
            msg = f"Import alias {name!r} is already taken"
            raise ValueError(msg)
        return self._bind(name, path)

    def add_std(self, path: str) -> str:
        """Register a standard library import under its own trailing name."""
        return self.add_named(path.rsplit(".", 1)[-1], path)

    def list(self) -> list[Import]:
        """All imports in allocation order."""
        return list(self._by_path.values())

    def _available(self, name: str, path: str) -> bool:
        if name in self._names:
            return False
        reserved_for = self._reserved.get(name)
        return reserved_for is None or reserved_for == path

    def _bind(self, name: str, path: str) -> str:
        self._by_path[path] = Import(path=path, name=name)
        self._names.add(name)
        return name

    def __len__(self) -> int:
        return len(self._by_path)

    def __contains__(self, path: object) -> bool:
        return path in self._by_path
