"""Generator manifest loading.

Registration order is fixed and is part of the contract, since it decides
both precedence and the layout of generated driver code:

1. Built-in file generators, in table order
2. Built-in file servers, in table order
3. Discovered generators, in scan order. Within one generator the
   capabilities register as generate, serve, generate_cmd, generate_pkg.

Every entry claims its output path. A later registration for a path that is
already claimed is dropped, so built-ins can never be shadowed by a user
generator of the same name.
"""
from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

import structlog

from loom._internal.modules import Module
from loom._internal.parser import PackageParser
from loom.generator.builtins import FILE_GENERATORS, FILE_SERVERS
from loom.generator.errors import GeneratorError, GeneratorLoadError
from loom.generator.imports import Import, ImportSet
from loom.generator.inspector import CAPABILITIES, Capability, Inspector
from loom.generator.scanner import CandidateScanner
from loom.generator.state import CodeGenerator, State

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = structlog.get_logger()

STD_IMPORTS = ("pathlib",)

# Runtime support imports for the driver: filesystem, module resolution, logging
RUNTIME_IMPORTS = (
    Import(path="loom.package.genfs", name="genfs"),
    Import(path="loom.package.pymod", name="pymod"),
    Import(path="loom.package.log", name="log"),
)

_INTERNAL_PREFIX = "loom/internal/"
_GENERATOR_PREFIX = "generator/"


def generator_key(directory: str) -> str:
    """Strip the generator root from a candidate directory.

    Example:
        >>> generator_key("loom/internal/generator/tailwind")
        'tailwind'
        >>> generator_key("generator/sitemap")
        'sitemap'
    """
    key = directory.removeprefix(_INTERNAL_PREFIX)
    return key.removeprefix(_GENERATOR_PREFIX)


def output_path(capability: Capability, key: str) -> str:
    """Output path a capability writes to for a generator key."""
    if capability in (Capability.GENERATE, Capability.SERVE):
        return str(PurePosixPath("loom", "internal", key))
    if capability is Capability.GENERATE_CMD:
        return str(PurePosixPath("loom", "cmd", key))
    if capability is Capability.GENERATE_PKG:
        return str(PurePosixPath("loom", "pkg", key))
    msg = f"No output path for capability {capability!r}"
    raise ValueError(msg)


class _Registration:
    """Mutable working state for a single load."""

    def __init__(self, imports: ImportSet) -> None:
        self.imports = imports
        self.claimed: set[str] = set()
        self.file_generators: list[CodeGenerator] = []
        self.file_servers: list[CodeGenerator] = []
        self.generate_dirs: list[CodeGenerator] = []
        self.serve_files: list[CodeGenerator] = []

    def register(self, target: list[CodeGenerator], import_path: str, path: str) -> bool:
        """Append an entry unless ``path`` is already claimed."""
        if path in self.claimed:
            logger.debug("skipping_generator", path=path, import_path=import_path)
            return False
        self.claimed.add(path)
        name = self.imports.add(import_path)
        target.append(CodeGenerator.create(Import(path=import_path, name=name), path))
        logger.debug("registered_generator", path=path, import_path=import_path, name=name)
        return True

    def finish(self) -> State:
        for std in STD_IMPORTS:
            self.imports.add_std(std)
        for runtime in RUNTIME_IMPORTS:
            self.imports.add_named(runtime.name, runtime.path)
        return State(
            file_generators=tuple(self.file_generators),
            file_servers=tuple(self.file_servers),
            generate_dirs=tuple(self.generate_dirs),
            serve_files=tuple(self.serve_files),
            imports=tuple(self.imports.list()),
        )


class GeneratorLoader:
    """Composes the generator manifest for a project.

    Example:
        >>> root = Path("my-app")
        >>> loader = GeneratorLoader(Module.find(root))
        >>> state = loader.load(root)
        >>> len(state.file_generators)
        6
    """

    def __init__(
        self,
        module: Module,
        parser: PackageParser | None = None,
        *,
        imports: ImportSet | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            module: Import root used to resolve generator directories.
            parser: Package parser; defaults to one rooted at the loaded project.
            imports: Alias registry to use instead of a fresh one per load.
        """
        self.module = module
        self.parser = parser
        self._imports = imports

    def load(self, root_path: Path) -> State:
        """Load the manifest for the project at ``root_path``.

        Raises:
            GeneratorLoadError: If scanning, parsing or module resolution
                fails. The original error is chained.
        """
        try:
            return self._load(root_path)
        except (GeneratorError, ValueError) as e:
            msg = f"generator: {e}"
            raise GeneratorLoadError(msg) from e

    def _load(self, root_path: Path) -> State:
        if self._imports is not None:
            imports = self._imports
            imports.reserve(self._reserved())
        else:
            imports = ImportSet(self._reserved())
        reg = _Registration(imports)

        directories = CandidateScanner(root_path).scan()

        for builtin in FILE_GENERATORS:
            reg.register(reg.file_generators, builtin.import_path, builtin.path)
        for builtin in FILE_SERVERS:
            reg.register(reg.file_servers, builtin.import_path, builtin.path)

        inspector = Inspector(self.parser or PackageParser(root_path))
        for directory in directories:
            capabilities = inspector.inspect(directory)
            if capabilities is None:
                continue
            self._register_capabilities(reg, directory, capabilities)

        state = reg.finish()
        logger.info(
            "load_complete",
            file_generators=len(state.file_generators),
            file_servers=len(state.file_servers),
            generate_dirs=len(state.generate_dirs),
            serve_files=len(state.serve_files),
            imports=len(state.imports),
        )
        return state

    def _register_capabilities(
        self,
        reg: _Registration,
        directory: str,
        capabilities: Capability,
    ) -> None:
        key = generator_key(directory)
        free: list[tuple[Capability, str]] = []
        for capability in CAPABILITIES:
            if capability not in capabilities:
                continue
            path = output_path(capability, key)
            if path in reg.claimed:
                logger.debug("skipping_generator", path=path, directory=directory)
                continue
            free.append((capability, path))

        # Only resolve the import once something is left to register
        if not free:
            return
        import_path = self.module.import_path(directory)
        for capability, path in free:
            target = reg.serve_files if capability is Capability.SERVE else reg.generate_dirs
            reg.register(target, import_path, path)

    @staticmethod
    def _reserved() -> Iterable[Import]:
        return [*(Import(path=p, name=p) for p in STD_IMPORTS), *RUNTIME_IMPORTS]


def load_manifest(root_path: Path, *, module_name: str | None = None) -> State:
    """Load the generator manifest for the project at ``root_path``.

    Args:
        root_path: Project root directory.
        module_name: Import name override; see ``Module.find``.

    Raises:
        GeneratorLoadError: If loading fails.
    """
    try:
        module = Module.find(root_path, module_name)
    except ValueError as e:
        msg = f"generator: {e}"
        raise GeneratorLoadError(msg) from e
    return GeneratorLoader(module).load(root_path)
