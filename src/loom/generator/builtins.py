"""Framework generators that every project gets."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BuiltinGenerator:
    """A framework-owned generator at a fixed output path."""

    import_path: str
    path: str


FILE_GENERATORS = (
    BuiltinGenerator(import_path="loom.framework.app", path="loom/cmd/app/main.py"),
    BuiltinGenerator(import_path="loom.framework.web", path="loom/internal/web/web.py"),
    BuiltinGenerator(
        import_path="loom.framework.controller",
        path="loom/internal/web/controller/controller.py",
    ),
    BuiltinGenerator(import_path="loom.framework.view", path="loom/internal/web/view/view.py"),
    BuiltinGenerator(
        import_path="loom.framework.public",
        path="loom/internal/web/public/public.py",
    ),
    BuiltinGenerator(import_path="loom.framework.view.ssr", path="loom/view/_ssr.js"),
)

FILE_SERVERS = (
    BuiltinGenerator(import_path="loom.framework.view.dom", path="loom/view"),
    BuiltinGenerator(import_path="loom.framework.view.nodemodules", path="loom/node_modules"),
)
