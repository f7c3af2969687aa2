"""Capability detection for generator packages.

A package is a generator when it defines a top-level ``Generator`` class.
What it can do is read off the methods that class defines; there is no base
class or registration step.
"""
from __future__ import annotations

from enum import Flag, auto
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from loom._internal.parser import PackageParser

logger = structlog.get_logger()

GENERATOR_CLASS = "Generator"


class Capability(Flag):
    """Roles a generator can fill, keyed by the method that provides them."""

    NONE = 0
    GENERATE = auto()
    SERVE = auto()
    GENERATE_CMD = auto()
    GENERATE_PKG = auto()

    @property
    def method_name(self) -> str:
        """Method a Generator class defines to offer this capability."""
        return _METHOD_NAMES[self]


_METHOD_NAMES = {
    Capability.GENERATE: "generate",
    Capability.SERVE: "serve",
    Capability.GENERATE_CMD: "generate_cmd",
    Capability.GENERATE_PKG: "generate_pkg",
}

# Registration order within a single generator
CAPABILITIES = tuple(_METHOD_NAMES)


class Inspector:
    """Classifies candidate directories.

    Example:
        >>> inspector = Inspector(PackageParser(Path("my-app")))
        >>> inspector.inspect("generator/sitemap")
        <Capability.GENERATE: 1>
    """

    def __init__(self, parser: PackageParser) -> None:
        self.parser = parser

    def inspect(self, directory: str) -> Capability | None:
        """Report the capabilities of the generator in ``directory``.

        Returns:
            The capability set, which may be empty, or None if the package
            has no Generator class.

        Raises:
            ParseError: If the package cannot be parsed.
        """
        package = self.parser.parse(directory)
        generator = package.find_class(GENERATOR_CLASS)
        if generator is None:
            logger.debug(
                "skipping_package",
                directory=directory,
                reason=f"no {GENERATOR_CLASS} class",
            )
            return None

        capabilities = Capability.NONE
        for capability in CAPABILITIES:
            if generator.has_method(capability.method_name):
                capabilities |= capability
        return capabilities
