"""CLI module."""
from __future__ import annotations

from loom.cli.config import LoomConfig, get_config
from loom.cli.main import app

__all__ = ["LoomConfig", "app", "get_config"]
