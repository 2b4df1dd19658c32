"""Destination path computation for generated packages."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .config import ConfigResolver

__all__ = ["DEFAULT_BASE_PATH", "PathResolver"]

DEFAULT_BASE_PATH = "packages"


@dataclass(slots=True)
class PathResolver:
    """Compute ``<base>/<vendor>/<package>`` without touching the filesystem.

    ``root`` is the application directory the command runs for. A relative
    ``base_path`` or override path is anchored there.
    """

    root: Path
    base_path: str = DEFAULT_BASE_PATH

    @classmethod
    def from_config(cls, resolver: ConfigResolver, root: str | Path | None = None) -> "PathResolver":
        base = resolver.get_string("directories.base_path", DEFAULT_BASE_PATH) or DEFAULT_BASE_PATH
        return cls(root=Path(root) if root is not None else Path.cwd(), base_path=base)

    def resolve(self, vendor: str, package: str, override: str | Path | None = None) -> Path:
        base = Path(override) if override else Path(self.base_path)
        if not base.is_absolute():
            base = Path(self.root) / base
        return Path(os.path.abspath(base / vendor / package))
