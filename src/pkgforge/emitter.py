"""Guarded filesystem writes for the package generator."""

from __future__ import annotations

import logging
from pathlib import Path

from .config import ConfigResolver

__all__ = ["DEFAULT_PERMISSIONS", "FileEmitter"]

LOGGER = logging.getLogger(__name__)

DEFAULT_PERMISSIONS = 0o755


class FileEmitter:
    """Create directories and write files, reporting failures as ``False``.

    Errors are logged with the offending path and never propagate to the
    caller. :meth:`write_file` does not create parent directories; callers
    ensure them first with :meth:`ensure_directory`.
    """

    def __init__(self, permissions: int = DEFAULT_PERMISSIONS, encoding: str = "utf-8") -> None:
        self.permissions = permissions
        self.encoding = encoding
        self.created: list[Path] = []
        self.written: list[Path] = []

    @classmethod
    def from_config(cls, resolver: ConfigResolver) -> "FileEmitter":
        return cls(permissions=resolver.get_int("directories.permissions", DEFAULT_PERMISSIONS))

    def ensure_directory(self, path: str | Path) -> bool:
        directory = Path(path)
        try:
            if not directory.is_dir():
                directory.mkdir(mode=self.permissions, parents=True, exist_ok=True)
                self.created.append(directory)
        except OSError as exc:
            LOGGER.error("Failed to create directory %s: %s", directory, exc)
            return False
        return True

    def write_file(self, path: str | Path, content: str | None) -> bool:
        target = Path(path)
        if content is None:
            LOGGER.error("Failed to read content for %s: source may not exist", target)
            return False

        try:
            with target.open("w", encoding=self.encoding, newline="") as handle:
                handle.write(content)
        except OSError as exc:
            LOGGER.error("Failed to write file %s: %s", target, exc)
            return False

        self.written.append(target)
        LOGGER.debug("Wrote %s (%d bytes)", target, len(content))
        return True
