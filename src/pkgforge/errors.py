"""Custom exception types used by the package generator."""

from __future__ import annotations

from pathlib import Path


class GeneratorError(RuntimeError):
    """Base class for every error raised deliberately by pkgforge."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigFileError(GeneratorError):
    """Raised when a user configuration file cannot be read or parsed."""


class MissingParameterError(GeneratorError):
    """Raised when a required value is absent and prompting is not possible."""

    def __init__(self, question: str) -> None:
        super().__init__(f"no value supplied for: {question}")
        self.question = question


class TemplateRenderingError(GeneratorError):
    """Raised when the renderer is configured with an unsupported strategy."""


class StubError(GeneratorError):
    """Raised when a stub cannot be located."""


class UnknownStubError(StubError):
    """Raised when a stub name has no entry in the stub catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown stub file: {name}")
        self.name = name


class StubNotFoundError(StubError):
    """Raised when a catalogued stub file does not exist on disk."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Stub file not found: {path}")
        self.path = path


class StubDecodeError(StubError):
    """Raised when a stub file is not valid UTF-8 text."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Stub file is not valid UTF-8: {path} ({reason})")
        self.path = path


__all__ = [
    "ConfigFileError",
    "GeneratorError",
    "MissingParameterError",
    "StubDecodeError",
    "StubError",
    "StubNotFoundError",
    "TemplateRenderingError",
    "UnknownStubError",
]
