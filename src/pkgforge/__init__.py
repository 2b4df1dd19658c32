"""Scaffolding for Laravel packages.

pkgforge collects a vendor and package name plus a handful of feature toggles,
validates them, and writes a ready to develop package tree (composer manifest,
service provider, optional facade, config, routes, tests and CI files) from a
set of literal-token stubs. It can be used programmatically through
:class:`PackageGenerator` or from the ``pkgforge`` command line interface.
"""

from __future__ import annotations

from .config import ConfigResolver, load_config
from .emitter import FileEmitter
from .errors import (
    ConfigFileError,
    GeneratorError,
    MissingParameterError,
    StubDecodeError,
    StubError,
    StubNotFoundError,
    TemplateRenderingError,
    UnknownStubError,
)
from .generator import PackageGenerator
from .models import GenerationOutcome, GenerationState, PackageRequest, StepResult
from .naming import NameValidator, studly
from .paths import PathResolver
from .template import StubCatalog, TemplateRenderer

__all__ = [
    "ConfigFileError",
    "ConfigResolver",
    "FileEmitter",
    "GenerationOutcome",
    "GenerationState",
    "GeneratorError",
    "MissingParameterError",
    "NameValidator",
    "PackageGenerator",
    "PackageRequest",
    "PathResolver",
    "StepResult",
    "StubCatalog",
    "StubDecodeError",
    "StubError",
    "StubNotFoundError",
    "TemplateRenderer",
    "TemplateRenderingError",
    "UnknownStubError",
    "load_config",
    "studly",
]

__version__ = "0.1.0"
