"""Stub lookup and literal token substitution."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .config import ConfigResolver
from .errors import StubDecodeError, StubNotFoundError, TemplateRenderingError, UnknownStubError

__all__ = [
    "DEFAULT_STUB_DIR",
    "SEQUENTIAL",
    "SIMULTANEOUS",
    "StubCatalog",
    "TemplateRenderer",
]

LOGGER = logging.getLogger(__name__)

DEFAULT_STUB_DIR = Path(__file__).parent / "stubs"

SIMULTANEOUS = "simultaneous"
SEQUENTIAL = "sequential"
_STRATEGIES = {SIMULTANEOUS, SEQUENTIAL}


@dataclass(slots=True)
class TemplateRenderer:
    """Replace literal tokens such as ``{{Package}}`` inside stub text.

    Only exact substrings are replaced; there are no expressions, filters or
    control structures. Tokens that have no entry in the mapping are left in
    the output untouched.

    Two strategies are supported:

    ``"simultaneous"``
        A single scan over the source matching any key (longest first). A
        replacement value is never scanned again, so a value that happens to
        contain another token survives verbatim.
    ``"sequential"``
        One ``str.replace`` pass per key in mapping order. Later keys are
        replaced inside values substituted by earlier ones. Kept for output
        compatibility with stubs written against that behaviour.
    """

    strategy: str = SIMULTANEOUS

    def __post_init__(self) -> None:
        if self.strategy not in _STRATEGIES:
            raise TemplateRenderingError(
                f"unknown substitution strategy '{self.strategy}'. Expected one of: "
                + ", ".join(sorted(_STRATEGIES))
            )

    @classmethod
    def from_config(cls, resolver: ConfigResolver) -> "TemplateRenderer":
        return cls(strategy=resolver.get_string("stubs.substitution", SIMULTANEOUS) or SIMULTANEOUS)

    def render(self, source: str, tokens: Mapping[str, object]) -> str:
        """Return ``source`` with every key of ``tokens`` replaced by its value."""

        replacements = {key: str(value) for key, value in tokens.items() if key}
        if not replacements:
            return source

        if self.strategy == SEQUENTIAL:
            for key, value in replacements.items():
                source = source.replace(key, value)
            return source

        keys = sorted(replacements, key=len, reverse=True)
        pattern = re.compile("|".join(re.escape(key) for key in keys))
        return pattern.sub(lambda match: replacements[match.group(0)], source)


@dataclass(slots=True)
class StubCatalog:
    """Map logical stub names (``"composer"``, ``"readme"``...) to stub files.

    Files are looked up in ``directory`` first and then in the stubs bundled
    with pkgforge, so a customised stub directory only needs the stubs it
    changes.
    """

    files: Mapping[str, str] = field(default_factory=dict)
    directory: Path = DEFAULT_STUB_DIR

    @classmethod
    def from_config(cls, resolver: ConfigResolver, root: str | Path | None = None) -> "StubCatalog":
        files = {
            name: filename
            for name, filename in resolver.get_mapping("stubs.files").items()
            if isinstance(filename, str)
        }
        custom = resolver.get_string("stubs.path")
        if not custom:
            return cls(files=files)

        directory = Path(custom).expanduser()
        if not directory.is_absolute():
            directory = Path(root if root is not None else Path.cwd()) / directory
        return cls(files=files, directory=directory)

    def names(self) -> list[str]:
        return sorted(self.files)

    def path_for(self, name: str) -> Path:
        """Return the file backing ``name``.

        Raises
        ------
        UnknownStubError
            ``name`` has no catalog entry.
        StubNotFoundError
            The catalogued file exists neither in ``directory`` nor among the
            bundled stubs.
        """

        try:
            filename = self.files[name]
        except KeyError as exc:
            raise UnknownStubError(name) from exc

        candidate = Path(self.directory) / filename
        if candidate.is_file():
            return candidate

        bundled = DEFAULT_STUB_DIR / filename
        if bundled != candidate and bundled.is_file():
            LOGGER.debug("Stub %s not customised in %s, using bundled copy", filename, self.directory)
            return bundled

        raise StubNotFoundError(candidate)

    def load(self, name: str) -> str:
        """Return the source text of stub ``name``."""

        path = self.path_for(name)
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise StubDecodeError(path, exc.reason) from exc
