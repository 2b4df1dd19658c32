"""Identifier casing and validation for vendor and package names."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:  # pragma: no cover
    from .config import ConfigResolver

__all__ = [
    "DEFAULT_MAX_LENGTH",
    "DEFAULT_MIN_LENGTH",
    "DEFAULT_PATTERN",
    "NameValidator",
    "compile_pattern",
    "studly",
]


DEFAULT_PATTERN = r"^[a-z0-9-]+$"
DEFAULT_MIN_LENGTH = 2
DEFAULT_MAX_LENGTH = 50

_WORD_SEPARATORS = re.compile(r"[-_\s]+")
_DELIMITED_PATTERN = re.compile(r"^/(?P<body>.*)/(?P<flags>[a-zA-Z]*)$", re.DOTALL)
_PATTERN_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,
}


def studly(value: str) -> str:
    """Return the StudlyCase form of ``value``.

    Words are split on hyphens, underscores and whitespace. Only the first
    letter of each word is upper-cased, the rest of the word is kept as is, so
    ``billing-kit`` becomes ``BillingKit`` and ``my_api`` becomes ``MyApi``.
    """

    words = _WORD_SEPARATORS.split(value.strip())
    return "".join(word[:1].upper() + word[1:] for word in words if word)


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile ``pattern``, accepting ``/body/flags`` delimited expressions."""

    match = _DELIMITED_PATTERN.match(pattern)
    if match is None:
        return re.compile(pattern)

    flags = 0
    for flag in match.group("flags"):
        flags |= _PATTERN_FLAGS.get(flag, 0)
    return re.compile(match.group("body"), flags)


@dataclass(slots=True)
class NameValidator:
    """Check vendor and package names against a pattern, bounds and a blocklist."""

    pattern: str = DEFAULT_PATTERN
    min_length: int = DEFAULT_MIN_LENGTH
    max_length: int = DEFAULT_MAX_LENGTH
    reserved_names: frozenset[str] = frozenset()
    _compiled: re.Pattern[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._compiled = compile_pattern(self.pattern)
        self.reserved_names = frozenset(name.lower() for name in self.reserved_names)

    @classmethod
    def from_config(cls, resolver: "ConfigResolver") -> "NameValidator":
        """Build a validator from the ``validation.*`` configuration keys."""

        reserved: Iterable[object] = resolver.get_list("validation.reserved_names")
        return cls(
            pattern=resolver.get_string("validation.package_pattern", DEFAULT_PATTERN),
            min_length=resolver.get_int("validation.min_name_length", DEFAULT_MIN_LENGTH),
            max_length=resolver.get_int("validation.max_name_length", DEFAULT_MAX_LENGTH),
            reserved_names=frozenset(str(name) for name in reserved),
        )

    def is_valid(self, name: str) -> bool:
        """Return ``True`` when ``name`` passes every check."""

        if self._compiled.fullmatch(name) is None:
            return False

        if not self.min_length <= len(name) <= self.max_length:
            return False

        return name.lower() not in self.reserved_names
