"""Assemble a :class:`PackageRequest` from CLI input, configuration and prompts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from rich.console import Console
from rich.prompt import Confirm, Prompt

from .config import ConfigResolver
from .errors import MissingParameterError
from .models import PackageRequest

__all__ = [
    "DEFAULT_AUTHOR",
    "DEFAULT_AUTHOR_EMAIL",
    "DEFAULT_DESCRIPTION",
    "NonInteractivePrompter",
    "OPTIONAL_FEATURES",
    "Prompter",
    "RequestBuilder",
    "RequestInput",
    "RichPrompter",
]

LOGGER = logging.getLogger(__name__)

DEFAULT_AUTHOR = "Your Name"
DEFAULT_AUTHOR_EMAIL = "your.email@example.com"
DEFAULT_DESCRIPTION = "A Laravel package"
DEFAULT_LICENSE = "MIT"
DEFAULT_PHP_VERSION = "^8.1"
DEFAULT_LARAVEL_VERSION = "^10.0"

OPTIONAL_FEATURES = ("migrations", "views", "routes", "tests", "github_actions")


class Prompter(Protocol):
    """Source of answers for values that neither the CLI nor config provide."""

    def ask(self, question: str, default: str | None = None) -> str:
        ...

    def confirm(self, question: str, default: bool = False) -> bool:
        ...


class RichPrompter:
    """Ask questions on an interactive terminal."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def ask(self, question: str, default: str | None = None) -> str:
        if default is None:
            return Prompt.ask(question, console=self.console).strip()
        return Prompt.ask(question, console=self.console, default=default).strip()

    def confirm(self, question: str, default: bool = False) -> bool:
        return Confirm.ask(question, console=self.console, default=default)


class NonInteractivePrompter:
    """Answer every question with its default, failing when there is none."""

    def ask(self, question: str, default: str | None = None) -> str:
        if default is None:
            raise MissingParameterError(question)
        LOGGER.debug("Using default %r for %r", default, question)
        return default

    def confirm(self, question: str, default: bool = False) -> bool:
        LOGGER.debug("Using default %r for %r", default, question)
        return default


@dataclass(slots=True)
class RequestInput:
    """Values given explicitly on the command line. ``None`` means not given."""

    vendor: str | None = None
    package: str | None = None
    facade: bool | None = None
    config: bool | None = None


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


class RequestBuilder:
    """Resolve each request field: explicit input, then configuration, then prompt."""

    def __init__(self, resolver: ConfigResolver, prompter: Prompter) -> None:
        self.resolver = resolver
        self.prompter = prompter

    def build(self, explicit: RequestInput | None = None) -> PackageRequest:
        explicit = explicit or RequestInput()
        data: dict[str, Any] = {
            "vendor": self._name(explicit.vendor, "defaults.vendor", 'What is the vendor name? (e.g., "laravel")'),
            "package": self._name(explicit.package, "defaults.package", 'What is the package name? (e.g., "cashier")'),
            "facade": self._toggle(explicit.facade, "facade", "Do you want to generate a Facade?", True),
            "config": self._toggle(explicit.config, "config", "Do you want to generate a configuration file?", True),
        }
        for feature in OPTIONAL_FEATURES:
            data[feature] = self._toggle(None, feature, f"Do you want to generate {feature}?", False)

        data.update(self._author())
        data["description"] = self.resolver.get_string("defaults.description") or self.prompter.ask(
            "Package description?", DEFAULT_DESCRIPTION
        )
        data["license"] = self.resolver.get_string("defaults.license") or DEFAULT_LICENSE
        data["php_version"] = self.resolver.get_string("defaults.minimum_php") or DEFAULT_PHP_VERSION
        data["laravel_version"] = self.resolver.get_string("defaults.minimum_laravel") or DEFAULT_LARAVEL_VERSION
        return PackageRequest(**data)

    def _name(self, explicit: str | None, key: str, question: str) -> str:
        if explicit:
            return explicit
        configured = self.resolver.get_string(key)
        if configured:
            return configured
        try:
            return self.prompter.ask(question)
        except MissingParameterError as exc:
            # Left empty so validation reports it alongside any other problem.
            LOGGER.debug("%s", exc)
            return ""

    def _toggle(self, explicit: bool | None, feature: str, question: str, default: bool) -> bool:
        if explicit is not None:
            return explicit
        configured = self.resolver.get(f"features.{feature}", None, _is_bool)
        if configured is not None:
            return configured
        return self.prompter.confirm(question, default)

    def _author(self) -> Mapping[str, str]:
        author = self.resolver.get("defaults.author", None, lambda value: value is not None)
        if isinstance(author, Mapping):
            name = author.get("name")
            email = author.get("email")
            return {
                "author": name if isinstance(name, str) and name else DEFAULT_AUTHOR,
                "author_email": email if isinstance(email, str) and email else DEFAULT_AUTHOR_EMAIL,
            }

        if isinstance(author, str) and author:
            name = author
        else:
            name = self.prompter.ask("Author name?", DEFAULT_AUTHOR)
        return {
            "author": name,
            "author_email": self.prompter.ask("Author email?", DEFAULT_AUTHOR_EMAIL),
        }
