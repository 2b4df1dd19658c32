from __future__ import annotations

import pytest

from pkgforge.config import ConfigResolver, deep_merge
from pkgforge.errors import MissingParameterError
from pkgforge.request import (
    DEFAULT_AUTHOR,
    DEFAULT_AUTHOR_EMAIL,
    DEFAULT_DESCRIPTION,
    NonInteractivePrompter,
    RequestBuilder,
    RequestInput,
)


class ScriptedPrompter:
    """Answer questions from a script and remember what was asked."""

    def __init__(self, answers: dict[str, str] | None = None, confirms: dict[str, bool] | None = None) -> None:
        self.answers = answers or {}
        self.confirms = confirms or {}
        self.asked: list[str] = []

    def ask(self, question: str, default: str | None = None) -> str:
        self.asked.append(question)
        for fragment, answer in self.answers.items():
            if fragment in question:
                return answer
        if default is None:
            raise AssertionError(f"unexpected question: {question}")
        return default

    def confirm(self, question: str, default: bool = False) -> bool:
        self.asked.append(question)
        for fragment, answer in self.confirms.items():
            if fragment in question:
                return answer
        return default


def _with(resolver: ConfigResolver, overrides: dict) -> ConfigResolver:
    return ConfigResolver(deep_merge(resolver.as_dict(), overrides))


def test_explicit_values_win(resolver: ConfigResolver):
    configured = _with(resolver, {"defaults": {"vendor": "configured"}, "features": {"facade": True}})
    prompter = ScriptedPrompter()
    request = RequestBuilder(configured, prompter).build(
        RequestInput(vendor="acme", package="billing-kit", facade=False)
    )

    assert request.vendor == "acme"
    assert request.package == "billing-kit"
    assert request.facade is False
    assert not any("vendor name" in question for question in prompter.asked)


def test_configuration_fills_missing_input(resolver: ConfigResolver):
    configured = _with(
        resolver,
        {
            "defaults": {"vendor": "acme", "package": "billing-kit", "description": "Invoices"},
            "features": {"config": False, "tests": True},
        },
    )
    prompter = ScriptedPrompter()
    request = RequestBuilder(configured, prompter).build()

    assert (request.vendor, request.package) == ("acme", "billing-kit")
    assert request.config is False
    assert request.tests is True
    assert request.description == "Invoices"
    assert not any("configuration file" in question for question in prompter.asked)
    assert not any("description" in question for question in prompter.asked)


def test_prompts_for_remaining_values(resolver: ConfigResolver):
    prompter = ScriptedPrompter(
        answers={"vendor name": "acme", "package name": "billing-kit", "Author name": "Jane"},
        confirms={"Facade": False, "routes": True},
    )
    request = RequestBuilder(resolver, prompter).build()

    assert request.vendor == "acme"
    assert request.package == "billing-kit"
    assert request.author == "Jane"
    assert request.facade is False
    assert request.config is True
    assert request.routes is True
    assert request.views is False
    assert request.author_email == DEFAULT_AUTHOR_EMAIL


def test_non_boolean_feature_is_ignored(resolver: ConfigResolver):
    configured = _with(resolver, {"features": {"views": "yes"}})
    prompter = ScriptedPrompter(answers={"vendor": "acme", "package": "kit"})
    RequestBuilder(configured, prompter).build()
    assert "Do you want to generate views?" in prompter.asked


def test_non_interactive_uses_defaults(resolver: ConfigResolver):
    request = RequestBuilder(resolver, NonInteractivePrompter()).build(
        RequestInput(vendor="acme", package="billing-kit")
    )

    assert request.facade is True
    assert request.config is True
    assert not any((request.migrations, request.views, request.routes, request.tests, request.github_actions))
    assert request.author == DEFAULT_AUTHOR
    assert request.author_email == DEFAULT_AUTHOR_EMAIL
    assert request.description == DEFAULT_DESCRIPTION
    assert request.license == "MIT"
    assert request.php_version == "^8.1"
    assert request.laravel_version == "^10.0"


def test_non_interactive_leaves_missing_names_empty(resolver: ConfigResolver):
    request = RequestBuilder(resolver, NonInteractivePrompter()).build()
    assert request.vendor == ""
    assert request.package == ""


def test_non_interactive_prompter_requires_default():
    prompter = NonInteractivePrompter()
    with pytest.raises(MissingParameterError) as excinfo:
        prompter.ask("What is the vendor name?")
    assert excinfo.value.question == "What is the vendor name?"
    assert prompter.ask("Author name?", "Jane") == "Jane"
    assert prompter.confirm("Generate?", True) is True


def test_author_mapping_skips_prompts(resolver: ConfigResolver):
    configured = _with(resolver, {"defaults": {"author": {"name": "Jane Doe", "email": "jane@example.com"}}})
    prompter = ScriptedPrompter(answers={"vendor": "acme", "package": "kit"})
    request = RequestBuilder(configured, prompter).build()

    assert request.author == "Jane Doe"
    assert request.author_email == "jane@example.com"
    assert not any("Author" in question for question in prompter.asked)


def test_author_string_still_asks_for_email(resolver: ConfigResolver):
    configured = _with(resolver, {"defaults": {"author": "Jane Doe"}})
    prompter = ScriptedPrompter(answers={"vendor": "acme", "package": "kit", "email": "jane@example.com"})
    request = RequestBuilder(configured, prompter).build()

    assert request.author == "Jane Doe"
    assert request.author_email == "jane@example.com"
    assert "Author name?" not in prompter.asked


def test_versions_fall_back_without_configuration():
    request = RequestBuilder(ConfigResolver({}), NonInteractivePrompter()).build(
        RequestInput(vendor="acme", package="kit")
    )
    assert request.license == "MIT"
    assert request.php_version == "^8.1"
    assert request.laravel_version == "^10.0"
