"""Generated code fragments and fixed file bodies.

These pieces depend on which features a request enables, so they are built in
code rather than stored as stubs. The three service provider fragments return
an empty string when no enabled feature applies.
"""

from __future__ import annotations

import json
from typing import Any

from .models import PackageRequest

__all__ = [
    "PHPSTAN_NEON",
    "WEB_ROUTES",
    "boot_loads",
    "boot_publishes",
    "composer_aliases",
    "pint_config",
    "register_merges",
]

# Indentation of the method bodies inside the service provider stub.
_METHOD_BODY = "\n        "
_PUBLISH_BLOCK = "\n            "


WEB_ROUTES = """<?php
use Illuminate\\Support\\Facades\\Route;
// Add your routes here
"""

PHPSTAN_NEON = """includes:
    - ./vendor/larastan/larastan/extension.neon
parameters:
    paths:
        - src
        - config
        - database
    # Rule level (0-9, higher is stricter)
    level: 6
    ignoreErrors:
        - '#PHPDoc tag @var#'
    excludePaths:
        - ./*/*/FileToBeExcluded.php
    # Laravel specific configurations
    reportUnmatchedIgnoredErrors: false
"""

_PINT_CONFIG: dict[str, Any] = {
    "preset": "laravel",
    "rules": {
        "binary_operator_spaces": {
            "default": "single_space",
            "operators": {"=>": None},
        },
        "blank_line_after_namespace": True,
        "blank_line_after_opening_tag": True,
        "blank_line_before_statement": {"statements": ["return"]},
        "braces": True,
        "cast_spaces": True,
        "class_attributes_separation": {"elements": {"method": "one"}},
        "no_unused_imports": True,
        "ordered_imports": {"sort_algorithm": "alpha"},
        "single_trait_insert_per_statement": True,
    },
}


def boot_loads(request: PackageRequest) -> str:
    """Resource loading calls for the provider's ``boot`` method."""

    loads: list[str] = []
    if request.views:
        loads.append(f"$this->loadViewsFrom(__DIR__.'/../resources/views', '{request.package}');")
    if request.migrations:
        loads.append("$this->loadMigrationsFrom(__DIR__.'/../database/migrations');")
    if request.routes:
        loads.append("$this->loadRoutesFrom(__DIR__.'/../routes/web.php');")
    return _METHOD_BODY.join(loads)


def boot_publishes(request: PackageRequest) -> str:
    """``publishes`` registrations, one three-line block per publishable feature."""

    package = request.package
    blocks: list[tuple[str, str]] = []
    if request.config:
        blocks.append((f"__DIR__.'/../config/{package}.php' => config_path('{package}.php'),", "config"))
    if request.views:
        blocks.append((f"__DIR__.'/../resources/views' => resource_path('views/vendor/{package}'),", "views"))
    if request.migrations:
        blocks.append(("__DIR__.'/../database/migrations' => database_path('migrations'),", "migrations"))

    lines: list[str] = []
    for mapping, tag in blocks:
        lines.extend(["$this->publishes([", f"    {mapping}", f"], '{tag}');"])
    return _PUBLISH_BLOCK.join(lines)


def register_merges(request: PackageRequest) -> str:
    """Config merge call for the provider's ``register`` method."""

    if not request.config:
        return ""
    package = request.package
    return f"$this->mergeConfigFrom(__DIR__.'/../config/{package}.php', '{package}');"


def pint_config() -> str:
    """Laravel Pint settings serialised as pretty-printed JSON."""

    return json.dumps(_PINT_CONFIG, indent=4) + "\n"


def composer_aliases(request: PackageRequest) -> str:
    """``aliases`` entry for ``extra.laravel`` in composer.json, only with a facade."""

    if not request.facade:
        return ""
    package = request.studly_package
    facade = f"{request.studly_vendor}\\\\{package}\\\\Facades\\\\{package}"
    return (
        ",\n"
        '            "aliases": {\n'
        f'                "{package}": "{facade}"\n'
        "            }"
    )
