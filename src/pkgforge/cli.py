"""Command line interface for pkgforge."""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import CONFIG_FILENAME, DEFAULT_CONFIG_PATH, find_config_file, load_config
from .generator import PackageGenerator
from .models import PackageRequest, StepResult
from .request import NonInteractivePrompter, Prompter, RequestBuilder, RequestInput, RichPrompter
from .template import DEFAULT_STUB_DIR

LOGGER = logging.getLogger(__name__)

PUBLISHED_STUB_DIR = Path("stubs") / "pkgforge"

STEP_MESSAGES = {
    "directories": "Directory structure created successfully.",
    "composer": "composer.json created successfully.",
    "package_class": "Main package class created successfully.",
    "service_provider": "Service provider created successfully.",
    "facade": "Facade created successfully.",
    "config_file": "Configuration file created successfully.",
    "migrations": "Migrations directory created successfully.",
    "views": "Views directory created successfully.",
    "routes": "Routes created successfully.",
    "tests": "Test framework created successfully.",
    "github_actions": "GitHub Actions workflow created successfully.",
    "readme": "README.md created successfully.",
    "gitignore": ".gitignore created successfully.",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pkgforge", description="Scaffold Laravel packages")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    new_parser = subparsers.add_parser(
        "new", help="create a new Laravel package from scratch with complete structure and files"
    )
    new_parser.add_argument("vendor", nargs="?", help="Vendor name, e.g. acme")
    new_parser.add_argument("package", nargs="?", help="Package name, e.g. billing-kit")
    new_parser.add_argument(
        "--facade",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Generate a facade class",
    )
    new_parser.add_argument(
        "--config",
        dest="config",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Generate a publishable configuration file",
    )
    new_parser.add_argument(
        "--path",
        help="Base directory for the package instead of the configured base path",
    )
    new_parser.add_argument(
        "--config-file",
        type=Path,
        help=f"Configuration file to use instead of ./{CONFIG_FILENAME}",
    )
    new_parser.add_argument(
        "-n",
        "--no-interaction",
        action="store_true",
        help="Never prompt; use defaults and fail when a required value is missing",
    )

    publish_parser = subparsers.add_parser(
        "publish", help="copy the default configuration and stubs for customisation"
    )
    publish_parser.add_argument("--config", action="store_true", help="Publish the configuration file")
    publish_parser.add_argument("--stubs", action="store_true", help="Publish the stub files")
    publish_parser.add_argument(
        "-d",
        "--directory",
        type=Path,
        default=Path.cwd(),
        help="Directory to publish into",
    )
    publish_parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite previously published files",
    )

    return parser


def _stdin_is_interactive() -> bool:
    try:
        return sys.stdin.isatty()
    except (AttributeError, ValueError):
        return False


def _yes_no(value: bool) -> str:
    return "✅ Yes" if value else "❌ No"


def _print_summary(console: Console, request: PackageRequest) -> None:
    table = Table(title="📦 Package Information", show_header=True, header_style="bold cyan")
    table.add_column("Property", style="dim", no_wrap=True)
    table.add_column("Value")

    rows = [
        ("Vendor", request.vendor),
        ("Package", request.package),
        ("Author", request.author),
        ("Description", request.description),
        ("License", request.license),
        ("PHP Version", request.php_version),
        ("Laravel Version", request.laravel_version),
        ("Facade", _yes_no(request.facade)),
        ("Config", _yes_no(request.config)),
        ("Migrations", _yes_no(request.migrations)),
        ("Views", _yes_no(request.views)),
        ("Routes", _yes_no(request.routes)),
        ("Tests", _yes_no(request.tests)),
        ("GitHub Actions", _yes_no(request.github_actions)),
    ]
    for key, value in rows:
        table.add_row(key, escape(value))

    console.print(table)


def _print_errors(console: Console, errors: Sequence[str]) -> None:
    console.print("[bold red]❌ Validation failed:[/bold red]")
    for error in errors:
        console.print(f"   • {error}", markup=False)


def _print_step(console: Console, result: StepResult) -> None:
    if result.success:
        console.print(f"[green]✅ {STEP_MESSAGES.get(result.name, result.name)}[/green]")
    else:
        console.print(f"[red]Step '{result.name}' failed: {escape(str(result.detail))}[/red]")


def _handle_new(args: argparse.Namespace, console: Console, prompter: Prompter | None = None) -> int:
    resolver = load_config(find_config_file(args.config_file))
    if prompter is None:
        interactive = not args.no_interaction and _stdin_is_interactive()
        prompter = RichPrompter(console) if interactive else NonInteractivePrompter()

    explicit = RequestInput(
        vendor=args.vendor,
        package=args.package,
        facade=args.facade,
        config=args.config,
    )
    request = RequestBuilder(resolver, prompter).build(explicit)

    generator = PackageGenerator(resolver)
    errors = generator.validate(request, args.path)
    if errors:
        _print_errors(console, errors)
        return 1

    _print_summary(console, request)
    console.print("🚀 Generating package...")
    outcome = generator.generate(request, args.path, on_step=lambda result: _print_step(console, result))
    if outcome.errors:
        _print_errors(console, outcome.errors)
        return 1
    if not outcome.succeeded:
        console.print("[bold red]❌ Package generation failed.[/bold red]")
        emitter = generator.emitter
        console.print(
            f"{len(emitter.written)} file(s) and {len(emitter.created)} director(ies) written before the failure "
            f"were left in {generator.destination(request, args.path)}",
            markup=False,
        )
        return 1

    console.print("[bold green]🎉 Package generated successfully![/bold green]")
    console.print(f"Package created at {generator.destination(request, args.path)}", markup=False)
    return 0


def _handle_publish(args: argparse.Namespace, console: Console) -> int:
    publish_config = args.config or not args.stubs
    publish_stubs = args.stubs or not args.config
    target: Path = args.directory
    target.mkdir(parents=True, exist_ok=True)

    config_target = target / CONFIG_FILENAME
    stubs_target = target / PUBLISHED_STUB_DIR
    conflicts = []
    if publish_config and config_target.exists():
        conflicts.append(config_target)
    if publish_stubs and stubs_target.exists():
        conflicts.append(stubs_target)
    if conflicts and not args.force:
        for path in conflicts:
            console.print(f"{path} already exists. Use --force to overwrite.", markup=False)
        return 1

    if publish_config:
        shutil.copyfile(DEFAULT_CONFIG_PATH, config_target)
        console.print(f"Published configuration to {config_target}", markup=False)
    if publish_stubs:
        shutil.copytree(DEFAULT_STUB_DIR, stubs_target, dirs_exist_ok=True)
        console.print(f"Published stubs to {stubs_target}", markup=False)
    return 0


def main(argv: Sequence[str] | None = None, *, console: Console | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    console = console or Console()

    try:
        if args.command == "new":
            return _handle_new(args, console)
        if args.command == "publish":
            return _handle_publish(args, console)
    except Exception as exc:
        LOGGER.debug("Unhandled error", exc_info=True)
        console.print(f"[bold red]❌ An error occurred: {escape(str(exc))}[/bold red]")
        return 1

    parser.error("no command provided")
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
