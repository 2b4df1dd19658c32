"""Package scaffolding orchestrator."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Mapping

from . import fragments
from .config import ConfigResolver
from .emitter import FileEmitter
from .errors import StubError
from .models import GenerationOutcome, GenerationState, PackageRequest, StepResult
from .naming import NameValidator
from .paths import PathResolver
from .template import StubCatalog, TemplateRenderer

__all__ = ["DEFAULT_STRUCTURE", "PackageGenerator"]

LOGGER = logging.getLogger(__name__)

DEFAULT_STRUCTURE = [
    "src",
    "config",
    "database/migrations",
    "resources/views",
    "tests",
]

NAME_RULES = "must contain only lowercase letters, numbers, and hyphens."

StepCallback = Callable[[StepResult], None]


class PackageGenerator:
    """Validate a :class:`PackageRequest` and write the package tree it describes.

    Steps run in a fixed order and the run stops at the first failing step.
    Files written before the failure are left in place.
    """

    def __init__(
        self,
        resolver: ConfigResolver,
        *,
        root: str | Path | None = None,
        paths: PathResolver | None = None,
        validator: NameValidator | None = None,
        catalog: StubCatalog | None = None,
        renderer: TemplateRenderer | None = None,
        emitter: FileEmitter | None = None,
    ) -> None:
        self.resolver = resolver
        self.paths = paths or PathResolver.from_config(resolver, root)
        self.validator = validator or NameValidator.from_config(resolver)
        self.catalog = catalog or StubCatalog.from_config(resolver, self.paths.root)
        self.renderer = renderer or TemplateRenderer.from_config(resolver)
        self.emitter = emitter or FileEmitter.from_config(resolver)

    # -- Public API --------------------------------------------------------

    def destination(self, request: PackageRequest, override: str | Path | None = None) -> Path:
        return self.paths.resolve(request.vendor, request.package, override)

    def validate(self, request: PackageRequest, override: str | Path | None = None) -> list[str]:
        """Return every problem with ``request``; an empty list means valid."""

        errors: list[str] = []
        for label, value in (("Vendor", request.vendor), ("Package", request.package)):
            if not value:
                errors.append(f"{label} name is required.")
            elif not self.validator.is_valid(value):
                errors.append(f"{label} name {NAME_RULES}")

        if request.vendor and request.package:
            destination = self.destination(request, override)
            if destination.exists():
                errors.append(f"Package directory already exists: {destination}")

        return errors

    def generate(
        self,
        request: PackageRequest,
        override: str | Path | None = None,
        *,
        on_step: StepCallback | None = None,
    ) -> GenerationOutcome:
        """Validate ``request`` and, when valid, emit every enabled step."""

        outcome = GenerationOutcome()
        outcome.advance(GenerationState.VALIDATING)
        outcome.errors.extend(self.validate(request, override))
        if outcome.errors:
            outcome.advance(GenerationState.FAILED)
            return outcome

        outcome.advance(GenerationState.EMITTING)
        root = self.destination(request, override)
        for name, step in self._plan(request):
            result = self._run_step(name, step, request, root)
            outcome.steps.append(result)
            if on_step is not None:
                on_step(result)
            if not result.success:
                outcome.advance(GenerationState.FAILED)
                return outcome

        outcome.advance(GenerationState.DONE)
        return outcome

    # -- Planning ----------------------------------------------------------

    def _plan(self, request: PackageRequest) -> list[tuple[str, Callable[[PackageRequest, Path], bool]]]:
        steps: list[tuple[str, Callable[[PackageRequest, Path], bool]]] = [
            ("directories", self._create_directories),
            ("composer", self._create_composer_json),
            ("package_class", self._create_package_class),
            ("service_provider", self._create_service_provider),
        ]
        optional = [
            (request.facade, "facade", self._create_facade),
            (request.config, "config_file", self._create_config_file),
            (request.migrations, "migrations", self._create_migrations),
            (request.views, "views", self._create_views),
            (request.routes, "routes", self._create_routes),
            (request.tests, "tests", self._create_test_framework),
            (request.github_actions, "github_actions", self._create_github_actions),
        ]
        steps.extend((name, step) for enabled, name, step in optional if enabled)
        steps.append(("readme", self._create_readme))
        steps.append(("gitignore", self._create_gitignore))
        return steps

    def _run_step(
        self,
        name: str,
        step: Callable[[PackageRequest, Path], bool],
        request: PackageRequest,
        root: Path,
    ) -> StepResult:
        try:
            success = step(request, root)
        except StubError as exc:
            LOGGER.error("Step %s failed: %s", name, exc)
            return StepResult(name, False, str(exc))
        except OSError as exc:
            LOGGER.error("Step %s failed: %s", name, exc)
            return StepResult(name, False, str(exc))

        if not success:
            return StepResult(name, False, "see log for details")
        return StepResult(name, True)

    # -- Tokens ------------------------------------------------------------

    @staticmethod
    def _name_tokens(request: PackageRequest) -> dict[str, str]:
        return {
            "{{vendor}}": request.vendor,
            "{{package}}": request.package,
            "{{Vendor}}": request.studly_vendor,
            "{{Package}}": request.studly_package,
        }

    def _render_stub(self, name: str, tokens: Mapping[str, str]) -> str:
        return self.renderer.render(self.catalog.load(name), tokens)

    def _emit_stub(self, name: str, target: Path, tokens: Mapping[str, str]) -> bool:
        return self.emitter.write_file(target, self._render_stub(name, tokens))

    # -- Steps -------------------------------------------------------------

    def _create_directories(self, request: PackageRequest, root: Path) -> bool:
        if not self.emitter.ensure_directory(root):
            return False
        structure = self.resolver.get_list("directories.structure", DEFAULT_STRUCTURE)
        for directory in structure:
            if not self.emitter.ensure_directory(root / str(directory)):
                return False
        return True

    def _create_composer_json(self, request: PackageRequest, root: Path) -> bool:
        tokens = {
            **self._name_tokens(request),
            "{{author}}": request.author,
            "{{author_email}}": request.author_email,
            "{{description}}": request.description,
            "{{license}}": request.license,
            "{{php_version}}": request.php_version,
            "{{laravel_version}}": request.laravel_version,
            "{{composer_aliases}}": fragments.composer_aliases(request),
        }
        return self._emit_stub("composer", root / "composer.json", tokens)

    def _create_package_class(self, request: PackageRequest, root: Path) -> bool:
        source = root / "src"
        return self.emitter.ensure_directory(source) and self._emit_stub(
            "package", source / f"{request.studly_package}.php", self._name_tokens(request)
        )

    def _create_service_provider(self, request: PackageRequest, root: Path) -> bool:
        tokens = {
            **self._name_tokens(request),
            "{{boot_loads}}": fragments.boot_loads(request),
            "{{boot_publishes}}": fragments.boot_publishes(request),
            "{{register_merges}}": fragments.register_merges(request),
        }
        source = root / "src"
        return self.emitter.ensure_directory(source) and self._emit_stub(
            "service_provider", source / f"{request.studly_package}ServiceProvider.php", tokens
        )

    def _create_facade(self, request: PackageRequest, root: Path) -> bool:
        content = self._render_stub("facade", self._name_tokens(request))
        facades = root / "src" / "Facades"
        if not self.emitter.ensure_directory(facades):
            return False
        return self.emitter.write_file(facades / f"{request.studly_package}.php", content)

    def _create_config_file(self, request: PackageRequest, root: Path) -> bool:
        directory = root / "config"
        return self.emitter.ensure_directory(directory) and self._emit_stub(
            "config", directory / f"{request.package}.php", {"{{package}}": request.package}
        )

    def _create_migrations(self, request: PackageRequest, root: Path) -> bool:
        return self.emitter.ensure_directory(root / "database" / "migrations")

    def _create_views(self, request: PackageRequest, root: Path) -> bool:
        return self.emitter.ensure_directory(root / "resources" / "views")

    def _create_routes(self, request: PackageRequest, root: Path) -> bool:
        routes = root / "routes"
        return self.emitter.ensure_directory(routes) and self.emitter.write_file(
            routes / "web.php", fragments.WEB_ROUTES
        )

    def _create_test_framework(self, request: PackageRequest, root: Path) -> bool:
        tests = root / "tests"
        name_tokens = self._name_tokens(request)
        success = (
            self._emit_stub("phpunit", root / "phpunit.xml", {"{{package}}": request.package})
            and self.emitter.ensure_directory(tests)
            and self._emit_stub("test_case", tests / "TestCase.php", name_tokens)
        )
        if not success:
            return False

        framework = self.resolver.get_string("testing.framework", "pest")
        if framework != "pest":
            return True

        if not self._emit_stub("pest_config", tests / "Pest.php", name_tokens):
            return False

        test_file = f"{request.studly_package}Test.php"
        suites = (
            ("testing.create_feature_tests", "pest_feature_test", tests / "Feature"),
            ("testing.create_unit_tests", "pest_unit_test", tests / "Unit"),
        )
        for flag, stub, directory in suites:
            if not self.resolver.get_bool(flag, True):
                continue
            if not (self.emitter.ensure_directory(directory) and self._emit_stub(stub, directory / test_file, name_tokens)):
                return False
        return True

    def _create_github_actions(self, request: PackageRequest, root: Path) -> bool:
        tokens = {
            "{{package}}": request.package,
            "{{php_version}}": request.php_version,
            "{{laravel_version}}": request.laravel_version,
        }
        content = self._render_stub("ci", tokens)
        workflows = root / ".github" / "workflows"
        return (
            self.emitter.ensure_directory(workflows)
            and self.emitter.write_file(workflows / "ci.yml", content)
            and self.emitter.write_file(root / "pint.json", fragments.pint_config())
            and self.emitter.write_file(root / "phpstan.neon", fragments.PHPSTAN_NEON)
        )

    def _create_readme(self, request: PackageRequest, root: Path) -> bool:
        tokens = {
            **self._name_tokens(request),
            "{{author}}": request.author,
            "{{description}}": request.description,
            "{{license}}": request.license,
        }
        return self._emit_stub("readme", root / "README.md", tokens)

    def _create_gitignore(self, request: PackageRequest, root: Path) -> bool:
        return self.emitter.write_file(root / ".gitignore", self.catalog.load("gitignore"))
