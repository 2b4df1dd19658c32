"""Data structures exchanged between request gathering and generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .naming import studly

__all__ = [
    "GenerationOutcome",
    "GenerationState",
    "PackageRequest",
    "StepResult",
]


class PackageRequest(BaseModel):
    """Everything needed to scaffold one package. Immutable once built."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    vendor: str = Field(default="", description="Vendor segment of the package name.")
    package: str = Field(default="", description="Package segment of the package name.")
    facade: bool = Field(default=True, description="Generate a facade class.")
    config: bool = Field(default=True, description="Generate a publishable config file.")
    migrations: bool = Field(default=False, description="Register a migrations directory.")
    views: bool = Field(default=False, description="Register a views directory.")
    routes: bool = Field(default=False, description="Generate a web routes file.")
    tests: bool = Field(default=False, description="Generate test framework files.")
    github_actions: bool = Field(default=False, description="Generate a CI workflow and quality tool configs.")
    author: str = Field(default="Your Name", description="Author name written to the manifest.")
    author_email: str = Field(default="your.email@example.com", description="Author email address.")
    description: str = Field(default="A Laravel package", description="One-line package description.")
    license: str = Field(default="MIT", description="License identifier.")
    php_version: str = Field(default="^8.1", description="Minimum PHP version constraint.")
    laravel_version: str = Field(default="^10.0", description="Minimum Laravel version constraint.")

    @property
    def studly_vendor(self) -> str:
        return studly(self.vendor)

    @property
    def studly_package(self) -> str:
        return studly(self.package)


class GenerationState(str, Enum):
    """Phases of a single generation run."""

    GATHERING = "gathering"
    VALIDATING = "validating"
    EMITTING = "emitting"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class StepResult:
    """Outcome of one emission step."""

    name: str
    success: bool
    detail: str | None = None


@dataclass(slots=True)
class GenerationOutcome:
    """Ordered step results and the states a run passed through.

    A run starts in ``GATHERING``: the request it is given has already been
    assembled from the command line, configuration and prompts.
    """

    state: GenerationState = GenerationState.GATHERING
    steps: list[StepResult] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    history: list[GenerationState] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.history.append(self.state)

    def advance(self, state: GenerationState) -> None:
        self.state = state
        self.history.append(state)

    @property
    def succeeded(self) -> bool:
        return self.state is GenerationState.DONE

    @property
    def failed_step(self) -> StepResult | None:
        """The step that stopped the run, if any."""

        for step in self.steps:
            if not step.success:
                return step
        return None
