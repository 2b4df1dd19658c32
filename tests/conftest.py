from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from pkgforge.config import CONFIG_ENV_VAR, ConfigResolver, load_config  # noqa: E402
from pkgforge.models import PackageRequest  # noqa: E402


@pytest.fixture(autouse=True)
def isolate_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's own pkgforge configuration out of the tests."""

    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


@pytest.fixture
def resolver() -> ConfigResolver:
    return load_config()


@pytest.fixture
def request_factory():
    def build(**overrides) -> PackageRequest:
        data = {"vendor": "acme", "package": "billing-kit"}
        data.update(overrides)
        return PackageRequest(**data)

    return build
