from __future__ import annotations

from pathlib import Path

from pkgforge.config import ConfigResolver
from pkgforge.paths import PathResolver


def test_resolve_uses_configured_base(tmp_path: Path):
    paths = PathResolver(root=tmp_path)
    assert paths.resolve("acme", "widgets") == tmp_path / "packages" / "acme" / "widgets"


def test_resolve_prefers_override(tmp_path: Path):
    paths = PathResolver(root=tmp_path)
    out = tmp_path / "out"
    assert paths.resolve("acme", "widgets", out) == out / "acme" / "widgets"
    assert paths.resolve("acme", "widgets", "custom") == tmp_path / "custom" / "acme" / "widgets"


def test_resolve_does_not_touch_filesystem(tmp_path: Path):
    PathResolver(root=tmp_path).resolve("acme", "widgets")
    assert list(tmp_path.iterdir()) == []


def test_from_config_reads_base_path(tmp_path: Path):
    resolver = ConfigResolver({"directories": {"base_path": "libs"}})
    paths = PathResolver.from_config(resolver, tmp_path)
    assert paths.resolve("acme", "widgets") == tmp_path / "libs" / "acme" / "widgets"

    fallback = PathResolver.from_config(ConfigResolver({}), tmp_path)
    assert fallback.base_path == "packages"


def test_resolve_ignores_empty_override(tmp_path: Path):
    paths = PathResolver(root=tmp_path)
    assert paths.resolve("acme", "widgets", "") == tmp_path / "packages" / "acme" / "widgets"
