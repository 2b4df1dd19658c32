from __future__ import annotations

import logging
from pathlib import Path

import pytest

from pkgforge.config import ConfigResolver
from pkgforge.emitter import DEFAULT_PERMISSIONS, FileEmitter


def test_ensure_directory_creates_parents(tmp_path: Path):
    emitter = FileEmitter()
    target = tmp_path / "database" / "migrations"

    assert emitter.ensure_directory(target)
    assert target.is_dir()
    assert emitter.created == [target]

    assert emitter.ensure_directory(target)
    assert emitter.created == [target]


def test_ensure_directory_reports_failure(tmp_path: Path, caplog: pytest.LogCaptureFixture):
    blocker = tmp_path / "src"
    blocker.write_text("not a directory", encoding="utf-8")

    with caplog.at_level(logging.ERROR, logger="pkgforge.emitter"):
        assert not FileEmitter().ensure_directory(blocker / "Facades")
    assert "Failed to create directory" in caplog.text


def test_write_file_keeps_content_verbatim(tmp_path: Path):
    emitter = FileEmitter()
    target = tmp_path / "web.php"

    assert emitter.write_file(target, "<?php\n// routes\n")
    assert target.read_bytes() == b"<?php\n// routes\n"
    assert emitter.written == [target]


def test_write_file_does_not_create_parents(tmp_path: Path, caplog: pytest.LogCaptureFixture):
    target = tmp_path / "routes" / "web.php"
    with caplog.at_level(logging.ERROR, logger="pkgforge.emitter"):
        assert not FileEmitter().write_file(target, "<?php\n")
    assert not target.exists()
    assert str(target) in caplog.text


def test_write_file_without_content(tmp_path: Path, caplog: pytest.LogCaptureFixture):
    emitter = FileEmitter()
    with caplog.at_level(logging.ERROR, logger="pkgforge.emitter"):
        assert not emitter.write_file(tmp_path / "README.md", None)
    assert "source may not exist" in caplog.text
    assert emitter.written == []


def test_from_config_reads_permissions():
    assert FileEmitter.from_config(ConfigResolver({"directories": {"permissions": 0o700}})).permissions == 0o700
    assert FileEmitter.from_config(ConfigResolver({})).permissions == DEFAULT_PERMISSIONS
