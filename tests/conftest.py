"""Shared pytest fixtures for ResourceFS tests."""
import importlib
import logging
import os
import sys
import tempfile
import zipfile
from pathlib import Path
from typing import Any, Dict, Generator

import pytest
import yaml

from resourcefs.artifacts import MemoryArtifact
from resourcefs.infrastructure import config_manager


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def app_artifact() -> MemoryArtifact:
    """Artifact laid out like a web app's bundled static files."""
    return MemoryArtifact(
        {
            "App.wwwroot.css.site.css": b"body { margin: 0; }",
            "App.wwwroot.js.app.js": b"main();",
            "App.Resources.strings.txt": b"hello",
        },
        name="app",
    )


@pytest.fixture
def theme_artifact() -> MemoryArtifact:
    """Second artifact that overlaps the app artifact on css/site.css."""
    return MemoryArtifact(
        {
            "Theme.wwwroot.css.site.css": b"body { color: red; }",
            "Theme.wwwroot.theme.css": b".theme {}",
        },
        name="theme",
    )


@pytest.fixture
def source_dir(temp_dir: Path) -> Path:
    """Create a fallback directory with test files."""
    source = temp_dir / "wwwroot"
    source.mkdir()

    (source / "index.html").write_text("<html></html>")
    (source / "css.site.css").write_text("/* disk */")
    (source / "images").mkdir()
    (source / "images" / "logo.png").write_bytes(b"\x89PNG")

    return source


@pytest.fixture
def zip_path(temp_dir: Path) -> Path:
    """Create a zip archive with a small static tree."""
    path = temp_dir / "bundle.zip"
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("bundle/wwwroot/", "")
        zf.writestr("bundle/wwwroot/css/site.css", "body { margin: 1px; }")
        zf.writestr("bundle/wwwroot/js/app.js", "zipped();")
        zf.writestr("other/readme.txt", "not served")
    return path


@pytest.fixture
def package_name(temp_dir: Path, monkeypatch) -> Generator[str, None, None]:
    """Create an importable package with data files and put it on sys.path."""
    name = "rfs_fixture_pkg"
    package = temp_dir / "pkgs" / name
    (package / "static" / "css").mkdir(parents=True)
    (package / "__pycache__").mkdir()

    (package / "__init__.py").write_text("")
    (package / "module.py").write_text("VALUE = 1\n")
    (package / "__pycache__" / "module.cpython-311.pyc").write_bytes(b"\x00")
    (package / "data.json").write_text('{"ok": true}')
    (package / "static" / "css" / "site.css").write_text("body {}")
    (package / "static" / "index.html").write_text("<p>pkg</p>")

    monkeypatch.syspath_prepend(str(temp_dir / "pkgs"))
    importlib.invalidate_caches()
    yield name
    sys.modules.pop(name, None)


@pytest.fixture
def sample_config(source_dir: Path) -> Dict[str, Any]:
    """Provide a sample ResourceFS configuration."""
    return {
        "resourcefs": {
            "version": "1.0",
            "fallback": {"root": str(source_dir)},
            "sources": [
                {
                    "type": "memory",
                    "name": "first",
                    "base_namespace": "First",
                    "resources": {"First.shared.txt": "first", "First.only-first.txt": "1"},
                },
                {
                    "type": "memory",
                    "name": "second",
                    "base_namespace": "Second",
                    "resources": {"Second.shared.txt": "second"},
                },
            ],
            "logging": {"level": "DEBUG", "file": None},
        }
    }


@pytest.fixture
def config_file(temp_dir: Path, sample_config: Dict[str, Any]) -> Path:
    """Create a configuration file."""
    config_path = temp_dir / "resourcefs.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep RESOURCEFS_* variables from the outer environment out of tests."""
    for key in list(os.environ):
        if key.startswith("RESOURCEFS_"):
            monkeypatch.delenv(key)
    yield


@pytest.fixture(autouse=True)
def isolate_default_config_files(tmp_path, monkeypatch):
    """Point the system and user config locations at files that don't exist."""
    monkeypatch.setattr(config_manager, "SYSTEM_CONFIG_FILE", str(tmp_path / "etc" / "config.yaml"))
    monkeypatch.setattr(config_manager, "USER_CONFIG_FILE", str(tmp_path / "home" / "config.yaml"))
    yield


@pytest.fixture(autouse=True)
def reset_logging():
    """Put the package logger back in library mode after tests that configure it."""
    yield
    package_logger = logging.getLogger("resourcefs")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.addHandler(logging.NullHandler())
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
