"""
Pytest configuration and shared fixtures for stratacfg tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
import shutil

import pytest

from stratacfg.config_file import ConfigFile
from stratacfg.logging import SilentLogger, set_global_logger


@pytest.fixture(autouse=True)
def _isolate_globals():
    """Restore process-wide settings changed by a test."""
    separator = ConfigFile.default_separator
    yield
    ConfigFile.default_separator = separator
    set_global_logger(SilentLogger())


@pytest.fixture
def fixtures_dir() -> Path:
    """Provide path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def app_dir(tmp_path: Path, fixtures_dir: Path) -> Path:
    """
    Provide a temporary "install" directory holding copies of the
    definition documents.
    """
    target = tmp_path / "app"
    shutil.copytree(fixtures_dir, target)
    return target


@pytest.fixture
def editor_cfg(app_dir: Path) -> Path:
    """Provide path to the XML editor definition document."""
    return app_dir / "Editor.cfg"


@pytest.fixture
def model_cfg(app_dir: Path) -> Path:
    """Provide path to the XML model definition document."""
    return app_dir / "Model.cfg"


@pytest.fixture
def editor_ini(app_dir: Path) -> Path:
    """Provide path to the INI editor definition document."""
    return app_dir / "Editor.ini"


@pytest.fixture
def editor_yaml(app_dir: Path) -> Path:
    """Provide path to the YAML editor definition document."""
    return app_dir / "Editor.yaml"


@pytest.fixture
def create_overlay(tmp_path: Path):
    """
    Factory fixture for creating overlay documents.

    Usage:
        user_dir = create_overlay("user", "Editor.cfg", "<Editor>...</Editor>")
    """

    def _create(dirname: str, filename: str, content: str) -> Path:
        directory = tmp_path / dirname
        directory.mkdir(parents=True, exist_ok=True)
        (directory / filename).write_text(content, encoding="utf-8")
        return directory

    return _create
