"""
Pytest configuration and shared fixtures for hcl2json tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from hcl2json.logging import SilentLogger, set_global_logger
from hcl2json.values import Mapping, from_native


@pytest.fixture(autouse=True)
def silent_global_logger():
    """Reset the global logger so CLI tests don't leak verbosity."""
    set_global_logger(SilentLogger())
    yield
    set_global_logger(SilentLogger())


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Keep real user/project settings files out of the tests.

    XDG_CONFIG_HOME points at an empty directory and the working directory
    is a fresh temporary directory with no .hcl2json.yaml above it.
    """
    xdg = tmp_path / "xdg"
    xdg.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
    monkeypatch.chdir(work)


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def fixtures_dir() -> Path:
    """Provide path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def terraform_tfvars(fixtures_dir: Path) -> Path:
    """Provide path to the sample terraform.tfvars fixture."""
    return fixtures_dir / "terraform.tfvars"


@pytest.fixture
def layered_tfvars(fixtures_dir: Path) -> list[Path]:
    """Provide two tfvars files whose 'tags' objects overlap."""
    return [fixtures_dir / "config1.tfvars", fixtures_dir / "config2.tfvars"]


@pytest.fixture
def sample_document() -> Mapping:
    """
    Provide a merged-looking document as a value tree.

    Keys are deliberately out of alphabetical order.
    """
    return from_native(
        {
            "tags": {"Team": "backend", "Environment": "prod"},
            "region": "us-west-2",
            "database": {"engine": "mysql", "port": 3306},
            "instance_type": "t3.micro",
        }
    )


@pytest.fixture
def create_hcl_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary HCL files.

    Usage:
        path = create_hcl_file("main.tfvars", 'region = "us-west-2"\\n')
    """

    def _create(filename: str, content: str) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _create


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML settings files.

    Usage:
        yaml_path = create_yaml_file("settings.yaml", {"merge": "deep"})
    """
    import yaml

    def _create(filename: str, data: dict[str, Any]) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create
