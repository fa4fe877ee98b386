"""
Tests for hcl2json.config.loader module.

Tests settings loading and merging including:
- Built-in defaults
- User and project layers
- Upward discovery of .hcl2json.yaml
- Explicit --config files
- Validation errors
"""

from __future__ import annotations

import io
import os
from pathlib import Path

import pytest

from hcl2json.config import DEFAULT_SETTINGS, load_settings, settings_to_options
from hcl2json.exceptions import ConfigError
from hcl2json.logging import DefaultLogger, set_global_logger


def _user_config(data_path: Path) -> Path:
    return Path(os.environ["XDG_CONFIG_HOME"]) / "hcl2json" / data_path


class TestSettingsLoading:
    """Tests for basic settings loading."""

    def test_defaults_without_files(self, tmp_test_dir):
        """Test that defaults are returned when no file exists."""
        settings = load_settings(start_dir=tmp_test_dir)
        assert settings == DEFAULT_SETTINGS

    def test_defaults_not_shared(self, tmp_test_dir):
        """Test that callers can't mutate the built-in defaults."""
        settings = load_settings(start_dir=tmp_test_dir)
        settings["format"]["indent"] = 8
        assert DEFAULT_SETTINGS["format"]["indent"] == 2

    def test_project_file_found_upward(self, tmp_test_dir):
        """Test that .hcl2json.yaml is found in a parent directory."""
        (tmp_test_dir / ".hcl2json.yaml").write_text("merge: deep\n")
        nested = tmp_test_dir / "envs" / "prod"
        nested.mkdir(parents=True)

        settings = load_settings(start_dir=nested)

        assert settings["merge"] == "deep"
        assert settings["format"] == DEFAULT_SETTINGS["format"]

    def test_explicit_config_path(self, create_yaml_file):
        """Test loading an explicit settings file."""
        path = create_yaml_file("custom.yaml", {"format": {"quotes": "single"}})

        settings = load_settings(config_path=path)

        assert settings["format"]["quotes"] == "single"
        assert settings["format"]["indent"] == 2

    def test_missing_explicit_config_raises(self, tmp_test_dir):
        """Test that a missing --config file is an error."""
        with pytest.raises(ConfigError, match="not found"):
            load_settings(config_path=tmp_test_dir / "nope.yaml")

    def test_empty_file_is_no_settings(self, tmp_test_dir):
        """Test that an empty settings file changes nothing."""
        path = tmp_test_dir / "empty.yaml"
        path.write_text("")
        assert load_settings(config_path=path) == DEFAULT_SETTINGS


class TestSettingsMerging:
    """Tests for layer merging."""

    def test_project_overrides_user(self, tmp_test_dir):
        """Test that the project layer deep-merges over the user layer."""
        user = _user_config(Path("config.yaml"))
        user.parent.mkdir(parents=True)
        user.write_text("merge: deep\nformat:\n  pretty: true\n  indent: 4\n")

        (tmp_test_dir / ".hcl2json.yaml").write_text("format:\n  indent: 8\n")

        settings = load_settings(start_dir=tmp_test_dir)

        assert settings["merge"] == "deep"
        assert settings["format"]["pretty"] is True
        assert settings["format"]["indent"] == 8
        assert settings["format"]["quotes"] == "double"

    def test_settings_to_options(self, create_yaml_file):
        """Test conversion into ConvertOptions."""
        path = create_yaml_file(
            "s.yaml",
            {"merge": "deep", "format": {"pretty": True, "indent": 3, "quotes": "single"}},
        )

        options = settings_to_options(load_settings(config_path=path), property="tags")

        assert options.merge_mode == "deep"
        assert options.property == "tags"
        assert options.format.pretty is True
        assert options.format.indent == 3
        assert options.format.quote_style == "single"


class TestSettingsValidation:
    """Tests for settings errors."""

    @pytest.mark.parametrize(
        "content, message",
        [
            ("colour: red\n", "Unknown setting"),
            ("merge: append\n", "Invalid 'merge'"),
            ("format: compact\n", "must be a mapping"),
            ("format:\n  width: 80\n", "Unknown format setting"),
            ("format:\n  pretty: yes-please\n", "format.pretty"),
            ("format:\n  indent: 0\n", "positive integer"),
            ("format:\n  indent: true\n", "positive integer"),
            ("format:\n  quotes: backtick\n", "format.quotes"),
            ("- just\n- a list\n", "must be a mapping"),
        ],
    )
    def test_invalid_settings(self, tmp_test_dir, content, message):
        """Test that invalid settings raise ConfigError."""
        path = tmp_test_dir / "bad.yaml"
        path.write_text(content)

        with pytest.raises(ConfigError, match=message):
            load_settings(config_path=path)

    def test_yaml_syntax_error(self, tmp_test_dir):
        """Test that YAML syntax errors are chained."""
        path = tmp_test_dir / "broken.yaml"
        path.write_text("format: {pretty: true\n")

        with pytest.raises(ConfigError, match="Error parsing YAML") as exc_info:
            load_settings(config_path=path)

        assert exc_info.value.__cause__ is not None


class TestSettingsLogging:
    """Tests for settings diagnostics."""

    def test_reports_loaded_files(self, tmp_test_dir):
        """Test that each settings layer used is reported."""
        user = _user_config(Path("config.yaml"))
        user.parent.mkdir(parents=True)
        user.write_text("merge: deep\n")
        project = tmp_test_dir / ".hcl2json.yaml"
        project.write_text("format:\n  indent: 4\n")

        stream = io.StringIO()
        set_global_logger(DefaultLogger(debug=True, stream=stream))
        load_settings(start_dir=tmp_test_dir)

        lines = stream.getvalue().splitlines()
        assert f"[CONFIG] Loading: {user}" in lines
        assert f"[CONFIG] Loading: {project.resolve()}" in lines
        assert any(
            line.startswith("[CONFIG] Effective settings:") and "'indent': 4" in line
            for line in lines
        )

    def test_no_files_reports_only_effective_settings(self, tmp_test_dir):
        """Test that missing layers are not reported as loaded."""
        stream = io.StringIO()
        set_global_logger(DefaultLogger(debug=True, stream=stream))
        load_settings(start_dir=tmp_test_dir)

        lines = stream.getvalue().splitlines()
        assert len(lines) == 1
        assert lines[0].startswith("[CONFIG] Effective settings:")
