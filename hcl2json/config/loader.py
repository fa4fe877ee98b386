"""
Settings file loading and merging for hcl2json.

Settings files let a project (or a user) fix formatting and merge defaults
so they don't have to be repeated on every command line. Command-line flags
always take precedence over anything loaded here.

Settings Layers
---------------
1. **Built-in defaults**
   - compact output, indent 2, double quotes, shallow merge

2. **User settings** ($XDG_CONFIG_HOME/hcl2json/config.yaml)
   - Falls back to ~/.config/hcl2json/config.yaml
   - Optional; only loaded if present

3. **Project settings** (.hcl2json.yaml)
   - First file found walking upward from the working directory
   - Replaced by an explicit ``--config PATH``, which must exist
   - Overrides user settings

Merge Behavior
--------------
The loader performs deep merging with "last wins" semantics:
  - **Dicts**: Recursively merged (keys from overlay override base)
  - **Lists**: Completely replaced (NOT appended/extended)
  - **Scalars**: Overwritten (strings, numbers, booleans)

Schema
------
    merge: shallow | deep
    format:
      pretty: true | false
      indent: 4
      quotes: double | single

Functions
---------
load_settings : function
    Load and merge settings layers (main public API).
settings_to_options : function
    Turn merged settings into ConvertOptions.

Error Handling
--------------
- ConfigError: YAML parse errors, unknown keys, invalid values, or a
  missing --config file. All errors are chained with "from err".

Examples
--------
    >>> from hcl2json.config import load_settings, settings_to_options
    >>> settings = load_settings()
    >>> options = settings_to_options(settings, property="tags")
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any

import yaml

from hcl2json.core import ConvertOptions
from hcl2json.exceptions import ConfigError
from hcl2json.logging import get_global_logger
from hcl2json.merge import MERGE_MODES
from hcl2json.serializer import QUOTE_STYLES, SerializeOptions

PROJECT_FILENAME = ".hcl2json.yaml"

DEFAULT_SETTINGS: dict[str, Any] = {
    "merge": "shallow",
    "format": {
        "pretty": False,
        "indent": 2,
        "quotes": "double",
    },
}


# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> dict[str, Any]:
    """
    Load a YAML settings file.

    Empty files yield an empty dict.

    Raises:
      ConfigError - file missing, invalid YAML, or a non-mapping root
    """
    if not p.exists():
        raise ConfigError(f"Settings file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    except OSError as err:
        raise ConfigError(f"Failed to read settings file: {p}: {err}") from err
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Top-level YAML must be a mapping (dict): {p}")
    return data


# -------------------------------
# Merge logic
# -------------------------------


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """
    Deep-merge two dicts with "overlay wins".

    Rules:
      - dict + dict -> deep merge
      - list + list -> overlay REPLACES base (not concatenated)
      - everything else -> overlay overwrites base

    This function does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


# -------------------------------
# Validation
# -------------------------------


def _validate_settings(data: dict[str, Any], origin: Path) -> None:
    """
    Check one settings layer against the schema.

    Layers may be partial; only the keys present are checked.
    """
    unknown = sorted(set(data) - set(DEFAULT_SETTINGS))
    if unknown:
        raise ConfigError(f"Unknown setting(s) in {origin}: {', '.join(unknown)}")

    if "merge" in data and data["merge"] not in MERGE_MODES:
        raise ConfigError(
            f"Invalid 'merge' in {origin}: {data['merge']!r} "
            f"(expected one of: {', '.join(MERGE_MODES)})"
        )

    fmt = data.get("format")
    if fmt is None:
        return
    if not isinstance(fmt, dict):
        raise ConfigError(f"'format' must be a mapping in {origin}")

    unknown = sorted(set(fmt) - set(DEFAULT_SETTINGS["format"]))
    if unknown:
        raise ConfigError(f"Unknown format setting(s) in {origin}: {', '.join(unknown)}")

    if "pretty" in fmt and not isinstance(fmt["pretty"], bool):
        raise ConfigError(f"'format.pretty' must be true or false in {origin}")
    if "indent" in fmt:
        indent = fmt["indent"]
        if isinstance(indent, bool) or not isinstance(indent, int) or indent < 1:
            raise ConfigError(
                f"'format.indent' must be a positive integer in {origin}, got {indent!r}"
            )
    if "quotes" in fmt and fmt["quotes"] not in QUOTE_STYLES:
        raise ConfigError(
            f"Invalid 'format.quotes' in {origin}: {fmt['quotes']!r} "
            f"(expected one of: {', '.join(QUOTE_STYLES)})"
        )


# -------------------------------
# Settings discovery
# -------------------------------


def _user_settings_path() -> Path:
    """Location of the per-user settings file (XDG layout)."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / "hcl2json" / "config.yaml"


def _find_project_settings(start_dir: Path) -> Path | None:
    """
    Walk upward from 'start_dir' looking for '.hcl2json.yaml'.
    Returns the file path or None if not found.
    """
    for parent in [start_dir] + list(start_dir.parents):
        candidate = parent / PROJECT_FILENAME
        if candidate.is_file():
            return candidate
    return None


# -------------------------------
# Public API
# -------------------------------


def load_settings(
    start_dir: Path | None = None,
    config_path: Path | None = None,
) -> dict[str, Any]:
    """
    Load and merge the effective settings.

    Steps
      1) Start from DEFAULT_SETTINGS.
      2) Merge the user settings file if it exists.
      3) Merge config_path if given (must exist); otherwise merge the first
         .hcl2json.yaml found walking upward from start_dir (default: cwd).

    Returns
      A complete settings dict with every key of DEFAULT_SETTINGS.

    Raises
      ConfigError on invalid files or a missing config_path.
    """
    logger = get_global_logger()
    merged = copy.deepcopy(DEFAULT_SETTINGS)

    user_path = _user_settings_path()
    if user_path.is_file():
        logger.verbose("CONFIG", f"Loading: {user_path}")
        user = _load_yaml_file(user_path)
        _validate_settings(user, user_path)
        merged = _deep_merge_dicts(merged, user)

    if config_path is not None:
        project_path: Path | None = Path(config_path)
    else:
        project_path = _find_project_settings((start_dir or Path.cwd()).resolve())

    if project_path is not None:
        logger.verbose("CONFIG", f"Loading: {project_path}")
        project = _load_yaml_file(project_path)
        _validate_settings(project, project_path)
        merged = _deep_merge_dicts(merged, project)

    logger.debug("CONFIG", f"Effective settings: {merged}")

    return merged


def settings_to_options(
    settings: dict[str, Any], property: str | None = None
) -> ConvertOptions:
    """
    Build ConvertOptions from merged settings.

    Returns
      ConvertOptions with the settings' merge mode and format.
    """
    fmt = settings["format"]
    return ConvertOptions(
        merge_mode=settings["merge"],
        property=property,
        format=SerializeOptions(
            pretty=fmt["pretty"],
            indent=fmt["indent"],
            quote_style=fmt["quotes"],
        ),
    )
