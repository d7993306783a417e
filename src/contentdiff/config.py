#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/config.py
"""Configuration file discovery and loading.

Configuration is read from, in priority order, an explicit path, the
``CONTENTDIFF_CONFIG`` environment variable, or the first of
``.contentdiff.toml``, ``.contentdiff.yaml``, ``.contentdiff.yml``,
``.contentdiff.json`` or a ``pyproject.toml`` with a ``[tool.contentdiff]``
table found walking up from the working directory, then in the home
directory. The loaded mapping is turned into :class:`DiffOptions` by
:func:`options_from_config`.

Example ``.contentdiff.toml``::

    coalesce = "word"

    [markers]
    deletion_color = "#ff4136"
    equal_source = "new"

    [layout]
    page_width = 72
    footer = "Page {page} of {total}"

"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import fields
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from contentdiff.ast.nodes import Color
from contentdiff.constants import CONFIG_FILENAMES, PYPROJECT_SECTION
from contentdiff.exceptions import ConfigurationError
from contentdiff.options import DiffOptions, LayoutOptions, MarkerOptions

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CONTENTDIFF_CONFIG"
COLOR_FIELDS = ("deletion_color", "insertion_color")


def _read_toml(path: Path) -> Any:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _read_yaml(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _read_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


_READERS: Dict[str, Callable[[Path], Any]] = {
    ".toml": _read_toml,
    ".yaml": _read_yaml,
    ".yml": _read_yaml,
    ".json": _read_json,
}


def _pyproject_section(path: Path) -> Dict[str, Any]:
    """Return the ``[tool.contentdiff]`` table of a pyproject.toml, or an empty dict."""
    try:
        data = _read_toml(path)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {path}: {e}", config_path=str(path), original_error=e) from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}", config_path=str(path), original_error=e) from e

    section = data.get("tool", {}).get(PYPROJECT_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigurationError(
            f"[tool.{PYPROJECT_SECTION}] in {path} must be a table, got {type(section).__name__}",
            config_path=str(path),
        )
    return section


def load_config_file(config_path: Union[Path, str]) -> Dict[str, Any]:
    """Load a configuration mapping from a TOML, YAML, JSON or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Configuration file

    Returns
    -------
    dict
        Configuration mapping

    Raises
    ------
    ConfigurationError
        If the file is missing, unreadable, malformed or not a mapping

    """
    path = Path(config_path)
    if not path.is_file():
        raise ConfigurationError(f"Configuration file does not exist: {path}", config_path=str(path))

    if path.name.lower() == "pyproject.toml":
        return _pyproject_section(path)

    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise ConfigurationError(
            f"Unsupported config file format: {path.suffix or path.name}. Use .toml, .yaml or .json",
            config_path=str(path),
        )

    try:
        config = reader(path)
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}", config_path=str(path), original_error=e) from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}", config_path=str(path), original_error=e) from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Config file {path} must contain a mapping, got {type(config).__name__}", config_path=str(path)
        )
    logger.debug("loaded configuration from %s", path)
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Walk up from ``start_dir`` (default: cwd) and return the first config file found.

    A pyproject.toml only counts when it has a non-empty ``[tool.contentdiff]``
    table; an unreadable one is skipped.
    """
    current = (start_dir or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        for filename in CONFIG_FILENAMES:
            candidate = directory / filename
            if candidate.is_file():
                return candidate

        pyproject = directory / "pyproject.toml"
        if pyproject.is_file():
            try:
                if _pyproject_section(pyproject):
                    return pyproject
            except ConfigurationError as e:
                logger.debug("skipping %s: %s", pyproject, e)
    return None


def discover_config_file(start_dir: Optional[Path] = None, home: Optional[Path] = None) -> Optional[Path]:
    """Find a config file in the parent directories, then in the home directory."""
    found = find_config_in_parents(start_dir)
    if found is not None:
        return found

    home = home or Path.home()
    for filename in CONFIG_FILENAMES:
        candidate = home / filename
        if candidate.is_file():
            return candidate
    return None


def load_config_with_priority(explicit_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from an explicit path, the environment, or discovery.

    Returns an empty mapping when no configuration exists.
    """
    if explicit_path:
        return load_config_file(explicit_path)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return load_config_file(env_path)

    discovered = discover_config_file()
    if discovered is not None:
        logger.info("using configuration file %s", discovered)
        return load_config_file(discovered)
    return {}


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge ``override`` into a copy of ``base``.

    Examples
    --------
        >>> merge_configs({"layout": {"page_width": 60}}, {"layout": {"footer": "{page}"}})
        {'layout': {'page_width': 60, 'footer': '{page}'}}

    """
    result = dict(base)
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def _check_keys(section: str, values: Dict[str, Any], allowed: set[str]) -> None:
    unknown = sorted(set(values) - allowed)
    if unknown:
        raise ConfigurationError(f"Unknown {section} option(s): {', '.join(unknown)}")


def options_from_config(config: Dict[str, Any]) -> DiffOptions:
    """Build :class:`DiffOptions` from a configuration mapping.

    Parameters
    ----------
    config : dict
        Top-level keys of :class:`DiffOptions` plus nested ``markers`` and
        ``layout`` tables. Colors are given as ``#rrggbb`` strings.

    Returns
    -------
    DiffOptions

    Raises
    ------
    ConfigurationError
        For unknown keys or invalid values

    """
    marker_values = dict(config.get("markers") or {})
    layout_values = dict(config.get("layout") or {})
    top_values = {key: value for key, value in config.items() if key not in ("markers", "layout")}

    _check_keys("markers", marker_values, {f.name for f in fields(MarkerOptions)})
    _check_keys("layout", layout_values, {f.name for f in fields(LayoutOptions)})
    _check_keys("top-level", top_values, {f.name for f in fields(DiffOptions)} - {"markers", "layout"})

    try:
        for name in COLOR_FIELDS:
            if isinstance(marker_values.get(name), str):
                marker_values[name] = Color.from_hex(marker_values[name])
        return DiffOptions(
            markers=MarkerOptions(**marker_values),
            layout=LayoutOptions(**layout_values),
            **top_values,
        )
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}", original_error=e) from e


__all__ = [
    "CONFIG_ENV_VAR",
    "discover_config_file",
    "find_config_in_parents",
    "load_config_file",
    "load_config_with_priority",
    "merge_configs",
    "options_from_config",
]
