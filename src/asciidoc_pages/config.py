#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/asciidoc_pages/config.py
"""Plugin configuration files for the command-line interface.

Supported sources:
- ``.json`` files
- ``.toml`` files
- ``.yaml``/``.yml`` files
- ``pyproject.toml``, using its ``[tool.asciidoc-pages]`` table

Keys are plugin option names, in the host's camelCase form
(``fileExtensions``) or as field names (``file_extensions``).
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from asciidoc_pages.constants import CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION


def _read_toml(path: Path) -> Any:
    return tomllib.loads(path.read_text(encoding="utf-8"))


def _read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _read_yaml(path: Path) -> Any:
    return yaml.safe_load(path.read_text(encoding="utf-8"))


# suffix -> (format label, reader, decode errors)
_READERS: Dict[str, tuple[str, Callable[[Path], Any], tuple[type[Exception], ...]]] = {
    ".toml": ("TOML", _read_toml, (tomllib.TOMLDecodeError,)),
    ".json": ("JSON", _read_json, (json.JSONDecodeError,)),
    ".yaml": ("YAML", _read_yaml, (yaml.YAMLError,)),
    ".yml": ("YAML", _read_yaml, (yaml.YAMLError,)),
}


def _decode(path: Path, suffix: str) -> Any:
    label, reader, errors = _READERS[suffix]
    try:
        return reader(path)
    except errors as e:
        raise argparse.ArgumentTypeError(f"Invalid {label} in config file {path}: {e}") from e


def _as_mapping(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise argparse.ArgumentTypeError(f"{where} must contain a mapping, got {type(value).__name__}")
    return value


def _pyproject_section(path: Path) -> Dict[str, Any]:
    """Return the ``[tool.asciidoc-pages]`` table, or ``{}`` when absent."""
    section = _decode(path, ".toml").get("tool", {}).get(PYPROJECT_TOOL_SECTION)
    if section is None:
        return {}
    return _as_mapping(section, f"[tool.{PYPROJECT_TOOL_SECTION}] in {path}")


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load plugin options from a configuration file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Plugin options mapping

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is missing, unreadable, malformed or of an unknown format

    """
    path = Path(config_path)
    if not path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {path}")

    suffix = path.suffix.lower()
    if path.name.lower() != "pyproject.toml" and suffix not in _READERS:
        raise argparse.ArgumentTypeError(f"Unsupported config file format: {suffix}. Use .json, .toml, or .yaml")

    try:
        if path.name.lower() == "pyproject.toml":
            return _pyproject_section(path)
        return _as_mapping(_decode(path, suffix), f"Config file {path}")
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Cannot read config file {path}: {e}") from e


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest configuration file in ``start_dir`` or its parents.

    A ``pyproject.toml`` only counts when it carries the tool table.
    """
    current = (start_dir or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        for filename in CONFIG_FILENAMES:
            candidate = directory / filename
            if candidate.is_file():
                return candidate
        pyproject = directory / "pyproject.toml"
        if pyproject.is_file() and _pyproject_section(pyproject):
            return pyproject
    return None
