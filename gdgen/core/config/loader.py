"""
Configuration loader — reads gdgen.yml into a GeneratorConfig.

This is the primary entry point for loading generator configuration.
It reads YAML, validates against the Pydantic schema, and anchors
relative paths at the directory holding the file.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from gdgen.core.errors import ConfigError
from gdgen.core.models.config import GeneratorConfig

logger = logging.getLogger(__name__)

CONFIG_FILE = "gdgen.yml"

# Directories examined by find_config_file, the start directory included
MAX_SEARCH_DEPTH = 20


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Nearest gdgen.yml in *start_dir* (default: cwd) or an ancestor.

    Stops after MAX_SEARCH_DEPTH directories; returns None when nothing
    is found.
    """
    start = (start_dir or Path.cwd()).resolve()
    for directory in [start, *start.parents][:MAX_SEARCH_DEPTH]:
        candidate = directory / CONFIG_FILE
        if candidate.is_file():
            logger.debug("Found config at %s", candidate)
            return candidate
    return None


def load_config(path: Path | None = None) -> GeneratorConfig:
    """Load and validate generator configuration.

    Args:
        path: Explicit path to gdgen.yml. If None, searches upward.

    Returns:
        Validated GeneratorConfig with absolute paths.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        raise ConfigError(f"No {CONFIG_FILE} found. Create one, or specify --config.")

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading generator config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    config = parse_config(raw, source=path)
    config = config.resolve_paths(path.parent.resolve())

    logger.info(
        "Loaded %s with features: %s",
        path,
        ", ".join(config.features.enabled()) or "none",
    )
    return config


def parse_config(raw: str, source: Path | None = None) -> GeneratorConfig:
    """Validate YAML text as a GeneratorConfig (paths left as written).

    The YAML may wrap everything under a ``gdgen`` key or be flat.

    Raises:
        ConfigError: If the YAML is malformed or fails validation.
    """
    where = source or "config"

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {where}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {where}, got {type(data).__name__}")

    if "gdgen" in data and isinstance(data["gdgen"], dict):
        data = data["gdgen"]

    try:
        return GeneratorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid generator configuration in {where}: {e}") from e


def apply_overrides(
    config: GeneratorConfig,
    overrides: dict,
    base_dir: Path | None = None,
) -> GeneratorConfig:
    """Return *config* with command-line overrides applied and re-validated.

    Args:
        config: Loaded (or default) configuration.
        overrides: Top-level option values; ``None`` values are ignored.
            ``features`` is merged flag by flag, ``icon_sources`` entry
            by entry.
        base_dir: Directory relative override paths are anchored at
            (default: cwd).

    Raises:
        ConfigError: If the merged configuration fails validation.
    """
    data = config.model_dump()

    for key, value in overrides.items():
        if value is None:
            continue
        if key == "features":
            data["features"].update({k: v for k, v in value.items() if v is not None})
        elif key == "icon_sources":
            data["icon_sources"].update(value)
        else:
            data[key] = value

    try:
        merged = GeneratorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid command-line options: {e}") from e

    return merged.resolve_paths((base_dir or Path.cwd()).resolve())
