"""
Config check use case — dry validation of gdgen.yml.

Loads the configuration the way ``generate`` would and checks that the
files and directories each enabled feature reads are in place, without
rendering or writing anything.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from gdgen.core.config.loader import CONFIG_FILE, find_config_file, load_config
from gdgen.core.errors import ConfigError
from gdgen.core.models.config import Features, GeneratorConfig


@dataclass
class ConfigCheckResult:
    """Outcome of ``gdgen config check``."""

    valid: bool = False
    config: GeneratorConfig | None = None
    config_path: Path | None = None
    paths: dict[str, str] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def features(self) -> list[str]:
        return self.config.features.enabled() if self.config else []

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "features": self.features,
            "paths": self.paths,
            "errors": self.errors,
            "warnings": self.warnings,
        }


# option, expected kind, missing is an error (None: created on demand), readers
_PATH_OPTIONS: tuple[tuple[str, str, bool | None, tuple[str, ...]], ...] = (
    ("project_config_path", "file", True, ("layer_consts", "action_consts", "action_invocations")),
    ("resource_path", "dir", False, ("scene_consts", "scene_actions", "icons")),
    ("source_path", "dir", False, ("icon_comments",)),
    ("manifest_path", "file", True, ("icons", "icon_comments")),
    ("output_dir", "dir", None, ("layer_consts", "action_consts", "action_invocations",
                                 "scene_consts", "scene_actions")),
)


def _used(features: Features, readers: tuple[str, ...]) -> bool:
    return any(getattr(features, name) for name in readers)


def _check_paths(config: GeneratorConfig, result: ConfigCheckResult) -> None:
    for option, kind, required, readers in _PATH_OPTIONS:
        path: Path | None = getattr(config, option)
        if path is None or not _used(config.features, readers):
            continue
        result.paths[option] = str(path)

        if required is None:
            if path.exists() and not path.is_dir():
                result.errors.append(f"{option} is not a directory: {path}")
            continue

        present = path.is_file() if kind == "file" else path.is_dir()
        if present:
            continue
        if required:
            result.errors.append(f"{option} does not exist: {path}")
        else:
            result.warnings.append(f"{option} is not a directory: {path}")


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate the generator configuration without generating.

    Args:
        config_path: Explicit gdgen.yml; searched upward from the
            working directory when omitted.

    Returns:
        ConfigCheckResult; ``valid`` is False when any error was found.
    """
    result = ConfigCheckResult(config_path=config_path or find_config_file())
    if result.config_path is None:
        result.errors.append(f"No {CONFIG_FILE} found.")
        return result

    try:
        config = load_config(result.config_path)
    except ConfigError as e:
        result.errors.append(str(e))
        return result
    result.config = config

    result.errors.extend(config.validate_for_run())
    _check_paths(config, result)

    f = config.features
    if config.icon_sources and not f.icons:
        result.warnings.append("icon_sources are configured but the icons feature is disabled")
    if f.action_invocations and not f.action_consts:
        result.warnings.append(
            "action_invocations also generates actions_consts.rs, which it depends on"
        )

    result.valid = not result.errors
    return result
