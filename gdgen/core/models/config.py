"""
Generator configuration model — loaded from gdgen.yml or built by the CLI.

This is the explicit configuration struct for a run: it accumulates
every optional setting, is validated once by ``validate_for_run()`` at
the start of ``run_generate()``, and is not kept afterwards.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

_CLASS_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class Features(BaseModel):
    """Feature flags. Each flag only enforces the options it needs."""

    layer_consts: bool = False
    action_consts: bool = False
    action_invocations: bool = False
    scene_consts: bool = False
    scene_actions: bool = False
    icons: bool = False
    icon_comments: bool = False

    @property
    def any_codegen(self) -> bool:
        return (
            self.layer_consts
            or self.action_consts
            or self.action_invocations
            or self.scene_consts
            or self.scene_actions
        )

    @property
    def needs_project_file(self) -> bool:
        return self.layer_consts or self.action_consts or self.action_invocations

    @property
    def any_icons(self) -> bool:
        return self.icons or self.icon_comments

    def enabled(self) -> list[str]:
        return [name for name, on in self.model_dump().items() if on]


class GeneratorConfig(BaseModel):
    """Root generator configuration.

    Relative paths are resolved against the directory of gdgen.yml by
    ``resolve_paths()``.
    """

    output_dir: Path | None = None
    project_config_path: Path | None = None
    resource_path: Path | None = None
    source_path: Path | None = None
    manifest_path: Path | None = None

    icon_sources: dict[str, str] = Field(default_factory=dict)
    layer_values: Literal["index", "bitmask"] = "index"

    features: Features = Field(default_factory=Features)

    @field_validator("icon_sources")
    @classmethod
    def _check_icon_sources(cls, value: dict[str, str]) -> dict[str, str]:
        for class_name, icon_path in value.items():
            if not class_name or not str(icon_path).strip():
                raise ValueError("icon source class names and paths must be non-empty strings")
            if not _CLASS_NAME.match(class_name):
                raise ValueError(f"'{class_name}' is not a valid class name")
        return value

    def resolve_paths(self, base_dir: Path) -> GeneratorConfig:
        """Return a copy with relative paths anchored at *base_dir*."""
        updates: dict[str, Path] = {}
        for name in (
            "output_dir",
            "project_config_path",
            "resource_path",
            "source_path",
            "manifest_path",
        ):
            value: Path | None = getattr(self, name)
            if value is not None and not value.is_absolute():
                updates[name] = base_dir / value
        return self.model_copy(update=updates)

    def validate_for_run(self) -> list[str]:
        """List the problems that prevent a run with the enabled features.

        Returns:
            Human-readable messages; empty when the config is runnable.
        """
        errors: list[str] = []
        f = self.features

        if not f.any_codegen and not f.any_icons:
            errors.append("No features enabled, nothing to generate.")

        if f.any_codegen and self.output_dir is None:
            errors.append("output_dir is required when a code generation feature is enabled")

        if f.needs_project_file and self.project_config_path is None:
            errors.append(
                "project_config_path is required for layer_consts, action_consts "
                "and action_invocations"
            )

        if (f.scene_consts or f.scene_actions) and self.resource_path is None:
            errors.append("resource_path is required for scene_consts and scene_actions")

        if f.any_icons and self.manifest_path is None:
            errors.append("manifest_path is required for icons and icon_comments")

        if f.icons and not self.icon_sources and not f.icon_comments:
            errors.append("icons is enabled but no icon_sources are configured")

        if f.icon_comments and self.source_path is None:
            errors.append("source_path is required for icon_comments")

        return errors
