"""
Generate use case — one full generation run.

This is the top-level orchestrator: it validates the configuration,
reads the project file, renders every enabled feature, writes the
generated Rust modules and the ``mod.rs`` index, then patches the
extension manifest with icon declarations.

All files are rendered before any is written, so a malformed project
file fails the run without producing output. The first GeneratorError
halts the run and is reported in the result; files already written are
not rolled back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from gdgen.core.config.godot_project import read_project_file
from gdgen.core.errors import GeneratorError
from gdgen.core.models.config import GeneratorConfig
from gdgen.core.models.generated import GeneratedFile
from gdgen.core.persistence.file_writer import ensure_output_dir, write_generated_file
from gdgen.core.services.actions import extract_actions
from gdgen.core.services.generators.action_consts import const_names, generate_action_consts
from gdgen.core.services.generators.action_invocations import generate_action_invocations
from gdgen.core.services.generators.layer_consts import generate_layer_consts
from gdgen.core.services.generators.mod_file import generate_mod_file
from gdgen.core.services.generators.scenes import generate_scene_actions, generate_scene_consts
from gdgen.core.services.icon_comments import scan_sources
from gdgen.core.services.layers import extract_layers
from gdgen.core.services.manifest import ManifestPatcher, ManifestPatchResult
from gdgen.core.services.scenes import find_scenes

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
    """Result of a generation run."""

    features: list[str] = field(default_factory=list)
    output_dir: Path | None = None
    written: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    manifest: ManifestPatchResult | None = None
    error: str | None = None
    error_code: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def files(self) -> list[str]:
        return sorted(self.written + self.unchanged)

    def to_dict(self) -> dict:
        result: dict = {
            "ok": self.ok,
            "features": self.features,
        }
        if self.error:
            result["error"] = self.error
            result["error_code"] = self.error_code
        result["output_dir"] = str(self.output_dir) if self.output_dir else None
        result["written"] = self.written
        result["unchanged"] = self.unchanged
        if self.manifest:
            result["manifest"] = self.manifest.to_dict()
        return result


def run_generate(
    config: GeneratorConfig,
    *,
    backup_exists: Callable[[Path], bool] | None = None,
) -> GenerateResult:
    """Run every enabled feature of *config*.

    Args:
        config: Generator configuration with resolved paths.
        backup_exists: Backup state query handed to the ManifestPatcher.

    Returns:
        GenerateResult; ``error``/``error_code`` are set on failure.
    """
    result = GenerateResult(
        features=config.features.enabled(),
        output_dir=config.output_dir,
    )

    # ── Validate once ────────────────────────────────────────────
    problems = config.validate_for_run()
    if problems:
        result.error = "; ".join(problems)
        result.error_code = "ConfigError"
        return result

    try:
        _run(config, result, backup_exists)
    except GeneratorError as e:
        logger.debug("Generation failed", exc_info=True)
        result.error = str(e)
        result.error_code = e.code

    return result


def _run(
    config: GeneratorConfig,
    result: GenerateResult,
    backup_exists: Callable[[Path], bool] | None,
) -> None:
    f = config.features

    # ── Project file ─────────────────────────────────────────────
    document = None
    if f.needs_project_file:
        assert config.project_config_path is not None
        document = read_project_file(config.project_config_path)

    if f.any_codegen:
        assert config.output_dir is not None
        ensure_output_dir(config.output_dir)

    # ── Render ───────────────────────────────────────────────────
    files: list[GeneratedFile] = []

    if f.action_consts or f.action_invocations:
        assert document is not None
        actions = extract_actions(document)
        names = const_names(actions)
        files.append(generate_action_consts(actions, names))
        if f.action_invocations:
            files.append(generate_action_invocations(actions, names))

    if f.layer_consts:
        assert document is not None
        groups = extract_layers(document)
        layer_file = generate_layer_consts(groups, values=config.layer_values)
        if layer_file is None:
            logger.warning("No named layers in %s, layer_consts.rs not generated", document.path)
        else:
            files.append(layer_file)

    if f.scene_consts or f.scene_actions:
        assert config.resource_path is not None
        scenes = find_scenes(config.resource_path)
        if f.scene_consts:
            files.append(generate_scene_consts(scenes))
        if f.scene_actions:
            files.append(generate_scene_actions(scenes))

    if files:
        mod_file = generate_mod_file(files)
        if mod_file is not None:
            files.append(mod_file)

    # ── Write ────────────────────────────────────────────────────
    for generated in files:
        assert config.output_dir is not None
        if write_generated_file(config.output_dir, generated):
            result.written.append(generated.path)
        else:
            result.unchanged.append(generated.path)

    if files:
        logger.info(
            "Generated %d files in %s (%d unchanged)",
            len(files),
            config.output_dir,
            len(result.unchanged),
        )

    # ── Manifest icons ───────────────────────────────────────────
    if f.any_icons:
        icon_sources = collect_icon_sources(config)
        if not icon_sources:
            logger.info("No icon sources found, manifest left untouched")
            return
        assert config.manifest_path is not None
        patcher = ManifestPatcher(backup_exists=backup_exists, resource_path=config.resource_path)
        result.manifest = patcher.patch(config.manifest_path, icon_sources)


def collect_icon_sources(config: GeneratorConfig) -> dict[str, str]:
    """Configured icon sources merged with icon markers from Rust sources.

    Configured entries take precedence over markers.
    """
    icons: dict[str, str] = {}

    if config.features.icon_comments and config.source_path is not None:
        icons.update(scan_sources(config.source_path))

    if config.features.icons:
        for class_name, icon_path in config.icon_sources.items():
            marked = icons.get(class_name)
            if marked is not None and marked != icon_path:
                logger.warning(
                    "Class %s: configured icon %s overrides source marker %s",
                    class_name,
                    icon_path,
                    marked,
                )
            icons[class_name] = icon_path

    return icons
