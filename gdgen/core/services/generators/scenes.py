"""
Scene generators — scene path constants and a ``Node`` scene-change trait.

    pub const LEVEL_ONE: &str = "res://scenes/LevelOne.tscn";

    fn change_scene_to_level_one(&self) -> Option<Error> { ... }
"""

from __future__ import annotations

from gdgen.core.errors import DuplicateConstantName
from gdgen.core.models.scene import SceneEntry
from gdgen.core.models.generated import GeneratedFile
from gdgen.core.services.generators.rust import doc_code, file_header, string_literal
from gdgen.core.services.naming import constant_name

CONSTS_MODULE = "scene_consts"
ACTIONS_MODULE = "scene_actions"
TRAIT = "SceneActions"


def scene_names(scenes: list[SceneEntry]) -> dict[str, str]:
    """Map each scene's ``res://`` path to its constant name.

    Raises:
        DuplicateConstantName: Two scenes render to the same name.
    """
    names: dict[str, str] = {}
    owners: dict[str, str] = {}
    for scene in scenes:
        name = constant_name(scene.name)
        if name in owners:
            raise DuplicateConstantName(
                name, f"scenes {owners[name]} and {scene.resource_path}"
            )
        owners[name] = scene.resource_path
        names[scene.resource_path] = name
    return names


def generate_scene_consts(scenes: list[SceneEntry]) -> GeneratedFile:
    """Render ``scene_consts.rs``."""
    names = scene_names(scenes)
    content = file_header("allow(dead_code)")
    for scene in scenes:
        content += (
            f"\n/// {doc_code(scene.resource_path)}\n"
            f"pub const {names[scene.resource_path]}: &str = {string_literal(scene.resource_path)};\n"
        )
    return GeneratedFile(
        path=f"{CONSTS_MODULE}.rs",
        content=content,
        feature="scene_consts",
        reason=f"Path constants for {len(scenes)} scenes",
    )


def generate_scene_actions(scenes: list[SceneEntry]) -> GeneratedFile:
    """Render ``scene_actions.rs``: one ``change_scene_to_*`` per scene."""
    names = scene_names(scenes)

    trait_lines = ["    fn change_scene_to(&self, scene_path: &str) -> Option<Error>;"]
    impl_lines: list[str] = []
    for scene in scenes:
        stem = names[scene.resource_path].lower()
        trait_lines.append(f"    /// {doc_code(scene.resource_path)}")
        trait_lines.append(f"    fn change_scene_to_{stem}(&self) -> Option<Error>;")
        impl_lines.append(
            f"    fn change_scene_to_{stem}(&self) -> Option<Error> "
            f"{{ self.change_scene_to({string_literal(scene.resource_path)}) }}"
        )

    body = [
        "use godot::{global::Error, prelude::Node};",
        "",
        f"pub trait {TRAIT} {{",
        *trait_lines,
        "}",
        "",
        f"impl {TRAIT} for Node {{",
        "    fn change_scene_to(&self, scene_path: &str) -> Option<Error> {",
        "        self.get_tree().map(|mut tree| tree.change_scene_to_file(scene_path))",
        "    }",
    ]
    if impl_lines:
        body += ["", *impl_lines]
    body.append("}")

    content = file_header("allow(dead_code)") + "\n".join(body) + "\n"
    return GeneratedFile(
        path=f"{ACTIONS_MODULE}.rs",
        content=content,
        feature="scene_actions",
        reason=f"Scene change helpers for {len(scenes)} scenes",
    )
