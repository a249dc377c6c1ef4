"""
Scene scanner — finds ``.tscn`` scenes under the Godot resource root.
"""

from __future__ import annotations

import logging
from pathlib import Path

from gdgen.core.errors import DuplicateConstantName
from gdgen.core.models.scene import SceneEntry

logger = logging.getLogger(__name__)

SCENE_SUFFIX = ".tscn"
RES_PREFIX = "res://"

# Never scanned: editor caches and VCS metadata
_SKIP_DIRS = {".godot", ".import", ".git"}


def to_resource_path(path: Path, resource_root: Path) -> str | None:
    """Convert a filesystem path under *resource_root* to ``res://...``.

    Returns:
        The ``res://`` path, or None if *path* is outside the root.
    """
    try:
        relative = path.resolve().relative_to(resource_root.resolve())
    except ValueError:
        return None
    return RES_PREFIX + relative.as_posix()


def find_scenes(resource_root: Path) -> list[SceneEntry]:
    """Scan *resource_root* recursively for scenes.

    Scenes sharing a file stem get parent folder names prepended until
    the name is unique (``multiplayer/Main.tscn`` → ``multiplayerMain``).
    Scenes are visited shallowest first, so the top-level scene keeps the
    short name.

    Returns:
        Scenes ordered by directory depth, then path.

    Raises:
        DuplicateConstantName: Two scenes still share a name after prefixing.
    """
    if not resource_root.is_dir():
        logger.warning("Resource path %s is not a directory, no scenes found", resource_root)
        return []

    paths = [
        p
        for p in resource_root.rglob(f"*{SCENE_SUFFIX}")
        if p.is_file() and not _SKIP_DIRS.intersection(p.relative_to(resource_root).parts)
    ]
    paths.sort(key=lambda p: _depth_then_path(p.relative_to(resource_root)))

    scenes: dict[str, SceneEntry] = {}
    for path in paths:
        name = path.stem
        parent = path.parent
        while name in scenes and parent != resource_root and parent != parent.parent:
            name = parent.name + name
            parent = parent.parent

        res_path = to_resource_path(path, resource_root)
        if res_path is None:
            continue
        if name in scenes:
            raise DuplicateConstantName(
                name, f"scenes {scenes[name].resource_path} and {res_path} share a name"
            )
        scenes[name] = SceneEntry(name=name, resource_path=res_path)

    result = sorted(scenes.values(), key=lambda s: (s.depth, s.resource_path))
    logger.info("Found %d scenes under %s", len(result), resource_root)
    return result


def _depth_then_path(relative: Path) -> tuple[int, str]:
    return len(relative.parts), relative.as_posix()
