"""
Icon comment scanner — icon markers in Rust sources.

A class opts into an editor icon with a marker comment on its
``#[class(...)]`` attribute (or any line between the derive and the
struct):

    #[derive(GodotClass)]
    #[class(init, base=Control)] // gdgen:icon="res://icons/Menu.svg"
    pub struct Menu {

The scanner maps the next ``struct`` name after a marker to the marker's
path. The result feeds the manifest patcher like configured icon sources.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

MARKER = "gdgen:icon"

_MARKER = re.compile(r'//.*?\bgdgen:icon\s*=\s*"(?P<path>[^"]+)"')
_STRUCT = re.compile(r"^\s*(?:pub(?:\([^)]*\))?\s+)?struct\s+(?P<name>[A-Za-z_][A-Za-z0-9_]*)")

# A marker only applies to a struct this many lines below it
_MAX_DISTANCE = 8


def scan_source_file(path: Path) -> dict[str, str]:
    """Collect ``class name → icon path`` markers from one source file."""
    icons: dict[str, str] = {}
    pending: tuple[str, int] | None = None

    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read %s for icon markers: %s", path, e)
        return icons

    for lineno, line in enumerate(lines, start=1):
        marker = _MARKER.search(line)
        if marker:
            pending = (marker.group("path"), lineno)

        struct = _STRUCT.match(line)
        if struct and pending is not None:
            icon_path, marker_line = pending
            if lineno - marker_line <= _MAX_DISTANCE:
                icons[struct.group("name")] = icon_path
            else:
                logger.warning(
                    "%s:%d: icon marker is not followed by a struct, ignored",
                    path,
                    marker_line,
                )
            pending = None

    if pending is not None:
        logger.warning("%s:%d: icon marker is not followed by a struct, ignored", path, pending[1])
    return icons


def scan_sources(source_root: Path) -> dict[str, str]:
    """Scan every ``.rs`` file under *source_root*, in path order.

    A class marked in several files keeps the last marker found.
    """
    if not source_root.is_dir():
        logger.warning("Source path %s is not a directory, no icon markers found", source_root)
        return {}

    icons: dict[str, str] = {}
    for path in sorted(source_root.rglob("*.rs")):
        found = scan_source_file(path)
        for class_name, icon_path in found.items():
            if class_name in icons and icons[class_name] != icon_path:
                logger.warning(
                    "Class %s has icon markers %s and %s, using %s",
                    class_name,
                    icons[class_name],
                    icon_path,
                    icon_path,
                )
            icons[class_name] = icon_path

    logger.info("Found %d icon markers under %s", len(icons), source_root)
    return icons
