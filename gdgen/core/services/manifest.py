"""
Manifest patcher — merges icon declarations into a ``.gdextension`` file.

    [icons]

    Menu = "res://icons/Menu.svg"

The manifest is edited one way only: missing declarations are added,
nothing is removed or rewritten.

Backup state machine (Unbacked → Backed, at most once): before the first
mutation the manifest is copied verbatim to ``<name>.bak``. Once that
backup exists it is never touched again, even if the live manifest has
since been edited by hand.

Writes are all-or-nothing: every declaration is checked for conflicts
first, then the new content replaces the manifest atomically.
"""

from __future__ import annotations

import logging
import re
import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from gdgen.core.errors import (
    IconPathConflict,
    InvalidIconSource,
    ManifestNotFound,
    ManifestWriteFailed,
)
from gdgen.core.models.manifest import ManifestDocument
from gdgen.core.persistence.file_writer import atomic_write_text
from gdgen.core.services.scenes import RES_PREFIX, to_resource_path

logger = logging.getLogger(__name__)

ICONS_SECTION = "icons"
BACKUP_SUFFIX = ".bak"

_SECTION = re.compile(r"^\s*\[([^\[\]]+)\]\s*$")
_DECLARATION = re.compile(r"^\s*(?P<name>[^\s=;#][^=]*?)\s*=\s*(?P<value>.*?)\s*$")
_QUOTED = re.compile(r"^([\"'])(?P<path>.*?)\1")
_COMMENT_START = re.compile(r"\s*[;#]")


@dataclass
class ManifestPatchResult:
    """Outcome of one patch run."""

    manifest_path: Path
    backup_path: Path
    backup_created: bool = False
    added: dict[str, str] = field(default_factory=dict)
    already_present: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added)

    def to_dict(self) -> dict:
        return {
            "manifest_path": str(self.manifest_path),
            "backup_path": str(self.backup_path),
            "backup_created": self.backup_created,
            "added": self.added,
            "already_present": self.already_present,
            "changed": self.changed,
        }


def backup_path_for(manifest_path: Path) -> Path:
    """``rust.gdextension`` → ``rust.gdextension.bak``."""
    return manifest_path.with_name(manifest_path.name + BACKUP_SUFFIX)


def _path_exists(path: Path) -> bool:
    return path.exists()


def read_manifest(path: Path) -> ManifestDocument:
    """Read a manifest, locating its ``[icons]`` section.

    Raises:
        ManifestNotFound: If the file does not exist.
    """
    if not path.is_file():
        raise ManifestNotFound(path)

    try:
        with open(path, encoding="utf-8", newline="") as fh:
            raw = fh.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestWriteFailed(path, f"cannot read manifest: {e}") from e

    return parse_manifest(raw, path)


def parse_manifest(raw: str, path: Path) -> ManifestDocument:
    lines = raw.splitlines(keepends=True)
    doc = ManifestDocument(path=path, existing_lines=lines, newline=_detect_newline(lines))

    in_icons = False
    for index, line in enumerate(lines):
        section = _SECTION.match(line)
        if section:
            in_icons = section.group(1).strip() == ICONS_SECTION
            if in_icons and doc.icons_start is None:
                doc.icons_start = index
                doc.icons_end = index + 1
            continue
        if not in_icons:
            continue
        if not line.strip():
            continue
        doc.icons_end = index + 1
        if _COMMENT_START.match(line):
            continue
        declaration = parse_declaration(line.rstrip("\r\n"))
        if declaration is None:
            logger.debug("%s:%d: skipping unrecognised [icons] line", path, index + 1)
            continue
        class_name, icon_path = declaration
        doc.icon_declarations[class_name] = icon_path

    return doc


def parse_declaration(line: str) -> tuple[str, str] | None:
    """``Class = "path"`` → ``("Class", "path")``.

    Values may be double-quoted, single-quoted or bare; a trailing
    ``;`` or ``#`` comment is dropped. Returns None for lines without
    ``=``.
    """
    match = _DECLARATION.match(line)
    if match is None:
        return None
    value = match.group("value")
    quoted = _QUOTED.match(value)
    if quoted:
        return match.group("name"), quoted.group("path")
    comment = _COMMENT_START.search(value)
    if comment:
        value = value[: comment.start()]
    return match.group("name"), value.strip()


def resolve_icon_path(class_name: str, icon_path: str, resource_path: Path | None) -> str:
    """Normalise an icon source to a ``res://`` path.

    ``res://`` paths are kept; filesystem paths are made relative to the
    Godot resource root.

    Raises:
        InvalidIconSource: The path is outside the resource root, or there
            is no resource root to resolve it against.
    """
    if icon_path.startswith(RES_PREFIX):
        return icon_path
    if resource_path is None:
        raise InvalidIconSource(
            class_name, icon_path, "not a res:// path and no resource_path is configured"
        )
    candidate = Path(icon_path)
    if not candidate.is_absolute():
        candidate = resource_path / candidate
    res = to_resource_path(candidate, resource_path)
    if res is None:
        raise InvalidIconSource(class_name, icon_path, f"outside resource root {resource_path}")
    return res


def format_declaration(class_name: str, icon_path: str) -> str:
    return f'{class_name} = "{icon_path}"'


class ManifestPatcher:
    """Adds icon declarations to a manifest file.

    Args:
        backup_exists: State query for the backup file. Defaults to a
            filesystem check; tests inject their own.
        resource_path: Godot resource root for non-``res://`` icon paths.
    """

    def __init__(
        self,
        backup_exists: Callable[[Path], bool] | None = None,
        resource_path: Path | None = None,
    ):
        self._backup_exists = backup_exists or _path_exists
        self._resource_path = resource_path

    def ensure_backup(self, manifest_path: Path) -> bool:
        """Copy the manifest to its backup path unless a backup exists.

        Returns:
            True if a backup was created by this call.

        Raises:
            ManifestWriteFailed: If the copy fails.
        """
        backup = backup_path_for(manifest_path)
        if self._backup_exists(backup):
            logger.debug("Backup %s already exists, leaving it untouched", backup)
            return False
        try:
            shutil.copyfile(manifest_path, backup)
        except OSError as e:
            raise ManifestWriteFailed(backup, f"cannot create backup: {e}") from e
        logger.info("Backed up %s to %s", manifest_path, backup)
        return True

    def plan(self, doc: ManifestDocument, icon_sources: dict[str, str]) -> ManifestPatchResult:
        """Work out which declarations to add, without touching the file.

        Raises:
            IconPathConflict: A class is declared with a different path.
            InvalidIconSource: An icon path cannot be resolved.
        """
        result = ManifestPatchResult(
            manifest_path=doc.path,
            backup_path=backup_path_for(doc.path),
        )
        for class_name in sorted(icon_sources):
            requested = resolve_icon_path(class_name, icon_sources[class_name], self._resource_path)
            existing = doc.icon_declarations.get(class_name)
            if existing is None:
                result.added[class_name] = requested
            elif existing == requested:
                result.already_present.append(class_name)
            else:
                raise IconPathConflict(class_name, existing, requested)
        return result

    def patch(self, manifest_path: Path, icon_sources: dict[str, str]) -> ManifestPatchResult:
        """Merge *icon_sources* (class name → icon path) into the manifest.

        Raises:
            ManifestNotFound: The manifest does not exist.
            IconPathConflict: A class already has a different icon; the
                manifest is left byte-unchanged.
            ManifestWriteFailed: Backup or rewrite failed.
        """
        doc = read_manifest(manifest_path)
        backup_created = self.ensure_backup(manifest_path)

        result = self.plan(doc, icon_sources)
        result.backup_created = backup_created

        if not result.changed:
            logger.info("Manifest %s already declares all %d icons", manifest_path, len(icon_sources))
            return result

        content = render_patched(doc, result.added)
        try:
            atomic_write_text(manifest_path, content, prefix=f".{manifest_path.name}_")
        except OSError as e:
            raise ManifestWriteFailed(manifest_path, str(e)) from e

        logger.info(
            "Added %d icon declarations to %s: %s",
            len(result.added),
            manifest_path,
            ", ".join(result.added),
        )
        return result


def render_patched(doc: ManifestDocument, additions: dict[str, str]) -> str:
    """Manifest text with *additions* merged into the ``[icons]`` section.

    Existing lines are reproduced verbatim. Without an ``[icons]`` section
    one is appended at the end of the file.
    """
    nl = doc.newline
    lines = list(doc.existing_lines)
    new_lines = [format_declaration(name, path) + nl for name, path in additions.items()]

    if doc.icons_end is not None:
        insert_at = doc.icons_end
        if insert_at > 0 and not lines[insert_at - 1].endswith(("\n", "\r")):
            lines[insert_at - 1] += nl
        lines[insert_at:insert_at] = new_lines
        return "".join(lines)

    if lines and not lines[-1].endswith(("\n", "\r")):
        lines[-1] += nl
    if lines and lines[-1].strip():
        lines.append(nl)
    lines.append(f"[{ICONS_SECTION}]{nl}")
    lines.append(nl)
    lines.extend(new_lines)
    return "".join(lines)


def _detect_newline(lines: list[str]) -> str:
    for line in lines:
        if line.endswith("\r\n"):
            return "\r\n"
        if line.endswith("\n"):
            return "\n"
    return "\n"
