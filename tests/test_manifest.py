"""
Tests for the manifest patcher — icon declarations in .gdextension files.
"""

import os
import stat
import textwrap
from pathlib import Path

import pytest

from gdgen.core.errors import IconPathConflict, InvalidIconSource, ManifestNotFound
from gdgen.core.services.manifest import (
    ManifestPatcher,
    backup_path_for,
    parse_manifest,
    read_manifest,
    render_patched,
    resolve_icon_path,
)

WITH_ICONS = textwrap.dedent("""\
    [configuration]
    entry_symbol = "gdext_rust_init"

    [icons]

    Hud = "res://icons/Hud.svg"

    [libraries]
    linux.debug.x86_64 = "res://../rust/target/debug/libdemo.so"
""")


@pytest.fixture
def manifest(godot_dir: Path) -> Path:
    return godot_dir / "demo.gdextension"


def _never_backed(_path: Path) -> bool:
    return False


# ═══════════════════════════════════════════════════════════════════
#  Reading
# ═══════════════════════════════════════════════════════════════════


class TestReadManifest:
    """Tests for read_manifest() / parse_manifest()."""

    def test_no_icons_section(self, manifest: Path):
        doc = read_manifest(manifest)
        assert not doc.has_icons_section
        assert doc.icon_declarations == {}
        assert doc.text() == manifest.read_text()

    def test_icons_section(self, tmp_path: Path):
        doc = parse_manifest(WITH_ICONS, tmp_path / "x.gdextension")
        assert doc.icon_declarations == {"Hud": "res://icons/Hud.svg"}
        assert doc.icons_start == 3
        assert doc.icons_end == 6

    def test_compact_declarations(self, tmp_path: Path):
        doc = parse_manifest('[icons]\nA="res://a.svg"\nB = "res://b.svg" ; note\n', tmp_path / "m")
        assert doc.icon_declarations == {"A": "res://a.svg", "B": "res://b.svg"}

    def test_single_quoted_and_bare_values(self, tmp_path: Path):
        raw = "[icons]\nA = 'res://a.svg'\nB = res://b.svg ; note\n; C = \"res://c.svg\"\nnot a declaration\n"
        doc = parse_manifest(raw, tmp_path / "m")
        assert doc.icon_declarations == {"A": "res://a.svg", "B": "res://b.svg"}
        assert doc.icons_end == 5

    def test_crlf_detected(self, tmp_path: Path):
        doc = parse_manifest("[icons]\r\nA = \"res://a.svg\"\r\n", tmp_path / "m")
        assert doc.newline == "\r\n"
        assert doc.icon_declarations == {"A": "res://a.svg"}

    def test_missing(self, tmp_path: Path):
        with pytest.raises(ManifestNotFound):
            read_manifest(tmp_path / "missing.gdextension")


class TestRenderPatched:
    """Tests for render_patched()."""

    def test_appends_section(self, tmp_path: Path):
        doc = parse_manifest("[configuration]\nentry_symbol = \"init\"\n", tmp_path / "m")
        out = render_patched(doc, {"Menu": "res://icons/Menu.svg"})
        assert out == (
            "[configuration]\n"
            'entry_symbol = "init"\n'
            "\n"
            "[icons]\n"
            "\n"
            'Menu = "res://icons/Menu.svg"\n'
        )

    def test_appends_after_missing_final_newline(self, tmp_path: Path):
        doc = parse_manifest("[configuration]\nx = 1", tmp_path / "m")
        out = render_patched(doc, {"A": "res://a.svg"})
        assert out == '[configuration]\nx = 1\n\n[icons]\n\nA = "res://a.svg"\n'

    def test_inserts_into_existing_section(self, tmp_path: Path):
        doc = parse_manifest(WITH_ICONS, tmp_path / "m")
        out = render_patched(doc, {"Menu": "res://icons/Menu.svg"})
        assert (
            '[icons]\n\nHud = "res://icons/Hud.svg"\nMenu = "res://icons/Menu.svg"\n\n[libraries]\n'
        ) in out

    def test_keeps_crlf(self, tmp_path: Path):
        doc = parse_manifest("[icons]\r\nA = \"res://a.svg\"\r\n", tmp_path / "m")
        out = render_patched(doc, {"B": "res://b.svg"})
        assert out == '[icons]\r\nA = "res://a.svg"\r\nB = "res://b.svg"\r\n'

    def test_empty_manifest(self, tmp_path: Path):
        out = render_patched(parse_manifest("", tmp_path / "m"), {"A": "res://a.svg"})
        assert out == '[icons]\n\nA = "res://a.svg"\n'


# ═══════════════════════════════════════════════════════════════════
#  Patching
# ═══════════════════════════════════════════════════════════════════


class TestPatch:
    """Tests for ManifestPatcher.patch()."""

    def test_adds_icons_sorted(self, manifest: Path):
        result = ManifestPatcher().patch(
            manifest,
            {"Menu": "res://icons/Menu.svg", "Hud": "res://icons/Hud.svg"},
        )
        assert list(result.added) == ["Hud", "Menu"]
        text = manifest.read_text()
        assert text.index('Hud = "res://icons/Hud.svg"') < text.index('Menu = "res://icons/Menu.svg"')

    def test_idempotent(self, manifest: Path):
        icons = {"Menu": "res://icons/Menu.svg"}
        ManifestPatcher().patch(manifest, icons)
        first = manifest.read_bytes()

        result = ManifestPatcher().patch(manifest, icons)
        assert not result.changed
        assert result.already_present == ["Menu"]
        assert manifest.read_bytes() == first

    def test_nothing_to_add_does_not_rewrite(self, tmp_path: Path):
        manifest = tmp_path / "m.gdextension"
        manifest.write_text(WITH_ICONS)
        before = manifest.stat().st_mtime_ns

        result = ManifestPatcher(backup_exists=lambda p: True).patch(
            manifest, {"Hud": "res://icons/Hud.svg"}
        )
        assert not result.changed
        assert manifest.stat().st_mtime_ns == before

    def test_conflict_leaves_manifest_unchanged(self, tmp_path: Path):
        manifest = tmp_path / "m.gdextension"
        manifest.write_text(WITH_ICONS)
        before = manifest.read_bytes()

        with pytest.raises(IconPathConflict) as exc:
            ManifestPatcher().patch(
                manifest,
                {"Aaa": "res://icons/Aaa.svg", "Hud": "res://other/Hud.svg"},
            )
        assert exc.value.class_name == "Hud"
        assert exc.value.existing_path == "res://icons/Hud.svg"
        assert exc.value.requested_path == "res://other/Hud.svg"
        assert manifest.read_bytes() == before

    def test_single_quoted_declaration_already_present(self, tmp_path: Path):
        manifest = tmp_path / "m.gdextension"
        manifest.write_text("[icons]\nHud = 'res://icons/Hud.svg'\n")
        before = manifest.read_bytes()

        result = ManifestPatcher(backup_exists=lambda p: True).patch(
            manifest, {"Hud": "res://icons/Hud.svg"}
        )
        assert result.already_present == ["Hud"]
        assert manifest.read_bytes() == before

    def test_bare_declaration_conflicts(self, tmp_path: Path):
        manifest = tmp_path / "m.gdextension"
        manifest.write_text("[icons]\nHud = res://icons/Hud.svg\n")

        with pytest.raises(IconPathConflict):
            ManifestPatcher().patch(manifest, {"Hud": "res://other/Hud.svg"})

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
    def test_keeps_file_mode(self, manifest: Path):
        manifest.chmod(0o644)
        ManifestPatcher().patch(manifest, {"Menu": "res://icons/Menu.svg"})
        assert "Menu" in manifest.read_text()
        assert stat.S_IMODE(manifest.stat().st_mode) == 0o644

    def test_missing_manifest(self, tmp_path: Path):
        with pytest.raises(ManifestNotFound):
            ManifestPatcher().patch(tmp_path / "missing.gdextension", {"A": "res://a.svg"})

    def test_no_temp_files_left(self, manifest: Path):
        ManifestPatcher().patch(manifest, {"Menu": "res://icons/Menu.svg"})
        leftovers = [p.name for p in manifest.parent.iterdir() if p.name.endswith(".tmp")]
        assert leftovers == []

    def test_filesystem_icon_path(self, godot_dir: Path, manifest: Path):
        patcher = ManifestPatcher(resource_path=godot_dir)
        result = patcher.patch(manifest, {"Menu": str(godot_dir / "icons" / "Menu.svg")})
        assert result.added == {"Menu": "res://icons/Menu.svg"}


class TestBackup:
    """The backup is written once, before the first mutation."""

    def test_first_patch_creates_backup(self, manifest: Path):
        original = manifest.read_bytes()
        result = ManifestPatcher().patch(manifest, {"Menu": "res://icons/Menu.svg"})
        assert result.backup_created
        assert result.backup_path == backup_path_for(manifest)
        assert backup_path_for(manifest).read_bytes() == original

    def test_backup_never_overwritten(self, manifest: Path):
        original = manifest.read_bytes()
        ManifestPatcher().patch(manifest, {"Menu": "res://icons/Menu.svg"})

        # hand edit after the first run
        manifest.write_text(manifest.read_text() + "\n; edited\n")
        result = ManifestPatcher().patch(manifest, {"Hud": "res://icons/Hud.svg"})

        assert not result.backup_created
        assert backup_path_for(manifest).read_bytes() == original

    def test_injected_state_backed(self, manifest: Path):
        result = ManifestPatcher(backup_exists=lambda p: True).patch(
            manifest, {"Menu": "res://icons/Menu.svg"}
        )
        assert not result.backup_created
        assert not backup_path_for(manifest).exists()

    def test_injected_state_unbacked(self, manifest: Path):
        backup = backup_path_for(manifest)
        backup.write_text("stale backup\n")

        result = ManifestPatcher(backup_exists=_never_backed).patch(
            manifest, {"Menu": "res://icons/Menu.svg"}
        )
        assert result.backup_created
        assert backup.read_text() != "stale backup\n"

    def test_backup_queries_backup_path(self, manifest: Path):
        asked: list[Path] = []

        def backup_exists(path: Path) -> bool:
            asked.append(path)
            return True

        ManifestPatcher(backup_exists=backup_exists).patch(manifest, {"A": "res://a.svg"})
        assert asked == [manifest.with_name("demo.gdextension.bak")]


class TestResolveIconPath:
    """Tests for resolve_icon_path()."""

    def test_res_path_kept(self):
        assert resolve_icon_path("A", "res://a.svg", None) == "res://a.svg"

    def test_relative_to_resource_root(self, godot_dir: Path):
        assert resolve_icon_path("Menu", "icons/Menu.svg", godot_dir) == "res://icons/Menu.svg"

    def test_outside_root(self, godot_dir: Path):
        with pytest.raises(InvalidIconSource, match="outside resource root"):
            resolve_icon_path("Menu", "../elsewhere/Menu.svg", godot_dir)

    def test_no_resource_root(self):
        with pytest.raises(InvalidIconSource):
            resolve_icon_path("Menu", "icons/Menu.svg", None)
