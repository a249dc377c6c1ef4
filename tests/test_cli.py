"""
Tests for CLI commands — generate, config check, inspect and global options.
"""

import json
import textwrap
from pathlib import Path

from click.testing import CliRunner

from gdgen.main import cli


def _write_config(tmp_path: Path, features: str) -> Path:
    content = textwrap.dedent("""\
        output_dir: out
        project_config_path: godot/project.godot
        resource_path: godot
        manifest_path: godot/demo.gdextension
        features:
    """) + textwrap.indent(textwrap.dedent(features), "  ")
    config = tmp_path / "gdgen.yml"
    config.write_text(content)
    return config


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Rust bindings for Godot" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestGenerateCommand:
    """Tests for the generate command."""

    def test_generate_from_config(self, tmp_path: Path, godot_dir: Path):
        config = _write_config(tmp_path, "layer_consts: true\naction_consts: true\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "generate"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "out" / "layer_consts.rs").is_file()
        assert "layer_consts.rs" in result.output

    def test_generate_json(self, tmp_path: Path, godot_dir: Path):
        config = _write_config(tmp_path, "scene_consts: true\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["-q", "--config", str(config), "generate", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["written"] == ["scene_consts.rs", "mod.rs"]

    def test_flags_override_config(self, tmp_path: Path, godot_dir: Path):
        config = _write_config(tmp_path, "layer_consts: true\n")
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["--config", str(config), "generate", "--no-layer-consts", "--scene-actions"],
        )
        assert result.exit_code == 0, result.output
        assert (tmp_path / "out" / "scene_actions.rs").is_file()
        assert not (tmp_path / "out" / "layer_consts.rs").exists()

    def test_generate_without_config_file(self, tmp_path: Path, godot_dir: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        result = runner.invoke(
            cli,
            [
                "generate",
                "--output-dir", "gen",
                "--manifest", "godot/demo.gdextension",
                "--icon", "Menu=res://icons/Menu.svg",
                "--icons",
            ],
        )
        assert result.exit_code == 0, result.output
        assert 'Menu = "res://icons/Menu.svg"' in (godot_dir / "demo.gdextension").read_text()

    def test_bad_icon_option(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["generate", "--icon", "MissingEquals", "--icons"])
        assert result.exit_code != 0
        assert "CLASS=PATH" in result.output

    def test_icon_option_with_icons_enabled_in_config(self, tmp_path: Path, godot_dir: Path):
        config = tmp_path / "gdgen.yml"
        config.write_text("manifest_path: godot/demo.gdextension\nfeatures:\n  icons: true\n")
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(config), "generate", "--icon", "Menu=res://icons/Menu.svg"]
        )
        assert result.exit_code == 0, result.output
        assert 'Menu = "res://icons/Menu.svg"' in (godot_dir / "demo.gdextension").read_text()

    def test_no_icons_switch_disables_feature(self, tmp_path: Path, godot_dir: Path):
        config = tmp_path / "gdgen.yml"
        config.write_text(
            "manifest_path: godot/demo.gdextension\n"
            "icon_sources:\n  Menu: res://icons/Menu.svg\n"
            "features:\n  icons: true\n"
        )
        runner = CliRunner()
        result = runner.invoke(
            cli,
            [
                "-q", "--config", str(config), "generate", "--no-icons", "--scene-consts",
                "--output-dir", str(tmp_path / "out"), "--resource-path", str(godot_dir),
            ],
        )
        assert result.exit_code == 0, result.output
        assert "[icons]" not in (godot_dir / "demo.gdextension").read_text()

    def test_generate_failure_exit_code(self, tmp_path: Path, godot_dir: Path):
        (godot_dir / "project.godot").write_text("[layer_names]\n2d_physics/layer_0=\"a\"\n")
        config = _write_config(tmp_path, "layer_consts: true\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "generate"])
        assert result.exit_code == 1
        assert "InvalidLayerKey" in result.output

    def test_nothing_enabled(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["-q", "generate", "--json"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error_code"] == "ConfigError"


class TestConfigCheckCommand:
    """Tests for config check."""

    def test_valid_config(self, tmp_path: Path, godot_dir: Path):
        config = _write_config(tmp_path, "action_consts: true\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "config", "check"])
        assert result.exit_code == 0, result.output
        assert "Configuration is valid" in result.output
        assert "project_config_path:" in result.output
        assert "features: action_consts" in result.output

    def test_invalid_config_json(self, tmp_path: Path):
        config = tmp_path / "gdgen.yml"
        config.write_text("features:\n  layer_consts: true\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["-q", "--config", str(config), "config", "check", "--json"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["valid"] is False
        assert data["errors"]


class TestInspectCommand:
    """Tests for inspect layers / actions."""

    def test_layers(self, godot_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", "layers", str(godot_dir / "project.godot")])
        assert result.exit_code == 0, result.output
        assert "Physics2d" in result.output
        assert "non colliding" in result.output

    def test_layers_json(self, godot_dir: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["-q", "inspect", "layers", str(godot_dir / "project.godot"), "--json"]
        )
        data = json.loads(result.output)
        assert [g["type_name"] for g in data] == ["Avoidance", "Physics2d", "Render3d"]

    def test_actions(self, godot_dir: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", "actions", str(godot_dir / "project.godot")])
        assert result.exit_code == 0, result.output
        assert "jump" in result.output
        assert "SPACE" in result.output

    def test_actions_json(self, godot_dir: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["-q", "inspect", "actions", str(godot_dir / "project.godot"), "--json"]
        )
        data = json.loads(result.output)
        assert data[1] == {"identifier": "fire", "line": data[1]["line"], "bindings": ["ctrl+left_click"]}

    def test_missing_project_file(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect", "layers", str(tmp_path / "project.godot")])
        assert result.exit_code == 1
        assert "not found" in result.output
