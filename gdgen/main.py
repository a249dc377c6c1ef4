"""
gdgen — CLI entrypoint.

Usage:
    gdgen --help
    gdgen generate
    gdgen config check
    gdgen inspect layers project.godot
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from gdgen import __version__
from gdgen.core.observability.logging_config import setup_cli_logging

_FEATURES = (
    "layer_consts",
    "action_consts",
    "action_invocations",
    "scene_consts",
    "scene_actions",
    "icons",
    "icon_comments",
)


@click.group()
@click.version_option(version=__version__, prog_name="gdgen")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to gdgen.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """gdgen — Rust bindings for Godot project settings."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_cli_logging(debug, verbose, quiet)


def _feature_options(func):
    """Add ``--<feature>/--no-<feature>`` switches for every feature."""
    for name in reversed(_FEATURES):
        flag = name.replace("_", "-")
        func = click.option(
            f"--{flag}/--no-{flag}",
            name,
            default=None,
            help=f"Enable or disable {name}.",
        )(func)
    return func


def _parse_icons(values: tuple[str, ...]) -> dict[str, str] | None:
    if not values:
        return None
    icons: dict[str, str] = {}
    for value in values:
        class_name, sep, icon_path = value.partition("=")
        if not sep or not class_name.strip() or not icon_path.strip():
            raise click.BadParameter(f"expected CLASS=PATH, got '{value}'", param_hint="--icon")
        icons[class_name.strip()] = icon_path.strip()
    return icons


@cli.command()
@click.option("--output-dir", "-o", type=click.Path(), default=None, help="Directory for generated Rust files.")
@click.option("--project-file", type=click.Path(), default=None, help="Path to project.godot.")
@click.option("--resource-path", type=click.Path(), default=None, help="Godot resource root (res://).")
@click.option("--source-path", type=click.Path(), default=None, help="Rust sources to scan for icon markers.")
@click.option("--manifest", type=click.Path(), default=None, help="Path to the .gdextension manifest.")
@click.option("--icon", "icon_specs", multiple=True, metavar="CLASS=PATH", help="Icon for a class (repeatable).")
@click.option(
    "--layer-values",
    type=click.Choice(["index", "bitmask"]),
    default=None,
    help="Layer enum values: layer index or bitmask.",
)
@_feature_options
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(
    ctx: click.Context,
    output_dir: str | None,
    project_file: str | None,
    resource_path: str | None,
    source_path: str | None,
    manifest: str | None,
    icon_specs: tuple[str, ...],
    layer_values: str | None,
    as_json: bool,
    **features: bool | None,
) -> None:
    """Generate Rust modules and patch the extension manifest."""
    from gdgen.core.config.loader import apply_overrides, find_config_file, load_config
    from gdgen.core.errors import ConfigError
    from gdgen.core.models.config import GeneratorConfig
    from gdgen.core.use_cases.generate import run_generate

    overrides = {
        "output_dir": output_dir,
        "project_config_path": project_file,
        "resource_path": resource_path,
        "source_path": source_path,
        "manifest_path": manifest,
        "icon_sources": _parse_icons(icon_specs),
        "layer_values": layer_values,
        "features": features,
    }

    try:
        config_path: Path | None = ctx.obj.get("config_path") or find_config_file()
        config = load_config(config_path) if config_path else GeneratorConfig()
        config = apply_overrides(config, overrides)
    except ConfigError as e:
        if as_json:
            click.echo(json.dumps({"ok": False, "error": str(e), "error_code": e.code}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    result = run_generate(config)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if not result.ok:
        click.secho(f"❌ [{result.error_code}] {result.error}", fg="red", err=True)
        sys.exit(1)

    if ctx.obj.get("quiet", False):
        return

    if result.output_dir and result.files:
        click.secho(f"🦀 Generated into {result.output_dir}", fg="cyan", bold=True)
        for path in result.files:
            if path in result.written:
                click.secho(f"   ✓ {path}", fg="green")
            else:
                click.echo(f"   = {path} (unchanged)")

    if result.manifest:
        m = result.manifest
        click.secho(f"🖼  Manifest {m.manifest_path}", fg="cyan", bold=True)
        if m.backup_created:
            click.echo(f"   Backup: {m.backup_path}")
        for class_name, icon_path in m.added.items():
            click.secho(f"   + {class_name} = {icon_path}", fg="green")
        if not m.changed:
            click.echo("   All icons already declared")


@cli.group()
def config() -> None:
    """Generator configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate gdgen.yml configuration."""
    from gdgen.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.config_path:
        click.echo(f"📄 {result.config_path}")
    if result.features:
        click.echo(f"   features: {', '.join(result.features)}")
    for option, path in result.paths.items():
        click.echo(f"   {option}: {path}")

    for warn in result.warnings:
        click.secho(f"⚠️  {warn}", fg="yellow")

    if not result.valid:
        for err in result.errors:
            click.secho(f"❌ {err}", fg="red", err=True)
        sys.exit(1)

    click.secho("✅ Configuration is valid", fg="green", bold=True)


# ── Register sub-command groups from gdgen/ui/cli/ ───────────────

from gdgen.ui.cli.inspect import inspect  # noqa: E402

cli.add_command(inspect)


if __name__ == "__main__":
    cli()
