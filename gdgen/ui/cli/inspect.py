"""
CLI commands for inspecting a project file.

Thin wrappers over ``gdgen.core.services.layers`` and
``gdgen.core.services.actions``: show what would be generated.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from gdgen.core.config.godot_project import PROJECT_FILE


def _read(path: str):
    from gdgen.core.config.godot_project import read_project_file
    from gdgen.core.errors import GeneratorError

    try:
        return read_project_file(Path(path))
    except GeneratorError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)


@click.group("inspect")
def inspect() -> None:
    """Inspect — layers and input actions of a project.godot file."""


# ── Layers ──────────────────────────────────────────────────────


@inspect.command("layers")
@click.argument("project_file", type=click.Path(), default=PROJECT_FILE)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def layers(project_file: str, as_json: bool) -> None:
    """List named layers grouped by layer type."""
    from gdgen.core.errors import GeneratorError
    from gdgen.core.services.layers import extract_layers

    document = _read(project_file)
    try:
        groups = extract_layers(document, required=False)
    except GeneratorError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps([g.model_dump() for g in groups], indent=2))
        return

    if not groups:
        click.echo("No named layers.")
        return

    for group in groups:
        click.secho(f"🧱 {group.type_name}", fg="cyan", bold=True, nl=False)
        click.echo(f"  ({group.group_name})")
        for entry in group.entries:
            click.echo(f"   {entry.index:>2}  {entry.name}")
        click.echo()


# ── Actions ─────────────────────────────────────────────────────


@inspect.command("actions")
@click.argument("project_file", type=click.Path(), default=PROJECT_FILE)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def actions(project_file: str, as_json: bool) -> None:
    """List input actions and the events bound to them."""
    from gdgen.core.services.actions import action_bindings, extract_actions

    document = _read(project_file)
    entries = extract_actions(document)

    if as_json:
        click.echo(
            json.dumps(
                [
                    {"identifier": a.identifier, "line": a.line, "bindings": action_bindings(a)}
                    for a in entries
                ],
                indent=2,
            )
        )
        return

    if not entries:
        click.echo("No input actions.")
        return

    click.secho(f"🎮 {len(entries)} input actions", fg="cyan", bold=True)
    for action in entries:
        bindings = action_bindings(action)
        label = ", ".join(bindings) if bindings else "no events"
        click.echo(f"   • {action.identifier}  → {label}")
