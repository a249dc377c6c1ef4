"""
Action invocations generator — an ``Input`` extension trait.

For every action three wrappers are generated that forward to the
engine's input query API with the action's accessor from
``actions_consts``:

    fn is_jump_pressed(&self) -> bool { self.is_action_pressed(&actions_consts::JUMP()) }
    fn is_jump_just_pressed(&self) -> bool { ... }
    fn is_jump_just_released(&self) -> bool { ... }
"""

from __future__ import annotations

from gdgen.core.models.action import ActionEntry
from gdgen.core.models.generated import GeneratedFile
from gdgen.core.services.actions import action_bindings
from gdgen.core.services.generators import action_consts
from gdgen.core.services.generators.rust import doc_code, file_header

MODULE = "actions_invocations"
TRAIT = "InputActionInvocations"

# (method suffix, engine method, doc phrasing)
_QUERIES = (
    ("pressed", "is_action_pressed", "while {keys} {verb} pressed"),
    ("just_pressed", "is_action_just_pressed", "when {keys} {verb} just pressed"),
    ("just_released", "is_action_just_released", "when {keys} {verb} just released"),
)


def method_stem(const_name: str) -> str:
    """``MOVE_LEFT`` → ``move_left``."""
    return const_name.lower()


def format_trait_methods(action: ActionEntry, const_name: str) -> list[str]:
    bindings = action_bindings(action)
    if bindings:
        keys = " or ".join(doc_code(b) for b in bindings)
        verb = "are" if "+" in bindings[0] else "is"
    else:
        keys = f"action {doc_code(action.identifier)}"
        verb = "is"

    stem = method_stem(const_name)
    lines: list[str] = []
    for suffix, _engine_method, phrase in _QUERIES:
        lines.append(f"    /// Returns true {phrase.format(keys=keys, verb=verb)}")
        lines.append(f"    fn is_{stem}_{suffix}(&self) -> bool;")
    return lines


def format_impl_methods(const_name: str) -> list[str]:
    stem = method_stem(const_name)
    return [
        f"    fn is_{stem}_{suffix}(&self) -> bool "
        f"{{ self.{engine_method}(&{action_consts.MODULE}::{const_name}()) }}"
        for suffix, engine_method, _phrase in _QUERIES
    ]


def generate_action_invocations(
    actions: list[ActionEntry],
    names: dict[str, str],
) -> GeneratedFile:
    """Render ``actions_invocations.rs``.

    Args:
        actions: Actions from ``extract_actions()``, in first-seen order.
        names: Accessor names from ``action_consts.const_names()``; the
            generated impl calls those accessors, so the constants module
            must be generated alongside.
    """
    trait_blocks = ["\n".join(format_trait_methods(a, names[a.identifier])) for a in actions]
    impl_blocks = ["\n".join(format_impl_methods(names[a.identifier])) for a in actions]

    content = file_header("allow(dead_code)")
    content += "use godot::classes::Input;\n"
    content += "\n"
    content += f"use super::{action_consts.MODULE};\n"
    content += "\n"
    content += f"pub trait {TRAIT} {{\n"
    content += "\n\n".join(trait_blocks)
    content += "\n}\n" if trait_blocks else "}\n"
    content += "\n"
    content += f"impl {TRAIT} for Input {{\n"
    content += "\n\n".join(impl_blocks)
    content += "\n}\n" if impl_blocks else "}\n"

    return GeneratedFile(
        path=f"{MODULE}.rs",
        content=content,
        feature="action_invocations",
        reason=f"Input query wrappers for {len(actions)} input actions",
    )
