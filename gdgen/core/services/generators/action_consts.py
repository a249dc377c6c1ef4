"""
Action constants generator — one ``StringName`` accessor per input action.

    /// Maps to: `SPACE`
    pub fn JUMP() -> StringName { StringName::from("jump") }

Call sites use ``actions_consts::JUMP()`` instead of the string ``"jump"``.
The invocations generator builds on the names returned by ``const_names()``.
"""

from __future__ import annotations

from gdgen.core.errors import DuplicateConstantName
from gdgen.core.models.action import ActionEntry
from gdgen.core.models.generated import GeneratedFile
from gdgen.core.services.actions import action_bindings
from gdgen.core.services.generators.rust import doc_code, file_header, string_literal
from gdgen.core.services.naming import constant_name

MODULE = "actions_consts"


def const_names(actions: list[ActionEntry]) -> dict[str, str]:
    """Map each action identifier to its accessor name.

    Raises:
        DuplicateConstantName: Two actions render to the same name
            (``MoveLeft`` and ``move_left``).
    """
    names: dict[str, str] = {}
    owners: dict[str, str] = {}
    for action in actions:
        name = constant_name(action.identifier)
        if name in owners and owners[name] != action.identifier:
            raise DuplicateConstantName(
                name, f"actions '{owners[name]}' and '{action.identifier}'"
            )
        owners[name] = action.identifier
        names[action.identifier] = name
    return names


def bindings_doc(bindings: list[str]) -> str:
    """``Maps to: `A` or `left_click```, or a fallback when unbound."""
    if not bindings:
        return "No input events bound"
    return "Maps to: " + " or ".join(doc_code(b) for b in bindings)


def format_action_const(action: ActionEntry, name: str) -> str:
    doc = bindings_doc(action_bindings(action))
    return (
        f"/// {doc}\n"
        f"pub fn {name}() -> StringName {{ StringName::from({string_literal(action.identifier)}) }}\n"
    )


def generate_action_consts(
    actions: list[ActionEntry],
    names: dict[str, str] | None = None,
) -> GeneratedFile:
    """Render ``actions_consts.rs`` with actions in first-seen order.

    Args:
        actions: Actions from ``extract_actions()``.
        names: Precomputed ``const_names(actions)``.
    """
    if names is None:
        names = const_names(actions)

    content = file_header("allow(dead_code)", "allow(non_snake_case)")
    content += "use godot::builtin::StringName;\n"
    for action in actions:
        content += "\n" + format_action_const(action, names[action.identifier])

    return GeneratedFile(
        path=f"{MODULE}.rs",
        content=content,
        feature="action_consts",
        reason=f"StringName accessors for {len(actions)} input actions",
    )
