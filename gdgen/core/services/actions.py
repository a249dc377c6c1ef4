"""
Action extractor — input actions from the ``[input]`` section.

Each key of the section is an action identifier. Its value (a Godot
dictionary with ``deadzone`` and ``events``) is split into top-level
fields and kept as raw text; the emitters decide what to do with it.

Actions keep first-seen order, so appending an action in the editor
only appends to the generated files.
"""

from __future__ import annotations

import logging

from gdgen.core.models.action import ActionEntry
from gdgen.core.models.document import ConfigDocument
from gdgen.core.services import input_events

logger = logging.getLogger(__name__)

INPUT_SECTION = "input"


def extract_actions(document: ConfigDocument) -> list[ActionEntry]:
    """Extract input actions in first-seen order.

    A repeated key overwrites the earlier metadata but keeps its position.

    Returns:
        ActionEntry list; empty (with a warning) when there is no
        ``[input]`` section.
    """
    section = document.section(INPUT_SECTION)
    if section is None or len(section) == 0:
        logger.warning(
            "No input actions found in %s, action output will be empty",
            document.path or "project config",
        )
        return []

    actions: list[ActionEntry] = []
    for key, entry in section.last_entries().items():
        actions.append(
            ActionEntry(
                identifier=key,
                raw_metadata=parse_metadata(entry.value),
                line=entry.line,
            )
        )

    logger.info("Extracted %d input actions", len(actions))
    return actions


def parse_metadata(value: str) -> dict[str, str]:
    """Split a ``{ "key": value, ... }`` dictionary into raw fields.

    Values are not interpreted. Anything that is not a dictionary is
    kept whole under ``"raw"``.
    """
    text = value.strip()
    if not (text.startswith("{") and text.endswith("}")):
        return {"raw": value}

    fields: dict[str, str] = {}
    for part in input_events.split_top_level(text[1:-1], ","):
        key, colon, raw = part.partition(":")
        key = key.strip().strip('"')
        if not colon or not key:
            continue
        fields[key] = raw.strip()
    return fields


def action_bindings(action: ActionEntry) -> list[str]:
    """Binding labels for an action (``["SPACE", "joypad_button_0"]``)."""
    events = action.raw_metadata.get("events")
    if not events:
        return []
    return input_events.describe_events(events)
