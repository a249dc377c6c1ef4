"""
Input action models — actions from the ``[input]`` section and the
input events bound to them.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ActionEntry(BaseModel):
    """A named input action, e.g. ``jump``.

    ``raw_metadata`` holds the top-level fields of the action's value
    (``deadzone``, ``events``) as raw text. It is forwarded to the
    emitters without interpretation.
    """

    identifier: str = Field(min_length=1)
    raw_metadata: dict[str, str] = Field(default_factory=dict)
    line: int = 0


class InputBinding(BaseModel):
    """One ``Object(InputEvent..., ...)`` record from an action's events.

    Property values are kept as the raw literals Godot wrote
    (``true``, ``-1``, ``Vector2(0, 0)``, ``""``).
    """

    event_type: str
    properties: dict[str, str] = Field(default_factory=dict)

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.properties.get(key)
        if value is None:
            return default
        # Godot 3 wrote modifiers as 0/1
        return value.strip().lower() in ("true", "1")

    def get_int(self, key: str) -> int | None:
        value = self.properties.get(key)
        if value is None:
            return None
        try:
            return int(value.strip())
        except ValueError:
            return None
