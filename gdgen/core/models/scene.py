"""
Scene model — a ``.tscn`` file found under the resource root.
"""

from __future__ import annotations

from pydantic import BaseModel


class SceneEntry(BaseModel):
    """A scene and its ``res://`` path.

    ``name`` is the file stem, prefixed with parent folder names when
    two scenes share a stem (``multiplayer/Main.tscn`` → ``multiplayerMain``).
    """

    name: str
    resource_path: str

    @property
    def depth(self) -> int:
        return self.resource_path.count("/")
