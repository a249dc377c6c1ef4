"""
Layer models — named collision/render layers grouped per engine group.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class LayerEntry(BaseModel):
    """A single named layer, e.g. ``2d_physics/layer_1="collisions"``."""

    group: str                      # raw group, e.g. "2d_physics"
    index: int = Field(ge=1)        # 1-based layer number
    name: str                       # user-given layer name
    key: str = ""                   # source key, for error messages

    @property
    def mask(self) -> int:
        """Bit value of this layer in a collision/visibility mask."""
        return 1 << (self.index - 1)


class LayerGroup(BaseModel):
    """All named layers of one group, ordered by index.

    Computed fresh each run from the ``[layer_names]`` section.
    """

    group_name: str                 # raw group, e.g. "2d_physics"
    type_name: str                  # generated type, e.g. "Physics2d"
    entries: list[LayerEntry] = Field(default_factory=list)
