"""
Manifest model — a ``.gdextension`` file as read before patching.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class ManifestDocument(BaseModel):
    """The manifest's lines plus the icon declarations already present.

    ``existing_lines`` keep their original line endings so an unpatched
    region is written back byte-for-byte.

    Attributes:
        path:              Manifest location.
        existing_lines:    Verbatim lines, endings included.
        icon_declarations: class name → icon path from the ``[icons]`` section.
        icons_start:       Index of the ``[icons]`` header line, if any.
        icons_end:         Index one past the last non-blank line of that section.
        newline:           Line ending used when appending lines.
    """

    path: Path
    existing_lines: list[str] = Field(default_factory=list)
    icon_declarations: dict[str, str] = Field(default_factory=dict)
    icons_start: int | None = None
    icons_end: int | None = None
    newline: str = "\n"

    @property
    def has_icons_section(self) -> bool:
        return self.icons_start is not None

    def text(self) -> str:
        return "".join(self.existing_lines)
