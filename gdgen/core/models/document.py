"""
Config document model — the parsed form of a ``project.godot`` file.

The document keeps sections and entries in file order. Keys are not
assumed unique: lookups return the last occurrence, which matches how
Godot itself overwrites repeated keys.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

# Name of the implicit section holding assignments before the first header
GLOBAL_SECTION = ""


class Entry(BaseModel):
    """One ``key=value`` assignment (value unquoted, continuation lines joined)."""

    key: str
    value: str
    line: int = 0


class Section(BaseModel):
    """A ``[name]`` block and its entries, in file order."""

    name: str
    line: int = 0
    entries: list[Entry] = Field(default_factory=list)

    def get(self, key: str) -> str | None:
        """Value of the last entry with this key, or None."""
        for entry in reversed(self.entries):
            if entry.key == key:
                return entry.value
        return None

    def last_entries(self) -> dict[str, Entry]:
        """Entries keyed by name: first-seen order, last value wins."""
        result: dict[str, Entry] = {}
        for entry in self.entries:
            result[entry.key] = entry
        return result

    def __len__(self) -> int:
        return len(self.entries)


class ConfigDocument(BaseModel):
    """Ordered sections of a project config file."""

    path: Path | None = None
    sections: list[Section] = Field(default_factory=list)

    def section(self, name: str) -> Section | None:
        """Look up a section by name.

        A header that appears more than once is merged in document order,
        so the usual last-wins lookup still applies across the copies.
        """
        matches = [s for s in self.sections if s.name == name]
        if not matches:
            return None
        if len(matches) == 1:
            return matches[0]
        merged = Section(name=name, line=matches[0].line)
        for s in matches:
            merged.entries.extend(s.entries)
        return merged

    def has_section(self, name: str) -> bool:
        return any(s.name == name for s in self.sections)

    def section_names(self) -> list[str]:
        names: list[str] = []
        for s in self.sections:
            if s.name not in names:
                names.append(s.name)
        return names
