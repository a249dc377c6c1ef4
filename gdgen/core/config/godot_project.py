"""
Project file reader — parses ``project.godot`` into a ConfigDocument.

Godot's project file is an INI-like text format:

    ; Engine configuration file.
    config_version=5

    [layer_names]
    2d_physics/layer_1="collisions"

    [input]
    jump={
    "deadzone": 0.5,
    "events": [Object(InputEventKey,...)]
    }

Every non-blank line must be a comment, a ``[section]`` header or a
``key=value`` assignment. Values that open a bracket (or a string) keep
reading following lines until balanced. Assignments before the first
header go into the global section; any other line there is an error.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from gdgen.core.errors import ConfigNotFound, ConfigParseError
from gdgen.core.models.document import GLOBAL_SECTION, ConfigDocument, Entry, Section

logger = logging.getLogger(__name__)

# Default config filename
PROJECT_FILE = "project.godot"

_HEADER = re.compile(r"^\[([^\[\]]+)\]$")
_COMMENT_PREFIXES = (";", "#")
_OPENERS = "([{"
_CLOSERS = ")]}"


def read_project_file(path: Path) -> ConfigDocument:
    """Read and parse a project file.

    Args:
        path: Path to ``project.godot``.

    Returns:
        Parsed ConfigDocument.

    Raises:
        ConfigNotFound: If the file does not exist or cannot be read.
        ConfigParseError: If a line is malformed.
    """
    if not path.is_file():
        raise ConfigNotFound(path)

    logger.debug("Reading project file %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigParseError(path, 0, f"not valid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise ConfigNotFound(path) from e

    document = parse_project_text(raw, source=path)
    logger.info(
        "Parsed %s: %d sections",
        path,
        len(document.sections),
    )
    return document


def parse_project_text(text: str, source: Path | None = None) -> ConfigDocument:
    """Parse project file text.

    Args:
        text: File content.
        source: Originating path, used in error messages.

    Raises:
        ConfigParseError: With the 1-based line number of the bad line.
    """
    document = ConfigDocument(path=source)
    current: Section | None = None
    global_section: Section | None = None

    lines = text.splitlines()
    i = 0
    while i < len(lines):
        lineno = i + 1
        line = lines[i].strip()
        i += 1

        if not line or line.startswith(_COMMENT_PREFIXES):
            continue

        header = _HEADER.match(line)
        if header:
            current = Section(name=header.group(1).strip(), line=lineno)
            document.sections.append(current)
            continue

        key, sep, value = line.partition("=")
        if not sep:
            where = "before any [section] header" if current is None else "in section"
            raise ConfigParseError(
                source,
                lineno,
                f"expected '[section]' or 'key=value' {where}, got '{_clip(line)}'",
            )

        key = key.strip()
        if not key:
            raise ConfigParseError(source, lineno, "assignment with an empty key")

        value = value.strip()
        while _is_open(value):
            if i >= len(lines):
                raise ConfigParseError(source, lineno, f"unterminated value for '{key}'")
            value += "\n" + lines[i].strip()
            i += 1

        entry = Entry(key=key, value=unquote(value), line=lineno)

        if current is None:
            if global_section is None:
                global_section = Section(name=GLOBAL_SECTION, line=lineno)
                document.sections.append(global_section)
            global_section.entries.append(entry)
        else:
            current.entries.append(entry)

    return document


def unquote(value: str) -> str:
    """Strip surrounding quotes from a single string literal.

    ``"collisions"`` → ``collisions``; ``\\"`` and ``\\\\`` are unescaped.
    Anything that is not exactly one string literal is returned as-is.
    """
    if len(value) < 2 or value[0] != '"' or value[-1] != '"':
        return value

    out: list[str] = []
    escaped = False
    for pos in range(1, len(value)):
        ch = value[pos]
        if escaped:
            out.append(ch if ch in '"\\' else "\\" + ch)
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == '"':
            # closing quote must be the last character
            return "".join(out) if pos == len(value) - 1 else value
        else:
            out.append(ch)
    return value


def _is_open(value: str) -> bool:
    """True if *value* ends inside a string or an unclosed bracket."""
    depth = 0
    in_string = False
    escaped = False
    for ch in value:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
    return in_string or depth > 0


def _clip(line: str, width: int = 60) -> str:
    return line if len(line) <= width else line[: width - 3] + "..."
