"""
Rust rendering helpers shared by the generators.
"""

from __future__ import annotations

# First lines of every generated file; no timestamps so output is stable
HEADER = "// Generated by gdgen. Do not edit: changes are overwritten on the next build.\n"


def file_header(*attributes: str) -> str:
    """Header comment followed by inner attributes (``#![allow(dead_code)]``)."""
    lines = [HEADER.rstrip("\n")]
    lines.extend(f"#![{attr}]" for attr in attributes)
    return "\n".join(lines) + "\n"


def string_literal(value: str) -> str:
    """Quote *value* as a Rust string literal."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def doc_code(value: str) -> str:
    """Inline code span for a doc comment."""
    return f"`{value.replace('`', '')}`"
